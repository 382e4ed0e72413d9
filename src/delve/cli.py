from __future__ import annotations

import argparse
import json
import sys
from dataclasses import replace
from typing import Any, Dict, List, Optional

from . import __version__
from .config import GenerationSettings, parse_range, parse_seed
from .dungeon.factory import DungeonFactory
from .dungeon.map import Map
from .exceptions import InvalidConfiguration
from .utils.logging import configure_logging


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="delve", description="Generate a dungeon map and print it")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("-c", "--config", help="YAML settings file", default=None)
    p.add_argument("-a", "--algorithm", help="simple or nystrom", default=None)
    p.add_argument("-s", "--seed", help="Integer or string seed", default=None)
    p.add_argument("--width", type=int, default=None, help="Map width in cells")
    p.add_argument("--height", type=int, default=None, help="Map height in cells")
    p.add_argument("--room-width", default=None, help="Half-open room width range, e.g. 4..8")
    p.add_argument("--room-height", default=None, help="Half-open room height range, e.g. 4..8")
    p.add_argument("--format", choices=("ascii", "json"), default="ascii")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p


def settings_from_args(args: argparse.Namespace) -> GenerationSettings:
    """Layer command-line flags over file and environment settings."""
    settings = GenerationSettings.from_sources(args.config)
    option_overrides: Dict[str, Any] = {}
    if args.width is not None:
        option_overrides["map_width"] = args.width
    if args.height is not None:
        option_overrides["map_height"] = args.height
    try:
        if args.room_width is not None:
            option_overrides["room_width"] = parse_range(args.room_width)
        if args.room_height is not None:
            option_overrides["room_height"] = parse_range(args.room_height)
    except ValueError as exc:
        raise InvalidConfiguration(str(exc)) from exc

    overrides: Dict[str, Any] = {}
    if option_overrides:
        overrides["options"] = replace(settings.options, **option_overrides)
    if args.algorithm is not None:
        overrides["algorithm"] = args.algorithm
    if args.seed is not None:
        overrides["seed"] = parse_seed(args.seed)
    return replace(settings, **overrides)


def map_summary(dmap: Map, settings: GenerationSettings) -> Dict[str, Any]:
    """JSON-serializable description of a generated map."""
    return {
        "algorithm": settings.algorithm,
        "seed": settings.seed,
        "width": dmap.width,
        "height": dmap.height,
        "rooms": [[r.x, r.y, r.width, r.height] for r in dmap.rooms],
        "doors": [list(d) for d in dmap.doors],
        "grid": dmap.to_str_lines(),
        "signature": dmap.signature(),
    }


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(debug=args.debug)

    try:
        settings = settings_from_args(args)
        dmap = DungeonFactory.generate(settings)
    except (InvalidConfiguration, FileNotFoundError) as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if args.format == "json":
        # Sorted keys so output can be diffed across runs
        print(json.dumps(map_summary(dmap, settings), indent=2, sort_keys=True))
    else:
        print("\n".join(dmap.to_str_lines()))
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml
from platformdirs import user_config_dir

from .exceptions import InvalidConfiguration

logger = logging.getLogger(__name__)

APP_NAME = "delve"
CONFIG_FILENAME = "mapgen.yaml"
ENV_PREFIX = "DELVE_"


@dataclass(frozen=True)
class MapGenOptions:
    """Geometry of a generation run.

    Room ranges are half-open: ``range(4, 8)`` yields widths 4..7. Defaults
    match the original game's map (100x80 cells, rooms 4..8, buffers of 2).
    """

    map_width: int = 100
    map_height: int = 80
    room_width: range = range(4, 8)
    room_height: range = range(4, 8)
    outside_buffer: int = 2
    room_buffer: int = 2

    def validate(self) -> "MapGenOptions":
        """Raise InvalidConfiguration if the options cannot be sampled safely."""
        for name in ("map_width", "map_height", "outside_buffer", "room_buffer"):
            value = getattr(self, name)
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise InvalidConfiguration(f"{name} must be a non-negative integer, got {value!r}")
        for name in ("room_width", "room_height"):
            r = getattr(self, name)
            if not isinstance(r, range) or r.step != 1:
                raise InvalidConfiguration(f"{name} must be a contiguous range, got {r!r}")
            if r.start < 0 or r.stop <= r.start:
                raise InvalidConfiguration(f"{name} must be a non-empty, non-negative range, got {r!r}")
        if self.map_width <= 2 * self.outside_buffer + self.room_width.stop:
            raise InvalidConfiguration(
                f"map_width={self.map_width} leaves no room origins: needs more than "
                f"2*outside_buffer + room_width.stop = {2 * self.outside_buffer + self.room_width.stop}"
            )
        if self.map_height <= 2 * self.outside_buffer + self.room_height.stop:
            raise InvalidConfiguration(
                f"map_height={self.map_height} leaves no room origins: needs more than "
                f"2*outside_buffer + room_height.stop = {2 * self.outside_buffer + self.room_height.stop}"
            )
        return self

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "MapGenOptions":
        """Build options from a plain mapping (YAML/JSON). Missing keys use defaults."""
        defaults = cls()
        try:
            return cls(
                map_width=int(raw.get("map_width", defaults.map_width)),
                map_height=int(raw.get("map_height", defaults.map_height)),
                room_width=parse_range(raw.get("room_width", defaults.room_width)),
                room_height=parse_range(raw.get("room_height", defaults.room_height)),
                outside_buffer=int(raw.get("outside_buffer", defaults.outside_buffer)),
                room_buffer=int(raw.get("room_buffer", defaults.room_buffer)),
            )
        except (TypeError, ValueError) as exc:
            raise InvalidConfiguration(f"Invalid map options: {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {
            "map_width": self.map_width,
            "map_height": self.map_height,
            "room_width": [self.room_width.start, self.room_width.stop],
            "room_height": [self.room_height.start, self.room_height.stop],
            "outside_buffer": self.outside_buffer,
            "room_buffer": self.room_buffer,
        }


def parse_range(value: Any) -> range:
    """Accept ``range``, ``[lo, hi]`` or ``"lo..hi"`` and return ``range(lo, hi)``."""
    if isinstance(value, range):
        return value
    if isinstance(value, str):
        sep = ".." if ".." in value else ","
        parts = [p.strip() for p in value.split(sep)]
    else:
        parts = list(value)
    if len(parts) != 2:
        raise ValueError(f"expected two bounds, got {value!r}")
    return range(int(parts[0]), int(parts[1]))


def parse_seed(value: Any) -> Union[int, str, None]:
    """Integer-looking seeds become ints, anything else stays a string seed."""
    if value is None or isinstance(value, int):
        return value
    s = str(value).strip()
    if not s:
        return None
    try:
        return int(s)
    except ValueError:
        return s


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


@dataclass(frozen=True)
class GenerationSettings:
    """Everything needed to reproduce a map: algorithm, seed and options.

    Per-algorithm tuning mirrors the generator variants; the factory turns
    ``algorithm`` plus these knobs into a variant value.
    """

    algorithm: str = "simple"
    seed: Union[int, str, None] = None
    options: MapGenOptions = field(default_factory=MapGenOptions)
    simple_attempts: int = 101
    nystrom_max_failures: int = 200
    nystrom_turn_chance: float = 0.25
    nystrom_punch_doors: bool = False

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "GenerationSettings":
        defaults = cls()
        simple = raw.get("simple") or {}
        nystrom = raw.get("nystrom") or {}
        try:
            return cls(
                algorithm=str(raw.get("algorithm", defaults.algorithm)),
                seed=parse_seed(raw.get("seed", defaults.seed)),
                options=MapGenOptions.from_dict(raw.get("map") or {}),
                simple_attempts=int(simple.get("attempts", defaults.simple_attempts)),
                nystrom_max_failures=int(
                    nystrom.get("max_consecutive_failures", defaults.nystrom_max_failures)
                ),
                nystrom_turn_chance=float(nystrom.get("turn_chance", defaults.nystrom_turn_chance)),
                nystrom_punch_doors=bool(nystrom.get("punch_doors", defaults.nystrom_punch_doors)),
            )
        except InvalidConfiguration:
            raise
        except (TypeError, ValueError, AttributeError) as exc:
            raise InvalidConfiguration(f"Invalid generation settings: {exc}") from exc

    @classmethod
    def from_yaml(cls, path: Union[str, Path]) -> "GenerationSettings":
        """Load settings from a YAML file. Missing fields fall back to defaults."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("r", encoding="utf-8") as f:
            try:
                raw = yaml.safe_load(f) or {}
            except yaml.YAMLError as exc:
                raise InvalidConfiguration(f"Invalid YAML in {path}: {exc}") from exc
        if not isinstance(raw, dict):
            raise InvalidConfiguration(f"Config file {path} must contain a mapping at top level")
        logger.debug("Loaded generation settings from %s", path)
        return cls.from_dict(raw)

    @classmethod
    def from_env(cls) -> "GenerationSettings":
        return cls().with_env_overrides()

    def with_env_overrides(self, environ: Optional[Mapping[str, str]] = None) -> "GenerationSettings":
        """Return a copy with any ``DELVE_*`` environment variables applied."""
        env = os.environ if environ is None else environ

        def get(name: str) -> Optional[str]:
            return env.get(ENV_PREFIX + name)

        opts = self.options
        option_overrides: Dict[str, Any] = {}
        overrides: Dict[str, Any] = {}
        try:
            for env_name, attr in (
                ("WIDTH", "map_width"),
                ("HEIGHT", "map_height"),
                ("OUTSIDE_BUFFER", "outside_buffer"),
                ("ROOM_BUFFER", "room_buffer"),
            ):
                value = get(env_name)
                if value is not None:
                    option_overrides[attr] = int(value)
            for env_name, attr in (("ROOM_WIDTH", "room_width"), ("ROOM_HEIGHT", "room_height")):
                value = get(env_name)
                if value is not None:
                    option_overrides[attr] = parse_range(value)
            if get("ALGO") is not None:
                overrides["algorithm"] = get("ALGO")
            if get("SEED") is not None:
                overrides["seed"] = parse_seed(get("SEED"))
            if get("ATTEMPTS") is not None:
                overrides["simple_attempts"] = int(get("ATTEMPTS"))
            if get("MAX_FAILURES") is not None:
                overrides["nystrom_max_failures"] = int(get("MAX_FAILURES"))
            if get("TURN_CHANCE") is not None:
                overrides["nystrom_turn_chance"] = float(get("TURN_CHANCE"))
            if get("PUNCH_DOORS") is not None:
                overrides["nystrom_punch_doors"] = _parse_bool(get("PUNCH_DOORS"))
        except ValueError as exc:
            raise InvalidConfiguration(f"Invalid {ENV_PREFIX}* environment value: {exc}") from exc

        if option_overrides:
            overrides["options"] = replace(opts, **option_overrides)
        if overrides:
            logger.debug("Applying environment overrides: %s", sorted(overrides))
        return replace(self, **overrides)

    @classmethod
    def from_sources(cls, path: Union[str, Path, None] = None) -> "GenerationSettings":
        """Defaults, then a YAML file, then environment variables.

        Without an explicit ``path`` the per-user config file is read when it
        exists.
        """
        if path is not None:
            settings = cls.from_yaml(path)
        else:
            default_path = default_config_path()
            if default_path.exists():
                settings = cls.from_yaml(default_path)
            else:
                settings = cls()
        return settings.with_env_overrides()


def default_config_path() -> Path:
    return Path(user_config_dir(APP_NAME)) / CONFIG_FILENAME

from __future__ import annotations

import logging
from typing import Optional

from ..config import GenerationSettings, MapGenOptions
from ..core.random import RandomSource, Seed
from .generator import MapVariant, Nystrom, Simple, generate_nystrom, generate_simple
from .map import Map

logger = logging.getLogger(__name__)


def generate_map(
    options: Optional[MapGenOptions] = None,
    variant: Optional[MapVariant] = None,
    seed: Seed = None,
    rng: Optional[RandomSource] = None,
) -> Map:
    """Generate a map with the chosen variant (Simple by default).

    Options are validated first; InvalidConfiguration is raised for
    geometry that cannot be sampled. Pass ``seed`` (or a prepared ``rng``)
    for reproducible output.
    """
    options = (options or MapGenOptions()).validate()
    variant = variant if variant is not None else Simple()
    rng = RandomSource.coerce(rng, seed)

    if isinstance(variant, Simple):
        return generate_simple(options, variant, rng)
    if isinstance(variant, Nystrom):
        return generate_nystrom(options, variant, rng)
    raise TypeError(f"Unknown map variant: {variant!r}")


class DungeonFactory:
    """Factory to produce maps using the algorithm named in settings.

    Usage:
      settings = GenerationSettings.from_sources()
      dmap = DungeonFactory.generate(settings)
    """

    @staticmethod
    def build_variant(settings: GenerationSettings) -> MapVariant:
        algo = (settings.algorithm or "simple").lower()
        if algo in ("simple", "rooms", "corridors"):
            logger.info("DungeonFactory: using Simple (algorithm=%s)", algo)
            return Simple(attempts=settings.simple_attempts)
        elif algo in ("nystrom", "maze"):
            logger.info("DungeonFactory: using Nystrom (algorithm=%s)", algo)
            return Nystrom(
                max_consecutive_failures=settings.nystrom_max_failures,
                turn_chance=settings.nystrom_turn_chance,
                punch_doors=settings.nystrom_punch_doors,
            )
        else:
            logger.warning("Unknown algorithm '%s', falling back to Simple", algo)
            return Simple(attempts=settings.simple_attempts)

    @staticmethod
    def generate(settings: GenerationSettings, seed: Seed = None) -> Map:
        variant = DungeonFactory.build_variant(settings)
        return generate_map(settings.options, variant, seed if seed is not None else settings.seed)

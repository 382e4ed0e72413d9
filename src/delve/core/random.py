from __future__ import annotations

import hashlib
import logging
import random
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional, Union

logger = logging.getLogger(__name__)

Seed = Union[int, str, None]


def derive_seed(source: str) -> int:
    """Derive a 64-bit integer seed from an arbitrary string using SHA256."""
    digest = hashlib.sha256(source.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=False)


@dataclass
class RandomSource:
    """
    A thin wrapper around random.Random to:
    - centralize RNG handling for map generation
    - support deterministic seeding from an int or any string
    - provide helpers for half-open range sampling and weighted choice

    One instance is threaded explicitly through a generation call; nothing in
    the package touches the global ``random`` state.
    """

    seed: Seed = None

    def __post_init__(self) -> None:
        if self.seed is None:
            self._rng = random.Random()
            logger.debug("Initialized RandomSource with non-deterministic seed")
            return
        effective = self.seed if isinstance(self.seed, int) else derive_seed(str(self.seed))
        self._rng = random.Random(effective)
        logger.debug("Initialized RandomSource with deterministic seed=%r", self.seed)

    @classmethod
    def coerce(cls, rng: Optional["RandomSource"] = None, seed: Seed = None) -> "RandomSource":
        """Return ``rng`` if given, otherwise a new source built from ``seed``."""
        if rng is not None:
            return rng
        return cls(seed)

    def randrange(self, start: int, stop: int) -> int:
        if stop <= start:
            raise ValueError(f"empty range for randrange({start}, {stop})")
        return self._rng.randrange(start, stop)

    def sample_range(self, r: range) -> int:
        """Uniformly sample an integer from a half-open ``range``."""
        return self.randrange(r.start, r.stop)

    def chance(self, probability: float) -> bool:
        return self._rng.random() < probability

    def choice(self, seq: Iterable[Any]) -> Any:
        seq_list = list(seq)
        if not seq_list:
            raise ValueError("RandomSource.choice() received an empty sequence")
        idx = self._rng.randrange(0, len(seq_list))
        return seq_list[idx]

    def weighted_choice(self, weights: Dict[Any, float]) -> Any:
        """Pick a key with probability proportional to its weight.

        Zero-weight keys are never picked. Raises ValueError for an empty
        mapping, a negative weight, or weights that sum to zero.
        """
        if not weights:
            raise ValueError("weighted_choice requires a non-empty weights mapping")
        if any(w < 0 for w in weights.values()):
            raise ValueError(f"weights must be non-negative: {weights!r}")
        total = sum(weights.values())
        if total <= 0:
            raise ValueError("All weights are zero; cannot make a weighted choice")

        r = self._rng.random() * total
        last = None
        for key, w in weights.items():
            if w == 0:
                continue
            last = key
            r -= w
            if r < 0:
                return key
        return last


__all__ = ["RandomSource", "derive_seed", "Seed"]

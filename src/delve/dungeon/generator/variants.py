from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from ...exceptions import InvalidConfiguration


@dataclass(frozen=True)
class Simple:
    """Rooms with one door each, doors linked in placement order by A*.

    ``attempts`` is a fixed sampling budget: exactly that many candidate rooms
    are drawn whether or not they fit.
    """

    attempts: int = 101

    def __post_init__(self) -> None:
        if self.attempts < 0:
            raise InvalidConfiguration(f"attempts must be non-negative, got {self.attempts}")


@dataclass(frozen=True)
class Nystrom:
    """Rooms first, then every remaining empty cell carved by a biased maze walk.

    Room sampling stops after ``max_consecutive_failures`` rejections in a row.
    ``turn_chance`` is the probability of turning while the walk could go
    straight. ``punch_doors`` adds one door per room where a wall midpoint
    touches a carved corridor.
    """

    max_consecutive_failures: int = 200
    turn_chance: float = 0.25
    punch_doors: bool = False

    def __post_init__(self) -> None:
        if self.max_consecutive_failures < 0:
            raise InvalidConfiguration(
                f"max_consecutive_failures must be non-negative, got {self.max_consecutive_failures}"
            )
        if not 0.0 <= self.turn_chance <= 1.0:
            raise InvalidConfiguration(f"turn_chance must be within [0, 1], got {self.turn_chance}")


MapVariant = Union[Simple, Nystrom]

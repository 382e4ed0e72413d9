from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from ..core.random import RandomSource

Point = Tuple[int, int]


def clamp(value: int, low: int, high: int) -> int:
    if value > high:
        return high
    if value < low:
        return low
    return value


@dataclass(frozen=True, order=True)
class Coords:
    """Integer grid position. Ordering compares ``x`` first, then ``y``."""

    x: int
    y: int

    @classmethod
    def of(cls, point: Point) -> "Coords":
        return cls(point[0], point[1])

    def as_tuple(self) -> Point:
        return (self.x, self.y)

    def distance(self, other: "Coords") -> int:
        """Manhattan distance to ``other``."""
        return abs(self.x - other.x) + abs(self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned integer rectangle with inclusive bounds.

    ``right`` is ``x + width`` and ``bottom`` is ``y + height``, so a rect of
    width W covers W + 1 columns.
    """

    x: int
    y: int
    width: int
    height: int

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise ValueError(f"Rect dimensions must be non-negative, got {self.width}x{self.height}")

    def left(self) -> int:
        return self.x

    def right(self) -> int:
        return self.x + self.width

    def top(self) -> int:
        return self.y

    def bottom(self) -> int:
        return self.y + self.height

    def center(self) -> Point:
        return (self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, point: Point) -> bool:
        x, y = point
        return self.left() <= x <= self.right() and self.top() <= y <= self.bottom()

    def intersects(self, other: "Rect") -> bool:
        # Touching edges count as an intersection.
        return not (
            self.left() > other.right()
            or self.right() < other.left()
            or self.top() > other.bottom()
            or self.bottom() < other.top()
        )

    def buffer(self, amount: int) -> "Rect":
        """Grow the rect by ``amount``.

        The origin moves up/left but never below 0, and the size grows by
        ``amount``. Near the grid edge the clamp eats part of the margin, so
        rooms there get a smaller effective buffer.
        """
        return Rect(
            clamp(self.x - amount, 0, self.x),
            clamp(self.y - amount, 0, self.y),
            self.width + amount,
            self.height + amount,
        )

    def intersects_with_buffer(self, other: "Rect", amount: int) -> bool:
        return self.buffer(amount).intersects(other.buffer(amount))

    @classmethod
    def random_rect(
        cls,
        rng: "RandomSource",
        x_range: range,
        y_range: range,
        width_range: range,
        height_range: range,
    ) -> "Rect":
        """Sample each field independently from half-open ranges."""
        return cls(
            x=rng.sample_range(x_range),
            y=rng.sample_range(y_range),
            width=rng.sample_range(width_range),
            height=rng.sample_range(height_range),
        )

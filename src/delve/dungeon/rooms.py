from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple, Union

from ..core.random import RandomSource
from .geometry import Rect
from .map import Map
from .tiles import GRASS_TINT, ROOM_FLOOR_WEIGHTS, TileType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FixedAttempts:
    """Sample exactly ``attempts`` rooms; the final room count varies."""

    attempts: int

    def exhausted(self, attempts: int, consecutive_failures: int) -> bool:
        return attempts >= self.attempts


@dataclass(frozen=True)
class ConsecutiveFailures:
    """Keep sampling until ``max_failures`` rejections happen in a row."""

    max_failures: int

    def exhausted(self, attempts: int, consecutive_failures: int) -> bool:
        return consecutive_failures >= self.max_failures


PlacementBudget = Union[FixedAttempts, ConsecutiveFailures]


def placement_ranges(
    map_size: Tuple[int, int],
    width_range: range,
    height_range: range,
    outside_buffer: int,
) -> Tuple[range, range]:
    """Origin ranges keeping even the largest room ``outside_buffer`` cells from the edge."""
    map_width, map_height = map_size
    x_range = range(outside_buffer, map_width - outside_buffer - width_range.stop)
    y_range = range(outside_buffer, map_height - outside_buffer - height_range.stop)
    return x_range, y_range


def place_rooms(
    map_size: Tuple[int, int],
    width_range: range,
    height_range: range,
    outside_buffer: int,
    room_buffer: int,
    budget: PlacementBudget,
    rng: RandomSource,
    on_accept: Optional[Callable[[Rect], None]] = None,
) -> List[Rect]:
    """Fill the area with non-overlapping rooms by rejection sampling.

    A sampled rect is accepted when it does not intersect any accepted room
    once both are padded by ``room_buffer``. ``on_accept`` is called for each
    accepted room, in order, before the next sample is drawn.
    """
    x_range, y_range = placement_ranges(map_size, width_range, height_range, outside_buffer)
    if len(x_range) == 0 or len(y_range) == 0:
        raise ValueError(
            f"No room origins fit in a {map_size[0]}x{map_size[1]} map "
            f"with outside_buffer={outside_buffer}"
        )

    rooms: List[Rect] = []
    attempts = 0
    failures = 0
    while not budget.exhausted(attempts, failures):
        attempts += 1
        room = Rect.random_rect(rng, x_range, y_range, width_range, height_range)
        if any(r.intersects_with_buffer(room, room_buffer) for r in rooms):
            failures += 1
            continue
        failures = 0
        rooms.append(room)
        if on_accept is not None:
            on_accept(room)

    logger.debug("place_rooms: accepted %d rooms in %d attempts", len(rooms), attempts)
    return rooms


def rasterize_room(dmap: Map, room: Rect, rng: RandomSource) -> None:
    """Draw walls on the room border and weighted-random floor inside."""
    for x in range(room.left(), room.right() + 1):
        for y in range(room.top(), room.bottom() + 1):
            if x in (room.left(), room.right()) or y in (room.top(), room.bottom()):
                dmap.set_tile(x, y, TileType.WALL)
                continue
            floor = rng.weighted_choice(ROOM_FLOOR_WEIGHTS)
            dmap.set_tile(x, y, floor, GRASS_TINT if floor is TileType.GRASS else None)
    dmap.rooms.append(room)


def door_candidates(room: Rect) -> List[Tuple[Tuple[int, int], Tuple[int, int]]]:
    """Wall midpoints of ``room`` paired with the cell just outside each one.

    Order: top, bottom, left, right.
    """
    cx, cy = room.center()
    return [
        ((cx, room.top()), (cx, room.top() - 1)),
        ((cx, room.bottom()), (cx, room.bottom() + 1)),
        ((room.left(), cy), (room.left() - 1, cy)),
        ((room.right(), cy), (room.right() + 1, cy)),
    ]

from __future__ import annotations

import logging
from enum import Enum
from typing import List, Optional, Tuple

from ...config import MapGenOptions
from ...core.random import RandomSource
from ..map import Map
from ..rooms import ConsecutiveFailures, door_candidates, place_rooms, rasterize_room
from ..tiles import PATHWAY_COLOR, TileType
from .variants import Nystrom

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


class Direction(Enum):
    NORTH = (0, -1)
    EAST = (1, 0)
    SOUTH = (0, 1)
    WEST = (-1, 0)

    def turned(self) -> "Direction":
        """Next direction clockwise: N -> E -> S -> W -> N."""
        return _CLOCKWISE[self]

    def step(self, point: Point) -> Point:
        dx, dy = self.value
        return (point[0] + dx, point[1] + dy)


_CLOCKWISE = {
    Direction.NORTH: Direction.EAST,
    Direction.EAST: Direction.SOUTH,
    Direction.SOUTH: Direction.WEST,
    Direction.WEST: Direction.NORTH,
}


def generate_nystrom(options: MapGenOptions, variant: Nystrom, rng: RandomSource) -> Map:
    """Rooms, then a maze carved through every empty cell that is left.

    Phases: place rooms, carve maze, optionally punch doors.
    """
    dmap = Map(options.map_width, options.map_height)

    logger.debug("Nystrom: placing rooms (stop after %d failures)", variant.max_consecutive_failures)
    place_rooms(
        (options.map_width, options.map_height),
        options.room_width,
        options.room_height,
        options.outside_buffer,
        options.room_buffer,
        ConsecutiveFailures(variant.max_consecutive_failures),
        rng,
        on_accept=lambda room: rasterize_room(dmap, room, rng),
    )

    logger.debug("Nystrom: carving maze around %d rooms", len(dmap.rooms))
    regions = carve_maze(dmap, rng, variant.turn_chance)
    logger.debug("Nystrom: carved %d maze regions", regions)

    if variant.punch_doors:
        punch_maze_doors(dmap, rng)
    return dmap


def carve_maze(dmap: Map, rng: RandomSource, turn_chance: float = 0.25) -> int:
    """Carve every EMPTY cell into PATHWAY. Returns how many walks were started.

    Seeds are found scanning columns left to right, each column top to
    bottom. A cell that is not EMPTY never becomes EMPTY again, so the scan
    picks up where the previous seed was found instead of restarting.
    """
    regions = 0
    for x in range(dmap.width):
        for y in range(dmap.height):
            tile = dmap.tile_at(x, y)
            if tile is not None and tile.tile_type.is_empty():
                regions += 1
                _walk(dmap, (x, y), rng, turn_chance)
    return regions


def _walk(dmap: Map, origin: Point, rng: RandomSource, turn_chance: float) -> None:
    stack: List[Point] = [origin]
    direction: Optional[Direction] = None
    while stack:
        current = stack[-1]
        if _is_empty(dmap, current):
            dmap.set_tile(current[0], current[1], TileType.PATHWAY, PATHWAY_COLOR)

        options = [d for d in Direction if _is_empty(dmap, d.step(current))]
        if not options:
            stack.pop()
            continue

        if direction in options:
            if rng.chance(turn_chance):
                turned = direction.turned()
                # A blocked turn keeps the walk going straight
                if turned in options:
                    direction = turned
        else:
            direction = rng.choice(options)
        stack.append(direction.step(current))


def _is_empty(dmap: Map, point: Point) -> bool:
    tile = dmap.tile_at(point[0], point[1])
    return tile is not None and tile.tile_type.is_empty()


def punch_maze_doors(dmap: Map, rng: RandomSource) -> None:
    """Give each room one door on a wall midpoint that faces a corridor."""
    for room in dmap.rooms:
        candidates = []
        for door, outside in door_candidates(room):
            tile = dmap.tile_at(outside[0], outside[1])
            if tile is not None and tile.tile_type.is_path_tile():
                candidates.append(door)
        if not candidates:
            logger.debug("Room %s has no wall midpoint facing a corridor", room)
            continue
        door = rng.choice(candidates)
        dmap.set_tile(door[0], door[1], TileType.DOOR)
        dmap.doors.append(door)

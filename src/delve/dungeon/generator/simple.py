from __future__ import annotations

import logging
from typing import List, Tuple

from ...config import MapGenOptions
from ...core.random import RandomSource
from ..geometry import Rect
from ..map import Map
from ..pathfinding import find_path
from ..rooms import FixedAttempts, door_candidates, place_rooms, rasterize_room
from ..tiles import PATHWAY_COLOR, TileType
from .variants import Simple

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


def generate_simple(options: MapGenOptions, variant: Simple, rng: RandomSource) -> Map:
    """Rooms with a door each, then consecutive doors joined by A* corridors.

    Phases: place rooms (punching a door as each is accepted), connect doors.
    """
    dmap = Map(options.map_width, options.map_height)

    def accept(room: Rect) -> None:
        rasterize_room(dmap, room, rng)
        punch_door(dmap, room, rng)

    logger.debug("Simple: placing rooms (%d attempts)", variant.attempts)
    place_rooms(
        (options.map_width, options.map_height),
        options.room_width,
        options.room_height,
        options.outside_buffer,
        options.room_buffer,
        FixedAttempts(variant.attempts),
        rng,
        on_accept=accept,
    )

    logger.debug("Simple: connecting %d doors", len(dmap.doors))
    connected = connect_doors(dmap, dmap.doors)
    logger.debug(
        "Simple: %d rooms, %d/%d door pairs connected",
        len(dmap.rooms),
        connected,
        max(0, len(dmap.doors) - 1),
    )
    return dmap


def punch_door(dmap: Map, room: Rect, rng: RandomSource) -> Point:
    """Turn one randomly chosen wall midpoint of ``room`` into a door."""
    door, _outside = rng.choice(door_candidates(room))
    dmap.set_tile(door[0], door[1], TileType.DOOR)
    dmap.doors.append(door)
    return door


def connect_doors(dmap: Map, doors: List[Point]) -> int:
    """Link door[i] to door[i + 1] with corridors through non-room space.

    Pairs with no route are left unconnected. Returns how many pairs were linked.
    """
    door_set = set(doors)

    def walkable(x: int, y: int) -> bool:
        tile = dmap.tile_at(x, y)
        return tile is not None and not tile.tile_type.is_room_tile()

    connected = 0
    for start, goal in zip(doors, doors[1:]):
        path = find_path(start, goal, walkable, lambda _a, _b: 1)
        if path is None:
            logger.debug("No path between doors %s and %s", start, goal)
            continue
        connected += 1
        for x, y in path:
            if (x, y) not in door_set:
                dmap.set_tile(x, y, TileType.PATHWAY, PATHWAY_COLOR)
    return connected

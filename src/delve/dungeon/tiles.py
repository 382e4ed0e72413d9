from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from .geometry import Coords

RGB = Tuple[int, int, int]

# Cosmetic only; generation logic never reads colours.
GRASS_TINT: RGB = (70, 140, 60)
PATHWAY_COLOR: RGB = (20, 20, 20)


class TileType(Enum):
    EMPTY = 0
    BLANK_ROOM_FLOOR = 1
    GRASS = 2
    HEAVY_SCATTER_ROOM_FLOOR = 3
    LIGHT_SCATTER_ROOM_FLOOR = 4
    PATHWAY = 5
    WALL = 6
    DOOR = 7

    def is_room_tile(self) -> bool:
        return self in _ROOM_TILES

    def is_walkable_tile(self) -> bool:
        return self in _WALKABLE_TILES

    def is_path_tile(self) -> bool:
        return self is TileType.PATHWAY

    def is_empty(self) -> bool:
        return self is TileType.EMPTY

    @property
    def glyph(self) -> str:
        return _GLYPHS[self]


_ROOM_TILES = frozenset(
    {
        TileType.BLANK_ROOM_FLOOR,
        TileType.HEAVY_SCATTER_ROOM_FLOOR,
        TileType.LIGHT_SCATTER_ROOM_FLOOR,
        TileType.GRASS,
        TileType.WALL,
    }
)

_WALKABLE_TILES = frozenset(
    {
        TileType.BLANK_ROOM_FLOOR,
        TileType.HEAVY_SCATTER_ROOM_FLOOR,
        TileType.LIGHT_SCATTER_ROOM_FLOOR,
        TileType.GRASS,
        TileType.PATHWAY,
        TileType.DOOR,
    }
)

_GLYPHS = {
    TileType.EMPTY: " ",
    TileType.BLANK_ROOM_FLOOR: ".",
    TileType.GRASS: '"',
    TileType.HEAVY_SCATTER_ROOM_FLOOR: ":",
    TileType.LIGHT_SCATTER_ROOM_FLOOR: ",",
    TileType.PATHWAY: "#",
    TileType.WALL: "X",
    TileType.DOOR: "+",
}

# Interior floor weights for rasterized rooms (sum 16).
ROOM_FLOOR_WEIGHTS = {
    TileType.GRASS: 2,
    TileType.LIGHT_SCATTER_ROOM_FLOOR: 4,
    TileType.HEAVY_SCATTER_ROOM_FLOOR: 2,
    TileType.BLANK_ROOM_FLOOR: 8,
}


@dataclass
class Tile:
    pos: Coords
    tile_type: TileType = TileType.EMPTY
    color: Optional[RGB] = None

    @classmethod
    def at(cls, x: int, y: int, tile_type: TileType = TileType.EMPTY, color: Optional[RGB] = None) -> "Tile":
        return cls(Coords(x, y), tile_type, color)

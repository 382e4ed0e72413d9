from __future__ import annotations

import hashlib
import logging
from typing import Iterator, List, Optional, Tuple

from .geometry import Coords, Point, Rect
from .tiles import RGB, Tile, TileType

logger = logging.getLogger(__name__)


class Map:
    """
    The generated tile grid. Tiles live in one flat row-major list indexed by
    ``y * width + x``; callers only ever go through ``tile_at``/``set_tile``,
    which do the bounds check and the index arithmetic.

    The map is handed to the caller once generation finishes. It stays mutable
    so gameplay code can edit tiles later (open a door, dig a wall).
    """

    def __init__(self, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise ValueError(f"Map dimensions must be positive, got {width}x{height}")
        self.width = width
        self.height = height
        self._tiles: List[Tile] = [Tile.at(x, y) for y in range(height) for x in range(width)]
        # Generation metadata, in placement order
        self.rooms: List[Rect] = []
        self.doors: List[Point] = []

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> Optional[Tile]:
        if not self.in_bounds(x, y):
            return None
        return self._tiles[y * self.width + x]

    def set_tile(self, x: int, y: int, tile_type: TileType, color: Optional[RGB] = None) -> None:
        if not self.in_bounds(x, y):
            # Generators never write out of bounds; guard and log instead of raising.
            logger.error("Attempt to write out-of-bounds tile at (%d,%d)", x, y)
            return
        self._tiles[y * self.width + x] = Tile(Coords(x, y), tile_type, color)

    # ---- Query -----------------------------------------------------------
    def __iter__(self) -> Iterator[Tile]:
        return iter(self._tiles)

    def __len__(self) -> int:
        return len(self._tiles)

    def rows(self) -> Iterator[List[Tile]]:
        for y in range(self.height):
            start = y * self.width
            yield self._tiles[start:start + self.width]

    def is_walkable(self, x: int, y: int) -> bool:
        tile = self.tile_at(x, y)
        return tile is not None and tile.tile_type.is_walkable_tile()

    def first_walkable(self) -> Optional[Coords]:
        """First walkable tile in row-major order; a convenient spawn point."""
        for tile in self._tiles:
            if tile.tile_type.is_walkable_tile():
                return tile.pos
        return None

    def count(self, tile_type: TileType) -> int:
        return sum(1 for t in self._tiles if t.tile_type is tile_type)

    # ---- Export / Compare -----------------------------------------------
    def to_str_lines(self) -> List[str]:
        return ["".join(t.tile_type.glyph for t in row) for row in self.rows()]

    def snapshot(self) -> Tuple[Tuple[int, ...], ...]:
        """
        Deterministic, hashable snapshot of the tile types for equality tests.
        """
        return tuple(tuple(t.tile_type.value for t in row) for row in self.rows())

    def signature(self) -> str:
        """Deterministic digest of the tile layout."""
        payload = {"w": self.width, "h": self.height, "grid": self.to_str_lines()}
        raw = str(payload).encode("utf-8")
        return hashlib.blake2b(raw, digest_size=16).hexdigest()

from .tiles import Tile, TileType
from .map import Map
from .factory import DungeonFactory, generate_map
from .generator import MapVariant, Nystrom, Simple

__all__ = ["Tile", "TileType", "Map", "DungeonFactory", "generate_map", "MapVariant", "Nystrom", "Simple"]

"""
Content module - static game definitions.

Contains:
- Tile kinds, set-piece event markers and layout id pools
- Chest item tables
"""

from .tiles import (
    MapTile,
    SetPieceFeature,
    MAP_SIZE,
    LAYOUT_BYTES,
    SET_PIECE_SIZES,
    NUM_LEVELS,
    TILE_SYMBOLS,
    is_special_layout,
    is_mushroom_floor,
    is_monster_floor,
)
from .items import CommonChest, RareChest, COMMON_TABLE, RARE_TABLE

__all__ = [
    "MapTile", "SetPieceFeature", "MAP_SIZE", "LAYOUT_BYTES", "SET_PIECE_SIZES",
    "NUM_LEVELS", "TILE_SYMBOLS", "is_special_layout", "is_mushroom_floor", "is_monster_floor",
    "CommonChest", "RareChest", "COMMON_TABLE", "RARE_TABLE",
]

"""
Generation module - one dungeon floor, draw for draw.

Contains:
- Layout decoding and flipping
- Set piece scanning and event resolution
- Chest loot rolls
- Floor simulation (the per-level generator pipeline)
"""

from .tilemap import load_tilemap, render_tilemap, count_tiles
from .loot import (
    DragonTooth,
    CommonChestDrop,
    RareChestDrop,
    Goodie,
    evaluate_chest,
    generate_common,
    generate_rare,
    chest_threshold,
)
from .set_pieces import (
    SetPieceRegion,
    classify_size,
    find_set_pieces,
    paint_set_pieces,
    resolve_set_pieces,
)
from .floor import FloorResult, simulate_floor, floor_generator, sync_floor_decoration

__all__ = [
    # Tilemap
    "load_tilemap", "render_tilemap", "count_tiles",
    # Loot
    "DragonTooth", "CommonChestDrop", "RareChestDrop", "Goodie",
    "evaluate_chest", "generate_common", "generate_rare", "chest_threshold",
    # Set pieces
    "SetPieceRegion", "classify_size", "find_set_pieces", "paint_set_pieces",
    "resolve_set_pieces",
    # Floor
    "FloorResult", "simulate_floor", "floor_generator", "sync_floor_decoration",
]

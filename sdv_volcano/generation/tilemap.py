"""
Layout decoding - slices one 64x64 tile grid out of the layout table.

From VolcanoDungeon.LoadLevel(): the layout image is cropped out of
Layouts.png and mirrored left-to-right when the level's flip roll says so.
The entrance (layout 0) and rest floor (layout 31) are never mirrored.

Grids are numpy uint8 arrays indexed [y, x], values are MapTile ids.
"""

import numpy as np

from ..content.tiles import (
    MapTile,
    TILE_SYMBOLS,
    UNFLIPPABLE_LAYOUTS,
)
from ..data.tables import DungeonTables, TableDataError


def load_tilemap(tables: DungeonTables, layout_id: int, flip_x: bool = False) -> np.ndarray:
    """
    Decode a layout into a fresh, writable tile grid.

    Args:
        tables: Shared lookup tables
        layout_id: Layout index in layouts.bin
        flip_x: Mirror each row (ignored for layouts 0 and 31)

    Raises:
        TableDataError: layout missing from the table, or without entrance/exit
    """
    if layout_id in UNFLIPPABLE_LAYOUTS:
        flip_x = False

    base = tables.layout(layout_id)
    grid = np.fliplr(base).copy() if flip_x else base.copy()

    if not (grid == MapTile.EXIT).any():
        raise TableDataError(f"buggy map: layout {layout_id} has no exit")
    if not (grid == MapTile.ENTER).any():
        raise TableDataError(f"buggy map: layout {layout_id} has no entrance")
    return grid


def render_tilemap(grid: np.ndarray) -> str:
    """Render a grid as 64 lines of ASCII, one character per tile."""
    lines = []
    for row in grid:
        lines.append("".join(TILE_SYMBOLS[MapTile(int(tile))] for tile in row))
    return "\n".join(lines)


def count_tiles(grid: np.ndarray, tile: MapTile) -> int:
    """Number of tiles of one kind in a grid."""
    return int(np.count_nonzero(grid == tile))

"""
Set Piece Resolution - Exact replication of VolcanoDungeon set piece logic.

Layouts mark set pieces as solid squares of SetPiece tiles. The game:
1. Scans the grid (x outer, y inner) for SetPiece tiles.
2. Grows a square from each one while the tile j steps right AND the tile
   j steps down are still SetPiece.
3. Flattens the measured square to floor so it is not found again.
4. Snaps the measured size down to a size class (32, 16, 8, 4, else 3).
5. For each piece in scan order, picks a random cell of that size's event
   sheet (column first, then row) and applies the cell's contents, which
   may consume RNG (gates, barrels), drop dragon teeth, or place a chest.

Scan order decides which piece consumes which draws, so it must match.

Here the scan is split in two passes: the first measures footprints against
a "consumed" mask instead of rewriting the grid, the second paints the final
grid (measured squares to floor, class-size squares back to SetPiece).
"""

import logging
from dataclasses import dataclass
from typing import List

import numpy as np

from ..content.tiles import MAP_SIZE, MapTile, SET_PIECE_SIZES, SetPieceFeature
from ..data.tables import DungeonTables
from ..state.rng import DotnetRandom
from ..state.settings import GameSettings
from .loot import DragonTooth, RawGoodie, evaluate_chest


logger = logging.getLogger("SetPieceResolver")

# Dragon tooth drop chance
TOOTH_CHANCE = 0.5


@dataclass(frozen=True)
class SetPieceRegion:
    """A set piece found on the grid."""
    x: int
    y: int
    size_class: int
    measured_size: int

    @property
    def malformed(self) -> bool:
        return self.measured_size not in SET_PIECE_SIZES


def classify_size(measured: int) -> int:
    """Snap a measured square size down to the nearest size class."""
    for size in SET_PIECE_SIZES[:-1]:
        if measured >= size:
            return size
    return SET_PIECE_SIZES[-1]


def _measure(is_piece: np.ndarray, x: int, y: int) -> int:
    """Grow a square from (x, y) along its top row and left column."""
    j = 0
    while (j < MAP_SIZE
           and x + j < MAP_SIZE and y + j < MAP_SIZE
           and is_piece[y, x + j] and is_piece[y + j, x]):
        j += 1
    return j


def find_set_pieces(grid: np.ndarray, layout_id: int = -1) -> List[SetPieceRegion]:
    """
    Scan a grid for set pieces without modifying it.

    Args:
        grid: Decoded tile grid [y, x]
        layout_id: Only used in log messages

    Returns:
        Regions in game scan order (x outer, y inner)
    """
    is_piece = grid == MapTile.SET_PIECE
    regions: List[SetPieceRegion] = []

    for x in range(MAP_SIZE):
        for y in range(MAP_SIZE):
            if not is_piece[y, x]:
                continue
            measured = _measure(is_piece, x, y)
            # game flattens the measured square to floor here
            is_piece[y:y + measured, x:x + measured] = False

            region = SetPieceRegion(x, y, classify_size(measured), measured)
            if region.malformed:
                logger.warning(
                    f"buggy map? layout={layout_id} at x={x} y={y}, size={measured}"
                )
            regions.append(region)
    return regions


def paint_set_pieces(grid: np.ndarray, regions: List[SetPieceRegion]) -> None:
    """
    Apply the scan's grid changes in place.

    Measured squares become floor, then each piece's size-class square is
    painted back as SetPiece for whoever renders the grid.
    """
    for region in regions:
        size = region.measured_size
        grid[region.y:region.y + size, region.x:region.x + size] = MapTile.FLOOR
    for region in regions:
        size = region.size_class
        grid[region.y:region.y + size, region.x:region.x + size] = MapTile.SET_PIECE


def resolve_set_pieces(
    rng: DotnetRandom,
    tables: DungeonTables,
    regions: List[SetPieceRegion],
    settings: GameSettings,
    level: int,
    min_luck: float,
    max_luck: float,
    layout_id: int = -1,
) -> List[RawGoodie]:
    """
    Pick each piece's sheet cell and apply its events.

    Args:
        rng: The level generator (advanced in place)
        tables: Shared lookup tables
        regions: Pieces in scan order
        settings: Game settings
        level: Floor index (0-9)
        min_luck, max_luck: Luck interval being predicted
        layout_id: Only used in log messages

    Returns:
        Goodies in event order (may contain ChanceChest)
    """
    buggy = any(region.malformed for region in regions)
    goodies: List[RawGoodie] = []

    for region in regions:
        num_rows, num_cols = tables.get_piece_size(region.size_class)
        selected_col = rng.next_range(num_cols)
        selected_row = rng.next_range(num_rows)
        if buggy:
            logger.warning(
                f"layout {layout_id}: x={region.x} y={region.y} sz={region.size_class} "
                f"selected row {selected_row}, col {selected_col}"
            )

        for event in tables.get_piece_events(region.size_class, selected_row, selected_col):
            if event is SetPieceFeature.RNG:
                rng.skip()
            elif event is SetPieceFeature.TOOTH:
                if rng.next_f64() < TOOTH_CHANCE:
                    goodies.append(DragonTooth())
            elif event is SetPieceFeature.CHEST:
                goodies.append(evaluate_chest(rng, settings, level, min_luck, max_luck))

    return goodies

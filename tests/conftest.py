"""
Shared pytest fixtures for the Volcano Dungeon predictor test suite.

This module provides reusable fixtures for:
- Hand-built dungeon tables (layouts and set piece sheets)
- Default game settings
"""

import os
import sys

import numpy as np
import pytest

# Ensure project root is in path
_project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _project_root)

from sdv_volcano.content.tiles import MAP_SIZE, MapTile, SetPieceFeature
from sdv_volcano.data.tables import DungeonTables
from sdv_volcano.state.settings import GameSettings


# Layouts 0..57 all exist in the synthetic table
NUM_TEST_LAYOUTS = 58

# Layout with a 4x4 and a 3x3 piece
TWO_PIECE_LAYOUT = 1
# Layout with a malformed 5x5 piece
MALFORMED_LAYOUT = 2
# Layout with switch locations and no pieces
SWITCH_LAYOUT = 3


# =============================================================================
# Layout builders
# =============================================================================


def make_layout(pieces=(), switches=()):
    """
    Build one 64x64 layout: walled border, floor inside, entrance top-left,
    exit bottom-right.

    Args:
        pieces: (x, y, size) squares of SetPiece tiles
        switches: (x, y) SwitchLocation tiles
    """
    grid = np.full((MAP_SIZE, MAP_SIZE), MapTile.FLOOR, dtype=np.uint8)
    grid[0, :] = MapTile.WALL
    grid[-1, :] = MapTile.WALL
    grid[:, 0] = MapTile.WALL
    grid[:, -1] = MapTile.WALL
    grid[2, 1] = MapTile.ENTER
    grid[61, 62] = MapTile.EXIT
    grid[10, 50] = MapTile.LAVA
    for x, y, size in pieces:
        grid[y:y + size, x:x + size] = MapTile.SET_PIECE
    for x, y in switches:
        grid[y, x] = MapTile.SWITCH_LOCATION
    return grid


def build_test_tables():
    layouts = []
    for layout_id in range(NUM_TEST_LAYOUTS):
        if layout_id == 0:
            layouts.append(make_layout())
        elif layout_id == TWO_PIECE_LAYOUT:
            layouts.append(make_layout(pieces=[(10, 10, 4), (20, 30, 3)]))
        elif layout_id == MALFORMED_LAYOUT:
            layouts.append(make_layout(pieces=[(40, 40, 5)]))
        elif layout_id in (SWITCH_LAYOUT, 35):
            layouts.append(make_layout(switches=[(5, 5), (6, 5)]))
        else:
            layouts.append(make_layout(pieces=[(30, 30, 3)]))

    piece_sizes = {32: (1, 1), 16: (1, 1), 8: (1, 1), 4: (2, 3), 3: (2, 2)}
    piece_events = {}
    for row in range(2):
        for col in range(2):
            piece_events[(3, row, col)] = (SetPieceFeature.CHEST,)
    for row in range(2):
        for col in range(3):
            piece_events[(4, row, col)] = (SetPieceFeature.RNG, SetPieceFeature.TOOTH)

    return DungeonTables(
        layouts=np.stack(layouts),
        piece_sizes=piece_sizes,
        piece_events=piece_events,
    )


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture(scope="session")
def tables():
    """Synthetic tables: every layout id 0..57 with Enter and Exit."""
    return build_test_tables()


@pytest.fixture
def settings():
    """Scenario settings: fixed seed, modern RNG, no caldera, day 5."""
    return GameSettings(seed=12345, days_played=5)


@pytest.fixture
def data_dir(tables, tmp_path):
    """Directory holding the synthetic tables on disk."""
    path = str(tmp_path / "data")
    tables.save(path)
    return path

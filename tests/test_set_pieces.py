"""
Set piece scanning and resolution tests.

Scan order and draw order decide which piece consumes which draws, so
these tests pin both.
"""

import logging

import numpy as np
import pytest

from sdv_volcano.content.tiles import MapTile
from sdv_volcano.generation.loot import DragonTooth, evaluate_chest
from sdv_volcano.generation.set_pieces import (
    SetPieceRegion,
    classify_size,
    find_set_pieces,
    paint_set_pieces,
    resolve_set_pieces,
)
from sdv_volcano.generation.tilemap import count_tiles, load_tilemap
from sdv_volcano.state.rng import DotnetRandom

from conftest import MALFORMED_LAYOUT, TWO_PIECE_LAYOUT, make_layout


class TestClassifySize:
    """Measured sizes snap down to a class."""

    def test_exact_sizes(self):
        for size in (32, 16, 8, 4, 3):
            assert classify_size(size) == size

    def test_snaps_down(self):
        assert classify_size(40) == 32
        assert classify_size(17) == 16
        assert classify_size(9) == 8
        assert classify_size(5) == 4

    def test_small_sizes_become_three(self):
        assert classify_size(2) == 3
        assert classify_size(1) == 3


class TestFindSetPieces:
    """Grid scanning."""

    def test_scan_order(self, tables):
        grid = load_tilemap(tables, TWO_PIECE_LAYOUT)
        regions = find_set_pieces(grid)
        assert regions == [
            SetPieceRegion(10, 10, 4, 4),
            SetPieceRegion(20, 30, 3, 3),
        ]

    def test_does_not_modify_grid(self, tables):
        grid = load_tilemap(tables, TWO_PIECE_LAYOUT)
        before = grid.copy()
        find_set_pieces(grid)
        assert np.array_equal(grid, before)

    def test_malformed_piece_warns(self, tables, caplog):
        grid = load_tilemap(tables, MALFORMED_LAYOUT)
        with caplog.at_level(logging.WARNING, logger="SetPieceResolver"):
            regions = find_set_pieces(grid, MALFORMED_LAYOUT)
        assert regions == [SetPieceRegion(40, 40, 4, 5)]
        assert regions[0].malformed
        assert "buggy map" in caplog.text

    def test_adjacent_squares(self):
        grid = make_layout(pieces=[(5, 5, 3), (8, 5, 3)])
        regions = find_set_pieces(grid)
        assert regions == [SetPieceRegion(5, 5, 3, 3), SetPieceRegion(8, 5, 3, 3)]

    def test_consumed_tiles_are_not_rescanned(self):
        """A 4x3 block yields one 3x3 piece plus the leftover column."""
        grid = make_layout(pieces=[(5, 5, 3)])
        grid[5:8, 8] = MapTile.SET_PIECE
        regions = find_set_pieces(grid)
        assert regions[0] == SetPieceRegion(5, 5, 3, 3)
        assert regions[1:] == [
            SetPieceRegion(8, 5, 3, 1),
            SetPieceRegion(8, 6, 3, 1),
            SetPieceRegion(8, 7, 3, 1),
        ]

    def test_grows_to_grid_edge(self):
        grid = make_layout()
        grid[60:64, 60:64] = MapTile.SET_PIECE
        regions = find_set_pieces(grid)
        assert regions == [SetPieceRegion(60, 60, 4, 4)]


class TestPaintSetPieces:
    """Final grid normalization."""

    def test_malformed_piece_repainted_to_class_size(self, tables):
        grid = load_tilemap(tables, MALFORMED_LAYOUT)
        paint_set_pieces(grid, find_set_pieces(grid))
        assert count_tiles(grid, MapTile.SET_PIECE) == 16
        assert grid[44, 44] == MapTile.FLOOR
        assert grid[43, 43] == MapTile.SET_PIECE

    def test_well_formed_unchanged(self, tables):
        grid = load_tilemap(tables, TWO_PIECE_LAYOUT)
        before = grid.copy()
        paint_set_pieces(grid, find_set_pieces(grid))
        assert np.array_equal(grid, before)


class TestResolveSetPieces:
    """Sheet cell selection and event draws."""

    def test_draw_order(self, tables, settings):
        grid = load_tilemap(tables, TWO_PIECE_LAYOUT)
        regions = find_set_pieces(grid)
        rng = DotnetRandom(2024)
        goodies = resolve_set_pieces(rng, tables, regions, settings, 3, 0.95, 1.05)

        # 4x4 sheet is 2 rows x 3 cols: col, row, Rng, Tooth
        expected_rng = DotnetRandom(2024)
        expected_rng.next_range(3)
        expected_rng.next_range(2)
        expected_rng.skip()
        tooth = expected_rng.next_f64() < 0.5
        # 3x3 sheet is 2 x 2: col, row, Chest
        expected_rng.next_range(2)
        expected_rng.next_range(2)
        chest = evaluate_chest(expected_rng, settings, 3, 0.95, 1.05)

        expected = ([DragonTooth()] if tooth else []) + [chest]
        assert goodies == expected
        assert rng.counter == expected_rng.counter == 7

    def test_empty_cells_still_select(self, tables, settings):
        regions = [SetPieceRegion(0, 0, 8, 8)]
        rng = DotnetRandom(5)
        assert resolve_set_pieces(rng, tables, regions, settings, 3, 0.95, 1.05) == []
        assert rng.counter == 2

    def test_malformed_floor_logs_selection(self, tables, settings, caplog):
        grid = load_tilemap(tables, MALFORMED_LAYOUT)
        regions = find_set_pieces(grid, MALFORMED_LAYOUT)
        with caplog.at_level(logging.WARNING, logger="SetPieceResolver"):
            resolve_set_pieces(
                DotnetRandom(1), tables, regions, settings, 3, 0.95, 1.05, MALFORMED_LAYOUT
            )
        assert "selected row" in caplog.text

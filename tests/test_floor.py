"""
Floor simulation tests.

The floor pipeline must consume generator draws in game order even where
the results are unused; these tests replay the pipeline by hand and
compare draw counts and outcomes.
"""

import numpy as np
import pytest

from sdv_volcano.content.tiles import MapTile
from sdv_volcano.generation.floor import (
    DECORATION_CHANCE,
    floor_generator,
    simulate_floor,
    sync_floor_decoration,
)
from sdv_volcano.generation.loot import evaluate_chest
from sdv_volcano.generation.tilemap import count_tiles
from sdv_volcano.state.rng import DotnetRandom

from conftest import MALFORMED_LAYOUT


class TestFloorGenerator:
    """Per-level generator seeding."""

    def test_fresh_generator(self, settings):
        rng = floor_generator(settings, 3)
        assert rng.counter == 0
        assert rng.next() == DotnetRandom(settings.generator_seed(3)).next()

    def test_levels_differ(self, settings):
        assert floor_generator(settings, 2).next() != floor_generator(settings, 3).next()


class TestDecorationSync:
    """Per-tile decoration rolls."""

    def test_threshold_is_single_precision(self):
        assert DECORATION_CHANCE == 0.30000001192092896

    def test_draw_count(self):
        rng = DotnetRandom(77)
        replay = DotnetRandom(77)
        extra = 0
        for _ in range(64 * 64):
            if replay.next_f64() < DECORATION_CHANCE:
                replay.skip(2)
                extra += 2
        sync_floor_decoration(rng)
        assert rng.counter == 4096 + extra
        assert rng.next() == replay.next()


class TestSimulateFloor:
    """Whole-floor pipeline."""

    def test_entrance_floor(self, tables, settings):
        result = simulate_floor(tables, settings, 0, 0, 0.95, 1.05)
        assert result.flip_x is False
        assert result.set_pieces == []
        assert result.goodies == []
        assert np.array_equal(result.tiles, tables.layout(0))

    def test_flip_roll(self, tables, settings):
        for level in (1, 2, 3, 4):
            rng = floor_generator(settings, level)
            rng.next()
            expected_flip = rng.next_range(2) == 1
            result = simulate_floor(tables, settings, level, 4, 0.95, 1.05)
            assert result.flip_x == expected_flip

    def test_rest_floor_never_flips(self, tables, settings):
        for level in range(10):
            assert simulate_floor(tables, settings, level, 31, 0.95, 1.05).flip_x is False

    def test_draw_bookkeeping(self, tables, settings):
        """Layout 4 has one 3x3 chest piece."""
        result = simulate_floor(tables, settings, 4, 4, 0.95, 1.05)

        rng = floor_generator(settings, 4)
        rng.next()
        rng.next_range(2)
        sync_floor_decoration(rng)
        rng.next_range(2)
        rng.next_range(2)
        chest = evaluate_chest(rng, settings, 4, 0.95, 1.05)

        assert result.goodies == [chest]

    def test_goodies_vary_with_luck_only_in_chests(self, tables, settings):
        low = simulate_floor(tables, settings, 4, 4, 0.0, 0.5)
        high = simulate_floor(tables, settings, 4, 4, 5.0, 10.0)
        assert np.array_equal(low.tiles, high.tiles)
        assert len(low.goodies) == len(high.goodies) == 1

    def test_malformed_layout_tiles(self, tables, settings):
        result = simulate_floor(tables, settings, 2, MALFORMED_LAYOUT, 0.95, 1.05)
        assert count_tiles(result.tiles, MapTile.SET_PIECE) == 16
        assert result.set_pieces[0].malformed

    def test_bad_interval(self, tables, settings):
        with pytest.raises(AssertionError):
            simulate_floor(tables, settings, 2, 4, 1.05, 0.95)

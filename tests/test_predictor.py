"""
Dungeon predictor tests.

End-to-end runs over the synthetic tables: per-floor layouts and loot,
single floor reports, and text/JSON output.
"""

import json

import pytest

from sdv_volcano.generation.loot import ChanceChest
from sdv_volcano.prediction.dungeon_predictor import (
    DungeonPredictor,
    floor_notes,
    predict_dungeon,
)
from sdv_volcano.prediction.intervals import merge_intervals
from sdv_volcano.state.settings import GameSettings

from conftest import SWITCH_LAYOUT, make_layout


def assert_partitions(intervals, domain):
    assert intervals[0].min_luck == domain[0]
    assert intervals[-1].max_luck == domain[1]
    for prev, cur in zip(intervals, intervals[1:]):
        assert prev.is_followed_by(cur)


class TestScenario:
    """Fixed seed, modern RNG, no caldera, day 5, no luck levels."""

    def test_fixed_floors(self, tables, settings):
        prediction = DungeonPredictor(tables, settings).predict()
        domain = settings.luck_domain()

        assert len(prediction.layouts[0]) == 1
        assert prediction.layouts[0][0].value == 0
        assert (prediction.layouts[0][0].min_luck, prediction.layouts[0][0].max_luck) == domain

        assert len(prediction.layouts[9]) == 1
        assert prediction.layouts[9][0].value == 30
        assert (prediction.layouts[9][0].min_luck, prediction.layouts[9][0].max_luck) == domain

    def test_entrance_has_no_loot(self, tables, settings):
        prediction = DungeonPredictor(tables, settings).predict()
        assert len(prediction.loot[0]) == 1
        assert prediction.loot[0][0].value == []

    def test_every_floor_partitions_domain(self, tables, settings):
        prediction = DungeonPredictor(tables, settings).predict()
        domain = settings.luck_domain()
        assert len(prediction.layouts) == len(prediction.loot) == 10
        for level in range(10):
            assert_partitions(prediction.layouts[level], domain)
            assert_partitions(prediction.loot[level], domain)

    def test_layouts_match_sequences(self, tables, settings):
        prediction = DungeonPredictor(tables, settings).predict()
        for sequence in prediction.sequences:
            for level, layout_id in enumerate(sequence.value):
                assert any(
                    i.value == layout_id and i.contains(sequence.min_luck)
                    for i in prediction.layouts[level]
                )


class TestAggregation:
    """Merged output across many saves."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 4])
    def test_wide_luck(self, tables, seed):
        settings = GameSettings(seed=seed, days_played=seed * 11, max_luck_lvl=10)
        prediction = predict_dungeon(tables, settings)
        domain = settings.luck_domain()
        for level in range(10):
            assert_partitions(prediction.layouts[level], domain)
            assert_partitions(prediction.loot[level], domain)
            assert merge_intervals(prediction.layouts[level]) == prediction.layouts[level]
            assert merge_intervals(prediction.loot[level]) == prediction.loot[level]
            for interval in prediction.loot[level]:
                assert not any(isinstance(g, ChanceChest) for g in interval.value)

    @pytest.mark.parametrize("index", [98, 3, 17, 41])
    def test_sequences_merged(self, tables, index):
        """Luck splits that pick the same layouts on both sides collapse."""
        settings = GameSettings(seed=index * 7919, days_played=index + 3, max_luck_lvl=12)
        prediction = predict_dungeon(tables, settings)
        assert merge_intervals(prediction.sequences) == prediction.sequences
        for prev, cur in zip(prediction.sequences, prediction.sequences[1:]):
            assert prev.value != cur.value
        assert_partitions(prediction.sequences, settings.luck_domain())

    def test_prediction_cached(self, tables, settings):
        predictor = DungeonPredictor(tables, settings)
        assert predictor.predict() is predictor.predict()

    def test_json_output(self, tables, settings):
        data = DungeonPredictor(tables, settings).predict().to_dict()
        text = json.dumps(data)
        assert json.loads(text)["layouts"][0][0]["value"] == 0
        assert data["settings"]["seed"] == settings.seed

    def test_summary(self, tables, settings):
        summary = DungeonPredictor(tables, settings).summary()
        assert summary.startswith("day: spring 5, Y1")
        assert "floor 0: 0" in summary
        assert "floor 9: 30" in summary


class TestFloorReport:
    """Single floor simulation for display."""

    def test_report_matches_prediction(self, tables, settings):
        predictor = DungeonPredictor(tables, settings)
        prediction = predictor.predict()
        for level in (1, 2, 3):
            layout_id = prediction.layouts[level][0].value
            report = predictor.floor(level, layout_id)
            if len(prediction.layouts[level]) == 1:
                assert report.loot == prediction.loot[level]

    def test_ascii_map(self, tables, settings):
        report = DungeonPredictor(tables, settings).floor(1, 1)
        lines = report.ascii_map.split("\n")
        assert len(lines) == 64
        assert report.to_dict()["map"] == lines

    def test_bad_level(self, tables, settings):
        with pytest.raises(ValueError):
            DungeonPredictor(tables, settings).floor(10, 1)

    def test_bad_interval(self, tables, settings):
        with pytest.raises(ValueError):
            DungeonPredictor(tables, settings).floor(1, 1, 1.05, 0.95)

    def test_switch_floor_notes(self, tables, settings):
        report = DungeonPredictor(tables, settings).floor(2, SWITCH_LAYOUT)
        assert any("20% chance" in note for note in report.notes)
        assert any("choose 1 to 3" in note for note in report.notes)

    def test_monster_floor_notes(self, tables, settings):
        report = DungeonPredictor(tables, settings).floor(3, 35)
        assert report.notes[0].startswith("Monster floor")
        assert not any("20% chance" in note for note in report.notes)
        assert any("choose 3 of" in note for note in report.notes)


class TestFloorNotes:
    """Notes from layout id and tiles alone."""

    def test_mushroom(self):
        notes = floor_notes(4, 33, make_layout())
        assert notes == ["Mushroom floor: there's lots of Magma Caps and False Magma Caps here."]

    def test_plain_floor(self):
        assert floor_notes(4, 7, make_layout()) == []

    def test_final_floor_skips_gate_notes(self):
        assert floor_notes(9, 7, make_layout(switches=[(5, 5)])) == []

"""
Prediction module - luck-interval enumeration over a whole dungeon.

Contains:
- ProbabilityInterval and interval merging
- Layout sequence enumeration with luck bisection
- DungeonPredictor (per-floor layouts and loot)
"""

from .intervals import (
    ProbabilityInterval,
    append_merged,
    merge_intervals,
    split_chance_chests,
    append_loot,
)
from .layouts import LayoutSequence, enumerate_layouts
from .dungeon_predictor import (
    DungeonPredictor,
    DungeonPrediction,
    FloorReport,
    floor_notes,
    predict_dungeon,
    simulate_floor_report,
)

__all__ = [
    # Intervals
    "ProbabilityInterval", "append_merged", "merge_intervals", "split_chance_chests",
    "append_loot",
    # Layouts
    "LayoutSequence", "enumerate_layouts",
    # Predictor
    "DungeonPredictor", "DungeonPrediction", "FloorReport", "floor_notes",
    "predict_dungeon", "simulate_floor_report",
]

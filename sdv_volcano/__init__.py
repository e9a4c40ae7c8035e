"""
Stardew Valley Volcano Dungeon Predictor

A faithful Python recreation of the Volcano Dungeon generator based on
decompiled source. Given a save's seed and day, it predicts every floor's
layout and every set-piece drop, split by the luck values that produce them.

Submodules:
- state: System.Random port, seed mixing, game settings
- content: Tile kinds, layout pools, chest items
- data: Precomputed layout and set-piece tables
- generation: Single floor simulation
- prediction: Luck-interval enumeration and the DungeonPredictor

Usage:
    from sdv_volcano import DungeonPredictor, DungeonTables, GameSettings

    tables = DungeonTables.load("data/")
    settings = GameSettings(seed=12345, days_played=5, max_luck_lvl=2)
    print(DungeonPredictor(tables, settings).summary())
"""

__version__ = "0.1.0"

# RNG System (from state submodule)
from .state.rng import DotnetRandom, seed_mix, next_up

# Settings
from .state.settings import GameSettings, display_luck, load_settings

# Tables
from .data.tables import DungeonTables, TableDataError

# Floor simulation
from .generation.floor import FloorResult, simulate_floor

# Prediction
from .prediction.intervals import ProbabilityInterval
from .prediction.layouts import enumerate_layouts
from .prediction.dungeon_predictor import (
    DungeonPredictor,
    DungeonPrediction,
    FloorReport,
    predict_dungeon,
)

__all__ = [
    "DotnetRandom", "seed_mix", "next_up",
    "GameSettings", "display_luck", "load_settings",
    "DungeonTables", "TableDataError",
    "FloorResult", "simulate_floor",
    "ProbabilityInterval", "enumerate_layouts",
    "DungeonPredictor", "DungeonPrediction", "FloorReport", "predict_dungeon",
]

"""
State module - RNG and run settings.

Contains:
- RNG system (System.Random port, seed mixing)
- Game settings and luck-domain helpers
"""

# RNG System
from .rng import (
    DotnetRandom,
    seed_mix,
    stardew_hashcode,
    next_up,
    INT32_MAX,
    INT32_MIN,
)

# Settings
from .settings import GameSettings, display_luck, load_settings

__all__ = [
    # RNG
    "DotnetRandom", "seed_mix", "stardew_hashcode", "next_up", "INT32_MAX", "INT32_MIN",
    # Settings
    "GameSettings", "display_luck", "load_settings",
]

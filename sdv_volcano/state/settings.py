"""
Game settings for a Volcano Dungeon prediction run.

Everything the dungeon generator reads from the save file, plus the one
input the player controls at prediction time (max luck level), lives in
GameSettings. One instance is shared read-only by a whole enumeration run.

Luck is tracked as the game's "luck multiplier":

    luckMult = 1 + dailyLuck / 2 + 0.035 * luckLevel

Daily luck ranges over [-0.1, 0.1], shifted by +0.025 with the Special
Charm. The game adds that charm bonus as a single-precision float, so the
bounds here do the same.
"""

import json
import os
from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Tuple

import numpy as np

from .rng import INT32_MAX, INT32_MIN, seed_mix


# Daily luck bounds before the charm bonus
DAILY_LUCK_MIN = -0.1
DAILY_LUCK_MAX = 0.1

# Special Charm daily luck bonus (stored as float in-game)
SPECIAL_CHARM_BONUS = float(np.float32(0.025))

# Luck multiplier gained per luck level
LUCK_PER_LEVEL = 0.035

# Floor seed multiplier for the level index
LEVEL_SEED_FACTOR = 5152

SEASONS = ["spring", "summer", "fall", "winter"]
DAYS_PER_SEASON = 28


@dataclass(frozen=True)
class GameSettings:
    """Immutable inputs for one prediction run."""
    seed: int = 0
    legacy_rng: bool = False
    has_caldera: bool = False
    post_1_6_4: bool = False
    cracked_golden_coconut: bool = False
    special_charm: bool = False
    days_played: int = 1
    max_luck_lvl: int = 0

    def __post_init__(self):
        if not INT32_MIN <= self.seed <= INT32_MAX:
            raise ValueError(f"seed {self.seed} does not fit in a signed 32-bit int")
        if self.days_played < 1:
            raise ValueError("days_played must be at least 1")
        if self.max_luck_lvl < 0:
            raise ValueError("max_luck_lvl must be non-negative")

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'GameSettings':
        """Build settings from a mapping, ignoring unknown keys."""
        kwargs: Dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            value = data[f.name]
            if f.type in (bool, "bool"):
                kwargs[f.name] = _parse_bool(f.name, value)
            else:
                kwargs[f.name] = int(value)
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    # ========================================================================
    # SEEDS
    # ========================================================================

    def level_mod(self, level: int) -> int:
        """Day multiplier for a level (1.6.4 shifted it by one)."""
        return level + 1 if self.post_1_6_4 else level

    def level_seed(self, level: int) -> int:
        """
        Per-level generation seed.

        From VolcanoDungeon.GenerateLevel():
            generationSeed = CreateRandomSeed(daysPlayed * levelMod, level * 5152, uniqueID / 2)
        """
        days = (self.days_played * self.level_mod(level)) & 0xFFFFFFFF
        half_seed = abs(self.seed) // 2 * (1 if self.seed >= 0 else -1)
        return seed_mix(
            self.legacy_rng,
            [float(days), float(level * LEVEL_SEED_FACTOR), float(half_seed)],
        )

    def generator_seed(self, level: int) -> int:
        """Seed of the level's generator: the level seed mixed once more."""
        return seed_mix(self.legacy_rng, [float(self.level_seed(level))])

    # ========================================================================
    # LUCK
    # ========================================================================

    def luck_domain(self) -> Tuple[float, float]:
        """
        Full (min, max) luck multiplier range reachable with these settings.

        Minimum: worst daily luck, no luck buffs.
        Maximum: best daily luck plus max_luck_lvl luck levels.
        """
        min_luck = DAILY_LUCK_MIN
        base_max_luck = DAILY_LUCK_MAX
        if self.special_charm:
            min_luck += SPECIAL_CHARM_BONUS
            base_max_luck += SPECIAL_CHARM_BONUS
        return (
            1.0 + min_luck / 2.0,
            1.0 + base_max_luck / 2.0 + LUCK_PER_LEVEL * self.max_luck_lvl,
        )

    # ========================================================================
    # DISPLAY
    # ========================================================================

    def calendar_label(self) -> str:
        """Render days_played as e.g. "spring 5, Y1"."""
        total_seasons = (self.days_played - 1) // DAYS_PER_SEASON
        year = total_seasons // 4 + 1
        season = SEASONS[total_seasons % 4]
        day = (self.days_played - 1) % DAYS_PER_SEASON + 1
        return f"{season} {day}, Y{year}"


def _parse_bool(name: str, value: Any) -> bool:
    """Settings flag from JSON: a bool, 0/1, or "true"/"false"."""
    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower() == "true"
    raise ValueError(f"{name} must be true or false, got {value!r}")


def display_luck(luck_mult: float) -> float:
    """Convert a luck multiplier back to the daily-luck scale shown to players."""
    return (luck_mult - 1.0) * 2.0


def load_settings(path: str) -> GameSettings:
    """Load settings from a JSON file."""
    if not os.path.exists(path):
        raise FileNotFoundError(f"Settings file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        return GameSettings.from_dict(json.load(f))


__all__ = [
    "GameSettings",
    "display_luck",
    "load_settings",
    "SPECIAL_CHARM_BONUS",
    "LUCK_PER_LEVEL",
]

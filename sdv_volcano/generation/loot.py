"""
Volcano Dungeon Chest Prediction

Implements chest reward prediction for set-piece chests.

Chest Mechanics (from decompiled VolcanoDungeon.cs):
1. Level generator: chestSeed = CreateRandomSeed(random.Next())
2. Chest generator = new Random(chestSeed)
   - First draw: rare check
     roll < (level == 9 ? 0.5 : 0.1) + luckBoost  -> rare chest
   - Rare/common table roll (nextRange(9) / nextRange(7))
   - Weapon slot (index 6) rolls nextRange(3) for the variant
3. Golden coconut entries re-roll until the player has cracked one

Luck is tracked as luckMult = 1 + luckBoost, so the rare check becomes

    (roll - base) + 1 < luckMult

The chest's "threshold" is (roll - base) + 1: any luck multiplier above it
gets the rare item, any at or below it gets the common one.
"""

from dataclasses import dataclass
from typing import Union

from ..content.items import (
    COMMON_COCONUT_INDEX,
    COMMON_TABLE,
    RARE_COCONUT_INDEX,
    RARE_TABLE,
    CommonChest,
    RareChest,
)
from ..content.tiles import FINAL_LEVEL
from ..state.rng import DotnetRandom, seed_mix
from ..state.settings import GameSettings


# Base rare chance by level
RARE_CHANCE = 0.1
FINAL_LEVEL_RARE_CHANCE = 0.5


# ============================================================================
# GOODIES
# ============================================================================

@dataclass(frozen=True)
class DragonTooth:
    """Dragon tooth lying on a set piece."""

    def __str__(self):
        return "Dragon Tooth"


@dataclass(frozen=True)
class CommonChestDrop:
    """Chest that is common for every luck in the interval."""
    item: CommonChest

    def __str__(self):
        return f"common chest: {self.item}"


@dataclass(frozen=True)
class RareChestDrop:
    """Chest that is rare for every luck in the interval."""
    item: RareChest

    def __str__(self):
        return f"rare chest: {self.item}"


Goodie = Union[DragonTooth, CommonChestDrop, RareChestDrop]


@dataclass(frozen=True)
class ChanceChest:
    """
    Chest whose rarity depends on where the true luck lies.

    Luck <= split_luck -> common, luck > split_luck -> rare. Only produced
    while simulating a floor; prediction.intervals splits it away before
    anything reaches a caller.
    """
    split_luck: float
    common: CommonChest
    rare: RareChest

    def __str__(self):
        return (
            f"luck boost > {self.split_luck:.4f}: rare: {self.rare}, "
            f"else common: {self.common}"
        )


RawGoodie = Union[DragonTooth, CommonChestDrop, RareChestDrop, ChanceChest]


# ============================================================================
# ITEM GENERATION
# ============================================================================

def _roll_table(rng: DotnetRandom, table: tuple, gated_index: int, unlocked: bool):
    """Roll an item table, re-rolling the coconut slot while it is locked."""
    while True:
        index = rng.next_range(len(table))
        if index == gated_index and not unlocked:
            continue
        break
    entry = table[index]
    if isinstance(entry, tuple):
        return entry[rng.next_range(len(entry))]
    return entry


def generate_common(chest_seed: int, settings: GameSettings) -> CommonChest:
    """Common chest contents for a chest seed."""
    rng = DotnetRandom(chest_seed)
    rng.skip()  # rare/common check
    return _roll_table(rng, COMMON_TABLE, COMMON_COCONUT_INDEX, settings.cracked_golden_coconut)


def generate_rare(chest_seed: int, settings: GameSettings) -> RareChest:
    """Rare chest contents for a chest seed."""
    rng = DotnetRandom(chest_seed)
    rng.skip()  # rare/common check
    return _roll_table(rng, RARE_TABLE, RARE_COCONUT_INDEX, settings.cracked_golden_coconut)


# ============================================================================
# CHEST EVALUATION
# ============================================================================

def chest_threshold(chest_seed: int, level: int) -> float:
    """Luck multiplier above which the chest is rare."""
    base = FINAL_LEVEL_RARE_CHANCE if level == FINAL_LEVEL else RARE_CHANCE
    roll = DotnetRandom(chest_seed).next_f64()
    return roll - base + 1.0


def evaluate_chest(
    rng: DotnetRandom,
    settings: GameSettings,
    level: int,
    min_luck: float,
    max_luck: float,
) -> RawGoodie:
    """
    Resolve one chest event against a luck interval.

    Consumes exactly one draw from the level generator.

    Returns:
        RareChestDrop if even min_luck beats the threshold,
        CommonChestDrop if even max_luck does not,
        ChanceChest otherwise (both items precomputed)
    """
    chest_seed = seed_mix(settings.legacy_rng, [float(rng.next())])
    threshold = chest_threshold(chest_seed, level)

    if threshold < min_luck:
        return RareChestDrop(generate_rare(chest_seed, settings))
    if threshold >= max_luck:
        return CommonChestDrop(generate_common(chest_seed, settings))
    return ChanceChest(
        split_luck=threshold,
        common=generate_common(chest_seed, settings),
        rare=generate_rare(chest_seed, settings),
    )

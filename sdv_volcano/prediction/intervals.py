"""
Luck intervals - merging and chance-chest elimination.

Every prediction is a list of ProbabilityInterval(min_luck, max_luck, value)
sorted by luck. Bounds are inclusive luck multipliers, and neighbouring
intervals touch at consecutive doubles: [a, b] is followed by
[next_up(b), c]. Two neighbours with equal values collapse into one.

Floors produce ChanceChest placeholders when a chest's rarity flips inside
the interval being simulated. split_chance_chests() replaces each one with
its common item on [min, threshold] and its rare item on
[next_up(threshold), max], so callers only ever see concrete goodies.
"""

from dataclasses import dataclass
from typing import Generic, List, Sequence, TypeVar

from ..generation.loot import (
    ChanceChest,
    CommonChestDrop,
    Goodie,
    RareChestDrop,
    RawGoodie,
)
from ..state.rng import next_up
from ..state.settings import display_luck


T = TypeVar("T")


@dataclass
class ProbabilityInterval(Generic[T]):
    """A luck range that maps to one outcome."""
    min_luck: float
    max_luck: float
    value: T

    def __post_init__(self):
        assert self.min_luck <= self.max_luck, (
            f"bad luck interval [{self.min_luck}, {self.max_luck}]"
        )

    def is_followed_by(self, other: 'ProbabilityInterval') -> bool:
        """True if ``other`` starts at the next representable luck after this one."""
        return next_up(self.max_luck) == other.min_luck

    def contains(self, luck: float) -> bool:
        return self.min_luck <= luck <= self.max_luck

    def __str__(self):
        return (
            f"luck {display_luck(self.min_luck):.4f} to "
            f"{display_luck(self.max_luck):.4f}: {self.value}"
        )


# ============================================================================
# MERGING
# ============================================================================

def append_merged(intervals: List[ProbabilityInterval[T]], interval: ProbabilityInterval[T]) -> None:
    """Append an interval, extending the last one instead when they merge."""
    if intervals:
        last = intervals[-1]
        if last.value == interval.value and last.is_followed_by(interval):
            last.max_luck = interval.max_luck
            return
    intervals.append(ProbabilityInterval(interval.min_luck, interval.max_luck, interval.value))


def merge_intervals(intervals: Sequence[ProbabilityInterval[T]]) -> List[ProbabilityInterval[T]]:
    """Collapse adjacent equal-valued intervals. Idempotent."""
    merged: List[ProbabilityInterval[T]] = []
    for interval in intervals:
        append_merged(merged, interval)
    return merged


# ============================================================================
# CHANCE CHESTS
# ============================================================================

def _find_chance_chest(loot: Sequence[RawGoodie]) -> int:
    for i, goodie in enumerate(loot):
        if isinstance(goodie, ChanceChest):
            return i
    return -1


def split_chance_chests(
    min_luck: float,
    max_luck: float,
    loot: Sequence[RawGoodie],
) -> List[ProbabilityInterval[List[Goodie]]]:
    """
    Resolve every ChanceChest in a loot list into concrete sub-intervals.

    Intervals come back sorted by luck. A chest whose threshold lies
    outside [min_luck, max_luck] only yields the branch that survives.
    """
    assert min_luck <= max_luck, f"bad luck interval [{min_luck}, {max_luck}]"

    index = _find_chance_chest(loot)
    if index < 0:
        return [ProbabilityInterval(min_luck, max_luck, list(loot))]

    chest = loot[index]
    results: List[ProbabilityInterval[List[Goodie]]] = []

    # narrowing [min_luck, max_luck] on both sides keeps us inside the range
    if chest.split_luck >= min_luck:
        common_loot = list(loot)
        common_loot[index] = CommonChestDrop(chest.common)
        results.extend(split_chance_chests(
            min_luck, min(chest.split_luck, max_luck), common_loot
        ))
    if chest.split_luck < max_luck:
        rare_loot = list(loot)
        rare_loot[index] = RareChestDrop(chest.rare)
        results.extend(split_chance_chests(
            max(next_up(chest.split_luck), min_luck), max_luck, rare_loot
        ))
    return results


def append_loot(
    intervals: List[ProbabilityInterval[List[Goodie]]],
    min_luck: float,
    max_luck: float,
    loot: Sequence[RawGoodie],
) -> None:
    """Resolve a floor's raw loot and merge the results onto a floor's list."""
    for interval in split_chance_chests(min_luck, max_luck, loot):
        append_merged(intervals, interval)

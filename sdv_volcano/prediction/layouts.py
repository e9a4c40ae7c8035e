"""
Layout Enumeration - every reachable 10-floor layout sequence by luck.

From VolcanoDungeon.GenerateLevel(), a floor's layout is picked by its own
generator (seeded from the floor seed, no discard):

    if (level == 0) layout = 0;
    else if (level == 5) layout = 31;
    else if (level == 9) layout = 30;
    else {
        List<int> valid = 1..29;
        if (level > 1 && random.NextDouble() < luckMult * 0.5 && !hadSpecialFloor)
            valid.AddRange(32..37);
        if (caldera && random.NextDouble() < 0.75)
            valid.AddRange(38..57);
        valid.Remove(previousLayout);
        layout = valid[random.Next(valid.Count)];
    }

The only luck-dependent branch is the special floor check. When the roll
lands between minLuck * 0.5 and maxLuck * 0.5 the luck interval is split at
roll / 0.5 and both halves are explored separately; every other draw is the
same for the whole interval.
"""

import logging
from typing import List, Tuple

from ..content.tiles import (
    CALDERA_LAYOUTS,
    ENTRANCE_LAYOUT,
    ENTRANCE_LEVEL,
    FINAL_LAYOUT,
    FINAL_LEVEL,
    NORMAL_LAYOUTS,
    REST_LAYOUT,
    REST_LEVEL,
    SPECIAL_LAYOUTS,
    is_special_layout,
)
from ..state.rng import DotnetRandom, next_up
from ..state.settings import GameSettings
from .intervals import ProbabilityInterval


logger = logging.getLogger("LayoutEnumerator")

# Special floor chance per unit of luck multiplier
SPECIAL_FLOOR_CHANCE = 0.5

# Caldera layout pool chance (1.6.4+)
CALDERA_FLOOR_CHANCE = 0.75

LayoutSequence = Tuple[int, ...]


def enumerate_layouts(settings: GameSettings) -> List[ProbabilityInterval[LayoutSequence]]:
    """
    Enumerate layout sequences over the settings' whole luck domain.

    Returns:
        Intervals sorted by luck, partitioning the domain, each holding a
        tuple of 10 layout ids
    """
    min_luck, max_luck = settings.luck_domain()
    sequences = _enumerate(settings, (), min_luck, max_luck)
    logger.debug(f"seed {settings.seed}: {len(sequences)} layout sequence(s)")
    return sequences


def _enumerate(
    settings: GameSettings,
    prev: LayoutSequence,
    min_luck: float,
    max_luck: float,
) -> List[ProbabilityInterval[LayoutSequence]]:
    assert min_luck <= max_luck, f"bad luck interval [{min_luck}, {max_luck}]"

    level = len(prev)
    if level == ENTRANCE_LEVEL:
        return _enumerate(settings, prev + (ENTRANCE_LAYOUT,), min_luck, max_luck)
    if level == REST_LEVEL:
        return _enumerate(settings, prev + (REST_LAYOUT,), min_luck, max_luck)
    if level == FINAL_LEVEL:
        return [ProbabilityInterval(min_luck, max_luck, prev + (FINAL_LAYOUT,))]

    rng = DotnetRandom(settings.generator_seed(level))
    valid = list(NORMAL_LAYOUTS)

    if level > 1:
        # drawn even after a special floor, only compared before one
        special_roll = rng.next_f64()
        if not any(is_special_layout(layout) for layout in prev):
            if special_roll < min_luck * SPECIAL_FLOOR_CHANCE:
                valid.extend(SPECIAL_LAYOUTS)
            elif special_roll < max_luck * SPECIAL_FLOOR_CHANCE:
                mid = special_roll / SPECIAL_FLOOR_CHANCE
                assert min_luck < mid < max_luck
                logger.debug(f"level {level}: splitting luck at {mid!r}")
                return (
                    _enumerate(settings, prev, min_luck, mid)
                    + _enumerate(settings, prev, next_up(mid), max_luck)
                )

    if settings.post_1_6_4 and settings.has_caldera:
        if rng.next_f64() < CALDERA_FLOOR_CHANCE:
            valid.extend(CALDERA_LAYOUTS)

    if prev[-1] in valid:
        valid.remove(prev[-1])

    chosen = valid[rng.next_range(len(valid))]
    return _enumerate(settings, prev + (chosen,), min_luck, max_luck)

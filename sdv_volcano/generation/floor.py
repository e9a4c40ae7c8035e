"""
Floor Simulation - one Volcano Dungeon level, draw for draw.

From VolcanoDungeon.GenerateLevel() / LoadLevel():
1. generationSeed = CreateRandomSeed(daysPlayed * levelMod, level * 5152, uniqueID / 2)
2. random = new Random(CreateRandomSeed(generationSeed))
3. random.Next()                         - unused here
4. flipX = random.Next(2) == 1           - forced false for layouts 0 and 31
5. Floor decoration: for every tile, NextDouble() < 0.3f consumes two more
   draws (tile variants we never look at)
6. Set pieces (see set_pieces.py)

Steps 3 and 5 do not affect anything predicted here, but skipping them
would desynchronize every later draw.
"""

from dataclasses import dataclass, field
from typing import List

import numpy as np

from ..content.tiles import MAP_SIZE, UNFLIPPABLE_LAYOUTS
from ..data.tables import DungeonTables
from ..state.rng import DotnetRandom
from ..state.settings import GameSettings
from .loot import RawGoodie
from .set_pieces import (
    SetPieceRegion,
    find_set_pieces,
    paint_set_pieces,
    resolve_set_pieces,
)
from .tilemap import load_tilemap


# Decoration chance (stored as float in-game)
DECORATION_CHANCE = float(np.float32(0.3))


@dataclass
class FloorResult:
    """Outcome of simulating one floor for one luck interval."""
    level: int
    layout_id: int
    flip_x: bool
    tiles: np.ndarray
    set_pieces: List[SetPieceRegion] = field(default_factory=list)
    goodies: List[RawGoodie] = field(default_factory=list)


def floor_generator(settings: GameSettings, level: int) -> DotnetRandom:
    """Fresh level generator, before any draws."""
    return DotnetRandom(settings.generator_seed(level))


def sync_floor_decoration(rng: DotnetRandom) -> None:
    """Advance through the per-tile floor decoration rolls."""
    for _x in range(MAP_SIZE):
        for _y in range(MAP_SIZE):
            if rng.next_f64() < DECORATION_CHANCE:
                rng.skip(2)


def simulate_floor(
    tables: DungeonTables,
    settings: GameSettings,
    level: int,
    layout_id: int,
    min_luck: float,
    max_luck: float,
) -> FloorResult:
    """
    Simulate one floor.

    Args:
        tables: Shared lookup tables
        settings: Game settings
        level: Floor index (0-9)
        layout_id: Layout chosen for this floor
        min_luck, max_luck: Luck interval chests are judged against

    Returns:
        FloorResult with the final tile grid and the raw goodie list
    """
    assert min_luck <= max_luck, f"bad luck interval [{min_luck}, {max_luck}]"

    rng = floor_generator(settings, level)
    rng.skip()
    flip_x = rng.next_range(2) == 1
    if layout_id in UNFLIPPABLE_LAYOUTS:
        flip_x = False

    tiles = load_tilemap(tables, layout_id, flip_x)
    sync_floor_decoration(rng)

    regions = find_set_pieces(tiles, layout_id)
    paint_set_pieces(tiles, regions)
    goodies = resolve_set_pieces(
        rng, tables, regions, settings, level, min_luck, max_luck, layout_id
    )

    return FloorResult(
        level=level,
        layout_id=layout_id,
        flip_x=flip_x,
        tiles=tiles,
        set_pieces=regions,
        goodies=goodies,
    )

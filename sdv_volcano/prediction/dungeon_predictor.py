"""
Volcano Dungeon Predictor

Predicts the whole dungeon for a save: which layout each floor uses and
what every floor drops, as functions of the player's luck.

Usage:
    from sdv_volcano.data import DungeonTables
    from sdv_volcano.prediction import DungeonPredictor
    from sdv_volcano.state import GameSettings

    tables = DungeonTables.load("data/")
    predictor = DungeonPredictor(tables, GameSettings(seed=12345, days_played=5))
    prediction = predictor.predict()
    for interval in prediction.layouts[3]:
        print(interval)

Luck bounds are luck multipliers throughout; display_luck() converts them
to the daily-luck scale shown in game.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np

from ..content.tiles import (
    FINAL_LEVEL,
    MapTile,
    NUM_LEVELS,
    is_monster_floor,
    is_mushroom_floor,
)
from ..data.tables import DungeonTables
from ..generation.floor import simulate_floor
from ..generation.loot import DragonTooth, Goodie
from ..generation.tilemap import count_tiles, render_tilemap
from ..state.settings import GameSettings, display_luck
from .intervals import ProbabilityInterval, append_loot, append_merged, merge_intervals
from .layouts import LayoutSequence, enumerate_layouts


logger = logging.getLogger("DungeonPredictor")


@dataclass
class DungeonPrediction:
    """Per-floor outcome intervals for a whole dungeon run."""
    settings: GameSettings
    sequences: List[ProbabilityInterval[LayoutSequence]]
    layouts: List[List[ProbabilityInterval[int]]]
    loot: List[List[ProbabilityInterval[List[Goodie]]]]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "settings": self.settings.to_dict(),
            "layouts": [
                [_interval_dict(i, i.value) for i in floor] for floor in self.layouts
            ],
            "loot": [
                [_interval_dict(i, [str(g) for g in i.value]) for i in floor]
                for floor in self.loot
            ],
        }


@dataclass
class FloorReport:
    """One floor simulated over a luck interval, ready for display."""
    level: int
    layout_id: int
    flip_x: bool
    tiles: np.ndarray
    loot: List[ProbabilityInterval[List[Goodie]]]
    notes: List[str] = field(default_factory=list)

    @property
    def ascii_map(self) -> str:
        return render_tilemap(self.tiles)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "level": self.level,
            "layout": self.layout_id,
            "flip_x": self.flip_x,
            "map": self.ascii_map.split("\n"),
            "notes": list(self.notes),
            "loot": [_interval_dict(i, [str(g) for g in i.value]) for i in self.loot],
        }


def _interval_dict(interval: ProbabilityInterval, value: Any) -> Dict[str, Any]:
    return {
        "min_luck": interval.min_luck,
        "max_luck": interval.max_luck,
        "value": value,
    }


def floor_notes(level: int, layout_id: int, tiles: np.ndarray) -> List[str]:
    """Player-facing notes about a floor's special features."""
    notes = []
    monster_floor = is_monster_floor(layout_id)
    has_buttons = count_tiles(tiles, MapTile.SWITCH_LOCATION) > 0

    if is_mushroom_floor(layout_id):
        notes.append("Mushroom floor: there's lots of Magma Caps and False Magma Caps here.")
    if monster_floor:
        notes.append(
            "Monster floor: there's lots of enemies and a guaranteed dwarf gate around the exit here."
        )
    if level != FINAL_LEVEL and has_buttons:
        if not monster_floor:
            notes.append("This floor has a 20% chance of generating a dwarf gate around the exit.")
        count = "3" if monster_floor else "1 to 3"
        notes.append(
            f"When a dwarf gate generates, it'll randomly choose {count} "
            f"of the possible button positions and generate buttons there."
        )
    return notes


class DungeonPredictor:
    """
    Predicts layouts and loot for every floor of one save's dungeon.

    The tables are shared read-only; the predictor caches its last
    prediction since enumeration is deterministic per settings.
    """

    def __init__(self, tables: DungeonTables, settings: GameSettings):
        self.tables = tables
        self.settings = settings
        self._prediction: Optional[DungeonPrediction] = None

    def predict(self) -> DungeonPrediction:
        """Enumerate layout sequences and resolve every floor's loot."""
        if self._prediction is not None:
            return self._prediction

        sequences = merge_intervals(enumerate_layouts(self.settings))
        layouts: List[List[ProbabilityInterval[int]]] = [[] for _ in range(NUM_LEVELS)]
        loot: List[List[ProbabilityInterval[List[Goodie]]]] = [[] for _ in range(NUM_LEVELS)]

        for sequence in sequences:
            for level, layout_id in enumerate(sequence.value):
                append_merged(
                    layouts[level],
                    ProbabilityInterval(sequence.min_luck, sequence.max_luck, layout_id),
                )
                result = simulate_floor(
                    self.tables, self.settings, level, layout_id,
                    sequence.min_luck, sequence.max_luck,
                )
                append_loot(loot[level], sequence.min_luck, sequence.max_luck, result.goodies)

        logger.info(
            f"seed {self.settings.seed}: {len(sequences)} layout sequence(s), "
            f"{sum(len(floor) for floor in loot)} loot interval(s)"
        )
        self._prediction = DungeonPrediction(self.settings, sequences, layouts, loot)
        return self._prediction

    def floor(
        self,
        level: int,
        layout_id: int,
        min_luck: Optional[float] = None,
        max_luck: Optional[float] = None,
    ) -> FloorReport:
        """
        Simulate one floor with a given layout.

        Args:
            level: Floor index (0-9)
            layout_id: Layout to simulate
            min_luck, max_luck: Luck interval (defaults to the full domain)
        """
        if not 0 <= level < NUM_LEVELS:
            raise ValueError(f"level must be in 0..{NUM_LEVELS - 1}, got {level}")
        domain_min, domain_max = self.settings.luck_domain()
        min_luck = domain_min if min_luck is None else min_luck
        max_luck = domain_max if max_luck is None else max_luck
        if min_luck > max_luck:
            raise ValueError(f"empty luck interval [{min_luck}, {max_luck}]")

        result = simulate_floor(
            self.tables, self.settings, level, layout_id, min_luck, max_luck
        )
        loot: List[ProbabilityInterval[List[Goodie]]] = []
        append_loot(loot, min_luck, max_luck, result.goodies)

        return FloorReport(
            level=level,
            layout_id=layout_id,
            flip_x=result.flip_x,
            tiles=result.tiles,
            loot=loot,
            notes=floor_notes(level, layout_id, result.tiles),
        )

    def summary(self) -> str:
        """Human-readable prediction, one section per floor."""
        prediction = self.predict()
        lines = [f"day: {self.settings.calendar_label()}", "", "Layouts:"]

        for level, floor_layouts in enumerate(prediction.layouts):
            if len(floor_layouts) == 1:
                lines.append(f"  floor {level}: {_layout_label(floor_layouts[0].value)}")
                continue
            options = " / ".join(
                f"{_layout_label(i.value)} (luck {display_luck(i.min_luck):.4f} "
                f"to {display_luck(i.max_luck):.4f})"
                for i in floor_layouts
            )
            lines.append(f"  floor {level}: {options}")

        lines.extend(["", "Loot:"])
        for level, floor_loot in enumerate(prediction.loot):
            if all(not i.value for i in floor_loot):
                continue
            lines.append(f"  floor {level}:")
            for interval in floor_loot:
                indent = "    "
                if len(floor_loot) > 1:
                    lines.append(
                        f"    luck {display_luck(interval.min_luck):.4f} to "
                        f"{display_luck(interval.max_luck):.4f}:"
                    )
                    indent = "      "
                lines.extend(indent + line for line in _loot_lines(interval.value))
        return "\n".join(lines)


def _layout_label(layout_id: int) -> str:
    if is_mushroom_floor(layout_id):
        return f"{layout_id} (mushroom)"
    if is_monster_floor(layout_id):
        return f"{layout_id} (monsters)"
    return str(layout_id)


def _loot_lines(loot: List[Goodie]) -> List[str]:
    if not loot:
        return ["[nothing]"]
    lines = []
    teeth = sum(1 for goodie in loot if isinstance(goodie, DragonTooth))
    if teeth > 1:
        lines.append(f"{DragonTooth()} ({teeth})")
    elif teeth:
        lines.append(str(DragonTooth()))
    lines.extend(str(goodie) for goodie in loot if not isinstance(goodie, DragonTooth))
    return lines


def predict_dungeon(tables: DungeonTables, settings: GameSettings) -> DungeonPrediction:
    """Convenience wrapper: full prediction for one save."""
    return DungeonPredictor(tables, settings).predict()


def simulate_floor_report(
    tables: DungeonTables,
    settings: GameSettings,
    level: int,
    layout_id: int,
    min_luck: Optional[float] = None,
    max_luck: Optional[float] = None,
) -> FloorReport:
    """Convenience wrapper: one floor report."""
    return DungeonPredictor(tables, settings).floor(level, layout_id, min_luck, max_luck)

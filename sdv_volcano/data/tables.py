"""
Precomputed dungeon lookup tables.

The build step (outside this package) converts the game's Layouts.png and
Volcano_SetPieces_<size>.tmx files into three flat tables:

1. layouts.bin - concatenated 64x64 layouts, one byte per tile (MapTile),
   layout N at byte offset N * 4096. Trailing all-wall layouts are trimmed.
2. Set piece sheet sizes - size class -> (rows, cols) of that size's sheet.
3. Set piece events - (size, row, col) -> ordered RNG event markers found on
   the sheet's "Paths" layer for that cell.

Tables 2 and 3 are stored together in set_pieces.json:

    {
        "sizes": {"3": [rows, cols], "4": [...], ...},
        "events": [[size, row, col, ["Rng", "Tooth", "Chest", ...]], ...]
    }

A DungeonTables instance is loaded once and passed to every component.
Malformed data raises TableDataError: a table that disagrees with the
generator would produce silently wrong predictions.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np

from ..content.tiles import (
    LAYOUT_BYTES,
    MAP_SIZE,
    MapTile,
    SET_PIECE_SIZES,
    SetPieceFeature,
)


logger = logging.getLogger("DungeonTables")

LAYOUTS_FILE = "layouts.bin"
SET_PIECES_FILE = "set_pieces.json"

# Environment variable naming the default data directory
DATA_DIR_ENV = "SDV_VOLCANO_DATA"

EventKey = Tuple[int, int, int]


class TableDataError(ValueError):
    """Precomputed tables are inconsistent with the generator's assumptions."""


# ============================================================================
# TABLES
# ============================================================================

@dataclass(frozen=True, eq=False)
class DungeonTables:
    """
    Read-only lookup tables shared by every generation component.

    Attributes:
        layouts: (num_layouts, 64, 64) uint8 array, indexed [layout, y, x]
        piece_sizes: size class -> (num_rows, num_cols) of its event sheet
        piece_events: (size, row, col) -> event markers, in sheet scan order
    """
    layouts: np.ndarray
    piece_sizes: Mapping[int, Tuple[int, int]] = field(default_factory=dict)
    piece_events: Mapping[EventKey, Tuple[SetPieceFeature, ...]] = field(default_factory=dict)

    def __post_init__(self):
        layouts = np.asarray(self.layouts, dtype=np.uint8)
        if layouts.ndim != 3 or layouts.shape[1:] != (MAP_SIZE, MAP_SIZE):
            raise TableDataError(f"layouts must have shape (n, 64, 64), got {layouts.shape}")
        if layouts.size and int(layouts.max()) > max(MapTile):
            bad = int(layouts.max())
            raise TableDataError(f"unrecognized tile id {bad} in layout table")
        layouts = layouts.copy()
        layouts.setflags(write=False)

        for size in SET_PIECE_SIZES:
            if size not in self.piece_sizes:
                raise TableDataError(f"set piece size table has no entry for size {size}")

        # frozen dataclass: assign through object.__setattr__
        object.__setattr__(self, "layouts", layouts)
        object.__setattr__(self, "piece_sizes", MappingProxyType(
            {int(k): (int(v[0]), int(v[1])) for k, v in self.piece_sizes.items()}
        ))
        object.__setattr__(self, "piece_events", MappingProxyType(
            {tuple(k): tuple(v) for k, v in self.piece_events.items()}
        ))

    @property
    def num_layouts(self) -> int:
        return self.layouts.shape[0]

    def layout(self, layout_id: int) -> np.ndarray:
        """Read-only 64x64 view of one layout."""
        if not 0 <= layout_id < self.num_layouts:
            raise TableDataError(
                f"layout {layout_id} not in table ({self.num_layouts} layouts)"
            )
        return self.layouts[layout_id]

    def get_piece_size(self, set_size: int) -> Tuple[int, int]:
        """(num_rows, num_cols) of the event sheet for a size class."""
        try:
            return self.piece_sizes[set_size]
        except KeyError:
            raise TableDataError(f"invalid set piece size {set_size}") from None

    def get_piece_events(self, set_size: int, row: int, col: int) -> Tuple[SetPieceFeature, ...]:
        """Events for one sheet cell. Cells with no markers are simply absent."""
        return self.piece_events.get((set_size, row, col), ())

    # ========================================================================
    # CONSTRUCTION / IO
    # ========================================================================

    @classmethod
    def from_bytes(
        cls,
        layout_bytes: bytes,
        piece_sizes: Mapping[int, Tuple[int, int]],
        piece_events: Mapping[EventKey, Sequence[SetPieceFeature]],
    ) -> 'DungeonTables':
        """Build tables from a raw layouts.bin blob."""
        if len(layout_bytes) % LAYOUT_BYTES != 0:
            raise TableDataError(
                f"layout blob is {len(layout_bytes)} bytes, not a multiple of {LAYOUT_BYTES}"
            )
        flat = np.frombuffer(layout_bytes, dtype=np.uint8)
        return cls(
            layouts=flat.reshape(-1, MAP_SIZE, MAP_SIZE),
            piece_sizes=piece_sizes,
            piece_events={k: tuple(v) for k, v in piece_events.items()},
        )

    @classmethod
    def load(cls, data_dir: str) -> 'DungeonTables':
        """Load layouts.bin and set_pieces.json from a data directory."""
        layouts_path = os.path.join(data_dir, LAYOUTS_FILE)
        pieces_path = os.path.join(data_dir, SET_PIECES_FILE)
        for path in (layouts_path, pieces_path):
            if not os.path.exists(path):
                raise FileNotFoundError(f"Table file not found: {path}")

        with open(layouts_path, "rb") as f:
            layout_bytes = f.read()
        with open(pieces_path, "r", encoding="utf-8") as f:
            pieces = json.load(f)

        piece_sizes, piece_events = _parse_set_pieces(pieces)
        tables = cls.from_bytes(layout_bytes, piece_sizes, piece_events)
        logger.debug(
            f"Loaded {tables.num_layouts} layouts and {len(tables.piece_events)} "
            f"set piece cells from {data_dir}"
        )
        return tables

    def save(self, data_dir: str) -> None:
        """Write layouts.bin and set_pieces.json to a data directory."""
        os.makedirs(data_dir, exist_ok=True)
        with open(os.path.join(data_dir, LAYOUTS_FILE), "wb") as f:
            f.write(self.layouts.tobytes())
        pieces = {
            "sizes": {str(size): list(dims) for size, dims in sorted(self.piece_sizes.items())},
            "events": [
                [size, row, col, [ev.value for ev in events]]
                for (size, row, col), events in sorted(self.piece_events.items())
            ],
        }
        with open(os.path.join(data_dir, SET_PIECES_FILE), "w", encoding="utf-8") as f:
            json.dump(pieces, f, indent=2)


def _parse_feature(tag: str) -> SetPieceFeature:
    try:
        return SetPieceFeature(tag)
    except ValueError:
        raise TableDataError(f"unknown set piece event tag: {tag!r}") from None


def _parse_set_pieces(data: dict) -> Tuple[Dict[int, Tuple[int, int]], Dict[EventKey, Tuple[SetPieceFeature, ...]]]:
    """Parse the set_pieces.json document."""
    if "sizes" not in data or "events" not in data:
        raise TableDataError("set_pieces.json needs 'sizes' and 'events'")
    sizes = {int(size): (int(dims[0]), int(dims[1])) for size, dims in data["sizes"].items()}
    events: Dict[EventKey, Tuple[SetPieceFeature, ...]] = {}
    for entry in data["events"]:
        size, row, col, tags = entry
        events[(int(size), int(row), int(col))] = tuple(_parse_feature(t) for t in tags)
    return sizes, events


def default_data_dir() -> Optional[str]:
    """Data directory from the SDV_VOLCANO_DATA environment variable, if set."""
    return os.environ.get(DATA_DIR_ENV)


# ============================================================================
# EVENT SHEET COMPILATION
# ============================================================================

# Path-layer tile ids (Volcano_SetPieces_<size>.tmx, "Paths" layer)
GATE_TILES = range(234, 240)       # possible dwarf gate location, random
GATE_ZERO_SWITCH_TILE = 250        # switch for gate #0 never appears on set pieces
SWITCH_TILES = range(251, 256)     # possible switch location - no RNG
CHEST_TILE = 332
BARREL_TILE = 334
TOOTH_TILE = 335
SILENT_TILES = (330, 331, 333, 346)  # monster spawn, lava, wall, spiker spawn


def classify_path_tile(tile_id: int) -> Optional[SetPieceFeature]:
    """Map a Paths-layer tile id to the RNG event it causes (None = no draw)."""
    if tile_id in GATE_TILES:
        return SetPieceFeature.RNG
    if tile_id == GATE_ZERO_SWITCH_TILE:
        raise TableDataError("set piece contained switch for gate #0")
    if tile_id in SWITCH_TILES or tile_id in SILENT_TILES:
        return None
    if tile_id == CHEST_TILE:
        return SetPieceFeature.CHEST
    if tile_id == BARREL_TILE:
        return SetPieceFeature.RNG
    if tile_id == TOOTH_TILE:
        return SetPieceFeature.TOOTH
    raise TableDataError(f"unknown tile on path layer: {tile_id}")


def build_event_table(
    paths_layer: Sequence[Sequence[Optional[int]]],
    set_size: int,
) -> Tuple[Tuple[int, int], Dict[EventKey, Tuple[SetPieceFeature, ...]]]:
    """
    Compile one size class's event sheet.

    Args:
        paths_layer: Paths layer as rows of tile ids ([y][x]); None or 0 is empty
        set_size: Size class the sheet belongs to

    Returns:
        ((num_rows, num_cols), {(size, row, col): events})

    Each cell is scanned column by column with sety running one row past
    the piece (0..=set_size). That extra row belongs to the next cell down,
    but the game reads it too, so the events it finds are kept.
    """
    height = len(paths_layer)
    width = len(paths_layer[0]) if height else 0
    num_cols = width // set_size
    num_rows = height // set_size

    events: Dict[EventKey, Tuple[SetPieceFeature, ...]] = {}
    for col in range(num_cols):
        for row in range(num_rows):
            found: List[SetPieceFeature] = []
            for setx in range(set_size):
                for sety in range(set_size + 1):
                    src_x = col * set_size + setx
                    src_y = row * set_size + sety
                    if src_y >= height or src_x >= width:
                        continue
                    tile_id = paths_layer[src_y][src_x]
                    if not tile_id:
                        continue
                    feature = classify_path_tile(tile_id)
                    if feature is not None:
                        found.append(feature)
            if found:
                events[(set_size, row, col)] = tuple(found)
    return (num_rows, num_cols), events


__all__ = [
    "DungeonTables",
    "TableDataError",
    "build_event_table",
    "classify_path_tile",
    "default_data_dir",
    "DATA_DIR_ENV",
]

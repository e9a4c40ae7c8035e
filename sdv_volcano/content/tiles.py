"""
Volcano Dungeon tile kinds and layout identifiers.

Layouts are 64x64 grids painted in the game's Layouts.png. The build step
reduces each pixel to one of eight tile kinds; this module names them and
the layout ids that have special meaning to the generator.
"""

from enum import Enum, IntEnum


class MapTile(IntEnum):
    """Tile kinds in a decoded layout (byte values in layouts.bin)."""
    FLOOR = 0
    LAVA = 1
    WALL = 2
    ENTER = 3
    EXIT = 4
    SET_PIECE = 5
    SWITCH_LOCATION = 6
    MONSTER_SPAWN = 7


class SetPieceFeature(Enum):
    """Event markers on a set-piece sheet that consume RNG."""
    RNG = "Rng"      # gate location or barrel - one draw, result unused
    TOOTH = "Tooth"  # 50% dragon tooth
    CHEST = "Chest"  # luck-dependent chest


# Map dimensions
MAP_SIZE = 64
LAYOUT_BYTES = MAP_SIZE * MAP_SIZE

# Set piece size classes, largest first
SET_PIECE_SIZES = (32, 16, 8, 4, 3)

# Number of floors in the dungeon
NUM_LEVELS = 10

# Fixed layouts
ENTRANCE_LAYOUT = 0
REST_LAYOUT = 31
FINAL_LAYOUT = 30

# Fixed-layout floor indices
ENTRANCE_LEVEL = 0
REST_LEVEL = 5
FINAL_LEVEL = 9

# Layout id pools
NORMAL_LAYOUTS = tuple(range(1, 30))
SPECIAL_LAYOUTS = tuple(range(32, 38))
CALDERA_LAYOUTS = tuple(range(38, 58))

# Layouts that never flip horizontally
UNFLIPPABLE_LAYOUTS = (ENTRANCE_LAYOUT, REST_LAYOUT)

TILE_SYMBOLS = {
    MapTile.FLOOR: " ",
    MapTile.LAVA: "~",
    MapTile.WALL: "#",
    MapTile.ENTER: "I",
    MapTile.EXIT: "O",
    MapTile.SET_PIECE: "X",
    MapTile.SWITCH_LOCATION: "?",
    MapTile.MONSTER_SPAWN: "M",
}


def is_special_layout(layout_id: int) -> bool:
    """Any layout from 32 up; once one appears, no further special floors roll."""
    return layout_id >= SPECIAL_LAYOUTS[0]


def is_mushroom_floor(layout_id: int) -> bool:
    return 32 <= layout_id <= 34


def is_monster_floor(layout_id: int) -> bool:
    return 35 <= layout_id <= 37

"""
Volcano Dungeon chest contents.

Chest item tables from VolcanoDungeon.PopulateChest (common) and the rare
branch of the same method. Index 6 of each table is a weapon slot that
rolls a further nextRange(3) among three variants; the golden coconut
entries are gated on the player having cracked one.
"""

from enum import Enum


class CommonChest(Enum):
    """Common chest drops: (display label, icon id)."""
    CINDER_SHARDS = ("Cinder Shard (3)", "cinder_shard")
    GOLDEN_COCONUT = ("Golden Coconut", "golden_coconut")
    TARO_TUBER = ("Taro Tuber (8)", "taro_tuber")
    PINEAPPLE_SEEDS = ("Pineapple Seeds (5)", "pineapple_seeds")
    PROTECTION_RING = ("Protection Ring", "protection_ring")
    SOUL_SAPPER_RING = ("Soul Sapper Ring", "soul_sapper_ring")
    DWARF_SWORD = ("Dwarf Sword", "dwarf_sword")
    DWARF_HAMMER = ("Dwarf Hammer", "dwarf_hammer")
    DWARF_DAGGER = ("Dwarf Dagger", "dwarf_dagger")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def icon(self) -> str:
        return self.value[1]

    def __str__(self):
        return self.label


class RareChest(Enum):
    """Rare chest drops: (display label, icon id)."""
    CINDER_SHARDS = ("Cinder Shard (10)", "cinder_shard")
    MERMAID_BOOTS = ("Mermaid Boots", "mermaid_boots")
    DRAGONSCALE_BOOTS = ("Dragonscale Boots", "dragonscale_boots")
    GOLDEN_COCONUTS = ("Golden Coconut (3)", "golden_coconut")
    PHOENIX_RING = ("Phoenix Ring", "phoenix_ring")
    HOT_JAVA_RING = ("Hot Java Ring", "hot_java_ring")
    DRAGONTOOTH_CUTLASS = ("Dragontooth Cutlass", "dragontooth_cutlass")
    DRAGONTOOTH_CLUB = ("Dragontooth Club", "dragontooth_club")
    DRAGONTOOTH_SHIV = ("Dragontooth Shiv", "dragontooth_shiv")
    DELUXE_PIRATE_HAT = ("Deluxe Pirate Hat", "deluxe_pirate_hat")
    OSTRICH_EGG = ("Ostrich Egg", "ostrich_egg")

    @property
    def label(self) -> str:
        return self.value[0]

    @property
    def icon(self) -> str:
        return self.value[1]

    def __str__(self):
        return self.label


# Roll tables indexed by nextRange(n); a tuple entry fans out via nextRange(3)
COMMON_TABLE = (
    CommonChest.CINDER_SHARDS,
    CommonChest.GOLDEN_COCONUT,
    CommonChest.TARO_TUBER,
    CommonChest.PINEAPPLE_SEEDS,
    CommonChest.PROTECTION_RING,
    CommonChest.SOUL_SAPPER_RING,
    (CommonChest.DWARF_SWORD, CommonChest.DWARF_HAMMER, CommonChest.DWARF_DAGGER),
)

RARE_TABLE = (
    RareChest.CINDER_SHARDS,
    RareChest.MERMAID_BOOTS,
    RareChest.DRAGONSCALE_BOOTS,
    RareChest.GOLDEN_COCONUTS,
    RareChest.PHOENIX_RING,
    RareChest.HOT_JAVA_RING,
    (RareChest.DRAGONTOOTH_CUTLASS, RareChest.DRAGONTOOTH_CLUB, RareChest.DRAGONTOOTH_SHIV),
    RareChest.DELUXE_PIRATE_HAT,
    RareChest.OSTRICH_EGG,
)

# Table index that needs a cracked golden coconut
COMMON_COCONUT_INDEX = 1
RARE_COCONUT_INDEX = 3

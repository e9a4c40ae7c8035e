"""
Data module - precomputed layout and set-piece tables.
"""

from .tables import (
    DungeonTables,
    TableDataError,
    build_event_table,
    classify_path_tile,
    default_data_dir,
    DATA_DIR_ENV,
)

__all__ = [
    "DungeonTables", "TableDataError", "build_event_table", "classify_path_tile",
    "default_data_dir", "DATA_DIR_ENV",
]

"""Storage layer: one memory-mapped binary file per stock."""

from cotalake.storage.history_file import StockHistory
from cotalake.storage.operations import (
    database_exists,
    init_database,
    list_stocks,
    read_history,
    restore_backup,
    write_history,
)
from cotalake.storage.paths import (
    get_backup_path,
    get_database_path,
    get_stock_path,
    get_temp_path,
)
from cotalake.storage.revision import (
    check_revision_marker,
    revision_marker_content,
    write_revision_marker,
)

__all__ = [
    # History files
    "StockHistory",
    # Paths
    "get_database_path",
    "get_stock_path",
    "get_backup_path",
    "get_temp_path",
    # Revision marker
    "check_revision_marker",
    "revision_marker_content",
    "write_revision_marker",
    # Operations
    "read_history",
    "write_history",
    "restore_backup",
    "list_stocks",
    "database_exists",
    "init_database",
]

"""Stock file read/write operations for local filesystem storage.

Every stock lives in exactly one file, rewritten wholesale on each update.
Writes go to a temporary file first, then replace the official file
through a backup rename so that at any instant the old, the backup or the
new file is present under a name readers look for.

There is no locking: concurrent imports touching the same stock race on
the temporary file and must be serialized by the caller.
"""

import mmap
import os
import shutil
from pathlib import Path

from cotalake.errors import StorageError
from cotalake.logging_config import get_logger
from cotalake.models import StockID
from cotalake.storage.history_file import StockHistory
from cotalake.storage.paths import (
    get_backup_path,
    get_database_path,
    get_stock_path,
    get_temp_path,
)
from cotalake.storage.revision import check_revision_marker, write_revision_marker

logger = get_logger(__name__)


def _map_stock_file(stock_id: StockID, path: str) -> StockHistory | None:
    try:
        with open(path, "rb") as fh:
            if os.fstat(fh.fileno()).st_size == 0:
                raise StorageError("stock file is empty", path)
            mapping = mmap.mmap(fh.fileno(), 0, access=mmap.ACCESS_READ)
    except FileNotFoundError:
        return None
    except StorageError:
        raise
    except OSError as e:
        raise StorageError(f"cannot map stock file: {e}", path) from e
    return StockHistory.from_mapping(stock_id, mapping, path)


def read_history(stock_id: StockID, *, check_revision: bool = True) -> StockHistory | None:
    """
    Memory-map the history of a stock.

    A stock without a file has no history yet; that is not an error. When
    only the backup file exists (an interrupted write), the backup is read.

    Args:
        stock_id: Stock identification
        check_revision: Verify the revision marker first; callers that already
            did so for this invocation pass False

    Returns:
        Read-only history view (close it when done), or None if the stock
        is not in the database

    Raises:
        StaleDatabaseError: If the database revision marker does not match
        StorageError: If the stock file exists but cannot be mapped

    Example:
        >>> with read_history(StockID("PETR4")) as history:
        ...     len(history)
        5012
    """
    if check_revision:
        check_revision_marker()

    path = get_stock_path(stock_id)
    history = _map_stock_file(stock_id, path)
    if history is not None:
        logger.debug(f"📖 Mapped {len(history)} quotes from {path}")
        return history

    backup_path = get_backup_path(stock_id)
    history = _map_stock_file(stock_id, backup_path)
    if history is not None:
        logger.warning(
            f"⚠️  Stock {stock_id} has no official file, reading backup {backup_path}"
        )
        return history

    logger.debug(f"ℹ️  Stock {stock_id} does not exist in database")
    return None


def _remove_if_present(path: str, what: str) -> None:
    try:
        Path(path).unlink(missing_ok=True)
    except OSError as e:
        raise StorageError(f"cannot erase {what}: {e}", path) from e


def _rename(source: str, target: str, what: str, missing_ok: bool = False) -> None:
    try:
        os.rename(source, target)
    except FileNotFoundError as e:
        if missing_ok:
            return
        raise StorageError(f"cannot move {what} to {target}: {e}", source) from e
    except OSError as e:
        raise StorageError(f"cannot move {what} to {target}: {e}", source) from e


def restore_backup(stock_id: StockID) -> bool:
    """
    Put a stock's backup back in place after an interrupted write.

    Args:
        stock_id: Stock identification

    Returns:
        True if a backup was restored, False if nothing needed restoring
    """
    path = get_stock_path(stock_id)
    backup_path = get_backup_path(stock_id)
    if os.path.lexists(path) or not os.path.lexists(backup_path):
        return False
    _rename(backup_path, path, "stock backup file")
    logger.warning(f"⚠️  Restored stock {stock_id} from backup file {backup_path}")
    return True


def write_history(history: StockHistory, *, check_revision: bool = True) -> None:
    """
    Atomically replace the history file of a stock.

    Sequence: write temporary file, drop stale backup, move official file to
    backup, promote temporary file, drop backup.

    Args:
        history: History to persist (a freshly built write buffer)
        check_revision: Verify the revision marker first; callers that already
            did so for this invocation pass False

    Raises:
        StaleDatabaseError: If the database revision marker does not match
        StorageError: If any file operation fails
    """
    if check_revision:
        check_revision_marker()

    stock_id = history.stock_id
    path = get_stock_path(stock_id)
    backup_path = get_backup_path(stock_id)
    temp_path = get_temp_path()

    restore_backup(stock_id)

    payload = history.to_bytes()
    try:
        with open(temp_path, "wb") as fh:
            fh.write(payload)
            fh.flush()
            os.fsync(fh.fileno())
    except OSError as e:
        raise StorageError(f"cannot write temporary stock file: {e}", temp_path) from e

    _remove_if_present(backup_path, "stock backup file")
    _rename(path, backup_path, "stock file", missing_ok=True)
    _rename(temp_path, path, f"temporary file of stock {stock_id}")
    _remove_if_present(backup_path, "stock backup file")

    logger.debug(f"💾 Wrote {len(history)} quotes to {path}")


def list_stocks() -> list[StockID]:
    """
    List every stock stored in the database, sorted by id.

    Hidden files (revision marker, backups, temporary file) and anything
    that is not a regular file are skipped.

    Returns:
        Stock identifiers in ascending order

    Raises:
        StaleDatabaseError: If the database revision marker does not match
        StorageError: If the database directory cannot be scanned
    """
    check_revision_marker()

    database_path = get_database_path()
    try:
        with os.scandir(database_path) as entries:
            names = sorted(
                entry.name
                for entry in entries
                if not entry.name.startswith(".") and entry.is_file(follow_symlinks=False)
            )
    except OSError as e:
        raise StorageError(f"cannot scan database directory: {e}", database_path) from e

    stocks = []
    for name in names:
        try:
            stocks.append(StockID(name))
        except ValueError as e:
            logger.warning(f"⚠️  Skipping unexpected file {name!r} in database: {e}")
    return stocks


def database_exists() -> bool:
    """Check if the database directory exists."""
    return os.path.lexists(get_database_path())


def init_database() -> None:
    """
    Wipe the database directory and stamp a fresh revision marker.

    Creates the directory if it does not exist. Every file and directory
    inside it is removed.

    Raises:
        StorageError: If the directory cannot be cleaned or created
    """
    database_path = Path(get_database_path())
    try:
        if database_path.is_dir():
            for child in database_path.iterdir():
                if child.is_dir() and not child.is_symlink():
                    shutil.rmtree(child)
                else:
                    child.unlink()
        database_path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise StorageError(f"cannot clean database directory: {e}", str(database_path)) from e

    write_revision_marker()
    logger.info(f"✨ Database path {database_path} cleaned and initialized")

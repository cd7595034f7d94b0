"""Path management for stock files on local filesystem."""

from pathlib import Path

from cotalake.config import settings
from cotalake.models import StockID


def get_database_path() -> str:
    """
    Returns local filesystem path of the database directory.

    Example:
        >>> get_database_path()
        "/home/me/data/bovespa"
    """
    return settings.database_path


def get_stock_path(stock_id: StockID) -> str:
    """
    Returns local filesystem path of the official history file of a stock.

    Args:
        stock_id: Stock identification

    Returns:
        Full local path of the stock file

    Example:
        >>> get_stock_path(StockID("PETR4"))
        "/home/me/data/bovespa/PETR4"
    """
    return str(Path(settings.database_path) / stock_id.id)


def get_backup_path(stock_id: StockID) -> str:
    """
    Returns local filesystem path of the (hidden) backup file of a stock.

    Example:
        >>> get_backup_path(StockID("PETR4"))
        "/home/me/data/bovespa/.PETR4"
    """
    return str(Path(settings.database_path) / f".{stock_id.id}")


def get_temp_path() -> str:
    """Returns local filesystem path of the scratch file new histories are written to."""
    return settings.temp_file_path


def get_revision_marker_path() -> str:
    """Returns local filesystem path of the database revision marker."""
    return settings.revision_marker_path

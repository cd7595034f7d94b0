"""Trade history of a stock of the cotalake bovespa database. 📈"""

import argparse
import sys
from typing import TextIO

from cotalake.commands._runner import run
from cotalake.config import settings
from cotalake.errors import UnknownStockError
from cotalake.history import history_to_csv
from cotalake.logging_config import get_logger, setup_logging
from cotalake.models import StockID
from cotalake.storage import read_history

setup_logging(settings.log_level)
logger = get_logger(__name__)


def main(stock: str, all_quotes: bool = False, out: TextIO | None = None) -> None:
    """Export the trade history of a stock as CSV.

    Args:
        stock: Stock identifier.
        all_quotes: Export every quote instead of starting at the most
            recent inplit / split.
        out: Destination stream (default: standard output).
    """
    try:
        stock_id = StockID(stock)
    except ValueError as e:
        raise UnknownStockError(f"invalid stock identification: {e}") from e

    history = read_history(stock_id)
    if history is None:
        raise UnknownStockError(f"stock '{stock_id}' does not exist in database")
    with history:
        (out or sys.stdout).write(history_to_csv(history, all_quotes=all_quotes))


def cli() -> None:  # pragma: no cover
    """CLI entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="Trade history of a stock of the cotalake bovespa database, as CSV.",
        epilog=(
            "Exported fields are: trading date, stock specification, price factor, "
            "opening price, closing price, minimum price, maximum price, average price, "
            "total trades, total stocks, total volume. Format of date fields is "
            "YYYY-MM-DD. Price and volume fields are in units of 1/100 of the stock "
            "currency."
        ),
    )
    parser.add_argument("stock", metavar="STOCK", help="Stock identification (e.g. PETR4)")
    parser.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Show all trades (instead of starting at the most recent inplit / split)",
    )
    args = parser.parse_args()

    run(lambda: main(args.stock, all_quotes=args.all))


if __name__ == "__main__":  # pragma: no cover
    cli()

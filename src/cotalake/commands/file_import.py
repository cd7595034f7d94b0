"""Import a Bovespa file into the stock history database. 📥"""

import argparse
import io
import sys

from cotalake.commands._runner import run
from cotalake.config import settings
from cotalake.history import import_bovespa_file
from cotalake.logging_config import get_logger, setup_logging

setup_logging(settings.log_level)
logger = get_logger(__name__)

BOVESPA_ENCODING = "latin-1"


def main(source: str | None = None, show_progress: bool | None = None) -> None:
    """Import a Bovespa file (HIST or BDIN dialect).

    History data previously stored in the database is overwritten on
    trading date collision.

    Args:
        source: Path of the file, or None to read standard input.
        show_progress: Force the progress bar on or off.
    """
    if source is None:
        stream = io.TextIOWrapper(sys.stdin.buffer, encoding=BOVESPA_ENCODING, newline="")
        summary = import_bovespa_file(stream, show_progress=show_progress)
    else:
        with open(source, encoding=BOVESPA_ENCODING, newline="") as stream:
            summary = import_bovespa_file(stream, show_progress=show_progress)

    logger.info(
        f"🎉 Import complete: {summary.quote_count} quotes "
        f"({summary.ignored_count} registers ignored) into {summary.stock_count} stocks"
    )
    if summary.xplit_stocks:
        logger.info(
            "✂️  Split position changed for: "
            + ", ".join(stock.id for stock in summary.xplit_stocks)
        )


def cli() -> None:  # pragma: no cover
    """CLI entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="Import a Bovespa file into the cotalake bovespa database.",
        epilog=(
            "The bovespa file is read from standard input unless FILE is given. "
            "History stock data previously existent in the database is "
            "overwritten on data timestamp collision."
        ),
    )
    parser.add_argument("file", nargs="?", help="Bovespa file (default: standard input)")
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Never show the progress bar",
    )
    args = parser.parse_args()

    run(lambda: main(args.file, show_progress=False if args.no_progress else None))


if __name__ == "__main__":  # pragma: no cover
    cli()

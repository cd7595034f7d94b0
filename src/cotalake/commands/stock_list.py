"""List of stocks in the cotalake bovespa database. 📋"""

import argparse
import sys
from typing import TextIO

from cotalake.commands._runner import run
from cotalake.config import settings
from cotalake.logging_config import get_logger, setup_logging
from cotalake.storage import list_stocks

setup_logging(settings.log_level)
logger = get_logger(__name__)


def main(out: TextIO | None = None) -> None:
    """Write every stock identifier, one per line, in ascending order."""
    out = out or sys.stdout
    for stock_id in list_stocks():
        out.write(f"{stock_id}\n")


def cli() -> None:  # pragma: no cover
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="List of stocks in the cotalake bovespa database, one stock per line."
    )
    parser.parse_args()
    run(main)


if __name__ == "__main__":  # pragma: no cover
    cli()

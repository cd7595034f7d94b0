"""Cleanup and initialization of the cotalake bovespa database. 🧹"""

import argparse
import sys

from rich.prompt import Prompt

from cotalake.commands._runner import run
from cotalake.config import settings
from cotalake.errors import InitializationAborted
from cotalake.logging_config import get_logger, setup_logging
from cotalake.storage import database_exists, get_database_path, init_database

setup_logging(settings.log_level)
logger = get_logger(__name__)


def confirm_wipe() -> bool:
    """Ask the operator to confirm erasing an existing database."""
    if not sys.stdin.isatty():
        raise InitializationAborted("cannot request user confirmation (not a tty)")
    answer = Prompt.ask(
        "Initialization will erase current database files, are you sure?",
        choices=["yes", "no"],
        default="no",
    )
    return answer == "yes"


def main(interactive: bool = True) -> None:
    """Wipe any existing database files and initialize the database path.

    Args:
        interactive: Prompt for confirmation before erasing an existing
            database directory.
    """
    if interactive and database_exists():
        logger.warning(f"⚠️  Existent database directory detected: {get_database_path()}")
        if not confirm_wipe():
            raise InitializationAborted("user gave up")

    logger.info("🧹 Initializing an empty database...")
    init_database()


def cli() -> None:  # pragma: no cover
    """CLI entry point with argument parsing."""
    parser = argparse.ArgumentParser(
        description="Cleanup and initialization of the cotalake bovespa database.",
        epilog=(
            "This routine wipes out any previously existent database files, "
            "and initializes the database working path."
        ),
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-i",
        "--interactive",
        dest="interactive",
        action="store_true",
        default=True,
        help="Prompt for confirmation prior to erasing things (default)",
    )
    mode.add_argument(
        "-f",
        "--force",
        dest="interactive",
        action="store_false",
        help="Erase previously existent database files without confirmation",
    )
    args = parser.parse_args()

    run(lambda: main(interactive=args.interactive))


if __name__ == "__main__":  # pragma: no cover
    cli()

"""Build-time information about the cotalake bovespa library. ℹ️"""

import argparse
import platform
import sys
from typing import TextIO

import numpy as np
import polars as pl

from cotalake import __version__
from cotalake.commands._runner import run
from cotalake.config import settings
from cotalake.logging_config import setup_logging
from cotalake.schemas import DAILY_QUOTE_DTYPE, layout_signature
from cotalake.storage import get_database_path, revision_marker_content

setup_logging(settings.log_level)


def library_info() -> dict[str, str]:
    """Static information about this library and its on-disk layout."""
    return {
        "library name": "cotalake",
        "library version": __version__,
        "python version": f"{platform.python_implementation()} {platform.python_version()}",
        "numpy version": np.__version__,
        "polars version": pl.__version__,
        "layout signature": layout_signature(),
        "quote record size": str(DAILY_QUOTE_DTYPE.itemsize),
        "revision marker": revision_marker_content().strip().replace("\n", " | "),
        "database path": get_database_path(),
        "log level": settings.log_level,
    }


def main(out: TextIO | None = None) -> None:
    """Write ``name = value`` lines of library information."""
    out = out or sys.stdout
    for name, value in library_info().items():
        out.write(f"{name} = {value}\n")


def cli() -> None:  # pragma: no cover
    """CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Build-time information about the cotalake bovespa library."
    )
    parser.parse_args()
    run(main)


if __name__ == "__main__":  # pragma: no cover
    cli()

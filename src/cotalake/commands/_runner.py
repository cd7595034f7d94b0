"""Shared failure handling for command-line entry points."""

import sys
from typing import Callable

from cotalake.errors import CotalakeError, StaleDatabaseError
from cotalake.logging_config import get_logger

logger = get_logger(__name__)


def run(main: Callable[[], None]) -> None:  # pragma: no cover
    """Run a command, turning CotaLake errors into one diagnostic and exit status 1."""
    try:
        main()
    except StaleDatabaseError as e:
        logger.critical(f"🏷️  {e}")
        sys.exit(1)
    except CotalakeError as e:
        logger.error(f"❌ {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.warning("⚠️  Interrupted")
        sys.exit(130)

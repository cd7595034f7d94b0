"""Database revision marker. 🏷️

The marker records which code (and which binary layout) built the
database. Stock files are raw dumps of host-native records, so any change
of layout makes existing files unreadable; the marker lets every reader
detect that and point the operator at reinitialization instead of
returning garbage.
"""

import platform
from functools import lru_cache

from cotalake import __version__
from cotalake.errors import StaleDatabaseError, StorageError
from cotalake.logging_config import get_logger
from cotalake.schemas import layout_signature
from cotalake.storage.paths import get_revision_marker_path

logger = get_logger(__name__)


@lru_cache(maxsize=1)
def revision_marker_content() -> str:
    """Build the expected content of the revision marker file.

    Three newline-terminated lines: library version, binary layout
    signature, and the interpreter/platform identity.

    Example:
        >>> print(revision_marker_content(), end="")
        0.1.0
        little-endian word=8 record=88
        CPython x86_64
    """
    return (
        f"{__version__}\n"
        f"{layout_signature()}\n"
        f"{platform.python_implementation()} {platform.machine()}\n"
    )


def check_revision_marker() -> None:
    """Verify that the database was built by a compatible revision. ✅

    Raises:
        StaleDatabaseError: If the marker is missing or its content differs.
        StorageError: If the marker exists but cannot be read.
    """
    marker_path = get_revision_marker_path()
    try:
        with open(marker_path, "rb") as fh:
            current = fh.read()
    except FileNotFoundError as e:
        raise StaleDatabaseError(marker_path, "revision marker missing") from e
    except OSError as e:
        raise StorageError(f"cannot read revision marker: {e}", marker_path) from e

    if current != revision_marker_content().encode("ascii"):
        logger.debug(f"Revision marker mismatch: {current!r}")
        raise StaleDatabaseError(marker_path, "revision marker mismatch")


def write_revision_marker() -> None:
    """Stamp the database directory with the current revision marker.

    Raises:
        StorageError: If the marker cannot be written.
    """
    marker_path = get_revision_marker_path()
    try:
        with open(marker_path, "wb") as fh:
            fh.write(revision_marker_content().encode("ascii"))
    except OSError as e:
        raise StorageError(f"cannot write revision marker: {e}", marker_path) from e
    logger.debug(f"Revision marker written to {marker_path}")

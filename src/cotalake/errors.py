"""Exception taxonomy for CotaLake.

Every failure is terminal for the current invocation; command-line entry
points catch ``CotalakeError``, log it and exit with a non-zero status.
"""


class CotalakeError(Exception):
    """Base class of every error raised by CotaLake."""


class BovespaFormatError(CotalakeError, ValueError):
    """A Bovespa file is structurally or textually invalid.

    Args:
        message: Human-readable description of the problem.
        register_number: 1-based number of the offending register (line),
            when known.
    """

    def __init__(self, message: str, register_number: int | None = None):
        self.register_number = register_number
        if register_number is not None:
            message = f"register {register_number}: {message}"
        super().__init__(message)


class StorageError(CotalakeError, OSError):
    """A database file cannot be opened, mapped, read, written or renamed."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        if path is not None:
            message = f"{message} ({path})"
        super().__init__(message)


class StaleDatabaseError(CotalakeError):
    """The database revision marker is missing or was written by an incompatible layout."""

    def __init__(self, marker_path: str, reason: str):
        self.marker_path = marker_path
        super().__init__(
            f"database revision mismatch ({reason}: {marker_path}); "
            "please reinitialize it with 'cotalake-init'"
        )


class InitializationAborted(CotalakeError):
    """The operator did not confirm wiping an existing database."""


class UnknownStockError(CotalakeError, LookupError):
    """The requested stock is not (or cannot be) in the database."""

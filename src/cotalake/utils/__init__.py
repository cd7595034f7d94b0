"""Shared utilities. 🛠️

- **timestamps**: trading date normalization and epoch conversion
"""

from cotalake.utils.timestamps import (
    from_epoch_seconds,
    to_epoch_seconds,
    trading_datetime,
)

__all__ = [
    # Timestamps ⏰
    "trading_datetime",
    "to_epoch_seconds",
    "from_epoch_seconds",
]

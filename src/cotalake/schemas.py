"""Binary layout and Polars schema definitions for CotaLake."""

import sys
from typing import Any

import numpy as np
import polars as pl

from cotalake.models import STOCK_SPEC_SIZE

# =============================================================================
# On-disk stock file layout (host-native byte order and word size)
# =============================================================================

# (daily_quotes_size, last_xplit), each one machine word
HISTORY_HEADER_DTYPE = np.dtype(
    [
        ("daily_quotes_size", np.uintp),
        ("last_xplit", np.uintp),
    ]
)

# One fixed-size daily quote record, aligned like its C struct counterpart
DAILY_QUOTE_DTYPE = np.dtype(
    [
        ("trading_date", np.int64),  # seconds since epoch, 12:00 UTC
        ("stock_spec", f"S{STOCK_SPEC_SIZE}"),  # null-padded
        ("price_factor", np.uint16),
        ("opening_price", np.uint64),
        ("closing_price", np.uint64),
        ("minimum_price", np.uint64),
        ("maximum_price", np.uint64),
        ("average_price", np.uint64),
        ("total_trades", np.uint16),
        ("total_stocks", np.uint64),
        ("total_volume", np.uint64),
    ],
    align=True,
)

# Text encoding of stock_spec bytes on disk
STORAGE_ENCODING = "latin-1"

PRICE_FIELDS = (
    "opening_price",
    "closing_price",
    "minimum_price",
    "maximum_price",
    "average_price",
)

# Largest value each integer field can hold on disk
FIELD_LIMITS: dict[str, int] = {
    name: int(np.iinfo(DAILY_QUOTE_DTYPE.fields[name][0]).max)
    for name in DAILY_QUOTE_DTYPE.names or ()
    if name not in ("trading_date", "stock_spec")
}


def layout_signature() -> str:
    """Describe the binary layout this build reads and writes.

    Returns:
        One-line description covering byte order, word size and record size.

    Example:
        >>> layout_signature()
        'little-endian word=8 record=88'
    """
    return (
        f"{sys.byteorder}-endian "
        f"word={np.dtype(np.uintp).itemsize} "
        f"record={DAILY_QUOTE_DTYPE.itemsize}"
    )


# =============================================================================
# Polars schemas
# =============================================================================

# Batch of freshly parsed quotes, one row per (stock, trading date)
QUOTES_BATCH_SCHEMA: dict[str, Any] = {
    "stock_id": pl.String,
    "trading_date": pl.Datetime("us", "UTC"),
    "stock_spec": pl.String,
    "price_factor": pl.UInt16,
    "opening_price": pl.UInt64,
    "closing_price": pl.UInt64,
    "minimum_price": pl.UInt64,
    "maximum_price": pl.UInt64,
    "average_price": pl.UInt64,
    "total_trades": pl.UInt16,
    "total_stocks": pl.UInt64,
    "total_volume": pl.UInt64,
}

# Exported history rows, in output column order
HISTORY_EXPORT_SCHEMA: dict[str, Any] = {
    "trading_date": pl.Date,
    "stock_spec": pl.String,
    "price_factor": pl.UInt16,
    "opening_price": pl.UInt64,
    "closing_price": pl.UInt64,
    "minimum_price": pl.UInt64,
    "maximum_price": pl.UInt64,
    "average_price": pl.UInt64,
    "total_trades": pl.UInt16,
    "total_stocks": pl.UInt64,
    "total_volume": pl.UInt64,
}

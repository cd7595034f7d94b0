"""Batch transformations between parsed quotes and Polars DataFrames. 🔄

Freshly parsed quotes are gathered into one DataFrame, sorted by stock id
(byte-wise) then trading date, and cut into contiguous per-stock runs that
the merge engine consumes.
"""

from dataclasses import asdict
from typing import Iterable, Iterator

import polars as pl

from cotalake.models import DailyQuote, StockID
from cotalake.schemas import QUOTES_BATCH_SCHEMA


def quotes_to_dicts(quotes: Iterable[tuple[StockID, DailyQuote]]) -> list[dict]:
    """Flatten parsed quotes into row dictionaries.

    Args:
        quotes: Tuples of (stock id, daily quote), in file order.

    Returns:
        List of dictionaries keyed by the columns of ``QUOTES_BATCH_SCHEMA``.
    """
    return [{"stock_id": stock_id.id, **asdict(quote)} for stock_id, quote in quotes]


def build_quotes_batch(quotes: Iterable[tuple[StockID, DailyQuote]]) -> pl.DataFrame:
    """Build the sorted, de-duplicated batch of parsed quotes. 📦

    Applies batch transformations:
    1. One row per parsed quote, typed by ``QUOTES_BATCH_SCHEMA``
    2. Keep the last register of any duplicated (stock, trading date) pair
    3. Sort by stock id, then trading date

    Args:
        quotes: Tuples of (stock id, daily quote), in file order.

    Returns:
        Sorted DataFrame, unique on (stock_id, trading_date).

    Example:
        >>> batch = build_quotes_batch(parsed)
        >>> batch.select("stock_id", "trading_date").head(2)
    """
    df = pl.DataFrame(quotes_to_dicts(quotes), schema=QUOTES_BATCH_SCHEMA)
    if df.is_empty():
        return df
    return (
        df.unique(subset=["stock_id", "trading_date"], keep="last", maintain_order=True)
        .sort(["stock_id", "trading_date"], maintain_order=True)
    )


def iter_stock_runs(batch: pl.DataFrame) -> Iterator[tuple[StockID, list[DailyQuote]]]:
    """Split a sorted batch into contiguous per-stock runs. 🎯

    Args:
        batch: Output of ``build_quotes_batch``.

    Yields:
        Tuple of (stock id, that stock's quotes in ascending date order),
        stocks in ascending id order.
    """
    if batch.is_empty():
        return
    for frame in batch.partition_by("stock_id", maintain_order=True):
        stock_id = StockID(frame["stock_id"][0])
        quotes = [
            DailyQuote(**row) for row in frame.drop("stock_id").iter_rows(named=True)
        ]
        yield stock_id, quotes

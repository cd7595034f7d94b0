"""Import of a Bovespa file into the stock history database. 🥉

Pipeline:
1. Parse the whole file (any format error aborts before anything is written)
2. Sort and group the parsed quotes by stock
3. Per stock: merge with the stored history, re-detect the last split,
   atomically replace the stock file
"""

import sys
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from tqdm import tqdm

from cotalake.history.merge import merge_daily_quotes
from cotalake.history.splits import find_last_xplit
from cotalake.ingest.parser import parse_bovespa_file
from cotalake.ingest.transformers import build_quotes_batch, iter_stock_runs
from cotalake.logging_config import get_logger
from cotalake.models import DailyQuote, StockID
from cotalake.storage import StockHistory, check_revision_marker, read_history, write_history

logger = get_logger(__name__)


@dataclass
class StockUpdate:
    """Outcome of updating one stock's history."""

    stock_id: StockID
    history_size: int
    last_xplit: int
    xplit_changed: bool


@dataclass
class ImportSummary:
    """Collects the results of importing one Bovespa file."""

    register_count: int = 0
    quote_count: int = 0
    ignored_count: int = 0
    updates: list[StockUpdate] = field(default_factory=list)

    @property
    def stock_count(self) -> int:
        return len(self.updates)

    @property
    def xplit_stocks(self) -> list[StockID]:
        """Stocks whose split position moved during this import."""
        return [u.stock_id for u in self.updates if u.xplit_changed]


def update_stock_history(
    stock_id: StockID, new_quotes: Sequence[DailyQuote], *, check_revision: bool = True
) -> StockUpdate:
    """Merge new quotes into one stock's stored history and persist it. 🔄

    Args:
        stock_id: Stock identification.
        new_quotes: Parsed quotes of the stock, ascending and unique by date.
        check_revision: Verify the revision marker before touching the stock
            file; imports check it once up front and pass False.

    Returns:
        Summary of the update.

    Raises:
        StaleDatabaseError: If the database revision marker does not match.
        StorageError: If the stock file cannot be read or replaced.
    """
    previous_xplit = 0
    stored = read_history(stock_id, check_revision=check_revision)
    if stored is None:
        merged = list(new_quotes)
    else:
        with stored:
            previous_xplit = stored.last_xplit
            merged = merge_daily_quotes(stored, new_quotes)

    last_xplit = find_last_xplit(merged)
    xplit_changed = last_xplit != previous_xplit
    if xplit_changed and last_xplit:
        logger.info(
            f"✂️  Inplit / split detected in stock '{stock_id}' at array position {last_xplit}"
        )
    elif xplit_changed:
        logger.info(f"✂️  Split position of stock '{stock_id}' reset (was {previous_xplit})")

    write_history(
        StockHistory.from_quotes(stock_id, merged, last_xplit), check_revision=check_revision
    )
    logger.debug(f"Stock {stock_id}: {len(merged)} quotes, last_xplit = {last_xplit}")
    return StockUpdate(stock_id, len(merged), last_xplit, xplit_changed)


def import_bovespa_file(lines: Iterable[str], show_progress: bool | None = None) -> ImportSummary:
    """Import one Bovespa file into the database. 📥

    Args:
        lines: Lines of the file, decoded text.
        show_progress: Show a progress bar while updating stocks; defaults
            to whether stderr is a terminal.

    Returns:
        Summary of the import.

    Raises:
        StaleDatabaseError: If the database revision marker does not match.
        BovespaFormatError: If the file is invalid; nothing is written.
        StorageError: If a stock file cannot be read or replaced.
    """
    check_revision_marker()

    parser, parsed = parse_bovespa_file(lines)
    summary = ImportSummary(
        register_count=parser.register_count,
        quote_count=parser.quote_count,
        ignored_count=parser.ignored_count,
    )

    batch = build_quotes_batch(parsed)
    del parsed
    runs = iter_stock_runs(batch)
    stock_total = batch["stock_id"].n_unique() if not batch.is_empty() else 0

    if show_progress is None:
        show_progress = sys.stderr.isatty()

    with tqdm(
        total=stock_total,
        desc="Updating stock histories",
        unit="stock",
        disable=not show_progress,
    ) as pbar:
        for stock_id, quotes in runs:
            summary.updates.append(
                update_stock_history(stock_id, quotes, check_revision=False)
            )
            pbar.update(1)
            pbar.set_postfix_str(stock_id.id, refresh=False)

    logger.info(f"✅ {summary.stock_count} stocks processed")
    return summary

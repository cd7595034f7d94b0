"""Export of stock histories as delimited text. 📤"""

from dataclasses import asdict

import polars as pl

from cotalake.schemas import HISTORY_EXPORT_SCHEMA, QUOTES_BATCH_SCHEMA
from cotalake.storage import StockHistory

_QUOTE_SCHEMA = {k: v for k, v in QUOTES_BATCH_SCHEMA.items() if k != "stock_id"}


def history_to_dataframe(history: StockHistory, all_quotes: bool = False) -> pl.DataFrame:
    """Convert a stock history to a DataFrame of export rows.

    Args:
        history: Stock history view.
        all_quotes: Export the whole series instead of the quotes since the
            most recent split/inplit.

    Returns:
        DataFrame typed and ordered by ``HISTORY_EXPORT_SCHEMA``.

    Example:
        >>> df = history_to_dataframe(history, all_quotes=True)
        >>> df.columns[:3]
        ['trading_date', 'stock_spec', 'price_factor']
    """
    quotes = history[:] if all_quotes else history.since_last_xplit()
    df = pl.DataFrame([asdict(q) for q in quotes], schema=_QUOTE_SCHEMA)
    return df.with_columns(pl.col("trading_date").dt.date()).select(
        [pl.col(name).cast(dtype) for name, dtype in HISTORY_EXPORT_SCHEMA.items()]
    )


def history_to_csv(history: StockHistory, all_quotes: bool = False) -> str:
    """Render a stock history as CSV rows (no header line, dates as YYYY-MM-DD).

    Columns: trading date, spec, price factor, opening, closing, minimum,
    maximum and average price, total trades, total stocks, total volume.
    """
    return history_to_dataframe(history, all_quotes).write_csv(
        include_header=False, date_format="%Y-%m-%d"
    )

"""Merge of a stock's stored history with freshly parsed quotes. 🔀"""

from typing import Sequence

from cotalake.models import DailyQuote


def merge_daily_quotes(
    existing: Sequence[DailyQuote], new: Sequence[DailyQuote]
) -> list[DailyQuote]:
    """Merge two date-sorted quote sequences; new quotes win date collisions.

    Linear two-pointer merge. Both inputs must be sorted by trading date
    with unique dates; the output then is too.

    Args:
        existing: Quotes already stored for the stock.
        new: Quotes parsed from the file being imported.

    Returns:
        Merged quotes in ascending trading date order.

    Example:
        >>> merged = merge_daily_quotes([jan_02_old, jan_05], [jan_02_new, jan_03])
        >>> merged == [jan_02_new, jan_03, jan_05]
        True
    """
    merged: list[DailyQuote] = []
    a = b = 0
    while a < len(existing) and b < len(new):
        old_quote = existing[a]
        new_quote = new[b]
        if old_quote.trading_date < new_quote.trading_date:
            merged.append(old_quote)
            a += 1
        elif old_quote.trading_date > new_quote.trading_date:
            merged.append(new_quote)
            b += 1
        else:
            # Same trading day: the stored quote is superseded
            merged.append(new_quote)
            a += 1
            b += 1
    merged.extend(existing[a:])
    merged.extend(new[b:])
    return merged

"""Detection of the most recent split/inplit of a stock. 📊

Bovespa marks the first trading days after a corporate action in the
stock specification text (``especi``): "ON EB" is an ordinary share
trading ex-bonus, "PN EJB" ex-interest and ex-bonus, and so on. Data
before the most recent such event is not directly comparable to data
after it.

Example:
    Specs by index: ``["ON", "ON", "ON EB", "ON EB", "ON"]``.
    Scanning backward, the marker run ends (going back in time) between
    index 2 and index 1, so the current regime starts at index 2.
"""

import re
from typing import Sequence

from cotalake.models import DailyQuote

XPLIT_PATTERN = re.compile(r"E.?[BG] *")


def is_xplit_marker(stock_spec: str) -> bool:
    """Check if a stock spec marks an ex-bonus/ex-split trading day.

    Example:
        >>> is_xplit_marker("ON EB")
        True
        >>> is_xplit_marker("PN EJB N1")
        True
        >>> is_xplit_marker("ON NM")
        False
    """
    return XPLIT_PATTERN.search(stock_spec) is not None


def find_last_xplit(quotes: Sequence[DailyQuote]) -> int:
    """Index of the first quote of the most recent split regime. 🔍

    Scans backward carrying whether the chronologically later quote was a
    marker; the first marker -> non-marker transition found going back
    ends the scan.

    Args:
        quotes: Merged history, ascending by trading date.

    Returns:
        Index right after the transition, or 0 if there is none.
    """
    later_matched = False
    for index in range(len(quotes) - 1, -1, -1):
        matched = is_xplit_marker(quotes[index].stock_spec)
        if later_matched and not matched:
            return index + 1
        later_matched = matched
    return 0

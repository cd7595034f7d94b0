"""Timestamp utilities for trading dates. ⏰

Trading dates carry no time-of-day meaning. They are pinned to 12:00 UTC
so that converting to and from epoch seconds can never move them across a
calendar day boundary, whatever the local timezone.
"""

from datetime import datetime, timedelta, timezone

TRADING_HOUR = 12

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def trading_datetime(year: int, month: int, day: int) -> datetime:
    """Build the normalized UTC datetime of a trading date. 📅

    Args:
        year: Four-digit year.
        month: Month, 1-12.
        day: Day of month.

    Returns:
        Timezone-aware datetime at 12:00 UTC.

    Raises:
        ValueError: If the components do not form a valid calendar date.

    Example:
        >>> trading_datetime(2024, 1, 2).isoformat()
        '2024-01-02T12:00:00+00:00'
    """
    return datetime(year, month, day, TRADING_HOUR, tzinfo=timezone.utc)


def to_epoch_seconds(value: datetime) -> int:
    """Seconds since the Unix epoch of a timezone-aware datetime."""
    return (value - _EPOCH) // timedelta(seconds=1)


def from_epoch_seconds(seconds: int) -> datetime:
    """Timezone-aware UTC datetime for seconds since the Unix epoch.

    Example:
        >>> from_epoch_seconds(1704196800).isoformat()
        '2024-01-02T12:00:00+00:00'
    """
    return _EPOCH + timedelta(seconds=seconds)

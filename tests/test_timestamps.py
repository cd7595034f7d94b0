"""Tests for trading date utilities."""

from datetime import timezone

import pytest

from cotalake.utils.timestamps import from_epoch_seconds, to_epoch_seconds, trading_datetime


class TestTradingDatetime:
    """Test trading date normalization."""

    def test_pins_noon_utc(self):
        """Trading dates are normalized to 12:00 UTC."""
        value = trading_datetime(2024, 1, 2)

        assert (value.year, value.month, value.day) == (2024, 1, 2)
        assert value.hour == 12
        assert value.utcoffset() == timezone.utc.utcoffset(None)

    def test_rejects_invalid_date(self):
        """Impossible calendar dates raise ValueError."""
        with pytest.raises(ValueError):
            trading_datetime(2024, 2, 30)


class TestEpochSeconds:
    """Test epoch second conversions."""

    def test_known_value(self):
        """2024-01-02 12:00 UTC is a fixed epoch second count."""
        assert to_epoch_seconds(trading_datetime(2024, 1, 2)) == 1704196800

    def test_round_trip(self):
        """Converting to epoch seconds and back keeps the datetime."""
        value = trading_datetime(1999, 12, 31)

        assert from_epoch_seconds(to_epoch_seconds(value)) == value

    def test_before_epoch(self):
        """Trading dates before 1970 convert to negative seconds."""
        value = trading_datetime(1968, 5, 10)

        assert to_epoch_seconds(value) < 0
        assert from_epoch_seconds(to_epoch_seconds(value)) == value

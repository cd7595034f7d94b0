"""Tests for stock history export."""

from datetime import date

import polars as pl

from cotalake.history import history_to_csv, history_to_dataframe
from cotalake.models import StockID
from cotalake.schemas import HISTORY_EXPORT_SCHEMA
from cotalake.storage import StockHistory


class TestHistoryExport:
    """Test DataFrame and CSV rendering of histories."""

    def _history(self, make_quote) -> StockHistory:
        quotes = [
            make_quote("2024-01-02", stock_spec="ON"),
            make_quote("2024-01-03", stock_spec="ON EB", price_factor=1000),
            make_quote("2024-01-04", stock_spec="ON EB", closing_price=1),
        ]
        return StockHistory.from_quotes(StockID("VALE3"), quotes, 1)

    def test_dataframe_schema(self, make_quote):
        """Exported rows follow the export schema with calendar dates."""
        df = history_to_dataframe(self._history(make_quote), all_quotes=True)

        assert df.schema == pl.Schema(HISTORY_EXPORT_SCHEMA)
        assert df["trading_date"].to_list() == [
            date(2024, 1, 2),
            date(2024, 1, 3),
            date(2024, 1, 4),
        ]

    def test_default_starts_at_last_xplit(self, make_quote):
        """Without all_quotes only the current split regime is exported."""
        csv = history_to_csv(self._history(make_quote))

        assert csv.splitlines() == [
            "2024-01-03,ON EB,1000,3750,3790,3700,3800,3760,1234,100000,376000000",
            "2024-01-04,ON EB,1,3750,1,3700,3800,3760,1234,100000,376000000",
        ]

    def test_all_quotes(self, make_quote):
        """all_quotes exports the whole series."""
        csv = history_to_csv(self._history(make_quote), all_quotes=True)

        assert len(csv.splitlines()) == 3
        assert csv.startswith("2024-01-02,ON,1,")

    def test_empty_history(self):
        """An empty history exports nothing."""
        history = StockHistory.from_quotes(StockID("VALE3"), [], 0)

        assert history_to_csv(history, all_quotes=True) == ""

"""Record model: stock identifiers and daily quotes."""

from dataclasses import dataclass
from datetime import datetime

# Sizes include the C-style terminator of the on-disk layout
STOCK_ID_SIZE = 13
STOCK_SPEC_SIZE = 11


@dataclass(frozen=True, order=True)
class StockID:
    """Exchange ticker that uniquely names a stock history (and its file).

    Example:
        >>> StockID("PETR4")
        StockID(id='PETR4')
        >>> str(StockID("PETR4"))
        'PETR4'
    """

    id: str

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("stock id must not be empty")
        if len(self.id) > STOCK_ID_SIZE - 1:
            raise ValueError(
                f"stock id {self.id!r} is longer than {STOCK_ID_SIZE - 1} characters"
            )
        if "/" in self.id or "\\" in self.id or "\x00" in self.id:
            raise ValueError(f"stock id {self.id!r} contains a path separator")
        if self.id.startswith("."):
            raise ValueError(f"stock id {self.id!r} would name a hidden file")

    def __str__(self) -> str:
        return self.id


@dataclass(frozen=True)
class DailyQuote:
    """One trading day's summary of one stock.

    Prices and volume are fixed-point integers in hundredths of the stock
    currency; the unit price is ``price / price_factor``. ``trading_date``
    is a UTC datetime pinned to 12:00 so it never shifts a calendar day.
    """

    trading_date: datetime
    stock_spec: str
    price_factor: int
    opening_price: int
    closing_price: int
    minimum_price: int
    maximum_price: int
    average_price: int
    total_trades: int
    total_stocks: int
    total_volume: int

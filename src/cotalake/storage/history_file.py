"""In-memory projection of one stock's history file. 📈

A stock file is a dump of ``(daily_quotes_size, last_xplit)`` followed by
``daily_quotes_size`` fixed-size records (see ``cotalake.schemas``). A
``StockHistory`` is either a read-only view over a memory-mapped file or a
freshly built write buffer; it is never edited in place.
"""

import mmap
from typing import Iterator, Sequence, overload

import numpy as np

from cotalake.errors import StorageError
from cotalake.models import DailyQuote, StockID
from cotalake.schemas import (
    DAILY_QUOTE_DTYPE,
    HISTORY_HEADER_DTYPE,
    PRICE_FIELDS,
    STORAGE_ENCODING,
)
from cotalake.utils.timestamps import from_epoch_seconds, to_epoch_seconds

_INTEGER_FIELDS = ("price_factor", *PRICE_FIELDS, "total_trades", "total_stocks", "total_volume")


def _record_to_quote(record: np.void) -> DailyQuote:
    return DailyQuote(
        trading_date=from_epoch_seconds(int(record["trading_date"])),
        stock_spec=bytes(record["stock_spec"]).decode(STORAGE_ENCODING),
        **{name: int(record[name]) for name in _INTEGER_FIELDS},
    )


def quotes_to_records(quotes: Sequence[DailyQuote]) -> np.ndarray:
    """Pack daily quotes into a structured array of on-disk records.

    Args:
        quotes: Daily quotes, already in ascending date order.

    Returns:
        Array of ``DAILY_QUOTE_DTYPE`` with zeroed padding bytes.
    """
    records = np.zeros(len(quotes), dtype=DAILY_QUOTE_DTYPE)
    if not quotes:
        return records
    records["trading_date"] = np.array(
        [to_epoch_seconds(q.trading_date) for q in quotes], dtype=np.int64
    )
    records["stock_spec"] = np.array(
        [q.stock_spec.encode(STORAGE_ENCODING) for q in quotes],
        dtype=DAILY_QUOTE_DTYPE.fields["stock_spec"][0],
    )
    for name in _INTEGER_FIELDS:
        records[name] = np.array(
            [getattr(q, name) for q in quotes], dtype=DAILY_QUOTE_DTYPE.fields[name][0]
        )
    return records


def _check_last_xplit(daily_quotes_size: int, last_xplit: int) -> None:
    if not 0 <= last_xplit <= max(daily_quotes_size - 1, 0):
        raise ValueError(
            f"last_xplit {last_xplit} out of range for {daily_quotes_size} quotes"
        )


class StockHistory(Sequence[DailyQuote]):
    """Ordered, date-unique daily quotes of one stock plus its last split position.

    Items are decoded into ``DailyQuote`` on access; the mapped records are
    never copied. Views backed by a mapping must be closed (or used as a
    context manager) to unmap the file.

    Example:
        >>> with read_history(StockID("PETR4")) as history:
        ...     recent = history.since_last_xplit()
    """

    def __init__(
        self,
        stock_id: StockID,
        records: np.ndarray,
        last_xplit: int,
        mapping: mmap.mmap | None = None,
        path: str | None = None,
    ):
        _check_last_xplit(len(records), last_xplit)
        self.stock_id = stock_id
        self.path = path
        self._records: np.ndarray | None = records
        self._last_xplit = last_xplit
        self._mapping = mapping

    @classmethod
    def from_quotes(
        cls, stock_id: StockID, quotes: Sequence[DailyQuote], last_xplit: int
    ) -> "StockHistory":
        """Build a write buffer from merged quotes."""
        return cls(stock_id, quotes_to_records(quotes), last_xplit)

    @classmethod
    def from_mapping(
        cls, stock_id: StockID, mapping: mmap.mmap, path: str | None = None
    ) -> "StockHistory":
        """Interpret a memory-mapped stock file.

        Takes ownership of ``mapping``: it is closed here on failure, and by
        ``close()`` afterwards.

        Raises:
            StorageError: If the file size disagrees with its declared length.
        """
        size = len(mapping)
        header_size = HISTORY_HEADER_DTYPE.itemsize
        if size < header_size:
            mapping.close()
            raise StorageError(f"stock file is truncated ({size} bytes)", path)

        header = np.frombuffer(mapping, dtype=HISTORY_HEADER_DTYPE, count=1)
        daily_quotes_size = int(header["daily_quotes_size"][0])
        last_xplit = int(header["last_xplit"][0])
        del header

        try:
            _check_last_xplit(daily_quotes_size, last_xplit)
        except ValueError as e:
            mapping.close()
            raise StorageError(f"corrupt stock file: {e}", path) from e

        expected = header_size + daily_quotes_size * DAILY_QUOTE_DTYPE.itemsize
        if size != expected:
            mapping.close()
            raise StorageError(
                f"stock file holds {size} bytes, {daily_quotes_size} quotes need {expected}",
                path,
            )

        if daily_quotes_size == 0:
            records = np.zeros(0, dtype=DAILY_QUOTE_DTYPE)
        else:
            records = np.frombuffer(
                mapping, dtype=DAILY_QUOTE_DTYPE, count=daily_quotes_size, offset=header_size
            )
        return cls(stock_id, records, last_xplit, mapping=mapping, path=path)

    @property
    def last_xplit(self) -> int:
        """Index of the first quote after the most recent split/inplit, 0 if none."""
        return self._last_xplit

    @property
    def closed(self) -> bool:
        return self._records is None

    def _require_records(self) -> np.ndarray:
        if self._records is None:
            raise ValueError(f"history of stock {self.stock_id} is closed")
        return self._records

    def __len__(self) -> int:
        return len(self._require_records())

    @overload
    def __getitem__(self, index: int) -> DailyQuote: ...

    @overload
    def __getitem__(self, index: slice) -> list[DailyQuote]: ...

    def __getitem__(self, index):
        records = self._require_records()
        if isinstance(index, slice):
            return [_record_to_quote(record) for record in records[index]]
        if not -len(records) <= index < len(records):
            raise IndexError(f"quote index {index} out of range")
        return _record_to_quote(records[index])

    def __iter__(self) -> Iterator[DailyQuote]:
        # No array reference survives a yield, so close() can always unmap
        for index in range(len(self)):
            yield _record_to_quote(self._require_records()[index])

    def since_last_xplit(self) -> list[DailyQuote]:
        """Quotes of the current split regime (the whole series if none)."""
        return self[self._last_xplit :]

    def to_bytes(self) -> bytes:
        """Serialize into the on-disk stock file format."""
        records = self._require_records()
        header = np.zeros(1, dtype=HISTORY_HEADER_DTYPE)
        header["daily_quotes_size"] = len(records)
        header["last_xplit"] = self._last_xplit
        return header.tobytes() + records.tobytes()

    def close(self) -> None:
        """Release the records and unmap the backing file, if any."""
        self._records = None
        if self._mapping is not None:
            self._mapping.close()
            self._mapping = None

    def __enter__(self) -> "StockHistory":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else f"{len(self)} quotes"
        return f"StockHistory({self.stock_id.id!r}, {state}, last_xplit={self._last_xplit})"

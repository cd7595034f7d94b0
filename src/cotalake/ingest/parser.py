"""Section state machine over the registers of a Bovespa file. 📄

A Bovespa file is one header register, any number of quote (and, for
BDIN, passthrough) registers, then one trailer register:

    HEADER -> QUOTES -> TRAILER

The parser validates that ordering, the header origin, the trailer's echo
of the header fields and the trailer's register count. It yields one
``(StockID, DailyQuote)`` per relevant quote register. Any violation raises
``BovespaFormatError``; there is no skip-and-continue for malformed data.
"""

from enum import Enum
from typing import Iterable, Iterator

from cotalake.errors import BovespaFormatError
from cotalake.ingest.filters import filter_and_convert
from cotalake.ingest.layouts import DialectLayout, RegisterKind, detect_dialect
from cotalake.logging_config import get_logger
from cotalake.models import DailyQuote, StockID

logger = get_logger(__name__)

EXPECTED_ORIGIN = "BOVESPA"


class FileSection(Enum):
    """Section of the file the parser is currently in."""

    HEADER = "header"
    QUOTES = "quotes"
    TRAILER = "trailer"


class BovespaFileParser:
    """Single-use parser of one Bovespa file.

    Counters are updated while parsing and stay available afterwards:

    - ``register_count``: every register consumed, header and trailer included.
    - ``quote_count``: relevant quote registers emitted.
    - ``ignored_count``: quote registers filtered out as out of scope.
    - ``other_count``: passthrough registers skipped (BDIN only).

    Example:
        >>> parser = BovespaFileParser()
        >>> quotes = list(parser.parse(open("COTAHIST_A2024.TXT", encoding="latin-1")))
        >>> parser.quote_count == len(quotes)
        True
    """

    def __init__(self) -> None:
        self.layout: DialectLayout | None = None
        self.section = FileSection.HEADER
        self.header_fields: dict[str, str] = {}
        self.trailer_fields: dict[str, str] = {}
        self.register_count = 0
        self.quote_count = 0
        self.ignored_count = 0
        self.other_count = 0

    def parse(self, lines: Iterable[str]) -> Iterator[tuple[StockID, DailyQuote]]:
        """Consume every register and yield the relevant quotes.

        Args:
            lines: Lines of the file; line terminators are stripped.

        Yields:
            Tuple of (stock id, daily quote) per relevant quote register.

        Raises:
            BovespaFormatError: On any structural or textual violation,
                including end of input before the trailer.
        """
        for line in lines:
            quote = self.feed(line.rstrip("\r\n"))
            if quote is not None:
                yield quote
        self.finish()

    def feed(self, register: str) -> tuple[StockID, DailyQuote] | None:
        """Advance the state machine by one register.

        Args:
            register: One register, without line terminator.

        Returns:
            Tuple of (stock id, daily quote) for a relevant quote register,
            None otherwise.
        """
        self.register_count += 1
        number = self.register_count
        logger.debug(f"Register {number}: {register!r}")

        if self.section is FileSection.TRAILER:
            raise BovespaFormatError("trailing garbage detected after trailer", number)

        if self.layout is None:
            self.layout = detect_dialect(register)
            if self.layout is None:
                raise BovespaFormatError(
                    f"unknown bovespa file type {register[:10]!r}", number
                )
            logger.debug(f"Bovespa file dialect: {self.layout.dialect.value}")

        kind = self.layout.register_kind(register)
        if kind is None:
            raise BovespaFormatError(
                f"unknown register type code {register[:2]!r} "
                f"for {self.layout.dialect.value} files",
                number,
            )

        if self.section is FileSection.HEADER:
            self._read_header(register, kind)
            return None

        if kind is RegisterKind.HEADER:
            raise BovespaFormatError("duplicate header register", number)
        if kind is RegisterKind.OTHER:
            self.other_count += 1
            return None
        if kind is RegisterKind.TRAILER:
            self._read_trailer(register)
            return None
        return self._read_quote(register)

    def finish(self) -> None:
        """Check that the input ended right after the trailer.

        Raises:
            BovespaFormatError: If the trailer was never seen.
        """
        if self.section is not FileSection.TRAILER:
            if self.register_count == 0:
                raise BovespaFormatError("empty bovespa file")
            raise BovespaFormatError(
                f"incomplete bovespa file: input ended in {self.section.value} "
                f"section after {self.register_count} registers, trailer missing"
            )
        logger.info(
            f"📄 {self.quote_count} daily quotes parsed from bovespa file "
            f"({self.register_count} registers, {self.ignored_count} ignored)"
        )

    def _read_header(self, register: str, kind: RegisterKind) -> None:
        assert self.layout is not None
        if kind is not RegisterKind.HEADER:
            raise BovespaFormatError("missing header register", self.register_count)
        self.header_fields = self.layout.extract(register, RegisterKind.HEADER)
        if self.header_fields["codigo_origem"] != EXPECTED_ORIGIN:
            raise BovespaFormatError(
                f"heading garbage detected (codigo_origem "
                f"{self.header_fields['codigo_origem']!r})",
                self.register_count,
            )
        facts = ", ".join(
            f"{name} = {value!r}"
            for name, value in self.header_fields.items()
            if name != "codigo_origem"
        )
        logger.info(f"📋 {self.layout.dialect.value} header: {facts}")
        self.section = FileSection.QUOTES

    def _read_quote(self, register: str) -> tuple[StockID, DailyQuote] | None:
        assert self.layout is not None
        quote_fields = self.layout.extract(register, RegisterKind.QUOTES)
        mapped = self.layout.map_quote(self.header_fields, quote_fields)
        result = filter_and_convert(mapped, self.register_count)
        if result is None:
            self.ignored_count += 1
        else:
            self.quote_count += 1
        return result

    def _read_trailer(self, register: str) -> None:
        assert self.layout is not None
        number = self.register_count
        self.trailer_fields = self.layout.extract(register, RegisterKind.TRAILER)

        for name in self.layout.trailer_checked_fields:
            header_value = self.header_fields[name]
            trailer_value = self.trailer_fields[name]
            if header_value != trailer_value:
                raise BovespaFormatError(
                    f"trailer field mismatch (field = {name!r}, "
                    f"header = {header_value!r}, trailer = {trailer_value!r})",
                    number,
                )

        declared = self.trailer_fields["total_registros"]
        if not declared.isascii() or not declared.isdigit():
            raise BovespaFormatError(
                f"cannot understand total_registros ({declared!r}) as an unsigned integer",
                number,
            )
        if int(declared) != number:
            raise BovespaFormatError(
                f"register count mismatch: {number} registers read, "
                f"trailer declares {int(declared)}",
                number,
            )

        logger.debug("Trailer accepted")
        self.section = FileSection.TRAILER


def parse_bovespa_file(lines: Iterable[str]) -> tuple[BovespaFileParser, list[tuple[StockID, DailyQuote]]]:
    """Parse a whole Bovespa file eagerly. 📥

    Args:
        lines: Lines of the file.

    Returns:
        Tuple of (the exhausted parser with its counters, parsed quotes).

    Raises:
        BovespaFormatError: If the file is invalid anywhere.
    """
    parser = BovespaFileParser()
    quotes = list(parser.parse(lines))
    return parser, quotes

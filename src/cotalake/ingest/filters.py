"""Relevance filter and typed conversion of mapped quote registers. 🔎

Only cash-market, standard-lot, local-currency registers make it into a
stock history. Anything else is ignored (not an error). Malformed data in
a relevant register is fatal for the whole import.
"""

import re
from typing import Mapping

from cotalake.errors import BovespaFormatError
from cotalake.logging_config import get_logger
from cotalake.models import DailyQuote, StockID
from cotalake.schemas import FIELD_LIMITS, STORAGE_ENCODING
from cotalake.utils.timestamps import trading_datetime

logger = get_logger(__name__)

# Sanitized field values of in-scope registers
CASH_MARKET = "10"  # tp_merc 010: mercado a vista
STANDARD_LOT = "2"  # cod_bdi 02: lote padrao
LOCAL_CURRENCY = "R$"  # mod_ref

RELEVANCE_RULES: tuple[tuple[str, str], ...] = (
    ("tp_merc", CASH_MARKET),
    ("cod_bdi", STANDARD_LOT),
    ("mod_ref", LOCAL_CURRENCY),
)

# Mapped field -> DailyQuote attribute
UNSIGNED_FIELDS: tuple[tuple[str, str], ...] = (
    ("pre_abe", "opening_price"),
    ("pre_max", "maximum_price"),
    ("pre_min", "minimum_price"),
    ("pre_med", "average_price"),
    ("pre_ult", "closing_price"),
    ("tot_neg", "total_trades"),
    ("qua_tot", "total_stocks"),
    ("vol_tot", "total_volume"),
    ("fat_cot", "price_factor"),
)

_DIGITS = re.compile(r"[0-9]+")


def ignore_reason(fields: Mapping[str, str]) -> str | None:
    """Explain why a mapped register is out of scope. 🚫

    Args:
        fields: Dialect-neutral sanitized fields of a quote register.

    Returns:
        Reason string for an irrelevant register, None for a relevant one.

    Example:
        >>> ignore_reason({"tp_merc": "70", "cod_bdi": "2", "mod_ref": "R$"})
        "field tp_merc ('70') is not '10'"
    """
    for name, expected in RELEVANCE_RULES:
        if fields[name] != expected:
            return f"field {name} ({fields[name]!r}) is not {expected!r}"
    return None


def parse_unsigned(name: str, text: str, register_number: int | None = None) -> int:
    """Convert a sanitized numeric field to an unsigned integer.

    A blank field reads as zero. Anything but ASCII digits is a format error.

    Args:
        name: Field name, for diagnostics.
        text: Sanitized field text.
        register_number: Register being converted, for diagnostics.

    Returns:
        Parsed integer value.

    Raises:
        BovespaFormatError: If the text is not an unsigned integer.

    Example:
        >>> parse_unsigned("pre_abe", "1234")
        1234
        >>> parse_unsigned("pre_abe", "")
        0
    """
    if not text:
        return 0
    if _DIGITS.fullmatch(text) is None:
        raise BovespaFormatError(
            f"cannot understand field {name} ({text!r}) as an unsigned integer",
            register_number,
        )
    return int(text)


def convert_quote(
    fields: Mapping[str, str], register_number: int | None = None
) -> tuple[StockID, DailyQuote]:
    """Convert a relevant mapped register into a typed daily quote. ⚙️

    Args:
        fields: Dialect-neutral sanitized fields of a quote register.
        register_number: Register being converted, for diagnostics.

    Returns:
        Tuple of (owning stock id, daily quote).

    Raises:
        BovespaFormatError: If any field is malformed or cannot be stored.
    """
    year = parse_unsigned("ano_pregao", fields["ano_pregao"], register_number)
    month = parse_unsigned("mes_pregao", fields["mes_pregao"], register_number)
    day = parse_unsigned("dia_pregao", fields["dia_pregao"], register_number)
    try:
        trading_date = trading_datetime(year, month, day)
    except ValueError as e:
        raise BovespaFormatError(
            f"invalid trading date {year:04d}-{month:02d}-{day:02d}: {e}",
            register_number,
        ) from e

    values: dict[str, int] = {}
    for source, target in UNSIGNED_FIELDS:
        value = parse_unsigned(source, fields[source], register_number)
        limit = FIELD_LIMITS[target]
        if value > limit:
            # Wrapped to the on-disk width
            wrapped = value % (limit + 1)
            logger.warning(
                f"⚠️  Register {register_number}: field {source} ({value}) does not fit "
                f"{target} (maximum {limit}), stored as {wrapped}"
            )
            value = wrapped
        values[target] = value

    for name in ("especi", "cod_neg"):
        try:
            fields[name].encode(STORAGE_ENCODING)
        except UnicodeEncodeError as e:
            raise BovespaFormatError(
                f"field {name} ({fields[name]!r}) is not {STORAGE_ENCODING} text",
                register_number,
            ) from e

    try:
        stock_id = StockID(fields["cod_neg"])
    except ValueError as e:
        raise BovespaFormatError(f"invalid field cod_neg: {e}", register_number) from e

    return stock_id, DailyQuote(trading_date=trading_date, stock_spec=fields["especi"], **values)


def filter_and_convert(
    fields: Mapping[str, str], register_number: int | None = None
) -> tuple[StockID, DailyQuote] | None:
    """Apply the relevance filter, then convert relevant registers.

    Args:
        fields: Dialect-neutral sanitized fields of a quote register.
        register_number: Register being converted, for diagnostics.

    Returns:
        Tuple of (stock id, daily quote), or None for an ignored register.
    """
    reason = ignore_reason(fields)
    if reason is not None:
        logger.debug(f"Register {register_number} ignored: {reason}")
        return None
    return convert_quote(fields, register_number)

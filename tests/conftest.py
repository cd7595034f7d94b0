"""Shared pytest fixtures for the CotaLake test suite."""

from datetime import date as dt_date
from typing import Callable, Iterable, Mapping

import pytest

from cotalake.config import settings
from cotalake.ingest.layouts import BDIN_LAYOUT, HIST_LAYOUT, FieldSpan
from cotalake.models import DailyQuote
from cotalake.storage import init_database
from cotalake.utils.timestamps import trading_datetime

HIST_WIDTH = 245
BDIN_WIDTH = 350

HIST_QUOTE_DEFAULTS = {
    "cod_bdi": "02",
    "cod_neg": "PETR4",
    "tp_merc": "010",
    "nom_res": "PETROBRAS",
    "especi": "PN N2",
    "mod_ref": "R$",
    "pre_abe": 3750,
    "pre_max": 3800,
    "pre_min": 3700,
    "pre_med": 3760,
    "pre_ult": 3790,
    "tot_neg": 1234,
    "qua_tot": 100000,
    "vol_tot": 376000000,
    "fat_cot": 1,
    "cod_isi": "BRPETRACNPR6",
}

BDIN_QUOTE_DEFAULTS = {
    key: value for key, value in HIST_QUOTE_DEFAULTS.items() if key != "mod_ref"
}


def render_register(
    code: str, spans: Mapping[str, FieldSpan], values: Mapping[str, object], width: int
) -> str:
    """Lay out field values at their fixed positions.

    Integers are zero-padded on the left, text is space-padded on the right.
    """
    chars = list(code.ljust(width))
    for name, value in values.items():
        start, end = spans[name]
        size = end - start + 1
        if isinstance(value, int):
            text = str(value).rjust(size, "0")
        else:
            text = str(value).ljust(size)
        chars[start - 1 : end] = text[:size]
    return "".join(chars)


def _date_fields(trading_date: str) -> dict[str, str]:
    year, month, day = trading_date.split("-")
    return {"ano_pregao": year, "mes_pregao": month, "dia_pregao": day}


@pytest.fixture
def database(tmp_path, monkeypatch):
    """Point the settings at a fresh, initialized database directory."""
    database_dir = tmp_path / "bovespa"
    monkeypatch.setattr(settings, "database_dir", str(database_dir))
    init_database()
    return database_dir


@pytest.fixture
def make_hist_quote() -> Callable[..., str]:
    """Factory fixture returning a HIST quote register."""

    def _make(trading_date: str = "2024-01-02", **fields: object) -> str:
        values = {**HIST_QUOTE_DEFAULTS, **_date_fields(trading_date), **fields}
        return render_register("01", HIST_LAYOUT.quote, values, HIST_WIDTH)

    return _make


@pytest.fixture
def make_hist_file() -> Callable[..., list[str]]:
    """Factory fixture wrapping registers into a complete HIST file (lines with CRLF)."""

    def _make(
        registers: Iterable[str],
        total_registros: int | None = None,
        header: Mapping[str, object] | None = None,
        trailer: Mapping[str, object] | None = None,
    ) -> list[str]:
        registers = list(registers)
        header_values = {
            "nome_arquivo": "COTAHIST.2024",
            "codigo_origem": "BOVESPA",
            "data_geracao": "20240102",
            **(header or {}),
        }
        trailer_values = {
            "nome_arquivo": "COTAHIST.2024",
            "codigo_origem": "BOVESPA",
            "data_geracao": "20240102",
            "total_registros": (
                len(registers) + 2 if total_registros is None else total_registros
            ),
            **(trailer or {}),
        }
        lines = [
            render_register("00", HIST_LAYOUT.header, header_values, HIST_WIDTH),
            *registers,
            render_register("99", HIST_LAYOUT.trailer, trailer_values, HIST_WIDTH),
        ]
        return [line + "\r\n" for line in lines]

    return _make


@pytest.fixture
def make_bdin_quote() -> Callable[..., str]:
    """Factory fixture returning a BDIN quote register (trading date comes from the header)."""

    def _make(**fields: object) -> str:
        values = {**BDIN_QUOTE_DEFAULTS, **fields}
        return render_register("02", BDIN_LAYOUT.quote, values, BDIN_WIDTH)

    return _make


@pytest.fixture
def make_bdin_file() -> Callable[..., list[str]]:
    """Factory fixture wrapping registers into a complete BDIN file."""

    def _make(
        registers: Iterable[str],
        trading_date: str = "2024-01-02",
        total_registros: int | None = None,
    ) -> list[str]:
        registers = list(registers)
        header_values = {
            "nome_arquivo": "BDIN9999",
            "codigo_origem": "BOVESPA",
            "codigo_destino": "9999",
            "data_geracao": trading_date.replace("-", ""),
            "hora_geracao": "1830",
            **_date_fields(trading_date),
        }
        trailer_values = {
            "nome_arquivo": "BDIN9999",
            "codigo_origem": "BOVESPA",
            "codigo_destino": "9999",
            "data_geracao": trading_date.replace("-", ""),
            "total_registros": (
                len(registers) + 2 if total_registros is None else total_registros
            ),
        }
        lines = [
            render_register("00", BDIN_LAYOUT.header, header_values, BDIN_WIDTH),
            *registers,
            render_register("99", BDIN_LAYOUT.trailer, trailer_values, BDIN_WIDTH),
        ]
        return [line + "\n" for line in lines]

    return _make


@pytest.fixture
def make_quote() -> Callable[..., DailyQuote]:
    """Factory fixture returning a DailyQuote for a trading date."""

    def _make(trading_date: str = "2024-01-02", stock_spec: str = "PN N2", **fields: int) -> DailyQuote:
        day = dt_date.fromisoformat(trading_date)
        values = {
            "price_factor": 1,
            "opening_price": 3750,
            "closing_price": 3790,
            "minimum_price": 3700,
            "maximum_price": 3800,
            "average_price": 3760,
            "total_trades": 1234,
            "total_stocks": 100000,
            "total_volume": 376000000,
            **fields,
        }
        return DailyQuote(
            trading_date=trading_datetime(day.year, day.month, day.day),
            stock_spec=stock_spec,
            **values,
        )

    return _make

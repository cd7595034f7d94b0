"""Tests for the positional layouts of Bovespa registers."""

import pytest

from cotalake.ingest.layouts import (
    BDIN_LAYOUT,
    HIST_LAYOUT,
    QUOTE_FIELD_NAMES,
    FileDialect,
    RegisterKind,
    detect_dialect,
    sanitize_field,
)


class TestSanitizeField:
    """Test field sanitization."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("     ", ""),
            ("", ""),
            ("  007700  ", "7700"),
            ("AB  CD", "AB CD"),
            ("AB  CD    ", "AB CD"),
            ("ON   EB  N1", "ON EB N1"),
            ("0000", "0"),
            ("0010", "10"),
            ("PETR4       ", "PETR4"),
        ],
    )
    def test_sanitize(self, raw, expected):
        """Spaces are trimmed and collapsed, leading zeros stripped."""
        assert sanitize_field(raw) == expected


class TestDetectDialect:
    """Test dialect detection from the first register."""

    def test_hist(self):
        """COTAHIST magic selects the HIST layout."""
        assert detect_dialect("00COTAHIST.2024BOVESPA 20240102") is HIST_LAYOUT

    def test_bdin(self):
        """BDIN9999 magic selects the BDIN layout."""
        assert detect_dialect("00BDIN9999BOVESPA 999920240102") is BDIN_LAYOUT

    @pytest.mark.parametrize("first", ["", "garbage", "01COTAHIST", "00cotahist.2024"])
    def test_unknown(self, first):
        """Anything else is an unknown file type."""
        assert detect_dialect(first) is None


class TestDialectLayout:
    """Test register classification and field extraction."""

    def test_hist_register_kinds(self):
        """HIST codes map to header, quotes and trailer only."""
        assert HIST_LAYOUT.register_kind("00...") is RegisterKind.HEADER
        assert HIST_LAYOUT.register_kind("01...") is RegisterKind.QUOTES
        assert HIST_LAYOUT.register_kind("99...") is RegisterKind.TRAILER
        assert HIST_LAYOUT.register_kind("02...") is None

    def test_bdin_register_kinds(self):
        """BDIN quotes are type 02; types 01 and 03-07 are passthrough."""
        assert BDIN_LAYOUT.register_kind("02...") is RegisterKind.QUOTES
        for code in ("01", "03", "04", "05", "06", "07"):
            assert BDIN_LAYOUT.register_kind(code) is RegisterKind.OTHER
        assert BDIN_LAYOUT.register_kind("08") is None

    def test_extract_hist_quote_positions(self):
        """Fields are sliced at their 1-based inclusive positions."""
        register = (
            "01"
            + "2024"
            + "01"
            + "02"
            + "02"
            + "PETR4".ljust(12)
            + "010"
            + "PETROBRAS".ljust(12)
            + "PN  N2".ljust(10)
        )

        fields = HIST_LAYOUT.extract(register, RegisterKind.QUOTES)

        assert fields["ano_pregao"] == "2024"
        assert fields["mes_pregao"] == "1"
        assert fields["dia_pregao"] == "2"
        assert fields["cod_bdi"] == "2"
        assert fields["cod_neg"] == "PETR4"
        assert fields["tp_merc"] == "10"
        assert fields["nom_res"] == "PETROBRAS"
        assert fields["especi"] == "PN N2"
        # Short registers are space padded
        assert fields["pre_abe"] == ""
        assert fields["cod_isi"] == ""

    def test_extract_trailer(self):
        """Trailer fields include the declared register count."""
        register = "99COTAHIST.2024BOVESPA 20240102" + "00000000003"

        fields = HIST_LAYOUT.extract(register, RegisterKind.TRAILER)

        assert fields == {
            "nome_arquivo": "COTAHIST.2024",
            "codigo_origem": "BOVESPA",
            "data_geracao": "20240102",
            "total_registros": "3",
        }

    def test_other_registers_carry_no_fields(self):
        """Passthrough registers have no field table."""
        with pytest.raises(ValueError):
            BDIN_LAYOUT.spans(RegisterKind.OTHER)

    def test_hist_map_quote_uses_quote_register(self):
        """HIST quotes carry every neutral field themselves."""
        quote_fields = {name: f"q-{name}" for name in HIST_LAYOUT.quote}

        mapped = HIST_LAYOUT.map_quote({"ano_pregao": "1999"}, quote_fields)

        assert set(mapped) == set(QUOTE_FIELD_NAMES)
        assert mapped["ano_pregao"] == "q-ano_pregao"
        assert mapped["mod_ref"] == "q-mod_ref"

    def test_bdin_map_quote_takes_date_from_header(self):
        """BDIN trading date comes from the header and currency is constant."""
        header_fields = {"ano_pregao": "2024", "mes_pregao": "1", "dia_pregao": "2"}
        quote_fields = {name: f"q-{name}" for name in BDIN_LAYOUT.quote}

        mapped = BDIN_LAYOUT.map_quote(header_fields, quote_fields)

        assert set(mapped) == set(QUOTE_FIELD_NAMES)
        assert (mapped["ano_pregao"], mapped["mes_pregao"], mapped["dia_pregao"]) == (
            "2024",
            "1",
            "2",
        )
        assert mapped["mod_ref"] == "R$"
        assert mapped["cod_neg"] == "q-cod_neg"

    def test_dialect_tags(self):
        """Each layout knows its dialect."""
        assert HIST_LAYOUT.dialect is FileDialect.HIST
        assert BDIN_LAYOUT.dialect is FileDialect.BDIN

"""Positional layouts of Bovespa file registers. 📐

Two incompatible dialects exist for the same conceptual file:

- **HIST**: subset of B3 layout document ``SeriesHistoricas_Layout.pdf`` (COTAHIST files).
- **BDIN**: subset of B3 layout document ``BDIN_Bovespa_v11.pdf`` (daily bulletin files).

Field positions are 1-based, inclusive character ranges. They are looked
up, never computed. Each dialect also knows how to present a quote
register through one dialect-neutral set of field names, so everything
downstream of the parser is dialect-agnostic.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping

FieldSpan = tuple[int, int]

HEADER_MAGIC_LENGTH = 10


class FileDialect(Enum):
    """Supported Bovespa file dialects."""

    HIST = "HIST"
    BDIN = "BDIN"


class RegisterKind(Enum):
    """Structural role of a register inside a Bovespa file."""

    HEADER = "header"
    QUOTES = "quotes"
    TRAILER = "trailer"
    OTHER = "other"


# Dialect-neutral field names of a quote, as seen by the filter & converter
QUOTE_FIELD_NAMES = (
    "ano_pregao",
    "mes_pregao",
    "dia_pregao",
    "cod_bdi",
    "cod_neg",
    "tp_merc",
    "nom_res",
    "especi",
    "mod_ref",
    "pre_abe",
    "pre_max",
    "pre_min",
    "pre_med",
    "pre_ult",
    "tot_neg",
    "qua_tot",
    "vol_tot",
    "fat_cot",
    "cod_isi",
)

_SPACE_RUNS = re.compile(r" {2,}")


def sanitize_field(text: str) -> str:
    """Normalize the raw text of a fixed-width field. 🧹

    Strips surrounding spaces, collapses internal runs of spaces to a single
    space, then strips leading zeros without ever consuming the last
    character (an all-zero field keeps one ``"0"``).

    Args:
        text: Raw field text, as sliced from the register.

    Returns:
        Sanitized field text.

    Example:
        >>> sanitize_field("  007700  ")
        '7700'
        >>> sanitize_field("AB  CD    ")
        'AB CD'
        >>> sanitize_field("0000")
        '0'
        >>> sanitize_field("     ")
        ''
    """
    text = _SPACE_RUNS.sub(" ", text.strip(" "))
    stripped = text.lstrip("0")
    if not stripped and text:
        return text[-1]
    return stripped


@dataclass(frozen=True)
class DialectLayout:
    """Field tables and register classification rules of one dialect.

    Attributes:
        dialect: Dialect these tables describe.
        magic: First characters of the header register identifying the dialect.
        register_kinds: Two-character type code -> register kind.
        header: Header register field spans.
        quote: Quote register field spans.
        trailer: Trailer register field spans.
        trailer_checked_fields: Fields that must match between header and trailer.
        header_sourced_fields: Quote fields that come from the header register.
        constant_fields: Quote fields with a fixed value for the whole dialect.
    """

    dialect: FileDialect
    magic: str
    register_kinds: Mapping[str, RegisterKind]
    header: Mapping[str, FieldSpan]
    quote: Mapping[str, FieldSpan]
    trailer: Mapping[str, FieldSpan]
    trailer_checked_fields: tuple[str, ...]
    header_sourced_fields: tuple[str, ...] = ()
    constant_fields: Mapping[str, str] = field(default_factory=dict)

    def register_kind(self, register: str) -> RegisterKind | None:
        """Classify a register by its type code, or None if the code is unknown."""
        return self.register_kinds.get(register[:2])

    def spans(self, kind: RegisterKind) -> Mapping[str, FieldSpan]:
        """Field spans of the given register kind."""
        if kind is RegisterKind.HEADER:
            return self.header
        if kind is RegisterKind.QUOTES:
            return self.quote
        if kind is RegisterKind.TRAILER:
            return self.trailer
        raise ValueError(f"{kind.value} registers carry no fields")

    def extract(self, register: str, kind: RegisterKind) -> dict[str, str]:
        """Slice and sanitize every field of a register.

        Args:
            register: One line of the file, without line terminator.
            kind: Kind the register was classified as.

        Returns:
            Field name -> sanitized text.
        """
        spans = self.spans(kind)
        width = max(end for _, end in spans.values())
        padded = register.ljust(width)
        return {
            name: sanitize_field(padded[start - 1 : end])
            for name, (start, end) in spans.items()
        }

    def map_quote(
        self, header_fields: Mapping[str, str], quote_fields: Mapping[str, str]
    ) -> dict[str, str]:
        """Present a quote register through the dialect-neutral field names.

        Args:
            header_fields: Sanitized fields of this file's header register.
            quote_fields: Sanitized fields of the quote register.

        Returns:
            Mapping with exactly the keys of ``QUOTE_FIELD_NAMES``.
        """
        mapped = {}
        for name in QUOTE_FIELD_NAMES:
            if name in self.constant_fields:
                mapped[name] = self.constant_fields[name]
            elif name in self.header_sourced_fields:
                mapped[name] = header_fields[name]
            else:
                mapped[name] = quote_fields[name]
        return mapped


HIST_LAYOUT = DialectLayout(
    dialect=FileDialect.HIST,
    magic="00COTAHIST",
    register_kinds=MappingProxyType(
        {
            "00": RegisterKind.HEADER,
            "01": RegisterKind.QUOTES,
            "99": RegisterKind.TRAILER,
        }
    ),
    header=MappingProxyType(
        {
            "nome_arquivo": (3, 15),
            "codigo_origem": (16, 23),
            "data_geracao": (24, 31),
        }
    ),
    quote=MappingProxyType(
        {
            "ano_pregao": (3, 6),
            "mes_pregao": (7, 8),
            "dia_pregao": (9, 10),
            "cod_bdi": (11, 12),
            "cod_neg": (13, 24),
            "tp_merc": (25, 27),
            "nom_res": (28, 39),
            "especi": (40, 49),
            "mod_ref": (53, 56),
            "pre_abe": (57, 69),
            "pre_max": (70, 82),
            "pre_min": (83, 95),
            "pre_med": (96, 108),
            "pre_ult": (109, 121),
            "tot_neg": (148, 152),
            "qua_tot": (153, 170),
            "vol_tot": (171, 188),
            "fat_cot": (211, 217),
            "cod_isi": (231, 242),
        }
    ),
    trailer=MappingProxyType(
        {
            "nome_arquivo": (3, 15),
            "codigo_origem": (16, 23),
            "data_geracao": (24, 31),
            "total_registros": (32, 42),
        }
    ),
    trailer_checked_fields=("nome_arquivo", "codigo_origem", "data_geracao"),
)

BDIN_LAYOUT = DialectLayout(
    dialect=FileDialect.BDIN,
    magic="00BDIN9999",
    register_kinds=MappingProxyType(
        {
            "00": RegisterKind.HEADER,
            "01": RegisterKind.OTHER,
            "02": RegisterKind.QUOTES,
            "03": RegisterKind.OTHER,
            "04": RegisterKind.OTHER,
            "05": RegisterKind.OTHER,
            "06": RegisterKind.OTHER,
            "07": RegisterKind.OTHER,
            "99": RegisterKind.TRAILER,
        }
    ),
    header=MappingProxyType(
        {
            "nome_arquivo": (3, 10),
            "codigo_origem": (11, 18),
            "codigo_destino": (19, 22),
            "data_geracao": (23, 30),
            "ano_pregao": (31, 34),
            "mes_pregao": (35, 36),
            "dia_pregao": (37, 38),
            "hora_geracao": (39, 42),
        }
    ),
    quote=MappingProxyType(
        {
            "cod_bdi": (3, 4),
            "nom_res": (35, 46),
            "especi": (47, 56),
            "cod_neg": (58, 69),
            "tp_merc": (70, 72),
            "pre_abe": (91, 101),
            "pre_max": (102, 112),
            "pre_min": (113, 123),
            "pre_med": (124, 134),
            "pre_ult": (135, 145),
            "tot_neg": (174, 178),
            "qua_tot": (179, 193),
            "vol_tot": (194, 210),
            "fat_cot": (246, 252),
            "cod_isi": (266, 277),
        }
    ),
    trailer=MappingProxyType(
        {
            "nome_arquivo": (3, 10),
            "codigo_origem": (11, 18),
            "codigo_destino": (19, 22),
            "data_geracao": (23, 30),
            "total_registros": (31, 39),
        }
    ),
    trailer_checked_fields=(
        "nome_arquivo",
        "codigo_origem",
        "codigo_destino",
        "data_geracao",
    ),
    # The bulletin covers a single trading day, declared once in the header
    header_sourced_fields=("ano_pregao", "mes_pregao", "dia_pregao"),
    constant_fields=MappingProxyType({"mod_ref": "R$"}),
)

LAYOUTS: Mapping[FileDialect, DialectLayout] = MappingProxyType(
    {FileDialect.HIST: HIST_LAYOUT, FileDialect.BDIN: BDIN_LAYOUT}
)


def detect_dialect(first_register: str) -> DialectLayout | None:
    """Pick the dialect layout from the first register's magic prefix. 🔍

    Args:
        first_register: First line of a Bovespa file.

    Returns:
        Matching layout, or None for an unknown file type.

    Example:
        >>> detect_dialect("00COTAHIST.2024BOVESPA 20240102").dialect
        <FileDialect.HIST: 'HIST'>
        >>> detect_dialect("garbage") is None
        True
    """
    magic = first_register[:HEADER_MAGIC_LENGTH]
    for layout in LAYOUTS.values():
        if magic == layout.magic:
            return layout
    return None

"""Bovespa file ingestion: layouts, parsing, filtering and batching. 📥"""

from cotalake.ingest.layouts import (
    BDIN_LAYOUT,
    HIST_LAYOUT,
    FileDialect,
    RegisterKind,
    detect_dialect,
    sanitize_field,
)
from cotalake.ingest.parser import BovespaFileParser, parse_bovespa_file

__all__ = [
    # Layouts 📐
    "FileDialect",
    "RegisterKind",
    "HIST_LAYOUT",
    "BDIN_LAYOUT",
    "detect_dialect",
    "sanitize_field",
    # Parsing 📄
    "BovespaFileParser",
    "parse_bovespa_file",
]

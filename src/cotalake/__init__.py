"""CotaLake: Bovespa daily quotes in a per-stock binary history database."""

__version__ = "0.1.0"

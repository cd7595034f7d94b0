"""Configuration settings for CotaLake application."""

import logging
from pathlib import Path

from pydantic import computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings using Pydantic BaseSettings."""

    # Local filesystem storage configuration
    database_dir: str = "data/bovespa"  # One binary file per stock lives here

    # Bookkeeping files inside the database directory (must stay hidden)
    revision_marker_name: str = ".revision_marker"
    temp_file_name: str = ".stock.tmp"

    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_path(self) -> str:
        """Absolute path of the database directory (never created implicitly)."""
        return str(Path(self.database_dir).resolve())

    @computed_field  # type: ignore[prop-decorator]
    @property
    def revision_marker_path(self) -> str:
        """Path of the database revision marker file."""
        return str(Path(self.database_path) / self.revision_marker_name)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def temp_file_path(self) -> str:
        """Path of the scratch file a stock history is written to before promotion."""
        return str(Path(self.database_path) / self.temp_file_name)

    @field_validator("revision_marker_name", "temp_file_name")
    @classmethod
    def _ensure_hidden_file_name(_cls, value: str) -> str:
        """Bookkeeping files must be hidden so stock listing skips them."""
        if not value.startswith(".") or value in (".", ".."):
            raise ValueError(f"{value!r} must be a hidden file name (leading '.')")
        if "/" in value or "\\" in value:
            raise ValueError(f"{value!r} must be a plain file name, not a path")
        return value

    @field_validator("log_level")
    @classmethod
    def _ensure_known_log_level(_cls, value: str) -> str:
        """Accept only the standard logging level names."""
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level {value!r}")
        return level

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()

"""Mini README: Centralised configuration model and helpers for FyNov.

Structure:
    * FynovSettings - Pydantic settings describing storage, locale and server.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read ``FYNOV_*`` environment variables (or a
    local ``.env`` file). The currency fields drive ``format_currency`` and the
    storage fields decide where the key-value backend keeps its JSON blobs.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FynovSettings(BaseSettings):
    """Runtime configuration for the FyNov tracker."""

    model_config = SettingsConfigDict(
        env_prefix="FYNOV_",
        env_file=".env",
        case_sensitive=False,
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    data_directory: Path = Field(
        Path("data"),
        description="Directory holding one JSON file per persisted key.",
    )
    storage_backend: Literal["file", "memory"] = Field(
        "file",
        description="Key-value backend: JSON files on disk or a throwaway in-memory map.",
    )
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the web interface to bind to.",
    )
    interface_port: int = Field(
        8000,
        description="Default port the web interface exposes.",
        ge=1,
        le=65535,
    )
    currency_symbol: str = Field("R$", description="Symbol prefixed to formatted amounts.")
    thousands_separator: str = Field(".", description="Digit grouping separator.")
    decimal_separator: str = Field(",", description="Separator between units and cents.")
    log_level: str = Field("INFO", description="Root logger level applied by the CLI and the web app.")

    @field_validator("data_directory", mode="before")
    @classmethod
    def _expand_path(cls, value: Optional[str | Path]) -> Path:
        """Ensure configured paths expand user directories and exist."""

        path = Path(value).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path


@lru_cache()
def get_settings() -> FynovSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return FynovSettings()

"""
Application settings.

Values come from environment variables prefixed with ``PICNIC_`` (or a local
``.env`` file), e.g. ``PICNIC_YEARS_BACK=20``.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the planner, CLI and flows."""

    model_config = SettingsConfigDict(
        env_prefix="PICNIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "picnic-planner"
    app_env: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    data_dir: Path = Path("data")
    preferences_path: Path | None = None

    forecast_days: int = Field(default=14, ge=1, le=16)
    years_back: int = Field(default=10, ge=1, le=50)

    # Seconds
    request_timeout: float = Field(default=30.0, gt=0)
    historical_timeout: float = Field(default=60.0, gt=0)

    max_workers: int = Field(default=10, ge=1)

    forecast_cache_minutes: int = Field(default=10, ge=0)
    historical_cache_hours: int = Field(default=24, ge=0)


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()

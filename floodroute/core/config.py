"""
Environment configuration — single source of truth for all settings.

Uses pydantic-settings for type-safe config with .env file support.
All values have sensible defaults for local development.

Usage:
    from floodroute.core.config import settings
    print(settings.SIMULATOR_SEED)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application-wide settings loaded from environment variables or .env file.

    Precedence: env var > .env file > default value
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ── Application ──
    APP_NAME: str = "Flood Route Risk Engine"
    APP_VERSION: str = "1.0.0"
    ENVIRONMENT: str = "development"  # development | staging | production
    LOG_LEVEL: str = "INFO"  # DEBUG | INFO | WARNING | ERROR | CRITICAL

    # ── Weather simulation ──
    SIMULATOR_SEED: Optional[int] = 42  # None → time-derived seed

    # ── Forecast window ──
    DEFAULT_FORECAST_DAYS: int = 5  # used when the requested count is out of range
    MIN_FORECAST_DAYS: int = 1
    MAX_FORECAST_DAYS: int = 7
    COMPOSITE_FORECAST_DAYS: int = 3  # window for composite location risk

    # ── Route scoring ──
    RISK_POINT_THRESHOLD: int = 5  # waypoint is a risk point when local risk > this

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT == "production"


@lru_cache()
def get_settings() -> Settings:
    """Cached settings singleton."""
    return Settings()


settings = get_settings()

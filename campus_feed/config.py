"""Application configuration settings."""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./campus_feed.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    app_timezone: str = Field(
        default="UTC",
        description="IANA timezone name (or UTC offset such as UTC+05:30) used for dates",
    )
    event_grace_days: int = Field(
        default=7,
        description="Days an event stays visible after its date when no expiry is set",
        ge=0,
    )
    enable_sweeper: bool = Field(
        default=True,
        description="Schedule the periodic cleanup of expired content",
    )
    sweep_on_startup: bool = Field(
        default=True,
        description="Run one cleanup pass when the service starts",
    )
    sweep_interval_hours: int = Field(
        default=24,
        description="Hours between two scheduled cleanup passes",
        gt=0,
    )
    fanout_batch_size: int = Field(
        default=500,
        description="Number of delivery records inserted per statement during fan-out",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_log_level(self) -> "Settings":
        level = self.log_level.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"LOG_LEVEL must be a standard logging level, got '{self.log_level}'")
        self.log_level = level
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

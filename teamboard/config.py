"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify JWT bearer tokens", min_length=1
    )
    app_timezone: str = Field(
        default="UTC",
        description="Timezone used for local midnight and reminder windows",
    )
    enable_scheduler: bool = Field(
        default=True,
        description="Start the reminder scheduler together with the application",
    )
    reminder_interval_minutes: int = Field(
        default=30,
        description="Minutes between two runs of the short reminder cycle",
        gt=0,
    )
    reminder_warmup_seconds: int = Field(
        default=60,
        description="Delay before the first short reminder cycle after startup",
        ge=0,
    )
    daily_reminder_warmup_seconds: int = Field(
        default=120,
        description="Delay before the early daily digest run after startup",
        ge=0,
    )
    completed_task_window_minutes: int = Field(
        default=60,
        description="Look-back window used to detect recently completed tasks",
        gt=0,
    )
    notification_list_limit: int = Field(
        default=50,
        description="Default number of notifications returned by the listing endpoint",
        gt=0,
    )
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

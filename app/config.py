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
        default="sqlite:///./complaints.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key for signing JWT tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=480,
        description="Number of minutes before access tokens expire",
        gt=0,
    )
    app_timezone: str = Field(
        default="Asia/Bangkok",
        description="Timezone used to stamp persisted records",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Browser origins allowed to call the API",
    )
    max_connections_per_user: int = Field(
        default=3,
        description="Maximum simultaneous push channels kept open per user",
        ge=1,
    )
    notification_poll_interval_seconds: float = Field(
        default=15,
        description="Seconds between feed recomputations for each push session",
        gt=0,
    )
    heartbeat_interval_seconds: float = Field(
        default=30,
        description="Seconds between keepalive frames broadcast to every channel",
        gt=0,
    )
    notification_feed_limit: int = Field(
        default=5,
        description="Number of notifications included in every feed snapshot",
        ge=1,
    )
    notification_channel_max_pending: int = Field(
        default=100,
        description="Frames queued per stream before a stalled client is dropped; 0 disables the bound",
        ge=0,
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]

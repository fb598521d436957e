"""Configuration settings for request-snapshot."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from request_snapshot.observability.constants import (
    DEFAULT_SANITIZE_HEADERS,
    DEFAULT_USER_FIELDS,
)

DEFAULT_MAX_DEPTH = 100


class Settings(BaseSettings):
    """Process-wide defaults loaded from environment variables."""

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Masking defaults
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=1)
    sanitize_headers: list[str] = list(DEFAULT_SANITIZE_HEADERS)
    user_fields: list[str] = list(DEFAULT_USER_FIELDS)

    model_config = SettingsConfigDict(
        env_prefix="REQUEST_SNAPSHOT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

"""
Centralized configuration for the wallet-users backend.

All settings are loaded from environment variables with sensible defaults.
"""

from functools import lru_cache
from typing import Literal
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "wallet-users"
    app_version: str = "0.1.0"
    log_level: str = "INFO"

    # Tokens
    jwt_secret: str = ""
    jwt_access_ttl: int = Field(default=900, gt=0)  # seconds
    jwt_refresh_ttl: int = Field(default=2_592_000, gt=0)  # seconds

    # Sessions
    max_user_sessions: int = Field(default=5, ge=0)

    # Google sign-in (OAuth client id the ID token must be issued for)
    google_client_id: str = ""

    # Storage
    storage_backend: Literal["postgres", "memory"] = "postgres"
    database_url: str = ""
    db_pool_min: int = 1
    db_pool_max: int = 10

    # Passwords
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # How PUT /settings treats an unknown first day of week
    first_day_of_week_policy: Literal["strict", "fallback"] = "strict"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()

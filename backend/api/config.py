"""
API configuration using Pydantic Settings.

Loads configuration from environment variables with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """API configuration settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="WALLET_USERS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8088
    debug: bool = False
    reload: bool = False

    # Upper bound on a single service call made by a route (seconds)
    request_timeout_seconds: float = Field(default=60.0, gt=0)


def get_settings() -> APISettings:
    """Get settings instance."""
    return APISettings()

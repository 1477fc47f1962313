"""
Application configuration using Pydantic Settings.

All configuration is loaded from environment variables (or a local .env file).
"""

from functools import lru_cache
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # Application
    APP_NAME: str = "StudySync"
    APP_ENV: str = "development"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    SECRET_KEY: str = ""  # Required - salts vote keys

    # Authentication (tokens are issued by the external identity provider)
    AUTH_JWT_SECRET: str = ""  # Required - shared signing secret
    AUTH_JWT_ALGORITHM: str = "HS256"
    AUTH_JWT_AUDIENCE: str = "authenticated"

    @field_validator("SECRET_KEY", "AUTH_JWT_SECRET")
    @classmethod
    def validate_required_secrets(cls, v: str, info: Any) -> str:
        """Validate that required secrets are set."""
        if not v:
            raise ValueError(f"{info.field_name} must be set in environment")
        return v

    # Azure Cosmos DB (row store)
    AZURE_COSMOS_ENDPOINT: str | None = None  # RBAC mode (Azure deployment)
    AZURE_COSMOS_CONNECTION_STRING: str | None = None  # Local emulator only
    AZURE_COSMOS_DATABASE: str = "studysync"
    AZURE_COSMOS_DISABLE_SSL: bool = False

    # CORS - stored as comma-separated string to avoid pydantic-settings JSON parsing issues
    CORS_ORIGINS: str = "http://localhost:3000"

    @property
    def cors_origins_list(self) -> list[str]:
        """Get CORS origins as a list."""
        import json

        try:
            return json.loads(self.CORS_ORIGINS)
        except json.JSONDecodeError:
            return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        return self.APP_ENV in ("development", "test") or self.DEBUG

    # Calculator
    CALCULATOR_HISTORY_LIMIT: int = 10

    # Polls
    POLL_MIN_OPTIONS: int = 2
    POLL_MAX_OPTIONS: int = 6

    # Feeds
    SEARCH_RESULT_LIMIT: int = 20
    HOME_PINNED_LIMIT: int = 5
    HOME_RECENT_LIMIT: int = 10

    # Timetable alerts
    TIMETABLE_ALERTS_ENABLED: bool = True
    TIMETABLE_TIMEZONE: str = "UTC"  # Wall-clock zone event times are expressed in
    TIMETABLE_ALERT_INBOX_SIZE: int = 50


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()

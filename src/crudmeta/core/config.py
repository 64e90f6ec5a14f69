"""Configuration management for crudmeta.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables and .env files.
    All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="CRUDMETA_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "crudmeta"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False

    # Database Settings
    database_url: str = Field(
        default="sqlite+aiosqlite:///./crudmeta_data/crudmeta.db",
        description="Async SQLAlchemy URL holding users, roles and permissions",
    )
    db_echo: bool = False

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    # Security Settings
    system_user_name: str = Field(
        default="system",
        description="Login name reported when no user is logged in (tests, batch jobs)",
    )

    @field_validator("system_user_name")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject a blank system user name."""
        if not v or not v.strip():
            raise ValueError("System user name must not be blank")
        return v.strip()

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment == "development"

    @property
    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment == "testing"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    This function caches the settings instance to avoid reloading
    configuration on every call. Settings are loaded once at startup.

    Returns:
        Settings: Cached application settings instance.
    """
    return Settings()

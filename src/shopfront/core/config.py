"""Configuration management for Shopfront.

This module uses Pydantic Settings to load and validate configuration from
environment variables and .env files. Configuration is loaded at application
startup and is immutable during runtime.
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Development-only signing secret. Never deploy with this value.
DEFAULT_TOKEN_SECRET = "dev-only-insecure-token-secret-change-in-production"

DEFAULT_TOKEN_TTL_SECONDS = 24 * 60 * 60


class Settings(BaseSettings):
    """Application configuration settings.

    Settings are loaded from environment variables (prefix ``SHOPFRONT_``)
    and .env files. All configuration values are validated at startup.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="SHOPFRONT_",
        case_sensitive=False,
        extra="ignore",
    )

    # Application Settings
    app_name: str = "Shopfront"
    app_version: str = "0.1.0"
    environment: Literal["development", "production", "testing"] = "development"
    debug: bool = False
    api_prefix: str = "/api/v1"

    # Server Settings
    host: str = "0.0.0.0"
    port: int = 8000
    workers: int = 1

    # Database Settings
    database_url: str = "sqlite+aiosqlite:///./shop_data/shopfront.db"
    db_echo: bool = False

    # Token Settings
    token_secret: str = Field(
        default=DEFAULT_TOKEN_SECRET,
        description="HMAC secret used to sign bearer tokens",
    )
    token_ttl_seconds: int = Field(default=DEFAULT_TOKEN_TTL_SECONDS, gt=0)

    # Password Hashing Settings (Argon2id)
    password_memory_cost: int = Field(default=65536, ge=8, description="Memory cost in KiB")
    password_time_cost: int = Field(default=3, ge=1, description="Number of iterations")
    password_parallelism: int = Field(default=1, ge=1, description="Degree of parallelism")

    # CORS Settings
    cors_origins: list[str] = Field(default=["http://localhost:3000", "http://localhost:5173"])
    cors_allow_credentials: bool = True
    cors_allow_methods: list[str] = Field(default=["*"])
    cors_allow_headers: list[str] = Field(default=["*"])

    # Logging Settings
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: str | list[str]) -> list[str]:
        """Parse CORS origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",")]
        return v

    @field_validator("token_secret")
    @classmethod
    def validate_token_secret(cls, v: str) -> str:
        """Fall back to the development secret when the value is blank."""
        if not v.strip():
            return DEFAULT_TOKEN_SECRET
        return v

    @model_validator(mode="after")
    def validate_production_secret(self) -> "Settings":
        """Refuse to run in production with the development signing secret."""
        if self.is_production and self.uses_default_token_secret:
            raise ValueError(
                "SHOPFRONT_TOKEN_SECRET must be set in production; "
                "the built-in development secret is not allowed."
            )
        return self

    @model_validator(mode="after")
    def validate_sqlite_workers(self) -> "Settings":
        """Validate that SQLite is not used with multiple workers."""
        if self.workers > 1 and self.database_url.startswith("sqlite"):
            raise ValueError(
                "SQLite does not support multiple worker processes. "
                f"Requested {self.workers} workers, but SQLite requires workers=1. "
                "Either use --workers 1 or switch to PostgreSQL."
            )
        return self

    @property
    def uses_default_token_secret(self) -> bool:
        """Whether tokens are being signed with the development fallback."""
        return self.token_secret == DEFAULT_TOKEN_SECRET

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

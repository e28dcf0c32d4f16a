# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.DATA_DIR)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
# =============================================================================

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Every value has a development default, so the catalog starts with no
    configuration at all. All settings are accessed via the global
    `settings` instance.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    # -------------------------------------------------------------------------
    # Data Sources
    # -------------------------------------------------------------------------
    # Flat JSON files, one array (or keyed object) per file

    DATA_DIR: str = Field(
        default="./data",
        description="Directory holding the catalog JSON files"
    )

    WEBSITES_FILE: str = Field(
        default="websites.json",
        description="Website records file name"
    )

    AUTH_CREDENTIALS_FILE: str = Field(
        default="auth-credentials.json",
        description="Authentication credentials file name"
    )

    ASSETS_FILE: str = Field(
        default="assets.json",
        description="Asset metadata file name"
    )

    # -------------------------------------------------------------------------
    # Caching
    # -------------------------------------------------------------------------

    CACHE_TTL_SECONDS: float = Field(
        default=300,
        gt=0,
        description="How long loaded data files stay cached (seconds)"
    )

    CACHE_CONTROL_MAX_AGE: int = Field(
        default=3600,
        ge=0,
        description="max-age sent in Cache-Control on successful responses"
    )

    # -------------------------------------------------------------------------
    # CORS
    # -------------------------------------------------------------------------

    # Comma-separated string that gets parsed; "*" allows every origin
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,https://localhost:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    CORS_ALLOW_CREDENTIALS: bool = Field(
        default=True,
        description="Send Access-Control-Allow-Credentials"
    )

    CORS_MAX_AGE: int = Field(
        default=86400,
        ge=0,
        description="Preflight Access-Control-Max-Age (seconds)"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "http://localhost:3000, https://myapp.com" -> ["http://localhost:3000", "https://myapp.com"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def data_path(self) -> Path:
        return Path(self.DATA_DIR)

    @property
    def cache_control_header(self) -> str:
        return f"public, max-age={self.CACHE_CONTROL_MAX_AGE}"

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.ENVIRONMENT == "production"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()

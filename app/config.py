# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.BASE_FULL_URL)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Templates and the exception presenter do not read Settings directly; they
# go through core.config_store.ConfigStore, built from these values.
# =============================================================================

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.models.environment import Environment

# Project root (the directory holding app/, core/, lib/)
BASE_DIRECTORY = Path(__file__).resolve().parents[1]


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses pydantic-settings to:
    - Automatically load from .env file
    - Validate types and constraints
    - Provide sensible defaults for development

    Relative directories are resolved against the project root.
    """

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: str = Field(
        default="production",
        description="Runtime environment: development, production or test (dev/prod accepted)"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable verbose logging"
    )

    VERSION: str = Field(
        default="undefined",
        description="Application version shown in templates"
    )

    SECRET_KEY: str = Field(
        default="dev-secret-key-change-in-production",
        min_length=16,
        description="Secret key for signing the session cookie"
    )

    BASE_FULL_URL: str = Field(
        default="http://localhost:8000",
        description="Absolute base URL, without trailing slash"
    )

    # -------------------------------------------------------------------------
    # Directories
    # -------------------------------------------------------------------------

    ASSETS_DIRECTORY: str = Field(
        default="assets",
        description="Public assets directory, relative to BASE_FULL_URL"
    )

    STORAGE_DIRECTORY: str = Field(
        default="storage",
        description="Writable directory for the template cache and the exception log"
    )

    TEMPLATES_DIRECTORY: str = Field(
        default="app/templates",
        description="Root directory of the view templates"
    )

    FIXTURES_DIRECTORY: str = Field(
        default="tests/fixtures",
        description="Test fixtures (templates, catalogs) used when ENVIRONMENT=test"
    )

    TRANSLATIONS_DIRECTORY: str = Field(
        default="app/translations",
        description="Root directory of the per-locale message catalogs"
    )

    # -------------------------------------------------------------------------
    # Output
    # -------------------------------------------------------------------------

    GZIP_ENABLED: bool = Field(
        default=False,
        description="Compress rendered pages when the client accepts gzip"
    )

    # -------------------------------------------------------------------------
    # Cookies
    # -------------------------------------------------------------------------

    COOKIE_PATH: str = Field(default="/", description="Cookie path attribute")
    COOKIE_DOMAIN: str | None = Field(default=None, description="Cookie domain attribute")
    COOKIE_SECURE: bool = Field(default=False, description="Send cookies over HTTPS only")

    # -------------------------------------------------------------------------
    # Translation
    # -------------------------------------------------------------------------

    TRANS_LOCALE: str = Field(default="en_EN", description="Default locale")
    TRANS_FALLBACK_LOCALE: str = Field(
        default="en_EN",
        description="Locale consulted when a message is missing"
    )

    # -------------------------------------------------------------------------
    # Routing
    # -------------------------------------------------------------------------

    ROUTER_USE_HTTPD_REWRITE: bool = Field(
        default=True,
        description="Generate absolute URLs; otherwise root-relative paths"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def environment(self) -> Environment:
        """Parsed environment; unknown values fall back to production."""
        return Environment.from_value(self.ENVIRONMENT)

    @property
    def is_production(self) -> bool:
        """Check if running in production mode."""
        return self.environment is Environment.PRODUCTION

    def resolve_directory(self, value: str) -> Path:
        """
        Resolve a configured directory against the project root.

        Example: "storage" -> /srv/tricolore/storage
        """
        path = Path(value)
        return path if path.is_absolute() else BASE_DIRECTORY / path


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once.
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()

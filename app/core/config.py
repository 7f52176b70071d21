"""Application configuration using Pydantic Settings.

Configuration is environment-aware:
- APP_ENV determines which .env file to load
- Supports: development, testing, staging, production
- Each environment has its own .env.{environment} file
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Determine which environment to load (default: development)
APP_ENV = os.getenv("APP_ENV", "development")

# Project root (so .env resolution doesn't depend on current working directory)
PROJECT_ROOT = Path(__file__).resolve().parents[2]

# Map environments to their respective .env files (relative to PROJECT_ROOT)
ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

# Select the .env file for the current environment
_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


class FortuneSettings(BaseSettings):
    """Fortune cooldown and public URL configuration.

    Variable names match the deployment platforms that set them, so no prefix
    is applied (``BASE_URL``, ``VERCEL_URL``, ``FORTUNE_COOLDOWN_HOURS``).
    """

    base_url: str | None = Field(
        None,
        description="Public base URL of the deployment (highest precedence)",
    )
    vercel_url: str | None = Field(
        None,
        description="Host name injected by Vercel, served over https",
    )
    fortune_cooldown_hours: int = Field(
        24,
        description="Hours a user must wait between two fortunes",
        ge=0,
    )

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


class ServerSettings(BaseSettings):
    """Bind address used when running the service directly."""

    host: str = Field("0.0.0.0", description="Interface to bind")
    port: int = Field(3000, description="TCP port to listen on", ge=1, le=65535)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    cors_allow_origins: str = Field(
        "*",
        description="Comma-separated list of origins allowed by CORS",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging output configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field(
        "json",
        description="Log format: 'json' for structured output or 'plain'",
    )
    output: str = Field(
        "stdout",
        description="Log destination: 'stdout' or 'file'",
    )
    file_path: str | None = Field(
        None,
        description="Log file path when output is 'file' (default logs/app.log)",
    )
    max_bytes: int = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (0 disables rotation)",
        ge=0,
    )
    backup_count: int = Field(
        5,
        description="Number of rotated log files to keep",
        ge=0,
    )
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to read and echo the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


def _build_fortune_settings() -> FortuneSettings:
    return FortuneSettings()


def _build_server_settings() -> ServerSettings:
    return ServerSettings()


def _build_app_settings() -> AppSettings:
    return AppSettings()


def _build_log_settings() -> LogSettings:
    return LogSettings()


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are malformed.

    Environments:
    - development: Local development
    - testing: Automated tests (uses .env.testing)
    - staging: Pre-production (uses .env.staging)
    - production: Production deployment (uses .env.production)
    """

    app_env: str = APP_ENV
    fortune: FortuneSettings = Field(default_factory=_build_fortune_settings)
    server: ServerSettings = Field(default_factory=_build_server_settings)
    app: AppSettings = Field(default_factory=_build_app_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
# Nested settings are created via default_factory so env loading works.
settings = Settings()

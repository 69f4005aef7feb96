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

ENV_FILE_MAP = {
    "development": ".env.development",
    "testing": ".env.testing",
    "staging": ".env.staging",
    "production": ".env.production",
}

_env_filename = ENV_FILE_MAP.get(APP_ENV, ".env.development")
_env_path = PROJECT_ROOT / _env_filename

# Only load from file if it exists (production might inject via env vars only)
_env_file = str(_env_path) if _env_path.is_file() else None


# Load .env file early to populate os.environ before creating nested settings
# This is necessary because Pydantic nested BaseSettings don't inherit env_file
if _env_file:
    from dotenv import load_dotenv
    load_dotenv(_env_file, override=True)


def _build_app_settings() -> "AppSettings":
    """Build app settings from environment.

    BaseSettings reads its values from the environment; the type ignore keeps
    static checkers from treating fields as required constructor arguments.
    """

    return AppSettings()  # type: ignore[call-arg]


def _build_rate_limit_settings() -> "RateLimitSettings":
    return RateLimitSettings()  # type: ignore[call-arg]


def _build_weather_settings() -> "WeatherSettings":
    return WeatherSettings()  # type: ignore[call-arg]


def _build_log_settings() -> "LogSettings":
    return LogSettings()  # type: ignore[call-arg]


class AppSettings(BaseSettings):
    """Application-wide configuration."""

    debug: bool = Field(
        False,
        description="Enable debug mode with verbose logging",
    )
    site_name: str = Field(
        "Site API",
        description="Site name exposed through the system.site configuration object",
    )
    site_mail: str | None = Field(
        None,
        description="Site-wide sender address exposed through system.site",
    )
    api_key_required: bool = Field(
        True,
        description="Whether API key authentication is required on protected endpoints",
    )
    api_keys: str | None = Field(
        None,
        description="Comma-separated list of valid API keys for authentication",
    )
    config_export_allowlist: str | None = Field(
        None,
        description="Comma-separated configuration names initially exposed via config export",
    )
    seed_file: str | None = Field(
        None,
        description="Optional JSON file with nodes, terms and users to preload",
    )

    model_config = SettingsConfigDict(
        env_prefix="APP_",
        case_sensitive=False,
    )


class RateLimitSettings(BaseSettings):
    """Rate limiting configuration for the governed API prefix."""

    enabled: bool = Field(
        True,
        description="Enable per-client rate limiting",
    )
    limit_per_minute: int = Field(
        60,
        description="Default number of requests allowed per window per client address",
        ge=1,
    )
    window_seconds: int = Field(
        60,
        description="Fixed window length in seconds",
        ge=1,
    )
    path_prefix: str = Field(
        "/api/",
        description="Only requests whose path starts with this prefix are limited",
    )
    fail_open: bool = Field(
        True,
        description="Allow requests when the cache backend fails (False rejects with 503)",
    )
    include_headers: bool = Field(
        True,
        description="Include a Retry-After header when throttling",
    )
    cache_max_entries: int | None = Field(
        100_000,
        description="Capacity of the in-memory shared cache (None for unlimited)",
    )

    model_config = SettingsConfigDict(
        env_prefix="RATE_LIMIT_",
        case_sensitive=False,
    )


class WeatherSettings(BaseSettings):
    """Weather provider configuration (WeatherAPI.com compatible)."""

    api_key: str | None = Field(
        None,
        description="API key for the weather provider",
    )
    base_url: str | None = Field(
        "https://api.weatherapi.com/v1",
        description="Base URL of the weather provider",
    )
    city: str = Field(
        "London",
        description="City used for current conditions",
    )
    cache_ttl_seconds: int = Field(
        3600,
        description="How long fetched weather data is cached",
        ge=1,
    )
    timeout_seconds: float = Field(
        10.0,
        description="Request timeout in seconds",
    )

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_",
        case_sensitive=False,
    )


class LogSettings(BaseSettings):
    """Logging configuration."""

    level: str = Field("INFO", description="Root log level")
    format: str = Field("json", description="Log format: json or plain")
    output: str = Field("stdout", description="Log output: stdout or file")
    file_path: str | None = Field(None, description="Log file path when output=file")
    max_bytes: int | None = Field(
        10 * 1024 * 1024,
        description="Rotate the log file after this many bytes (None disables rotation)",
    )
    backup_count: int = Field(5, description="Number of rotated log files to keep")
    request_id_header: str = Field(
        "X-Request-ID",
        description="Header used to accept and return the request correlation id",
    )

    model_config = SettingsConfigDict(
        env_prefix="LOG_",
        case_sensitive=False,
    )


class Settings(BaseSettings):
    """Main application settings container.

    Automatically loads from the appropriate .env.{APP_ENV} file.
    Raises validation errors on startup if settings are invalid.
    """

    app_env: str = APP_ENV
    app: AppSettings = Field(default_factory=_build_app_settings)
    rate_limit: RateLimitSettings = Field(default_factory=_build_rate_limit_settings)
    weather: WeatherSettings = Field(default_factory=_build_weather_settings)
    log: LogSettings = Field(default_factory=_build_log_settings)

    model_config = SettingsConfigDict(
        case_sensitive=False,
    )


# Global settings instance - composed from domain-specific settings
settings = Settings()

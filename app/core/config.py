"""
Application configuration.

Loads settings from environment variables and .env file.
All configuration is centralized here — no scattered magic strings.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment.

    Attributes:
        project_name: Display name for the API.
        version: Current API version string.
        debug: Enable debug mode. Must be False in production.
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR).
        log_request_bodies: Include request bodies in failure diagnostics.
        rate_limit_enabled: Enforce per-client rate limits.
        rate_limit_default: Default rate limit for rate-limited endpoints.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    project_name: str = "Records API"
    version: str = "0.1.0"
    debug: bool = False
    log_level: str = "INFO"
    log_request_bodies: bool = True
    rate_limit_enabled: bool = True
    rate_limit_default: str = "60/minute"


settings = Settings()

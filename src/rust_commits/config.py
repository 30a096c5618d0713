"""
Configuration management for the Rust commits client.

Every setting has a default, so the library works without any environment.
Values can still be overridden through ``RUST_COMMITS_*`` environment
variables or a ``.env`` file.
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "https://commits.facepunch.com/"
DEFAULT_REPOSITORY = "rust_reboot"


class Settings(BaseSettings):
    """Client settings."""

    model_config = SettingsConfigDict(
        env_prefix="RUST_COMMITS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Commits API
    base_url: str = Field(default=DEFAULT_BASE_URL, description="Commits site URL")
    repository: str = Field(
        default=DEFAULT_REPOSITORY, description="Repository identifier to track"
    )
    request_timeout_seconds: float | None = Field(
        default=None, description="HTTP request timeout (None waits forever)"
    )

    # Polling
    poll_interval_seconds: float = Field(
        default=300, description="Interval between polls in seconds (5 minutes)"
    )

    # Logging configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Ensure the base URL ends with a slash so endpoints append cleanly."""
        if not v.strip():
            raise ValueError("base_url must not be empty")
        return v if v.endswith("/") else v + "/"

    @field_validator("poll_interval_seconds")
    @classmethod
    def validate_poll_interval(cls, v: float) -> float:
        """Validate the polling interval."""
        if v <= 0:
            raise ValueError(f"poll_interval_seconds must be positive, got {v}")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}")
        return v


# Global settings instance - initialized lazily to avoid import-time errors
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def __getattr__(name: str) -> Any:
    """Allow module-level access to settings attributes."""
    if name == "settings":
        return get_settings()
    raise AttributeError(f"module '{__name__}' has no attribute '{name}'")

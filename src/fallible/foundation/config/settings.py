"""Environment-based configuration using pydantic-settings.

Controls how the library reports what happens at its capture boundaries.
Nothing here changes outcome semantics.

Example:
    >>> from fallible.foundation.config import get_settings
    >>> settings = get_settings()
    >>> settings.logging.level
    'INFO'
    >>> settings.capture.log_faults
    True

    # Or with environment variables:
    # FALLIBLE_LOG_LEVEL=DEBUG
    # FALLIBLE_CAPTURE_INCLUDE_TRACEBACK=true
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force colored console output (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        return v.upper() if isinstance(v, str) else v


class CaptureSettings(BaseSettings):
    """What to report when a raised exception is converted into a Failure."""

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_CAPTURE_",
        extra="ignore",
    )

    log_faults: bool = Field(default=True, description="Emit a debug event for every captured fault")
    include_traceback: bool = Field(default=False, description="Attach the formatted traceback to that event")


class FallibleSettings(BaseSettings):
    """Root settings.

    Loads configuration from environment variables with FALLIBLE_ prefix.
    Supports nested configuration and .env files.

    Example environment variables:
        FALLIBLE_DEBUG=true
        FALLIBLE_LOG_LEVEL=DEBUG
        FALLIBLE_LOG_FORMAT=json
        FALLIBLE_CAPTURE_LOG_FAULTS=false
    """

    model_config = SettingsConfigDict(
        env_prefix="FALLIBLE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Enable debug mode")

    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    capture: CaptureSettings = Field(default_factory=CaptureSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """DEBUG when debug mode is on, otherwise the configured level."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> FallibleSettings:
    """Get the global settings instance (cached)."""
    return FallibleSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing).

    After calling this, the next get_settings() call will
    reload configuration from environment.
    """
    get_settings.cache_clear()

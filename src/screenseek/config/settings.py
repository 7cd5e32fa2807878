"""Configuration management for screenseek using pydantic-settings.

Settings can be supplied through environment variables prefixed with
``SCREENSEEK_`` or through a ``.env`` file.
"""

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScreenSeekSettings(BaseSettings):
    """Main configuration settings for screenseek."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="SCREENSEEK_",
        case_sensitive=False,
        extra="ignore",
    )

    # Observer settings
    refresh_interval: float = Field(
        1.0, gt=0.0, description="Default interval between polling ticks in seconds"
    )
    max_workers: int = Field(4, ge=1, description="Worker threads for asynchronous waits")

    # Benchmark settings
    export_path: Path = Field(
        Path("."), description="Directory for diagnostic images of inconsistent finders"
    )

    # Logging settings
    debug_mode: bool = Field(False, description="Enable debug logging")
    log_level: str = Field("INFO", description="Log level (DEBUG, INFO, WARNING, ERROR)")
    log_file: Path | None = Field(None, description="Optional log file")


class DevelopmentSettings(ScreenSeekSettings):
    """Development-specific settings."""

    debug_mode: bool = True
    log_level: str = "DEBUG"


class TestSettings(ScreenSeekSettings):
    """Test-specific settings."""

    __test__ = False

    refresh_interval: float = 0.01
    max_workers: int = 2


# Singleton instance
_settings: ScreenSeekSettings | None = None


def get_settings(env: str | None = None) -> ScreenSeekSettings:
    """Get the singleton settings instance.

    Args:
        env: Environment name ('development', 'test'); falls back to the
            ``SCREENSEEK_ENV`` variable

    Returns:
        ScreenSeekSettings instance
    """
    global _settings

    if _settings is None:
        env_name = env or os.getenv("SCREENSEEK_ENV", "")
        if env_name == "development":
            _settings = DevelopmentSettings()
        elif env_name == "test":
            _settings = TestSettings()
        else:
            _settings = ScreenSeekSettings()

    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (mainly for testing)."""
    global _settings
    _settings = None

"""Configuration package.

Usage:
    from screenseek.config import get_settings

    settings = get_settings()
    settings.refresh_interval
"""

from .settings import (
    DevelopmentSettings,
    ScreenSeekSettings,
    TestSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "ScreenSeekSettings",
    "DevelopmentSettings",
    "TestSettings",
    "get_settings",
    "reset_settings",
]

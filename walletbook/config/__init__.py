"""Configuration package."""

from walletbook.config.settings import (
    AppSettings,
    LocaleSettings,
    Settings,
    StorageSettings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "LocaleSettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "validate_all_settings",
]

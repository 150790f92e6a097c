"""Configuration package."""

from bill_splitter.config.settings import (
    AppSettings,
    CurrencySettings,
    Settings,
    StorageSettings,
    get_settings,
    load_or_defaults,
    validate_all_settings,
)

__all__ = [
    "AppSettings",
    "CurrencySettings",
    "Settings",
    "StorageSettings",
    "get_settings",
    "load_or_defaults",
    "validate_all_settings",
]

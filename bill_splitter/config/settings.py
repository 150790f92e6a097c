"""
Configuration Management for Bill Splitter

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Every section has working defaults so the app starts with no .env at all;
environment variables only override them.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, TypeVar

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SettingsT = TypeVar("SettingsT", bound=BaseSettings)


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BILL_SPLITTER_STORAGE_",
        extra="ignore"
    )

    path: Path = Field(
        default=Path(".bill_splitter") / "storage.json",
        description="JSON file backing the local key-value store"
    )
    participants_key: str = Field(
        default="participants",
        min_length=1,
        description="Key under which the participant list is stored"
    )


class CurrencySettings(BaseSettings):
    """Display currency configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BILL_SPLITTER_CURRENCY_",
        extra="ignore"
    )

    code: str = Field(
        default="IDR",
        description="ISO currency code shown next to amount inputs"
    )
    symbol: str = Field(
        default="Rp",
        description="Currency symbol prefixed to formatted amounts"
    )
    thousands_separator: str = Field(
        default=".",
        max_length=1,
        description="Digit group separator (Indonesian locale uses a dot)"
    )

    @field_validator('code')
    @classmethod
    def normalize_code(cls, v: str) -> str:
        """Currency codes are upper case."""
        return v.strip().upper()


class AppSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Environment
    app_environment: str = Field(
        default="development",
        description="Application environment"
    )
    debug_mode: bool = Field(
        default=False,
        description="Enable debug mode"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Minimum level for the structured log"
    )
    log_json: bool = Field(
        default=True,
        description="Render log lines as JSON (console renderer otherwise)"
    )

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Only accept standard logging level names."""
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        level = v.strip().upper()
        if level not in allowed:
            raise ValueError(f"Unsupported log level: {v}. Allowed: {sorted(allowed)}")
        return level


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def currency(self) -> CurrencySettings:
        return CurrencySettings()

    @property
    def app(self) -> AppSettings:
        return AppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def load_or_defaults(settings_class: type[SettingsT]) -> tuple[SettingsT, Optional[str]]:
    """
    Load one settings section, falling back to its defaults.

    An invalid environment must not stop the page from rendering; the
    sidebar reports the problem through validate_all_settings instead.

    Returns:
        (settings, error) where error is None if the section loaded cleanly
    """
    try:
        return settings_class(), None
    except ValidationError as e:
        return settings_class.model_construct(), str(e)


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<setting_name>_error" entry for every section that failed.
    """
    results = {}

    settings = get_settings()

    sections = {
        "storage": lambda: settings.storage,
        "currency": lambda: settings.currency,
        "app": lambda: settings.app,
    }

    for name, load in sections.items():
        try:
            load()
            results[name] = True
        except Exception as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results

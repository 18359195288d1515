"""
Configuration Management for Walletbook

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here.
Storage location, amount parsing rules and logging verbosity are the only
knobs the application has, and all of them are validated at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Local key-value storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="WALLETBOOK_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: Literal["json", "memory"] = Field(
        default="json",
        description="Storage backend: 'json' files on disk or 'memory' (ephemeral)"
    )
    data_dir: Path = Field(
        default=Path.home() / ".walletbook",
        description="Directory holding one JSON file per collection"
    )

    @field_validator('data_dir')
    @classmethod
    def expand_data_dir(cls, v: Path) -> Path:
        """Expand '~' so the directory can be given relative to home."""
        return v.expanduser()


class LocaleSettings(BaseSettings):
    """
    Amount parsing rules.

    Defaults follow the id-ID convention: "1.250.000" is one million
    two hundred fifty thousand, "12,5" is twelve and a half.
    """

    model_config = SettingsConfigDict(
        env_prefix="WALLETBOOK_LOCALE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    thousands_separator: str = Field(
        default=".",
        min_length=1,
        max_length=1,
        description="Character grouping thousands in user-entered amounts"
    )
    decimal_separator: str = Field(
        default=",",
        min_length=1,
        max_length=1,
        description="Character separating the fractional part"
    )

    @model_validator(mode='after')
    def validate_separators_differ(self) -> 'LocaleSettings':
        if self.thousands_separator == self.decimal_separator:
            raise ValueError("Thousands and decimal separators must differ")
        return self


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
    log_level: str = Field(
        default="INFO",
        description="Minimum level for activity logging"
    )

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
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
    def locale(self) -> LocaleSettings:
        return LocaleSettings()

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


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, with a
    "<name>_error" entry describing each failure.
    """
    results = {}

    settings = get_settings()

    for name in ("storage", "locale", "app"):
        try:
            getattr(settings, name)
            results[name] = True
        except ValueError as e:
            results[name] = False
            results[f"{name}_error"] = str(e)

    return results

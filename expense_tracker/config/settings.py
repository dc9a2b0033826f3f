"""
Configuration Management for the Expense Tracker

Uses pydantic-settings for type-safe configuration from environment
variables (prefix EXPENSE_TRACKER_) and an optional .env file.

DESIGN DECISION: All configuration is centralized here. The monthly
budget is NOT a setting: it is user data and lives in the config
document managed by the config store.
"""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


class TrackerSettings(BaseSettings):
    """
    Main application settings.

    Loads configuration from environment variables and .env file.
    """

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_TRACKER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    # Storage locations
    data_dir: Path = Field(
        default=Path("."),
        description="Directory holding the ledger, config and export files"
    )
    ledger_filename: str = Field(
        default="expenses.json",
        description="Ledger document file name"
    )
    config_filename: str = Field(
        default="config.json",
        description="Budget config document file name"
    )
    export_filename: str = Field(
        default="expenses.csv",
        description="Flat-text export file name"
    )

    # Output
    log_level: str = Field(
        default="WARNING",
        description="Minimum level for log output on stderr"
    )
    currency_symbol: str = Field(
        default="$",
        max_length=3,
        description="Symbol printed before amounts"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level: {v}. Allowed: {sorted(LOG_LEVELS)}")
        return level

    @property
    def ledger_path(self) -> Path:
        return self.data_dir / self.ledger_filename

    @property
    def config_path(self) -> Path:
        return self.data_dir / self.config_filename

    @property
    def export_path(self) -> Path:
        return self.data_dir / self.export_filename


@lru_cache()
def get_settings() -> TrackerSettings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return TrackerSettings()

"""
Configuration Management for Expense Log

Uses pydantic-settings for type-safe configuration from environment variables.

All configuration is centralized here so every storage backend and
display default is validated once at startup.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class StorageSettings(BaseSettings):
    """Which storage backend holds the expense records."""

    model_config = SettingsConfigDict(
        env_prefix="EXPENSE_STORAGE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    backend: str = Field(
        default="sqlite",
        pattern="^(sqlite|memory|google_sheets)$",
        description="Storage backend to use"
    )
    database_url: str = Field(
        default="sqlite+aiosqlite:///./expenses.db",
        description="SQLAlchemy URL for the sqlite backend"
    )


class GoogleSheetsSettings(BaseSettings):
    """Google Sheets storage configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GOOGLE_SHEETS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    credentials_path: str = Field(
        ...,
        description="Path to Google service account credentials JSON"
    )
    spreadsheet_id: str = Field(
        ...,
        description="ID of the Google Sheets spreadsheet to use"
    )

    expenses_sheet_name: str = Field(
        default="Expenses",
        description="Name of the sheet for expense records"
    )
    audit_sheet_name: str = Field(
        default="AuditLog",
        description="Name of the sheet for audit logs"
    )

    @field_validator('credentials_path')
    @classmethod
    def validate_credentials_path(cls, v: str) -> str:
        """Warn if credentials file doesn't exist (but don't fail - might be mounted later)."""
        if not Path(v).exists():
            import warnings
            warnings.warn(
                f"Google credentials file not found at {v}. "
                "Make sure it exists before running the application."
            )
        return v


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
        pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$",
        description="Minimum level for local structured logs"
    )

    # Display defaults
    currency_symbol: str = Field(
        default="$",
        min_length=1,
        max_length=3,
        description="Unit symbol prefixed to formatted totals"
    )
    default_filter: str = Field(
        default="all",
        pattern="^(all|week|month)$",
        description="Filter mode selected when the tracker starts"
    )
    chart_bar_max_height: int = Field(
        default=320,
        ge=10,
        le=2000,
        description="Height in points of the tallest bar in the daily chart"
    )


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

    # Sub-settings are loaded lazily so a missing Google Sheets setup
    # does not block the sqlite or memory backends.

    @property
    def storage(self) -> StorageSettings:
        return StorageSettings()

    @property
    def google_sheets(self) -> GoogleSheetsSettings:
        return GoogleSheetsSettings()

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


def validate_all_settings(settings: Optional[Settings] = None) -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus a
    "<name>_error" entry for every section that failed to load.
    """
    results = {}

    settings = settings or get_settings()

    sections = {
        "storage": lambda: settings.storage,
        "google_sheets": lambda: settings.google_sheets,
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

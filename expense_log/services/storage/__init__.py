"""
Storage Services Package

Provides the abstract storage interface and its SQLite, Google Sheets
and in-memory implementations.
"""

from typing import Optional

from expense_log.config import Settings, get_settings
from expense_log.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    ExpenseStorageInterface,
    NotFoundError,
    StorageError,
)
from expense_log.services.storage.google_sheets import (
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
)
from expense_log.services.storage.memory import (
    InMemoryAuditStorage,
    InMemoryExpenseStorage,
)
from expense_log.services.storage.sqlite import SQLiteExpenseStorage


def create_storage(
    settings: Optional[Settings] = None,
) -> tuple[ExpenseStorageInterface, Optional[AuditStorageInterface]]:
    """
    Build the configured expense storage and a matching audit store.

    Only the Google Sheets backend persists audit events; the others
    return None and audit events are logged locally.
    """
    settings = settings or get_settings()
    backend = settings.storage.backend

    if backend == "memory":
        return InMemoryExpenseStorage(), None
    if backend == "google_sheets":
        client = GoogleSheetsClient(settings.google_sheets)
        return GoogleSheetsExpenseStorage(client), GoogleSheetsAuditStorage(client)
    return SQLiteExpenseStorage(settings.storage.database_url), None


__all__ = [
    # Interfaces
    "AuditStorageInterface",
    "ExpenseStorageInterface",
    # Exceptions
    "ConnectionError",
    "NotFoundError",
    "StorageError",
    # Implementations
    "GoogleSheetsAuditStorage",
    "GoogleSheetsClient",
    "GoogleSheetsExpenseStorage",
    "InMemoryAuditStorage",
    "InMemoryExpenseStorage",
    "SQLiteExpenseStorage",
    # Factory
    "create_storage",
]

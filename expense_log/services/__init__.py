"""Services package."""

from expense_log.services.storage import (
    AuditStorageInterface,
    ConnectionError,
    ExpenseStorageInterface,
    GoogleSheetsAuditStorage,
    GoogleSheetsClient,
    GoogleSheetsExpenseStorage,
    InMemoryAuditStorage,
    InMemoryExpenseStorage,
    NotFoundError,
    SQLiteExpenseStorage,
    StorageError,
    create_storage,
)

__all__ = [
    "AuditStorageInterface",
    "ConnectionError",
    "ExpenseStorageInterface",
    "GoogleSheetsAuditStorage",
    "GoogleSheetsClient",
    "GoogleSheetsExpenseStorage",
    "InMemoryAuditStorage",
    "InMemoryExpenseStorage",
    "NotFoundError",
    "SQLiteExpenseStorage",
    "StorageError",
    "create_storage",
]

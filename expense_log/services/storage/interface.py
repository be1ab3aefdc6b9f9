"""
Abstract Storage Interface

The core never talks to a database directly. It consumes this interface,
which lets us:
1. Run on SQLite locally
2. Keep records in a Google Sheet the user can open
3. Use in-memory storage for testing

The interface is intentionally small: create, read, update and delete
by record id, plus the one-time schema setup.
"""

from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from expense_log.models.audit import AuditEvent
from expense_log.models.expense import Expense


class ExpenseStorageInterface(ABC):
    """
    Abstract interface for expense storage operations.

    Any storage implementation (SQLite, Google Sheets, memory)
    must implement these methods.
    """

    # Short backend name used in logs and audit events
    backend_name: str = "abstract"

    # Set by initialize() when a schema migration had to be skipped
    migration_error: Optional[str] = None

    @abstractmethod
    async def initialize(self) -> list[str]:
        """
        Create the backing table/sheet and migrate older layouts.

        Older layouts have no date attribute; it is added with every
        existing record left undated. A failed migration is logged and
        skipped, never raised.

        Returns:
            Descriptions of the schema changes applied (empty if none)
        """
        pass

    @abstractmethod
    async def list_expenses(self) -> list[Expense]:
        """
        List every stored expense.

        Returns:
            All records, newest id first
        """
        pass

    @abstractmethod
    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        """
        Retrieve an expense by its ID.

        Returns:
            The expense if found, None otherwise
        """
        pass

    @abstractmethod
    async def insert_expense(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> Expense:
        """
        Store a new expense.

        Args:
            amount: Positive amount
            category: Trimmed, non-empty category
            note: Optional note
            date: Canonical YYYY-MM-DD date or None

        Returns:
            The stored expense with its newly assigned id

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def update_expense(
        self,
        expense_id: int,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> bool:
        """
        Overwrite an existing expense.

        Returns:
            True if a record was updated, False if the id does not exist

        Raises:
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def delete_expense(self, expense_id: int) -> bool:
        """
        Delete an expense by ID.

        Returns:
            True if a record was deleted
        """
        pass


class AuditStorageInterface(ABC):
    """
    Abstract interface for audit log storage.

    Audit logs are append-only - we never delete or modify them.
    """

    @abstractmethod
    async def append_event(self, event: AuditEvent) -> bool:
        """
        Append an audit event to the log.

        Returns:
            True if logged successfully
        """
        pass

    @abstractmethod
    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        """
        Get all events for one user action, in chronological order.
        """
        pass

    @abstractmethod
    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        """
        Get the most recent audit events (newest first).
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass


class ConnectionError(StorageError):
    """Could not connect to storage backend."""
    pass

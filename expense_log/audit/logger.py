"""
Audit Logger

Every create, update and delete, and every declined submission, is
logged. This gives the user a history of their changes and gives us
something to debug with.

The audit logger:
- Is async so it can share the storage backend's event loop
- Never raises if persisting an event fails
- Supports correlation IDs to trace related events
"""

import logging
from typing import Optional
from uuid import UUID, uuid4

import structlog

from expense_log.models.audit import AuditEvent, AuditEventBuilder
from expense_log.services.storage import AuditStorageInterface


# Configure structlog for local logging
structlog.configure(
    processors=[
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer()
    ],
    wrapper_class=structlog.stdlib.BoundLogger,
    context_class=dict,
    logger_factory=structlog.stdlib.LoggerFactory(),
    cache_logger_on_first_use=True,
)


def configure_logging(level: str = "INFO") -> None:
    """Route structlog's JSON lines through stdlib logging at the given level."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", level=numeric_level)
    logging.getLogger().setLevel(numeric_level)


class AuditLogger:
    """
    Central audit logging service.

    Logs events both to:
    1. Structured local log (for debugging)
    2. An audit store, when one is configured
    """

    def __init__(
        self,
        storage: Optional[AuditStorageInterface] = None,
    ):
        """
        Initialize audit logger.

        Args:
            storage: Storage backend for persistence.
                    If None, only logs locally.
        """
        self._storage = storage
        self._logger = structlog.get_logger("expense_log.audit")

    async def log(self, event: AuditEvent) -> bool:
        """
        Log an audit event.

        Always logs locally. Persists to storage if available.

        Returns True if storage write succeeded (or no storage configured).
        """
        log_dict = event.to_log_dict()

        if event.severity.value in ("error", "critical"):
            self._logger.error("audit_event", **log_dict)
        elif event.severity.value == "warning":
            self._logger.warning("audit_event", **log_dict)
        else:
            self._logger.info("audit_event", **log_dict)

        if self._storage:
            try:
                return await self._storage.append_event(event)
            except Exception as e:
                # Log failure but don't raise
                self._logger.error(
                    "audit_storage_failed",
                    error=str(e),
                    event_id=str(event.event_id),
                )
                return False

        return True

    async def log_expense_created(
        self,
        expense_id: int,
        amount: float,
        category: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.expense_created(
            expense_id=expense_id,
            amount=amount,
            category=category,
            correlation_id=correlation_id,
        ))

    async def log_expense_updated(
        self,
        expense_id: int,
        amount: float,
        category: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.expense_updated(
            expense_id=expense_id,
            amount=amount,
            category=category,
            correlation_id=correlation_id,
        ))

    async def log_expense_deleted(
        self,
        expense_id: int,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.expense_deleted(
            expense_id=expense_id,
            correlation_id=correlation_id,
        ))

    async def log_input_rejected(
        self,
        issues: list[dict],
        correlation_id: UUID,
        expense_id: Optional[int] = None,
    ) -> None:
        """Log a submission that was declined."""
        await self.log(AuditEventBuilder.input_rejected(
            issues=issues,
            correlation_id=correlation_id,
            expense_id=expense_id,
        ))

    async def log_date_unparseable(
        self,
        raw_date: str,
        correlation_id: UUID,
    ) -> None:
        await self.log(AuditEventBuilder.date_unparseable(
            raw_date=raw_date,
            correlation_id=correlation_id,
        ))

    async def log_storage_migrated(self, backend: str, change: str) -> None:
        await self.log(AuditEventBuilder.storage_migrated(backend=backend, change=change))

    async def log_migration_skipped(self, backend: str, error_message: str) -> None:
        await self.log(AuditEventBuilder.migration_skipped(
            backend=backend,
            error_message=error_message,
        ))

    async def log_storage_error(
        self,
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        await self.log(AuditEventBuilder.storage_error(
            operation=operation,
            error_message=error_message,
            correlation_id=correlation_id,
        ))

    async def log_error(
        self,
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None,
    ) -> None:
        """Log an error."""
        await self.log(AuditEventBuilder.system_error(
            error_type=error_type,
            error_message=error_message,
            details=details,
            correlation_id=correlation_id,
        ))


def create_correlation_id() -> UUID:
    """
    Create a new correlation ID for tracking related events.

    Use this at the start of a new user action (e.g., submitting the form).
    Pass it through all subsequent operations.
    """
    return uuid4()

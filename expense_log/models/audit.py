"""
Audit Models for Expense Log

Every mutation of the expense log, and every input the log declined,
is recorded as an audit event. Audit logs are append-only.
"""

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuditEventType(str, Enum):
    """Types of events we audit."""
    # Record lifecycle
    EXPENSE_CREATED = "expense_created"
    EXPENSE_UPDATED = "expense_updated"
    EXPENSE_DELETED = "expense_deleted"

    # Declined or degraded input
    INPUT_REJECTED = "input_rejected"
    DATE_UNPARSEABLE = "date_unparseable"

    # Storage
    STORAGE_MIGRATED = "storage_migrated"
    MIGRATION_SKIPPED = "migration_skipped"
    STORAGE_ERROR = "storage_error"

    # System events
    SYSTEM_ERROR = "system_error"


class AuditSeverity(str, Enum):
    """Severity level for audit events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class AuditEvent(BaseModel):
    """
    A single audit event.

    Every create, update, delete or declined submission creates one.
    """

    # Identity
    event_id: UUID = Field(
        default_factory=uuid4,
        description="Unique event identifier"
    )
    timestamp: datetime = Field(
        default_factory=_utcnow,
        description="When the event occurred (UTC)"
    )

    # Event classification
    event_type: AuditEventType = Field(
        ...,
        description="Type of event"
    )
    severity: AuditSeverity = Field(
        default=AuditSeverity.INFO,
        description="Event severity"
    )

    # Which record this is about, if any
    expense_id: Optional[int] = Field(
        default=None,
        description="ID of the expense this event relates to"
    )

    # Correlation - one user action may emit several events
    correlation_id: Optional[UUID] = Field(
        default=None,
        description="ID to correlate events from the same user action"
    )

    description: str = Field(
        ...,
        max_length=500,
        description="Human-readable description of what happened"
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional event-specific data"
    )

    error_message: Optional[str] = None

    is_user_action: bool = Field(
        default=False,
        description="Was this triggered by a user action?"
    )

    def to_log_dict(self) -> dict:
        """
        Convert to a dictionary suitable for structured logging.
        """
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "expense_id": self.expense_id,
            "correlation_id": str(self.correlation_id) if self.correlation_id else None,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
            "is_user_action": self.is_user_action,
        }

    def to_sheets_row(self) -> list:
        """
        Convert to a row suitable for Google Sheets storage.

        Returns columns in order:
        [event_id, timestamp, event_type, severity, expense_id,
         correlation_id, description, details_json, error_message, is_user_action]
        """
        return [
            str(self.event_id),
            self.timestamp.isoformat(),
            self.event_type.value,
            self.severity.value,
            str(self.expense_id) if self.expense_id is not None else "",
            str(self.correlation_id) if self.correlation_id else "",
            self.description,
            json.dumps(self.details) if self.details else "",
            self.error_message or "",
            str(self.is_user_action),
        ]


class AuditEventBuilder:
    """
    Helper class to build audit events with common patterns.

    Usage:
        event = AuditEventBuilder.expense_created(expense_id, amount, category, cid)
        event = AuditEventBuilder.input_rejected(issues, cid)
    """

    @staticmethod
    def expense_created(
        expense_id: int,
        amount: float,
        category: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_CREATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense added: {category} - {amount:.2f}",
            details={
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_updated(
        expense_id: int,
        amount: float,
        category: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_UPDATED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} saved: {category} - {amount:.2f}",
            details={
                "amount": amount,
                "category": category,
            },
            is_user_action=True,
        )

    @staticmethod
    def expense_deleted(
        expense_id: int,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.EXPENSE_DELETED,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense {expense_id} deleted",
            is_user_action=True,
        )

    @staticmethod
    def input_rejected(
        issues: list[dict],
        correlation_id: UUID,
        expense_id: Optional[int] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.INPUT_REJECTED,
            severity=AuditSeverity.WARNING,
            expense_id=expense_id,
            correlation_id=correlation_id,
            description=f"Expense input declined with {len(issues)} issues",
            details={
                "issues": issues,
            },
            is_user_action=True,
        )

    @staticmethod
    def date_unparseable(
        raw_date: str,
        correlation_id: UUID
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.DATE_UNPARSEABLE,
            severity=AuditSeverity.WARNING,
            correlation_id=correlation_id,
            description="Date could not be read, expense stored undated",
            details={
                "raw_date": raw_date,
            },
        )

    @staticmethod
    def storage_migrated(
        backend: str,
        change: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_MIGRATED,
            description=f"Storage schema updated ({backend}): {change}",
            details={
                "backend": backend,
                "change": change,
            },
        )

    @staticmethod
    def migration_skipped(
        backend: str,
        error_message: str,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.MIGRATION_SKIPPED,
            severity=AuditSeverity.WARNING,
            description=f"Storage schema migration skipped ({backend})",
            error_message=error_message,
            details={
                "backend": backend,
            },
        )

    @staticmethod
    def storage_error(
        operation: str,
        error_message: str,
        correlation_id: Optional[UUID] = None,
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.STORAGE_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"Storage error during {operation}",
            error_message=error_message,
            details={
                "operation": operation,
            },
            correlation_id=correlation_id,
        )

    @staticmethod
    def system_error(
        error_type: str,
        error_message: str,
        details: Optional[dict] = None,
        correlation_id: Optional[UUID] = None
    ) -> AuditEvent:
        return AuditEvent(
            event_type=AuditEventType.SYSTEM_ERROR,
            severity=AuditSeverity.ERROR,
            description=f"System error: {error_type}",
            error_message=error_message,
            details=details or {},
            correlation_id=correlation_id,
        )

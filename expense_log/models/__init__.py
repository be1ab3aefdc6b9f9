"""
Data Models Package

This package contains all Pydantic models used in the Expense Log.
Stored records, form drafts and derived view values all live here.
"""

from expense_log.models.expense import (
    CANONICAL_DATE_PATTERN,
    DEFAULT_CATEGORY,
    CategoryTotal,
    DailyTotal,
    Expense,
    ExpenseDraft,
    ExpenseSummary,
    FilterMode,
    Tab,
    TrackerState,
    ValidationIssue,
    ValidationResult,
)
from expense_log.models.chart import (
    AxisTick,
    ChartBar,
    ChartModel,
    ChartSegment,
    LegendEntry,
)
from expense_log.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)

__all__ = [
    # Expense models
    "CANONICAL_DATE_PATTERN",
    "DEFAULT_CATEGORY",
    "CategoryTotal",
    "DailyTotal",
    "Expense",
    "ExpenseDraft",
    "ExpenseSummary",
    "FilterMode",
    "Tab",
    "TrackerState",
    "ValidationIssue",
    "ValidationResult",
    # Chart models
    "AxisTick",
    "ChartBar",
    "ChartModel",
    "ChartSegment",
    "LegendEntry",
    # Audit models
    "AuditEvent",
    "AuditEventBuilder",
    "AuditEventType",
    "AuditSeverity",
]

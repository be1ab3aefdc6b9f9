"""
Core Data Models for Expense Log

These models define the schemas for every record and derived value
flowing through the system:
1. Expense - a stored record, as read back from storage
2. ExpenseDraft - raw form input, exactly as typed
3. CategoryTotal / DailyTotal / ExpenseSummary - derived, never persisted
4. TrackerState - the explicit UI state the orchestrator owns

Stored records are validated strictly: no record may be written with a
non-positive amount, a blank category or a malformed date.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_validator,
)


CANONICAL_DATE_PATTERN = r"^\d{4}-\d{2}-\d{2}$"

# Label used wherever a record has no usable category
DEFAULT_CATEGORY = "Other"


# =============================================================================
# ENUMS - Finite set of valid values
# =============================================================================

class FilterMode(str, Enum):
    """Which records participate in totals and the chart."""
    ALL = "all"
    WEEK = "week"
    MONTH = "month"


class Tab(str, Enum):
    """Top-level view the user is looking at."""
    LIST = "list"
    CHART = "chart"


# =============================================================================
# CORE EXPENSE MODELS
# =============================================================================

class Expense(BaseModel):
    """
    A stored expense record.

    The id is assigned by storage and never changes. The date is either
    absent (undated) or already in canonical YYYY-MM-DD form; normalization
    happens before persistence, never after.
    """
    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    id: int = Field(
        ...,
        ge=1,
        description="Storage-assigned identifier"
    )
    amount: float = Field(
        ...,
        gt=0,
        allow_inf_nan=False,
        description="Amount in the user's unit currency"
    )
    category: str = Field(
        ...,
        min_length=1,
        description="Free-text category label"
    )
    note: Optional[str] = Field(
        default=None,
        description="Optional note"
    )
    date: Optional[str] = Field(
        default=None,
        pattern=CANONICAL_DATE_PATTERN,
        description="Canonical YYYY-MM-DD date, or None when undated"
    )

    @field_validator('note', 'date', mode='before')
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        """Storage backends hand back '' for empty optional cells."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


class ExpenseDraft(BaseModel):
    """
    Form input before validation.

    Everything is a string exactly as the user typed it. The date field
    only ever holds digits; separators are dropped while typing.
    """

    amount: str = ""
    category: str = ""
    note: str = ""
    date: str = ""

    @property
    def is_empty(self) -> bool:
        return not (self.amount or self.category or self.note or self.date)


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unparseable')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )
    suggested_fix: Optional[str] = Field(
        default=None,
        description="Suggested fix if available"
    )


class ValidationResult(BaseModel):
    """
    Result of validating a draft.

    When is_valid is True the parsed values are ready to hand to storage.
    A date that could not be read is a warning, not an error: the record
    is stored undated.
    """

    is_valid: bool
    issues: list[ValidationIssue] = Field(default_factory=list)
    warnings: list[str] = Field(
        default_factory=list,
        description="Non-blocking warnings"
    )

    # Parsed values, set only when is_valid
    amount: Optional[float] = None
    category: Optional[str] = None
    note: Optional[str] = None
    date: Optional[str] = None

    @property
    def has_errors(self) -> bool:
        """Check if there are any error-level issues."""
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        """Count error-level issues."""
        return sum(1 for issue in self.issues if issue.severity == "error")


# =============================================================================
# DERIVED MODELS - recomputed on demand, never persisted
# =============================================================================

class CategoryTotal(BaseModel):
    """Running sum for one category within the current filter."""

    category: str
    total: float


class DailyTotal(BaseModel):
    """
    Per-day totals split by category, one bar of the stacked chart.

    The grand total always equals the sum of the category sub-totals.
    """

    date: str
    total: float
    day_name: str = Field(
        ...,
        description="Full weekday name, or the raw date if it does not parse"
    )
    day_short: str = Field(
        ...,
        description="Three-letter weekday, or the raw date if it does not parse"
    )
    categories: dict[str, float] = Field(default_factory=dict)


class ExpenseSummary(BaseModel):
    """Everything the summary view needs for one filter mode."""

    filter: FilterMode
    filter_label: str
    expenses: list[Any] = Field(
        default_factory=list,
        description="Filtered records exactly as given: Expense models or plain mappings"
    )
    total: str = Field(
        ...,
        description="Formatted sum, e.g. '$12.50'"
    )
    category_totals: list[CategoryTotal] = Field(default_factory=list)
    daily_totals: list[DailyTotal] = Field(default_factory=list)
    counts: dict[FilterMode, int] = Field(
        default_factory=dict,
        description="Number of records matching each filter mode"
    )


# =============================================================================
# UI STATE
# =============================================================================

class TrackerState(BaseModel):
    """
    Explicit UI state.

    The core functions never read this directly; the orchestrator passes
    the relevant fields (filter mode, reference time) into them.
    """

    filter: FilterMode = FilterMode.ALL
    active_tab: Tab = Tab.LIST
    editing_id: Optional[int] = None
    draft: ExpenseDraft = Field(default_factory=ExpenseDraft)
    date_preview: Optional[str] = None

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None

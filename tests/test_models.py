"""
Tests for Expense Log models

Test strategy:
1. Unit tests for individual components (models, validators)
2. Integration tests for flows (with in-memory storage)
3. No real Google Sheets calls in tests (use fakes)
"""

import json
import math
from uuid import uuid4

import pytest
from pydantic import ValidationError

from expense_log.models.audit import (
    AuditEvent,
    AuditEventBuilder,
    AuditEventType,
    AuditSeverity,
)
from expense_log.models.expense import (
    Expense,
    ExpenseDraft,
    FilterMode,
    Tab,
    TrackerState,
    ValidationIssue,
    ValidationResult,
)


class TestExpenseModel:
    """Tests for the stored expense record."""

    def test_creation(self):
        """Test Expense model creation."""
        expense = Expense(id=1, amount=12.5, category="Food", note="lunch", date="2024-03-15")
        assert expense.amount == 12.5
        assert expense.date == "2024-03-15"

    def test_strips_whitespace(self):
        """Test that whitespace is stripped from the category."""
        expense = Expense(id=1, amount=1.0, category="  Food  ")
        assert expense.category == "Food"

    def test_blank_optional_fields_become_none(self):
        """Test empty cells from storage read as absent."""
        expense = Expense(id=1, amount=1.0, category="Food", note="", date="  ")
        assert expense.note is None
        assert expense.date is None

    @pytest.mark.parametrize("amount", [0, -5, math.inf, math.nan])
    def test_rejects_bad_amount(self, amount):
        """Test that non-positive and non-finite amounts are rejected."""
        with pytest.raises(ValidationError):
            Expense(id=1, amount=amount, category="Food")

    def test_rejects_blank_category(self):
        with pytest.raises(ValidationError):
            Expense(id=1, amount=1.0, category="   ")

    def test_rejects_non_canonical_date(self):
        """Test that dates must already be normalized."""
        with pytest.raises(ValidationError):
            Expense(id=1, amount=1.0, category="Food", date="03/15/2024")

    def test_frozen(self):
        expense = Expense(id=1, amount=1.0, category="Food")
        with pytest.raises(ValidationError):
            expense.amount = 2.0


class TestDraftAndState:

    def test_empty_draft(self):
        assert ExpenseDraft().is_empty
        assert not ExpenseDraft(category="Food").is_empty

    def test_default_state(self):
        """Test the tracker starts on the list tab showing everything."""
        state = TrackerState()
        assert state.filter is FilterMode.ALL
        assert state.active_tab is Tab.LIST
        assert not state.is_editing

    def test_editing(self):
        assert TrackerState(editing_id=3).is_editing


class TestValidationModels:

    def test_issue_severity_pattern(self):
        """Test that unknown severities are rejected."""
        with pytest.raises(ValidationError):
            ValidationIssue(field="amount", issue_type="missing", message="x", severity="fatal")

    def test_error_count(self):
        result = ValidationResult(
            is_valid=False,
            issues=[
                ValidationIssue(field="amount", issue_type="missing", message="a", severity="error"),
                ValidationIssue(field="date", issue_type="unparseable", message="b", severity="warning"),
            ],
        )
        assert result.has_errors
        assert result.error_count == 1


class TestAuditModels:
    """Tests for audit event models."""

    def test_expense_created_event(self):
        """Test the builder for a new expense."""
        cid = uuid4()
        event = AuditEventBuilder.expense_created(7, 12.5, "Food", cid)
        assert event.event_type == AuditEventType.EXPENSE_CREATED
        assert event.expense_id == 7
        assert event.correlation_id == cid
        assert event.is_user_action
        assert "12.50" in event.description

    def test_input_rejected_is_warning(self):
        event = AuditEventBuilder.input_rejected([{"field": "amount"}], uuid4())
        assert event.severity == AuditSeverity.WARNING
        assert event.details["issues"] == [{"field": "amount"}]

    def test_to_log_dict(self):
        event = AuditEventBuilder.expense_deleted(3, uuid4())
        data = event.to_log_dict()
        assert data["event_type"] == "expense_deleted"
        assert data["expense_id"] == 3
        assert isinstance(data["event_id"], str)

    def test_to_sheets_row(self):
        """Test the row layout used by the audit worksheet."""
        event = AuditEventBuilder.storage_migrated("sqlite", "added column expenses.date")
        row = event.to_sheets_row()
        assert len(row) == 10
        assert row[2] == "storage_migrated"
        assert row[4] == ""
        assert json.loads(row[7]) == {"backend": "sqlite", "change": "added column expenses.date"}
        assert row[9] == "False"

    def test_description_length_limit(self):
        with pytest.raises(ValidationError):
            AuditEvent(event_type=AuditEventType.SYSTEM_ERROR, description="x" * 501)

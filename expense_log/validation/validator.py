"""
Expense Draft Validation

Validation happens in two stages:

STAGE 1 - REQUIRED FIELDS:
- Amount must read as a positive, finite number
- Category must be non-empty after trimming
Either failure declines the submission; nothing is written.

STAGE 2 - OPTIONAL FIELDS:
- Typed date digits are normalized to YYYY-MM-DD
- A date that cannot be read is a warning; the expense is stored undated
- A blank note is stored as absent

Validation never raises. Callers inspect the returned ValidationResult.
"""

import math
import re
from typing import Optional

from expense_log.dates.normalizer import digits_only, normalize_date
from expense_log.models.expense import (
    ExpenseDraft,
    ValidationIssue,
    ValidationResult,
)


# Leading decimal number, the way a lenient "parse float" reads "12.50abc" as 12.5
_LEADING_NUMBER = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_amount(raw: Optional[str]) -> Optional[float]:
    """
    Read the leading number from amount input.

    Returns None when the input does not start with a number or the
    number is not finite.
    """
    if raw is None:
        return None
    match = _LEADING_NUMBER.match(str(raw))
    if not match:
        return None
    try:
        value = float(match.group(0))
    except (OverflowError, ValueError):
        return None
    return value if math.isfinite(value) else None


class ExpenseValidator:
    """Validates expense form drafts before they reach storage."""

    def _validate_required(
        self,
        draft: ExpenseDraft,
    ) -> tuple[Optional[float], str, list[ValidationIssue]]:
        """
        Stage 1: amount and category.

        Returns: (amount, trimmed_category, list_of_issues)
        """
        issues = []

        amount = parse_amount(draft.amount)
        if amount is None:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="missing" if not draft.amount.strip() else "invalid_value",
                message="Amount must be a number",
                severity="error",
                suggested_fix="Enter an amount such as 12.50",
            ))
        elif amount <= 0:
            issues.append(ValidationIssue(
                field="amount",
                issue_type="invalid_value",
                message="Amount must be greater than zero",
                severity="error",
            ))

        category = draft.category.strip()
        if not category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                severity="error",
                suggested_fix="Enter a category such as Food, Books or Rent",
            ))

        return amount, category, issues

    def _validate_optional(
        self,
        draft: ExpenseDraft,
    ) -> tuple[Optional[str], Optional[str], list[ValidationIssue]]:
        """
        Stage 2: note and date.

        Returns: (note_or_none, canonical_date_or_none, list_of_issues)
        """
        issues = []

        note = draft.note.strip() or None

        raw_date = draft.date.strip()
        iso_date = normalize_date(raw_date)
        if raw_date and iso_date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="unparseable",
                message=f"Could not read '{raw_date}' as a date; the expense will be saved without one",
                severity="warning",
                suggested_fix="Type the date as YYYYMMDD or MDDYYYY",
            ))

        return note, iso_date, issues

    def validate(self, draft: ExpenseDraft) -> ValidationResult:
        """
        Run both validation stages.

        Args:
            draft: Raw form input

        Returns:
            ValidationResult; parsed values are populated only when valid
        """
        amount, category, issues = self._validate_required(draft)

        if any(issue.severity == "error" for issue in issues):
            return ValidationResult(is_valid=False, issues=issues)

        note, iso_date, optional_issues = self._validate_optional(draft)
        issues.extend(optional_issues)

        return ValidationResult(
            is_valid=True,
            issues=issues,
            warnings=[i.message for i in issues if i.severity == "warning"],
            amount=amount,
            category=category,
            note=note,
            date=iso_date,
        )

    def get_user_friendly_summary(self, result: ValidationResult) -> str:
        """Short text the form can show next to the submit button."""
        if result.is_valid and not result.warnings:
            return "Expense looks good."

        lines = []
        if not result.is_valid:
            lines.append("Please fix the following:")
            for issue in result.issues:
                if issue.severity == "error":
                    lines.append(f"  - {issue.message}")

        if result.warnings:
            lines.append("Note:")
            for warning in result.warnings:
                lines.append(f"  - {warning}")

        return "\n".join(lines)


def draft_date_digits(raw: str) -> str:
    """Digits kept in the date field while the user types (at most 8)."""
    return digits_only(raw)[:8]

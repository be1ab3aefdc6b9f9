"""
Main Orchestrator for Expense Log

Ties storage, validation, auditing and the pure query functions
together behind the actions a UI can trigger:
1. Type into the form, submit (add or save changes), cancel an edit
2. Delete a record
3. Switch filter mode or tab
4. Read the summary and chart for the current filter

Every mutation is followed by a full reload from storage; nothing is
cached incrementally. UI state lives in an explicit TrackerState and is
passed into the query functions rather than read from globals.
"""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional, Union

import structlog

from expense_log.audit import AuditLogger, configure_logging, create_correlation_id
from expense_log.config import Settings, get_settings
from expense_log.dates.formatting import date_preview, edit_digits
from expense_log.models.chart import ChartModel
from expense_log.models.expense import (
    Expense,
    ExpenseDraft,
    ExpenseSummary,
    FilterMode,
    Tab,
    TrackerState,
    ValidationResult,
)
from expense_log.queries import build_chart, build_summary
from expense_log.queries.chart import DEFAULT_BAR_MAX_HEIGHT
from expense_log.services.storage import (
    ExpenseStorageInterface,
    InMemoryExpenseStorage,
    StorageError,
    create_storage,
)
from expense_log.validation import ExpenseValidator, draft_date_digits


logger = structlog.get_logger(__name__)


def amount_to_text(amount: float) -> str:
    """
    Amount as it is put back into the form: 12.0 -> '12', 12.5 -> '12.5'.

    Always positional, so 0.00001 stays '0.00001' rather than '1e-05'.
    """
    if float(amount).is_integer():
        return str(int(amount))
    return format(Decimal(repr(float(amount))), "f")


class ExpenseTracker:
    """
    Drives one expense log.

    Flow for a submission:
    1. Validate the draft (amount and category required)
    2. Normalize the typed date (unreadable dates are stored as absent)
    3. Insert, or update the record being edited
    4. Clear the form and reload every record from storage

    Declined submissions leave the draft untouched so the user can
    correct it.
    """

    def __init__(
        self,
        storage: ExpenseStorageInterface,
        audit_logger: Optional[AuditLogger] = None,
        validator: Optional[ExpenseValidator] = None,
        clock: Optional[Callable[[], datetime]] = None,
        currency_symbol: str = "$",
        bar_max_height: int = DEFAULT_BAR_MAX_HEIGHT,
        default_filter: Union[FilterMode, str] = FilterMode.ALL,
    ):
        self._storage = storage
        self._audit_logger = audit_logger or AuditLogger()
        self._validator = validator or ExpenseValidator()
        self._clock = clock or datetime.now
        self._currency_symbol = currency_symbol
        self._bar_max_height = bar_max_height
        self._expenses: list[Expense] = []
        self.state = TrackerState(filter=FilterMode(default_filter))

    @property
    def expenses(self) -> list[Expense]:
        """Every loaded record, newest first."""
        return list(self._expenses)

    async def setup(self) -> None:
        """Prepare storage (including the date migration) and load records."""
        changes = await self._storage.initialize()
        for change in changes:
            await self._audit_logger.log_storage_migrated(
                backend=self._storage.backend_name,
                change=change,
            )
        if self._storage.migration_error:
            await self._audit_logger.log_migration_skipped(
                backend=self._storage.backend_name,
                error_message=self._storage.migration_error,
            )
        await self.load()

    async def load(self) -> list[Expense]:
        self._expenses = await self._storage.list_expenses()
        return self.expenses

    # -------------------------------------------------------------------------
    # Form
    # -------------------------------------------------------------------------

    def update_draft(
        self,
        amount: Optional[str] = None,
        category: Optional[str] = None,
        note: Optional[str] = None,
        date: Optional[str] = None,
    ) -> ExpenseDraft:
        """
        Change form fields. Fields left as None are not touched.

        The date field keeps only digits (at most 8) and refreshes the
        preview shown under it.
        """
        draft = self.state.draft
        if amount is not None:
            draft.amount = amount
        if category is not None:
            draft.category = category
        if note is not None:
            draft.note = note
        if date is not None:
            draft.date = draft_date_digits(date)
            self.state.date_preview = date_preview(draft.date)
        return draft

    def _reset_form(self) -> None:
        self.state.draft = ExpenseDraft()
        self.state.date_preview = None
        self.state.editing_id = None

    async def submit(self) -> ValidationResult:
        """
        Add a new expense, or save changes to the one being edited.

        Returns:
            The validation result. If it is not valid nothing was written.

        Raises:
            StorageError: If the storage backend fails the write
        """
        correlation_id = create_correlation_id()
        draft = self.state.draft
        editing_id = self.state.editing_id

        result = self._validator.validate(draft)
        if not result.is_valid:
            await self._audit_logger.log_input_rejected(
                issues=[
                    {"field": i.field, "type": i.issue_type, "message": i.message}
                    for i in result.issues
                ],
                correlation_id=correlation_id,
                expense_id=editing_id,
            )
            return result

        if draft.date.strip() and result.date is None:
            await self._audit_logger.log_date_unparseable(
                raw_date=draft.date,
                correlation_id=correlation_id,
            )

        try:
            if editing_id is not None:
                updated = await self._storage.update_expense(
                    editing_id,
                    amount=result.amount,
                    category=result.category,
                    note=result.note,
                    date=result.date,
                )
                if updated:
                    await self._audit_logger.log_expense_updated(
                        expense_id=editing_id,
                        amount=result.amount,
                        category=result.category,
                        correlation_id=correlation_id,
                    )
                else:
                    logger.info("update_target_missing", expense_id=editing_id)
            else:
                expense = await self._storage.insert_expense(
                    amount=result.amount,
                    category=result.category,
                    note=result.note,
                    date=result.date,
                )
                await self._audit_logger.log_expense_created(
                    expense_id=expense.id,
                    amount=expense.amount,
                    category=expense.category,
                    correlation_id=correlation_id,
                )
        except StorageError as e:
            await self._audit_logger.log_storage_error(
                operation="update" if editing_id is not None else "insert",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        self._reset_form()
        await self.load()
        return result

    def start_edit(self, expense: Expense) -> None:
        """Load a record into the form for editing."""
        self.state.editing_id = expense.id
        self.state.draft = ExpenseDraft(
            amount=amount_to_text(expense.amount),
            category=expense.category or "",
            note=expense.note or "",
            date=edit_digits(expense.date),
        )
        self.state.date_preview = expense.date or None

    def cancel_edit(self) -> None:
        self._reset_form()

    async def delete(self, expense_id: int) -> bool:
        """
        Delete a record and reload.

        Raises:
            StorageError: If the storage backend fails the delete
        """
        correlation_id = create_correlation_id()
        try:
            deleted = await self._storage.delete_expense(expense_id)
        except StorageError as e:
            await self._audit_logger.log_storage_error(
                operation="delete",
                error_message=str(e),
                correlation_id=correlation_id,
            )
            raise

        if deleted:
            await self._audit_logger.log_expense_deleted(
                expense_id=expense_id,
                correlation_id=correlation_id,
            )
        await self.load()
        return deleted

    # -------------------------------------------------------------------------
    # Views
    # -------------------------------------------------------------------------

    def set_filter(self, mode: Union[FilterMode, str]) -> None:
        self.state.filter = FilterMode(mode)

    def set_tab(self, tab: Union[Tab, str]) -> None:
        self.state.active_tab = Tab(tab)

    def summary(self) -> ExpenseSummary:
        """Totals for the current filter, computed from the loaded records."""
        return build_summary(
            self._expenses,
            self.state.filter,
            now=self._clock(),
            symbol=self._currency_symbol,
        )

    def visible_expenses(self) -> list[Expense]:
        """Records listed under the form; the chart tab shows none."""
        if self.state.active_tab is not Tab.LIST:
            return []
        return self.summary().expenses

    def chart(self) -> ChartModel:
        return build_chart(
            self.summary().daily_totals,
            bar_max_height=self._bar_max_height,
            symbol=self._currency_symbol,
        )


async def create_app_components(
    settings: Optional[Settings] = None,
    use_storage: bool = True,
) -> ExpenseTracker:
    """
    Factory function to create a ready-to-use tracker.

    Args:
        settings: Settings to use; defaults to get_settings()
        use_storage: Whether to use the configured storage backend.
                    Set to False to keep records in memory only.

    Returns:
        An ExpenseTracker with storage initialized and records loaded
    """
    settings = settings or get_settings()
    app = settings.app
    configure_logging(app.log_level)

    audit_storage = None
    if use_storage:
        try:
            storage, audit_storage = create_storage(settings)
        except Exception as e:
            # Storage not configured - continue in memory
            logger.warning("storage_not_configured", error=str(e))
            storage = InMemoryExpenseStorage()
    else:
        storage = InMemoryExpenseStorage()

    tracker = ExpenseTracker(
        storage=storage,
        audit_logger=AuditLogger(audit_storage),
        currency_symbol=app.currency_symbol,
        bar_max_height=app.chart_bar_max_height,
        default_filter=app.default_filter,
    )
    await tracker.setup()
    return tracker

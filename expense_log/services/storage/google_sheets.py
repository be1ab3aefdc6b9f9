"""
Google Sheets Storage Implementation

Google Sheets can hold the expense log so the user can open, sort and
back up their records directly.

TRADEOFFS:
- Not suitable for high-volume data (fine at personal scale)
- No transactions; ids are allocated as max(id) + 1 at insert time
- Every read fetches the whole sheet; filtering happens in Python

Columns are located by header name, so sheets created before the date
column existed keep working. initialize() appends the missing header.
"""

import json
from datetime import datetime
from typing import Optional
from uuid import UUID

import gspread
import structlog
from google.oauth2.service_account import Credentials
from tenacity import retry, stop_after_attempt, wait_exponential

from expense_log.config import GoogleSheetsSettings, get_settings
from expense_log.models.audit import AuditEvent, AuditEventType, AuditSeverity
from expense_log.models.expense import Expense
from expense_log.services.storage.interface import (
    AuditStorageInterface,
    ConnectionError,
    ExpenseStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


EXPENSE_COLUMNS = ["id", "amount", "category", "note", "date"]

AUDIT_COLUMNS = [
    "event_id",
    "timestamp",
    "event_type",
    "severity",
    "expense_id",
    "correlation_id",
    "description",
    "details_json",
    "error_message",
    "is_user_action",
]


class GoogleSheetsClient:
    """
    Low-level Google Sheets client wrapper.

    Handles authentication and provides retry logic for API calls.
    """

    def __init__(self, settings: Optional[GoogleSheetsSettings] = None):
        self._client: Optional[gspread.Client] = None
        self._spreadsheet: Optional[gspread.Spreadsheet] = None
        self._settings = settings or get_settings().google_sheets

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    def connect(self) -> gspread.Client:
        """
        Establish connection to Google Sheets.

        Uses service account credentials for authentication.
        """
        if self._client is None:
            try:
                scopes = [
                    "https://www.googleapis.com/auth/spreadsheets",
                    "https://www.googleapis.com/auth/drive",
                ]
                credentials = Credentials.from_service_account_file(
                    self._settings.credentials_path,
                    scopes=scopes,
                )
                self._client = gspread.authorize(credentials)
            except FileNotFoundError:
                raise ConnectionError(
                    f"Google credentials file not found: {self._settings.credentials_path}"
                )
            except Exception as e:
                raise ConnectionError(f"Failed to connect to Google Sheets: {e}")

        return self._client

    def get_spreadsheet(self) -> gspread.Spreadsheet:
        """Get the configured spreadsheet."""
        if self._spreadsheet is None:
            client = self.connect()
            try:
                self._spreadsheet = client.open_by_key(
                    self._settings.spreadsheet_id
                )
            except gspread.SpreadsheetNotFound:
                raise ConnectionError(
                    f"Spreadsheet not found: {self._settings.spreadsheet_id}"
                )
        return self._spreadsheet

    def _get_or_create_sheet(self, title: str, columns: list[str], rows: int) -> gspread.Worksheet:
        spreadsheet = self.get_spreadsheet()
        try:
            sheet = spreadsheet.worksheet(title)
        except gspread.WorksheetNotFound:
            sheet = spreadsheet.add_worksheet(
                title=title,
                rows=rows,
                cols=len(columns),
            )
            sheet.append_row(columns)
        return sheet

    def get_expenses_sheet(self) -> gspread.Worksheet:
        """Get or create the Expenses worksheet."""
        return self._get_or_create_sheet(
            self._settings.expenses_sheet_name, EXPENSE_COLUMNS, rows=1000
        )

    def get_audit_sheet(self) -> gspread.Worksheet:
        """Get or create the Audit worksheet."""
        return self._get_or_create_sheet(
            self._settings.audit_sheet_name, AUDIT_COLUMNS, rows=5000
        )


class GoogleSheetsExpenseStorage(ExpenseStorageInterface):
    """
    Google Sheets implementation of expense storage.

    One expense per row below a header row.
    """

    backend_name = "google_sheets"

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    async def initialize(self) -> list[str]:
        """Add the date header to sheets created before it existed."""
        try:
            sheet = self._client.get_expenses_sheet()
        except Exception as e:
            raise ConnectionError(f"Failed to open expenses sheet: {e}") from e

        changes = []
        try:
            header = sheet.row_values(1)
            if not header:
                sheet.append_row(EXPENSE_COLUMNS)
            elif "date" not in header:
                sheet.update_cell(1, len(header) + 1, "date")
                changes.append("added column date")
        except gspread.exceptions.GSpreadException as e:
            self.migration_error = str(e)
            logger.warning(
                "schema_migration_skipped",
                backend=self.backend_name,
                error=str(e),
            )
            return changes

        for change in changes:
            logger.info("schema_migrated", backend=self.backend_name, change=change)
        return changes

    def _read_sheet(self) -> tuple[gspread.Worksheet, list[str], list[list]]:
        sheet = self._client.get_expenses_sheet()
        values = sheet.get_all_values()
        header = values[0] if values else list(EXPENSE_COLUMNS)
        return sheet, header, values[1:]

    def _row_to_expense(self, header: list[str], row: list) -> Expense:
        """Convert a spreadsheet row to an Expense."""
        cells = dict(zip(header, row))
        return Expense(
            id=int(cells.get("id", "")),
            amount=float(cells.get("amount", "")),
            category=cells.get("category", ""),
            note=cells.get("note") or None,
            date=cells.get("date") or None,
        )

    def _expense_to_row(self, header: list[str], expense: Expense) -> list:
        """Convert an Expense to a row laid out like the header."""
        values = {
            "id": str(expense.id),
            "amount": repr(expense.amount),
            "category": expense.category,
            "note": expense.note or "",
            "date": expense.date or "",
        }
        return [values.get(column, "") for column in header]

    def _row_id(self, header: list[str], row: list) -> Optional[int]:
        try:
            return int(row[header.index("id")])
        except (ValueError, IndexError):
            return None

    async def list_expenses(self) -> list[Expense]:
        try:
            _, header, rows = self._read_sheet()
        except Exception as e:
            raise StorageError(f"Failed to list expenses: {e}")

        expenses = []
        for row in rows:
            if not any(row):  # Skip empty rows
                continue
            try:
                expenses.append(self._row_to_expense(header, row))
            except ValueError:
                logger.warning("malformed_expense_row", row=row)
                continue

        expenses.sort(key=lambda e: e.id, reverse=True)
        return expenses

    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        for expense in await self.list_expenses():
            if expense.id == expense_id:
                return expense
        return None

    @retry(
        stop=stop_after_attempt(3),
        wait=wait_exponential(multiplier=1, min=2, max=10),
        reraise=True,
    )
    async def insert_expense(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> Expense:
        try:
            sheet, header, rows = self._read_sheet()
            ids = [i for i in (self._row_id(header, r) for r in rows) if i is not None]
            expense = Expense(
                id=max(ids, default=0) + 1,
                amount=amount,
                category=category,
                note=note,
                date=date,
            )
            sheet.append_row(self._expense_to_row(header, expense), value_input_option="RAW")
            return expense
        except Exception as e:
            raise StorageError(f"Failed to save expense: {e}")

    async def update_expense(
        self,
        expense_id: int,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> bool:
        try:
            sheet, header, rows = self._read_sheet()

            for idx, row in enumerate(rows, start=2):  # Row 1 is the header
                if self._row_id(header, row) == expense_id:
                    expense = Expense(
                        id=expense_id,
                        amount=amount,
                        category=category,
                        note=note,
                        date=date,
                    )
                    sheet.update(
                        range_name=f"A{idx}",
                        values=[self._expense_to_row(header, expense)],
                        value_input_option="RAW",
                    )
                    return True

            return False
        except Exception as e:
            raise StorageError(f"Failed to update expense: {e}")

    async def delete_expense(self, expense_id: int) -> bool:
        try:
            sheet, header, rows = self._read_sheet()

            for idx, row in enumerate(rows, start=2):
                if self._row_id(header, row) == expense_id:
                    sheet.delete_rows(idx)
                    return True

            return False
        except Exception as e:
            raise StorageError(f"Failed to delete expense: {e}")


class GoogleSheetsAuditStorage(AuditStorageInterface):
    """
    Google Sheets implementation of audit log storage.

    Audit events are append-only.
    """

    def __init__(self, client: Optional[GoogleSheetsClient] = None):
        self._client = client or GoogleSheetsClient()

    def _row_to_event(self, row: list) -> AuditEvent:
        """Convert a spreadsheet row to an AuditEvent."""
        def safe_get(index: int, default: str = "") -> str:
            try:
                return row[index] if row[index] else default
            except IndexError:
                return default

        return AuditEvent(
            event_id=UUID(safe_get(0)),
            timestamp=datetime.fromisoformat(safe_get(1)),
            event_type=AuditEventType(safe_get(2)),
            severity=AuditSeverity(safe_get(3)),
            expense_id=int(safe_get(4)) if safe_get(4) else None,
            correlation_id=UUID(safe_get(5)) if safe_get(5) else None,
            description=safe_get(6),
            details=json.loads(safe_get(7)) if safe_get(7) else {},
            error_message=safe_get(8) or None,
            is_user_action=safe_get(9).lower() == "true",
        )

    def _read_events(self) -> list[AuditEvent]:
        sheet = self._client.get_audit_sheet()
        events = []
        for row in sheet.get_all_values()[1:]:
            if not row or not row[0]:
                continue
            try:
                events.append(self._row_to_event(row))
            except ValueError:
                continue
        return events

    async def append_event(self, event: AuditEvent) -> bool:
        """Append an audit event. Failures are logged, never raised."""
        try:
            sheet = self._client.get_audit_sheet()
            sheet.append_row(event.to_sheets_row(), value_input_option="RAW")
            return True
        except Exception as e:
            logger.warning(
                "audit_append_failed",
                event_id=str(event.event_id),
                error=str(e),
            )
            return False

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        try:
            events = [e for e in self._read_events() if e.correlation_id == correlation_id]
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")
        events.sort(key=lambda e: e.timestamp)
        return events

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        try:
            events = self._read_events()
        except Exception as e:
            raise StorageError(f"Failed to get audit events: {e}")
        events.sort(key=lambda e: e.timestamp, reverse=True)
        return events[:limit]

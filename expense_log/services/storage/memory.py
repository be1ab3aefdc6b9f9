"""
In-Memory Storage

Dict-backed storage for tests and for running without any backend.
Ids are allocated from a counter and never reused, like an
AUTOINCREMENT column.
"""

from typing import Optional
from uuid import UUID

from expense_log.models.audit import AuditEvent
from expense_log.models.expense import Expense
from expense_log.services.storage.interface import (
    AuditStorageInterface,
    ExpenseStorageInterface,
)


class InMemoryExpenseStorage(ExpenseStorageInterface):

    backend_name = "memory"

    def __init__(self, expenses: Optional[list[Expense]] = None):
        self._rows: dict[int, Expense] = {}
        self._next_id = 1
        for expense in expenses or []:
            self._rows[expense.id] = expense
            self._next_id = max(self._next_id, expense.id + 1)

    async def initialize(self) -> list[str]:
        return []

    async def list_expenses(self) -> list[Expense]:
        return sorted(self._rows.values(), key=lambda e: e.id, reverse=True)

    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        return self._rows.get(expense_id)

    async def insert_expense(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> Expense:
        expense = Expense(
            id=self._next_id,
            amount=amount,
            category=category,
            note=note,
            date=date,
        )
        self._rows[expense.id] = expense
        self._next_id += 1
        return expense

    async def update_expense(
        self,
        expense_id: int,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> bool:
        if expense_id not in self._rows:
            return False
        self._rows[expense_id] = Expense(
            id=expense_id,
            amount=amount,
            category=category,
            note=note,
            date=date,
        )
        return True

    async def delete_expense(self, expense_id: int) -> bool:
        return self._rows.pop(expense_id, None) is not None


class InMemoryAuditStorage(AuditStorageInterface):

    def __init__(self):
        self.events: list[AuditEvent] = []

    async def append_event(self, event: AuditEvent) -> bool:
        self.events.append(event)
        return True

    async def get_events_by_correlation_id(
        self,
        correlation_id: UUID,
    ) -> list[AuditEvent]:
        matching = [e for e in self.events if e.correlation_id == correlation_id]
        return sorted(matching, key=lambda e: e.timestamp)

    async def get_recent_events(
        self,
        limit: int = 100,
    ) -> list[AuditEvent]:
        return sorted(self.events, key=lambda e: e.timestamp, reverse=True)[:limit]

"""
SQLite Storage Implementation

Expenses live in a single `expenses` table accessed through SQLAlchemy's
async engine (aiosqlite driver).

The first version of the table had no date column. initialize() adds it
when missing; existing rows are left undated. If the ALTER fails the
error is logged and the app carries on with the table as it is, reading
and writing every record without a date.
"""

from typing import Optional

import structlog
from pydantic import ValidationError
from sqlalchemy import Float, Integer, Text, delete, insert, select, text, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncAttrs, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from expense_log.models.expense import Expense
from expense_log.services.storage.interface import (
    ConnectionError,
    ExpenseStorageInterface,
    StorageError,
)


logger = structlog.get_logger(__name__)


class Base(AsyncAttrs, DeclarativeBase):
    pass


class ExpenseRow(Base):
    __tablename__ = "expenses"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    category: Mapped[str] = mapped_column(Text, nullable=False)
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[Optional[str]] = mapped_column(Text, nullable=True)


EXPENSES = ExpenseRow.__table__


class SQLiteExpenseStorage(ExpenseStorageInterface):
    """
    SQLite implementation of expense storage.

    One engine per storage instance; call close() to release it.

    Statements name their columns explicitly. When the date migration
    was skipped the date column is left out of every read and write, so
    the table keeps working and every record reads back undated.
    """

    backend_name = "sqlite"

    def __init__(self, database_url: str):
        self._database_url = database_url
        self._engine = create_async_engine(database_url, echo=False)
        self._sessions = async_sessionmaker(self._engine, expire_on_commit=False, class_=AsyncSession)
        self._has_date_column = True

    async def close(self) -> None:
        await self._engine.dispose()

    async def initialize(self) -> list[str]:
        """Create the table, then add the date column to older tables."""
        try:
            async with self._engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)
        except SQLAlchemyError as e:
            raise ConnectionError(f"Failed to create expenses table: {e}") from e

        changes = []
        try:
            async with self._engine.begin() as conn:
                result = await conn.execute(text("PRAGMA table_info(expenses)"))
                columns = {row[1] for row in result.all()}
                self._has_date_column = "date" in columns
                if not self._has_date_column:
                    await conn.execute(text("ALTER TABLE expenses ADD COLUMN date TEXT"))
                    changes.append("added column expenses.date")
        except SQLAlchemyError as e:
            self.migration_error = str(e)
            logger.warning(
                "schema_migration_skipped",
                backend=self.backend_name,
                error=str(e),
            )
            return changes

        self._has_date_column = True
        for change in changes:
            logger.info("schema_migrated", backend=self.backend_name, change=change)
        return changes

    def _columns(self) -> list:
        columns = [EXPENSES.c.id, EXPENSES.c.amount, EXPENSES.c.category, EXPENSES.c.note]
        if self._has_date_column:
            columns.append(EXPENSES.c.date)
        return columns

    def _values(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> dict:
        values = {"amount": amount, "category": category, "note": note}
        if self._has_date_column:
            values["date"] = date
        return values

    def _row_to_expense(self, row) -> Optional[Expense]:
        cells = row._mapping
        try:
            return Expense(
                id=cells["id"],
                amount=cells["amount"],
                category=cells["category"],
                note=cells["note"],
                date=cells.get("date"),
            )
        except ValidationError as e:
            logger.warning("malformed_expense_row", expense_id=cells["id"], error=str(e))
            return None

    async def list_expenses(self) -> list[Expense]:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    select(*self._columns()).order_by(EXPENSES.c.id.desc())
                )
                rows = result.all()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to list expenses: {e}") from e

        expenses = []
        for row in rows:
            expense = self._row_to_expense(row)
            if expense is not None:
                expenses.append(expense)
        return expenses

    async def get_expense(self, expense_id: int) -> Optional[Expense]:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    select(*self._columns()).where(EXPENSES.c.id == expense_id)
                )
                row = result.first()
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to get expense: {e}") from e
        return self._row_to_expense(row) if row else None

    async def insert_expense(
        self,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> Expense:
        values = self._values(amount, category, note, date)
        try:
            async with self._sessions() as session:
                result = await session.execute(insert(EXPENSES).values(**values))
                await session.commit()
                expense_id = result.inserted_primary_key[0]
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to save expense: {e}") from e
        return Expense(id=expense_id, **values)

    async def update_expense(
        self,
        expense_id: int,
        amount: float,
        category: str,
        note: Optional[str],
        date: Optional[str],
    ) -> bool:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    update(EXPENSES)
                    .where(EXPENSES.c.id == expense_id)
                    .values(**self._values(amount, category, note, date))
                )
                await session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to update expense: {e}") from e

    async def delete_expense(self, expense_id: int) -> bool:
        try:
            async with self._sessions() as session:
                result = await session.execute(
                    delete(EXPENSES).where(EXPENSES.c.id == expense_id)
                )
                await session.commit()
                return result.rowcount > 0
        except SQLAlchemyError as e:
            raise StorageError(f"Failed to delete expense: {e}") from e

"""Tests for the audit logger."""

from uuid import UUID

import pytest

from expense_log.audit import AuditLogger, create_correlation_id
from expense_log.models.audit import AuditEventBuilder, AuditEventType, AuditSeverity
from expense_log.services.storage import InMemoryAuditStorage


class BrokenAuditStorage(InMemoryAuditStorage):

    async def append_event(self, event):
        raise RuntimeError("sheet unavailable")


class TestAuditLogger:

    @pytest.mark.asyncio
    async def test_local_only(self):
        """Test that without storage every event counts as logged."""
        logger = AuditLogger()
        assert await logger.log(AuditEventBuilder.expense_deleted(1, create_correlation_id())) is True

    @pytest.mark.asyncio
    async def test_persists_to_storage(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        cid = create_correlation_id()

        await logger.log_expense_created(4, 9.99, "Books", cid)
        await logger.log_expense_updated(4, 10.0, "Books", cid)

        events = await storage.get_events_by_correlation_id(cid)
        assert [e.event_type for e in events] == [
            AuditEventType.EXPENSE_CREATED,
            AuditEventType.EXPENSE_UPDATED,
        ]

    @pytest.mark.asyncio
    async def test_storage_failure_never_raises(self):
        logger = AuditLogger(BrokenAuditStorage())
        event = AuditEventBuilder.system_error("boom", "details")
        assert await logger.log(event) is False

    @pytest.mark.asyncio
    async def test_input_rejected(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        await logger.log_input_rejected(
            [{"field": "category", "type": "missing", "message": "Category is required"}],
            create_correlation_id(),
            expense_id=3,
        )
        (event,) = storage.events
        assert event.severity == AuditSeverity.WARNING
        assert event.expense_id == 3

    @pytest.mark.asyncio
    async def test_storage_events(self):
        storage = InMemoryAuditStorage()
        logger = AuditLogger(storage)
        await logger.log_storage_migrated("sqlite", "added column expenses.date")
        await logger.log_migration_skipped("sqlite", "database is locked")
        await logger.log_storage_error("insert", "disk full")
        await logger.log_error("unexpected", "bad state", details={"step": "load"})

        types = [e.event_type for e in storage.events]
        assert types == [
            AuditEventType.STORAGE_MIGRATED,
            AuditEventType.MIGRATION_SKIPPED,
            AuditEventType.STORAGE_ERROR,
            AuditEventType.SYSTEM_ERROR,
        ]
        assert storage.events[3].details == {"step": "load"}

    def test_correlation_id(self):
        assert isinstance(create_correlation_id(), UUID)
        assert create_correlation_id() != create_correlation_id()

"""Unit tests for ReconciliationLedger."""

from uuid import uuid4

import pytest

from orderindex.domain.reconciliation.model.record import OperationKind


class TestReconciliationLedger:
    @pytest.mark.asyncio
    async def test_record_creates_then_updates(self, ledger):
        entity_id = uuid4()

        first = await ledger.record_failed_operation(OperationKind.INDEX, entity_id, "down")
        second = await ledger.record_failed_operation(OperationKind.INDEX, entity_id, "still down")

        assert first.attempt_count == 1
        assert second.attempt_count == 2
        assert second.error_message == "still down"
        assert second.first_failed_at == first.first_failed_at
        assert second.last_failed_at >= first.last_failed_at
        assert await ledger.count() == 1

    @pytest.mark.asyncio
    async def test_kinds_are_tracked_separately(self, ledger):
        entity_id = uuid4()

        await ledger.record_failed_operation(OperationKind.INDEX, entity_id, "down")
        await ledger.record_failed_operation(OperationKind.DELETE, entity_id, "down")

        assert await ledger.count() == 2

    @pytest.mark.asyncio
    async def test_outstanding_oldest_first(self, ledger):
        ids = [uuid4() for _ in range(3)]
        for entity_id in ids:
            await ledger.record_failed_operation(OperationKind.UPDATE, entity_id, "down")

        outstanding = await ledger.outstanding()

        assert [r.entity_id for r in outstanding] == ids
        assert len(await ledger.outstanding(limit=2)) == 2

    @pytest.mark.asyncio
    async def test_resolve_removes_record(self, ledger):
        entity_id = uuid4()
        await ledger.record_failed_operation(OperationKind.INDEX, entity_id, "down")

        await ledger.resolve(OperationKind.INDEX, entity_id)

        assert await ledger.get(OperationKind.INDEX, entity_id) is None
        assert await ledger.count() == 0

    @pytest.mark.asyncio
    async def test_resolve_skips_record_that_failed_again(self, ledger):
        entity_id = uuid4()
        seen = await ledger.record_failed_operation(OperationKind.UPDATE, entity_id, "down")
        await ledger.record_failed_operation(OperationKind.UPDATE, entity_id, "down again")

        assert not await ledger.resolve(OperationKind.UPDATE, entity_id, seen.last_failed_at)
        assert await ledger.count() == 1

        current = await ledger.get(OperationKind.UPDATE, entity_id)
        assert await ledger.resolve(OperationKind.UPDATE, entity_id, current.last_failed_at)
        assert await ledger.count() == 0

    @pytest.mark.asyncio
    async def test_resolve_missing_record_returns_false(self, ledger):
        assert not await ledger.resolve(OperationKind.DELETE, uuid4())

"""Unit tests for ReconciliationService sweeps."""

import asyncio
from decimal import Decimal

import pytest

from orderindex.domain.order.model.value import OrderStatus
from orderindex.domain.order.service.projector import ProjectionOutcome
from orderindex.domain.reconciliation.model.record import OperationKind, SweepResult
from orderindex.domain.reconciliation.schedule import ReconciliationSweep
from tests.fakes import make_order


class TestProcessFailedOperations:
    @pytest.mark.asyncio
    async def test_outage_then_recovery_scenario(
        self, projector, reconciliation, index, orders, ledger_repo, queries
    ):
        order = make_order()
        assert order.total == Decimal("3000")
        orders.put(order)

        index.fail()
        assert await projector.project_order(order) is ProjectionOutcome.RECORDED
        assert list(ledger_repo.records) == [(OperationKind.INDEX, order.uuid)]

        index.recover()
        result = await reconciliation.process_failed_operations()

        assert result == SweepResult(resolved=1, remaining=0, dropped=0)
        assert ledger_repo.records == {}
        found = await queries.find_one_by_uuid(order.uuid)
        assert found == order

    @pytest.mark.asyncio
    async def test_second_sweep_resolves_nothing(self, projector, reconciliation, index, orders):
        order = make_order()
        orders.put(order)
        index.fail()
        await projector.project_order(order)
        index.recover()

        first = await reconciliation.process_failed_operations()
        second = await reconciliation.process_failed_operations()

        assert first.resolved == 1
        assert second == SweepResult(resolved=0, remaining=0, dropped=0)

    @pytest.mark.asyncio
    async def test_replay_uses_current_order_state(self, projector, reconciliation, index, orders):
        order = make_order()
        index.fail()
        await projector.project_order(order)

        # The order changed in the primary store while the index was down
        newer = make_order(items=[("sku-7", "Kettle", "45.50", 1)]).model_copy(
            update={"uuid": order.uuid}
        )
        orders.put(newer)
        index.recover()

        await reconciliation.process_failed_operations()

        doc = index.documents()[str(order.uuid)]
        assert doc["total"] == 45.5
        assert doc["items"][0]["productName"] == "Kettle"

    @pytest.mark.asyncio
    async def test_still_failing_keeps_record_and_bumps_attempts(
        self, projector, reconciliation, index, orders, ledger_repo
    ):
        order = make_order()
        orders.put(order)
        index.fail()
        await projector.project_order(order)

        result = await reconciliation.process_failed_operations()

        assert result == SweepResult(resolved=0, remaining=1, dropped=0)
        assert ledger_repo.records[(OperationKind.INDEX, order.uuid)].attempt_count == 2

    @pytest.mark.asyncio
    async def test_missing_order_drops_record(
        self, projector, reconciliation, index, ledger_repo
    ):
        order = make_order()
        index.fail()
        await projector.update_projection(order)
        index.recover()

        result = await reconciliation.process_failed_operations()

        assert result == SweepResult(resolved=0, remaining=0, dropped=1)
        assert ledger_repo.records == {}
        assert index.documents() == {}

    @pytest.mark.asyncio
    async def test_invalid_order_drops_record(
        self, projector, reconciliation, index, orders, ledger_repo
    ):
        order = make_order()
        index.fail()
        await projector.project_order(order)
        orders.put(order.model_copy(update={"total": Decimal("1")}))
        index.recover()

        result = await reconciliation.process_failed_operations()

        assert result.dropped == 1
        assert ledger_repo.records == {}

    @pytest.mark.asyncio
    async def test_delete_replay_needs_no_fetch(self, projector, reconciliation, index):
        order = make_order()
        await projector.project_order(order)
        index.fail()
        await projector.remove_projection(order.uuid)
        index.recover()

        result = await reconciliation.process_failed_operations()

        assert result.resolved == 1
        assert index.documents() == {}

    @pytest.mark.asyncio
    async def test_limit_caps_replayed_records(self, projector, reconciliation, index, orders):
        index.fail()
        for _ in range(3):
            order = make_order()
            orders.put(order)
            await projector.project_order(order)
        index.recover()

        result = await reconciliation.process_failed_operations(limit=2)

        assert result == SweepResult(resolved=2, remaining=1, dropped=0)


class TestReplayAlongsideLiveProjection:
    @pytest.mark.asyncio
    async def test_live_update_during_replay_is_not_overwritten(
        self, projector, reconciliation, index, orders, ledger_repo, locks
    ):
        order = make_order()
        orders.put(order)
        index.fail()
        await projector.update_projection(order)
        index.recover()

        # The replay re-reads the pending order, then its upsert is slow
        index.delay_next(0.05)
        sweep = asyncio.create_task(reconciliation.process_failed_operations())
        await asyncio.sleep(0.01)
        assert locks.locked(str(order.uuid))

        shipped = order.model_copy(update={"status": OrderStatus.SHIPPED})
        orders.put(shipped)
        outcome = await projector.update_projection(shipped)
        result = await sweep

        assert outcome is ProjectionOutcome.PROJECTED
        assert result == SweepResult(resolved=1, remaining=0, dropped=0)
        assert index.documents()[str(order.uuid)]["status"] == "shipped"
        assert ledger_repo.records == {}
        assert len(locks) == 0

    @pytest.mark.asyncio
    async def test_failure_recorded_during_replay_keeps_the_record(
        self, projector, reconciliation, index, orders, ledger, ledger_repo
    ):
        order = make_order()
        orders.put(order)
        index.fail()
        await projector.update_projection(order)
        index.recover()

        index.delay_next(0.05)
        sweep = asyncio.create_task(reconciliation.process_failed_operations())
        await asyncio.sleep(0.01)
        # Another worker fails the same update while the replay is in flight
        await ledger.record_failed_operation(OperationKind.UPDATE, order.uuid, "timed out")
        result = await sweep

        assert result == SweepResult(resolved=0, remaining=1, dropped=0)
        record = ledger_repo.records[(OperationKind.UPDATE, order.uuid)]
        assert record.attempt_count == 2
        assert record.error_message == "timed out"

    @pytest.mark.asyncio
    async def test_removal_waits_for_replay_of_the_same_order(
        self, projector, reconciliation, index, orders, ledger_repo
    ):
        order = make_order()
        orders.put(order)
        index.fail()
        await projector.project_order(order)
        index.recover()

        index.delay_next(0.05)
        sweep = asyncio.create_task(reconciliation.process_failed_operations())
        await asyncio.sleep(0.01)
        orders.remove(order.uuid)
        outcome = await projector.remove_projection(order.uuid)
        result = await sweep

        assert outcome is ProjectionOutcome.PROJECTED
        assert result.resolved == 1
        assert index.documents() == {}
        assert ledger_repo.records == {}


class TestReconciliationSweep:
    @pytest.mark.asyncio
    async def test_run_delegates_to_service(self, reconciliation):
        sweep = ReconciliationSweep(service=reconciliation)

        result = await sweep.run()

        assert result == SweepResult()

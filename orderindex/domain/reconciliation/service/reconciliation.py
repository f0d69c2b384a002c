"""ReconciliationService - replays failed projections from the ledger."""

import logging
from enum import StrEnum

import logfire

from orderindex.domain.order.port.order_reader import OrderReader
from orderindex.domain.order.service.projector import OrderProjector
from orderindex.domain.reconciliation.model.record import (
    OperationKind,
    ReconciliationRecord,
    SweepResult,
)
from orderindex.domain.reconciliation.service.ledger import ReconciliationLedger
from orderindex.domain.shared.error import ReplayNotFoundError, ValidationError
from orderindex.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ReplayOutcome(StrEnum):
    RESOLVED = "resolved"
    DROPPED = "dropped"
    # Replay failed again; attempt metadata bumped
    RETRY = "retry"
    # The operation failed again while replaying; the newer record stays
    SUPERSEDED = "superseded"


class ReconciliationService(Service):
    """Sweeps outstanding records, replaying each against the current order state.

    Replay is idempotent: index/update re-read the order and upsert the full
    document, delete removes whatever is there.

    Each record is replayed under the order's entity lock, so a live
    projection of the same order lands either before the re-read or after
    the write. A record is only resolved if its last_failed_at is unchanged
    since the sweep read it.
    """

    ledger: ReconciliationLedger
    projector: OrderProjector
    orders: OrderReader

    async def process_failed_operations(self, limit: int | None = None) -> SweepResult:
        records = await self.ledger.outstanding(limit=limit)
        resolved = dropped = 0

        with logfire.span("ReconciliationSweep", outstanding=len(records)):
            for record in records:
                # Live projection of this order waits until the replay is settled
                async with self.projector.locks.hold(str(record.entity_id)):
                    outcome = await self._process(record)
                if outcome is ReplayOutcome.RESOLVED:
                    resolved += 1
                elif outcome is ReplayOutcome.DROPPED:
                    dropped += 1

            remaining = await self.ledger.count()

        result = SweepResult(resolved=resolved, remaining=remaining, dropped=dropped)
        if records:
            logfire.info(
                "Reconciliation sweep finished",
                resolved=result.resolved,
                dropped=result.dropped,
                remaining=result.remaining,
            )
        logger.info(
            f"Reconciliation sweep: {resolved} resolved, {dropped} dropped, {remaining} remaining"
        )
        return result

    async def _process(self, record: ReconciliationRecord) -> ReplayOutcome:
        kind, entity_id = record.key
        try:
            await self._replay(record)
        except (ReplayNotFoundError, ValidationError) as e:
            logger.warning(f"Dropping {kind} record for order {entity_id}: {e.message}")
            removed = await self.ledger.resolve(kind, entity_id, record.last_failed_at)
            return ReplayOutcome.DROPPED if removed else ReplayOutcome.SUPERSEDED
        except Exception as e:
            logger.warning(f"Replay of {kind} for order {entity_id} failed again: {e}")
            await self.ledger.record_failed_operation(kind, entity_id, str(e) or type(e).__name__)
            return ReplayOutcome.RETRY

        if not await self.ledger.resolve(kind, entity_id, record.last_failed_at):
            logger.info(
                f"{kind} record for order {entity_id} failed again during replay, keeping it"
            )
            return ReplayOutcome.SUPERSEDED
        return ReplayOutcome.RESOLVED

    async def _replay(self, record: ReconciliationRecord) -> None:
        if record.operation_kind is OperationKind.DELETE:
            await self.projector.delete_document(record.entity_id)
            return

        order = await self.orders.get_order(record.entity_id)
        if order is None:
            raise ReplayNotFoundError(
                f"Order {record.entity_id} no longer exists",
                details={"operation": str(record.operation_kind)},
            )
        await self.projector.write_document(order)

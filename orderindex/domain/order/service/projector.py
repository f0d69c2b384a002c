"""OrderProjector - writes order snapshots to the search index.

Projection never fails the caller: index errors are recorded to the
reconciliation ledger and repaired later by a sweep.
"""

import logging
from enum import StrEnum
from uuid import UUID

import logfire

from orderindex.domain.order.model.aggregate import Order
from orderindex.domain.order.model.document import document_id, order_to_document
from orderindex.domain.reconciliation.model.record import OperationKind
from orderindex.domain.reconciliation.service.ledger import ReconciliationLedger
from orderindex.domain.shared.error import ValidationError
from orderindex.domain.shared.lock import EntityLocks
from orderindex.domain.shared.port.search_index import IndexSettings, SearchIndexClient
from orderindex.domain.shared.service import Service
from orderindex.domain.shared.timeout import bounded

logger = logging.getLogger(__name__)


class ProjectionOutcome(StrEnum):
    PROJECTED = "projected"
    # Index write failed; the operation went to the reconciliation ledger
    RECORDED = "recorded"
    # Order failed its invariants; nothing written, nothing recorded
    REJECTED = "rejected"


class OrderProjector(Service):
    """Projects order snapshots into the index.

    The public operations hold the order's entity lock from write to
    ledger record, so reconciliation replay of the same order never
    interleaves with them. write_document and delete_document take no lock;
    callers that use them directly hold it themselves.
    """

    index: SearchIndexClient
    ledger: ReconciliationLedger
    settings: IndexSettings
    locks: EntityLocks

    async def project_order(self, order: Order) -> ProjectionOutcome:
        """Project a newly created order."""
        return await self._project(order, OperationKind.INDEX)

    async def update_projection(self, order: Order) -> ProjectionOutcome:
        """Replace the projection of an existing order with its current state."""
        return await self._project(order, OperationKind.UPDATE)

    async def remove_projection(self, order_id: UUID) -> ProjectionOutcome:
        """Remove an order's projection. A missing document counts as removed."""
        async with self.locks.hold(str(order_id)):
            try:
                await self.delete_document(order_id)
            except Exception as e:
                await self._record(OperationKind.DELETE, order_id, e)
                return ProjectionOutcome.RECORDED
        return ProjectionOutcome.PROJECTED

    async def write_document(self, order: Order) -> None:
        """Validate and upsert the full document. Raises on any failure."""
        order.check_invariants()
        document = order_to_document(order)
        await bounded(
            self.index.upsert(self.settings.index, document_id(order.uuid), document),
            self.settings.timeout,
            "upsert",
        )
        logger.debug(f"Projected order {order.uuid} to index '{self.settings.index}'")

    async def delete_document(self, order_id: UUID) -> bool:
        """Delete the document. Raises on any failure other than absence."""
        removed = await bounded(
            self.index.delete(self.settings.index, document_id(order_id)),
            self.settings.timeout,
            "delete",
        )
        if not removed:
            logger.debug(f"Order {order_id} was not in index '{self.settings.index}'")
        return removed

    async def _project(self, order: Order, kind: OperationKind) -> ProjectionOutcome:
        async with self.locks.hold(str(order.uuid)):
            try:
                await self.write_document(order)
            except ValidationError as e:
                logger.error(f"Rejected {kind} projection of order {order.uuid}: {e.message}")
                return ProjectionOutcome.REJECTED
            except Exception as e:
                await self._record(kind, order.uuid, e)
                return ProjectionOutcome.RECORDED
        return ProjectionOutcome.PROJECTED

    async def _record(self, kind: OperationKind, order_id: UUID, error: Exception) -> None:
        message = str(error) or type(error).__name__
        logger.warning(f"Index {kind} failed for order {order_id}: {message}")
        logfire.warn(
            "Order projection failed",
            operation=str(kind),
            order_id=str(order_id),
            error=message,
            error_type=type(error).__name__,
        )
        try:
            await self.ledger.record_failed_operation(kind, order_id, message)
        except Exception:
            logger.exception(f"Could not record failed {kind} operation for order {order_id}")

"""ReconciliationLedger - records failed projections for later replay."""

import logging
from datetime import UTC, datetime
from uuid import UUID

from orderindex.domain.reconciliation.model.record import (
    OperationKind,
    ReconciliationRecord,
)
from orderindex.domain.reconciliation.port.repository import ReconciliationRepository
from orderindex.domain.shared.service import Service

logger = logging.getLogger(__name__)


class ReconciliationLedger(Service):
    """Durable ledger of failed index operations, keyed by (kind, entity_id)."""

    repo: ReconciliationRepository

    async def record_failed_operation(
        self, kind: OperationKind, entity_id: UUID, message: str
    ) -> ReconciliationRecord:
        """Record a failure; repeated failures update the existing record."""
        record = await self.repo.upsert_failure(
            kind, entity_id, message, failed_at=datetime.now(UTC)
        )
        logger.warning(
            f"Recorded failed {kind} operation for order {entity_id} "
            f"(attempt {record.attempt_count}): {message}"
        )
        return record

    async def outstanding(self, limit: int | None = None) -> list[ReconciliationRecord]:
        return await self.repo.list_outstanding(limit=limit)

    async def get(self, kind: OperationKind, entity_id: UUID) -> ReconciliationRecord | None:
        return await self.repo.get(kind, entity_id)

    async def resolve(
        self,
        kind: OperationKind,
        entity_id: UUID,
        last_failed_at: datetime | None = None,
    ) -> bool:
        """Remove a record once its operation has been replayed or abandoned.

        Pass the last_failed_at the caller read to leave the record in place
        if the operation failed again in the meantime. Returns True if removed.
        """
        return await self.repo.delete(kind, entity_id, last_failed_at=last_failed_at)

    async def count(self) -> int:
        return await self.repo.count()

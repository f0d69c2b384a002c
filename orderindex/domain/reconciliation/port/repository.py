"""ReconciliationRepository port - durable storage for failed projections."""

from datetime import datetime
from typing import Protocol
from uuid import UUID

from orderindex.domain.reconciliation.model.record import (
    OperationKind,
    ReconciliationRecord,
)


class ReconciliationRepository(Protocol):
    async def upsert_failure(
        self,
        kind: OperationKind,
        entity_id: UUID,
        error_message: str,
        failed_at: datetime,
    ) -> ReconciliationRecord:
        """Create the record for (kind, entity_id), or bump its attempt metadata."""
        ...

    async def get(self, kind: OperationKind, entity_id: UUID) -> ReconciliationRecord | None: ...

    async def list_outstanding(self, limit: int | None = None) -> list[ReconciliationRecord]:
        """Outstanding records, oldest first failure first."""
        ...

    async def delete(
        self,
        kind: OperationKind,
        entity_id: UUID,
        last_failed_at: datetime | None = None,
    ) -> bool:
        """Delete the record. With last_failed_at, only if it has not failed again since."""
        ...

    async def count(self) -> int: ...

"""SQLAlchemy adapter implementing ReconciliationRepository."""

from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, func, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from orderindex.domain.reconciliation.model.record import (
    OperationKind,
    ReconciliationRecord,
)
from orderindex.domain.reconciliation.port.repository import ReconciliationRepository
from orderindex.infrastructure.persistence.mappers.reconciliation import row_to_record
from orderindex.infrastructure.persistence.tables import reconciliation_records_table

_t = reconciliation_records_table


class SQLAlchemyReconciliationRepository(ReconciliationRepository):
    """SQLAlchemy-backed reconciliation ledger.

    One row per (operation_kind, entity_id), enforced by a unique constraint.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    def _key(self, kind: OperationKind, entity_id: UUID):
        return (_t.c.operation_kind == kind.value, _t.c.entity_id == str(entity_id))

    async def upsert_failure(
        self,
        kind: OperationKind,
        entity_id: UUID,
        error_message: str,
        failed_at: datetime,
    ) -> ReconciliationRecord:
        existing = await self.get(kind, entity_id)

        if existing is None:
            await self._session.execute(
                insert(_t).values(
                    operation_kind=kind.value,
                    entity_id=str(entity_id),
                    error_message=error_message,
                    attempt_count=1,
                    first_failed_at=failed_at,
                    last_failed_at=failed_at,
                )
            )
            return ReconciliationRecord(
                operation_kind=kind,
                entity_id=entity_id,
                error_message=error_message,
                attempt_count=1,
                first_failed_at=failed_at,
                last_failed_at=failed_at,
            )

        await self._session.execute(
            update(_t)
            .where(*self._key(kind, entity_id))
            .values(
                attempt_count=_t.c.attempt_count + 1,
                error_message=error_message,
                last_failed_at=failed_at,
            )
        )
        return existing.model_copy(
            update={
                "attempt_count": existing.attempt_count + 1,
                "error_message": error_message,
                "last_failed_at": failed_at,
            }
        )

    async def get(self, kind: OperationKind, entity_id: UUID) -> ReconciliationRecord | None:
        stmt = select(_t).where(*self._key(kind, entity_id))
        row = (await self._session.execute(stmt)).mappings().first()
        return row_to_record(dict(row)) if row else None

    async def list_outstanding(self, limit: int | None = None) -> list[ReconciliationRecord]:
        stmt = select(_t).order_by(_t.c.first_failed_at, _t.c.id)
        if limit is not None:
            stmt = stmt.limit(limit)
        rows = (await self._session.execute(stmt)).mappings().all()
        return [row_to_record(dict(row)) for row in rows]

    async def delete(
        self,
        kind: OperationKind,
        entity_id: UUID,
        last_failed_at: datetime | None = None,
    ) -> bool:
        stmt = delete(_t).where(*self._key(kind, entity_id))
        if last_failed_at is not None:
            # Compare-and-delete: a failure recorded since the read keeps the row
            stmt = stmt.where(_t.c.last_failed_at == last_failed_at)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(_t))
        return result.scalar_one()

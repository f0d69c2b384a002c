"""Reconciliation record mapper - converts between domain and persistence."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from orderindex.domain.reconciliation.model.record import (
    OperationKind,
    ReconciliationRecord,
)


def _as_utc(value: datetime | str) -> datetime:
    # SQLite returns naive datetimes (or strings); stored values are UTC
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def row_to_record(row: dict[str, Any]) -> ReconciliationRecord:
    """Convert database row to ReconciliationRecord."""
    return ReconciliationRecord(
        operation_kind=OperationKind(row["operation_kind"]),
        entity_id=UUID(row["entity_id"]),
        error_message=row["error_message"],
        attempt_count=row["attempt_count"],
        first_failed_at=_as_utc(row["first_failed_at"]),
        last_failed_at=_as_utc(row["last_failed_at"]),
    )

"""Reconciliation ledger model."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import Field

from orderindex.domain.shared.model.entity import Entity


class OperationKind(StrEnum):
    INDEX = "index"
    UPDATE = "update"
    DELETE = "delete"


class ReconciliationRecord(Entity):
    """An outstanding failed projection.

    Only identity and failure metadata are kept; replay always re-reads the
    current order from the primary store. At most one record exists per
    (operation_kind, entity_id).
    """

    operation_kind: OperationKind
    entity_id: UUID
    error_message: str
    attempt_count: int = Field(default=1, ge=1)
    first_failed_at: datetime
    last_failed_at: datetime

    @property
    def key(self) -> tuple[OperationKind, UUID]:
        return (self.operation_kind, self.entity_id)


@dataclass(frozen=True)
class SweepResult:
    """Outcome of one reconciliation sweep.

    Attributes:
        resolved: Records replayed successfully and removed.
        remaining: Records still outstanding after the sweep.
        dropped: Records removed without success (entity gone, invalid document).
    """

    resolved: int = 0
    remaining: int = 0
    dropped: int = 0

    @property
    def processed(self) -> int:
        return self.resolved + self.dropped

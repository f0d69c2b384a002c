"""Scheduled reconciliation sweep."""

from dataclasses import dataclass
from typing import Any

from orderindex.domain.reconciliation.model.record import SweepResult
from orderindex.domain.reconciliation.service.reconciliation import ReconciliationService
from orderindex.domain.shared.event import Schedule


@dataclass
class ReconciliationSweep(Schedule):
    """Replays outstanding reconciliation records on a cron schedule."""

    service: ReconciliationService

    async def run(self, **params: Any) -> SweepResult:
        """Run one sweep.

        Params:
            limit: Optional cap on records replayed in this sweep
        """
        return await self.service.process_failed_operations(limit=params.get("limit"))

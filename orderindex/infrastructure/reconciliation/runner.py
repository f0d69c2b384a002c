"""SweepRunner - single-flight execution of reconciliation sweeps."""

import asyncio
import logging

from dishka import AsyncContainer

from orderindex.domain.reconciliation.model.record import SweepResult
from orderindex.domain.reconciliation.schedule import ReconciliationSweep
from orderindex.util.di.scope import Scope

logger = logging.getLogger(__name__)


class SweepRunner:
    """Runs reconciliation sweeps, at most one at a time.

    While a sweep is in flight, further callers await the same task and
    receive the same SweepResult. Each sweep runs in its own UOW scope, so
    ledger changes commit when the sweep finishes.
    """

    def __init__(self, container: AsyncContainer | None = None, limit: int | None = None) -> None:
        self._container = container
        self._limit = limit
        self._current: asyncio.Task[SweepResult] | None = None
        self._last_result: SweepResult | None = None

    def set_container(self, container: AsyncContainer) -> None:
        """Set the DI container for scoped dependency resolution."""
        self._container = container

    @property
    def running(self) -> bool:
        return self._current is not None and not self._current.done()

    @property
    def last_result(self) -> SweepResult | None:
        return self._last_result

    async def sweep(self) -> SweepResult:
        """Run a sweep, or join the one already in flight."""
        if self._container is None:
            raise RuntimeError("Container not set. Call set_container() first.")

        if not self.running:
            self._current = asyncio.create_task(self._run(), name="reconciliation-sweep")
        else:
            logger.debug("Sweep already in flight, joining it")

        assert self._current is not None
        # One caller being cancelled must not cancel the sweep for the others
        return await asyncio.shield(self._current)

    async def _run(self) -> SweepResult:
        assert self._container is not None
        async with self._container(scope=Scope.UOW) as scope:
            sweep = await scope.get(ReconciliationSweep)
            result = await sweep.run(limit=self._limit)
        self._last_result = result
        return result

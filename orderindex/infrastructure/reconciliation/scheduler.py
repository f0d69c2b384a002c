"""SweepScheduler - runs reconciliation sweeps on a cron schedule."""

import asyncio
import logging
from contextlib import AsyncExitStack

from apscheduler import AsyncScheduler
from apscheduler.triggers.cron import CronTrigger

from orderindex.config import ReconciliationConfig
from orderindex.infrastructure.reconciliation.runner import SweepRunner

logger = logging.getLogger(__name__)

SCHEDULE_ID = "reconciliation-sweep"
MAX_CONSECUTIVE_FAILURES = 5


class SweepScheduler:
    """Registers the reconciliation sweep as a cron task.

    Usage:
        async with SweepScheduler(runner, config.reconciliation):
            await stop_event.wait()
    """

    def __init__(self, runner: SweepRunner, config: ReconciliationConfig) -> None:
        self._runner = runner
        self._config = config
        self._scheduler: AsyncScheduler | None = None
        self._exit_stack: AsyncExitStack | None = None
        self._failures = 0

    @property
    def enabled(self) -> bool:
        return self._config.enabled

    @property
    def running(self) -> bool:
        return self._scheduler is not None

    @property
    def consecutive_failures(self) -> int:
        return self._failures

    async def start(self) -> None:
        """Start the cron scheduler in the background. No-op when disabled."""
        if not self.enabled:
            logger.info("Reconciliation sweep schedule disabled")
            return

        trigger = CronTrigger.from_crontab(self._config.cron)

        self._exit_stack = AsyncExitStack()
        await self._exit_stack.__aenter__()

        self._scheduler = AsyncScheduler()
        await self._exit_stack.enter_async_context(self._scheduler)
        await self._scheduler.add_schedule(self._run_sweep, trigger, id=SCHEDULE_ID)
        await self._scheduler.start_in_background()

        logger.info(f"Reconciliation sweep scheduled (cron={self._config.cron})")

    async def stop(self) -> None:
        if self._exit_stack:
            await self._exit_stack.__aexit__(None, None, None)
            self._exit_stack = None
        self._scheduler = None
        logger.info("Reconciliation scheduler stopped")

    async def _run_sweep(self) -> None:
        """Cron task: run one sweep, tracking consecutive failures."""
        try:
            await self._runner.sweep()
            self._failures = 0
        except (asyncio.CancelledError, SystemExit, KeyboardInterrupt):
            # Let control exceptions propagate for graceful shutdown
            raise
        except Exception as e:
            self._failures += 1
            logger.error(f"Reconciliation sweep failed (failures: {self._failures}): {e}")
            if self._failures >= MAX_CONSECUTIVE_FAILURES:
                logger.critical(
                    f"Reconciliation sweep has failed {self._failures} consecutive times"
                )

    async def __aenter__(self) -> "SweepScheduler":
        await self.start()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:  # noqa: ANN001
        await self.stop()

"""Long-running worker: keeps the order index ready and sweeps the ledger on schedule."""

import asyncio
import logging

import cyclopts

from orderindex.application.runtime import bootstrap
from orderindex.cli.console import get_console
from orderindex.cli.context import open_container
from orderindex.config import Config
from orderindex.infrastructure.event.dispatcher import OrderedEventDispatcher
from orderindex.infrastructure.reconciliation.scheduler import SweepScheduler

logger = logging.getLogger(__name__)

app = cyclopts.App(name="worker", help="Run the reconciliation scheduler")


@app.default
def worker() -> None:
    """Run until interrupted (Ctrl+C)."""
    console = get_console()

    async def _serve() -> None:
        async with open_container() as container:
            await bootstrap(container)
            config = await container.get(Config)
            scheduler = await container.get(SweepScheduler)
            dispatcher = await container.get(OrderedEventDispatcher)

            if not scheduler.enabled:
                console.warning("Reconciliation schedule is disabled (reconciliation.enabled)")

            logger.info(f"Starting {config.server.name} v{config.server.version} worker")
            async with scheduler:
                try:
                    await asyncio.Event().wait()
                finally:
                    await dispatcher.join()

    console.info("Press Ctrl+C to stop")
    try:
        asyncio.run(_serve())
    except KeyboardInterrupt:
        console.success("Worker stopped")

"""Startup tasks shared by the CLI commands and the worker."""

import asyncio
import logging

from dishka import AsyncContainer
from sqlalchemy.ext.asyncio import AsyncEngine

from orderindex.config import Config
from orderindex.domain.order.model.document import ORDER_INDEX_MAPPINGS
from orderindex.domain.shared.error import IndexConnectionError, IndexRequestError
from orderindex.domain.shared.port.search_index import IndexSettings, SearchIndexClient
from orderindex.domain.shared.timeout import bounded
from orderindex.infrastructure.persistence.database import create_tables, is_sqlite
from orderindex.infrastructure.persistence.migrate import run_migrations

logger = logging.getLogger(__name__)


async def ensure_order_index(index: SearchIndexClient, settings: IndexSettings) -> bool:
    """Create the order index with its mappings if missing. Returns True if created."""
    return await bounded(
        index.ensure_index(settings.index, ORDER_INDEX_MAPPINGS),
        settings.timeout,
        "create_index",
    )


async def prepare_database(container: AsyncContainer) -> None:
    """Bring the ledger schema up to date when auto_migrate is on."""
    config = await container.get(Config)
    if not config.database.auto_migrate:
        return

    if is_sqlite(config.database.url):
        engine = await container.get(AsyncEngine)
        await create_tables(engine)
        logger.debug("SQLite tables ensured")
    else:
        await asyncio.to_thread(run_migrations, config.database.url)


async def bootstrap(container: AsyncContainer) -> None:
    """Prepare the database and, if configured, the order index.

    An unreachable index is logged, not raised: writes keep working and the
    index is created by a later `orderindex index init`.
    """
    await prepare_database(container)

    config = await container.get(Config)
    if not config.elasticsearch.create_index:
        return

    index = await container.get(SearchIndexClient)
    settings = await container.get(IndexSettings)
    try:
        if await ensure_order_index(index, settings):
            logger.info(f"Created order index '{settings.index}'")
    except (IndexConnectionError, IndexRequestError) as e:
        logger.warning(f"Could not ensure order index '{settings.index}': {e.message}")

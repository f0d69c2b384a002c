"""Container lifecycle for CLI commands."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import logfire
from dishka import AsyncContainer

from orderindex.application.di import create_container
from orderindex.application.runtime import prepare_database
from orderindex.config import Config, configure_logging


@asynccontextmanager
async def open_container() -> AsyncIterator[AsyncContainer]:
    """Configure logging, build the container and prepare the database."""
    # Pydantic Settings populates from env vars at runtime
    config = Config()  # type: ignore[call-arg]
    configure_logging(config.logging)
    logfire.configure(
        send_to_logfire="if-token-present",
        service_name="orderindex",
        service_version=config.server.version,
        console=False,
    )

    container = create_container(config)
    try:
        await prepare_database(container)
        yield container
    finally:
        await container.close()

"""Database migration utilities.

Migrations run synchronously before the event loop starts, which keeps the
async/sync boundary clean.
"""

import logging
from pathlib import Path

from alembic import command
from alembic.config import Config as AlembicConfig

logger = logging.getLogger(__name__)

# Project root where alembic.ini lives
PROJECT_ROOT = Path(__file__).parent.parent.parent.parent


def to_sync_url(database_url: str) -> str:
    """Convert async database URL to sync equivalent for migrations.

    - sqlite+aiosqlite:/// -> sqlite:///
    - postgresql+asyncpg:// -> postgresql://
    """
    url = database_url.replace("+aiosqlite", "").replace("+asyncpg", "")
    if "sqlite:///" in url:
        parts = url.split("///", 1)
        if len(parts) == 2 and parts[1].startswith("~"):
            expanded = str(Path(parts[1]).expanduser())
            url = f"sqlite:///{expanded}"
    return url


def get_alembic_config(database_url: str) -> AlembicConfig:
    """Create Alembic config with the given database URL."""
    config = AlembicConfig(str(PROJECT_ROOT / "alembic.ini"))
    config.set_main_option("script_location", str(PROJECT_ROOT / "migrations"))
    config.set_main_option("sqlalchemy.url", to_sync_url(database_url))
    return config


def run_migrations(database_url: str) -> None:
    """Run pending Alembic migrations up to head."""
    sync_url = to_sync_url(database_url)

    if "sqlite:///" in sync_url:
        db_path = sync_url.split("///")[-1]
        Path(db_path).parent.mkdir(parents=True, exist_ok=True)

    command.upgrade(get_alembic_config(database_url), "head")
    logger.info("Database migrations complete")

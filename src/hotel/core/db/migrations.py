"""Alembic runner used at startup when AUTO_MIGRATE is set."""

import asyncio
from pathlib import Path

from alembic.config import Config

from alembic import command
from src.hotel.core.logging import get_logger

logger = get_logger(__name__)

# src/hotel/core/db -> project root holding alembic.ini
PROJECT_ROOT = Path(__file__).resolve().parents[4]


def alembic_config() -> Config:
    cfg = Config(str(PROJECT_ROOT / "alembic.ini"))
    cfg.set_main_option("script_location", str(PROJECT_ROOT / "src" / "alembic"))
    return cfg


def run_migrations_sync(revision: str = "head") -> None:
    """Upgrade the schema to ``revision``.

    The async env.py starts its own event loop, so this must not be called
    from inside a running loop; use ``run_migrations_async`` there.
    """
    logger.info("Applying migrations", revision=revision)
    command.upgrade(alembic_config(), revision)


async def run_migrations_async(revision: str = "head") -> None:
    await asyncio.to_thread(run_migrations_sync, revision)

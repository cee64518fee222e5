import logging

from sqlalchemy import text

from smart_broadband.db.base import Base
from smart_broadband.db.session import STORAGE_ERRORS, Database
from smart_broadband.models import Client  # noqa: F401

logger = logging.getLogger(__name__)


async def probe_connection(database: Database) -> bool:
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except STORAGE_ERRORS as exc:
        logger.error("Error acquiring database connection: %s", exc)
        return False

    logger.info("Connected to %s database", database.backend_name)
    return True


async def ensure_schema(database: Database) -> bool:
    try:
        async with database.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    except STORAGE_ERRORS as exc:
        logger.error("Error creating clients table: %s", exc)
        return False

    logger.info("Clients table ready")
    return True


async def init_db(database: Database) -> bool:
    """Check connectivity and create the clients table if it is missing.

    Failures are logged and reported through the return value; startup
    carries on so the health endpoint stays reachable.
    """
    if not await probe_connection(database):
        return False
    return await ensure_schema(database)

"""Runtime Lifecycle — wires settings, logging and the database manager for a host process.

Invariants:
    - startup() configures logging before anything else logs
    - startup() is the only place init_db is called; shutdown() disposes the same engine

Design Decisions:
    - Host-agnostic: the value-update workflow (web app, worker, script) calls these
      from its own lifecycle hooks
"""

import logging

from feature_history.config import Settings, get_settings
from feature_history.infrastructure import database
from feature_history.infrastructure.database import DatabaseSessionManager, init_db
from feature_history.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


def startup(settings: Settings | None = None) -> DatabaseSessionManager:
    """Configure logging and the process-wide database session manager."""
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
        echo=settings.database_echo,
    )
    logger.info("Feature history started")
    return manager


async def shutdown() -> None:
    if database.db_manager is not None:
        await database.db_manager.dispose()
        database.db_manager = None
    logger.info("Feature history shut down")

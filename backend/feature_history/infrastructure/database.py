"""Database Session Manager — async sessions for recording feature value history.

Invariants:
    - session() never commits; it rolls back on any exception and always closes
    - transaction() commits once on success: a value update and its Version row
      land together or not at all
    - SQLAlchemy exceptions surface as DatabaseError naming the failed operation;
      FeatureHistoryError subclasses (VersionConflictError...) propagate unchanged

Design Decisions:
    - Module-level db_manager initialized on startup (runtime.startup), no import side effects
    - expire_on_commit=False: versions and live values stay readable after commit
      without an implicit async reload
    - SQLite URLs skip pool sizing: aiosqlite uses a static/null pool
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import DBAPIError, IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from feature_history.core.errors import DatabaseError, ErrorContext, FeatureHistoryError

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIErrors
_SQLALCHEMY_ERRORS: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "Integrity constraint violated", "write"),
    (OperationalError, "Connection or operational error", "execute"),
    (DBAPIError, "Database driver error", "query"),
    (SQLAlchemyError, "Database operation failed", "unknown"),
)


def to_database_error(error: SQLAlchemyError) -> DatabaseError:
    for error_type, message, operation in _SQLALCHEMY_ERRORS:
        if isinstance(error, error_type):
            break
    return DatabaseError(
        message, operation,
        ErrorContext(debug_info={"db_error": type(error).__name__}),
    )


class DatabaseSessionManager:
    """Hands out AsyncSessions bound to one engine."""

    def __init__(
        self,
        database_url: str,
        pool_size: int = 20,
        max_overflow: int = 10,
        echo: bool = False,
    ):
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        """Session the caller commits; rolled back on any exception."""
        session = self._session_factory()
        try:
            yield session
        except FeatureHistoryError as e:
            await session.rollback()
            logger.info(
                f"Rolled back after {e.code}",
                extra={"error_code": e.code, "version": e.context.version,
                       "feature_value_id": e.context.feature_value_id},
            )
            raise
        except SQLAlchemyError as e:
            await session.rollback()
            error = to_database_error(e)
            logger.error(
                f"{error.message}: {e}", extra={"error_code": error.code},
            )
            raise error from e
        finally:
            await session.close()

    @asynccontextmanager
    async def transaction(self) -> AsyncGenerator[AsyncSession, None]:
        """Session committed when the block exits cleanly, rolled back otherwise.

        The unit for "update the live value and record its version": use
        FeatureValueVersionService.record_version inside the block.
        """
        async with self.session() as session:
            yield session
            await session.commit()

    async def health_check(self) -> bool:
        """True when the database answers a trivial query."""
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
            return True
        except DatabaseError as e:
            logger.error(f"DB health check failed: {e.message}")
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> DatabaseSessionManager:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)
    return db_manager

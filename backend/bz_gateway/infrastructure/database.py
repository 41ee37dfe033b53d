"""Database Session Manager — async engine, sessions that roll back on failure, schema bootstrap.

Invariants:
    - A session that raises is rolled back and closed before the error leaves the context manager
    - SQLAlchemy errors escaping a session become DatabaseError (HTTP 503 envelope)
    - bootstrap_schema() creates missing tables only; existing tables are never altered
    - Stale pooled connections are detected with pool_pre_ping

Design Decisions:
    - One manager per process, created by init_db() in the lifespan and read through the module attribute
    - expire_on_commit=False: routes serialize rows after the service has committed
    - create_all instead of migrations: the gateway owns four small tables and nothing else
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.exc import (
    DBAPIError, IntegrityError, OperationalError, SQLAlchemyError,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession, async_sessionmaker, create_async_engine,
)

from bz_gateway.core.errors import DatabaseError
from bz_gateway.db.base import Base

logger = logging.getLogger(__name__)

# Most specific first: IntegrityError and OperationalError are DBAPIError subclasses.
_ERROR_MAP: tuple[tuple[type[SQLAlchemyError], str, str], ...] = (
    (IntegrityError, "constraint violated", "write"),
    (OperationalError, "database unreachable or query aborted", "execute"),
    (DBAPIError, "driver rejected the statement", "query"),
    (SQLAlchemyError, "unexpected ORM failure", "session"),
)


def _to_database_error(exc: SQLAlchemyError) -> DatabaseError:
    for exc_type, message, operation in _ERROR_MAP:
        if isinstance(exc, exc_type):
            return DatabaseError(message, operation)
    return DatabaseError(str(exc), "session")


class DatabaseSessionManager:
    """Owns the engine and hands out AsyncSessions."""

    def __init__(
        self, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ):
        engine_kwargs = {"pool_pre_ping": True}
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(
                pool_size=pool_size, max_overflow=max_overflow, pool_recycle=3600,
            )
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        session = self._session_factory()
        try:
            yield session
        except SQLAlchemyError as e:
            await session.rollback()
            error = _to_database_error(e)
            logger.error(
                f"{type(e).__name__} during {error.operation}: {e}",
                extra={"error_code": error.code.value},
            )
            raise error from e
        finally:
            await session.close()

    async def bootstrap_schema(self) -> None:
        """Create every mapped table that is missing."""
        import bz_gateway.models  # noqa: F401  populates Base.metadata

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info(f"Schema ready: {', '.join(sorted(Base.metadata.tables))}")

    async def health_check(self) -> bool:
        try:
            async with self.session() as db:
                await db.execute(text("SELECT 1"))
        except (DatabaseError, SQLAlchemyError, OSError) as e:
            logger.error(f"Database health check failed: {e}")
            return False
        return True

    async def dispose(self) -> None:
        await self.engine.dispose()


db_manager: DatabaseSessionManager | None = None


def init_db(database_url: str, **kwargs) -> None:
    global db_manager
    db_manager = DatabaseSessionManager(database_url, **kwargs)


async def close_db() -> None:
    global db_manager
    if db_manager is not None:
        await db_manager.dispose()
        db_manager = None


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request."""
    if db_manager is None:
        raise RuntimeError("Database not initialized")
    async with db_manager.session() as session:
        yield session

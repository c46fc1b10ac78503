import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, Optional

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from app.core.config import Settings


"""Database engine, session handling and table bootstrap. - db

The engine and its connection pool live on a ``Database`` object that is
created with the application and stored on ``app.state``; request handlers
get sessions from it through a dependency instead of a module-level global.
"""

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM entities. - base"""


class StoreError(Exception):
    """Raised when the relational store cannot serve a request. - store_error

    ``message`` is a human-readable summary; ``original_error`` keeps the
    underlying driver/SQLAlchemy exception for diagnostics.
    """

    def __init__(self, message: str, original_error: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error is not None:
            return str(self.original_error)
        return self.message


def _engine_options(settings: Settings) -> Dict[str, Any]:
    """Pool and driver options for the configured URL. - engine_options"""
    url = make_url(settings.resolved_database_url)
    options: Dict[str, Any] = {"echo": settings.debug, "pool_pre_ping": True}

    # SQLite URLs get their own pool class; sizing arguments would be rejected
    if url.get_backend_name() != "sqlite":
        options.update(
            pool_size=settings.database.pool_size,
            max_overflow=0,
            pool_timeout=settings.database.pool_timeout,
        )

    if url.get_driver_name() == "asyncpg":
        options["connect_args"] = {
            "timeout": settings.database.connect_timeout,
            "ssl": settings.database.ssl,
        }

    return options


class Database:
    """Lifecycle-scoped handle over an async engine and its session factory. - database"""

    def __init__(self, engine: AsyncEngine) -> None:
        self.engine = engine
        self.sessionmaker = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        """Create the engine (no connection is opened until first use). - from_settings"""
        engine = create_async_engine(settings.resolved_database_url, **_engine_options(settings))
        return cls(engine)

    async def init_models(self) -> None:
        """Create the schools table if it does not exist. - init_models"""
        # Register entities on Base.metadata
        from app.models import school  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database initialized successfully")

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Yield a session; its connection goes back to the pool on exit. - session"""
        async with self.sessionmaker() as session:
            yield session

    async def dispose(self) -> None:
        """Close all pooled connections. - dispose"""
        await self.engine.dispose()

"""Database engine and session management utilities."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from ..core.config import Settings

SessionFactory = async_sessionmaker[AsyncSession]


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _connection_record: Any) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine(settings: Settings) -> AsyncEngine:
    """Build the async engine for ``settings.database_url``.

    SQLite connections get ``PRAGMA foreign_keys=ON`` so cascades behave as on PostgreSQL.
    """

    url = settings.database_url
    engine = create_async_engine(
        url,
        echo=settings.db_echo,
        pool_pre_ping=not url.startswith("sqlite"),
    )
    if engine.dialect.name == "sqlite":
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> SessionFactory:
    """Return a session factory whose sessions keep attributes loaded after commit."""

    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


@asynccontextmanager
async def session_scope(session_factory: SessionFactory) -> AsyncIterator[AsyncSession]:
    """Yield a session that commits on success and rolls back on any error."""

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise


async def init_db(engine: AsyncEngine) -> None:
    """Create all database tables (used for tests and local development)."""

    from .. import models  # noqa: F401  # register tables on the metadata

    async with engine.begin() as connection:
        await connection.run_sync(SQLModel.metadata.create_all)


__all__ = [
    "SessionFactory",
    "create_engine",
    "create_session_factory",
    "init_db",
    "session_scope",
]

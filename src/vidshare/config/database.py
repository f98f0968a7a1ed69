"""
Database configuration and connection management.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator, Awaitable, Callable
from typing import Any

from sqlalchemy import MetaData, event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from vidshare.config.settings import settings
from vidshare.db.models import Base

# Metadata for migrations
metadata: MetaData = Base.metadata

AfterHook = Callable[[], Awaitable[Any]]

_AFTER_COMMIT = "after_commit"
_AFTER_ROLLBACK = "after_rollback"


def on_commit(session: AsyncSession, hook: AfterHook) -> None:
    """
    Run ``hook`` once the session's transaction has committed.

    Used for side effects outside the database that cannot be undone, such
    as deleting media that a row pointed at. Hooks are dropped if the
    transaction rolls back instead.
    """
    session.info.setdefault(_AFTER_COMMIT, []).append(hook)


def on_rollback(session: AsyncSession, hook: AfterHook) -> None:
    """
    Run ``hook`` if the session's transaction rolls back.

    Used to compensate work done outside the database, such as removing
    media uploaded for a row that was never committed.
    """
    session.info.setdefault(_AFTER_ROLLBACK, []).append(hook)


async def _run_hooks(session: AsyncSession, key: str) -> None:
    hooks: list[AfterHook] = session.info.pop(key, [])
    for hook in hooks:
        await hook()


async def commit(session: AsyncSession) -> None:
    """
    Commit, then run the hooks registered with :func:`on_commit`.

    A commit that fails is rolled back, running the :func:`on_rollback`
    hooks, and the error propagates.
    """
    try:
        await session.commit()
    except Exception:
        await rollback(session)
        raise
    session.info.pop(_AFTER_ROLLBACK, None)
    await _run_hooks(session, _AFTER_COMMIT)


async def rollback(session: AsyncSession) -> None:
    """Roll back, then run the hooks registered with :func:`on_rollback`."""
    await session.rollback()
    session.info.pop(_AFTER_COMMIT, None)
    await _run_hooks(session, _AFTER_ROLLBACK)


def _enable_sqlite_transactions(engine: AsyncEngine) -> None:
    """
    Let SQLAlchemy drive SQLite transactions.

    The sqlite3 driver defers BEGIN until the first write, which breaks
    SAVEPOINT; this emits BEGIN explicitly and turns on foreign keys.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN")


class DatabaseManager:
    """Manages database connections and sessions."""

    def __init__(self, database_url: str | None = None) -> None:
        self._database_url = database_url
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @property
    def database_url(self) -> str:
        """URL in effect for this manager."""
        return self._database_url or settings.database_url

    def get_engine(self) -> AsyncEngine:
        """Get or create async database engine."""
        if self._engine is None:
            engine_kwargs: dict[str, Any] = {
                "echo": settings.debug or settings.db_log_queries,
                "future": True,
                "pool_pre_ping": True,
            }

            # SQLite uses a single-connection pool; sizing applies to servers only
            if not self.database_url.startswith("sqlite"):
                engine_kwargs.update(
                    {
                        "pool_size": settings.db_pool_size,
                        "pool_recycle": 3600,
                        "pool_timeout": settings.storage_timeout_seconds,
                    }
                )

            self._engine = create_async_engine(self.database_url, **engine_kwargs)
            if self.database_url.startswith("sqlite"):
                _enable_sqlite_transactions(self._engine)
        return self._engine

    def get_session_factory(self) -> async_sessionmaker[AsyncSession]:
        """Get or create session factory."""
        if self._session_factory is None:
            self._session_factory = async_sessionmaker(
                bind=self.get_engine(),
                class_=AsyncSession,
                expire_on_commit=False,
            )
        return self._session_factory

    async def get_session(self) -> AsyncGenerator[AsyncSession, None]:
        """Get async database session.

        The session commits when the consumer finishes without error and
        rolls back otherwise, so one request maps to one transaction.
        Hooks registered with :func:`on_commit` or :func:`on_rollback` run
        after the matching outcome; a failed commit counts as a rollback.
        """
        session_factory = self.get_session_factory()
        async with session_factory() as session:
            try:
                yield session
            except Exception:
                await rollback(session)
                raise
            else:
                await commit(session)
            finally:
                await session.close()

    async def close(self) -> None:
        """Close database connections."""
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None
        self._session_factory = None

    async def create_tables(self) -> None:
        """Create database tables."""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        """Drop database tables."""
        async with self.get_engine().begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def ping(self) -> bool:
        """Return True when a trivial round-trip to the database succeeds."""
        async with self.get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True


# Global database manager instance
db_manager = DatabaseManager()

"""
Tests for database configuration and connection management.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError

from vidshare.config.database import DatabaseManager, commit, on_commit, on_rollback
from vidshare.db.models import Video


class TestDatabaseManager:
    """Test DatabaseManager functionality."""

    def test_init(self) -> None:
        manager = DatabaseManager()
        assert manager._engine is None
        assert manager._session_factory is None

    def test_explicit_url_wins(self) -> None:
        assert DatabaseManager("sqlite+aiosqlite://").database_url == "sqlite+aiosqlite://"

    @patch("vidshare.config.database.create_async_engine")
    def test_get_engine_reused(self, mock_create_engine: MagicMock) -> None:
        """Server URLs get pool sizing and the engine is created once."""
        mock_engine = MagicMock()
        mock_create_engine.return_value = mock_engine
        manager = DatabaseManager("postgresql+asyncpg://u:p@db/vidshare")

        assert manager.get_engine() is mock_engine
        assert manager.get_engine() is mock_engine
        mock_create_engine.assert_called_once()
        assert "pool_size" in mock_create_engine.call_args.kwargs

    @patch("vidshare.config.database.async_sessionmaker")
    def test_get_session_factory_reused(self, mock_sessionmaker: MagicMock) -> None:
        mock_sessionmaker.return_value = MagicMock()
        manager = DatabaseManager()
        manager._engine = MagicMock()

        factory = manager.get_session_factory()

        assert manager.get_session_factory() is factory
        mock_sessionmaker.assert_called_once()


@pytest.mark.asyncio
class TestSqliteSessions:
    """Behaviour against a real SQLite file."""

    async def test_ping(self, db_manager: DatabaseManager) -> None:
        assert await db_manager.ping() is True

    async def test_foreign_keys_enforced(self, db_manager: DatabaseManager) -> None:
        factory = db_manager.get_session_factory()
        async with factory() as session:
            session.add(
                Video(
                    owner_id="f" * 32,
                    title="orphan",
                    video_url="u",
                    video_public_id="p",
                    thumbnail_url="t",
                    thumbnail_public_id="q",
                )
            )
            with pytest.raises(IntegrityError):
                await session.flush()

    async def test_savepoint_rolls_back_inner_only(
        self, db_manager: DatabaseManager
    ) -> None:
        factory = db_manager.get_session_factory()
        async with factory() as session:
            await session.execute(text("CREATE TABLE t (v INTEGER)"))
            await session.execute(text("INSERT INTO t VALUES (1)"))
            nested = await session.begin_nested()
            await session.execute(text("INSERT INTO t VALUES (2)"))
            await nested.rollback()

            rows = (await session.execute(text("SELECT v FROM t"))).scalars().all()

        assert rows == [1]

    async def test_get_session_commits(self, db_manager: DatabaseManager) -> None:
        async for session in db_manager.get_session():
            await session.execute(text("CREATE TABLE c (v INTEGER)"))
            await session.execute(text("INSERT INTO c VALUES (7)"))

        async for session in db_manager.get_session():
            value = (await session.execute(text("SELECT v FROM c"))).scalar_one()

        assert value == 7

    async def test_get_session_rolls_back_on_error(
        self, db_manager: DatabaseManager
    ) -> None:
        async for session in db_manager.get_session():
            await session.execute(text("CREATE TABLE r (v INTEGER)"))

        gen = db_manager.get_session()
        session = await gen.__anext__()
        await session.execute(text("INSERT INTO r VALUES (1)"))
        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("boom"))

        async for session in db_manager.get_session():
            count = (await session.execute(text("SELECT count(*) FROM r"))).scalar_one()

        assert count == 0


@pytest.mark.asyncio
class TestTransactionHooks:
    """on_commit / on_rollback hooks driven by get_session."""

    async def test_commit_runs_commit_hooks_only(
        self, db_manager: DatabaseManager
    ) -> None:
        calls: list[str] = []

        async for session in db_manager.get_session():
            on_commit(session, AsyncMock(side_effect=lambda: calls.append("commit")))
            on_rollback(session, AsyncMock(side_effect=lambda: calls.append("rollback")))

        assert calls == ["commit"]

    async def test_error_runs_rollback_hooks_only(
        self, db_manager: DatabaseManager
    ) -> None:
        calls: list[str] = []

        gen = db_manager.get_session()
        session = await gen.__anext__()
        on_commit(session, AsyncMock(side_effect=lambda: calls.append("commit")))
        on_rollback(session, AsyncMock(side_effect=lambda: calls.append("rollback")))
        with pytest.raises(RuntimeError):
            await gen.athrow(RuntimeError("boom"))

        assert calls == ["rollback"]

    async def test_failed_commit_counts_as_rollback(
        self, db_manager: DatabaseManager
    ) -> None:
        calls: list[str] = []
        factory = db_manager.get_session_factory()

        async with factory() as session:
            on_commit(session, AsyncMock(side_effect=lambda: calls.append("commit")))
            on_rollback(session, AsyncMock(side_effect=lambda: calls.append("rollback")))
            session.commit = AsyncMock(  # type: ignore[method-assign]
                side_effect=OperationalError("COMMIT", {}, Exception("disk full"))
            )
            with pytest.raises(OperationalError):
                await commit(session)

        assert calls == ["rollback"]

    async def test_hooks_run_once(self, db_manager: DatabaseManager) -> None:
        hook = AsyncMock()
        factory = db_manager.get_session_factory()

        async with factory() as session:
            on_commit(session, hook)
            await commit(session)
            await commit(session)

        hook.assert_awaited_once()

"""
Pytest configuration and fixtures for vidshare tests.

Database tests run against a throwaway SQLite file per test, through the
same :class:`DatabaseManager` the application uses, so savepoints and
foreign keys behave as they do in the app.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator
from pathlib import Path

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config.database import DatabaseManager
from vidshare.config.settings import Settings
from vidshare.container import container
from vidshare.services.media_store import LocalMediaStore


@pytest.fixture
def mock_settings(tmp_path: Path) -> Settings:
    """Settings pointing at temporary storage."""
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'settings.db'}",
        media_dir=tmp_path / "media",
        media_base_url="http://test/media",
    )


@pytest.fixture
async def db_manager(tmp_path: Path) -> AsyncGenerator[DatabaseManager, None]:
    """Database manager bound to a fresh SQLite file with all tables created."""
    manager = DatabaseManager(f"sqlite+aiosqlite:///{tmp_path / 'vidshare.db'}")
    await manager.create_tables()
    yield manager
    await manager.close()


@pytest.fixture
async def db_session(db_manager: DatabaseManager) -> AsyncGenerator[AsyncSession, None]:
    """Session in an open transaction; rolled back after the test."""
    factory = db_manager.get_session_factory()
    async with factory() as session:
        yield session
        await session.rollback()


@pytest.fixture
def media_store(tmp_path: Path) -> LocalMediaStore:
    """Local media store writing under the test's temp directory."""
    return LocalMediaStore(root=tmp_path / "media", base_url="http://test/media")


@pytest.fixture
def test_container(media_store: LocalMediaStore):
    """Global container with its media store swapped for ``media_store``."""
    container.reset()
    container.override("media_store", media_store)
    yield container
    container.reset()

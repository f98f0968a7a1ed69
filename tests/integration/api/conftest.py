"""
Fixtures for API tests.

Requests go through the real application over httpx's ASGI transport.
Each request gets its own committing session from the per-test SQLite
database, as it would from the production dependency.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from tests.factories.model_factory import UserFactory, seed
from vidshare.api.deps import get_db
from vidshare.api.main import app
from vidshare.config.database import DatabaseManager
from vidshare.container import Container
from vidshare.db.models import User


@pytest.fixture
async def async_client(
    db_manager: DatabaseManager, test_container: Container
) -> AsyncGenerator[AsyncClient, None]:
    """Client for the app with the database swapped for the test database."""
    app.dependency_overrides[get_db] = db_manager.get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.fixture
async def alice(db_manager: DatabaseManager) -> User:
    user = UserFactory.build(username="alice", full_name="Alice Liddell")
    await seed(db_manager, user)
    return user


@pytest.fixture
async def bob(db_manager: DatabaseManager) -> User:
    user = UserFactory.build(username="bob", full_name="Bob Builder")
    await seed(db_manager, user)
    return user

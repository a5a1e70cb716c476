"""Integration test fixtures for database and HTTP client operations.

Each test gets its own in-memory SQLite database (aiosqlite), so no external
services are needed. Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import src.taskboard.models  # noqa: F401 - registers every table on the metadata
from src.taskboard.core import db
from src.taskboard.core.realtime import FanoutHub, get_fanout_hub
from src.taskboard.main import app
from src.taskboard.models import User, UserRole
from tests.helpers import create_user


@pytest.fixture(scope="function")
async def engine() -> AsyncGenerator[AsyncEngine]:
    """Fresh in-memory database with every table created."""
    test_engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    db.set_engine(test_engine)
    yield test_engine
    db.set_engine(None)
    await test_engine.dispose()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Session for arranging and inspecting data outside the app.

    Tests must call ``await session.commit()`` to make changes visible to
    requests; the helpers in tests.helpers do so.
    """
    async with db.get_session(engine) as session:
        yield session


@pytest.fixture
async def client(engine: AsyncEngine) -> AsyncGenerator[AsyncClient]:
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def app_hub(hub: FanoutHub) -> FanoutHub:
    """Install the test's hub as the app's fan-out hub."""
    app.dependency_overrides[get_fanout_hub] = lambda: hub
    return hub


@pytest.fixture
async def member(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.TEAM_MEMBER, name="Mia Member")


@pytest.fixture
async def manager(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.PROJECT_MANAGER, name="Pat Manager")


@pytest.fixture
async def admin(db_session: AsyncSession) -> User:
    return await create_user(db_session, UserRole.ADMIN, name="Ada Admin")

"""Common test fixtures for the application."""

import asyncio
import os

os.environ.setdefault("ENV", "testing")
os.environ.setdefault("CLEAR_DB_ON_RESTART", "true")

from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from blog.app import app
from blog.config.db import get_session
from blog.config.seed import seed_db


async def _prepare_database(engine: AsyncEngine) -> None:
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        await seed_db(session)


@pytest.fixture(scope="session")
def api_db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Create and seed a SQLite file shared by the API tests.

    Returns:
        str: Async SQLAlchemy URL of the seeded database.
    """
    db_path: Path = tmp_path_factory.mktemp("db") / "blog.db"
    url = f"sqlite+aiosqlite:///{db_path}"

    async def _setup() -> None:
        engine = create_async_engine(url, poolclass=NullPool)
        await _prepare_database(engine)
        await engine.dispose()

    asyncio.run(_setup())
    return url


@pytest.fixture(name="client")
def client_fixture(api_db_url: str) -> Generator[TestClient]:
    """Create a test client for the FastAPI app.

    Every request opens its own session; ``NullPool`` keeps connections from
    leaking between the event loops the test client runs requests on.

    Returns:
        TestClient: Configured FastAPI test client.
    """
    engine = create_async_engine(api_db_url, poolclass=NullPool)

    async def get_session_override() -> AsyncGenerator[AsyncSession]:
        async with AsyncSession(engine, expire_on_commit=False) as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override
    yield TestClient(app, base_url="http://testserver")  # NOSONAR

    app.dependency_overrides.clear()


@pytest.fixture
async def session() -> AsyncGenerator[AsyncSession]:
    """Empty in-memory database with all tables created.

    Returns:
        AsyncSession: SQLModel async session for database operations.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    async with AsyncSession(engine, expire_on_commit=False) as session:
        yield session

    await engine.dispose()


@pytest.fixture
async def seeded_session(session: AsyncSession) -> AsyncSession:
    """In-memory database holding the example users and posts.

    The identity map is cleared so relations are only present when a query
    eager loads them.
    """
    await seed_db(session)
    session.expunge_all()
    return session

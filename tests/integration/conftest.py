"""Integration test fixtures for database and HTTP client operations.

The app runs against an in-memory SQLite database. The database lives in the
engine's single pooled connection, so every test gets a fresh schema.
Uses polyfactory for type-safe test data generation.
"""

from collections.abc import AsyncGenerator

import pytest
import respx
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession
from sqlmodel import SQLModel

from src.autobuilder.core import db
from src.autobuilder.core import redis as redis_core
from src.autobuilder.core.config import get_settings
from src.autobuilder.main import create_app
from src.autobuilder.models import User
from tests.factories import DEFAULT_TEST_PASSWORD, UserFactory


@pytest.fixture(autouse=True)
async def _reset_state_between_tests(reset_limiters) -> AsyncGenerator[None]:
    """Reset Redis and limiter state so tests do not share counters or clients."""
    redis_core.reset_redis_state()
    yield
    await redis_core.close_redis()


@pytest.fixture
async def engine() -> AsyncGenerator[AsyncEngine]:
    """The app's engine with all tables created."""
    await db.dispose_engine()
    test_engine = db.get_engine()

    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield test_engine

    await db.dispose_engine()


@pytest.fixture
async def db_session(engine: AsyncEngine) -> AsyncGenerator[AsyncSession]:
    """Provide an async session for database operations.

    The session shares the app's connection. Commit setup data before
    sending requests; the session is not used while a request runs.
    """
    async with db.get_session(engine) as session:
        yield session


@pytest.fixture
def app(engine: AsyncEngine) -> FastAPI:
    """A fresh app instance. Tests may set dependency_overrides on it."""
    return create_app()


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """HTTP client talking to the app."""
    async with AsyncClient(
        transport=ASGITransport(app=app, raise_app_exceptions=False),
        base_url="http://test",
    ) as client:
        yield client


@pytest.fixture
async def test_user(db_session: AsyncSession) -> User:
    """A committed user whose password is DEFAULT_TEST_PASSWORD."""
    user = UserFactory.build()
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
async def other_user(db_session: AsyncSession) -> User:
    user = UserFactory.build(name="Other User")
    db_session.add(user)
    await db_session.commit()
    return user


@pytest.fixture
def test_password() -> str:
    return DEFAULT_TEST_PASSWORD


@pytest.fixture
def ai_api():
    """Mock the chat completion API."""
    with respx.mock(base_url=get_settings().openai_base_url, assert_all_called=False) as mock:
        yield mock


@pytest.fixture
def mvx_api():
    """Mock the MultiversX API."""
    with respx.mock(base_url=get_settings().multiversx_api_url, assert_all_called=False) as mock:
        yield mock

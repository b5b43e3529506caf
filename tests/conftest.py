"""Root test fixtures shared across all test types.

This conftest contains fixtures that can be used by both unit and integration tests.
Database and HTTP client fixtures are in tests/integration/conftest.py.
"""

import os

# Set APP_ENV to testing before any app imports to disable rate limiting
os.environ.setdefault("APP_ENV", "testing")
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-that-is-at-least-32-characters-long"
os.environ["REDIS_URL"] = ""
os.environ["OPENAI_API_KEY"] = "sk-test"
os.environ["OPENAI_BASE_URL"] = "https://ai.test/v1"
os.environ["MULTIVERSX_API_URL"] = "https://mvx.test"
os.environ["ADMIN_EMAILS"] = '["admin@example.com"]'
# Cheap hashing keeps the suite fast
os.environ["ARGON2_TIME_COST"] = "1"
os.environ["ARGON2_MEMORY_COST"] = "8"

# ruff: noqa: E402 - Imports must be after env var setup
from collections.abc import AsyncGenerator, Callable, Iterator

import pytest
from fakeredis import aioredis as fakeredis_aio
from redis.asyncio import Redis

from src.autobuilder.core import redis as redis_core
from src.autobuilder.core.config import get_settings
from src.autobuilder.core.rate_limit import reset_rate_limiters

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


# --- Settings Fixtures ---


@pytest.fixture
def override_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[Callable[..., None]]:
    """Override settings through environment variables for one test.

    Usage:
        override_settings(OPENAI_API_KEY="")
    """

    def _override(**env: str) -> None:
        for name, value in env.items():
            monkeypatch.setenv(name, value)
        get_settings.cache_clear()
        reset_rate_limiters()

    yield _override

    monkeypatch.undo()
    get_settings.cache_clear()
    reset_rate_limiters()


# --- Rate Limit Fixtures ---


@pytest.fixture
def reset_limiters() -> Iterator[None]:
    """Drop limiter singletons (and their in-memory state) around a test."""
    reset_rate_limiters()
    yield
    reset_rate_limiters()


# --- Redis Test Fixtures (shared) ---


@pytest.fixture
async def fake_redis() -> AsyncGenerator[Redis]:
    """Provides a fakeredis client for testing.

    Returns an in-memory Redis implementation that behaves like
    a real Redis server but doesn't require external dependencies.
    """
    client = fakeredis_aio.FakeRedis(decode_responses=True)
    yield client
    await client.aclose()


@pytest.fixture
async def mock_redis(fake_redis: Redis, monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[Redis]:
    """Patches get_redis() to return the fakeredis client.

    Patches the rate limit module, which imports get_redis by name.
    """
    redis_core.reset_redis_state()

    async def _get_fake_redis() -> Redis:
        return fake_redis

    monkeypatch.setattr("src.autobuilder.core.redis.get_redis", _get_fake_redis)
    monkeypatch.setattr("src.autobuilder.core.rate_limit.get_redis", _get_fake_redis)
    yield fake_redis
    redis_core.reset_redis_state()


@pytest.fixture
async def mock_redis_unavailable(monkeypatch: pytest.MonkeyPatch) -> AsyncGenerator[None]:
    """Patches get_redis() to return None (simulates Redis unavailable)."""
    redis_core.reset_redis_state()

    async def _get_none() -> None:
        return None

    monkeypatch.setattr("src.autobuilder.core.redis.get_redis", _get_none)
    monkeypatch.setattr("src.autobuilder.core.rate_limit.get_redis", _get_none)
    yield
    redis_core.reset_redis_state()

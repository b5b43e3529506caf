"""Tests for the global and AI rate limits as seen over HTTP."""

import httpx
import pytest
from httpx import AsyncClient

from src.autobuilder.core.rate_limit import InMemoryRateLimitStore, RateLimiter, _skip_global
from tests.helpers import assert_error, auth_headers

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

LIMIT = 3


@pytest.fixture
def rate_limits_on(monkeypatch: pytest.MonkeyPatch, mock_redis_unavailable) -> None:
    """Enable rate limiting (off under APP_ENV=testing) with small limits."""
    monkeypatch.setattr("src.autobuilder.core.rate_limit.rate_limiting_enabled", lambda: True)
    monkeypatch.setattr(
        "src.autobuilder.api.dependencies.rate_limit.rate_limiting_enabled", lambda: True
    )

    global_limiter = RateLimiter(
        window_seconds=60, max_requests=LIMIT, skip=_skip_global, store=InMemoryRateLimitStore()
    )
    ai_limiter = RateLimiter(
        window_seconds=60,
        max_requests=1,
        scope="ai",
        message="AI rate limit exceeded. Please try again in a minute.",
        store=InMemoryRateLimitStore(),
    )
    monkeypatch.setattr(
        "src.autobuilder.core.rate_limit.get_global_rate_limiter", lambda: global_limiter
    )
    monkeypatch.setattr(
        "src.autobuilder.api.dependencies.rate_limit.get_ai_rate_limiter", lambda: ai_limiter
    )


async def test_request_over_the_limit_is_rejected(client: AsyncClient, rate_limits_on) -> None:
    for i in range(LIMIT):
        response = await client.get("/api/projects")
        assert response.status_code == 200
        assert response.headers["X-RateLimit-Limit"] == str(LIMIT)
        assert response.headers["X-RateLimit-Remaining"] == str(LIMIT - i - 1)

    response = await client.get("/api/projects")

    error = assert_error(response, 429, "RATE_LIMIT_EXCEEDED")
    assert error["message"] == "Too many requests from this IP, please try again later."
    assert error["retry_after"] >= 1
    assert int(response.headers["Retry-After"]) >= 1


async def test_health_is_exempt(client: AsyncClient, rate_limits_on) -> None:
    for _ in range(LIMIT + 2):
        response = await client.get("/api/health")
        assert response.status_code == 200
        assert "X-RateLimit-Limit" not in response.headers


async def test_disabled_in_testing(client: AsyncClient) -> None:
    for _ in range(5):
        assert (await client.get("/api/projects")).status_code == 200


async def test_ai_limit_is_per_user(
    client: AsyncClient, ai_api, rate_limits_on, test_user, other_user
) -> None:
    ai_api.post("/chat/completions").mock(
        return_value=httpx.Response(
            200, json={"model": "gpt-4", "choices": [{"message": {"content": "hi"}}]}
        )
    )

    first = await client.post(
        "/api/ai/chat", json={"message": "a"}, headers=auth_headers(test_user)
    )
    second = await client.post(
        "/api/ai/chat", json={"message": "b"}, headers=auth_headers(test_user)
    )
    other = await client.post(
        "/api/ai/chat", json={"message": "c"}, headers=auth_headers(other_user)
    )

    assert first.status_code == 200
    error = assert_error(second, 429, "RATE_LIMIT_EXCEEDED")
    assert error["message"] == "AI rate limit exceeded. Please try again in a minute."
    assert second.headers["Retry-After"]
    assert other.status_code == 200

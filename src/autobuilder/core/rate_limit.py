"""Sliding-window rate limiting with pluggable storage.

Two layers of rate limiting:
1. ``RateLimiter`` instances (global middleware keyed by client IP, and the AI
   route dependency keyed by user) counting hits in a trailing window. State
   lives in a ``RateLimitStore``: Redis sorted sets when REDIS_URL is
   reachable, otherwise a per-process dict of deques.
2. slowapi decorators for fixed per-endpoint limits on credential endpoints.
"""

import asyncio
import math
import time
from collections import deque
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from functools import lru_cache
from typing import Protocol
from uuid import uuid4

from redis.asyncio import Redis
from redis.exceptions import RedisError
from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.autobuilder.core.config import get_settings
from src.autobuilder.core.exceptions import RateLimitError, error_body
from src.autobuilder.core.logging import get_logger
from src.autobuilder.core.redis import get_redis

logger = get_logger(__name__)

# Never counted by the global limiter
EXEMPT_PATH_PREFIXES = ("/api/health", "/metrics", "/docs", "/redoc", "/openapi.json")


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of recording one hit against a key."""

    allowed: bool
    limit: int
    remaining: int
    reset_after: float  # seconds until the oldest hit leaves the window

    @property
    def retry_after(self) -> int:
        return max(1, math.ceil(self.reset_after))

    def headers(self) -> dict[str, str]:
        headers = {
            "X-RateLimit-Limit": str(self.limit),
            "X-RateLimit-Remaining": str(self.remaining),
            "X-RateLimit-Reset": str(max(0, math.ceil(self.reset_after))),
        }
        if not self.allowed:
            headers["Retry-After"] = str(self.retry_after)
        return headers


class RateLimitStore(Protocol):
    async def hit(self, key: str, window: float, limit: int, now: float) -> RateLimitResult:
        """Record a hit for ``key`` unless ``limit`` hits already fall inside ``window``."""
        ...

    async def reset(self, key: str | None = None) -> None:
        """Forget one key, or every key when ``key`` is None."""
        ...


class InMemoryRateLimitStore:
    """Process-local store: one deque of hit timestamps per key.

    Keys whose deque empties are dropped. Once more than ``max_tracked_keys``
    keys are held, keys with no hit inside the current window are swept before
    the next hit is recorded. Keys with live hits are never evicted.
    """

    def __init__(self, max_tracked_keys: int = 10_000):
        self.max_tracked_keys = max_tracked_keys
        self._hits: dict[str, deque[float]] = {}
        self._lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._hits)

    async def hit(self, key: str, window: float, limit: int, now: float) -> RateLimitResult:
        cutoff = now - window
        async with self._lock:
            if len(self._hits) > self.max_tracked_keys:
                self._sweep(cutoff)

            stamps = self._hits.get(key, deque())
            while stamps and stamps[0] <= cutoff:
                stamps.popleft()

            if len(stamps) >= limit:
                if stamps:
                    self._hits[key] = stamps
                    reset_after = stamps[0] + window - now
                else:
                    self._hits.pop(key, None)
                    reset_after = window
                return RateLimitResult(False, limit, 0, reset_after)

            stamps.append(now)
            self._hits[key] = stamps
            return RateLimitResult(True, limit, limit - len(stamps), stamps[0] + window - now)

    async def sweep(self, now: float, window: float) -> int:
        """Drop keys with no hit inside the window. Returns how many were dropped."""
        async with self._lock:
            return self._sweep(now - window)

    def _sweep(self, cutoff: float) -> int:
        stale = [key for key, stamps in self._hits.items() if not stamps or stamps[-1] <= cutoff]
        for key in stale:
            del self._hits[key]
        if stale:
            logger.debug("Swept idle rate limit keys", count=len(stale), remaining=len(self._hits))
        return len(stale)

    async def reset(self, key: str | None = None) -> None:
        async with self._lock:
            if key is None:
                self._hits.clear()
            else:
                self._hits.pop(key, None)


class RedisRateLimitStore:
    """Shared store: one sorted set of hit timestamps per key.

    Trim, add, count and expire run in a single MULTI/EXEC. A hit that pushes
    the count over the limit is removed again so rejected requests do not
    extend the window.
    """

    def __init__(self, redis: Redis, prefix: str = "ratelimit"):
        self._redis = redis
        self.prefix = prefix

    def _key(self, key: str) -> str:
        return f"{self.prefix}:{key}"

    async def hit(self, key: str, window: float, limit: int, now: float) -> RateLimitResult:
        redis_key = self._key(key)
        member = f"{now}:{uuid4().hex}"

        async with self._redis.pipeline(transaction=True) as pipe:
            pipe.zremrangebyscore(redis_key, "-inf", now - window)
            pipe.zadd(redis_key, {member: now})
            pipe.zcard(redis_key)
            pipe.zrange(redis_key, 0, 0, withscores=True)
            pipe.pexpire(redis_key, max(1, int(window * 1000)))
            _, _, count, oldest, _ = await pipe.execute()

        oldest_score = float(oldest[0][1]) if oldest else now
        reset_after = oldest_score + window - now

        if count > limit:
            await self._redis.zrem(redis_key, member)
            return RateLimitResult(False, limit, 0, reset_after)

        return RateLimitResult(True, limit, limit - count, reset_after)

    async def reset(self, key: str | None = None) -> None:
        if key is not None:
            await self._redis.delete(self._key(key))
            return
        async for redis_key in self._redis.scan_iter(match=f"{self.prefix}:*"):
            await self._redis.delete(redis_key)


def get_client_ip(request: Request) -> str:
    """Client address, honouring X-Forwarded-For only from trusted proxies."""
    peer = get_remote_address(request)
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded and peer in get_settings().trusted_proxy_ips:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return peer or "unknown"


def get_rate_limit_key(request: Request) -> str:
    """Key for slowapi endpoint limits.

    Only the client IP is used. Headers a client controls must never be part
    of the key, otherwise rotating them creates unlimited fresh buckets.
    """
    return get_client_ip(request)


class RateLimiter:
    """Sliding-window limiter over a ``RateLimitStore``.

    Args:
        window_seconds: Length of the trailing window.
        max_requests: Hits allowed per key inside the window.
        key_func: Derives the key from a request when none is passed to ``check``.
        skip: Predicate exempting a request from counting entirely.
        scope: Namespace for this limiter's keys in shared storage.
        store: Fixed store. When omitted, Redis is used if reachable and the
            limiter's own in-memory store otherwise.
    """

    def __init__(
        self,
        *,
        window_seconds: float,
        max_requests: int,
        key_func: Callable[[Request], str] = get_client_ip,
        skip: Callable[[Request], bool] | None = None,
        scope: str = "global",
        store: RateLimitStore | None = None,
        message: str = "Too many requests from this IP, please try again later.",
        max_tracked_keys: int = 10_000,
    ):
        self.window_seconds = window_seconds
        self.max_requests = max_requests
        self.key_func = key_func
        self.skip = skip
        self.scope = scope
        self.message = message
        self._store = store
        self._memory_store = InMemoryRateLimitStore(max_tracked_keys=max_tracked_keys)

    async def get_store(self) -> RateLimitStore:
        if self._store is not None:
            return self._store
        redis = await get_redis()
        if redis is not None:
            return RedisRateLimitStore(redis, prefix=f"ratelimit:{self.scope}")
        return self._memory_store

    async def hit(self, key: str, now: float | None = None) -> RateLimitResult:
        """Record a hit for ``key`` and report whether it is allowed."""
        if now is None:
            now = time.time()
        store = await self.get_store()
        try:
            return await store.hit(key, self.window_seconds, self.max_requests, now)
        except (RedisError, OSError) as e:
            if store is self._memory_store:
                raise
            logger.warning(
                "Redis rate limit check failed, falling back to in-memory",
                error=str(e),
                scope=self.scope,
            )
            return await self._memory_store.hit(key, self.window_seconds, self.max_requests, now)

    async def check(self, request: Request, key: str | None = None) -> RateLimitResult | None:
        """Count ``request``. Returns None when the skip predicate exempts it."""
        if self.skip is not None and self.skip(request):
            return None
        return await self.hit(key or self.key_func(request))

    async def reset(self, key: str | None = None) -> None:
        await self._memory_store.reset(key)
        store = await self.get_store()
        if store is not self._memory_store:
            await store.reset(key)


def rate_limiting_enabled() -> bool:
    return not get_settings().is_testing


def _skip_global(request: Request) -> bool:
    if request.url.path.startswith(EXEMPT_PATH_PREFIXES):
        return True
    return get_client_ip(request) in get_settings().rate_limit_allowlist


@lru_cache
def get_global_rate_limiter() -> RateLimiter:
    settings = get_settings()
    return RateLimiter(
        window_seconds=settings.rate_limit_window_seconds,
        max_requests=settings.rate_limit_max_requests,
        skip=_skip_global,
        scope="global",
        max_tracked_keys=settings.rate_limit_max_tracked_keys,
    )


@lru_cache
def get_ai_rate_limiter() -> RateLimiter:
    settings = get_settings()
    return RateLimiter(
        window_seconds=settings.ai_rate_limit_window_seconds,
        max_requests=settings.ai_rate_limit_max_requests,
        scope="ai",
        message="AI rate limit exceeded. Please try again in a minute.",
        max_tracked_keys=settings.rate_limit_max_tracked_keys,
    )


def reset_rate_limiters() -> None:
    """Drop the limiter singletons so the next call rebuilds them from settings."""
    get_global_rate_limiter.cache_clear()
    get_ai_rate_limiter.cache_clear()


async def global_rate_limit_middleware(
    request: Request,
    call_next: Callable[[Request], Awaitable[Response]],
) -> Response:
    """Per-IP sliding-window limit applied to every non-exempt request."""
    if not rate_limiting_enabled():
        return await call_next(request)

    limiter = get_global_rate_limiter()
    result = await limiter.check(request)
    if result is None:
        return await call_next(request)

    if not result.allowed:
        logger.warning(
            "Global rate limit exceeded",
            client_ip=get_client_ip(request),
            path=request.url.path,
        )
        return JSONResponse(
            status_code=RateLimitError.status_code,
            content=error_body(
                limiter.message, RateLimitError.code, retry_after=result.retry_after
            ),
            headers=result.headers(),
        )

    response = await call_next(request)
    response.headers.update(result.headers())
    return response


def create_limiter() -> Limiter:
    """Create the slowapi limiter for per-endpoint limits.

    Uses Redis if configured, otherwise in-memory storage. Disabled in testing.
    """
    settings = get_settings()

    if settings.is_testing:
        logger.info("Endpoint rate limiter disabled (testing environment)")
        return Limiter(key_func=get_rate_limit_key, enabled=False)

    if settings.redis_url:
        logger.info("Endpoint rate limiter using Redis backend")
        return Limiter(key_func=get_rate_limit_key, storage_uri=settings.redis_url)

    logger.info("Endpoint rate limiter using in-memory backend (not distributed)")
    return Limiter(key_func=get_rate_limit_key)


limiter = create_limiter()

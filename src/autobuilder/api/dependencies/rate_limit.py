"""Per-route rate limit dependencies."""

from fastapi import Request, Response

from src.autobuilder.api.dependencies.auth import OptionalIdentity
from src.autobuilder.core.exceptions import RateLimitError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.core.rate_limit import (
    get_ai_rate_limiter,
    get_client_ip,
    rate_limiting_enabled,
)

logger = get_logger(__name__)


async def enforce_ai_rate_limit(
    request: Request,
    response: Response,
    identity: OptionalIdentity,
) -> None:
    """Limit AI calls per user, or per client IP for anonymous callers."""
    if not rate_limiting_enabled():
        return

    limiter = get_ai_rate_limiter()
    key = f"user:{identity.user_id}" if identity else f"ip:{get_client_ip(request)}"
    result = await limiter.check(request, key=key)
    if result is None:
        return

    if not result.allowed:
        logger.warning("AI rate limit exceeded", path=request.url.path)
        raise RateLimitError(
            limiter.message,
            retry_after=result.retry_after,
            headers=result.headers(),
        )

    for name, value in result.headers().items():
        response.headers[name] = value

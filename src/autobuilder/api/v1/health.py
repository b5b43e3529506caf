"""Health and runtime information endpoints."""

import os
import platform
import sys
import time
from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter
from sqlalchemy import text

from src.autobuilder.api.dependencies import DBSession
from src.autobuilder.core.config import get_settings
from src.autobuilder.core.exceptions import ServiceUnavailableError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.core.redis import get_redis
from src.autobuilder.schemas.envelope import SuccessResponse

logger = get_logger(__name__)

router = APIRouter(prefix="/health", tags=["health"])

_started_at = time.monotonic()


def uptime_seconds() -> float:
    return round(time.monotonic() - _started_at, 3)


def _configured(value: object) -> str:
    return "[CONFIGURED]" if value else "[NOT SET]"


@router.get(
    "",
    response_model=SuccessResponse[dict[str, Any]],
    responses={503: {"description": "Database unreachable"}},
)
async def health(session: DBSession) -> SuccessResponse[dict[str, Any]]:
    """Database ping plus a summary of which services are configured."""
    settings = get_settings()

    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error("Health check database ping failed", error=str(e))
        raise ServiceUnavailableError("Service unavailable") from e

    if settings.redis_url:
        redis_status = "connected" if await get_redis() is not None else "unavailable"
    else:
        redis_status = "not configured"

    return SuccessResponse(
        data={
            "status": "healthy",
            "timestamp": datetime.now(UTC).isoformat(),
            "uptime": uptime_seconds(),
            "version": settings.app_version,
            "environment": settings.app_env,
            "services": {
                "database": "connected",
                "redis": redis_status,
                "ai": "configured" if settings.ai_configured else "not configured",
                "blockchain": settings.multiversx_network,
            },
        }
    )


@router.get("/system", response_model=SuccessResponse[dict[str, Any]])
async def system_info() -> SuccessResponse[dict[str, Any]]:
    """Runtime details. Secrets are reported as configured or not, never by value."""
    settings = get_settings()
    return SuccessResponse(
        data={
            "python": {
                "version": platform.python_version(),
                "implementation": platform.python_implementation(),
                "platform": sys.platform,
                "arch": platform.machine(),
            },
            "pid": os.getpid(),
            "uptime": uptime_seconds(),
            "env": {
                "APP_ENV": settings.app_env,
                "DATABASE_URL": _configured(settings.database_url),
                "REDIS_URL": _configured(settings.redis_url),
                "OPENAI_API_KEY": _configured(settings.openai_api_key),
                "JWT_SECRET_KEY": _configured(settings.jwt_secret_key),
                "METRICS_API_KEY": _configured(settings.metrics_api_key),
            },
        }
    )

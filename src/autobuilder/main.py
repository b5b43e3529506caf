import secrets
import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from asgi_correlation_id import CorrelationIdMiddleware, correlation_id
from fastapi import Depends, FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.security import APIKeyHeader
from prometheus_fastapi_instrumentator import Instrumentator
from starlette.middleware.base import RequestResponseEndpoint

from src.autobuilder.api.v1.router import api_router
from src.autobuilder.core.config import get_settings
from src.autobuilder.core.db import dispose_engine
from src.autobuilder.core.exceptions import AuthenticationError, setup_exception_handlers
from src.autobuilder.core.logging import (
    bind_request_context,
    clear_request_context,
    get_logger,
    setup_logging,
)
from src.autobuilder.core.rate_limit import global_rate_limit_middleware, limiter
from src.autobuilder.core.redis import close_redis
from src.autobuilder.core.security import SecurityHeadersMiddleware

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Application lifespan - startup and shutdown."""
    settings = get_settings()
    setup_logging(settings.debug)
    logger.info(
        "Starting application",
        app_name=settings.app_name,
        environment=settings.app_env,
        ai_configured=settings.ai_configured,
        network=settings.multiversx_network,
    )

    yield

    logger.info("Closing connections...")
    await close_redis()
    await dispose_engine()
    logger.info("Shutdown complete")


OPENAPI_TAGS = [
    {"name": "health", "description": "Liveness and runtime information"},
    {"name": "auth", "description": "Registration, login and profile"},
    {"name": "users", "description": "User accounts"},
    {"name": "projects", "description": "Project CRUD and scaffold generation"},
    {"name": "templates", "description": "Read-only project templates"},
    {"name": "ai", "description": "Code generation, review, optimization and chat"},
    {"name": "blockchain", "description": "MultiversX network lookups"},
]


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Build Web3 projects with AI assistance on MultiversX",
        version=settings.app_version,
        openapi_tags=OPENAPI_TAGS,
        lifespan=lifespan,
        docs_url="/docs" if settings.enable_openapi else None,
        redoc_url="/redoc" if settings.enable_openapi else None,
        openapi_url="/openapi.json" if settings.enable_openapi else None,
    )

    setup_exception_handlers(app)
    app.state.limiter = limiter

    # Middleware added later wraps middleware added earlier.
    # Outermost to innermost: correlation id, CORS, security headers,
    # gzip, request logging, global rate limit.
    app.middleware("http")(global_rate_limit_middleware)

    @app.middleware("http")
    async def request_logging_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind request_id to log context and log one line per request."""
        clear_request_context()
        bind_request_context(correlation_id.get())
        start = time.perf_counter()
        try:
            response = await call_next(request)
            logger.info(
                "Request completed",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - start) * 1000, 2),
            )
            return response
        finally:
            clear_request_context()

    app.add_middleware(GZipMiddleware, minimum_size=1000)
    app.add_middleware(
        SecurityHeadersMiddleware,
        content_security_policy=settings.csp_production if settings.is_production else None,
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
        allow_headers=["Authorization", "Content-Type", "X-Request-ID"],
        expose_headers=[
            "X-Request-ID",
            "X-RateLimit-Limit",
            "X-RateLimit-Remaining",
            "X-RateLimit-Reset",
            "Retry-After",
        ],
    )
    app.add_middleware(CorrelationIdMiddleware)

    app.include_router(api_router)

    @app.get("/", tags=["health"])
    async def root() -> dict[str, str]:
        return {
            "name": settings.app_name,
            "version": settings.app_version,
            "status": "running",
            "timestamp": datetime.now(UTC).isoformat(),
        }

    # Prometheus metrics instrumentation
    instrumentator = Instrumentator().instrument(app)

    # Protect /metrics endpoint if API key is configured
    if settings.metrics_api_key:
        api_key_header = APIKeyHeader(name="X-Metrics-Key", auto_error=False)

        async def verify_metrics_key(api_key: str | None = Depends(api_key_header)) -> None:
            if (
                api_key is None
                or settings.metrics_api_key is None
                or not secrets.compare_digest(api_key, settings.metrics_api_key)
            ):
                raise AuthenticationError(
                    "Invalid or missing metrics API key", code="INVALID_METRICS_KEY"
                )

        instrumentator.expose(app, endpoint="/metrics", dependencies=[Depends(verify_metrics_key)])
    else:
        instrumentator.expose(app, endpoint="/metrics")

    return app


app = create_app()

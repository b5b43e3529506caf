"""Application errors and the handlers that render them as error envelopes.

Every failure leaves the API as::

    {"success": false, "error": {"message", "code", "timestamp", "request_id"}}

Handlers never echo internal exception text to the caller.
"""

from datetime import UTC, datetime
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.autobuilder.core.logging import get_logger

logger = get_logger(__name__)


class AppError(Exception):
    """Base class for errors that map onto an HTTP status and error code."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(
        self,
        message: str | None = None,
        *,
        code: str | None = None,
        details: list[dict[str, Any]] | None = None,
        headers: dict[str, str] | None = None,
    ):
        self.message = message or self.message
        self.code = code or self.code
        self.details = details
        self.headers = headers
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "VALIDATION_ERROR"
    message = "Validation failed"


class AuthenticationError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "AUTH_REQUIRED"
    message = "Access token required"


class InvalidTokenError(AuthenticationError):
    code = "INVALID_TOKEN"
    message = "Invalid or expired token"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    code = "FORBIDDEN"
    message = "Access denied"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    code = "NOT_FOUND"
    message = "Resource not found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    code = "CONFLICT"
    message = "Resource already exists"


class RateLimitError(AppError):
    status_code = status.HTTP_429_TOO_MANY_REQUESTS
    code = "RATE_LIMIT_EXCEEDED"
    message = "Too many requests, please try again later."

    def __init__(self, message: str | None = None, *, retry_after: int = 1, **kwargs: Any):
        self.retry_after = max(1, int(retry_after))
        headers = {"Retry-After": str(self.retry_after), **(kwargs.pop("headers", None) or {})}
        super().__init__(message, headers=headers, **kwargs)


class ServiceUnavailableError(AppError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "SERVICE_UNAVAILABLE"
    message = "Service unavailable"


class ExternalServiceError(AppError):
    """A third-party API call failed. The upstream error text is logged, not returned."""

    code = "EXTERNAL_SERVICE_ERROR"


def error_body(
    message: str,
    code: str,
    *,
    details: list[dict[str, Any]] | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Build the error envelope for a response body."""
    error: dict[str, Any] = {
        "message": message,
        "code": code,
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": correlation_id.get(),
    }
    if details:
        error["details"] = details
    error.update(extra)
    return {"success": False, "error": error}


def _validation_details(exc: RequestValidationError) -> list[dict[str, Any]]:
    details = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in ("body", "query", "path")]
        details.append({"field": ".".join(loc) or None, "message": err.get("msg", "Invalid value")})
    return details


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers that render the error envelope."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(
                "Request failed",
                path=request.url.path,
                code=exc.code,
                error=exc.message,
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(exc.message, exc.code, details=exc.details),
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(
                "Validation failed", "VALIDATION_ERROR", details=_validation_details(exc)
            ),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND and exc.detail == "Not Found":
            content = error_body(
                f"Route {request.url.path} not found",
                "NOT_FOUND",
                path=request.url.path,
                method=request.method,
            )
        else:
            content = error_body(str(exc.detail), f"HTTP_{exc.status_code}")
        return JSONResponse(
            status_code=exc.status_code,
            content=content,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RateLimitExceeded)
    async def rate_limit_exceeded_handler(
        request: Request, exc: RateLimitExceeded
    ) -> JSONResponse:
        retry_after = int(exc.limit.limit.get_expiry())
        return JSONResponse(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            content=error_body(
                f"Rate limit exceeded: {exc.detail}",
                RateLimitError.code,
                retry_after=retry_after,
            ),
            headers={"Retry-After": str(retry_after)},
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body("Internal server error", "INTERNAL_ERROR"),
        )

"""Response envelopes shared by every route."""

from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

T = TypeVar("T")


class SuccessResponse(BaseModel, Generic[T]):
    success: bool = True
    data: T
    message: str | None = None


class ErrorDetail(BaseModel):
    message: str
    code: str
    timestamp: datetime
    request_id: str | None = None
    details: list[dict[str, Any]] | None = None


class ErrorResponse(BaseModel):
    """Documented shape of every error body (see core.exceptions.error_body)."""

    success: bool = False
    error: ErrorDetail


def ok(data: Any = None, message: str | None = None) -> dict[str, Any]:
    """Build a success envelope for routes that return plain dicts."""
    return {"success": True, "data": data, "message": message}

"""Request/response schemas."""

from src.autobuilder.schemas.envelope import ErrorResponse, SuccessResponse, ok
from src.autobuilder.schemas.pagination import Pagination

__all__ = [
    "ErrorResponse",
    "Pagination",
    "SuccessResponse",
    "ok",
]

"""AI pass-through request and response schemas."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Any
from uuid import UUID

from pydantic import AfterValidator, BaseModel, Field

from src.autobuilder.models.enums import AiRequestStatus, AiRequestType
from src.autobuilder.schemas.pagination import Pagination


class CodeType(str, Enum):
    COMPONENT = "component"
    CONTRACT = "contract"
    API = "api"
    TEST = "test"


class CodeLanguage(str, Enum):
    TYPESCRIPT = "typescript"
    RUST = "rust"
    JAVASCRIPT = "javascript"


def _not_blank(v: str) -> str:
    if not v.strip():
        raise ValueError("must not be empty")
    return v


NonBlank = Annotated[str, AfterValidator(_not_blank)]


class GenerateCodeRequest(BaseModel):
    prompt: NonBlank = Field(min_length=1, max_length=10_000)
    type: CodeType
    framework: str = Field(default="react", max_length=50)
    project_id: UUID | None = None


class ReviewCodeRequest(BaseModel):
    code: NonBlank = Field(min_length=1, max_length=50_000)
    language: CodeLanguage
    context: str = Field(default="", max_length=2_000)


class OptimizeCodeRequest(BaseModel):
    code: NonBlank = Field(min_length=1, max_length=50_000)
    language: CodeLanguage
    goals: list[str] = Field(default_factory=lambda: ["performance", "readability"], max_length=10)


class ChatRequest(BaseModel):
    message: NonBlank = Field(min_length=1, max_length=10_000)
    context: str = Field(default="general", max_length=100)


class AiMetadata(BaseModel):
    model: str
    tokens: int | None
    timestamp: datetime


class GeneratedCodeData(BaseModel):
    code: str
    type: CodeType
    framework: str
    metadata: AiMetadata


class CodeReviewData(BaseModel):
    review: str
    language: CodeLanguage
    metadata: AiMetadata


class CodeOptimizationData(BaseModel):
    optimization: str
    language: CodeLanguage
    goals: list[str]
    metadata: AiMetadata


class ChatData(BaseModel):
    response: str
    context: str
    metadata: AiMetadata


class AiRequestRead(BaseModel):
    id: UUID
    type: AiRequestType
    prompt: str
    response: str | None
    status: AiRequestStatus
    tokens_used: int | None
    model: str
    context: dict[str, Any]
    project_id: UUID | None
    created_at: datetime

    model_config = {"from_attributes": True}


class AiHistoryData(BaseModel):
    requests: list[AiRequestRead]
    pagination: Pagination

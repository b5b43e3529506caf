"""AI endpoints - pass-through to the chat completion API.

Every route except history is rate limited per user (or per IP when
anonymous) and answers 503 when no API key is configured.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.autobuilder.api.dependencies import (
    AiHistoryServiceDep,
    AiServiceDep,
    OptionalIdentity,
    RequiredIdentity,
    enforce_ai_rate_limit,
)
from src.autobuilder.schemas.ai import (
    AiHistoryData,
    AiRequestRead,
    ChatData,
    ChatRequest,
    CodeOptimizationData,
    CodeReviewData,
    GenerateCodeRequest,
    GeneratedCodeData,
    OptimizeCodeRequest,
    ReviewCodeRequest,
)
from src.autobuilder.schemas.envelope import SuccessResponse
from src.autobuilder.schemas.pagination import Pagination

router = APIRouter(prefix="/ai", tags=["ai"])

AI_RESPONSES = {
    400: {"description": "Validation failed"},
    429: {"description": "AI rate limit exceeded"},
    500: {"description": "Completion API call failed"},
    503: {"description": "AI service not configured"},
}

# Rate limit first, then the service (503 when unconfigured), then the body
RATE_LIMITED = [Depends(enforce_ai_rate_limit)]


@router.post(
    "/generate-code",
    response_model=SuccessResponse[GeneratedCodeData],
    dependencies=RATE_LIMITED,
    responses=AI_RESPONSES,
)
async def generate_code(
    service: AiServiceDep, identity: OptionalIdentity, data: GenerateCodeRequest
) -> SuccessResponse[GeneratedCodeData]:
    user_id = identity.user_id if identity else None
    return SuccessResponse(data=await service.generate_code(data, user_id))


@router.post(
    "/review-code",
    response_model=SuccessResponse[CodeReviewData],
    dependencies=RATE_LIMITED,
    responses=AI_RESPONSES,
)
async def review_code(
    service: AiServiceDep, identity: OptionalIdentity, data: ReviewCodeRequest
) -> SuccessResponse[CodeReviewData]:
    user_id = identity.user_id if identity else None
    return SuccessResponse(data=await service.review_code(data, user_id))


@router.post(
    "/optimize-code",
    response_model=SuccessResponse[CodeOptimizationData],
    dependencies=RATE_LIMITED,
    responses=AI_RESPONSES,
)
async def optimize_code(
    service: AiServiceDep, identity: OptionalIdentity, data: OptimizeCodeRequest
) -> SuccessResponse[CodeOptimizationData]:
    user_id = identity.user_id if identity else None
    return SuccessResponse(data=await service.optimize_code(data, user_id))


@router.post(
    "/chat",
    response_model=SuccessResponse[ChatData],
    dependencies=RATE_LIMITED,
    responses=AI_RESPONSES,
)
async def chat(
    service: AiServiceDep, identity: OptionalIdentity, data: ChatRequest
) -> SuccessResponse[ChatData]:
    user_id = identity.user_id if identity else None
    return SuccessResponse(data=await service.chat(data, user_id))


@router.get("/history", response_model=SuccessResponse[AiHistoryData])
async def history(
    identity: RequiredIdentity,
    service: AiHistoryServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> SuccessResponse[AiHistoryData]:
    """The caller's recorded AI requests, newest first."""
    requests, total = await service.list_for_user(identity.user_id, page, limit)
    return SuccessResponse(
        data=AiHistoryData(
            requests=[AiRequestRead.model_validate(r) for r in requests],
            pagination=Pagination.build(page, limit, total),
        )
    )

"""AI pass-through: builds prompts, calls the completion API, records history."""

from datetime import UTC, datetime
from typing import Any
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.autobuilder.clients import ChatCompletionClient, ChatCompletionError, ChatCompletionResult
from src.autobuilder.core.exceptions import ExternalServiceError, ForbiddenError, NotFoundError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.models import AiRequest
from src.autobuilder.models.enums import AiRequestStatus, AiRequestType
from src.autobuilder.repositories import AiRequestRepository, ProjectRepository
from src.autobuilder.schemas.ai import (
    AiMetadata,
    ChatData,
    ChatRequest,
    CodeOptimizationData,
    CodeReviewData,
    GenerateCodeRequest,
    GeneratedCodeData,
    OptimizeCodeRequest,
    ReviewCodeRequest,
)
from src.autobuilder.services import prompts

logger = get_logger(__name__)

AI_REQUEST_FAILED = "AI_REQUEST_FAILED"


class AiService:
    def __init__(
        self,
        client: ChatCompletionClient,
        ai_request_repo: AiRequestRepository,
        project_repo: ProjectRepository,
        session: AsyncSession,
    ):
        self.client = client
        self.ai_request_repo = ai_request_repo
        self.project_repo = project_repo
        self.session = session

    async def _check_project(self, project_id: UUID | None, user_id: UUID | None) -> None:
        if project_id is None:
            return
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        if user_id is None or project.user_id != user_id:
            raise ForbiddenError("Access denied")

    async def _complete(
        self,
        request_type: AiRequestType,
        system_prompt: str,
        user_message: str,
        params: prompts.CompletionParams,
        *,
        failure_message: str,
        user_id: UUID | None,
        project_id: UUID | None = None,
        context: dict[str, Any] | None = None,
    ) -> ChatCompletionResult:
        """Run one completion and record it as an AiRequest row.

        Raises:
            ExternalServiceError: With ``failure_message`` when the API call fails.
        """
        record = AiRequest(
            type=request_type.value,
            prompt=user_message,
            model=self.client.model,
            context=context or {},
            user_id=user_id,
            project_id=project_id,
        )
        self.ai_request_repo.add(record)

        try:
            result = await self.client.complete(
                system_prompt,
                user_message,
                max_tokens=params.max_tokens,
                temperature=params.temperature,
            )
        except ChatCompletionError as e:
            record.status = AiRequestStatus.FAILED.value
            await self.session.commit()
            logger.error("AI request failed", type=request_type.value, error=str(e))
            raise ExternalServiceError(failure_message, code=AI_REQUEST_FAILED) from e

        record.status = AiRequestStatus.COMPLETED.value
        record.response = result.content
        record.tokens_used = result.total_tokens
        record.model = result.model
        await self.session.commit()

        logger.info(
            "AI request completed",
            type=request_type.value,
            model=result.model,
            tokens=result.total_tokens,
        )
        return result

    @staticmethod
    def _metadata(result: ChatCompletionResult) -> AiMetadata:
        return AiMetadata(
            model=result.model,
            tokens=result.total_tokens,
            timestamp=datetime.now(UTC),
        )

    async def generate_code(
        self, data: GenerateCodeRequest, user_id: UUID | None
    ) -> GeneratedCodeData:
        await self._check_project(data.project_id, user_id)
        result = await self._complete(
            AiRequestType.CODE_GENERATION,
            prompts.generate_prompt(data.type, data.framework),
            data.prompt,
            prompts.GENERATE_PARAMS,
            failure_message="Failed to generate code",
            user_id=user_id,
            project_id=data.project_id,
            context={"type": data.type.value, "framework": data.framework},
        )
        return GeneratedCodeData(
            code=result.content,
            type=data.type,
            framework=data.framework,
            metadata=self._metadata(result),
        )

    async def review_code(self, data: ReviewCodeRequest, user_id: UUID | None) -> CodeReviewData:
        result = await self._complete(
            AiRequestType.CODE_REVIEW,
            prompts.review_prompt(data.language),
            prompts.review_message(data.code, data.language, data.context),
            prompts.REVIEW_PARAMS,
            failure_message="Failed to review code",
            user_id=user_id,
            context={"language": data.language.value},
        )
        return CodeReviewData(
            review=result.content,
            language=data.language,
            metadata=self._metadata(result),
        )

    async def optimize_code(
        self, data: OptimizeCodeRequest, user_id: UUID | None
    ) -> CodeOptimizationData:
        result = await self._complete(
            AiRequestType.CODE_OPTIMIZATION,
            prompts.optimize_prompt(data.language, data.goals),
            prompts.fenced(data.code, data.language),
            prompts.OPTIMIZE_PARAMS,
            failure_message="Failed to optimize code",
            user_id=user_id,
            context={"language": data.language.value, "goals": data.goals},
        )
        return CodeOptimizationData(
            optimization=result.content,
            language=data.language,
            goals=data.goals,
            metadata=self._metadata(result),
        )

    async def chat(self, data: ChatRequest, user_id: UUID | None) -> ChatData:
        result = await self._complete(
            AiRequestType.CHAT,
            prompts.CHAT_PROMPT,
            data.message,
            prompts.CHAT_PARAMS,
            failure_message="Failed to get AI response",
            user_id=user_id,
            context={"context": data.context},
        )
        return ChatData(
            response=result.content,
            context=data.context,
            metadata=self._metadata(result),
        )


class AiHistoryService:
    """Read access to a user's recorded AI requests. Needs no API key."""

    def __init__(self, ai_request_repo: AiRequestRepository):
        self.ai_request_repo = ai_request_repo

    async def list_for_user(
        self, user_id: UUID, page: int, limit: int
    ) -> tuple[list[AiRequest], int]:
        return await self.ai_request_repo.list_by_user(user_id, page, limit)

"""Repository for AiRequest entity."""

from uuid import UUID

from sqlalchemy import update
from sqlmodel import select

from src.autobuilder.models import AiRequest
from src.autobuilder.repositories.base import BaseRepository


class AiRequestRepository(BaseRepository[AiRequest]):
    model = AiRequest

    async def list_by_user(
        self, user_id: UUID, page: int = 1, limit: int = 10
    ) -> tuple[list[AiRequest], int]:
        """A user's AI requests, newest first."""
        query = select(AiRequest).where(AiRequest.user_id == user_id)
        return await self.paginate(query, page, limit, AiRequest.created_at.desc(), AiRequest.id)

    async def detach_user(self, user_id: UUID) -> None:
        """Clear the owner of a user's requests (no commit)."""
        await self.session.execute(
            update(AiRequest).where(AiRequest.user_id == user_id).values(user_id=None)
        )

    async def detach_projects(self, project_ids: list[UUID]) -> None:
        """Clear the project link of requests tied to the given projects (no commit)."""
        if not project_ids:
            return
        await self.session.execute(
            update(AiRequest)
            .where(AiRequest.project_id.in_(project_ids))  # type: ignore[union-attr]
            .values(project_id=None)
        )

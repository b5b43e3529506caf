from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.autobuilder.core.exceptions import NotFoundError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.core.security import hash_password
from src.autobuilder.models import User
from src.autobuilder.models.base import utc_now
from src.autobuilder.repositories import (
    AiRequestRepository,
    ProjectFileRepository,
    ProjectRepository,
    UserRepository,
)
from src.autobuilder.schemas.user import UserUpdate

logger = get_logger(__name__)


class UserService:
    """User management service."""

    def __init__(
        self,
        user_repo: UserRepository,
        project_repo: ProjectRepository,
        file_repo: ProjectFileRepository,
        ai_request_repo: AiRequestRepository,
        session: AsyncSession,
    ):
        self.user_repo = user_repo
        self.project_repo = project_repo
        self.file_repo = file_repo
        self.ai_request_repo = ai_request_repo
        self.session = session

    async def get(self, user_id: UUID) -> User:
        user = await self.user_repo.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def list_users(self, page: int, limit: int) -> tuple[list[User], int]:
        return await self.user_repo.list_users(page, limit)

    async def update(self, user: User, data: UserUpdate) -> User:
        """Update user with provided data."""
        update_data = data.model_dump(exclude_unset=True)

        # Only bio may be cleared with null
        for field in ("name", "password"):
            if field in update_data and update_data[field] is None:
                del update_data[field]

        if "password" in update_data:
            update_data["hashed_password"] = hash_password(update_data.pop("password"))

        for field, value in update_data.items():
            setattr(user, field, value)

        user.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(user)
        return user

    async def delete(self, user: User) -> None:
        """Delete the account with its projects and files. AI history is kept, unowned."""
        project_ids = await self.project_repo.list_ids_by_user(user.id)
        try:
            await self.ai_request_repo.detach_user(user.id)
            await self.ai_request_repo.detach_projects(project_ids)
            await self.file_repo.delete_by_projects(project_ids)
            await self.project_repo.delete_by_user(user.id)
            await self.user_repo.delete(user)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("User deleted", user_id=str(user.id), projects=len(project_ids))

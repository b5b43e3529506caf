"""Repository for User entity."""

from sqlmodel import select

from src.autobuilder.models import User
from src.autobuilder.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    model = User

    async def get_by_email(self, email: str) -> User | None:
        """Get user by email address (stored lower-cased)."""
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """Check if a user with the given email exists."""
        user = await self.get_by_email(email)
        return user is not None

    async def list_users(self, page: int = 1, limit: int = 10) -> tuple[list[User], int]:
        """List users, newest first."""
        return await self.paginate(select(User), page, limit, User.created_at.desc(), User.id)

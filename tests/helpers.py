"""Test helper functions for common data creation patterns."""

from sqlalchemy.ext.asyncio import AsyncSession

from src.autobuilder.core.security import create_access_token
from src.autobuilder.models import Project, User
from tests.factories import ProjectFactory, UserFactory


def auth_headers(user: User) -> dict[str, str]:
    """Authorization header carrying a fresh access token for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id, user.email)}"}


async def create_user(session: AsyncSession, **user_kwargs) -> User:
    """Create and commit a user.

    Args:
        session: Database session
        **user_kwargs: Args passed to UserFactory

    Returns:
        Created user
    """
    user = UserFactory.build(**user_kwargs)
    session.add(user)
    await session.commit()
    return user


async def create_projects(
    session: AsyncSession,
    owner: User,
    count: int = 1,
    **project_kwargs,
) -> list[Project]:
    """Create ``count`` projects owned by ``owner``.

    Returns:
        Created projects in creation order
    """
    projects = [ProjectFactory.build(user_id=owner.id, **project_kwargs) for _ in range(count)]
    session.add_all(projects)
    await session.commit()
    return projects


def assert_error(response, status_code: int, code: str) -> dict:
    """Assert an error envelope and return its ``error`` object."""
    assert response.status_code == status_code, response.text
    body = response.json()
    assert body["success"] is False
    assert body["error"]["code"] == code
    assert body["error"]["message"]
    assert body["error"]["timestamp"]
    return body["error"]

"""Repositories for Project and ProjectFile entities."""

from uuid import UUID

from sqlalchemy import delete
from sqlmodel import select

from src.autobuilder.models import Project, ProjectFile
from src.autobuilder.repositories.base import BaseRepository


class ProjectRepository(BaseRepository[Project]):
    model = Project

    async def list_projects(
        self,
        user_id: UUID | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Project], int]:
        """List projects newest first, optionally restricted to one owner.

        Returns:
            Tuple of (items, total)
        """
        query = select(Project)
        if user_id is not None:
            query = query.where(Project.user_id == user_id)
        return await self.paginate(query, page, limit, Project.created_at.desc(), Project.id)

    async def list_ids_by_user(self, user_id: UUID) -> list[UUID]:
        result = await self.session.execute(select(Project.id).where(Project.user_id == user_id))
        return list(result.scalars().all())

    async def delete_by_user(self, user_id: UUID) -> None:
        """Bulk delete a user's projects (no commit). Files must be removed first."""
        await self.session.execute(delete(Project).where(Project.user_id == user_id))


class ProjectFileRepository(BaseRepository[ProjectFile]):
    model = ProjectFile

    async def list_by_project(self, project_id: UUID) -> list[ProjectFile]:
        """All files of a project ordered by path."""
        result = await self.session.execute(
            select(ProjectFile)
            .where(ProjectFile.project_id == project_id)
            .order_by(ProjectFile.path)
        )
        return list(result.scalars().all())

    async def get_by_path(self, project_id: UUID, path: str) -> ProjectFile | None:
        result = await self.session.execute(
            select(ProjectFile).where(
                ProjectFile.project_id == project_id,
                ProjectFile.path == path,
            )
        )
        return result.scalar_one_or_none()

    async def delete_by_projects(self, project_ids: list[UUID]) -> None:
        """Bulk delete the files of the given projects (no commit)."""
        if not project_ids:
            return
        await self.session.execute(
            delete(ProjectFile).where(ProjectFile.project_id.in_(project_ids))  # type: ignore[attr-defined]
        )

"""Project management with owner checks."""

from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.autobuilder.core.exceptions import ForbiddenError, NotFoundError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.models import Project, ProjectFile, User
from src.autobuilder.models.base import utc_now
from src.autobuilder.models.enums import ProjectStatus
from src.autobuilder.repositories import (
    AiRequestRepository,
    ProjectFileRepository,
    ProjectRepository,
    UserRepository,
)
from src.autobuilder.schemas.project import ProjectCreate, ProjectUpdate
from src.autobuilder.services.scaffolds import render_scaffold

logger = get_logger(__name__)


class ProjectService:
    def __init__(
        self,
        project_repo: ProjectRepository,
        file_repo: ProjectFileRepository,
        user_repo: UserRepository,
        ai_request_repo: AiRequestRepository,
        session: AsyncSession,
    ):
        self.project_repo = project_repo
        self.file_repo = file_repo
        self.user_repo = user_repo
        self.ai_request_repo = ai_request_repo
        self.session = session

    async def get(self, project_id: UUID) -> Project:
        project = await self.project_repo.get_by_id(project_id)
        if project is None:
            raise NotFoundError("Project not found")
        return project

    async def get_owned(self, project_id: UUID, user_id: UUID) -> Project:
        """Load a project the caller owns.

        Raises:
            NotFoundError: If the project does not exist.
            ForbiddenError: If it belongs to someone else.
        """
        project = await self.get(project_id)
        if project.user_id != user_id:
            logger.warning("Project access denied", project_id=str(project_id))
            raise ForbiddenError("Access denied")
        return project

    async def get_owner(self, project: Project) -> User | None:
        return await self.user_repo.get_by_id(project.user_id)

    async def list_projects(
        self, user_id: UUID | None, page: int, limit: int
    ) -> tuple[list[Project], int]:
        """Projects of ``user_id``, or all projects when it is None."""
        return await self.project_repo.list_projects(user_id=user_id, page=page, limit=limit)

    async def create(self, data: ProjectCreate, user_id: UUID) -> Project:
        project = Project(
            name=data.name,
            description=data.description,
            type=data.type.value,
            status=ProjectStatus.DRAFT.value,
            config=data.config,
            user_id=user_id,
        )
        self.project_repo.add(project)
        await self.session.commit()
        await self.session.refresh(project)
        logger.info("Project created", project_id=str(project.id), type=project.type)
        return project

    async def update(self, project_id: UUID, data: ProjectUpdate, user_id: UUID) -> Project:
        project = await self.get_owned(project_id, user_id)

        # Enum members dump as their values. Only description may be cleared with null.
        for field, value in data.model_dump(exclude_unset=True, mode="json").items():
            if value is None and field != "description":
                continue
            setattr(project, field, value)

        project.updated_at = utc_now()
        await self.session.commit()
        await self.session.refresh(project)
        logger.info("Project updated", project_id=str(project.id))
        return project

    async def delete(self, project_id: UUID, user_id: UUID) -> None:
        """Delete the project and its files."""
        project = await self.get_owned(project_id, user_id)
        try:
            await self.ai_request_repo.detach_projects([project.id])
            await self.file_repo.delete_by_projects([project.id])
            await self.project_repo.delete(project)
            await self.session.commit()
        except Exception:
            await self.session.rollback()
            raise
        logger.info("Project deleted", project_id=str(project_id))

    async def list_files(self, project_id: UUID, user_id: UUID) -> list[ProjectFile]:
        project = await self.get_owned(project_id, user_id)
        return await self.file_repo.list_by_project(project.id)

    async def generate_files(self, project_id: UUID, user_id: UUID) -> tuple[Project, list[ProjectFile]]:
        """Render the type's scaffold and store it, replacing files at the same paths."""
        project = await self.get_owned(project_id, user_id)
        now = utc_now()

        stored: list[ProjectFile] = []
        for scaffold in render_scaffold(project):
            file = await self.file_repo.get_by_path(project.id, scaffold.path)
            if file is None:
                file = ProjectFile(
                    project_id=project.id,
                    filename=scaffold.filename,
                    path=scaffold.path,
                    content=scaffold.content,
                    language=scaffold.language,
                )
                self.file_repo.add(file)
            else:
                file.content = scaffold.content
                file.language = scaffold.language
                file.generated_by_ai = False
                file.ai_prompt = None
                file.updated_at = now
            stored.append(file)

        await self.session.commit()
        for file in stored:
            await self.session.refresh(file)
        await self.session.refresh(project)

        logger.info("Project files generated", project_id=str(project.id), files=len(stored))
        return project, stored

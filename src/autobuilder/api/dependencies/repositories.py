"""Repository factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.autobuilder.api.dependencies.db import DBSession
from src.autobuilder.repositories import (
    AiRequestRepository,
    ProjectFileRepository,
    ProjectRepository,
    TemplateRepository,
    UserRepository,
)


def get_user_repository(session: DBSession) -> UserRepository:
    return UserRepository(session)


def get_project_repository(session: DBSession) -> ProjectRepository:
    return ProjectRepository(session)


def get_project_file_repository(session: DBSession) -> ProjectFileRepository:
    return ProjectFileRepository(session)


def get_template_repository(session: DBSession) -> TemplateRepository:
    return TemplateRepository(session)


def get_ai_request_repository(session: DBSession) -> AiRequestRepository:
    return AiRequestRepository(session)


UserRepo = Annotated[UserRepository, Depends(get_user_repository)]
ProjectRepo = Annotated[ProjectRepository, Depends(get_project_repository)]
ProjectFileRepo = Annotated[ProjectFileRepository, Depends(get_project_file_repository)]
TemplateRepo = Annotated[TemplateRepository, Depends(get_template_repository)]
AiRequestRepo = Annotated[AiRequestRepository, Depends(get_ai_request_repository)]

"""Service factory dependencies."""

from typing import Annotated

from fastapi import Depends

from src.autobuilder.api.dependencies.clients import ChatClient, MultiversXApi
from src.autobuilder.api.dependencies.db import DBSession
from src.autobuilder.api.dependencies.repositories import (
    AiRequestRepo,
    ProjectFileRepo,
    ProjectRepo,
    TemplateRepo,
    UserRepo,
)
from src.autobuilder.services.ai_service import AiHistoryService, AiService
from src.autobuilder.services.auth_service import AuthService
from src.autobuilder.services.blockchain_service import BlockchainService
from src.autobuilder.services.project_service import ProjectService
from src.autobuilder.services.template_service import TemplateService
from src.autobuilder.services.user_service import UserService


def get_auth_service(user_repo: UserRepo, session: DBSession) -> AuthService:
    return AuthService(user_repo, session)


def get_user_service(
    user_repo: UserRepo,
    project_repo: ProjectRepo,
    file_repo: ProjectFileRepo,
    ai_request_repo: AiRequestRepo,
    session: DBSession,
) -> UserService:
    return UserService(user_repo, project_repo, file_repo, ai_request_repo, session)


def get_project_service(
    project_repo: ProjectRepo,
    file_repo: ProjectFileRepo,
    user_repo: UserRepo,
    ai_request_repo: AiRequestRepo,
    session: DBSession,
) -> ProjectService:
    return ProjectService(project_repo, file_repo, user_repo, ai_request_repo, session)


def get_template_service(template_repo: TemplateRepo) -> TemplateService:
    return TemplateService(template_repo)


def get_ai_service(
    client: ChatClient,
    ai_request_repo: AiRequestRepo,
    project_repo: ProjectRepo,
    session: DBSession,
) -> AiService:
    """AI service. Fails with 503 before anything else when no API key is set."""
    return AiService(client, ai_request_repo, project_repo, session)


def get_ai_history_service(ai_request_repo: AiRequestRepo) -> AiHistoryService:
    return AiHistoryService(ai_request_repo)


def get_blockchain_service(client: MultiversXApi) -> BlockchainService:
    return BlockchainService(client)


AuthServiceDep = Annotated[AuthService, Depends(get_auth_service)]
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
ProjectServiceDep = Annotated[ProjectService, Depends(get_project_service)]
TemplateServiceDep = Annotated[TemplateService, Depends(get_template_service)]
AiServiceDep = Annotated[AiService, Depends(get_ai_service)]
AiHistoryServiceDep = Annotated[AiHistoryService, Depends(get_ai_history_service)]
BlockchainServiceDep = Annotated[BlockchainService, Depends(get_blockchain_service)]

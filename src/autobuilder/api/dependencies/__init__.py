"""FastAPI dependency injection definitions."""

from src.autobuilder.api.dependencies.auth import (
    AdminIdentity,
    OptionalIdentity,
    RequiredIdentity,
    get_admin_identity,
    get_optional_identity,
    get_required_identity,
    is_admin,
)
from src.autobuilder.api.dependencies.clients import (
    ChatClient,
    MultiversXApi,
    get_chat_client,
    get_multiversx_client,
)
from src.autobuilder.api.dependencies.db import DBSession, get_db_session
from src.autobuilder.api.dependencies.rate_limit import enforce_ai_rate_limit
from src.autobuilder.api.dependencies.repositories import (
    AiRequestRepo,
    ProjectFileRepo,
    ProjectRepo,
    TemplateRepo,
    UserRepo,
)
from src.autobuilder.api.dependencies.services import (
    AiHistoryServiceDep,
    AiServiceDep,
    AuthServiceDep,
    BlockchainServiceDep,
    ProjectServiceDep,
    TemplateServiceDep,
    UserServiceDep,
)

__all__ = [
    # Auth
    "AdminIdentity",
    "OptionalIdentity",
    "RequiredIdentity",
    "get_admin_identity",
    "get_optional_identity",
    "get_required_identity",
    "is_admin",
    # Clients
    "ChatClient",
    "MultiversXApi",
    "get_chat_client",
    "get_multiversx_client",
    # Database
    "DBSession",
    "get_db_session",
    # Rate limiting
    "enforce_ai_rate_limit",
    # Repositories
    "AiRequestRepo",
    "ProjectFileRepo",
    "ProjectRepo",
    "TemplateRepo",
    "UserRepo",
    # Services
    "AiHistoryServiceDep",
    "AiServiceDep",
    "AuthServiceDep",
    "BlockchainServiceDep",
    "ProjectServiceDep",
    "TemplateServiceDep",
    "UserServiceDep",
]

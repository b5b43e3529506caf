"""Repository layer - data access abstraction."""

from src.autobuilder.repositories.ai_request import AiRequestRepository
from src.autobuilder.repositories.base import BaseRepository
from src.autobuilder.repositories.project import ProjectFileRepository, ProjectRepository
from src.autobuilder.repositories.template import TemplateRepository
from src.autobuilder.repositories.user import UserRepository

__all__ = [
    "AiRequestRepository",
    "BaseRepository",
    "ProjectFileRepository",
    "ProjectRepository",
    "TemplateRepository",
    "UserRepository",
]

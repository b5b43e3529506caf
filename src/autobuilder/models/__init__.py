"""Model exports.

Import from here: `from src.autobuilder.models import User, Project`
"""

from src.autobuilder.models.ai_request import AiRequest
from src.autobuilder.models.enums import (
    AiRequestStatus,
    AiRequestType,
    ProjectStatus,
    ProjectType,
    TemplateCategory,
)
from src.autobuilder.models.project import Project, ProjectFile
from src.autobuilder.models.template import Template
from src.autobuilder.models.user import User

__all__ = [
    # Enums
    "AiRequestStatus",
    "AiRequestType",
    "ProjectStatus",
    "ProjectType",
    "TemplateCategory",
    # Tables
    "AiRequest",
    "Project",
    "ProjectFile",
    "Template",
    "User",
]

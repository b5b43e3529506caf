"""Project schemas for API request/response."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.autobuilder.models.enums import ProjectStatus, ProjectType
from src.autobuilder.schemas.pagination import Pagination
from src.autobuilder.schemas.user import UserPublic


def _strip_description(v: str | None) -> str | None:
    if v is not None:
        v = v.strip()
        if not v:
            return None
    return v


class ProjectCreate(BaseModel):
    """Schema for creating a project. Status always starts as DRAFT."""

    name: str = Field(min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=500)
    type: ProjectType
    config: dict[str, Any] = Field(default_factory=dict)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _strip_description(v)


class ProjectUpdate(BaseModel):
    """Schema for updating a project. Only fields that are sent are changed."""

    name: str | None = Field(default=None, min_length=1, max_length=200)
    description: str | None = Field(default=None, max_length=500)
    type: ProjectType | None = None
    status: ProjectStatus | None = None
    config: dict[str, Any] | None = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Project name cannot be empty or whitespace only")
        return v

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return _strip_description(v)


class ProjectRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    type: ProjectType
    status: ProjectStatus
    ai_generated: bool
    user_id: UUID
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectDetail(ProjectRead):
    """Single project. ``user`` is only filled in for the owner."""

    config: dict[str, Any]
    user: UserPublic | None = None


class ProjectData(BaseModel):
    project: ProjectDetail


class ProjectListData(BaseModel):
    projects: list[ProjectRead]
    pagination: Pagination


class ProjectFileRead(BaseModel):
    id: UUID
    filename: str
    path: str
    content: str
    language: str | None
    generated_by_ai: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ProjectFileListData(BaseModel):
    files: list[ProjectFileRead]


class GeneratedFilesData(BaseModel):
    files: list[ProjectFileRead]
    project: ProjectDetail

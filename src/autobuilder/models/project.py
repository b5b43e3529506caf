"""Project and generated file models."""

from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Text, UniqueConstraint
from sqlmodel import Field, SQLModel

from src.autobuilder.models.base import AwareDateTime, JSONType, utc_now
from src.autobuilder.models.enums import ProjectStatus, ProjectType


class Project(SQLModel, table=True):
    __tablename__ = "projects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=500)
    type: str = Field(default=ProjectType.WEB3_APP.value, max_length=50)  # ProjectType value
    status: str = Field(default=ProjectStatus.DRAFT.value, max_length=20)  # ProjectStatus value
    config: dict[str, Any] = Field(
        default_factory=dict,
        sa_column=Column(JSONType, nullable=False),
    )
    ai_generated: bool = Field(default=False)
    user_id: UUID = Field(foreign_key="users.id", index=True, ondelete="CASCADE")
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)


class ProjectFile(SQLModel, table=True):
    """A file belonging to a project, unique by path within the project."""

    __tablename__ = "project_files"
    __table_args__ = (UniqueConstraint("project_id", "path", name="uq_project_files_project_path"),)

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    project_id: UUID = Field(foreign_key="projects.id", index=True, ondelete="CASCADE")
    filename: str = Field(max_length=255)
    path: str = Field(max_length=500)
    content: str = Field(sa_column=Column(Text, nullable=False))
    language: str | None = Field(default=None, max_length=50)
    generated_by_ai: bool = Field(default=False)
    ai_prompt: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)

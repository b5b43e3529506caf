from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column
from sqlmodel import Field, SQLModel

from src.autobuilder.models.base import AwareDateTime, JSONType, utc_now
from src.autobuilder.models.enums import TemplateCategory


class Template(SQLModel, table=True):
    """Read-only project starter, populated by the seed command."""

    __tablename__ = "templates"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    name: str = Field(max_length=200, index=True)
    description: str | None = Field(default=None, max_length=1000)
    category: str = Field(default=TemplateCategory.OTHER.value, max_length=50, index=True)
    config: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType, nullable=False))
    files: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType, nullable=False))
    author: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list, sa_column=Column(JSONType, nullable=False))
    featured: bool = Field(default=False, index=True)
    downloads: int = Field(default=0)
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)

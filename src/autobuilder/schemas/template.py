from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel

from src.autobuilder.models.enums import TemplateCategory
from src.autobuilder.schemas.pagination import Pagination


class TemplateRead(BaseModel):
    id: UUID
    name: str
    description: str | None
    category: TemplateCategory
    config: dict[str, Any]
    files: dict[str, Any]
    author: str | None
    tags: list[str]
    featured: bool
    downloads: int
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class TemplateData(BaseModel):
    template: TemplateRead


class TemplateListData(BaseModel):
    templates: list[TemplateRead]
    pagination: Pagination

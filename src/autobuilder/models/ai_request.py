from datetime import datetime
from typing import Any
from uuid import UUID, uuid4

from sqlalchemy import Column, Text
from sqlmodel import Field, SQLModel

from src.autobuilder.models.base import AwareDateTime, JSONType, utc_now
from src.autobuilder.models.enums import AiRequestStatus


class AiRequest(SQLModel, table=True):
    """One call to the chat-completion API, kept as usage history."""

    __tablename__ = "ai_requests"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    type: str = Field(max_length=50)  # AiRequestType value
    prompt: str = Field(sa_column=Column(Text, nullable=False))
    response: str | None = Field(default=None, sa_column=Column(Text, nullable=True))
    status: str = Field(default=AiRequestStatus.PENDING.value, max_length=20)
    tokens_used: int | None = Field(default=None)
    model: str = Field(max_length=100)
    context: dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSONType, nullable=False))
    user_id: UUID | None = Field(
        default=None, foreign_key="users.id", index=True, ondelete="SET NULL"
    )
    project_id: UUID | None = Field(
        default=None, foreign_key="projects.id", index=True, ondelete="SET NULL"
    )
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime, index=True)

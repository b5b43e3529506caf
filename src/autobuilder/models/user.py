from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Field, SQLModel

from src.autobuilder.models.base import AwareDateTime, utc_now


class User(SQLModel, table=True):
    """Registered account. Owns projects and AI request history."""

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(max_length=255, unique=True, index=True)
    hashed_password: str = Field(max_length=255)
    name: str = Field(max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    is_active: bool = Field(default=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)
    updated_at: datetime = Field(default_factory=utc_now, sa_type=AwareDateTime)

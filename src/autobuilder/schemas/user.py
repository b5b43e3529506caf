from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, Field, field_validator

from src.autobuilder.schemas.pagination import Pagination


class UserRead(BaseModel):
    """User as shown to the user themselves. Never includes the password hash."""

    id: UUID
    email: str
    name: str
    bio: str | None = None
    is_active: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class UserPublic(BaseModel):
    """Owner summary embedded in project responses."""

    id: UUID
    name: str
    email: str

    model_config = {"from_attributes": True}


class UserUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    bio: str | None = Field(default=None, max_length=500)
    password: str | None = Field(default=None, min_length=6, max_length=100)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is not None:
            v = v.strip()
            if not v:
                raise ValueError("Name cannot be empty or whitespace only")
        return v


class UserData(BaseModel):
    user: UserRead


class UserListData(BaseModel):
    users: list[UserRead]
    pagination: Pagination

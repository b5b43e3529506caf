"""User endpoints."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.autobuilder.api.dependencies import (
    AdminIdentity,
    RequiredIdentity,
    UserServiceDep,
    is_admin,
)
from src.autobuilder.core.exceptions import ForbiddenError
from src.autobuilder.schemas.envelope import SuccessResponse
from src.autobuilder.schemas.pagination import Pagination
from src.autobuilder.schemas.user import UserData, UserListData, UserRead, UserUpdate

router = APIRouter(prefix="/users", tags=["users"])


@router.get(
    "",
    response_model=SuccessResponse[UserListData],
    responses={403: {"description": "Admin access required"}},
)
async def list_users(
    _admin: AdminIdentity,
    service: UserServiceDep,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> SuccessResponse[UserListData]:
    users, total = await service.list_users(page, limit)
    return SuccessResponse(
        data=UserListData(
            users=[UserRead.model_validate(u) for u in users],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get("/me", response_model=SuccessResponse[UserData])
async def get_me(identity: RequiredIdentity, service: UserServiceDep) -> SuccessResponse[UserData]:
    user = await service.get(identity.user_id)
    return SuccessResponse(data=UserData(user=UserRead.model_validate(user)))


@router.patch("/me", response_model=SuccessResponse[UserData])
async def update_me(
    data: UserUpdate, identity: RequiredIdentity, service: UserServiceDep
) -> SuccessResponse[UserData]:
    """Update name, bio or password of the current user."""
    user = await service.get(identity.user_id)
    user = await service.update(user, data)
    return SuccessResponse(
        data=UserData(user=UserRead.model_validate(user)),
        message="Profile updated successfully",
    )


@router.delete("/me", response_model=SuccessResponse[None])
async def delete_me(identity: RequiredIdentity, service: UserServiceDep) -> SuccessResponse[None]:
    """Delete the current account together with its projects."""
    user = await service.get(identity.user_id)
    await service.delete(user)
    return SuccessResponse(data=None, message="Account deleted successfully")


@router.get(
    "/{user_id}",
    response_model=SuccessResponse[UserData],
    responses={403: {"description": "Not yourself and not an admin"}, 404: {}},
)
async def get_user(
    user_id: UUID, identity: RequiredIdentity, service: UserServiceDep
) -> SuccessResponse[UserData]:
    if user_id != identity.user_id and not is_admin(identity):
        raise ForbiddenError("Access denied")
    user = await service.get(user_id)
    return SuccessResponse(data=UserData(user=UserRead.model_validate(user)))

"""Project endpoints - CRUD with owner checks and scaffold generation."""

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query, status

from src.autobuilder.api.context import Identity
from src.autobuilder.api.dependencies import (
    OptionalIdentity,
    ProjectServiceDep,
    RequiredIdentity,
)
from src.autobuilder.models import Project, User
from src.autobuilder.schemas.envelope import SuccessResponse
from src.autobuilder.schemas.pagination import Pagination
from src.autobuilder.schemas.project import (
    GeneratedFilesData,
    ProjectCreate,
    ProjectData,
    ProjectDetail,
    ProjectFileListData,
    ProjectFileRead,
    ProjectListData,
    ProjectRead,
    ProjectUpdate,
)
from src.autobuilder.schemas.user import UserPublic

router = APIRouter(prefix="/projects", tags=["projects"])

OWNER_ONLY = {
    401: {"description": "Missing or invalid token"},
    403: {"description": "Caller does not own the project"},
    404: {"description": "Project not found"},
}


def _detail(project: Project, owner: User | None, identity: Identity | None) -> ProjectDetail:
    """Project detail. The owner is only embedded for the owner."""
    detail = ProjectDetail.model_validate(project)
    if owner is not None and identity is not None and identity.owns(project.user_id):
        detail.user = UserPublic.model_validate(owner)
    return detail


@router.get(
    "",
    response_model=SuccessResponse[ProjectListData],
    summary="List projects",
    description=(
        "Newest first. Authenticated callers only see their own projects, "
        "anonymous callers see all projects."
    ),
)
async def list_projects(
    identity: OptionalIdentity,
    service: ProjectServiceDep,
    page: Annotated[int, Query(ge=1, description="1-based page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
) -> SuccessResponse[ProjectListData]:
    user_id = identity.user_id if identity else None
    projects, total = await service.list_projects(user_id, page, limit)
    return SuccessResponse(
        data=ProjectListData(
            projects=[ProjectRead.model_validate(p) for p in projects],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get(
    "/{project_id}",
    response_model=SuccessResponse[ProjectData],
    responses={404: {"description": "Project not found"}},
)
async def get_project(
    project_id: UUID, identity: OptionalIdentity, service: ProjectServiceDep
) -> SuccessResponse[ProjectData]:
    project = await service.get(project_id)
    owner = await service.get_owner(project) if identity else None
    return SuccessResponse(data=ProjectData(project=_detail(project, owner, identity)))


@router.post(
    "",
    response_model=SuccessResponse[ProjectData],
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "Validation failed"},
        401: {"description": "Missing or invalid token"},
    },
)
async def create_project(
    data: ProjectCreate, identity: RequiredIdentity, service: ProjectServiceDep
) -> SuccessResponse[ProjectData]:
    """Create a project owned by the caller. Status starts as DRAFT."""
    project = await service.create(data, identity.user_id)
    owner = await service.get_owner(project)
    return SuccessResponse(
        data=ProjectData(project=_detail(project, owner, identity)),
        message="Project created successfully",
    )


@router.put("/{project_id}", response_model=SuccessResponse[ProjectData], responses=OWNER_ONLY)
async def update_project(
    project_id: UUID,
    data: ProjectUpdate,
    identity: RequiredIdentity,
    service: ProjectServiceDep,
) -> SuccessResponse[ProjectData]:
    project = await service.update(project_id, data, identity.user_id)
    owner = await service.get_owner(project)
    return SuccessResponse(
        data=ProjectData(project=_detail(project, owner, identity)),
        message="Project updated successfully",
    )


@router.delete("/{project_id}", response_model=SuccessResponse[None], responses=OWNER_ONLY)
async def delete_project(
    project_id: UUID, identity: RequiredIdentity, service: ProjectServiceDep
) -> SuccessResponse[None]:
    await service.delete(project_id, identity.user_id)
    return SuccessResponse(data=None, message="Project deleted successfully")


@router.post(
    "/{project_id}/generate",
    response_model=SuccessResponse[GeneratedFilesData],
    responses=OWNER_ONLY,
)
async def generate_project_files(
    project_id: UUID, identity: RequiredIdentity, service: ProjectServiceDep
) -> SuccessResponse[GeneratedFilesData]:
    """Render the starter files for the project's type and store them."""
    project, files = await service.generate_files(project_id, identity.user_id)
    owner = await service.get_owner(project)
    return SuccessResponse(
        data=GeneratedFilesData(
            files=[ProjectFileRead.model_validate(f) for f in files],
            project=_detail(project, owner, identity),
        ),
        message="Project template generated successfully",
    )


@router.get(
    "/{project_id}/files",
    response_model=SuccessResponse[ProjectFileListData],
    responses=OWNER_ONLY,
)
async def list_project_files(
    project_id: UUID, identity: RequiredIdentity, service: ProjectServiceDep
) -> SuccessResponse[ProjectFileListData]:
    files = await service.list_files(project_id, identity.user_id)
    return SuccessResponse(
        data=ProjectFileListData(files=[ProjectFileRead.model_validate(f) for f in files])
    )

from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Query

from src.autobuilder.api.dependencies import TemplateServiceDep
from src.autobuilder.models.enums import TemplateCategory
from src.autobuilder.schemas.envelope import SuccessResponse
from src.autobuilder.schemas.pagination import Pagination
from src.autobuilder.schemas.template import TemplateData, TemplateListData, TemplateRead

router = APIRouter(prefix="/templates", tags=["templates"])


@router.get("", response_model=SuccessResponse[TemplateListData])
async def list_templates(
    service: TemplateServiceDep,
    category: TemplateCategory | None = None,
    featured: bool | None = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=100)] = 10,
) -> SuccessResponse[TemplateListData]:
    """List templates, featured first."""
    templates, total = await service.list_templates(
        category.value if category else None, featured, page, limit
    )
    return SuccessResponse(
        data=TemplateListData(
            templates=[TemplateRead.model_validate(t) for t in templates],
            pagination=Pagination.build(page, limit, total),
        )
    )


@router.get(
    "/{template_id}",
    response_model=SuccessResponse[TemplateData],
    responses={404: {"description": "Template not found"}},
)
async def get_template(
    template_id: UUID, service: TemplateServiceDep
) -> SuccessResponse[TemplateData]:
    template = await service.get(template_id)
    return SuccessResponse(data=TemplateData(template=TemplateRead.model_validate(template)))

from uuid import UUID

from src.autobuilder.core.exceptions import NotFoundError
from src.autobuilder.models import Template
from src.autobuilder.repositories import TemplateRepository


class TemplateService:
    """Read-only access to project templates."""

    def __init__(self, template_repo: TemplateRepository):
        self.template_repo = template_repo

    async def list_templates(
        self,
        category: str | None,
        featured: bool | None,
        page: int,
        limit: int,
    ) -> tuple[list[Template], int]:
        return await self.template_repo.list_templates(category, featured, page, limit)

    async def get(self, template_id: UUID) -> Template:
        template = await self.template_repo.get_by_id(template_id)
        if template is None:
            raise NotFoundError("Template not found")
        return template

"""Repository for Template entity."""

from sqlmodel import select

from src.autobuilder.models import Template
from src.autobuilder.repositories.base import BaseRepository


class TemplateRepository(BaseRepository[Template]):
    model = Template

    async def list_templates(
        self,
        category: str | None = None,
        featured: bool | None = None,
        page: int = 1,
        limit: int = 10,
    ) -> tuple[list[Template], int]:
        """List templates, featured and most downloaded first."""
        query = select(Template)
        if category is not None:
            query = query.where(Template.category == category)
        if featured is not None:
            query = query.where(Template.featured == featured)
        return await self.paginate(
            query,
            page,
            limit,
            Template.featured.desc(),  # type: ignore[attr-defined]
            Template.downloads.desc(),  # type: ignore[attr-defined]
            Template.name,
        )

    async def get_by_name(self, name: str) -> Template | None:
        result = await self.session.execute(select(Template).where(Template.name == name))
        return result.scalar_one_or_none()

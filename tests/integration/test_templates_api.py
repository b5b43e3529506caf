"""Tests for read-only template endpoints."""

from uuid import uuid4

import pytest
from httpx import AsyncClient

from tests.factories import TemplateFactory
from tests.helpers import assert_error

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


@pytest.fixture
async def templates(db_session):
    items = [
        TemplateFactory.build(name="Plain", category="FRONTEND", downloads=5),
        TemplateFactory.build(name="Popular", category="FRONTEND", downloads=50),
        TemplateFactory.build(name="Featured", category="SMART_CONTRACT", featured=True),
    ]
    db_session.add_all(items)
    await db_session.commit()
    return items


async def test_list_featured_first(client: AsyncClient, templates) -> None:
    response = await client.get("/api/templates")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [t["name"] for t in data["templates"]] == ["Featured", "Popular", "Plain"]
    assert data["pagination"]["total"] == 3


async def test_filter_by_category(client: AsyncClient, templates) -> None:
    response = await client.get("/api/templates", params={"category": "FRONTEND"})
    assert {t["name"] for t in response.json()["data"]["templates"]} == {"Plain", "Popular"}


async def test_filter_by_featured(client: AsyncClient, templates) -> None:
    response = await client.get("/api/templates", params={"featured": "true"})
    assert [t["name"] for t in response.json()["data"]["templates"]] == ["Featured"]


async def test_unknown_category_rejected(client: AsyncClient) -> None:
    response = await client.get("/api/templates", params={"category": "SPACESHIP"})
    assert_error(response, 400, "VALIDATION_ERROR")


async def test_get_template(client: AsyncClient, templates) -> None:
    template = templates[0]
    response = await client.get(f"/api/templates/{template.id}")

    assert response.status_code == 200
    assert response.json()["data"]["template"]["name"] == "Plain"


async def test_template_not_found(client: AsyncClient) -> None:
    response = await client.get(f"/api/templates/{uuid4()}")
    error = assert_error(response, 404, "NOT_FOUND")
    assert error["message"] == "Template not found"

"""Tests for the demo data seed."""

import pytest
from httpx import AsyncClient
from sqlalchemy import func
from sqlmodel import select

from src.autobuilder.models import Project, ProjectFile, Template
from src.autobuilder.seed import DEMO_EMAIL, DEMO_PASSWORD, SAMPLE_PROJECTS, SAMPLE_TEMPLATES, seed

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


async def _count(session, model) -> int:
    return (await session.execute(select(func.count()).select_from(model))).scalar_one()


async def test_seed_is_idempotent(db_session) -> None:
    assert await seed(db_session) is True
    assert await seed(db_session) is False

    assert await _count(db_session, Project) == len(SAMPLE_PROJECTS)
    assert await _count(db_session, Template) == len(SAMPLE_TEMPLATES)
    assert await _count(db_session, ProjectFile) == 2


async def test_demo_user_can_log_in(client: AsyncClient, db_session) -> None:
    await seed(db_session)

    response = await client.post(
        "/api/auth/login", json={"email": DEMO_EMAIL, "password": DEMO_PASSWORD}
    )
    token = response.json()["data"]["token"]
    projects = await client.get("/api/projects", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert projects.json()["data"]["pagination"]["total"] == len(SAMPLE_PROJECTS)

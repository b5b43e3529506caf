"""Project, file, template and AI request factories."""

from polyfactory import Use

from src.autobuilder.models import AiRequest, Project, ProjectFile, Template
from src.autobuilder.models.enums import (
    AiRequestStatus,
    AiRequestType,
    ProjectStatus,
    ProjectType,
    TemplateCategory,
)
from tests.factories.base import BaseFactory, generate_uuid, utc_now


class ProjectFactory(BaseFactory):
    """Factory for generating Project test data. ``user_id`` must be set."""

    __model__ = Project

    id = Use(generate_uuid)
    name = Use(lambda: f"Project {generate_uuid().hex[-6:]}")
    description = "A test project"
    type = ProjectType.WEB3_APP.value
    status = ProjectStatus.DRAFT.value
    config = Use(dict)
    ai_generated = False
    user_id = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class ProjectFileFactory(BaseFactory):
    __model__ = ProjectFile

    id = Use(generate_uuid)
    project_id = None
    filename = "README.md"
    path = "README.md"
    content = "# Test\n"
    language = "markdown"
    generated_by_ai = False
    ai_prompt = None
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class TemplateFactory(BaseFactory):
    __model__ = Template

    id = Use(generate_uuid)
    name = Use(lambda: f"Template {generate_uuid().hex[-6:]}")
    description = "A test template"
    category = TemplateCategory.FRONTEND.value
    config = Use(dict)
    files = Use(dict)
    author = "Test"
    tags = Use(list)
    featured = False
    downloads = 0
    created_at = Use(utc_now)
    updated_at = Use(utc_now)


class AiRequestFactory(BaseFactory):
    __model__ = AiRequest

    id = Use(generate_uuid)
    type = AiRequestType.CHAT.value
    prompt = "Hello"
    response = "Hi"
    status = AiRequestStatus.COMPLETED.value
    tokens_used = 10
    model = "gpt-4"
    context = Use(dict)
    user_id = None
    project_id = None
    created_at = Use(utc_now)

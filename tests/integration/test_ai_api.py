"""Tests for AI pass-through endpoints (completion API mocked with respx)."""

from uuid import uuid4

import httpx
import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.autobuilder.core.db import get_session
from src.autobuilder.models import AiRequest, User
from tests.helpers import assert_error, auth_headers, create_projects

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]


def completion(content: str, tokens: int = 120) -> httpx.Response:
    return httpx.Response(
        200,
        json={
            "model": "gpt-4",
            "choices": [{"message": {"role": "assistant", "content": content}}],
            "usage": {"total_tokens": tokens},
        },
    )


async def _ai_requests() -> list[AiRequest]:
    async with get_session() as session:
        result = await session.execute(select(AiRequest))
        return list(result.scalars().all())


class TestGenerateCode:
    async def test_generate(self, client: AsyncClient, ai_api, test_user: User) -> None:
        route = ai_api.post("/chat/completions").mock(return_value=completion("<Button />"))

        response = await client.post(
            "/api/ai/generate-code",
            json={"prompt": "A button", "type": "component"},
            headers=auth_headers(test_user),
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["code"] == "<Button />"
        assert data["type"] == "component"
        assert data["framework"] == "react"
        assert data["metadata"]["model"] == "gpt-4"
        assert data["metadata"]["tokens"] == 120
        assert route.call_count == 1

        (record,) = await _ai_requests()
        assert record.type == "CODE_GENERATION"
        assert record.status == "COMPLETED"
        assert record.response == "<Button />"
        assert record.tokens_used == 120
        assert record.user_id == test_user.id

    async def test_anonymous_allowed(self, client: AsyncClient, ai_api) -> None:
        ai_api.post("/chat/completions").mock(return_value=completion("code"))

        response = await client.post(
            "/api/ai/generate-code", json={"prompt": "A test", "type": "test"}
        )

        assert response.status_code == 200
        (record,) = await _ai_requests()
        assert record.user_id is None

    async def test_project_of_someone_else_forbidden(
        self, client: AsyncClient, ai_api, db_session, test_user, other_user
    ) -> None:
        (project,) = await create_projects(db_session, other_user)
        route = ai_api.post("/chat/completions").mock(return_value=completion("x"))

        response = await client.post(
            "/api/ai/generate-code",
            json={"prompt": "x", "type": "api", "project_id": str(project.id)},
            headers=auth_headers(test_user),
        )

        assert_error(response, 403, "FORBIDDEN")
        assert not route.called

    async def test_unknown_project(self, client: AsyncClient, ai_api, test_user) -> None:
        response = await client.post(
            "/api/ai/generate-code",
            json={"prompt": "x", "type": "api", "project_id": str(uuid4())},
            headers=auth_headers(test_user),
        )
        assert_error(response, 404, "NOT_FOUND")

    @pytest.mark.parametrize(
        "payload",
        [
            {"type": "component"},
            {"prompt": "   ", "type": "component"},
            {"prompt": "x", "type": "poem"},
        ],
    )
    async def test_validation(self, client: AsyncClient, ai_api, payload) -> None:
        response = await client.post("/api/ai/generate-code", json=payload)
        assert_error(response, 400, "VALIDATION_ERROR")

    async def test_upstream_failure(self, client: AsyncClient, ai_api) -> None:
        ai_api.post("/chat/completions").mock(return_value=httpx.Response(500))

        response = await client.post(
            "/api/ai/generate-code", json={"prompt": "x", "type": "component"}
        )

        error = assert_error(response, 500, "AI_REQUEST_FAILED")
        assert error["message"] == "Failed to generate code"
        (record,) = await _ai_requests()
        assert record.status == "FAILED"

    async def test_malformed_usage_recorded_as_failure(
        self, client: AsyncClient, ai_api
    ) -> None:
        ai_api.post("/chat/completions").mock(
            return_value=httpx.Response(
                200,
                json={
                    "model": "gpt-4",
                    "choices": [{"message": {"role": "assistant", "content": "<Button />"}}],
                    "usage": "unknown",
                },
            )
        )

        response = await client.post(
            "/api/ai/generate-code", json={"prompt": "x", "type": "component"}
        )

        assert_error(response, 500, "AI_REQUEST_FAILED")
        (record,) = await _ai_requests()
        assert record.status == "FAILED"


class TestOtherAiRoutes:
    async def test_review(self, client: AsyncClient, ai_api) -> None:
        route = ai_api.post("/chat/completions").mock(return_value=completion("Rating: 8/10"))

        response = await client.post(
            "/api/ai/review-code",
            json={"code": "let x = 1", "language": "typescript", "context": "util"},
        )

        assert response.status_code == 200
        assert response.json()["data"]["review"] == "Rating: 8/10"
        sent = route.calls.last.request.content.decode()
        assert "```typescript" in sent
        assert '"temperature":0.3' in sent.replace(" ", "")

    async def test_optimize_default_goals(self, client: AsyncClient, ai_api) -> None:
        ai_api.post("/chat/completions").mock(return_value=completion("faster"))

        response = await client.post(
            "/api/ai/optimize-code", json={"code": "fn a() {}", "language": "rust"}
        )

        data = response.json()["data"]
        assert data["optimization"] == "faster"
        assert data["goals"] == ["performance", "readability"]

    async def test_chat(self, client: AsyncClient, ai_api) -> None:
        ai_api.post("/chat/completions").mock(return_value=completion("Hello!"))

        response = await client.post("/api/ai/chat", json={"message": "Hi"})

        data = response.json()["data"]
        assert data["response"] == "Hello!"
        assert data["context"] == "general"

    @pytest.mark.parametrize(
        "path,message",
        [
            ("/api/ai/review-code", "Failed to review code"),
            ("/api/ai/optimize-code", "Failed to optimize code"),
        ],
    )
    async def test_failure_messages(self, client: AsyncClient, ai_api, path, message) -> None:
        ai_api.post("/chat/completions").mock(side_effect=httpx.ConnectError("down"))

        response = await client.post(path, json={"code": "x", "language": "javascript"})

        assert assert_error(response, 500, "AI_REQUEST_FAILED")["message"] == message

    async def test_chat_failure_message(self, client: AsyncClient, ai_api) -> None:
        ai_api.post("/chat/completions").mock(return_value=httpx.Response(503))
        response = await client.post("/api/ai/chat", json={"message": "Hi"})
        assert assert_error(response, 500, "AI_REQUEST_FAILED")["message"] == (
            "Failed to get AI response"
        )


class TestNotConfigured:
    @pytest.mark.parametrize(
        "path",
        ["/api/ai/generate-code", "/api/ai/review-code", "/api/ai/optimize-code", "/api/ai/chat"],
    )
    async def test_503_without_api_key(self, client: AsyncClient, override_settings, path) -> None:
        override_settings(OPENAI_API_KEY="")

        # Checked before the body is validated
        response = await client.post(path, json={})

        error = assert_error(response, 503, "SERVICE_UNAVAILABLE")
        assert error["message"] == "AI service not configured"


class TestHistory:
    async def test_history(self, client: AsyncClient, ai_api, test_user, other_user) -> None:
        ai_api.post("/chat/completions").mock(return_value=completion("Hello!"))
        await client.post("/api/ai/chat", json={"message": "one"}, headers=auth_headers(test_user))
        await client.post("/api/ai/chat", json={"message": "two"}, headers=auth_headers(test_user))
        await client.post("/api/ai/chat", json={"message": "x"}, headers=auth_headers(other_user))

        response = await client.get("/api/ai/history", headers=auth_headers(test_user))

        data = response.json()["data"]
        assert data["pagination"]["total"] == 2
        assert {r["prompt"] for r in data["requests"]} == {"one", "two"}
        assert all(r["type"] == "CHAT" for r in data["requests"])

    async def test_history_requires_auth(self, client: AsyncClient) -> None:
        assert_error(await client.get("/api/ai/history"), 401, "AUTH_REQUIRED")

    async def test_history_without_api_key(
        self, client: AsyncClient, override_settings, test_user
    ) -> None:
        override_settings(OPENAI_API_KEY="")
        response = await client.get("/api/ai/history", headers=auth_headers(test_user))
        assert response.status_code == 200

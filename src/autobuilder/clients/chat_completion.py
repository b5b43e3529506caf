"""Client for OpenAI-compatible chat completion APIs."""

from dataclasses import dataclass
from typing import Any

import httpx

from src.autobuilder.core.logging import get_logger

logger = get_logger(__name__)


class ChatCompletionError(Exception):
    """The completion API failed or answered with something unusable."""


@dataclass(frozen=True)
class ChatCompletionResult:
    """Result of one chat completion."""

    content: str
    model: str
    total_tokens: int | None


class ChatCompletionClient:
    """Sends a system + user message pair to ``{base_url}/chat/completions``."""

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-4",
        timeout: float = 60.0,
    ) -> None:
        if not api_key:
            raise ValueError("api_key is required")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.model = model
        self.timeout = timeout

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        *,
        max_tokens: int,
        temperature: float,
    ) -> ChatCompletionResult:
        """Run one completion.

        Raises:
            ChatCompletionError: On transport errors, non-2xx answers or an
                unexpected response body.
        """
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_message},
            ],
            "max_tokens": max_tokens,
            "temperature": temperature,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.base_url}/chat/completions",
                    json=payload,
                    headers=headers,
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.warning(
                "Chat completion request rejected",
                status_code=exc.response.status_code,
                model=self.model,
            )
            raise ChatCompletionError(f"HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            logger.warning("Chat completion request failed", error=str(exc), model=self.model)
            raise ChatCompletionError(type(exc).__name__) from exc

        try:
            data = response.json()
            content = data["choices"][0]["message"]["content"]
            if not isinstance(content, str):
                raise TypeError("content is not a string")
            usage = data.get("usage") or {}
            total_tokens = usage.get("total_tokens")
            if total_tokens is not None:
                total_tokens = int(total_tokens)
            model = data.get("model") or self.model
        except (KeyError, IndexError, TypeError, ValueError, AttributeError) as exc:
            logger.error("Chat completion response parse failed", model=self.model)
            raise ChatCompletionError("Invalid completion response format") from exc

        return ChatCompletionResult(
            content=content,
            model=model,
            total_tokens=total_tokens,
        )

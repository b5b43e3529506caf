"""Third-party API client dependencies."""

from typing import Annotated

from fastapi import Depends

from src.autobuilder.clients import ChatCompletionClient, MultiversXClient
from src.autobuilder.core.config import get_settings
from src.autobuilder.core.exceptions import ServiceUnavailableError


def get_chat_client() -> ChatCompletionClient:
    """Chat completion client.

    Raises:
        ServiceUnavailableError: If OPENAI_API_KEY is not configured (503).
    """
    settings = get_settings()
    if not settings.openai_api_key:
        raise ServiceUnavailableError("AI service not configured")
    return ChatCompletionClient(
        api_key=settings.openai_api_key,
        base_url=settings.openai_base_url,
        model=settings.openai_model,
        timeout=settings.ai_request_timeout_seconds,
    )


def get_multiversx_client() -> MultiversXClient:
    settings = get_settings()
    return MultiversXClient(
        api_url=settings.multiversx_api_url,
        network=settings.multiversx_network,
        timeout=settings.blockchain_request_timeout_seconds,
    )


ChatClient = Annotated[ChatCompletionClient, Depends(get_chat_client)]
MultiversXApi = Annotated[MultiversXClient, Depends(get_multiversx_client)]

"""HTTP clients for third-party APIs."""

from src.autobuilder.clients.chat_completion import (
    ChatCompletionClient,
    ChatCompletionError,
    ChatCompletionResult,
)
from src.autobuilder.clients.multiversx import (
    MultiversXClient,
    MultiversXError,
    MultiversXNotFoundError,
)

__all__ = [
    "ChatCompletionClient",
    "ChatCompletionError",
    "ChatCompletionResult",
    "MultiversXClient",
    "MultiversXError",
    "MultiversXNotFoundError",
]

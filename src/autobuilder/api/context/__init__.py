"""Request context passed explicitly to handlers."""

from src.autobuilder.api.context.identity import Identity

__all__ = ["Identity"]

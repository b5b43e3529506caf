"""Caller identity decoded from a verified access token."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class Identity:
    """Immutable identity handed to route handlers through dependencies.

    Attributes:
        user_id: The ``sub`` claim.
        email: The ``email`` claim, as it was when the token was issued.
    """

    user_id: UUID
    email: str

    def owns(self, owner_id: UUID | None) -> bool:
        return owner_id is not None and owner_id == self.user_id

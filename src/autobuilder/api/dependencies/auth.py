"""Authentication and authorization dependencies.

Tokens are verified statelessly: signature, expiry and claims only.
"""

from typing import Annotated, Any
from uuid import UUID

from fastapi import Depends, Header

from src.autobuilder.api.context import Identity
from src.autobuilder.core.config import get_settings
from src.autobuilder.core.exceptions import (
    AuthenticationError,
    ForbiddenError,
    InvalidTokenError,
)
from src.autobuilder.core.logging import bind_user_context
from src.autobuilder.core.security import ACCESS_TOKEN_TYPE, decode_token


def _bearer_token(authorization: str | None) -> str | None:
    """Token part of a ``Bearer <token>`` header, or None if absent or malformed."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token:
        return None
    return token


def _identity_from_payload(payload: dict[str, Any] | None) -> Identity | None:
    if payload is None or payload.get("type") != ACCESS_TOKEN_TYPE:
        return None

    email = payload.get("email")
    if not isinstance(email, str) or not email:
        return None

    try:
        user_id = UUID(str(payload.get("sub")))
    except ValueError:
        return None

    return Identity(user_id=user_id, email=email)


def resolve_identity(authorization: str | None) -> Identity | None:
    """Identity for an Authorization header value, or None if it does not verify."""
    token = _bearer_token(authorization)
    if token is None:
        return None
    return _identity_from_payload(decode_token(token))


async def get_optional_identity(
    authorization: Annotated[str | None, Header()] = None,
) -> Identity | None:
    """Identity if a valid token was sent. Invalid tokens are treated as anonymous."""
    identity = resolve_identity(authorization)
    if identity is not None:
        bind_user_context(identity.user_id)
    return identity


async def get_required_identity(
    authorization: Annotated[str | None, Header()] = None,
) -> Identity:
    """Identity of the caller.

    Raises:
        AuthenticationError: No bearer token was sent (401 AUTH_REQUIRED).
        InvalidTokenError: The token is expired, forged or malformed (401 INVALID_TOKEN).
    """
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationError()

    identity = _identity_from_payload(decode_token(token))
    if identity is None:
        raise InvalidTokenError()

    bind_user_context(identity.user_id)
    return identity


OptionalIdentity = Annotated[Identity | None, Depends(get_optional_identity)]
RequiredIdentity = Annotated[Identity, Depends(get_required_identity)]


def is_admin(identity: Identity) -> bool:
    return identity.email.lower() in get_settings().admin_emails


async def get_admin_identity(identity: RequiredIdentity) -> Identity:
    """Require an identity whose email is listed in ADMIN_EMAILS."""
    if not is_admin(identity):
        raise ForbiddenError("Admin access required")
    return identity


AdminIdentity = Annotated[Identity, Depends(get_admin_identity)]

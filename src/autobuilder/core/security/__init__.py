"""Security utilities - crypto, validators and response headers.

Re-exports all security-related functions for convenience.
"""

from src.autobuilder.core.security.crypto import (
    ACCESS_TOKEN_TYPE,
    DUMMY_PASSWORD_HASH,
    create_access_token,
    decode_token,
    hash_password,
    verify_password,
)
from src.autobuilder.core.security.headers import SecurityHeadersMiddleware
from src.autobuilder.core.security.validators import (
    is_valid_address,
    validate_address,
    validate_token_identifier,
    validate_transaction_hash,
)

__all__ = [
    # Crypto
    "ACCESS_TOKEN_TYPE",
    "DUMMY_PASSWORD_HASH",
    "create_access_token",
    "decode_token",
    "hash_password",
    "verify_password",
    # Headers
    "SecurityHeadersMiddleware",
    # Validators
    "is_valid_address",
    "validate_address",
    "validate_token_identifier",
    "validate_transaction_hash",
]

"""Validators for blockchain identifiers."""

import re
from typing import Final

# bech32 data alphabet (no 1, b, i, o)
BECH32_CHARSET: Final[str] = "023456789acdefghjklmnpqrstuvwxyz"
ADDRESS_HRP: Final[str] = "erd"
ADDRESS_LENGTH: Final[int] = 62

ADDRESS_REGEX: Final[str] = rf"^{ADDRESS_HRP}1[{BECH32_CHARSET}]{{58}}$"
TX_HASH_REGEX: Final[str] = r"^[0-9a-fA-F]{64}$"
TOKEN_IDENTIFIER_REGEX: Final[str] = r"^[A-Z0-9]{3,10}-[0-9a-f]{6}$"

_ADDRESS_PATTERN: Final[re.Pattern[str]] = re.compile(ADDRESS_REGEX)
_TX_HASH_PATTERN: Final[re.Pattern[str]] = re.compile(TX_HASH_REGEX)
_TOKEN_IDENTIFIER_PATTERN: Final[re.Pattern[str]] = re.compile(TOKEN_IDENTIFIER_REGEX)


def is_valid_address(address: str) -> bool:
    """Check a MultiversX bech32 address (``erd1`` + 58 data characters)."""
    return bool(_ADDRESS_PATTERN.fullmatch(address))


def validate_address(address: str) -> str:
    """Validate a MultiversX address.

    Raises:
        ValueError: If the address is not a well-formed ``erd1`` bech32 string.
    """
    if not is_valid_address(address):
        raise ValueError("Invalid address")
    return address


def validate_transaction_hash(tx_hash: str) -> str:
    """Validate a transaction hash (64 hex characters), returned lowercased."""
    if not _TX_HASH_PATTERN.fullmatch(tx_hash):
        raise ValueError("Invalid transaction hash")
    return tx_hash.lower()


def validate_token_identifier(identifier: str) -> str:
    """Validate an ESDT token identifier such as ``WEGLD-bd4d79``."""
    if not _TOKEN_IDENTIFIER_PATTERN.fullmatch(identifier):
        raise ValueError("Invalid token identifier")
    return identifier

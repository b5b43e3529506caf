"""MultiversX lookups with input validation and error mapping."""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from src.autobuilder.clients import MultiversXClient, MultiversXError, MultiversXNotFoundError
from src.autobuilder.core.exceptions import ExternalServiceError, NotFoundError, ValidationError
from src.autobuilder.core.logging import get_logger
from src.autobuilder.core.security import (
    validate_address,
    validate_token_identifier,
    validate_transaction_hash,
)
from src.autobuilder.schemas.blockchain import (
    AccountInfo,
    NetworkInfo,
    SignedTransaction,
    TokenInfo,
    TransactionInfo,
)

logger = get_logger(__name__)

T = TypeVar("T")

BLOCKCHAIN_REQUEST_FAILED = "BLOCKCHAIN_REQUEST_FAILED"


def _validated(validator: Callable[[str], str], value: str, message: str) -> str:
    try:
        return validator(value)
    except ValueError as e:
        raise ValidationError(message) from e


class BlockchainService:
    def __init__(self, client: MultiversXClient):
        self.client = client

    async def _call(self, call: Awaitable[T], *, not_found: str, failure: str) -> T:
        try:
            return await call
        except MultiversXNotFoundError as e:
            raise NotFoundError(not_found) from e
        except MultiversXError as e:
            logger.error("Blockchain request failed", error=str(e), status_code=e.status_code)
            raise ExternalServiceError(failure, code=BLOCKCHAIN_REQUEST_FAILED) from e

    async def network_info(self) -> NetworkInfo:
        return await self._call(
            self.client.get_network_info(),
            not_found="Network information not found",
            failure="Failed to fetch network information",
        )

    async def account(self, address: str) -> AccountInfo:
        address = _validated(validate_address, address, "Invalid address")
        return await self._call(
            self.client.get_account(address),
            not_found="Account not found",
            failure="Failed to fetch account",
        )

    async def transaction(self, tx_hash: str) -> TransactionInfo:
        tx_hash = _validated(validate_transaction_hash, tx_hash, "Invalid transaction hash")
        return await self._call(
            self.client.get_transaction(tx_hash),
            not_found="Transaction not found",
            failure="Failed to fetch transaction",
        )

    async def token(self, identifier: str) -> TokenInfo:
        identifier = _validated(validate_token_identifier, identifier, "Invalid token identifier")
        return await self._call(
            self.client.get_token(identifier),
            not_found="Token not found",
            failure="Failed to fetch token information",
        )

    async def send_transaction(self, transaction: SignedTransaction) -> str:
        _validated(validate_address, transaction.sender, "Invalid sender address")
        _validated(validate_address, transaction.receiver, "Invalid receiver address")
        tx_hash = await self._call(
            self.client.send_transaction(transaction.to_gateway()),
            not_found="Transaction endpoint not found",
            failure="Failed to send transaction",
        )
        logger.info("Transaction broadcast", tx_hash=tx_hash)
        return tx_hash

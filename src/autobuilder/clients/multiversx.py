"""Read-mostly client for the MultiversX public API."""

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

import httpx
from pydantic import ValidationError

from src.autobuilder.core.logging import get_logger
from src.autobuilder.schemas.blockchain import (
    AccountInfo,
    NetworkInfo,
    TokenInfo,
    TransactionInfo,
)

logger = get_logger(__name__)

# Shard id the API uses for the metachain
METACHAIN_SHARD_ID = 4294967295


class MultiversXError(Exception):
    """The API call failed. ``status_code`` is set when the API answered."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class MultiversXNotFoundError(MultiversXError):
    """The API answered 404 for the requested resource."""


@contextmanager
def _reshaping(path: str) -> Iterator[None]:
    """Turn an answer of unexpected shape into a MultiversXError."""
    try:
        yield
    except (KeyError, TypeError, ValueError, AttributeError, ValidationError) as exc:
        logger.warning("Unexpected MultiversX response", path=path, error=str(exc))
        raise MultiversXError(f"Unexpected response from {path}") from exc


class MultiversXClient:
    def __init__(
        self,
        api_url: str = "https://devnet-api.multiversx.com",
        network: str = "devnet",
        timeout: float = 10.0,
    ) -> None:
        self.api_url = api_url.rstrip("/")
        self.network = network
        self.timeout = timeout

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            async with httpx.AsyncClient(base_url=self.api_url, timeout=self.timeout) as client:
                response = await client.request(method, path, **kwargs)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            if status_code == 404:
                raise MultiversXNotFoundError(f"{path} not found", status_code) from exc
            logger.warning("MultiversX API error", path=path, status_code=status_code)
            raise MultiversXError(f"HTTP {status_code}", status_code) from exc
        except httpx.HTTPError as exc:
            logger.warning("MultiversX API request failed", path=path, error=str(exc))
            raise MultiversXError(type(exc).__name__) from exc
        except ValueError as exc:
            raise MultiversXError("Invalid JSON response") from exc

    async def _gateway_data(self, path: str, field: str) -> dict[str, Any]:
        """Unwrap ``{"data": {field: {...}}, "code": "successful"}`` gateway answers."""
        body = await self._request("GET", path)
        with _reshaping(path):
            return dict(body["data"][field])

    async def get_network_info(self) -> NetworkInfo:
        config = await self._gateway_data("/network/config", "config")
        status = await self._gateway_data(f"/network/status/{METACHAIN_SHARD_ID}", "status")
        with _reshaping("/network"):
            return NetworkInfo(
                network=self.network,
                chain_id=config["erd_chain_id"],
                gas_per_data_byte=config["erd_gas_per_data_byte"],
                min_gas_limit=config["erd_min_gas_limit"],
                min_gas_price=config["erd_min_gas_price"],
                current_round=status["erd_current_round"],
                current_epoch=status["erd_epoch_number"],
                highest_final_nonce=status["erd_highest_final_nonce"],
                shards_count=config["erd_num_shards_without_meta"],
            )

    async def get_account(self, address: str) -> AccountInfo:
        path = f"/accounts/{address}"
        body = await self._request("GET", path)
        with _reshaping(path):
            return AccountInfo(
                address=body.get("address", address),
                balance=str(body.get("balance", "0")),
                nonce=int(body.get("nonce", 0)),
                username=body.get("username"),
                code_hash=body.get("codeHash"),
                root_hash=body.get("rootHash"),
            )

    async def get_transaction(self, tx_hash: str) -> TransactionInfo:
        path = f"/transactions/{tx_hash}"
        body = await self._request("GET", path)
        with _reshaping(path):
            return TransactionInfo(
                hash=body.get("txHash", tx_hash),
                sender=body["sender"],
                receiver=body["receiver"],
                value=str(body.get("value", "0")),
                gas_limit=body.get("gasLimit", 0),
                gas_price=body.get("gasPrice", 0),
                status=body.get("status", "unknown"),
                timestamp=body.get("timestamp"),
                block_hash=body.get("blockHash"),
                mini_block_hash=body.get("miniBlockHash"),
            )

    async def get_token(self, identifier: str) -> TokenInfo:
        path = f"/tokens/{identifier}"
        body = await self._request("GET", path)
        with _reshaping(path):
            return TokenInfo(
                identifier=body.get("identifier", identifier),
                name=body["name"],
                ticker=body.get("ticker", identifier.split("-")[0]),
                decimals=body.get("decimals", 0),
                owner=body.get("owner"),
                supply=str(body["supply"]) if body.get("supply") is not None else None,
                is_paused=bool(body.get("isPaused", False)),
            )

    async def send_transaction(self, payload: dict[str, Any]) -> str:
        """Broadcast a signed transaction and return its hash."""
        body = await self._request("POST", "/transactions", json=payload)
        tx_hash = body.get("txHash") if isinstance(body, dict) else None
        if not tx_hash or not isinstance(tx_hash, str):
            raise MultiversXError("Missing txHash in response")
        return tx_hash

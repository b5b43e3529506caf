"""Tests for MultiversX pass-through endpoints (API mocked with respx)."""

import json

import httpx
import pytest
from httpx import AsyncClient

from src.autobuilder.clients.multiversx import METACHAIN_SHARD_ID
from tests.helpers import assert_error

pytestmark = [pytest.mark.integration, pytest.mark.asyncio]

ADDRESS = "erd1qyu5wthldzr8wx5c9ucg8kjagg0jfs53s8nr3zpz3hypefsdd8ssycr6th"
TX_HASH = "a" * 64
SIGNED_TX = {
    "nonce": 1,
    "value": "0",
    "receiver": ADDRESS,
    "sender": ADDRESS,
    "gasPrice": 1_000_000_000,
    "gasLimit": 50_000,
    "chainID": "D",
    "version": 1,
    "signature": "f" * 128,
}


async def test_network_info(client: AsyncClient, mvx_api) -> None:
    mvx_api.get("/network/config").mock(
        return_value=httpx.Response(
            200,
            json={
                "data": {
                    "config": {
                        "erd_chain_id": "D",
                        "erd_gas_per_data_byte": 1500,
                        "erd_min_gas_limit": 50000,
                        "erd_min_gas_price": 1000000000,
                        "erd_num_shards_without_meta": 3,
                    }
                }
            },
        )
    )
    mvx_api.get(f"/network/status/{METACHAIN_SHARD_ID}").mock(
        return_value=httpx.Response(
            200,
            json={
                "data": {
                    "status": {
                        "erd_current_round": 10,
                        "erd_epoch_number": 2,
                        "erd_highest_final_nonce": 9,
                    }
                }
            },
        )
    )

    response = await client.get("/api/blockchain/info")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["network"] == "devnet"
    assert data["chain_id"] == "D"
    assert data["current_round"] == 10


async def test_network_info_upstream_down(client: AsyncClient, mvx_api) -> None:
    mvx_api.get("/network/config").mock(side_effect=httpx.ConnectError("down"))

    response = await client.get("/api/blockchain/info")

    error = assert_error(response, 500, "BLOCKCHAIN_REQUEST_FAILED")
    assert error["message"] == "Failed to fetch network information"


async def test_account(client: AsyncClient, mvx_api) -> None:
    mvx_api.get(f"/accounts/{ADDRESS}").mock(
        return_value=httpx.Response(200, json={"address": ADDRESS, "balance": "42", "nonce": 7})
    )

    response = await client.get(f"/api/blockchain/account/{ADDRESS}")

    data = response.json()["data"]
    assert data["balance"] == "42"
    assert data["nonce"] == 7


async def test_account_malformed_upstream_body(client: AsyncClient, mvx_api) -> None:
    mvx_api.get(f"/accounts/{ADDRESS}").mock(
        return_value=httpx.Response(200, json={"address": ADDRESS, "balance": "1", "nonce": None})
    )

    response = await client.get(f"/api/blockchain/account/{ADDRESS}")

    error = assert_error(response, 500, "BLOCKCHAIN_REQUEST_FAILED")
    assert error["message"] == "Failed to fetch account"


async def test_account_invalid_address(client: AsyncClient, mvx_api) -> None:
    response = await client.get("/api/blockchain/account/erd1short")

    error = assert_error(response, 400, "VALIDATION_ERROR")
    assert error["message"] == "Invalid address"


async def test_transaction_hash_is_lowercased(client: AsyncClient, mvx_api) -> None:
    route = mvx_api.get(f"/transactions/{TX_HASH}").mock(
        return_value=httpx.Response(
            200,
            json={
                "txHash": TX_HASH,
                "sender": ADDRESS,
                "receiver": ADDRESS,
                "value": "1",
                "gasLimit": 50000,
                "gasPrice": 1000000000,
                "status": "success",
                "timestamp": 1700000000,
            },
        )
    )

    response = await client.get(f"/api/blockchain/transaction/{TX_HASH.upper()}")

    assert response.status_code == 200
    assert response.json()["data"]["status"] == "success"
    assert route.called


async def test_transaction_not_found(client: AsyncClient, mvx_api) -> None:
    mvx_api.get(f"/transactions/{TX_HASH}").mock(return_value=httpx.Response(404))

    response = await client.get(f"/api/blockchain/transaction/{TX_HASH}")

    error = assert_error(response, 404, "NOT_FOUND")
    assert error["message"] == "Transaction not found"


async def test_token(client: AsyncClient, mvx_api) -> None:
    mvx_api.get("/tokens/WEGLD-bd4d79").mock(
        return_value=httpx.Response(
            200, json={"identifier": "WEGLD-bd4d79", "name": "WrappedEGLD", "decimals": 18}
        )
    )

    response = await client.get("/api/blockchain/token/WEGLD-bd4d79")

    data = response.json()["data"]
    assert data["ticker"] == "WEGLD"
    assert data["decimals"] == 18


async def test_token_invalid_identifier(client: AsyncClient, mvx_api) -> None:
    response = await client.get("/api/blockchain/token/not-a-token")
    assert_error(response, 400, "VALIDATION_ERROR")


async def test_send_transaction(client: AsyncClient, mvx_api) -> None:
    route = mvx_api.post("/transactions").mock(
        return_value=httpx.Response(200, json={"txHash": TX_HASH})
    )

    response = await client.post("/api/blockchain/transaction", json=SIGNED_TX)

    assert response.status_code == 200
    assert response.json()["data"] == {"tx_hash": TX_HASH}
    assert response.json()["message"] == "Transaction sent"
    sent = json.loads(route.calls.last.request.content)
    assert sent["chainID"] == "D"
    assert sent["gasLimit"] == 50_000


async def test_send_transaction_invalid_sender(client: AsyncClient, mvx_api) -> None:
    response = await client.post(
        "/api/blockchain/transaction", json={**SIGNED_TX, "sender": "erd1nope"}
    )
    error = assert_error(response, 400, "VALIDATION_ERROR")
    assert error["message"] == "Invalid sender address"


async def test_send_transaction_rejected_upstream(client: AsyncClient, mvx_api) -> None:
    mvx_api.post("/transactions").mock(return_value=httpx.Response(400))

    response = await client.post("/api/blockchain/transaction", json=SIGNED_TX)

    assert_error(response, 500, "BLOCKCHAIN_REQUEST_FAILED")

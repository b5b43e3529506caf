"""Blockchain endpoints - MultiversX lookups and transaction broadcast."""

from fastapi import APIRouter

from src.autobuilder.api.dependencies import BlockchainServiceDep
from src.autobuilder.schemas.blockchain import (
    AccountInfo,
    NetworkInfo,
    SentTransaction,
    SignedTransaction,
    TokenInfo,
    TransactionInfo,
)
from src.autobuilder.schemas.envelope import SuccessResponse

router = APIRouter(prefix="/blockchain", tags=["blockchain"])

UPSTREAM_RESPONSES = {
    404: {"description": "Not found on the network"},
    500: {"description": "MultiversX API call failed"},
}
LOOKUP_RESPONSES = {400: {"description": "Malformed identifier"}, **UPSTREAM_RESPONSES}


@router.get("/info", response_model=SuccessResponse[NetworkInfo], responses=UPSTREAM_RESPONSES)
async def network_info(service: BlockchainServiceDep) -> SuccessResponse[NetworkInfo]:
    return SuccessResponse(data=await service.network_info())


@router.get(
    "/account/{address}", response_model=SuccessResponse[AccountInfo], responses=LOOKUP_RESPONSES
)
async def account(address: str, service: BlockchainServiceDep) -> SuccessResponse[AccountInfo]:
    return SuccessResponse(data=await service.account(address))


@router.get(
    "/transaction/{tx_hash}",
    response_model=SuccessResponse[TransactionInfo],
    responses=LOOKUP_RESPONSES,
)
async def transaction(
    tx_hash: str, service: BlockchainServiceDep
) -> SuccessResponse[TransactionInfo]:
    return SuccessResponse(data=await service.transaction(tx_hash))


@router.get(
    "/token/{identifier}", response_model=SuccessResponse[TokenInfo], responses=LOOKUP_RESPONSES
)
async def token(identifier: str, service: BlockchainServiceDep) -> SuccessResponse[TokenInfo]:
    return SuccessResponse(data=await service.token(identifier))


@router.post(
    "/transaction",
    response_model=SuccessResponse[SentTransaction],
    responses=LOOKUP_RESPONSES,
)
async def send_transaction(
    data: SignedTransaction, service: BlockchainServiceDep
) -> SuccessResponse[SentTransaction]:
    """Broadcast a transaction that was signed client-side."""
    tx_hash = await service.send_transaction(data)
    return SuccessResponse(data=SentTransaction(tx_hash=tx_hash), message="Transaction sent")

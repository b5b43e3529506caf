"""MultiversX pass-through response schemas."""

from typing import Any

from pydantic import BaseModel, Field


class NetworkInfo(BaseModel):
    network: str
    chain_id: str
    gas_per_data_byte: int
    min_gas_limit: int
    min_gas_price: int
    current_round: int
    current_epoch: int
    highest_final_nonce: int
    shards_count: int


class AccountInfo(BaseModel):
    address: str
    balance: str
    nonce: int
    username: str | None = None
    code_hash: str | None = None
    root_hash: str | None = None


class TransactionInfo(BaseModel):
    hash: str
    sender: str
    receiver: str
    value: str
    gas_limit: int
    gas_price: int
    status: str
    timestamp: int | None = None
    block_hash: str | None = None
    mini_block_hash: str | None = None


class TokenInfo(BaseModel):
    identifier: str
    name: str
    ticker: str
    decimals: int
    owner: str | None = None
    supply: str | None = None
    is_paused: bool = False


class SignedTransaction(BaseModel):
    """An already signed transaction, forwarded to the network as is."""

    nonce: int = Field(ge=0)
    value: str = Field(pattern=r"^\d+$")
    receiver: str
    sender: str
    gas_price: int = Field(ge=0, alias="gasPrice")
    gas_limit: int = Field(ge=0, alias="gasLimit")
    data: str | None = None
    chain_id: str = Field(alias="chainID", min_length=1)
    version: int = Field(ge=1)
    signature: str = Field(pattern=r"^[0-9a-fA-F]{128}$")
    options: int | None = None

    model_config = {"populate_by_name": True}

    def to_gateway(self) -> dict[str, Any]:
        """Payload in the field names the MultiversX API expects."""
        return self.model_dump(by_alias=True, exclude_none=True)


class SentTransaction(BaseModel):
    tx_hash: str

import re
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

TEZOS_ADDRESS_RE = re.compile(r"^(tz[1-4]|KT1)[1-9A-HJ-NP-Za-km-z]{33}$")
OPERATION_HASH_RE = re.compile(r"^o[1-9A-HJ-NP-Za-km-z]{50}$")
AMOUNT_RE = re.compile(r"^\d+(\.\d+)?$")


def _check_address(value: str, field_name: str) -> str:
    if not TEZOS_ADDRESS_RE.match(value):
        raise ValueError(f"Invalid Tezos {field_name}: {value}")
    return value


class NetworkSelector(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain: str = Field(default="tezos", description="Chain name")
    network: str = Field(description="Network name, e.g. mainnet or ghostnet")


class NonceRequest(NetworkSelector):
    address: str = Field(description="Account address")

    @field_validator("address")
    @classmethod
    def validate_address(cls, v: str) -> str:
        return _check_address(v, "address")


class BalanceRequest(NonceRequest):
    token_symbols: List[str] = Field(alias="tokenSymbols", min_length=1, description="Token symbols to fetch")

    @field_validator("token_symbols")
    @classmethod
    def validate_symbols(cls, v: List[str]) -> List[str]:
        if any(not s.strip() for s in v):
            raise ValueError("Token symbols must be non-empty strings")
        return v


class AllowancesRequest(BalanceRequest):
    spender: str = Field(description="Spender address")

    @field_validator("spender")
    @classmethod
    def validate_spender(cls, v: str) -> str:
        return _check_address(v, "spender")


class PollRequest(NetworkSelector):
    tx_hash: str = Field(alias="txHash", description="Operation hash")

    @field_validator("tx_hash")
    @classmethod
    def validate_tx_hash(cls, v: str) -> str:
        if not OPERATION_HASH_RE.match(v):
            raise ValueError(f"Invalid operation hash: {v}")
        return v


class ApproveRequest(NonceRequest):
    spender: str = Field(description="Spender address")
    token: str = Field(min_length=1, description="Token symbol")
    amount: Optional[str] = Field(default=None, description="Human-readable amount; omit for unlimited")

    @field_validator("spender")
    @classmethod
    def validate_spender(cls, v: str) -> str:
        return _check_address(v, "spender")

    @field_validator("amount")
    @classmethod
    def validate_amount(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not AMOUNT_RE.match(v.strip()):
            raise ValueError(f"Invalid amount: {v}")
        return v

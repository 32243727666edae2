from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class GatewayResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)


class CustomTransaction(GatewayResponse):
    """Chain-agnostic transaction-effect record.

    ``value`` is the raw chain amount (mutez or token base units), not a
    decimal-scaled string like the amounts in the other responses.
    """

    hash: str
    to: str
    from_: str = Field(alias="from")
    nonce: int
    gas_limit: str = Field(alias="gasLimit")
    max_fee_per_gas: Optional[str] = Field(default=None, alias="maxFeePerGas")
    max_priority_fee_per_gas: Optional[str] = Field(default=None, alias="maxPriorityFeePerGas")
    value: str
    chain_id: str = Field(alias="chainId")
    data: Optional[str] = None


class NonceResponse(GatewayResponse):
    nonce: int


class BalanceResponse(GatewayResponse):
    network: str
    timestamp: int
    latency: float
    balances: Dict[str, str]


class AllowancesResponse(GatewayResponse):
    network: str
    timestamp: int
    latency: float
    spender: str
    approvals: Dict[str, str]


class PollResponse(GatewayResponse):
    network: str
    current_block: int = Field(alias="currentBlock")
    timestamp: int
    tx_hash: str = Field(alias="txHash")
    tx_status: int = Field(alias="txStatus")
    tx_data: Optional[Any] = Field(default=None, alias="txData")


class ApproveResponse(GatewayResponse):
    network: str
    timestamp: int
    latency: float
    token_address: str = Field(alias="tokenAddress")
    spender: str
    amount: str
    nonce: int
    approval: CustomTransaction


class ErrorResponse(GatewayResponse):
    status_code: int = Field(alias="statusCode")
    error_code: int = Field(alias="errorCode")
    message: str

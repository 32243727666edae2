from .requests import AllowancesRequest, ApproveRequest, BalanceRequest, NonceRequest, PollRequest
from .responses import (
    AllowancesResponse,
    ApproveResponse,
    BalanceResponse,
    CustomTransaction,
    ErrorResponse,
    NonceResponse,
    PollResponse,
)

__all__ = [
    "AllowancesRequest",
    "ApproveRequest",
    "BalanceRequest",
    "NonceRequest",
    "PollRequest",
    "AllowancesResponse",
    "ApproveResponse",
    "BalanceResponse",
    "CustomTransaction",
    "ErrorResponse",
    "NonceResponse",
    "PollResponse",
]

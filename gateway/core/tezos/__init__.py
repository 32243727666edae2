"""Tezos chain adapter: token registry, chain handle and wallet operations."""

from .chain import NetworkConfig, TezosChain
from .models import TokenInfo, TokenStandard, TokenValue, TxStatus
from .registry import TokenRegistry, get_token_symbols_to_tokens

__all__ = [
    "NetworkConfig",
    "TezosChain",
    "TokenInfo",
    "TokenStandard",
    "TokenValue",
    "TxStatus",
    "TokenRegistry",
    "get_token_symbols_to_tokens",
]

"""
Token registry for one Tezos network.

Token lists are JSON arrays of entries shaped like::

    {"chainId": "NetXdQprcVkpaWU", "address": "KT1...", "symbol": "USDT",
     "name": "Tether USD", "decimals": 6, "standard": "fa2", "tokenId": 0}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Protocol

from .models import TokenInfo, TokenStandard

logger = logging.getLogger(__name__)


class SupportsTokenLookup(Protocol):
    def get_token_for_symbol(self, symbol: str) -> Optional[TokenInfo]: ...


def _parse_entry(entry: Dict[str, Any]) -> Optional[TokenInfo]:
    standard = TokenStandard.parse(entry.get("standard"))
    if standard is None:
        logger.warning(
            "Skipping token %s with unsupported standard %r",
            entry.get("symbol"),
            entry.get("standard"),
        )
        return None

    token_id = entry.get("tokenId")
    return TokenInfo(
        symbol=str(entry["symbol"]),
        address=str(entry["address"]),
        decimals=int(entry["decimals"]),
        standard=standard,
        token_id=int(token_id) if token_id is not None else None,
        name=str(entry.get("name") or ""),
        chain_id=entry.get("chainId"),
    )


class TokenRegistry:
    """Symbol-keyed token lookup. Immutable once loaded."""

    def __init__(self, tokens: Iterable[TokenInfo] = ()):
        self._by_symbol: Dict[str, TokenInfo] = {}
        for token in tokens:
            if token.symbol in self._by_symbol:
                logger.warning("Duplicate token symbol %s in token list, keeping first", token.symbol)
                continue
            self._by_symbol[token.symbol] = token

    @classmethod
    def from_entries(cls, entries: List[Dict[str, Any]], chain_id: Optional[str] = None) -> "TokenRegistry":
        tokens = []
        for entry in entries:
            if chain_id and entry.get("chainId") not in (None, chain_id):
                continue
            token = _parse_entry(entry)
            if token is not None:
                tokens.append(token)
        return cls(tokens)

    @classmethod
    def load(cls, path: Path, chain_id: Optional[str] = None) -> "TokenRegistry":
        with open(path, encoding="utf-8") as fh:
            entries = json.load(fh)
        if not isinstance(entries, list):
            raise ValueError(f"Token list {path} must be a JSON array")
        registry = cls.from_entries(entries, chain_id=chain_id)
        logger.info("Loaded %d tokens from %s", len(registry), path)
        return registry

    def lookup(self, symbol: str) -> Optional[TokenInfo]:
        return self._by_symbol.get(symbol)

    @property
    def tokens(self) -> List[TokenInfo]:
        return list(self._by_symbol.values())

    def __len__(self) -> int:
        return len(self._by_symbol)


def get_token_symbols_to_tokens(
    chain: SupportsTokenLookup, token_symbols: Iterable[str]
) -> Dict[str, TokenInfo]:
    """Resolve requested symbols, silently dropping the unknown ones."""

    tokens: Dict[str, TokenInfo] = {}
    for symbol in token_symbols:
        token = chain.get_token_for_symbol(symbol)
        if token is not None:
            tokens[symbol] = token
    return tokens

"""
Tezos chain handle.

Reads come from a node RPC (balances, counters, head, mempool, chain id) and
a TzKT indexer (token balances, allowance big maps, finalized operations).
Signing goes through the configured ``WalletLoader``.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional

import httpx

from .amounts import MAX_UINT256
from .models import (
    MempoolOperation,
    PendingOperations,
    TokenInfo,
    TokenStandard,
    TokenValue,
)
from .registry import TokenRegistry
from .wallet import TezosWallet, WalletLoader

logger = logging.getLogger(__name__)

CHAIN_NAME = "tezos"


@dataclass(frozen=True)
class NetworkConfig:
    name: str
    node_url: str
    tzkt_url: str
    chain_id: Optional[str] = None
    native_token_symbol: str = "XTZ"
    native_token_decimals: int = 6
    token_list_path: Optional[Path] = None
    timeout_s: float = 30.0


class TezosChainError(Exception):
    """Unexpected payload from the node or the indexer."""


def _partition(raw: Any) -> tuple[MempoolOperation, ...]:
    """Normalize one mempool partition.

    Newer nodes return ``[{"hash": ..., "contents": [...]}, ...]``; older
    ones return ``[[hash, {"contents": [...]}], ...]`` for error partitions.
    """

    operations: List[MempoolOperation] = []
    for item in raw or []:
        if isinstance(item, dict):
            op_hash = item.get("hash")
            contents = item.get("contents")
        elif isinstance(item, (list, tuple)) and len(item) == 2:
            op_hash = item[0]
            contents = (item[1] or {}).get("contents") if isinstance(item[1], dict) else None
        else:
            continue
        if op_hash:
            operations.append(MempoolOperation(hash=str(op_hash), contents=contents))
    return tuple(operations)


class TezosChain:
    """Explicitly owned handle for one Tezos network."""

    chain = CHAIN_NAME

    def __init__(
        self,
        config: NetworkConfig,
        client: Optional[httpx.AsyncClient] = None,
        wallet_loader: Optional[WalletLoader] = None,
        registry: Optional[TokenRegistry] = None,
    ) -> None:
        self.config = config
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=config.timeout_s)
        self.wallet_loader = wallet_loader or WalletLoader()
        self._registry = registry or TokenRegistry()
        self._ready = registry is not None

    @property
    def network(self) -> str:
        return self.config.name

    @property
    def chain_name(self) -> str:
        return self.config.name

    @property
    def native_token_symbol(self) -> str:
        return self.config.native_token_symbol

    @property
    def ready(self) -> bool:
        return self._ready

    @property
    def stored_token_list(self) -> List[TokenInfo]:
        return self._registry.tokens

    async def init(self) -> None:
        if self._ready:
            return
        if self.config.token_list_path is not None:
            self._registry = await asyncio.to_thread(
                TokenRegistry.load, self.config.token_list_path, chain_id=self.config.chain_id
            )
        self._ready = True
        logger.info("Tezos %s ready with %d tokens", self.network, len(self._registry))

    async def close(self) -> None:
        if self._owns_client and not self._client.is_closed:
            await self._client.aclose()

    def get_token_for_symbol(self, symbol: str) -> Optional[TokenInfo]:
        return self._registry.lookup(symbol)

    # ------------------------------------------------------------------ #
    # Node RPC
    # ------------------------------------------------------------------ #

    async def _node_get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.config.node_url.rstrip('/')}/{path.lstrip('/')}"
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    async def get_native_balance(self, address: str) -> TokenValue:
        raw = await self._node_get(f"chains/main/blocks/head/context/contracts/{address}/balance")
        return TokenValue(value=int(raw), decimals=self.config.native_token_decimals)

    async def get_nonce(self, address: str) -> int:
        raw = await self._node_get(f"chains/main/blocks/head/context/contracts/{address}/counter")
        return int(raw)

    async def get_current_block_number(self) -> int:
        header = await self._node_get("chains/main/blocks/head/header")
        try:
            return int(header["level"])
        except (KeyError, TypeError, ValueError) as exc:
            raise TezosChainError(f"Unexpected block header: {header!r}") from exc

    async def get_pending_transactions(self) -> PendingOperations:
        raw = await self._node_get("chains/main/mempool/pending_operations")
        if not isinstance(raw, dict):
            raise TezosChainError("Unexpected mempool payload")
        return PendingOperations(
            applied=_partition(raw.get("applied", raw.get("validated"))),
            branch_delayed=_partition(raw.get("branch_delayed")),
            branch_refused=_partition(raw.get("branch_refused")),
            refused=_partition(raw.get("refused")),
            unprocessed=_partition(raw.get("unprocessed")),
        )

    async def get_chain_id(self) -> str:
        return str(await self._node_get("chains/main/chain_id"))

    # ------------------------------------------------------------------ #
    # Indexer
    # ------------------------------------------------------------------ #

    async def _tzkt_get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.config.tzkt_url.rstrip('/')}/{path.lstrip('/')}"
        response = await self._client.get(url, params=params)
        response.raise_for_status()
        return response.json()

    async def get_token_balance(
        self, contract_address: str, owner: str, token_id: int, decimals: int
    ) -> TokenValue:
        rows = await self._tzkt_get(
            "v1/tokens/balances",
            params={
                "account": owner,
                "token.contract": contract_address,
                "token.tokenId": str(token_id),
            },
        )
        value = 0
        if rows:
            value = int(rows[0].get("balance") or 0)
        return TokenValue(value=value, decimals=decimals)

    async def get_token_allowance(
        self,
        contract_address: str,
        owner: str,
        spender: str,
        standard: str,
        token_id: Optional[int],
        decimals: int,
    ) -> TokenValue:
        if TokenStandard.parse(standard) is TokenStandard.FA2:
            params = {
                "key.owner": owner,
                "key.operator": spender,
                "active": "true",
            }
            if token_id is not None:
                params["key.token_id"] = str(token_id)
            keys = await self._tzkt_get(f"v1/contracts/{contract_address}/bigmaps/operators/keys", params=params)
            return TokenValue(value=MAX_UINT256 if keys else 0, decimals=decimals)

        keys = await self._tzkt_get(
            f"v1/contracts/{contract_address}/bigmaps/allowances/keys",
            params={"key.owner": owner, "key.spender": spender, "active": "true"},
        )
        value = 0
        if keys:
            value = int(keys[0].get("value") or 0)
        return TokenValue(value=value, decimals=decimals)

    async def get_transaction(self, tx_hash: str) -> Optional[List[Dict[str, Any]]]:
        """Finalized operation group by hash, or ``None`` when unknown."""

        rows = await self._tzkt_get(f"v1/operations/{tx_hash}")
        return rows or None

    # ------------------------------------------------------------------ #
    # Signing
    # ------------------------------------------------------------------ #

    async def get_wallet(self, address: str) -> TezosWallet:
        return await self.wallet_loader.load(address)

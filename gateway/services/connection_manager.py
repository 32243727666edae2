"""
Chain handle ownership.

One ``ConnectionManager`` is created per process in the FastAPI lifespan. It
builds a ``TezosChain`` for every configured network, initializes it on
first use and closes every handle on shutdown.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Dict, Iterable, Optional

from ..config import Settings, settings as default_settings
from ..core.errors import UnknownChainError
from ..core.tezos.chain import CHAIN_NAME, NetworkConfig, TezosChain
from ..core.tezos.wallet import WalletLoader

logger = logging.getLogger(__name__)


def network_configs(config: Settings) -> Iterable[NetworkConfig]:
    for name in config.tezos_networks:
        node_url = config.tezos_node_urls.get(name)
        tzkt_url = config.tezos_tzkt_urls.get(name)
        if not node_url or not tzkt_url:
            logger.warning("Tezos network %s has no node or TzKT URL configured, skipping", name)
            continue
        path = config.token_list_path(name)
        yield NetworkConfig(
            name=name,
            node_url=node_url,
            tzkt_url=tzkt_url,
            chain_id=config.tezos_chain_ids.get(name),
            native_token_symbol=config.tezos_native_symbol,
            native_token_decimals=config.tezos_native_decimals,
            token_list_path=path if path.exists() else None,
            timeout_s=float(config.request_timeout_seconds),
        )


class ConnectionManager:
    """Owns the chain handles served by this process."""

    def __init__(
        self,
        chains: Optional[Dict[str, TezosChain]] = None,
        wallet_loader: Optional[WalletLoader] = None,
    ) -> None:
        self.wallet_loader = wallet_loader or WalletLoader()
        self._chains: Dict[str, TezosChain] = dict(chains or {})
        self._lock = asyncio.Lock()

    @classmethod
    def from_settings(
        cls, config: Optional[Settings] = None, wallet_loader: Optional[WalletLoader] = None
    ) -> "ConnectionManager":
        config = config or default_settings
        manager = cls(wallet_loader=wallet_loader)
        for network in network_configs(config):
            manager._chains[network.name] = TezosChain(network, wallet_loader=manager.wallet_loader)
        return manager

    @property
    def networks(self) -> list[str]:
        return sorted(self._chains)

    async def get_chain(self, chain: str, network: str) -> TezosChain:
        if chain.lower() != CHAIN_NAME:
            raise UnknownChainError(chain, network)
        handle = self._chains.get(network)
        if handle is None:
            raise UnknownChainError(chain, network)
        if not handle.ready:
            async with self._lock:
                await handle.init()
        return handle

    async def close(self) -> None:
        for name, handle in self._chains.items():
            try:
                await handle.close()
            except Exception:
                logger.exception("Failed to close Tezos %s handle", name)
        self._chains.clear()

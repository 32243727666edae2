"""
Signing wallet interfaces.

Forging and signing Tezos operations happens outside this service. A signer
integration registers a factory per account address; the chain handle only
asks the loader for a wallet and talks to it through these protocols.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Protocol

from .models import TransactionOperation

logger = logging.getLogger(__name__)


class ContractHandle(Protocol):
    """A deployed contract bound to a signer."""

    address: str

    async def send(self, entrypoint: str, parameters: Any) -> TransactionOperation:
        """Submit a call to ``entrypoint`` and wait for inclusion."""
        ...


class TezosWallet(Protocol):
    address: str

    async def contract_at(self, address: str) -> ContractHandle: ...

    async def get_chain_id(self) -> str: ...


WalletFactory = Callable[[str], Awaitable[TezosWallet]]


class WalletNotFoundError(Exception):
    """No signer is registered for the address."""


class WalletLoader:
    """Resolves account addresses to signing wallets."""

    def __init__(self, factories: Optional[Dict[str, WalletFactory]] = None) -> None:
        self._factories: Dict[str, WalletFactory] = dict(factories or {})

    def register(self, address: str, factory: WalletFactory) -> None:
        self._factories[address] = factory

    def has(self, address: str) -> bool:
        return address in self._factories

    async def load(self, address: str) -> TezosWallet:
        factory = self._factories.get(address)
        if factory is None:
            raise WalletNotFoundError(f"no signer registered for {address}")
        logger.debug("Loading wallet %s", address)
        return await factory(address)

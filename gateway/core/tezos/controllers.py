"""
Tezos wallet operations.

Each operation takes an already resolved chain handle plus a validated
request and returns a response envelope, or raises a ``GatewayError``.
"""

from __future__ import annotations

import asyncio
import json
import logging
import time
from typing import Any, Awaitable, Dict, Optional, Protocol, Tuple

from ..errors import InvalidRequestError, LoadWalletError, TokenNotSupportedError
from ...types.requests import (
    AllowancesRequest,
    ApproveRequest,
    BalanceRequest,
    NonceRequest,
    PollRequest,
)
from ...types.responses import (
    AllowancesResponse,
    ApproveResponse,
    BalanceResponse,
    CustomTransaction,
    NonceResponse,
    PollResponse,
)
from .amounts import MAX_UINT256, format_units, parse_units, token_value_to_string
from .models import (
    OperationContent,
    PendingOperations,
    TokenInfo,
    TokenStandard,
    TokenValue,
    TransactionOperation,
    TxStatus,
)
from .registry import get_token_symbols_to_tokens
from .wallet import TezosWallet

logger = logging.getLogger(__name__)

# FA1.2 exposes no "how much may the spender move" query we rely on.
FA12_ALLOWANCE = "0.000000"

# Checked in this order; the first partition holding the hash wins.
MEMPOOL_PRIORITY: Tuple[Tuple[str, TxStatus], ...] = (
    ("applied", TxStatus.APPLIED),
    ("branch_delayed", TxStatus.BRANCH_DELAYED),
    ("branch_refused", TxStatus.BRANCH_REFUSED),
    ("refused", TxStatus.REFUSED),
    ("unprocessed", TxStatus.UNPROCESSED),
)


class Tezosish(Protocol):
    """What the operations need from a chain handle."""

    chain: str
    chain_name: str
    native_token_symbol: str

    def get_token_for_symbol(self, symbol: str) -> Optional[TokenInfo]: ...
    async def get_nonce(self, address: str) -> int: ...
    async def get_native_balance(self, address: str) -> TokenValue: ...
    async def get_token_balance(self, contract_address: str, owner: str, token_id: int, decimals: int) -> TokenValue: ...
    async def get_token_allowance(
        self, contract_address: str, owner: str, spender: str, standard: str, token_id: Optional[int], decimals: int
    ) -> TokenValue: ...
    async def get_current_block_number(self) -> int: ...
    async def get_pending_transactions(self) -> PendingOperations: ...
    async def get_transaction(self, tx_hash: str) -> Any: ...
    async def get_wallet(self, address: str) -> TezosWallet: ...


def _now_ms() -> int:
    return int(time.time() * 1000)


def _latency(start_ms: int) -> float:
    return round(time.time() * 1000 - start_ms, 1)


async def _gather_values(pending: Dict[str, Awaitable[TokenValue]]) -> Dict[str, str]:
    """Await every fetch together and stringify the results by symbol."""

    symbols = list(pending)
    values = await asyncio.gather(*pending.values())
    return {symbol: token_value_to_string(value) for symbol, value in zip(symbols, values)}


async def nonce(tezos: Tezosish, req: NonceRequest) -> NonceResponse:
    return NonceResponse(nonce=await tezos.get_nonce(req.address))


async def next_nonce(tezos: Tezosish, req: NonceRequest) -> NonceResponse:
    current = await nonce(tezos, req)
    return NonceResponse(nonce=current.nonce + 1)


async def balances(tezos: Tezosish, req: BalanceRequest) -> BalanceResponse:
    init_time = _now_ms()
    tokens = get_token_symbols_to_tokens(tezos, req.token_symbols)
    native = tezos.native_token_symbol

    pending: Dict[str, Awaitable[TokenValue]] = {}
    # The native asset is not a registry entry, so check the raw request.
    if native in req.token_symbols:
        pending[native] = tezos.get_native_balance(req.address)

    for symbol, token in tokens.items():
        if symbol == native:
            continue
        if token.token_id is None:
            logger.debug("Skipping %s: no token id", symbol)
            continue
        pending[symbol] = tezos.get_token_balance(token.address, req.address, token.token_id, token.decimals)

    result = await _gather_values(pending)
    if not result:
        raise TokenNotSupportedError()

    return BalanceResponse(
        network=tezos.chain_name,
        timestamp=init_time,
        latency=_latency(init_time),
        balances=result,
    )


async def allowances(tezos: Tezosish, req: AllowancesRequest) -> AllowancesResponse:
    init_time = _now_ms()
    tokens = get_token_symbols_to_tokens(tezos, req.token_symbols)

    approvals: Dict[str, str] = {}
    pending: Dict[str, Awaitable[TokenValue]] = {}
    for symbol, token in tokens.items():
        if token.standard is TokenStandard.FA12:
            approvals[symbol] = FA12_ALLOWANCE
        elif token.standard is TokenStandard.FA2:
            pending[symbol] = tezos.get_token_allowance(
                token.address,
                req.address,
                req.spender,
                TokenStandard.FA2.value,
                token.token_id,
                token.decimals,
            )

    approvals.update(await _gather_values(pending))
    if not approvals:
        raise TokenNotSupportedError()

    return AllowancesResponse(
        network=tezos.chain_name,
        timestamp=init_time,
        latency=_latency(init_time),
        spender=req.spender,
        approvals=approvals,
    )


def classify_transaction(pending: PendingOperations, tx_hash: str) -> Tuple[TxStatus, Any]:
    """Status of ``tx_hash`` in a mempool snapshot.

    Returns ``(TxStatus.UNKNOWN, None)`` when no partition holds the hash.
    Operation contents are only returned for the applied partition.
    """

    for partition, status in MEMPOOL_PRIORITY:
        for operation in getattr(pending, partition):
            if operation.hash == tx_hash:
                contents = operation.contents if status is TxStatus.APPLIED else None
                return status, contents
    return TxStatus.UNKNOWN, None


async def poll(tezos: Tezosish, req: PollRequest) -> PollResponse:
    init_time = _now_ms()
    current_block = await tezos.get_current_block_number()

    pending = await tezos.get_pending_transactions()
    tx_status, tx_data = classify_transaction(pending, req.tx_hash)
    if tx_status is TxStatus.UNKNOWN:
        finalized = await tezos.get_transaction(req.tx_hash)
        if finalized:
            tx_status, tx_data = TxStatus.APPLIED, finalized

    return PollResponse(
        network=tezos.chain_name,
        current_block=current_block,
        timestamp=init_time,
        tx_hash=req.tx_hash,
        tx_status=int(tx_status),
        tx_data=tx_data,
    )


def approval_call(token: TokenInfo, owner: str, spender: str, amount: int) -> Tuple[str, Any]:
    """Entrypoint and parameters granting ``spender`` access to ``token``.

    FA2 grants are all-or-nothing operator entries, so ``amount`` is unused.
    """

    if token.standard is TokenStandard.FA12:
        return "approve", {"spender": spender, "value": amount}
    if token.standard is TokenStandard.FA2:
        return "update_operators", [
            {
                "add_operator": {
                    "owner": owner,
                    "operator": spender,
                    "token_id": token.token_id,
                }
            }
        ]
    raise TokenNotSupportedError(token.symbol)


async def approve(tezos: Tezosish, req: ApproveRequest) -> ApproveResponse:
    init_time = _now_ms()
    try:
        wallet = await tezos.get_wallet(req.address)
    except Exception as exc:
        raise LoadWalletError(exc) from exc

    token = tezos.get_token_for_symbol(req.token)
    if token is None:
        raise TokenNotSupportedError(req.token)

    if req.amount:
        try:
            amount = parse_units(req.amount, token.decimals)
        except ValueError as exc:
            raise InvalidRequestError(str(exc)) from exc
    else:
        amount = MAX_UINT256
    entrypoint, parameters = approval_call(token, req.address, req.spender, amount)

    contract = await wallet.contract_at(token.address)
    operation: TransactionOperation = await contract.send(entrypoint, parameters)
    if not operation.operation_results:
        raise TokenNotSupportedError(req.token)

    logger.info(
        "Approval %s for %s on %s submitted via %s",
        operation.hash,
        req.spender,
        token.symbol,
        entrypoint,
    )
    result = operation.operation_results[0]
    chain_id = await wallet.get_chain_id()
    return ApproveResponse(
        network=tezos.chain_name,
        timestamp=init_time,
        latency=_latency(init_time),
        token_address=token.address,
        spender=req.spender,
        amount=format_units(amount, token.decimals),
        nonce=int(result.counter),
        approval=to_tezos_transaction(operation.hash, result, chain_id),
    )


def to_tezos_transaction(tx_hash: str, content: OperationContent, chain_id: str) -> CustomTransaction:
    return CustomTransaction(
        hash=tx_hash,
        to=content.destination,
        from_=content.source,
        nonce=int(content.counter),
        gas_limit=str(int(content.gas_limit) + int(content.storage_limit)),
        max_fee_per_gas=None,
        max_priority_fee_per_gas=None,
        value=content.amount,
        chain_id=chain_id,
        data=json.dumps(content.parameters) if content.parameters is not None else None,
    )


__all__ = [
    "FA12_ALLOWANCE",
    "MEMPOOL_PRIORITY",
    "Tezosish",
    "allowances",
    "approval_call",
    "approve",
    "balances",
    "classify_transaction",
    "next_nonce",
    "nonce",
    "poll",
    "to_tezos_transaction",
]

"""
Tezos domain models.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Tuple


class TokenStandard(str, Enum):
    """Contract standards the gateway knows how to approve."""
    FA12 = "fa1.2"   # allowance-style: bounded numeric allowance
    FA2 = "fa2"      # operator-style: all-or-nothing operator grant per token id

    @classmethod
    def parse(cls, raw: Any) -> Optional["TokenStandard"]:
        try:
            return cls(str(raw).lower())
        except ValueError:
            return None


class TxStatus(IntEnum):
    """Lifecycle state reported by ``poll``."""
    UNKNOWN = -1          # not in the mempool, not on chain, or failed
    APPLIED = 1
    BRANCH_DELAYED = 2
    BRANCH_REFUSED = 3
    REFUSED = 4
    UNPROCESSED = 5


@dataclass(frozen=True)
class TokenInfo:
    """Token list entry."""
    symbol: str
    address: str
    decimals: int
    standard: TokenStandard
    token_id: Optional[int] = None
    name: str = ""
    chain_id: Optional[str] = None


@dataclass(frozen=True)
class TokenValue:
    """Raw chain integer together with the decimals it is expressed in."""
    value: int
    decimals: int


@dataclass(frozen=True)
class MempoolOperation:
    hash: str
    contents: Any = None


@dataclass(frozen=True)
class PendingOperations:
    """Mempool snapshot split into the node's validity partitions."""
    applied: Tuple[MempoolOperation, ...] = ()
    branch_delayed: Tuple[MempoolOperation, ...] = ()
    branch_refused: Tuple[MempoolOperation, ...] = ()
    refused: Tuple[MempoolOperation, ...] = ()
    unprocessed: Tuple[MempoolOperation, ...] = ()


@dataclass(frozen=True)
class OperationContent:
    """One applied transaction entry of a submitted operation group."""
    source: str
    destination: str
    counter: str
    gas_limit: str
    storage_limit: str
    amount: str = "0"
    parameters: Optional[Dict[str, Any]] = None


@dataclass
class TransactionOperation:
    """Result of submitting an operation group and waiting for inclusion."""
    hash: str
    operation_results: List[OperationContent] = field(default_factory=list)

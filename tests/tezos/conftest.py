from typing import Dict
from unittest.mock import AsyncMock, MagicMock

import pytest

from gateway.core.tezos.models import PendingOperations, TokenInfo, TokenStandard, TokenValue

from tezos_fixtures import TZBTC_ADDRESS, USDT_ADDRESS


@pytest.fixture
def tokens() -> Dict[str, TokenInfo]:
    return {
        "USDT": TokenInfo(
            symbol="USDT",
            address=USDT_ADDRESS,
            decimals=6,
            standard=TokenStandard.FA2,
            token_id=0,
        ),
        "tzBTC": TokenInfo(
            symbol="tzBTC",
            address=TZBTC_ADDRESS,
            decimals=8,
            standard=TokenStandard.FA12,
            token_id=0,
        ),
        "NOID": TokenInfo(
            symbol="NOID",
            address="KT1K9gCRgaLRFKTErYt1wVxA3Frb9FjasjTV",
            decimals=18,
            standard=TokenStandard.FA2,
            token_id=None,
        ),
    }


@pytest.fixture
def fake_chain(tokens):
    """Chain handle stub with the mainnet shape and no I/O."""
    chain = MagicMock()
    chain.chain = "tezos"
    chain.chain_name = "mainnet"
    chain.network = "mainnet"
    chain.native_token_symbol = "XTZ"
    chain.ready = True
    chain.get_token_for_symbol = MagicMock(side_effect=tokens.get)
    chain.get_nonce = AsyncMock(return_value=41)
    chain.get_native_balance = AsyncMock(return_value=TokenValue(value=1_000_000, decimals=6))
    chain.get_token_balance = AsyncMock(return_value=TokenValue(value=2_500_000, decimals=6))
    chain.get_token_allowance = AsyncMock(return_value=TokenValue(value=0, decimals=6))
    chain.get_current_block_number = AsyncMock(return_value=5_000_000)
    chain.get_pending_transactions = AsyncMock(return_value=PendingOperations())
    chain.get_transaction = AsyncMock(return_value=None)
    chain.get_wallet = AsyncMock()
    chain.close = AsyncMock()
    return chain

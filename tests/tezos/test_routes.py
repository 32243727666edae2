from unittest.mock import AsyncMock

import httpx
import pytest
from fastapi.testclient import TestClient

from gateway.core.errors import (
    INVALID_REQUEST_ERROR_CODE,
    LOAD_WALLET_ERROR_CODE,
    NETWORK_ERROR_CODE,
    TOKEN_NOT_SUPPORTED_ERROR_CODE,
    UNKNOWN_CHAIN_ERROR_CODE,
    UNKNOWN_ERROR_CODE,
)
from gateway.core.tezos.chain import TezosChainError
from gateway.core.tezos.models import MempoolOperation, PendingOperations
from gateway.core.tezos.wallet import WalletNotFoundError
from gateway.main import create_app
from gateway.services.connection_manager import ConnectionManager

from tezos_fixtures import OP_HASH, OWNER, SPENDER


@pytest.fixture
def client(fake_chain):
    manager = ConnectionManager(chains={"mainnet": fake_chain})
    return TestClient(create_app(manager))


def test_healthz(client):
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json()["networks"] == ["mainnet"]


def test_nonce_and_next_nonce(client):
    body = {"chain": "tezos", "network": "mainnet", "address": OWNER}
    assert client.post("/tezos/nonce", json=body).json() == {"nonce": 41}
    assert client.post("/tezos/nextNonce", json=body).json() == {"nonce": 42}


def test_balances(client):
    resp = client.post(
        "/tezos/balances",
        json={"chain": "tezos", "network": "mainnet", "address": OWNER, "tokenSymbols": ["XTZ", "USDT"]},
    )
    assert resp.status_code == 200, resp.json()
    data = resp.json()
    assert data["balances"] == {"XTZ": "1.000000", "USDT": "2.500000"}
    assert data["network"] == "mainnet"
    assert {"timestamp", "latency"} <= set(data)


def test_balances_unsupported_tokens(client):
    resp = client.post(
        "/tezos/balances",
        json={"chain": "tezos", "network": "mainnet", "address": OWNER, "tokenSymbols": ["DOGE"]},
    )
    assert resp.status_code == 500
    assert resp.json()["errorCode"] == TOKEN_NOT_SUPPORTED_ERROR_CODE


def test_allowances(client):
    resp = client.post(
        "/tezos/allowances",
        json={
            "chain": "tezos",
            "network": "mainnet",
            "address": OWNER,
            "spender": SPENDER,
            "tokenSymbols": ["tzBTC"],
        },
    )
    assert resp.status_code == 200
    assert resp.json()["approvals"] == {"tzBTC": "0.000000"}
    assert resp.json()["spender"] == SPENDER


def test_poll(client, fake_chain):
    fake_chain.get_pending_transactions = AsyncMock(
        return_value=PendingOperations(branch_refused=(MempoolOperation(hash=OP_HASH),))
    )
    resp = client.post("/tezos/poll", json={"chain": "tezos", "network": "mainnet", "txHash": OP_HASH})
    assert resp.status_code == 200
    data = resp.json()
    assert data["txStatus"] == 3
    assert data["txData"] is None
    assert data["currentBlock"] == 5_000_000


def test_approve_wallet_failure(client, fake_chain):
    fake_chain.get_wallet = AsyncMock(side_effect=WalletNotFoundError("no signer registered"))
    resp = client.post(
        "/tezos/approve",
        json={"chain": "tezos", "network": "mainnet", "address": OWNER, "spender": SPENDER, "token": "USDT"},
    )
    assert resp.status_code == 500
    body = resp.json()
    assert body["errorCode"] == LOAD_WALLET_ERROR_CODE
    assert body["message"].startswith("Failed to load wallet: ")


@pytest.mark.parametrize(
    "body",
    [
        {"network": "mainnet", "address": "0xabc", "tokenSymbols": ["XTZ"]},
        {"network": "mainnet", "address": OWNER, "tokenSymbols": []},
        {"network": "mainnet", "address": OWNER},
    ],
)
def test_invalid_balance_request(client, body):
    resp = client.post("/tezos/balances", json=body)
    assert resp.status_code == 400
    assert resp.json()["errorCode"] == INVALID_REQUEST_ERROR_CODE


def test_invalid_poll_hash(client):
    resp = client.post("/tezos/poll", json={"network": "mainnet", "txHash": "0xdeadbeef"})
    assert resp.status_code == 400


def test_unknown_network(client):
    resp = client.post("/tezos/nonce", json={"chain": "tezos", "network": "nairobinet", "address": OWNER})
    assert resp.status_code == 404
    assert resp.json()["errorCode"] == UNKNOWN_CHAIN_ERROR_CODE


def test_unknown_chain(client):
    resp = client.post("/tezos/nonce", json={"chain": "ethereum", "network": "mainnet", "address": OWNER})
    assert resp.json()["errorCode"] == UNKNOWN_CHAIN_ERROR_CODE


def test_node_failure_maps_to_network_error(client, fake_chain):
    fake_chain.get_nonce = AsyncMock(side_effect=httpx.ConnectError("connection refused"))
    resp = client.post("/tezos/nonce", json={"chain": "tezos", "network": "mainnet", "address": OWNER})
    assert resp.status_code == 503
    assert resp.json()["errorCode"] == NETWORK_ERROR_CODE


def test_unexpected_failure_maps_to_unknown_error(fake_chain):
    fake_chain.get_nonce = AsyncMock(side_effect=TezosChainError("bad payload"))
    manager = ConnectionManager(chains={"mainnet": fake_chain})
    client = TestClient(create_app(manager), raise_server_exceptions=False)

    resp = client.post("/tezos/nonce", json={"chain": "tezos", "network": "mainnet", "address": OWNER})

    assert resp.status_code == 500
    assert resp.json() == {
        "statusCode": 500,
        "errorCode": UNKNOWN_ERROR_CODE,
        "message": "Unknown error: bad payload",
    }


def test_request_id_is_echoed(client):
    resp = client.get("/healthz", headers={"x-request-id": "req-1234"})
    assert resp.headers["x-request-id"] == "req-1234"
    assert client.get("/healthz").headers["x-request-id"]

from fastapi import APIRouter, Depends, Request

from ..core.tezos import controllers
from ..services.connection_manager import ConnectionManager
from ..types.requests import (
    AllowancesRequest,
    ApproveRequest,
    BalanceRequest,
    NonceRequest,
    PollRequest,
)

router = APIRouter(prefix="/tezos")


def get_connection_manager(request: Request) -> ConnectionManager:
    return request.app.state.connections


@router.post("/nonce")
async def post_nonce(req: NonceRequest, manager: ConnectionManager = Depends(get_connection_manager)):
    tezos = await manager.get_chain(req.chain, req.network)
    result = await controllers.nonce(tezos, req)
    return result.model_dump(by_alias=True)


@router.post("/nextNonce")
async def post_next_nonce(req: NonceRequest, manager: ConnectionManager = Depends(get_connection_manager)):
    tezos = await manager.get_chain(req.chain, req.network)
    result = await controllers.next_nonce(tezos, req)
    return result.model_dump(by_alias=True)


@router.post("/balances")
async def post_balances(req: BalanceRequest, manager: ConnectionManager = Depends(get_connection_manager)):
    tezos = await manager.get_chain(req.chain, req.network)
    result = await controllers.balances(tezos, req)
    return result.model_dump(by_alias=True)


@router.post("/poll")
async def post_poll(req: PollRequest, manager: ConnectionManager = Depends(get_connection_manager)):
    tezos = await manager.get_chain(req.chain, req.network)
    result = await controllers.poll(tezos, req)
    return result.model_dump(by_alias=True)


@router.post("/allowances")
async def post_allowances(req: AllowancesRequest, manager: ConnectionManager = Depends(get_connection_manager)):
    tezos = await manager.get_chain(req.chain, req.network)
    result = await controllers.allowances(tezos, req)
    return result.model_dump(by_alias=True)


@router.post("/approve")
async def post_approve(req: ApproveRequest, manager: ConnectionManager = Depends(get_connection_manager)):
    tezos = await manager.get_chain(req.chain, req.network)
    result = await controllers.approve(tezos, req)
    return result.model_dump(by_alias=True)

from typing import Any, Dict

from fastapi import APIRouter, Request

router = APIRouter()


@router.get("/healthz")
async def health_check(request: Request) -> Dict[str, Any]:
    """Report which Tezos networks this process serves"""

    manager = request.app.state.connections
    return {
        "status": "healthy" if manager.networks else "degraded",
        "chain": "tezos",
        "networks": manager.networks,
    }

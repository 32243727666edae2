import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .api import health, tezos
from .config import settings
from .core.errors import GatewayError, InvalidRequestError, to_gateway_error
from .logging_config import setup_logging
from .middleware.logging_middleware import RequestLoggingMiddleware
from .services.connection_manager import ConnectionManager

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    if getattr(app.state, "connections", None) is None:
        app.state.connections = ConnectionManager.from_settings(settings)
    logger.info("Serving Tezos networks: %s", ", ".join(app.state.connections.networks))
    try:
        yield
    finally:
        await app.state.connections.close()


def create_app(connections: ConnectionManager | None = None) -> FastAPI:
    app = FastAPI(
        title="Tezos Gateway",
        description="Wallet-centric Tezos endpoints for the multi-chain gateway",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.connections = connections
    app.add_middleware(RequestLoggingMiddleware)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        details = "; ".join(
            f"{'.'.join(str(p) for p in err.get('loc', ()) if p != 'body')}: {err.get('msg')}"
            for err in exc.errors()
        )
        error = InvalidRequestError(details)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    @app.exception_handler(GatewayError)
    @app.exception_handler(httpx.HTTPError)
    @app.exception_handler(Exception)
    async def handle_gateway_error(request: Request, exc: Exception) -> JSONResponse:
        error = to_gateway_error(exc)
        if error.status_code >= 500:
            logger.error("%s failed: %s", request.url.path, error.message, exc_info=exc)
        else:
            logger.warning("%s rejected: %s", request.url.path, error.message)
        return JSONResponse(status_code=error.status_code, content=error.to_dict())

    app.include_router(health.router, tags=["Health"])
    app.include_router(tezos.router, tags=["Tezos"])
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "gateway.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower()
    )

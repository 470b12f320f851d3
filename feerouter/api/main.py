"""FastAPI application exposing the router's read-only views.

Only quotes, tolerances, history, and counters are served; swaps and
liquidity changes are submitted through FeeTierRouter directly.

    from feerouter.api.main import serve

    serve(router)  # blocks
"""

import os

import structlog
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from feerouter import __version__
from feerouter.api.endpoints import router, set_default_router
from feerouter.api.schemas import ErrorResponse
from feerouter.errors import (
    IndexOutOfBounds,
    NoLiquidityActionsFound,
    NoPoolAvailable,
    NoSwapsFound,
    RouterError,
    ValidationError,
)
from feerouter.log_config import configure_logging
from feerouter.router import FeeTierRouter

logger = structlog.get_logger()

# Configuration from environment variables with sensible defaults
HOST = os.environ.get("FEEROUTER_HOST", "0.0.0.0")
PORT = int(os.environ.get("FEEROUTER_PORT", "8000"))
DEBUG = os.environ.get("FEEROUTER_DEBUG", "false").lower() in ("true", "1", "yes")

NOT_FOUND_ERRORS = (NoPoolAvailable, NoSwapsFound, NoLiquidityActionsFound, IndexOutOfBounds)

app = FastAPI(
    title="Fee-Tier Router",
    description="Best fee tier quotes and per-caller swap/liquidity history",
    version=__version__,
)

app.include_router(router)


def status_for(error: RouterError) -> int:
    """HTTP status code for a router error."""
    if isinstance(error, NOT_FOUND_ERRORS):
        return 404
    if isinstance(error, ValidationError):
        return 422
    return 400


@app.exception_handler(RouterError)
async def router_error_handler(request: Request, exc: RouterError) -> JSONResponse:
    status_code = status_for(exc)
    logger.debug(
        "api_router_error",
        path=request.url.path,
        error=type(exc).__name__,
        status_code=status_code,
    )
    body = ErrorResponse(error=type(exc).__name__, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "ok"}


def serve(fee_router: FeeTierRouter, host: str = HOST, port: int = PORT) -> None:
    """Serve the read-only API for a router wired by the embedding process.

    The router's collaborators (token service, swap router, quoter, position
    manager) belong to the host application, so the server takes the router
    instance instead of building one.

    Configuration via environment variables:
    - FEEROUTER_HOST: Host to bind to (default: 0.0.0.0)
    - FEEROUTER_PORT: Port to bind to (default: 8000)
    - FEEROUTER_DEBUG: Enable debug logging (default: false)
    """
    configure_logging("DEBUG" if DEBUG else "INFO")
    set_default_router(fee_router)
    logger.info("api_serving", host=host, port=port, router=fee_router.address)
    uvicorn.run(app, host=host, port=port)

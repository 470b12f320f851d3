"""Read-only API endpoints: quotes, tolerances, history, and counters."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Path, Query

from feerouter.api.schemas import (
    LiquidityActionModel,
    LiquidityHistoryResponse,
    QuoteResponse,
    SlippageResponse,
    StatsResponse,
    SwapActionModel,
    SwapHistoryResponse,
)
from feerouter.models.types import normalize_address
from feerouter.router import FeeTierRouter

logger = structlog.get_logger()

router = APIRouter()

_default_router: FeeTierRouter | None = None

CallerPath = Annotated[str, Path(pattern=r"^0x[a-fA-F0-9]{40}$")]
TokenQuery = Annotated[str, Query(pattern=r"^0x[a-fA-F0-9]{40}$")]


def set_default_router(instance: FeeTierRouter | None) -> None:
    """Install the router instance served by the API."""
    global _default_router
    _default_router = instance


def get_router() -> FeeTierRouter:
    """Dependency provider for the router instance.

    Override this in tests to inject a router wired to in-memory collaborators:
        app.dependency_overrides[get_router] = lambda: router

    Raises:
        HTTPException: 503 if no router has been installed
    """
    if _default_router is None:
        raise HTTPException(status_code=503, detail="Router not configured")
    return _default_router


RouterDep = Annotated[FeeTierRouter, Depends(get_router)]


@router.get("/quote/exact-input")
def quote_exact_input(
    token_in: TokenQuery,
    token_out: TokenQuery,
    amount_in: Annotated[int, Query(ge=0)],
    fee_router: RouterDep,
) -> QuoteResponse:
    """Best tier and quoted output for selling amount_in of token_in."""
    quote = fee_router.quote_exact_input(token_in, token_out, amount_in)
    logger.debug("api_quote_exact_input", token_in=token_in, token_out=token_out, fee=quote.fee)
    return QuoteResponse.from_quote(quote)


@router.get("/quote/exact-output")
def quote_exact_output(
    token_in: TokenQuery,
    token_out: TokenQuery,
    amount_out: Annotated[int, Query(ge=0)],
    fee_router: RouterDep,
) -> QuoteResponse:
    """Best tier and quoted input for buying amount_out of token_out."""
    quote = fee_router.quote_exact_output(token_in, token_out, amount_out)
    logger.debug("api_quote_exact_output", token_in=token_in, token_out=token_out, fee=quote.fee)
    return QuoteResponse.from_quote(quote)


@router.get("/callers/{caller}/slippage")
def get_slippage(caller: CallerPath, fee_router: RouterDep) -> SlippageResponse:
    return SlippageResponse(
        caller=normalize_address(caller),
        tolerance_bps=fee_router.slippage.effective_tolerance(caller),
        configured=fee_router.slippage.is_configured(caller),
        default_bps=fee_router.slippage.default_bps,
    )


@router.get("/callers/{caller}/swaps")
def list_swaps(caller: CallerPath, fee_router: RouterDep) -> SwapHistoryResponse:
    swaps = fee_router.history.swaps(caller)
    return SwapHistoryResponse(
        caller=normalize_address(caller),
        count=len(swaps),
        swaps=[SwapActionModel.from_action(swap) for swap in swaps],
    )


@router.get("/callers/{caller}/swaps/last")
def last_swap(caller: CallerPath, fee_router: RouterDep) -> SwapActionModel:
    return SwapActionModel.from_action(fee_router.history.last_swap(caller))


@router.get("/callers/{caller}/swaps/{index}")
def get_swap(
    caller: CallerPath, index: Annotated[int, Path(ge=0)], fee_router: RouterDep
) -> SwapActionModel:
    return SwapActionModel.from_action(fee_router.history.get_swap(caller, index))


@router.get("/callers/{caller}/liquidity")
def list_liquidity_actions(caller: CallerPath, fee_router: RouterDep) -> LiquidityHistoryResponse:
    actions = fee_router.history.liquidity_actions(caller)
    return LiquidityHistoryResponse(
        caller=normalize_address(caller),
        count=len(actions),
        actions=[LiquidityActionModel.from_action(action) for action in actions],
    )


@router.get("/callers/{caller}/liquidity/last")
def last_liquidity_action(caller: CallerPath, fee_router: RouterDep) -> LiquidityActionModel:
    return LiquidityActionModel.from_action(fee_router.history.last_liquidity_action(caller))


@router.get("/callers/{caller}/liquidity/{index}")
def get_liquidity_action(
    caller: CallerPath, index: Annotated[int, Path(ge=0)], fee_router: RouterDep
) -> LiquidityActionModel:
    return LiquidityActionModel.from_action(
        fee_router.history.get_liquidity_action(caller, index)
    )


@router.get("/stats")
def stats(fee_router: RouterDep) -> StatsResponse:
    return StatsResponse(
        total_swaps=fee_router.total_swaps,
        total_liquidity_actions=fee_router.total_liquidity_actions,
    )

"""Pydantic response models for the HTTP API.

Amounts are serialized as decimal strings so uint256 values survive JSON.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from feerouter.models.history import LiquidityAction, SwapAction
from feerouter.models.types import Address, Uint256
from feerouter.routing.types import TierProbe, TierQuote


class TierProbeModel(BaseModel):
    fee: int
    amount: Uint256 | None = Field(default=None, description="None when the tier is unavailable")
    has_pool: bool


class QuoteResponse(BaseModel):
    """Best tier for a prospective swap."""

    fee: int = Field(description="Selected fee tier (hundredths of a bp)")
    amount: Uint256 = Field(
        description="Quoted output (exact input) or quoted input (exact output)"
    )
    is_exact_input: bool
    probes: list[TierProbeModel]

    @classmethod
    def from_quote(cls, quote: TierQuote) -> QuoteResponse:
        return cls(
            fee=quote.fee,
            amount=quote.amount,
            is_exact_input=quote.is_exact_input,
            probes=[_probe_model(probe) for probe in quote.probes],
        )


def _probe_model(probe: TierProbe) -> TierProbeModel:
    return TierProbeModel(fee=probe.fee, amount=probe.amount, has_pool=probe.has_pool)


class SlippageResponse(BaseModel):
    caller: Address
    tolerance_bps: int
    configured: bool = Field(description="False when the default tolerance applies")
    default_bps: int


class SwapActionModel(BaseModel):
    timestamp: int
    sequence: int
    token_in: Address
    token_out: Address
    amount_in: Uint256
    amount_out: Uint256
    fee: int
    is_exact_input: bool

    @classmethod
    def from_action(cls, action: SwapAction) -> SwapActionModel:
        return cls(
            timestamp=action.timestamp,
            sequence=action.sequence,
            token_in=action.token_in,
            token_out=action.token_out,
            amount_in=action.amount_in,
            amount_out=action.amount_out,
            fee=action.fee,
            is_exact_input=action.is_exact_input,
        )


class LiquidityActionModel(BaseModel):
    timestamp: int
    sequence: int
    token_id: int
    is_increase: bool
    liquidity: Uint256
    amount0: Uint256
    amount1: Uint256

    @classmethod
    def from_action(cls, action: LiquidityAction) -> LiquidityActionModel:
        return cls(
            timestamp=action.timestamp,
            sequence=action.sequence,
            token_id=action.token_id,
            is_increase=action.is_increase,
            liquidity=action.liquidity,
            amount0=action.amount0,
            amount1=action.amount1,
        )


class SwapHistoryResponse(BaseModel):
    caller: Address
    count: int
    swaps: list[SwapActionModel]


class LiquidityHistoryResponse(BaseModel):
    caller: Address
    count: int
    actions: list[LiquidityActionModel]


class StatsResponse(BaseModel):
    total_swaps: int
    total_liquidity_actions: int


class ErrorResponse(BaseModel):
    error: str = Field(description="Error class name")
    detail: str

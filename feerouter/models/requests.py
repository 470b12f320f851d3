"""Request and outcome types for swap and liquidity operations."""

from __future__ import annotations

from dataclasses import dataclass

from feerouter.constants import NO_PRICE_LIMIT
from feerouter.models.history import LiquidityAction, SwapAction


@dataclass(frozen=True)
class ExactInputRequest:
    """Swap exactly amount_in of token_in for as much token_out as possible.

    recipient defaults to the caller when None.
    """

    token_in: str
    token_out: str
    amount_in: int
    amount_out_minimum: int
    deadline: int
    recipient: str | None = None
    sqrt_price_limit_x96: int = NO_PRICE_LIMIT


@dataclass(frozen=True)
class ExactOutputRequest:
    """Receive exactly amount_out of token_out, spending at most amount_in_maximum.

    recipient defaults to the caller when None.
    """

    token_in: str
    token_out: str
    amount_out: int
    amount_in_maximum: int
    deadline: int
    recipient: str | None = None
    sqrt_price_limit_x96: int = NO_PRICE_LIMIT


@dataclass(frozen=True)
class IncreaseLiquidityRequest:
    token_id: int
    amount0_desired: int
    amount1_desired: int
    amount0_min: int
    amount1_min: int
    deadline: int


@dataclass(frozen=True)
class DecreaseLiquidityRequest:
    token_id: int
    liquidity: int
    amount0_min: int
    amount1_min: int
    deadline: int


@dataclass(frozen=True)
class SwapOutcome:
    """Result of a successful swap.

    Attributes:
        amount: Realized output for exact-input, realized input for exact-output
        fee: Fee tier the swap was routed through
        refund: Unspent input returned to the caller (exact-output only)
        record: The history entry appended for this swap
    """

    amount: int
    fee: int
    refund: int
    record: SwapAction


@dataclass(frozen=True)
class LiquidityOutcome:
    """Result of a successful liquidity operation.

    refund0/refund1 are the unconsumed desired amounts returned on increase;
    always zero on decrease.
    """

    liquidity: int
    amount0: int
    amount1: int
    record: LiquidityAction
    refund0: int = 0
    refund1: int = 0

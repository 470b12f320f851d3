"""Immutable history records kept by the ledger."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SwapAction:
    """A completed swap.

    Attributes:
        timestamp: Unix time the swap was recorded
        sequence: 1-based global ordinal among all recorded swaps
        token_in: Input token address
        token_out: Output token address
        amount_in: Input actually spent
        amount_out: Output actually received
        fee: Fee tier the swap was routed through
        is_exact_input: True for exact-input swaps, False for exact-output
    """

    timestamp: int
    sequence: int
    token_in: str
    token_out: str
    amount_in: int
    amount_out: int
    fee: int
    is_exact_input: bool


@dataclass(frozen=True)
class LiquidityAction:
    """A completed liquidity increase or decrease on an external position.

    Attributes:
        timestamp: Unix time the action was recorded
        sequence: 1-based global ordinal among all recorded liquidity actions
        token_id: Position identifier in the position manager
        is_increase: True for increases, False for decreases
        liquidity: Liquidity delta added or removed
        amount0: Amount of the position's token0 moved
        amount1: Amount of the position's token1 moved
    """

    timestamp: int
    sequence: int
    token_id: int
    is_increase: bool
    liquidity: int
    amount0: int
    amount1: int

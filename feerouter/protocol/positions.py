"""Position manager protocol (NonfungiblePositionManager-style)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class IncreaseLiquidityParams:
    token_id: int
    amount0_desired: int
    amount1_desired: int
    amount0_min: int
    amount1_min: int
    deadline: int


@dataclass(frozen=True)
class DecreaseLiquidityParams:
    token_id: int
    liquidity: int
    amount0_min: int
    amount1_min: int
    deadline: int


class PositionManager(Protocol):
    """External registry of liquidity positions.

    Ownership lives here and only here; the router re-queries it on every call.
    """

    address: str

    def owner_of(self, token_id: int) -> str: ...

    def position_tokens(self, token_id: int) -> tuple[str, str]:
        """Return (token0, token1) of the position's pool."""
        ...

    def increase_liquidity(
        self, params: IncreaseLiquidityParams, payer: str
    ) -> tuple[int, int, int]:
        """Add liquidity, pulling tokens from payer; returns (liquidity, amount0, amount1)."""
        ...

    def decrease_liquidity(self, params: DecreaseLiquidityParams) -> tuple[int, int]:
        """Remove liquidity; returns (amount0, amount1) credited to the position."""
        ...


__all__ = ["IncreaseLiquidityParams", "DecreaseLiquidityParams", "PositionManager"]

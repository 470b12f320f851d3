"""SwapRouter protocol and its call parameters."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

from .encoding import (
    EXACT_INPUT_SINGLE_SELECTOR,
    EXACT_OUTPUT_SINGLE_SELECTOR,
    encode_single_swap,
)
from .factory import PoolFactory


@dataclass(frozen=True)
class ExactInputSingleParams:
    token_in: str
    token_out: str
    fee: int
    recipient: str
    deadline: int
    amount_in: int
    amount_out_minimum: int
    sqrt_price_limit_x96: int = 0

    def encode(self) -> str:
        """Calldata for SwapRouter.exactInputSingle."""
        return encode_single_swap(
            EXACT_INPUT_SINGLE_SELECTOR,
            token_in=self.token_in,
            token_out=self.token_out,
            fee=self.fee,
            recipient=self.recipient,
            deadline=self.deadline,
            amount=self.amount_in,
            amount_limit=self.amount_out_minimum,
            sqrt_price_limit_x96=self.sqrt_price_limit_x96,
        )


@dataclass(frozen=True)
class ExactOutputSingleParams:
    token_in: str
    token_out: str
    fee: int
    recipient: str
    deadline: int
    amount_out: int
    amount_in_maximum: int
    sqrt_price_limit_x96: int = 0

    def encode(self) -> str:
        """Calldata for SwapRouter.exactOutputSingle."""
        return encode_single_swap(
            EXACT_OUTPUT_SINGLE_SELECTOR,
            token_in=self.token_in,
            token_out=self.token_out,
            fee=self.fee,
            recipient=self.recipient,
            deadline=self.deadline,
            amount=self.amount_out,
            amount_limit=self.amount_in_maximum,
            sqrt_price_limit_x96=self.sqrt_price_limit_x96,
        )


class SwapRouter(Protocol):
    """External router executing single-pool swaps.

    The router pulls input from `payer` using the allowance the payer
    granted it, enforces its own deadline and price limit, and returns the
    realized counter-amount.
    """

    address: str

    @property
    def factory(self) -> PoolFactory:
        """Pool factory the router swaps against."""
        ...

    def exact_input_single(self, params: ExactInputSingleParams, payer: str) -> int:
        """Execute an exact-input swap; returns amount_out."""
        ...

    def exact_output_single(self, params: ExactOutputSingleParams, payer: str) -> int:
        """Execute an exact-output swap; returns amount_in."""
        ...


__all__ = ["ExactInputSingleParams", "ExactOutputSingleParams", "SwapRouter"]

"""UniswapV3 quoter implementations for per-tier quotes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import structlog

from feerouter.constants import NO_PRICE_LIMIT
from feerouter.models.types import normalize_address

from .constants import QUOTER_V2_ADDRESS

logger = structlog.get_logger()

# Address used by MockQuoter unless one is given
MOCK_QUOTER_ADDRESS = "0x00000000000000000000000000000000000a0a7e"


class Quoter(Protocol):
    """Per-tier quote source used by the comparator.

    A quote that cannot be produced (no liquidity, reverted simulation,
    transport failure) is reported as None, never raised.
    """

    address: str

    def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> int | None:
        """Output the pool at `fee` would give for amount_in, or None."""
        ...

    def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> int | None:
        """Input the pool at `fee` would need to deliver amount_out, or None."""
        ...


@dataclass(frozen=True)
class QuoteKey:
    """Key for looking up fixed quotes in MockQuoter.

    amount=None matches any amount for that direction and tier.
    """

    token_in: str
    token_out: str
    fee: int
    is_exact_input: bool
    amount: int | None = None

    def normalized(self) -> QuoteKey:
        return QuoteKey(
            normalize_address(self.token_in),
            normalize_address(self.token_out),
            self.fee,
            self.is_exact_input,
            self.amount,
        )


class MockQuoter:
    """In-memory quoter with fixed quotes and per-tier rates.

    Lookup order: a fixed quote for the exact amount, then a fixed quote for
    any amount, then the tier's rate. A tier with none of these is
    unavailable (None). Every call is recorded in `calls` as
    (direction, token_in, token_out, fee, amount).
    """

    def __init__(
        self,
        quotes: dict[QuoteKey, int | None] | None = None,
        rates: dict[int, tuple[int, int]] | None = None,
        address: str = MOCK_QUOTER_ADDRESS,
    ):
        self.address = normalize_address(address)
        self.quotes = {key.normalized(): value for key, value in (quotes or {}).items()}
        # fee -> (num, den); output = input * num / den
        self.rates = rates or {}
        self.calls: list[tuple[str, str, str, int, int]] = []

    def set_quote(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount: int | None,
        *,
        is_exact_input: bool = True,
    ) -> None:
        """Pin the quote for one direction and tier, whatever amount is asked."""
        self.quotes[QuoteKey(token_in, token_out, fee, is_exact_input).normalized()] = amount

    def _quote(
        self, token_in: str, token_out: str, fee: int, amount: int, is_exact_input: bool
    ) -> int | None:
        direction = "exact_input" if is_exact_input else "exact_output"
        self.calls.append((direction, token_in, token_out, fee, amount))

        for key_amount in (amount, None):
            key = QuoteKey(token_in, token_out, fee, is_exact_input, key_amount).normalized()
            if key in self.quotes:
                return self.quotes[key]

        rate = self.rates.get(fee)
        if rate is None:
            return None
        num, den = rate
        if is_exact_input:
            return amount * num // den
        if num == 0:
            return None
        # Round the required input up
        return -(-amount * den // num)

    def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> int | None:
        return self._quote(token_in, token_out, fee, amount_in, True)

    def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> int | None:
        return self._quote(token_in, token_out, fee, amount_out, False)


def _quote_single_abi(name: str, amount_field: str, result_field: str) -> dict:
    """ABI entry for one of QuoterV2's single-pool quote functions."""
    return {
        "name": name,
        "type": "function",
        "stateMutability": "nonpayable",
        "inputs": [
            {
                "name": "params",
                "type": "tuple",
                "components": [
                    {"name": "tokenIn", "type": "address"},
                    {"name": "tokenOut", "type": "address"},
                    {"name": amount_field, "type": "uint256"},
                    {"name": "fee", "type": "uint24"},
                    {"name": "sqrtPriceLimitX96", "type": "uint160"},
                ],
            }
        ],
        "outputs": [
            {"name": result_field, "type": "uint256"},
            {"name": "sqrtPriceX96After", "type": "uint160"},
            {"name": "initializedTicksCrossed", "type": "uint32"},
            {"name": "gasEstimate", "type": "uint256"},
        ],
    }


QUOTER_V2_ABI = [
    _quote_single_abi("quoteExactInputSingle", "amountIn", "amountOut"),
    _quote_single_abi("quoteExactOutputSingle", "amount", "amountIn"),
]


class Web3Quoter:
    """Quoter backed by the QuoterV2 contract over JSON-RPC.

    QuoterV2 simulates the swap inside an eth_call. A revert (no pool, no
    liquidity, price limit hit) or a transport error becomes None.
    """

    def __init__(self, web3_provider: str, quoter_address: str = QUOTER_V2_ADDRESS):
        """Connect to the quoter contract.

        Args:
            web3_provider: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
            quoter_address: QuoterV2 contract address
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3Quoter. Install with: pip install web3"
            ) from e

        self.address = normalize_address(quoter_address)
        self._to_checksum = Web3.to_checksum_address
        self.w3 = Web3(Web3.HTTPProvider(web3_provider))
        self.contract = self.w3.eth.contract(
            address=Web3.to_checksum_address(quoter_address),
            abi=QUOTER_V2_ABI,
        )

    def _quote(
        self,
        function_name: str,
        token_in: str,
        token_out: str,
        fee: int,
        amount: int,
        sqrt_price_limit_x96: int,
    ) -> int | None:
        function = getattr(self.contract.functions, function_name)
        params = (
            self._to_checksum(token_in),
            self._to_checksum(token_out),
            amount,
            fee,
            sqrt_price_limit_x96,
        )
        try:
            # (amount, sqrtPriceX96After, initializedTicksCrossed, gasEstimate)
            result = function(params).call()
        except Exception as e:
            logger.warning(
                "quoter_call_failed",
                function=function_name,
                token_in=token_in,
                token_out=token_out,
                fee=fee,
                amount=amount,
                error=str(e),
            )
            return None
        return int(result[0])

    def quote_exact_input(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_in: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> int | None:
        return self._quote(
            "quoteExactInputSingle", token_in, token_out, fee, amount_in, sqrt_price_limit_x96
        )

    def quote_exact_output(
        self,
        token_in: str,
        token_out: str,
        fee: int,
        amount_out: int,
        sqrt_price_limit_x96: int = NO_PRICE_LIMIT,
    ) -> int | None:
        return self._quote(
            "quoteExactOutputSingle", token_in, token_out, fee, amount_out, sqrt_price_limit_x96
        )


__all__ = [
    "Quoter",
    "QuoteKey",
    "MockQuoter",
    "MOCK_QUOTER_ADDRESS",
    "Web3Quoter",
    "QUOTER_V2_ABI",
]

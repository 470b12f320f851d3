"""Tests for SwapRouter calldata encoding."""

from eth_abi import decode

from feerouter.protocol.encoding import (
    EXACT_INPUT_SINGLE_SELECTOR,
    EXACT_OUTPUT_SINGLE_SELECTOR,
    SINGLE_SWAP_PARAMS_TYPE,
)
from feerouter.protocol.swap_router import ExactInputSingleParams, ExactOutputSingleParams
from tests.helpers import ALICE, DEADLINE, USDC, WETH


def decode_calldata(calldata: str) -> tuple[bytes, tuple]:
    raw = bytes.fromhex(calldata[2:])
    (params,) = decode([SINGLE_SWAP_PARAMS_TYPE], raw[4:])
    # eth_abi returns checksummed addresses
    return raw[:4], tuple(v.lower() if isinstance(v, str) else v for v in params)


class TestSwapEncoding:
    def test_exact_input_single(self):
        params = ExactInputSingleParams(
            token_in=WETH,
            token_out=USDC,
            fee=3000,
            recipient=ALICE,
            deadline=DEADLINE,
            amount_in=10**18,
            amount_out_minimum=1900 * 10**6,
        )

        selector, decoded = decode_calldata(params.encode())

        assert selector == EXACT_INPUT_SINGLE_SELECTOR
        assert decoded == (WETH, USDC, 3000, ALICE, DEADLINE, 10**18, 1900 * 10**6, 0)

    def test_exact_output_single(self):
        params = ExactOutputSingleParams(
            token_in=WETH,
            token_out=USDC,
            fee=500,
            recipient=ALICE,
            deadline=DEADLINE,
            amount_out=1000,
            amount_in_maximum=2 * 10**18,
            sqrt_price_limit_x96=2**96,
        )

        selector, decoded = decode_calldata(params.encode())

        assert selector == EXACT_OUTPUT_SINGLE_SELECTOR
        assert decoded == (WETH, USDC, 500, ALICE, DEADLINE, 1000, 2 * 10**18, 2**96)

    def test_calldata_length(self):
        """Selector plus eight static 32-byte words."""
        params = ExactInputSingleParams(WETH, USDC, 3000, ALICE, DEADLINE, 1, 0)

        assert len(params.encode()) == 2 + 2 * (4 + 8 * 32)

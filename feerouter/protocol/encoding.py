"""SwapRouter calldata encoding for single-pool UniswapV3 swaps."""

from __future__ import annotations

from feerouter.models.types import normalize_address

# exactInputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))
EXACT_INPUT_SINGLE_SELECTOR = bytes.fromhex("414bf389")

# exactOutputSingle((address,address,uint24,address,uint256,uint256,uint256,uint160))
EXACT_OUTPUT_SINGLE_SELECTOR = bytes.fromhex("db3e2198")

SINGLE_SWAP_PARAMS_TYPE = "(address,address,uint24,address,uint256,uint256,uint256,uint160)"


def _single_swap_abi(name: str, amount: str, limit: str, result: str) -> dict:
    fields = [
        ("tokenIn", "address"),
        ("tokenOut", "address"),
        ("fee", "uint24"),
        ("recipient", "address"),
        ("deadline", "uint256"),
        (amount, "uint256"),
        (limit, "uint256"),
        ("sqrtPriceLimitX96", "uint160"),
    ]
    return {
        "name": name,
        "type": "function",
        "stateMutability": "payable",
        "inputs": [
            {
                "name": "params",
                "type": "tuple",
                "components": [{"name": n, "type": t} for n, t in fields],
            }
        ],
        "outputs": [{"name": result, "type": "uint256"}],
    }


SWAP_ROUTER_ABI = [
    _single_swap_abi("exactInputSingle", "amountIn", "amountOutMinimum", "amountOut"),
    _single_swap_abi("exactOutputSingle", "amountOut", "amountInMaximum", "amountIn"),
]


def _address_bytes(address: str) -> bytes:
    return bytes.fromhex(normalize_address(address)[2:])


def encode_single_swap(
    selector: bytes,
    token_in: str,
    token_out: str,
    fee: int,
    recipient: str,
    deadline: int,
    amount: int,
    amount_limit: int,
    sqrt_price_limit_x96: int = 0,
) -> str:
    """Encode a SwapRouter single-pool swap call.

    Both swap functions share the same struct layout; only the meaning of the
    two amount fields differs (amountIn/amountOutMinimum for exact input,
    amountOut/amountInMaximum for exact output).

    Args:
        selector: EXACT_INPUT_SINGLE_SELECTOR or EXACT_OUTPUT_SINGLE_SELECTOR
        token_in: Input token address
        token_out: Output token address
        fee: Pool fee tier (e.g., 3000 for 0.3%)
        recipient: Address to receive output tokens
        deadline: Unix time after which the router rejects the swap
        amount: amountIn (exact input) or amountOut (exact output)
        amount_limit: amountOutMinimum (exact input) or amountInMaximum (exact output)
        sqrt_price_limit_x96: Price limit (0 = no limit)

    Returns:
        Calldata as 0x-prefixed hex
    """
    from eth_abi import encode  # type: ignore[attr-defined]

    encoded_params = encode(
        [SINGLE_SWAP_PARAMS_TYPE],
        [
            (
                _address_bytes(token_in),
                _address_bytes(token_out),
                fee,
                _address_bytes(recipient),
                deadline,
                amount,
                amount_limit,
                sqrt_price_limit_x96,
            )
        ],
    )
    return "0x" + (selector + encoded_params).hex()


__all__ = [
    "EXACT_INPUT_SINGLE_SELECTOR",
    "EXACT_OUTPUT_SINGLE_SELECTOR",
    "SINGLE_SWAP_PARAMS_TYPE",
    "SWAP_ROUTER_ABI",
    "encode_single_swap",
]

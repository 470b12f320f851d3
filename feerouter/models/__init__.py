"""Data models for requests, outcomes, and history records."""

from feerouter.models.history import LiquidityAction, SwapAction
from feerouter.models.requests import (
    DecreaseLiquidityRequest,
    ExactInputRequest,
    ExactOutputRequest,
    IncreaseLiquidityRequest,
    LiquidityOutcome,
    SwapOutcome,
)
from feerouter.models.types import (
    UINT256_MAX,
    ZERO_ADDRESS,
    Address,
    Uint256,
    is_uint256,
    is_valid_address,
    is_zero_address,
    normalize_address,
)

__all__ = [
    # History records
    "SwapAction",
    "LiquidityAction",
    # Requests / outcomes
    "ExactInputRequest",
    "ExactOutputRequest",
    "IncreaseLiquidityRequest",
    "DecreaseLiquidityRequest",
    "SwapOutcome",
    "LiquidityOutcome",
    # Types
    "Address",
    "Uint256",
    "UINT256_MAX",
    "ZERO_ADDRESS",
    "is_uint256",
    "is_valid_address",
    "is_zero_address",
    "normalize_address",
]

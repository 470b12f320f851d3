"""Protocols and adapters for the external UniswapV3-style DEX.

This package describes every collaborator the router consumes:
- Token transfer service (and the optional snapshot/revert substrate)
- Pool factory lookups
- Quoters (mock and Web3-based)
- SwapRouter call parameters and calldata encoding
- Position manager
"""

from .constants import (
    FEE_HIGH,
    FEE_LOW,
    FEE_MEDIUM,
    FEE_TIERS,
    POSITION_MANAGER_ADDRESS,
    QUOTER_V2_ADDRESS,
    SWAP_ROUTER_ADDRESS,
    V3_FACTORY_ADDRESS,
)
from .encoding import (
    EXACT_INPUT_SINGLE_SELECTOR,
    EXACT_OUTPUT_SINGLE_SELECTOR,
    SWAP_ROUTER_ABI,
    encode_single_swap,
)
from .factory import V3_FACTORY_ABI, PoolFactory, Web3PoolFactory
from .positions import DecreaseLiquidityParams, IncreaseLiquidityParams, PositionManager
from .quoter import QUOTER_V2_ABI, MockQuoter, Quoter, QuoteKey, Web3Quoter
from .swap_router import ExactInputSingleParams, ExactOutputSingleParams, SwapRouter
from .tokens import Substrate, TokenService

__all__ = [
    # Constants
    "FEE_LOW",
    "FEE_MEDIUM",
    "FEE_HIGH",
    "FEE_TIERS",
    "SWAP_ROUTER_ADDRESS",
    "QUOTER_V2_ADDRESS",
    "V3_FACTORY_ADDRESS",
    "POSITION_MANAGER_ADDRESS",
    # Tokens
    "TokenService",
    "Substrate",
    # Factory
    "PoolFactory",
    "Web3PoolFactory",
    "V3_FACTORY_ABI",
    # Quoter
    "Quoter",
    "QuoteKey",
    "MockQuoter",
    "Web3Quoter",
    "QUOTER_V2_ABI",
    # Router
    "SwapRouter",
    "ExactInputSingleParams",
    "ExactOutputSingleParams",
    "EXACT_INPUT_SINGLE_SELECTOR",
    "EXACT_OUTPUT_SINGLE_SELECTOR",
    "SWAP_ROUTER_ABI",
    "encode_single_swap",
    # Positions
    "PositionManager",
    "IncreaseLiquidityParams",
    "DecreaseLiquidityParams",
]

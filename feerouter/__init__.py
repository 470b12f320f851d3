"""Fee-tier router: best-tier swap routing and liquidity management for UniswapV3-style DEXes."""

from feerouter.config import DEFAULT_ROUTER_CONFIG, RouterConfig
from feerouter.models import (
    DecreaseLiquidityRequest,
    ExactInputRequest,
    ExactOutputRequest,
    IncreaseLiquidityRequest,
    LiquidityAction,
    LiquidityOutcome,
    SwapAction,
    SwapOutcome,
)
from feerouter.router import FeeTierRouter

__version__ = "0.1.0"
__all__ = [
    "FeeTierRouter",
    "RouterConfig",
    "DEFAULT_ROUTER_CONFIG",
    "ExactInputRequest",
    "ExactOutputRequest",
    "IncreaseLiquidityRequest",
    "DecreaseLiquidityRequest",
    "SwapOutcome",
    "LiquidityOutcome",
    "SwapAction",
    "LiquidityAction",
    "__version__",
]

"""Test helpers module for shared test utilities.

This module consolidates common test utilities to reduce duplication:
- constants: Token/account addresses and common amounts
- chain: In-memory token ledger and fake DEX contracts
- factories: Router deployment and request factory functions
"""

from tests.helpers.chain import (
    ChainError,
    FakePoolFactory,
    FakePositionManager,
    FakeSwapRouter,
    InMemoryChain,
    PlainTokenService,
)
from tests.helpers.constants import (
    ALICE,
    BOB,
    CAROL,
    DAI,
    DEADLINE,
    NOW,
    ONE_ETHER,
    ONE_USDC,
    ROUTER,
    USDC,
    WBTC,
    WETH,
)
from tests.helpers.factories import (
    Deployment,
    deploy,
    fund,
    make_decrease_request,
    make_exact_input_request,
    make_exact_output_request,
    make_increase_request,
)

__all__ = [
    # Constants
    "WETH",
    "USDC",
    "DAI",
    "WBTC",
    "ALICE",
    "BOB",
    "CAROL",
    "ROUTER",
    "NOW",
    "DEADLINE",
    "ONE_ETHER",
    "ONE_USDC",
    # Chain
    "ChainError",
    "InMemoryChain",
    "FakePoolFactory",
    "FakeSwapRouter",
    "FakePositionManager",
    "PlainTokenService",
    # Factories
    "Deployment",
    "deploy",
    "fund",
    "make_exact_input_request",
    "make_exact_output_request",
    "make_increase_request",
    "make_decrease_request",
]

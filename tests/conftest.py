"""Pytest configuration and fixtures."""

import pytest

from feerouter.protocol.constants import FEE_HIGH, FEE_LOW, FEE_MEDIUM
from tests.helpers import (
    ALICE,
    BOB,
    USDC,
    WETH,
    Deployment,
    deploy,
    fund,
)

# Large enough for any single test
STARTING_BALANCE = 10**30


@pytest.fixture
def deployment() -> Deployment:
    """A fresh router on an empty in-memory chain (no pools)."""
    return deploy()


@pytest.fixture
def weth_usdc(deployment: Deployment) -> Deployment:
    """Router with WETH/USDC pools at every tier.

    Tier 500 fills at 1900 USDC-units per WETH-unit, 3000 at 2000 and 10000
    at 1950, so exact-input routes through 3000 and exact-output too.
    """
    deployment.add_tier(WETH, USDC, FEE_LOW, rate=(1900, 1))
    deployment.add_tier(WETH, USDC, FEE_MEDIUM, rate=(2000, 1))
    deployment.add_tier(WETH, USDC, FEE_HIGH, rate=(1950, 1))
    return deployment


@pytest.fixture
def funded(weth_usdc: Deployment) -> Deployment:
    """weth_usdc with ALICE and BOB holding and approving WETH and USDC."""
    for account in (ALICE, BOB):
        fund(weth_usdc.chain, account, WETH, STARTING_BALANCE)
        fund(weth_usdc.chain, account, USDC, STARTING_BALANCE)
    return weth_usdc

"""Integration tests for the QuoterV2-backed quoter and factory via RPC.

These tests require an RPC connection and are skipped by default.
Run with: RPC_URL=https://eth.llamarpc.com pytest -m requires_rpc
"""

import os

import pytest

from feerouter.protocol.constants import FEE_LOW, FEE_MEDIUM
from tests.helpers import USDC, WETH

# Skip all tests in this module if RPC_URL is not set
pytestmark = [
    pytest.mark.requires_rpc,
    pytest.mark.skipif(
        not os.environ.get("RPC_URL"),
        reason="RPC_URL environment variable not set",
    ),
]

# Never deployed as a pool token
UNKNOWN_TOKEN = "0x000000000000000000000000000000000000dead"


@pytest.fixture
def rpc_url() -> str:
    url = os.environ.get("RPC_URL")
    if not url:
        pytest.skip("RPC_URL not set")
    return url


@pytest.fixture
def quoter(rpc_url: str):
    from feerouter.protocol.quoter import Web3Quoter

    return Web3Quoter(rpc_url)


@pytest.fixture
def factory(rpc_url: str):
    from feerouter.protocol.factory import Web3PoolFactory

    return Web3PoolFactory(rpc_url)


class TestWeb3Quoter:
    def test_weth_to_usdc(self, quoter):
        """1 WETH should quote to a positive USDC amount on the 0.05% tier."""
        amount_out = quoter.quote_exact_input(WETH, USDC, FEE_LOW, 10**18)

        assert amount_out is not None
        assert amount_out > 0

    def test_exact_output(self, quoter):
        amount_in = quoter.quote_exact_output(WETH, USDC, FEE_MEDIUM, 1000 * 10**6)

        assert amount_in is not None
        assert amount_in > 0

    def test_missing_pool_returns_none(self, quoter):
        assert quoter.quote_exact_input(WETH, UNKNOWN_TOKEN, FEE_MEDIUM, 10**18) is None


class TestWeb3PoolFactory:
    def test_known_pool(self, factory):
        assert factory.get_pool(WETH, USDC, FEE_MEDIUM) is not None

    def test_unknown_pool(self, factory):
        assert factory.get_pool(WETH, UNKNOWN_TOKEN, FEE_MEDIUM) is None

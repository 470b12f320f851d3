"""UniswapV3 pool factory lookups."""

from __future__ import annotations

from typing import Protocol

import structlog

from feerouter.models.types import ZERO_ADDRESS, normalize_address

from .constants import V3_FACTORY_ADDRESS

logger = structlog.get_logger()


class PoolFactory(Protocol):
    """Answers whether a pool exists for a token pair at a fee tier."""

    address: str

    def get_pool(self, token_a: str, token_b: str, fee: int) -> str | None:
        """Return the pool address, or None if no pool exists (order independent)."""
        ...


# UniswapV3Factory ABI - minimal, just getPool
V3_FACTORY_ABI = [
    {
        "name": "getPool",
        "type": "function",
        "stateMutability": "view",
        "inputs": [
            {"name": "tokenA", "type": "address"},
            {"name": "tokenB", "type": "address"},
            {"name": "fee", "type": "uint24"},
        ],
        "outputs": [{"name": "pool", "type": "address"}],
    }
]


class Web3PoolFactory:
    """Factory lookups through eth_call against the UniswapV3Factory contract."""

    def __init__(self, web3_provider: str, factory_address: str = V3_FACTORY_ADDRESS):
        """Initialize the factory client.

        Args:
            web3_provider: HTTP RPC URL (e.g., "https://eth.llamarpc.com")
            factory_address: UniswapV3Factory contract address
        """
        try:
            from web3 import Web3
        except ImportError as e:
            raise ImportError(
                "web3 package required for Web3PoolFactory. Install with: pip install web3"
            ) from e

        self.address = normalize_address(factory_address)
        self.w3 = Web3(Web3.HTTPProvider(web3_provider))
        self.factory = self.w3.eth.contract(
            address=Web3.to_checksum_address(factory_address),
            abi=V3_FACTORY_ABI,
        )

    def get_pool(self, token_a: str, token_b: str, fee: int) -> str | None:
        from web3 import Web3

        pool = self.factory.functions.getPool(
            Web3.to_checksum_address(token_a),
            Web3.to_checksum_address(token_b),
            fee,
        ).call()
        pool = normalize_address(pool)
        if pool == ZERO_ADDRESS:
            return None
        return pool


__all__ = ["PoolFactory", "V3_FACTORY_ABI", "Web3PoolFactory"]

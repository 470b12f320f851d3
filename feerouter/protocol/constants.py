"""UniswapV3 constants: fee tiers and mainnet contract addresses."""

# V3 fee tiers in Uniswap units (hundredths of a basis point)
# Fee = units / 1,000,000 (e.g., 3000 = 0.3%)
FEE_LOW = 500  # 0.05% - stable pairs
FEE_MEDIUM = 3000  # 0.30% - most pairs
FEE_HIGH = 10000  # 1.00% - exotic pairs

# Ascending; tier scans rely on this order for tie-breaking
FEE_TIERS = (FEE_LOW, FEE_MEDIUM, FEE_HIGH)

# Contract addresses (mainnet)
SWAP_ROUTER_ADDRESS = "0xE592427A0AEce92De3Edee1F18E0157C05861564"
QUOTER_V2_ADDRESS = "0x61fFE014bA17989E743c5F6cB21bF9697530B21e"
V3_FACTORY_ADDRESS = "0x1F98431c8aD98523631AE4a59f267346ea31F984"
POSITION_MANAGER_ADDRESS = "0xC36442b4a4522E871399CD717aBDD847Ab11FE88"

__all__ = [
    "FEE_LOW",
    "FEE_MEDIUM",
    "FEE_HIGH",
    "FEE_TIERS",
    "SWAP_ROUTER_ADDRESS",
    "QUOTER_V2_ADDRESS",
    "V3_FACTORY_ADDRESS",
    "POSITION_MANAGER_ADDRESS",
]

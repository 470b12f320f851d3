"""Router-wide constants.

Basis points are expressed on a denominator of 10,000 (1 bp = 0.01%).
"""

BPS_DENOMINATOR = 10_000

# Tolerance applied to callers that never configured their own
DEFAULT_SLIPPAGE_BPS = 50  # 0.5%

# Upper bound accepted by set_tolerance (100%)
MAX_SLIPPAGE_BPS = BPS_DENOMINATOR

# No sqrtPriceX96 limit
NO_PRICE_LIMIT = 0

"""Protocol constants for the quoting engine.

Centralizes the constant-product fee terms and routing/slippage parameters.
"""

# UniswapV2 fee: amount_in_with_fee = amount_in * 997 / 1000 (0.3%)
FEE_MULTIPLIER = 997
FEE_DENOMINATOR = 1000

# Maximum number of pools a route may pass through.
# Enumeration cost grows with C(n, MAX_HOPS - 1) over the distinct tokens.
MAX_HOPS = 3

# Slippage is expressed in basis points (1/10000ths)
BPS_DENOMINATOR = 10_000

# Fixed buffer added on top of price impact (10 bps = 0.1%)
SLIPPAGE_BUFFER_BPS = 10

# Maximum uint256 value
UINT256_MAX = 2**256 - 1

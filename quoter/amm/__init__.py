"""AMM (Automated Market Maker) pricing."""

from quoter.amm.base import AMM, SwapResult
from quoter.amm.errors import AMMError, InsufficientLiquidityError, ZeroReserveError
from quoter.amm.uniswap_v2 import (
    Token,
    UniswapV2,
    UniswapV2Pool,
    parse_pair_to_pool,
    uniswap_v2,
)

__all__ = [
    # Base classes
    "AMM",
    "SwapResult",
    # Errors
    "AMMError",
    "InsufficientLiquidityError",
    "ZeroReserveError",
    # UniswapV2
    "Token",
    "UniswapV2",
    "UniswapV2Pool",
    "uniswap_v2",
    "parse_pair_to_pool",
]

"""Pytest configuration and fixtures."""

import pytest

from quoter.amm.uniswap_v2 import UniswapV2Pool
from quoter.pools import PoolRegistry
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, make_pool


@pytest.fixture
def chain_pools() -> list[UniswapV2Pool]:
    """A-B and B-C pools with reserves (1000, 1000), no direct A-C pool."""
    return [
        make_pool(TOKEN_A, TOKEN_B, 1000, 1000),
        make_pool(TOKEN_B, TOKEN_C, 1000, 1000),
    ]


@pytest.fixture
def chain_registry(chain_pools: list[UniswapV2Pool]) -> PoolRegistry:
    """Registry over chain_pools."""
    return PoolRegistry(chain_pools)

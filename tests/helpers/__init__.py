"""Test helpers module for shared test utilities.

- constants: Token addresses and decimals
- factories: Pool and pair record factory functions
"""

from tests.helpers.constants import (
    TOKEN_A,
    TOKEN_B,
    TOKEN_C,
    TOKEN_D,
    TOKEN_DECIMALS,
    TOKEN_E,
    USDC,
    WBTC,
    WMON,
)
from tests.helpers.factories import make_pair_data, make_pool

__all__ = [
    # Constants
    "TOKEN_A",
    "TOKEN_B",
    "TOKEN_C",
    "TOKEN_D",
    "TOKEN_E",
    "WMON",
    "USDC",
    "WBTC",
    "TOKEN_DECIMALS",
    # Factories
    "make_pool",
    "make_pair_data",
]

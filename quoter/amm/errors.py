"""AMM error classes.

Raised by the pricing primitives when a pool cannot price a swap. Route
evaluation catches these per candidate and skips the route.
"""


class AMMError(Exception):
    """Base error for AMM pricing operations."""

    pass


class ZeroReserveError(AMMError):
    """A pool reserve is zero; the pool cannot be swapped through."""

    pass


class InsufficientLiquidityError(AMMError):
    """Requested output is not strictly below the output reserve."""

    pass

"""UniswapV2 AMM implementation.

UniswapV2 uses the constant product formula: x * y = k
With a 0.3% fee on input amounts.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import structlog

from quoter.amm.base import AMM, SwapResult
from quoter.amm.errors import InsufficientLiquidityError, ZeroReserveError
from quoter.amounts import parse_units
from quoter.constants import FEE_DENOMINATOR, FEE_MULTIPLIER
from quoter.models.subgraph import PairData
from quoter.models.types import normalize_address
from quoter.safe_int import S

logger = structlog.get_logger()


@dataclass(frozen=True)
class Token:
    """A token identified by its (case-insensitive) address."""

    address: str
    decimals: int
    symbol: str = ""

    def __post_init__(self) -> None:
        if self.decimals < 0:
            raise ValueError(f"Token decimals cannot be negative: {self.decimals}")
        object.__setattr__(self, "address", normalize_address(self.address))


@dataclass(frozen=True)
class UniswapV2Pool:
    """Represents a UniswapV2 liquidity pool.

    Reserves are integers in the smallest units of their token. The pair is
    unordered: ``token_a``/``token_b`` carry no canonical ordering.
    """

    token_a: Token
    token_b: Token
    reserve_a: int
    reserve_b: int
    address: str = field(default="", compare=False)

    def __post_init__(self) -> None:
        if self.token_a.address == self.token_b.address:
            raise ValueError(f"Pool tokens must differ: {self.token_a.address}")
        if self.reserve_a < 0 or self.reserve_b < 0:
            raise ValueError(
                f"Reserves must be non-negative: ({self.reserve_a}, {self.reserve_b})"
            )

    @property
    def tokens(self) -> tuple[str, str]:
        """Normalized addresses of both tokens."""
        return self.token_a.address, self.token_b.address

    def get_reserves(self, token_in: str) -> tuple[int, int]:
        """Get reserves ordered as (reserve_in, reserve_out)."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token_a.address:
            return self.reserve_a, self.reserve_b
        elif token_in_norm == self.token_b.address:
            return self.reserve_b, self.reserve_a
        else:
            raise ValueError(f"Token {token_in} not in pool")

    def get_token_out(self, token_in: str) -> str:
        """Get the output token for a given input token."""
        token_in_norm = normalize_address(token_in)
        if token_in_norm == self.token_a.address:
            return self.token_b.address
        elif token_in_norm == self.token_b.address:
            return self.token_a.address
        else:
            raise ValueError(f"Token {token_in} not in pool")


class UniswapV2(AMM):
    """UniswapV2 AMM math.

    Formula: amount_out = (amount_in * 997 * reserve_out) / (reserve_in * 1000 + amount_in * 997)

    The 997/1000 factor accounts for the 0.3% fee.
    """

    def __init__(
        self,
        fee_multiplier: int = FEE_MULTIPLIER,
        fee_denominator: int = FEE_DENOMINATOR,
    ) -> None:
        self.fee_multiplier = fee_multiplier
        self.fee_denominator = fee_denominator

    def get_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate output amount using constant product formula.

        Formula: amount_out = (in * fee * res_out) / (res_in * denom + in * fee)

        Args:
            amount_in: Input token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Output token amount (floored)

        Raises:
            ZeroReserveError: If either reserve is zero
        """
        if amount_in <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            raise ZeroReserveError(f"Cannot price against reserves ({reserve_in}, {reserve_out})")

        amount_in_with_fee = S(amount_in) * S(self.fee_multiplier)
        numerator = amount_in_with_fee * S(reserve_out)
        denominator = S(reserve_in) * S(self.fee_denominator) + amount_in_with_fee

        return (numerator // denominator).value

    def get_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Calculate required input for desired output.

        Formula: amount_in = (res_in * out * denom) / ((res_out - out) * fee) + 1

        The +1 compensates for floor truncation so the returned input always
        buys at least ``amount_out``.

        Args:
            amount_out: Desired output token amount
            reserve_in: Reserve of input token in pool
            reserve_out: Reserve of output token in pool

        Returns:
            Required input token amount

        Raises:
            ZeroReserveError: If either reserve is zero
            InsufficientLiquidityError: If amount_out >= reserve_out
        """
        if amount_out <= 0:
            return 0
        if reserve_in <= 0 or reserve_out <= 0:
            raise ZeroReserveError(f"Cannot price against reserves ({reserve_in}, {reserve_out})")
        if amount_out >= reserve_out:
            raise InsufficientLiquidityError(
                f"Requested output {amount_out} exceeds available reserve {reserve_out}"
            )

        numerator = S(reserve_in) * S(amount_out) * S(self.fee_denominator)
        denominator = (S(reserve_out) - S(amount_out)) * S(self.fee_multiplier)

        return (numerator // denominator + S(1)).value

    def get_spot_amount_out(self, amount_in: int, reserve_in: int, reserve_out: int) -> int:
        """Output at the marginal price, ignoring fee and reserve depletion.

        Returns 0 when reserve_in is zero.
        """
        if amount_in <= 0 or reserve_in <= 0:
            return 0
        return (S(amount_in) * S(reserve_out) // S(reserve_in)).value

    def get_spot_amount_in(self, amount_out: int, reserve_in: int, reserve_out: int) -> int:
        """Input at the marginal price, ignoring fee and reserve depletion.

        Returns 0 when reserve_out is zero.
        """
        if amount_out <= 0 or reserve_out <= 0:
            return 0
        return (S(amount_out) * S(reserve_in) // S(reserve_out)).value

    def simulate_swap(self, pool: UniswapV2Pool, token_in: str, amount_in: int) -> SwapResult:
        """Simulate a swap through a pool (exact input).

        Args:
            pool: The liquidity pool
            token_in: Input token address
            amount_in: Amount to swap

        Returns:
            SwapResult with amounts and pool info
        """
        reserve_in, reserve_out = pool.get_reserves(token_in)
        amount_out = self.get_amount_out(amount_in, reserve_in, reserve_out)

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            token_in=normalize_address(token_in),
            token_out=pool.get_token_out(token_in),
            pool_address=pool.address,
        )

    def simulate_swap_exact_output(
        self,
        pool: UniswapV2Pool,
        token_in: str,
        amount_out: int,
    ) -> SwapResult:
        """Simulate a swap to get an exact output amount.

        Args:
            pool: The liquidity pool
            token_in: Input token address
            amount_out: Desired output amount

        Returns:
            SwapResult with the required input and the requested output
        """
        reserve_in, reserve_out = pool.get_reserves(token_in)
        amount_in = self.get_amount_in(amount_out, reserve_in, reserve_out)

        return SwapResult(
            amount_in=amount_in,
            amount_out=amount_out,
            token_in=normalize_address(token_in),
            token_out=pool.get_token_out(token_in),
            pool_address=pool.address,
        )


# Singleton instance
uniswap_v2 = UniswapV2()


def parse_pair_to_pool(pair: PairData) -> UniswapV2Pool | None:
    """Convert a subgraph pair record to a UniswapV2Pool.

    Reserves are reported in human units; each one is scaled by its own
    token's declared decimals so that reserves share the unit convention
    used when parsing user amounts.

    Args:
        pair: Pair record from the subgraph

    Returns:
        UniswapV2Pool, or None if the record is malformed
        (non-hex token id, unparseable or out-of-range reserve)
    """
    try:
        token_a = Token(
            normalize_address(pair.token0.id, validate=True),
            pair.token0.decimals,
            pair.token0.symbol,
        )
        token_b = Token(
            normalize_address(pair.token1.id, validate=True),
            pair.token1.decimals,
            pair.token1.symbol,
        )
        reserve_a = parse_units(pair.reserve0, token_a.decimals, strict=False)
        reserve_b = parse_units(pair.reserve1, token_b.decimals, strict=False)
        return UniswapV2Pool(
            token_a=token_a,
            token_b=token_b,
            reserve_a=reserve_a,
            reserve_b=reserve_b,
            address=normalize_address(pair.id),
        )
    except ValueError as err:
        logger.warning("pair_parse_failed", pair_id=pair.id, error=str(err))
        return None


__all__ = [
    "Token",
    "UniswapV2Pool",
    "UniswapV2",
    "uniswap_v2",
    "parse_pair_to_pool",
]

"""Type definitions for routing module."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum

from quoter.amm.uniswap_v2 import UniswapV2Pool
from quoter.constants import BPS_DENOMINATOR


class TradeDirection(str, Enum):
    """Which side of the trade the user fixes."""

    EXACT_INPUT = "exactInput"  # Amount sold is fixed
    EXACT_OUTPUT = "exactOutput"  # Amount bought is fixed


@dataclass
class HopResult:
    """Result of a single hop in a multi-hop route."""

    pool: UniswapV2Pool
    input_token: str
    output_token: str
    amount_in: int
    amount_out: int


@dataclass
class RouteSimulation:
    """A candidate route evaluated hop by hop against real reserves.

    ``amount`` is the final output for exact-input trades and the required
    input for exact-output trades.
    """

    route: list[str]
    direction: TradeDirection
    amount_specified: int
    amount: int
    hops: list[HopResult] = field(default_factory=list)


@dataclass
class RiskAssessment:
    """Price impact and slippage derived for a simulated route."""

    ideal_amount: int
    price_impact: Decimal
    suggested_slippage_bps: int
    guaranteed_amount: int

    @property
    def suggested_slippage(self) -> Decimal:
        """Suggested slippage as a fraction (bps / 10000)."""
        return Decimal(self.suggested_slippage_bps) / BPS_DENOMINATOR


@dataclass
class QuoteResult:
    """Result of quoting a trade.

    An empty route means no quote: either the amount was zero or no route
    of at most ``max_hops`` pools connects the tokens. Callers must check
    ``found`` before using the amounts.
    """

    direction: TradeDirection
    amount_specified: int
    route: list[str] = field(default_factory=list)
    # Simulated output (exact input) or required input (exact output)
    amount: int = 0
    # Slippage-adjusted minimum out (exact input) or maximum in (exact output)
    guaranteed_amount: int = 0
    price_impact: Decimal = Decimal(0)
    suggested_slippage_bps: int = 0
    hops: list[HopResult] = field(default_factory=list)

    @property
    def found(self) -> bool:
        """True if a route was found."""
        return len(self.route) > 0

    @property
    def is_multihop(self) -> bool:
        """Check if this is a multi-hop route."""
        return len(self.route) > 2

    @property
    def suggested_slippage(self) -> Decimal:
        """Suggested slippage as a fraction (bps / 10000)."""
        return Decimal(self.suggested_slippage_bps) / BPS_DENOMINATOR

    @classmethod
    def empty(cls, direction: TradeDirection, amount_specified: int) -> QuoteResult:
        """Create a result signalling that no quote is available."""
        return cls(direction=direction, amount_specified=amount_specified)


__all__ = [
    "HopResult",
    "QuoteResult",
    "RiskAssessment",
    "RouteSimulation",
    "TradeDirection",
]

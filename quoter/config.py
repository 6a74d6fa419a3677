"""Quote configuration."""

from dataclasses import dataclass

from quoter.constants import FEE_DENOMINATOR, FEE_MULTIPLIER, MAX_HOPS, SLIPPAGE_BUFFER_BPS


@dataclass(frozen=True)
class QuoteConfig:
    """Centralized configuration for route search and risk estimation.

    Holding these in one frozen dataclass makes it easy to test the engine
    with different parameters while keeping every caller consistent.

    Attributes:
        max_hops: Maximum pools per route (default: 3)
        slippage_buffer_bps: Fixed buffer added to price impact, in basis
            points (default: 10 = 0.1%)
        fee_multiplier: Numerator of the post-fee input factor (default: 997)
        fee_denominator: Denominator of the post-fee input factor (default: 1000)
    """

    max_hops: int = MAX_HOPS
    slippage_buffer_bps: int = SLIPPAGE_BUFFER_BPS
    fee_multiplier: int = FEE_MULTIPLIER
    fee_denominator: int = FEE_DENOMINATOR

    def __post_init__(self) -> None:
        if self.max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {self.max_hops}")
        if self.slippage_buffer_bps < 0:
            raise ValueError(f"slippage_buffer_bps cannot be negative: {self.slippage_buffer_bps}")
        if not 0 < self.fee_multiplier <= self.fee_denominator:
            raise ValueError(
                f"fee_multiplier must be in (0, {self.fee_denominator}], got {self.fee_multiplier}"
            )


# Default configuration instance
DEFAULT_QUOTE_CONFIG = QuoteConfig()

"""Price impact and slippage estimation for a simulated route.

The idealized amount walks the route at each pool's marginal price
(reserve_out / reserve_in), without fee and without reserve depletion.
Price impact compares it against the realistic simulation:

    exact input:  impact = (ideal - simulated_output) / ideal
    exact output: impact = (simulated_input - ideal) / ideal

Suggested slippage is the impact plus a fixed buffer, floored to basis
points. Everything that touches token amounts stays in integers; the
Decimal impact is for reporting only.
"""

from __future__ import annotations

import decimal
from decimal import Decimal

from quoter.amm.uniswap_v2 import UniswapV2, uniswap_v2
from quoter.amounts import DECIMAL_HIGH_PREC_CONTEXT
from quoter.constants import BPS_DENOMINATOR, SLIPPAGE_BUFFER_BPS
from quoter.pools.registry import PoolRegistry
from quoter.routing.types import RiskAssessment, RouteSimulation, TradeDirection
from quoter.safe_int import S


class RiskEstimator:
    """Derives price impact, suggested slippage and guaranteed amounts."""

    def __init__(
        self,
        registry: PoolRegistry,
        amm: UniswapV2 = uniswap_v2,
        slippage_buffer_bps: int = SLIPPAGE_BUFFER_BPS,
    ) -> None:
        self._registry = registry
        self._amm = amm
        self.slippage_buffer_bps = slippage_buffer_bps

    def ideal_amount(self, route: list[str], amount: int, direction: TradeDirection) -> int:
        """Amount obtained (or required) at marginal prices along the route.

        Hops whose pool is missing from the registry are skipped.
        """
        ideal = amount
        if not route:
            return ideal

        if direction == TradeDirection.EXACT_INPUT:
            for i in range(len(route) - 1):
                pool = self._registry.find_pool(route[i], route[i + 1])
                if pool is None:
                    continue
                reserve_in, reserve_out = pool.get_reserves(route[i])
                ideal = self._amm.get_spot_amount_out(ideal, reserve_in, reserve_out)
        else:
            for i in range(len(route) - 1, 0, -1):
                pool = self._registry.find_pool(route[i - 1], route[i])
                if pool is None:
                    continue
                reserve_in, reserve_out = pool.get_reserves(route[i - 1])
                ideal = self._amm.get_spot_amount_in(ideal, reserve_in, reserve_out)

        return ideal

    @staticmethod
    def _impact_terms(ideal: int, simulated: int, direction: TradeDirection) -> tuple[int, int]:
        """Price impact as an exact (numerator, denominator) pair."""
        if ideal <= 0:
            return 0, 1
        if direction == TradeDirection.EXACT_INPUT:
            return ideal - simulated, ideal
        return simulated - ideal, ideal

    def price_impact(self, ideal: int, simulated: int, direction: TradeDirection) -> Decimal:
        """Fractional price impact; zero when the ideal amount is zero."""
        numerator, denominator = self._impact_terms(ideal, simulated, direction)
        with decimal.localcontext(DECIMAL_HIGH_PREC_CONTEXT):
            return Decimal(numerator) / Decimal(denominator)

    def suggested_slippage_bps(self, ideal: int, simulated: int, direction: TradeDirection) -> int:
        """floor((impact + buffer) * 10000), never negative."""
        numerator, denominator = self._impact_terms(ideal, simulated, direction)
        impact_bps = (numerator * BPS_DENOMINATOR) // denominator
        return max(impact_bps + self.slippage_buffer_bps, 0)

    @staticmethod
    def apply_slippage(amount: int, slippage_bps: int, direction: TradeDirection) -> int:
        """Apply slippage to a simulated amount in integer arithmetic.

        Exact input lowers the acceptable output; exact output raises the
        maximum input. Both results are floored.
        """
        if direction == TradeDirection.EXACT_INPUT:
            factor = BPS_DENOMINATOR - min(slippage_bps, BPS_DENOMINATOR)
        else:
            factor = BPS_DENOMINATOR + slippage_bps
        return (S(amount) * S(factor) // S(BPS_DENOMINATOR)).value

    def assess(self, simulation: RouteSimulation) -> RiskAssessment:
        """Compute the full risk picture for a winning route."""
        if not simulation.route:
            return RiskAssessment(
                ideal_amount=0,
                price_impact=Decimal(0),
                suggested_slippage_bps=0,
                guaranteed_amount=0,
            )

        direction = simulation.direction
        ideal = self.ideal_amount(simulation.route, simulation.amount_specified, direction)
        slippage_bps = self.suggested_slippage_bps(ideal, simulation.amount, direction)

        return RiskAssessment(
            ideal_amount=ideal,
            price_impact=self.price_impact(ideal, simulation.amount, direction),
            suggested_slippage_bps=slippage_bps,
            guaranteed_amount=self.apply_slippage(simulation.amount, slippage_bps, direction),
        )


__all__ = ["RiskEstimator"]

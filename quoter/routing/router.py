"""Best-route selection and the quote entry point.

compute_quote is a pure function of its inputs: it reads an immutable pool
snapshot, performs no I/O and keeps no state between calls, so quotes can
be computed concurrently against a shared snapshot.
"""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from quoter.amm.errors import AMMError
from quoter.amm.uniswap_v2 import UniswapV2, UniswapV2Pool, uniswap_v2
from quoter.config import DEFAULT_QUOTE_CONFIG, QuoteConfig
from quoter.pools.registry import PoolRegistry
from quoter.routing.pathfinding import RouteEnumerator
from quoter.routing.risk import RiskEstimator
from quoter.routing.types import HopResult, QuoteResult, RouteSimulation, TradeDirection

logger = structlog.get_logger()


class BestRouteSelector:
    """Simulates candidate routes and keeps the best one.

    Exact input keeps the route with the largest output; exact output keeps
    the route with the smallest required input. Ties go to the route seen
    first. A route whose pools are missing, empty or too shallow for the
    requested output is skipped.
    """

    def __init__(self, registry: PoolRegistry, amm: UniswapV2 = uniswap_v2) -> None:
        self._registry = registry
        self._amm = amm

    def simulate_exact_input(self, route: list[str], amount_in: int) -> RouteSimulation | None:
        """Walk the route forward, selling amount_in at the first hop.

        Returns:
            RouteSimulation with the final output, or None if the route
            cannot be priced
        """
        hops: list[HopResult] = []
        current_amount = amount_in

        for i in range(len(route) - 1):
            pool = self._registry.find_pool(route[i], route[i + 1])
            if pool is None:
                logger.debug("route_skipped", route=route, reason="missing_pool", hop=i)
                return None
            try:
                result = self._amm.simulate_swap(pool, route[i], current_amount)
            except AMMError as err:
                logger.debug("route_skipped", route=route, reason=str(err), hop=i)
                return None

            hops.append(
                HopResult(
                    pool=pool,
                    input_token=result.token_in,
                    output_token=result.token_out,
                    amount_in=result.amount_in,
                    amount_out=result.amount_out,
                )
            )
            current_amount = result.amount_out

        return RouteSimulation(
            route=route,
            direction=TradeDirection.EXACT_INPUT,
            amount_specified=amount_in,
            amount=current_amount,
            hops=hops,
        )

    def simulate_exact_output(self, route: list[str], amount_out: int) -> RouteSimulation | None:
        """Walk the route backward from the desired final output.

        Returns:
            RouteSimulation with the required input, or None if the route
            cannot be priced
        """
        hops: list[HopResult] = []
        current_amount = amount_out

        for i in range(len(route) - 1, 0, -1):
            pool = self._registry.find_pool(route[i - 1], route[i])
            if pool is None:
                logger.debug("route_skipped", route=route, reason="missing_pool", hop=i - 1)
                return None
            try:
                result = self._amm.simulate_swap_exact_output(pool, route[i - 1], current_amount)
            except AMMError as err:
                logger.debug("route_skipped", route=route, reason=str(err), hop=i - 1)
                return None

            hops.append(
                HopResult(
                    pool=pool,
                    input_token=result.token_in,
                    output_token=result.token_out,
                    amount_in=result.amount_in,
                    amount_out=result.amount_out,
                )
            )
            current_amount = result.amount_in

        # Hops were collected last-to-first
        hops.reverse()
        return RouteSimulation(
            route=route,
            direction=TradeDirection.EXACT_OUTPUT,
            amount_specified=amount_out,
            amount=current_amount,
            hops=hops,
        )

    def select(
        self,
        routes: Iterable[list[str]],
        amount: int,
        direction: TradeDirection,
    ) -> RouteSimulation | None:
        """Evaluate every candidate and return the best simulation.

        Args:
            routes: Candidate routes
            amount: Amount sold (exact input) or bought (exact output)
            direction: Trade direction

        Returns:
            The winning RouteSimulation, or None if no route is valid
        """
        best: RouteSimulation | None = None
        evaluated = 0

        for route in routes:
            evaluated += 1
            if direction == TradeDirection.EXACT_INPUT:
                simulation = self.simulate_exact_input(route, amount)
                # A zero output never beats "no route"
                best_output = best.amount if best is not None else 0
                if simulation is not None and simulation.amount > best_output:
                    best = simulation
            else:
                simulation = self.simulate_exact_output(route, amount)
                if simulation is not None and (best is None or simulation.amount < best.amount):
                    best = simulation

        logger.debug(
            "routes_evaluated",
            candidates=evaluated,
            direction=direction.value,
            best_route=best.route if best is not None else None,
        )
        return best


def compute_quote(
    amount: int,
    token_in: str,
    token_out: str,
    pools: PoolRegistry | Iterable[UniswapV2Pool],
    direction: TradeDirection,
    config: QuoteConfig = DEFAULT_QUOTE_CONFIG,
) -> QuoteResult:
    """Quote a swap of token_in for token_out across a pool snapshot.

    Args:
        amount: Amount sold (exact input) or bought (exact output), in
            smallest units
        token_in: Token being sold
        token_out: Token being bought
        pools: Pool snapshot, either a PoolRegistry or pools in snapshot order
        direction: Trade direction
        config: Route search and slippage parameters

    Returns:
        QuoteResult. An empty result (``found`` is False) is returned when
        amount is zero or no route exists; this is not an error.

    Raises:
        ValueError: If amount is negative
    """
    if amount < 0:
        raise ValueError(f"Amount cannot be negative: {amount}")
    if amount == 0:
        logger.debug("zero_amount_quote", token_in=token_in, token_out=token_out)
        return QuoteResult.empty(direction, amount)

    registry = pools if isinstance(pools, PoolRegistry) else PoolRegistry(pools)
    amm = UniswapV2(config.fee_multiplier, config.fee_denominator)

    enumerator = RouteEnumerator(registry, max_hops=config.max_hops)
    selector = BestRouteSelector(registry, amm)
    best = selector.select(enumerator.enumerate_routes(token_in, token_out), amount, direction)

    if best is None:
        logger.info(
            "no_route_found",
            token_in=token_in,
            token_out=token_out,
            direction=direction.value,
            amount=str(amount),
        )
        return QuoteResult.empty(direction, amount)

    risk = RiskEstimator(registry, amm, config.slippage_buffer_bps).assess(best)

    logger.info(
        "best_route_selected",
        route=best.route,
        direction=direction.value,
        amount_specified=str(amount),
        amount=str(best.amount),
        price_impact=str(risk.price_impact),
        slippage_bps=risk.suggested_slippage_bps,
    )

    return QuoteResult(
        direction=direction,
        amount_specified=amount,
        route=best.route,
        amount=best.amount,
        guaranteed_amount=risk.guaranteed_amount,
        price_impact=risk.price_impact,
        suggested_slippage_bps=risk.suggested_slippage_bps,
        hops=best.hops,
    )


__all__ = ["BestRouteSelector", "compute_quote"]

"""Tests for price impact and slippage estimation."""

from decimal import Decimal

import pytest

from quoter.pools import PoolRegistry
from quoter.routing.risk import RiskEstimator
from quoter.routing.router import BestRouteSelector
from quoter.routing.types import RouteSimulation, TradeDirection
from tests.helpers import TOKEN_A, TOKEN_B, TOKEN_C, make_pool

CHAIN_ROUTE = [TOKEN_A, TOKEN_B, TOKEN_C]


class TestIdealAmount:
    def test_exact_input_uses_marginal_prices(self):
        registry = PoolRegistry(
            [make_pool(TOKEN_A, TOKEN_B, 1000, 2000), make_pool(TOKEN_B, TOKEN_C, 4000, 1000)]
        )
        estimator = RiskEstimator(registry)
        # 100 A -> 200 B -> 50 C at spot prices
        assert estimator.ideal_amount(CHAIN_ROUTE, 100, TradeDirection.EXACT_INPUT) == 50

    def test_exact_output_walks_backward(self):
        registry = PoolRegistry(
            [make_pool(TOKEN_A, TOKEN_B, 1000, 2000), make_pool(TOKEN_B, TOKEN_C, 4000, 1000)]
        )
        estimator = RiskEstimator(registry)
        # 50 C <- 200 B <- 100 A at spot prices
        assert estimator.ideal_amount(CHAIN_ROUTE, 50, TradeDirection.EXACT_OUTPUT) == 100

    def test_missing_pool_hop_is_skipped(self, chain_registry):
        estimator = RiskEstimator(chain_registry)
        assert estimator.ideal_amount([TOKEN_A, TOKEN_C], 100, TradeDirection.EXACT_INPUT) == 100


class TestAssess:
    def test_exact_input_chain(self, chain_registry):
        simulation = BestRouteSelector(chain_registry).simulate_exact_input(CHAIN_ROUTE, 100)
        risk = RiskEstimator(chain_registry).assess(simulation)

        assert risk.ideal_amount == 100
        assert risk.price_impact == Decimal("0.18")
        assert risk.suggested_slippage_bps == 1810
        # floor(82 * 8190 / 10000)
        assert risk.guaranteed_amount == 67
        assert risk.suggested_slippage == Decimal("0.181")

    def test_exact_output_chain(self, chain_registry):
        simulation = BestRouteSelector(chain_registry).simulate_exact_output(CHAIN_ROUTE, 82)
        risk = RiskEstimator(chain_registry).assess(simulation)

        assert risk.ideal_amount == 82
        assert abs(risk.price_impact - Decimal("0.21951")) < Decimal("0.00001")
        assert risk.suggested_slippage_bps == 2205
        # floor(100 * 12205 / 10000)
        assert risk.guaranteed_amount == 122

    def test_guaranteed_bounds(self, chain_registry):
        selector = BestRouteSelector(chain_registry)
        estimator = RiskEstimator(chain_registry)

        forward = selector.simulate_exact_input(CHAIN_ROUTE, 100)
        assert estimator.assess(forward).guaranteed_amount <= forward.amount

        backward = selector.simulate_exact_output(CHAIN_ROUTE, 82)
        assert estimator.assess(backward).guaranteed_amount >= backward.amount

    def test_deep_pool_impact_approaches_fee(self):
        """With negligible depletion only the 0.3% fee remains."""
        registry = PoolRegistry([make_pool(TOKEN_A, TOKEN_B, 10**24, 10**24)])
        simulation = BestRouteSelector(registry).simulate_exact_input([TOKEN_A, TOKEN_B], 10**18)
        risk = RiskEstimator(registry).assess(simulation)

        assert abs(risk.price_impact - Decimal("0.003")) < Decimal("0.00001")
        assert risk.suggested_slippage_bps == 40

    @pytest.mark.parametrize("amount_in", [1_000, 10**6, 10**9, 3 * 10**11])
    def test_slippage_covers_impact_plus_buffer(self, amount_in):
        registry = PoolRegistry([make_pool(TOKEN_A, TOKEN_B, 10**12, 5 * 10**12)])
        simulation = BestRouteSelector(registry).simulate_exact_input([TOKEN_A, TOKEN_B], amount_in)
        risk = RiskEstimator(registry).assess(simulation)

        assert risk.suggested_slippage >= risk.price_impact + Decimal("0.0009")
        assert risk.suggested_slippage <= risk.price_impact + Decimal("0.001")

    def test_empty_route_is_all_zero(self, chain_registry):
        simulation = RouteSimulation(
            route=[], direction=TradeDirection.EXACT_INPUT, amount_specified=100, amount=0
        )
        risk = RiskEstimator(chain_registry).assess(simulation)

        assert risk.price_impact == 0
        assert risk.suggested_slippage_bps == 0
        assert risk.guaranteed_amount == 0

    def test_custom_buffer(self, chain_registry):
        simulation = BestRouteSelector(chain_registry).simulate_exact_input(CHAIN_ROUTE, 100)
        risk = RiskEstimator(chain_registry, slippage_buffer_bps=0).assess(simulation)
        assert risk.suggested_slippage_bps == 1800


class TestSlippageMath:
    def test_zero_ideal_reports_only_buffer(self, chain_registry):
        estimator = RiskEstimator(chain_registry)
        for direction in TradeDirection:
            assert estimator.price_impact(0, 5, direction) == 0
            assert estimator.suggested_slippage_bps(0, 5, direction) == 10

    def test_slippage_never_negative(self, chain_registry):
        estimator = RiskEstimator(chain_registry, slippage_buffer_bps=0)
        assert estimator.suggested_slippage_bps(100, 150, TradeDirection.EXACT_INPUT) == 0

    def test_apply_slippage_exact_input(self):
        assert RiskEstimator.apply_slippage(10_000, 50, TradeDirection.EXACT_INPUT) == 9_950
        assert RiskEstimator.apply_slippage(999, 1, TradeDirection.EXACT_INPUT) == 998

    def test_apply_slippage_exact_output(self):
        assert RiskEstimator.apply_slippage(10_000, 50, TradeDirection.EXACT_OUTPUT) == 10_050
        # Floored, not rounded up
        assert RiskEstimator.apply_slippage(999, 1, TradeDirection.EXACT_OUTPUT) == 999

    def test_exact_input_slippage_is_capped(self):
        assert RiskEstimator.apply_slippage(500, 20_000, TradeDirection.EXACT_INPUT) == 0
        assert RiskEstimator.apply_slippage(500, 20_000, TradeDirection.EXACT_OUTPUT) == 1_500

    def test_huge_amounts_stay_exact(self):
        amount = 2**255 + 12345
        expected = amount * 9_990 // 10_000
        assert RiskEstimator.apply_slippage(amount, 10, TradeDirection.EXACT_INPUT) == expected

"""Route search and quoting.

Module structure:
- pathfinding.py: RouteEnumerator for candidate route generation
- router.py: BestRouteSelector and the compute_quote entry point
- risk.py: RiskEstimator for price impact and slippage
- types.py: TradeDirection, HopResult, RouteSimulation, QuoteResult
"""

from quoter.routing.pathfinding import RouteEnumerator
from quoter.routing.risk import RiskEstimator
from quoter.routing.router import BestRouteSelector, compute_quote
from quoter.routing.types import (
    HopResult,
    QuoteResult,
    RiskAssessment,
    RouteSimulation,
    TradeDirection,
)

__all__ = [
    "BestRouteSelector",
    "HopResult",
    "QuoteResult",
    "RiskAssessment",
    "RiskEstimator",
    "RouteEnumerator",
    "RouteSimulation",
    "TradeDirection",
    "compute_quote",
]

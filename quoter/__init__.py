"""AMM quoting engine - best-route search and price impact for V2-style pools."""

from quoter.routing.router import compute_quote
from quoter.routing.types import QuoteResult, TradeDirection

__version__ = "0.1.0"
__all__ = ["compute_quote", "QuoteResult", "TradeDirection", "__version__"]

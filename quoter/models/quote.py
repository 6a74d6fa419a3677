"""Pydantic models for the quote endpoint response."""

from pydantic import BaseModel, Field

from quoter.models.types import Address


class QuoteResponse(BaseModel):
    """Response body of ``GET /quote``.

    Amounts are human-readable decimal strings in the units of the token
    they refer to. ``quote`` is the simulated output for exact-input
    requests and the simulated required input for exact-output requests.
    """

    success: bool
    error: str | None = None
    quote: str | None = Field(
        default=None,
        description="Simulated amount received (fromAmount) or required (toAmount).",
    )
    guaranteed_amount: str | None = Field(
        default=None,
        alias="guaranteedAmount",
        description="Minimum received (fromAmount) or maximum sold (toAmount) after slippage.",
    )
    route: list[Address] | None = Field(
        default=None,
        description="Optimal trading path (token addresses) for the requested trade.",
    )
    price_impact: str | None = Field(default=None, alias="priceImpact")
    suggested_slippage: str | None = Field(default=None, alias="suggestedSlippage")
    direction: str | None = None

    model_config = {"populate_by_name": True}

    @classmethod
    def failure(cls, error: str) -> "QuoteResponse":
        """Create an unsuccessful response carrying an error message."""
        return cls(success=False, error=error)

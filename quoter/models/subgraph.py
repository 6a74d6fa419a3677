"""Pydantic models for pair records returned by the V2 pairs subgraph.

Numeric fields arrive as decimal strings, e.g. ``"1234.56789"`` for a
reserve and ``"18"`` for token decimals.
"""

from pydantic import BaseModel, Field


class PairToken(BaseModel):
    """Token descriptor embedded in a pair record."""

    id: str = Field(description="Token address")
    name: str = ""
    symbol: str = ""
    decimals: int = Field(ge=0, le=255, description="Token decimal precision")


class PairData(BaseModel):
    """A single constant-product pair as indexed by the subgraph."""

    id: str = Field(description="Pair contract address")
    reserve0: str = Field(description="Reserve of token0 in human units")
    reserve1: str = Field(description="Reserve of token1 in human units")
    token0: PairToken
    token1: PairToken
    total_supply: str | None = Field(default=None, alias="totalSupply")
    volume_usd: str | None = Field(default=None, alias="volumeUSD")
    reserve_usd: str | None = Field(default=None, alias="reserveUSD")

    model_config = {"populate_by_name": True}


class PairsResponse(BaseModel):
    """The ``data`` payload of the pairs query."""

    pairs: list[PairData] = Field(default_factory=list)

"""Pydantic models and shared types for the quoting service."""

from quoter.models.quote import QuoteResponse
from quoter.models.subgraph import PairData, PairToken
from quoter.models.types import Address, is_valid_address, normalize_address

__all__ = [
    "Address",
    "PairData",
    "PairToken",
    "QuoteResponse",
    "is_valid_address",
    "normalize_address",
]

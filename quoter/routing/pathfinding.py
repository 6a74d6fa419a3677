"""Route enumeration over a pool snapshot.

Candidate routes are generated in a fixed order for a given snapshot:
direct route first, then every one-intermediate route, then every
two-intermediate route, and so on up to ``max_hops`` pools. Within a
level, intermediates are taken as unordered subsets of the other tokens
(in order of first appearance in the snapshot), each followed by all of
its orderings. For three hops this means ``[in, x, y, out]`` is
immediately followed by ``[in, y, x, out]``.

The number of candidates checked at level k is C(n, k) * k! over the n
other tokens, so the hop cap is what keeps enumeration bounded.
"""

from __future__ import annotations

from collections.abc import Iterator
from itertools import combinations, permutations

from quoter.constants import MAX_HOPS
from quoter.models.types import normalize_address
from quoter.pools.registry import PoolRegistry


class RouteEnumerator:
    """Generates candidate routes between two tokens.

    Usage:
        enumerator = RouteEnumerator(registry)
        for route in enumerator.enumerate_routes(token_in, token_out):
            ...
    """

    def __init__(self, registry: PoolRegistry, max_hops: int = MAX_HOPS) -> None:
        """Initialize the enumerator.

        Args:
            registry: Pool snapshot to route through
            max_hops: Maximum number of pools per route (default 3)
        """
        if max_hops < 1:
            raise ValueError(f"max_hops must be at least 1, got {max_hops}")
        self._registry = registry
        self.max_hops = max_hops

    def _is_connected(self, route: list[str]) -> bool:
        """Check that every consecutive token pair has a pool."""
        return all(
            self._registry.pool_exists(route[i], route[i + 1]) for i in range(len(route) - 1)
        )

    def enumerate_routes(self, token_in: str, token_out: str) -> Iterator[list[str]]:
        """Lazily yield every route of 1..max_hops pools from token_in to token_out.

        Routes never repeat a token. Addresses in yielded routes are
        normalized to lowercase.

        Args:
            token_in: Token being sold
            token_out: Token being bought

        Yields:
            Routes as lists of token addresses, first element token_in and
            last element token_out
        """
        token_in_norm = normalize_address(token_in)
        token_out_norm = normalize_address(token_out)
        if token_in_norm == token_out_norm:
            return

        others = [
            token for token in self._registry.tokens if token not in (token_in_norm, token_out_norm)
        ]

        for intermediate_count in range(self.max_hops):
            for group in combinations(others, intermediate_count):
                for ordering in permutations(group):
                    route = [token_in_norm, *ordering, token_out_norm]
                    if self._is_connected(route):
                        yield route

    def find_all_routes(self, token_in: str, token_out: str) -> list[list[str]]:
        """Materialize enumerate_routes into a list."""
        return list(self.enumerate_routes(token_in, token_out))


__all__ = ["RouteEnumerator"]

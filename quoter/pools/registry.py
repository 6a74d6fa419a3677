"""Pool registry: an immutable snapshot of constant-product pools.

Unit contract: every reserve held by the registry is an integer in the
smallest units of its token, i.e. scaled by that token's declared
decimals. User amounts handed to the pricing engine must be scaled the same
way (see quoter.amounts.parse_units), so a single convention reaches the
AMM math. Producers must not mix, e.g., a fixed 18-decimal representation
with per-token decimals.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

import structlog

from quoter.amm.uniswap_v2 import Token, UniswapV2Pool, parse_pair_to_pool
from quoter.models.subgraph import PairData
from quoter.models.types import normalize_address

logger = structlog.get_logger()


class PoolRegistry:
    """Read-only registry of liquidity pools for routing.

    Lookups are order independent and case insensitive. If the snapshot
    holds more than one pool for the same unordered pair, the first one
    wins and later duplicates are ignored.
    """

    def __init__(self, pools: Iterable[UniswapV2Pool] = ()) -> None:
        """Build the registry from a pool snapshot.

        Args:
            pools: Pools in snapshot order.
        """
        self._pool_list: list[UniswapV2Pool] = []
        self._pools: dict[frozenset[str], UniswapV2Pool] = {}
        # Insertion-ordered: tokens in order of first appearance
        self._tokens: dict[str, Token] = {}

        for pool in pools:
            self._add_pool(pool)

    def _add_pool(self, pool: UniswapV2Pool) -> None:
        pair_key = frozenset(pool.tokens)
        if pair_key in self._pools:
            logger.debug(
                "duplicate_pool_ignored",
                pool=pool.address,
                kept=self._pools[pair_key].address,
                token_a=pool.token_a.address,
                token_b=pool.token_b.address,
            )
        else:
            self._pools[pair_key] = pool
        self._pool_list.append(pool)
        self._tokens.setdefault(pool.token_a.address, pool.token_a)
        self._tokens.setdefault(pool.token_b.address, pool.token_b)

    def pool_exists(self, token_a: str, token_b: str) -> bool:
        """Check whether a pool connects two tokens (order independent)."""
        return self.find_pool(token_a, token_b) is not None

    def find_pool(self, token_a: str, token_b: str) -> UniswapV2Pool | None:
        """Get the pool for a token pair (order independent).

        Args:
            token_a: First token address (any case)
            token_b: Second token address (any case)

        Returns:
            UniswapV2Pool if found, None otherwise
        """
        token_a_norm = normalize_address(token_a)
        token_b_norm = normalize_address(token_b)
        if token_a_norm == token_b_norm:
            return None
        return self._pools.get(frozenset((token_a_norm, token_b_norm)))

    def get_token(self, address: str) -> Token | None:
        """Get the token descriptor for an address, if any pool holds it."""
        return self._tokens.get(normalize_address(address))

    @property
    def tokens(self) -> list[str]:
        """Distinct token addresses in order of first appearance."""
        return list(self._tokens)

    @property
    def pools(self) -> list[UniswapV2Pool]:
        """All pools in snapshot order, duplicates included."""
        return list(self._pool_list)

    @property
    def pool_count(self) -> int:
        """Number of distinct token pairs."""
        return len(self._pools)

    def __iter__(self) -> Iterator[UniswapV2Pool]:
        return iter(self._pool_list)

    def __len__(self) -> int:
        return len(self._pool_list)


def build_registry_from_pairs(pairs: Iterable[PairData]) -> PoolRegistry:
    """Build a PoolRegistry from subgraph pair records.

    Malformed records are skipped (logged by parse_pair_to_pool).

    Args:
        pairs: Pair records in subgraph order

    Returns:
        PoolRegistry containing every parseable pair
    """
    pools: list[UniswapV2Pool] = []
    skipped = 0
    for pair in pairs:
        pool = parse_pair_to_pool(pair)
        if pool is None:
            skipped += 1
            continue
        pools.append(pool)

    registry = PoolRegistry(pools)
    logger.debug(
        "registry_built",
        pools=len(registry),
        pairs=registry.pool_count,
        tokens=len(registry.tokens),
        skipped=skipped,
    )
    return registry

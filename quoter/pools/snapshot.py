"""Pool snapshot retrieval and time-bounded caching.

The pricing engine never reaches for pools itself: callers obtain a
PoolRegistry from a PoolSnapshotProvider and pass it in explicitly. A
snapshot is never mutated once built, so concurrent quotes can share it.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Callable
from typing import Protocol

import httpx
import structlog
from pydantic import ValidationError

from quoter.models.subgraph import PairData, PairsResponse
from quoter.pools.registry import PoolRegistry, build_registry_from_pairs

logger = structlog.get_logger()

# Default snapshot lifetime (5 minutes)
DEFAULT_POOLS_CACHE_TTL = 300.0

DEFAULT_SUBGRAPH_URL = "https://graph-monad.kindynos.mx/subgraphs/name/tayaswap-v2-subgraph"

GET_POOLS_QUERY = """
query GetPools {
    pairs(orderBy: volumeUSD, orderDirection: desc) {
        id
        reserve0
        reserve1
        token0 {
            id
            name
            symbol
            decimals
        }
        token1 {
            id
            name
            symbol
            decimals
        }
        totalSupply
        volumeUSD
        reserveUSD
    }
}
"""


class PoolSnapshotUnavailable(Exception):
    """No pool snapshot could be obtained from the source."""

    pass


class PoolSource(Protocol):
    """Anything that can produce the current list of pair records."""

    def fetch_pairs(self) -> list[PairData]: ...


class SubgraphPoolSource:
    """Fetches pair records from a V2 pairs subgraph over GraphQL."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.url = url
        self.timeout = timeout
        self._transport = transport

    def fetch_pairs(self) -> list[PairData]:
        """Query the subgraph for all pairs.

        Raises:
            PoolSnapshotUnavailable: On transport errors, HTTP errors,
                GraphQL errors or an unexpected payload shape
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self._transport) as client:
                response = client.post(self.url, json={"query": GET_POOLS_QUERY})
                response.raise_for_status()
                body = response.json()
        except (httpx.HTTPError, ValueError) as err:
            raise PoolSnapshotUnavailable(f"Subgraph request failed: {err}") from err

        if not isinstance(body, dict):
            raise PoolSnapshotUnavailable("Subgraph response is not a JSON object")
        if body.get("errors"):
            raise PoolSnapshotUnavailable(f"Subgraph returned errors: {body['errors']}")

        try:
            return PairsResponse.model_validate(body.get("data") or {}).pairs
        except ValidationError as err:
            raise PoolSnapshotUnavailable(f"Unexpected subgraph payload: {err}") from err


class PoolSnapshotProvider:
    """Serves a PoolRegistry snapshot, refreshed at most once per TTL.

    If a refresh fails while an older snapshot exists, the stale snapshot
    keeps being served until the source recovers.
    """

    def __init__(
        self,
        source: PoolSource,
        ttl_seconds: float = DEFAULT_POOLS_CACHE_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._source = source
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._snapshot: PoolRegistry | None = None
        self._fetched_at: float | None = None

    def get_snapshot(self) -> PoolRegistry:
        """Get the current snapshot, refreshing it if expired.

        Raises:
            PoolSnapshotUnavailable: If the source fails and no previous
                snapshot exists
        """
        with self._lock:
            now = self._clock()
            cached = self._snapshot
            if (
                cached is not None
                and self._fetched_at is not None
                and now - self._fetched_at < self._ttl
            ):
                return cached

            try:
                pairs = self._source.fetch_pairs()
            except PoolSnapshotUnavailable as err:
                if self._snapshot is None:
                    raise
                logger.warning("pools_refresh_failed_serving_stale", error=str(err))
                return self._snapshot

            self._snapshot = build_registry_from_pairs(pairs)
            self._fetched_at = now
            logger.info(
                "pools_cache_refreshed",
                pools=len(self._snapshot),
                tokens=len(self._snapshot.tokens),
                ttl_seconds=self._ttl,
            )
            return self._snapshot

    def invalidate(self) -> None:
        """Drop the cached snapshot so the next call refetches."""
        with self._lock:
            self._snapshot = None
            self._fetched_at = None


def _create_default_provider() -> PoolSnapshotProvider:
    """Create the process-wide provider from environment configuration.

    - QUOTER_SUBGRAPH_URL: pairs subgraph endpoint
    - QUOTER_POOLS_CACHE_TTL: snapshot lifetime in seconds (default: 300)

    Nothing is fetched until the first snapshot is requested.
    """
    import os

    url = os.environ.get("QUOTER_SUBGRAPH_URL", DEFAULT_SUBGRAPH_URL)
    ttl = float(os.environ.get("QUOTER_POOLS_CACHE_TTL", str(DEFAULT_POOLS_CACHE_TTL)))
    return PoolSnapshotProvider(SubgraphPoolSource(url), ttl_seconds=ttl)


default_pool_provider = _create_default_provider()

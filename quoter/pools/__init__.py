"""Pool management package.

Provides PoolRegistry snapshots and the provider that fetches and caches them.
"""

from .registry import PoolRegistry, build_registry_from_pairs
from .snapshot import (
    PoolSnapshotProvider,
    PoolSnapshotUnavailable,
    PoolSource,
    SubgraphPoolSource,
)

__all__ = [
    "PoolRegistry",
    "build_registry_from_pairs",
    "PoolSnapshotProvider",
    "PoolSnapshotUnavailable",
    "PoolSource",
    "SubgraphPoolSource",
]

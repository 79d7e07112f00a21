"""
Caching utilities for clustered regions.

Region clustering is the expensive step of a rebuild, so results are kept per
domain and only recomputed once the origin has moved far enough away.
"""

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..cfg import CacheConfig
from ..core.world.interfaces import TileGraph


@dataclass
class CacheEntry:
    origin: int
    regions: Dict[str, List[Any]]


class SpatialCache:
    """
    This class memoizes clustering results per domain.

    Each domain tracks its own origin. An entry is stale when it is missing,
    its origin is no longer valid, or the new origin lies more than
    `staleness_distance` away. Region distances are refreshed on every access.
    """
    def __init__(self, graph: TileGraph, config: CacheConfig):
        self.graph = graph
        self.config = config
        self._entries: Dict[str, CacheEntry] = {}
        self._rebuilds: Counter = Counter()
        self.logger = logging.getLogger(self.__class__.__name__)

    def is_stale(self, domain: str, origin: int) -> bool:
        entry = self._entries.get(domain)
        if entry is None or not self.graph.is_valid(entry.origin):
            return True
        if not self.graph.is_valid(origin):
            return False
        return self.graph.distance(entry.origin, origin) > self.config.staleness_distance

    def get(self, domain: str, origin: int,
            compute: Callable[[int], Dict[str, List[Any]]]) -> Dict[str, List[Any]]:
        """
        Regions per label for the domain, sorted by distance from `origin`.
        `compute(origin)` is called only when the entry is stale.
        """
        if self.is_stale(domain, origin):
            self._entries[domain] = CacheEntry(origin, compute(origin))
            self._rebuilds[domain] += 1
            self.logger.info(f"Rebuilt '{domain}' regions from origin {origin} "
                             f"({self._rebuilds[domain]} rebuilds)")

        entry = self._entries[domain]
        result = {}
        for label, regions in entry.regions.items():
            if self.graph.is_valid(origin):
                for region in regions:
                    region.distance = self.graph.distance(origin, region.center_tile)
            result[label] = sorted(regions, key=lambda r: r.distance)
        return result

    def origin(self, domain: str) -> Optional[int]:
        entry = self._entries.get(domain)
        return entry.origin if entry else None

    def rebuild_count(self, domain: str) -> int:
        return self._rebuilds[domain]

    def clear(self) -> None:
        self._entries.clear()
        self.logger.debug("Cleared all cached regions")

"""
Bounded breadth-first exploration and flood-fill partitioning of tiles into
same-label contiguous regions.
"""

import logging
from collections import deque
from typing import Callable, Dict, Iterable, List, Type

from ...cfg import ClusteringConfig
from ...utils.math_utils import nearest_to_centroid
from ..world.interfaces import TileGraph
from .models import Region


LabelFn = Callable[[int], Iterable[str]]


class RegionClusterer:
    """
    This class groups the tiles around an origin into disjoint regions per label.

    Exploration is a BFS that marks tiles as visited when they are enqueued and
    stops once `max_tiles` tiles have been discovered. A dequeued tile farther
    than `max_radius` from the origin is dropped without expanding it.
    """
    def __init__(self, graph: TileGraph, label_fn: LabelFn, config: ClusteringConfig,
                 region_type: Type[Region] = Region):
        self.graph = graph
        self.label_fn = label_fn
        self.config = config
        self.region_type = region_type
        self.logger = logging.getLogger(self.__class__.__name__)

    def explore(self, origin: int) -> Dict[str, Dict[int, None]]:
        """
        Collect the labelled tiles reachable from origin within the bounds.

        Returns label -> tiles, both in first-discovery order (dicts used as ordered sets).
        """
        tiles_by_label: Dict[str, Dict[int, None]] = {}
        if not self.graph.is_valid(origin):
            return tiles_by_label

        visited = {origin}
        queue = deque([origin])
        while queue and len(visited) < self.config.max_tiles:
            tile = queue.popleft()
            if not self.graph.is_valid(tile):
                continue
            if self.graph.distance(origin, tile) > self.config.max_radius:
                continue

            for label in self.label_fn(tile):
                tiles_by_label.setdefault(label, {})[tile] = None

            for neighbor in self.graph.neighbors(tile):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

        self.logger.debug(f"Explored {len(visited)} tiles from {origin}, found {len(tiles_by_label)} labels")
        return tiles_by_label

    def partition(self, label: str, tiles: Dict[int, None]) -> List[List[int]]:
        """
        Split one label's tiles into maximal connected components.
        Each component starts at the earliest unassigned tile and is listed in fill order.
        """
        remaining = set(tiles)
        order = list(tiles)
        components = []
        pointer = 0
        while remaining:
            while order[pointer] not in remaining:
                pointer += 1
            component = self._flood_fill(order[pointer], remaining)
            remaining.difference_update(component)
            components.append(component)
        return components

    def _flood_fill(self, start: int, allowed: set) -> List[int]:
        filled = [start]
        seen = {start}
        queue = deque([start])
        while queue:
            tile = queue.popleft()
            for neighbor in self.graph.neighbors(tile):
                if neighbor in allowed and neighbor not in seen:
                    seen.add(neighbor)
                    filled.append(neighbor)
                    queue.append(neighbor)
        return filled

    def make_region(self, origin: int, label: str, members: List[int]) -> Region:
        center = members[nearest_to_centroid([self.graph.position(t) for t in members])]
        return self.region_type(center, len(members), label, self.graph.distance(origin, center))

    def cluster(self, origin: int) -> Dict[str, List[Region]]:
        """Regions per label, each list sorted by distance from origin"""
        result: Dict[str, List[Region]] = {}
        if not self.graph.is_valid(origin):
            self.logger.debug(f"Invalid origin {origin}, no regions")
            return result

        for label, tiles in self.explore(origin).items():
            regions = [self.make_region(origin, label, members) for members in self.partition(label, tiles)]
            regions.sort(key=lambda r: r.distance)
            result[label] = regions

        self.logger.debug(f"Clustered {sum(len(r) for r in result.values())} regions "
                          f"over {len(result)} labels from origin {origin}")
        return result

import json
import logging
import math
import os
from typing import Dict, List, Optional, Sequence, Set, Tuple

import numpy as np
from igraph import Graph

from .interfaces import TileGraph


BIOME_NAMES = [
    'Temperate forest',
    'Tundra',
    'Arid shrubland',
    'Desert',
    'Boreal forest',
    'Tropical rainforest',
    'Ice sheet',
    'Ocean',
]

ROAD_NAMES = ['Dirt road', 'Stone road', 'Ancient asphalt road']

SURFACE_LAYER = 'surface'
ORBIT_LAYER = 'orbit'


class WorldGraph(TileGraph):
    """
    This class holds the igraph representation of a tile map together with
    tile positions, biome and road labels, and layer membership.
    Tile ids are igraph vertex ids.
    """
    def __init__(self, positions, edges: Sequence[Tuple[int, int]], biomes: Sequence[Optional[str]],
                 roads: Optional[Sequence[Sequence[str]]] = None, layers: Optional[Sequence[str]] = None,
                 shape: str = 'planar', tile_size: float = 1.0):
        self.logger = logging.getLogger(self.__class__.__name__)
        self.positions = np.asarray(positions, dtype=float)
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            raise ValueError(f"Expected (n, 3) positions, got shape {self.positions.shape}")
        num_tiles = len(self.positions)
        if len(biomes) != num_tiles:
            raise ValueError(f"Got {len(biomes)} biomes for {num_tiles} tiles")
        if shape not in ('planar', 'sphere'):
            raise ValueError(f"Unknown world shape: {shape}")
        if tile_size <= 0:
            raise ValueError(f"tile_size must be positive, got {tile_size}")

        self.shape = shape
        self.tile_size = tile_size
        if shape == 'planar':
            self.reference_up = np.array([0.0, 1.0, 0.0])

        self.igraph = Graph(n=num_tiles, edges=[tuple(e) for e in edges], directed=False)
        self.igraph.simplify()
        self.igraph.vs['biome'] = list(biomes)
        self.igraph.vs['roads'] = [tuple(r) for r in roads] if roads is not None else [()] * num_tiles
        self.igraph.vs['layer'] = list(layers) if layers is not None else [SURFACE_LAYER] * num_tiles
        self._neighbor_cache: Dict[int, List[int]] = {}

        self.logger.debug(f"Created {shape} graph with {num_tiles} tiles and {self.igraph.ecount()} edges")

    @property
    def num_tiles(self) -> int:
        return self.igraph.vcount()

    def is_valid(self, tile) -> bool:
        return isinstance(tile, (int, np.integer)) and 0 <= tile < self.igraph.vcount()

    def neighbors(self, tile: int) -> List[int]:
        """Neighbor ids in ascending order"""
        if tile not in self._neighbor_cache:
            self._neighbor_cache[tile] = sorted(self.igraph.neighbors(tile))
        return self._neighbor_cache[tile]

    def position(self, tile: int) -> np.ndarray:
        return self.positions[tile]

    def distance(self, a: int, b: int) -> float:
        pa, pb = self.positions[a], self.positions[b]
        if self.shape == 'sphere':
            # Great-circle angle over the angular size of one tile
            cos_angle = np.dot(pa, pb) / (np.linalg.norm(pa) * np.linalg.norm(pb))
            return float(np.arccos(np.clip(cos_angle, -1.0, 1.0)) / self.tile_size)
        return float(np.linalg.norm(pb - pa) / self.tile_size)

    def surface_normal(self, tile: int) -> np.ndarray:
        if self.shape == 'planar':
            return np.array([0.0, 0.0, 1.0])
        return super().surface_normal(tile)

    def biome_labels(self, tile: int) -> Set[str]:
        biome = self.igraph.vs[tile]['biome']
        return {biome} if biome else set()

    def road_labels(self, tile: int) -> Set[str]:
        return set(self.igraph.vs[tile]['roads'])

    def is_surface_layer(self, tile: int) -> bool:
        return self.igraph.vs[tile]['layer'] == SURFACE_LAYER

    def describe(self, tile: int) -> str:
        if not self.is_valid(tile):
            return ""
        parts = sorted(self.biome_labels(tile)) + sorted(self.road_labels(tile))
        return ", ".join(parts)

    def surface_tiles(self) -> List[int]:
        return [v.index for v in self.igraph.vs if v['layer'] == SURFACE_LAYER]

    def add_road(self, name: str, start: int, end: int) -> List[int]:
        """Lay a road along one shortest path between two tiles."""
        vpath = self.igraph.get_shortest_paths(start, to=end, output='vpath')[0]
        for vid in vpath:
            roads = self.igraph.vs[vid]['roads']
            if name not in roads:
                self.igraph.vs[vid]['roads'] = roads + (name,)
        self.logger.debug(f"Laid {name} over {len(vpath)} tiles from {start} to {end}")
        return vpath

    @classmethod
    def from_json(cls, filename: str) -> 'WorldGraph':
        """
        Load a map from JSON.

        Expected layout:
            {"shape": "planar", "tile_size": 1.0,
             "tiles": [{"position": [x, y, z], "biome": "Tundra", "roads": [], "layer": "surface"}, ...],
             "edges": [[0, 1], ...]}
        """
        if not os.path.exists(filename):
            raise FileNotFoundError(f"Map file '{filename}' not found")
        with open(filename, 'r') as f:
            data = json.load(f)
        tiles = data.get('tiles')
        if tiles is None:
            raise KeyError(f"Expected 'tiles' key not found in {filename}")
        return cls(
            positions=[t['position'] for t in tiles],
            edges=data.get('edges', []),
            biomes=[t.get('biome') for t in tiles],
            roads=[t.get('roads', []) for t in tiles],
            layers=[t.get('layer', SURFACE_LAYER) for t in tiles],
            shape=data.get('shape', 'planar'),
            tile_size=data.get('tile_size', 1.0),
        )


def create_planar_world(width: int, height: int, biomes: Optional[Sequence[Sequence[str]]] = None,
                        seed: int = 0, biome_count: int = 6, road_count: int = 0,
                        orbit_tiles: int = 0) -> WorldGraph:
    """
    Build a 4-connected square grid. Tile id is y * width + x.

    If `biomes` is given it is a row-major grid of labels (biomes[y][x]);
    otherwise biomes are scattered procedurally from `seed`.
    """
    positions = [(float(x), float(y), 0.0) for y in range(height) for x in range(width)]
    edges = []
    for y in range(height):
        for x in range(width):
            tile = y * width + x
            if x + 1 < width:
                edges.append((tile, tile + 1))
            if y + 1 < height:
                edges.append((tile, tile + width))

    rng = np.random.default_rng(seed)
    if biomes is not None:
        labels = [biomes[y][x] for y in range(height) for x in range(width)]
    else:
        labels = _scatter_biomes(np.asarray(positions), rng, biome_count)

    positions, labels, layers = _append_orbit(positions, labels, orbit_tiles, lambda i: (0.0, float(i), 10.0))
    world = WorldGraph(positions, edges, labels, layers=layers, shape='planar')
    _lay_roads(world, rng, road_count)
    return world


def create_sphere_world(rows: int, seed: int = 0, biome_count: int = 6, road_count: int = 0,
                        orbit_tiles: int = 0) -> WorldGraph:
    """
    Build a latitude/longitude grid on the unit sphere with 2 * rows columns.
    Columns wrap around; rows stop short of the poles. Tile id is row * cols + col.
    """
    cols = 2 * rows
    lat_step = math.pi / rows
    lon_step = 2 * math.pi / cols
    positions = []
    for r in range(rows):
        lat = -math.pi / 2 + lat_step * (r + 0.5)
        for c in range(cols):
            lon = lon_step * c
            positions.append((math.cos(lat) * math.cos(lon), math.cos(lat) * math.sin(lon), math.sin(lat)))
    edges = []
    for r in range(rows):
        for c in range(cols):
            tile = r * cols + c
            edges.append((tile, r * cols + (c + 1) % cols))
            if r + 1 < rows:
                edges.append((tile, tile + cols))

    rng = np.random.default_rng(seed)
    labels = _scatter_biomes(np.asarray(positions), rng, biome_count)
    positions, labels, layers = _append_orbit(positions, labels, orbit_tiles, lambda i: (0.0, 0.0, 1.5 + i))
    world = WorldGraph(positions, edges, labels, layers=layers, shape='sphere', tile_size=lat_step)
    _lay_roads(world, rng, road_count)
    return world


def _scatter_biomes(positions: np.ndarray, rng: np.random.Generator, biome_count: int) -> List[str]:
    """Nearest-seed partition; several seeds share a biome so it splits into regions"""
    names = BIOME_NAMES[:max(1, min(biome_count, len(BIOME_NAMES)))]
    num_seeds = min(len(positions), 3 * len(names))
    seeds = positions[rng.choice(len(positions), size=num_seeds, replace=False)]
    dists = np.linalg.norm(positions[:, None, :] - seeds[None, :, :], axis=2)
    nearest = dists.argmin(axis=1)
    return [names[i % len(names)] for i in nearest]


def _append_orbit(positions, labels, count, place):
    layers = [SURFACE_LAYER] * len(positions)
    positions = list(positions) + [place(i) for i in range(count)]
    labels = list(labels) + [None] * count
    layers += [ORBIT_LAYER] * count
    return positions, labels, layers


def _lay_roads(world: WorldGraph, rng: np.random.Generator, road_count: int) -> None:
    surface = world.surface_tiles()
    if len(surface) < 2:
        return
    for i in range(road_count):
        start, end = rng.choice(surface, size=2, replace=False)
        world.add_road(ROAD_NAMES[i % len(ROAD_NAMES)], int(start), int(end))

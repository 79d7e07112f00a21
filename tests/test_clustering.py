import networkx as nx
import pytest

from worldscan.cfg import ScannerConfig
from worldscan.core.scanner import Region, RegionClusterer, RoadSegment
from worldscan.core.world import create_planar_world


def _make_line(labels):
    return create_planar_world(len(labels), 1, biomes=[labels])


def _make_clusterer(world, config, **overrides) -> RegionClusterer:
    if overrides:
        config = ScannerConfig.from_params(**{f'clustering.{k}': v for k, v in overrides.items()})
    return RegionClusterer(world, world.biome_labels, config.clustering)


def _components_oracle(world, tiles):
    """Connected components of the label's tiles, computed independently with networkx"""
    graph = nx.Graph()
    graph.add_nodes_from(tiles)
    for tile in tiles:
        for neighbor in world.neighbors(tile):
            if neighbor in tiles:
                graph.add_edge(tile, neighbor)
    return [set(c) for c in nx.connected_components(graph)]


@pytest.mark.parametrize('seed', [0, 3, 11])
def test_regions_partition_each_label(config, seed) -> None:
    world = create_planar_world(20, 20, seed=seed, biome_count=5, road_count=3)
    for label_fn in (world.biome_labels, world.road_labels):
        clusterer = RegionClusterer(world, label_fn, config.clustering)
        explored = clusterer.explore(0)
        for label, tiles in explored.items():
            components = clusterer.partition(label, tiles)
            flat = [t for c in components for t in c]
            # pairwise disjoint, union is the label's explored tiles
            assert len(flat) == len(set(flat))
            assert set(flat) == set(tiles)

            oracle = _components_oracle(world, set(tiles))
            assert sorted(map(frozenset, components), key=min) == sorted(map(frozenset, oracle), key=min)


def test_cluster_counts_match_components(config) -> None:
    world = create_planar_world(16, 16, seed=5, biome_count=4)
    clusterer = RegionClusterer(world, world.biome_labels, config.clustering)
    explored = clusterer.explore(40)
    regions = clusterer.cluster(40)
    assert list(regions) == list(explored)
    for label, label_regions in regions.items():
        oracle = _components_oracle(world, set(explored[label]))
        assert len(label_regions) == len(oracle)
        assert sum(r.tile_count for r in label_regions) == len(explored[label])
        assert all(r.label == label for r in label_regions)
        assert all(label in world.biome_labels(r.center_tile) for r in label_regions)
        assert [r.distance for r in label_regions] == sorted(r.distance for r in label_regions)


def test_invalid_origin_yields_nothing(config) -> None:
    world = _make_line(['Tundra'] * 4)
    clusterer = _make_clusterer(world, config)
    assert clusterer.cluster(-1) == {}
    assert clusterer.cluster(99) == {}


def test_single_tile_label(config) -> None:
    world = _make_line(['Desert', 'Desert', 'Tundra', 'Desert'])
    regions = _make_clusterer(world, config).cluster(0)
    assert list(regions) == ['Desert', 'Tundra']
    assert regions['Tundra'] == [Region(2, 1, 'Tundra', 2.0)]
    assert [r.tile_count for r in regions['Desert']] == [2, 1]


def test_center_is_member_nearest_centroid(config) -> None:
    clusterer = _make_clusterer(_make_line(['Tundra'] * 5), config)
    assert clusterer.cluster(0)['Tundra'][0].center_tile == 2
    # tie between tiles 1 and 2 goes to the earlier one in fill order
    clusterer = _make_clusterer(_make_line(['Tundra'] * 4), config)
    assert clusterer.cluster(0)['Tundra'][0].center_tile == 1


def test_radius_cap_stops_branches(config) -> None:
    clusterer = _make_clusterer(_make_line(['Tundra'] * 10), config, max_radius=2.0)
    regions = clusterer.cluster(0)
    assert regions['Tundra'][0].tile_count == 3


def test_visited_cap_counts_discovered_tiles(config) -> None:
    clusterer = _make_clusterer(_make_line(['Tundra'] * 10), config, max_tiles=4)
    assert list(clusterer.explore(0)['Tundra']) == [0, 1, 2]


def test_multi_label_tiles_join_every_label(config) -> None:
    world = create_planar_world(3, 3, biomes=[['Tundra'] * 3] * 3)
    world.add_road('Dirt road', 0, 2)
    world.add_road('Stone road', 1, 7)
    clusterer = RegionClusterer(world, world.road_labels, config.clustering, RoadSegment)
    regions = clusterer.cluster(0)
    assert set(regions) == {'Dirt road', 'Stone road'}
    assert regions['Dirt road'] == [RoadSegment(1, 3, 'Dirt road', 1.0)]
    stone = regions['Stone road']
    assert [(r.center_tile, r.tile_count) for r in stone] == [(4, 3)]
    assert stone[0].distance == pytest.approx(2 ** 0.5)
    assert regions['Dirt road'][0].size_description == '3 tiles'


def test_region_size_description() -> None:
    assert Region(0, 75, 'Tundra').size_description == 'approximately 75 tiles'
    assert RoadSegment(0, 75, 'Dirt road').size_description == '75 tiles'

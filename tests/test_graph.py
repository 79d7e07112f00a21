import json
import math

import numpy as np
import pytest

from worldscan.core.world import WorldGraph, create_planar_world, create_sphere_world


def _make_small_world():
    return create_planar_world(3, 2, biomes=[['Tundra', 'Tundra', 'Desert'], ['Desert', 'Tundra', 'Desert']])


def test_planar_grid_layout() -> None:
    world = _make_small_world()
    assert world.num_tiles == 6
    assert world.neighbors(0) == [1, 3]
    assert world.neighbors(4) == [1, 3, 5]
    assert world.distance(0, 5) == pytest.approx(math.sqrt(5))
    assert world.biome_labels(2) == {'Desert'}
    assert world.category_labels(1) == {'Tundra'}


def test_tile_validity() -> None:
    world = _make_small_world()
    assert world.is_valid(0)
    assert world.is_valid(np.int64(5))
    assert not world.is_valid(-1)
    assert not world.is_valid(6)
    assert not world.is_valid(2.0)
    assert not world.is_valid(None)


def test_orbit_tiles_are_off_surface() -> None:
    world = create_planar_world(3, 3, biomes=[['Tundra'] * 3] * 3, orbit_tiles=2)
    assert world.num_tiles == 11
    assert world.is_surface_layer(8)
    assert not world.is_surface_layer(9)
    assert world.biome_labels(9) == set()
    assert world.neighbors(9) == []
    assert world.surface_tiles() == list(range(9))


def test_roads_follow_shortest_path() -> None:
    world = create_planar_world(3, 3, biomes=[['Tundra'] * 3] * 3)
    world.add_road('Dirt road', 0, 2)
    world.add_road('Stone road', 1, 7)
    assert world.road_labels(0) == {'Dirt road'}
    assert world.road_labels(1) == {'Dirt road', 'Stone road'}
    assert world.road_labels(4) == {'Stone road'}
    assert world.road_labels(3) == set()
    assert world.category_labels(1) == {'Tundra', 'Dirt road', 'Stone road'}
    assert world.describe(1) == 'Tundra, Dirt road, Stone road'


def test_sphere_world() -> None:
    world = create_sphere_world(6, seed=1)
    assert world.num_tiles == 72
    assert world.neighbors(0) == [1, 11, 12]
    # adjacent rows are one tile apart
    assert world.distance(0, 12) == pytest.approx(1.0)
    assert np.linalg.norm(world.position(30)) == pytest.approx(1.0)
    assert np.allclose(world.surface_normal(30), world.position(30))


def test_procedural_generation_is_seeded() -> None:
    a = create_planar_world(8, 8, seed=4, road_count=2)
    b = create_planar_world(8, 8, seed=4, road_count=2)
    assert [a.biome_labels(t) for t in range(64)] == [b.biome_labels(t) for t in range(64)]
    assert [a.road_labels(t) for t in range(64)] == [b.road_labels(t) for t in range(64)]


def test_invalid_construction_raises() -> None:
    with pytest.raises(ValueError):
        WorldGraph([(0.0, 0.0)], [], ['Tundra'])
    with pytest.raises(ValueError):
        WorldGraph([(0.0, 0.0, 0.0)], [], ['Tundra', 'Desert'])
    with pytest.raises(ValueError):
        WorldGraph([(0.0, 0.0, 0.0)], [], ['Tundra'], shape='torus')


def test_from_json(tmp_path) -> None:
    path = tmp_path / 'map.json'
    path.write_text(json.dumps({
        'shape': 'planar',
        'tiles': [
            {'position': [0, 0, 0], 'biome': 'Tundra'},
            {'position': [1, 0, 0], 'biome': 'Tundra', 'roads': ['Dirt road']},
            {'position': [0, 0, 5], 'layer': 'orbit'},
        ],
        'edges': [[0, 1]],
    }))
    world = WorldGraph.from_json(str(path))
    assert world.num_tiles == 3
    assert world.neighbors(0) == [1]
    assert world.road_labels(1) == {'Dirt road'}
    assert not world.is_surface_layer(2)


def test_from_json_errors(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        WorldGraph.from_json(str(tmp_path / 'missing.json'))
    path = tmp_path / 'bad.json'
    path.write_text(json.dumps({'edges': []}))
    with pytest.raises(KeyError):
        WorldGraph.from_json(str(path))

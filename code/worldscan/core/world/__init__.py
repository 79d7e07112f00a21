"""
World module for tile map access, geometry and world-object collaborators.

This module provides:
- interfaces: Abstract collaborator contracts (TileGraph, WorldObjectProvider, ...)
- WorldGraph: igraph-backed reference tile map (planar grid or sphere)
- DirectionCalculator: Compass and orientation-relative direction labels
- InMemoryWorldObjects / GraphRoutePlanner: Reference object and route collaborators
"""

from .interfaces import (
    INVALID_TILE,
    Announcer,
    CameraSink,
    Faction,
    FactionRelation,
    LaunchTargeting,
    ObjectKind,
    Quest,
    QuestTarget,
    RoutePlanner,
    SpeechPriority,
    TileGraph,
    ViewState,
    Waypoint,
    WorldObject,
    WorldObjectProvider
)
from .graph import WorldGraph, create_planar_world, create_sphere_world
from .geometry import DirectionCalculator, COMPASS_LABELS, RELATIVE_LABELS, CURRENT_LOCATION
from .objects import InMemoryWorldObjects, GraphRoutePlanner, generate_world_objects

__all__ = [
    'INVALID_TILE',
    'Announcer',
    'CameraSink',
    'Faction',
    'FactionRelation',
    'LaunchTargeting',
    'ObjectKind',
    'Quest',
    'QuestTarget',
    'RoutePlanner',
    'SpeechPriority',
    'TileGraph',
    'ViewState',
    'Waypoint',
    'WorldObject',
    'WorldObjectProvider',
    'WorldGraph',
    'create_planar_world',
    'create_sphere_world',
    'DirectionCalculator',
    'COMPASS_LABELS',
    'RELATIVE_LABELS',
    'CURRENT_LOCATION',
    'InMemoryWorldObjects',
    'GraphRoutePlanner',
    'generate_world_objects'
]

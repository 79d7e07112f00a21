"""
In-memory world objects and route planning over a WorldGraph.

These back the CLI demo and the tests; a host application supplies its own
implementations of the same interfaces.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from .graph import WorldGraph
from .interfaces import (
    Faction,
    FactionRelation,
    ObjectKind,
    Quest,
    QuestTarget,
    RoutePlanner,
    Waypoint,
    WorldObject,
    WorldObjectProvider,
)


class InMemoryWorldObjects(WorldObjectProvider):
    """Holds world objects and quests in plain lists"""

    def __init__(self, objects: Optional[Iterable[WorldObject]] = None,
                 quests: Optional[Iterable[Quest]] = None):
        self.objects: List[WorldObject] = list(objects or [])
        self.quest_list: List[Quest] = list(quests or [])

    def settlements(self) -> List[WorldObject]:
        return [o for o in self.objects if o.kind is ObjectKind.SETTLEMENT]

    def caravans(self) -> List[WorldObject]:
        return [o for o in self.objects if o.kind is ObjectKind.CARAVAN]

    def quests(self) -> List[Quest]:
        return list(self.quest_list)

    def all_objects(self) -> List[WorldObject]:
        return list(self.objects)


class GraphRoutePlanner(RoutePlanner):
    """
    Waypoint route over a WorldGraph. Travel time is the shortest-path hop
    count along the route times `days_per_tile`.
    """
    def __init__(self, world: WorldGraph, waypoint_tiles: Sequence[int] = (),
                 days_per_tile: float = 0.1, active: bool = True):
        self.world = world
        self.days_per_tile = days_per_tile
        self._active = active
        self._waypoints = [Waypoint(i, tile) for i, tile in enumerate(waypoint_tiles)]
        self._membership = world.igraph.connected_components().membership
        self.logger = logging.getLogger(self.__class__.__name__)

    @property
    def active(self) -> bool:
        return self._active

    def waypoints(self) -> List[Waypoint]:
        return list(self._waypoints)

    def add_waypoint(self, tile: int) -> Waypoint:
        waypoint = Waypoint(len(self._waypoints), tile)
        self._waypoints.append(waypoint)
        return waypoint

    def can_reach(self, a: int, b: int) -> bool:
        if not self.world.is_valid(a) or not self.world.is_valid(b):
            return False
        return self._membership[a] == self._membership[b]

    def travel_days_to_waypoint(self, index: int) -> float:
        hops = 0
        for prev, curr in zip(self._waypoints[:index], self._waypoints[1:index + 1]):
            if not self.can_reach(prev.tile, curr.tile):
                self.logger.debug(f"Waypoint {curr.index} is unreachable from waypoint {prev.index}")
                continue
            hops += self.world.igraph.distances(prev.tile, curr.tile)[0][0]
        return hops * self.days_per_tile


PLAYER_FACTION = Faction('Player colony', FactionRelation.PLAYER, 'Player', 0)

DEMO_FACTIONS = [
    Faction('Union of Ferns', FactionRelation.ALLY, 'Outlander civil', 82),
    Faction('Kestrel Tribe', FactionRelation.NEUTRAL, 'Gentle tribe', 15),
    Faction('Ashen Pact', FactionRelation.HOSTILE, 'Pirate gang', -80),
]


def generate_world_objects(world: WorldGraph, seed: int = 0, settlements_per_faction: int = 2) -> InMemoryWorldObjects:
    """Scatter settlements, a caravan, sites, one quest and any orbital objects."""
    rng = np.random.default_rng(seed)
    surface = world.surface_tiles()
    needed = settlements_per_faction * (len(DEMO_FACTIONS) + 1) + 4
    if len(surface) < needed:
        raise ValueError(f"World too small for demo objects: {len(surface)} surface tiles, need {needed}")
    tiles = [int(t) for t in rng.choice(surface, size=needed, replace=False)]

    objects = [WorldObject('home', 'Home base', tiles.pop(), ObjectKind.SETTLEMENT, PLAYER_FACTION)]
    for faction in DEMO_FACTIONS:
        for n in range(settlements_per_faction):
            objects.append(WorldObject(f"{faction.name}:{n}", f"{faction.name.split()[-1]} hold {n + 1}",
                                       tiles.pop(), ObjectKind.SETTLEMENT, faction))
    objects.append(WorldObject('caravan:1', 'Caravan of traders', tiles.pop(), ObjectKind.CARAVAN, PLAYER_FACTION))
    ruin = WorldObject('site:ruin', 'Ancient ruin', tiles.pop())
    objects.append(ruin)
    objects.append(WorldObject('site:camp', 'Abandoned camp', tiles.pop()))

    orbit = [t for t in range(world.num_tiles) if not world.is_surface_layer(t)]
    for n, tile in enumerate(orbit):
        objects.append(WorldObject(f"orbit:{n}", f"Orbital platform {n + 1}", tile))

    quests = [Quest('The buried vault', targets=[QuestTarget(world_object=ruin)])]
    return InMemoryWorldObjects(objects, quests)

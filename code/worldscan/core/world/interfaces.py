"""
Collaborator contracts consumed by the scanner core.

The scanner never reaches into a concrete map, object store, camera or speech
engine. Everything it needs is expressed by the base classes below.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Sequence, Set

import numpy as np


INVALID_TILE = -1


class SpeechPriority(Enum):
    NORMAL = auto()
    HIGH = auto()


class FactionRelation(Enum):
    """Relation of a faction towards the player"""
    PLAYER = "Player"
    ALLY = "Ally"
    NEUTRAL = "Neutral"
    HOSTILE = "Hostile"


class ObjectKind(Enum):
    SETTLEMENT = "settlement"
    CARAVAN = "caravan"
    SITE = "site"


@dataclass(frozen=True)
class Faction:
    name: str
    relation: FactionRelation
    type_label: str = ""
    goodwill: int = 0

    @property
    def is_player(self) -> bool:
        return self.relation is FactionRelation.PLAYER


@dataclass(frozen=True)
class WorldObject:
    """A settlement, caravan or generic site as reported by the provider"""
    key: str
    label: str
    tile: int
    kind: ObjectKind = ObjectKind.SITE
    faction: Optional[Faction] = None


@dataclass(frozen=True)
class QuestTarget:
    """Either a world object or a bare tile the quest points at"""
    world_object: Optional[WorldObject] = None
    tile: int = INVALID_TILE


@dataclass
class Quest:
    name: str
    ongoing: bool = True
    hidden: bool = False
    targets: List[QuestTarget] = field(default_factory=list)


@dataclass(frozen=True)
class Waypoint:
    index: int
    tile: int


@dataclass
class ViewState:
    """
    Selection state shared with the world view.

    The scanner reads the selected tile as its origin and writes it back when
    jumping. Facing mode switches direction labels to orientation-relative.
    """
    active: bool = True
    selected_tile: int = INVALID_TILE
    facing_mode: bool = False
    facing: Optional[Sequence[float]] = None


class TileGraph(ABC):
    """Read-only view of the tile map"""

    # Axis whose tangent projection is "north"
    reference_up = np.array([0.0, 0.0, 1.0])

    @abstractmethod
    def is_valid(self, tile: int) -> bool:
        pass

    @abstractmethod
    def neighbors(self, tile: int) -> Sequence[int]:
        pass

    @abstractmethod
    def distance(self, a: int, b: int) -> float:
        """Approximate distance in tiles"""
        pass

    @abstractmethod
    def position(self, tile: int) -> np.ndarray:
        pass

    @abstractmethod
    def biome_labels(self, tile: int) -> Set[str]:
        pass

    @abstractmethod
    def road_labels(self, tile: int) -> Set[str]:
        pass

    @abstractmethod
    def is_surface_layer(self, tile: int) -> bool:
        pass

    def category_labels(self, tile: int) -> Set[str]:
        """Union of both label domains; clustering uses biome_labels and road_labels per domain"""
        return self.biome_labels(tile) | self.road_labels(tile)

    def surface_normal(self, tile: int) -> np.ndarray:
        """Outward normal at a tile; the normalized position on a sphere"""
        pos = np.asarray(self.position(tile), dtype=float)
        norm = np.linalg.norm(pos)
        return pos / norm if norm > 0 else np.array([0.0, 0.0, 1.0])

    def describe(self, tile: int) -> str:
        """Short human summary of a tile, empty when nothing is known"""
        return ", ".join(sorted(self.biome_labels(tile)))


class WorldObjectProvider(ABC):

    @abstractmethod
    def settlements(self) -> Iterable[WorldObject]:
        pass

    @abstractmethod
    def caravans(self) -> Iterable[WorldObject]:
        pass

    @abstractmethod
    def quests(self) -> Iterable[Quest]:
        pass

    @abstractmethod
    def all_objects(self) -> Iterable[WorldObject]:
        pass

    def objects_at(self, tile: int) -> List[WorldObject]:
        return [obj for obj in self.all_objects() if obj.tile == tile]


class RoutePlanner(ABC):

    @property
    @abstractmethod
    def active(self) -> bool:
        pass

    @abstractmethod
    def waypoints(self) -> Sequence[Waypoint]:
        pass

    @abstractmethod
    def travel_days_to_waypoint(self, index: int) -> float:
        pass

    @abstractmethod
    def can_reach(self, a: int, b: int) -> bool:
        pass


class LaunchTargeting(ABC):
    """Optional fuel-cost source while a launch target is being picked"""

    @property
    @abstractmethod
    def active(self) -> bool:
        pass

    @abstractmethod
    def fuel_cost_announcement(self, distance: float) -> str:
        pass


class Announcer(ABC):

    @abstractmethod
    def speak(self, text: str, priority: SpeechPriority = SpeechPriority.NORMAL) -> None:
        pass


class CameraSink(ABC):

    @abstractmethod
    def select(self, world_object: Optional[WorldObject], tile: int) -> None:
        """Replace the current selection with an object (if any) and its tile"""
        pass

    @abstractmethod
    def jump_to(self, tile: int) -> None:
        pass

    @abstractmethod
    def orient_north(self) -> None:
        pass

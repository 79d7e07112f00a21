"""
Data model of the navigation hierarchy: category -> subcategory -> item -> instance.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import FrozenSet, List, Optional

from ..world.interfaces import INVALID_TILE, Faction, WorldObject


@dataclass
class Region:
    """
    A contiguous group of same-label tiles.
    Only `distance` changes after construction; it is refreshed on every cache access.
    """
    center_tile: int
    tile_count: int
    label: str
    distance: float = 0.0

    @property
    def size_description(self) -> str:
        return f"approximately {self.tile_count} tiles"


@dataclass
class RoadSegment(Region):
    """Road-domain region; roads are linear so the count is exact"""

    @property
    def size_description(self) -> str:
        return f"{self.tile_count} tiles"


class ItemKind(Enum):
    WAYPOINT = auto()
    SETTLEMENT = auto()
    QUEST_SITE = auto()
    CARAVAN = auto()
    SITE = auto()
    BIOME = auto()
    ROAD = auto()
    SPACE_OBJECT = auto()


class Capability(Enum):
    HAS_FACTION = auto()
    HAS_QUEST_TAG = auto()
    MULTI_INSTANCE = auto()


@dataclass
class NavigationItem:
    label: str
    tile: int
    kind: ItemKind
    world_object: Optional[WorldObject] = None
    faction: Optional[Faction] = None
    quest_name: Optional[str] = None
    instances: List[Region] = field(default_factory=list)
    distance: float = 0.0

    @property
    def has_instances(self) -> bool:
        return len(self.instances) > 1

    @property
    def instance_count(self) -> int:
        return max(1, len(self.instances))

    def tile_at_instance(self, index: int) -> int:
        if not self.instances:
            return self.tile
        if 0 <= index < len(self.instances):
            return self.instances[index].center_tile
        return INVALID_TILE

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        caps = set()
        if self.faction is not None:
            caps.add(Capability.HAS_FACTION)
        if self.quest_name:
            caps.add(Capability.HAS_QUEST_TAG)
        if self.has_instances:
            caps.add(Capability.MULTI_INSTANCE)
        return frozenset(caps)

    @property
    def is_space_object(self) -> bool:
        return self.kind is ItemKind.SPACE_OBJECT


@dataclass
class Subcategory:
    name: str
    items: List[NavigationItem] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items


@dataclass
class Category:
    name: str
    subcategories: List[Subcategory] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return all(sub.is_empty for sub in self.subcategories)

    @property
    def total_item_count(self) -> int:
        return sum(len(sub.items) for sub in self.subcategories)


@dataclass
class Cursor:
    """Indices into the category tree plus the auto-jump flag"""
    category_index: int = 0
    subcategory_index: int = 0
    item_index: int = 0
    instance_index: int = 0
    auto_jump: bool = False

    def reset_indices(self) -> None:
        self.category_index = 0
        self.subcategory_index = 0
        self.item_index = 0
        self.instance_index = 0

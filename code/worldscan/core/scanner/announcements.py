"""
Spoken text for categories, subcategories, items and instances.
Announcements are short parts joined with ". ".
"""

from typing import List, Optional

from ...utils.math_utils import format_goodwill
from ..world.geometry import DirectionCalculator
from ..world.interfaces import LaunchTargeting, ObjectKind, RoutePlanner, TileGraph, ViewState
from .models import Capability, Category, NavigationItem, Subcategory


SEPARATOR = ". "


def category_text(category: Category, index: int, total: int) -> str:
    return f"{category.name}, {category.total_item_count} items. Category {index + 1} of {total}"


def subcategory_text(subcategory: Subcategory, index: int, total: int) -> str:
    return f"{subcategory.name}, {len(subcategory.items)} items. Subcategory {index + 1} of {total}"


def faction_parts(item: NavigationItem) -> List[str]:
    """Faction name/type and relation with goodwill for non-player settlements"""
    faction = item.faction
    if faction is None or faction.is_player or item.world_object is None \
            or item.world_object.kind is not ObjectKind.SETTLEMENT:
        return []
    if faction.type_label and faction.type_label != faction.name:
        name = f"{faction.name}, {faction.type_label}"
    else:
        name = faction.name
    return [name, f"{faction.relation.value} {format_goodwill(faction.goodwill)}"]


class AnnouncementFormatter:
    """
    This class renders the item and instance announcements, which depend on
    the current origin, facing, route and launch-targeting state.
    """
    def __init__(self, graph: TileGraph, directions: DirectionCalculator, view: ViewState,
                 route_planner: Optional[RoutePlanner] = None, launch: Optional[LaunchTargeting] = None):
        self.graph = graph
        self.directions = directions
        self.view = view
        self.route_planner = route_planner
        self.launch = launch

    def distance_to(self, item: NavigationItem, instance_index: int) -> float:
        origin = self.view.selected_tile
        target = item.tile_at_instance(instance_index)
        if not self.graph.is_valid(origin) or not self.graph.is_valid(target):
            return 0.0
        return self.graph.distance(origin, target)

    def location_phrase(self, item: NavigationItem, instance_index: int, distance: float) -> str:
        return self.directions.describe(self.view.selected_tile, item.tile_at_instance(instance_index), distance,
                                        self.view.facing_mode, self.view.facing)

    def is_unreachable(self, target: int) -> bool:
        planner = self.route_planner
        if planner is None or not planner.active or not self.graph.is_valid(target):
            return False
        waypoints = planner.waypoints()
        if not waypoints or not self.graph.is_valid(waypoints[-1].tile):
            return False
        return not planner.can_reach(waypoints[-1].tile, target)

    def fuel_phrase(self, distance: float) -> str:
        if self.launch is None or not self.launch.active or self.directions.is_current_location(distance):
            return ''
        return self.launch.fuel_cost_announcement(distance) or ''

    def item_text(self, item: NavigationItem, index: int, total: int) -> str:
        parts = []
        distance = 0.0
        if not item.is_space_object:
            distance = self.distance_to(item, 0)
            if self.is_unreachable(item.tile_at_instance(0)):
                parts.append("Unreachable")

        parts.append(item.label)
        if Capability.HAS_QUEST_TAG in item.capabilities:
            parts.append(f"Quest: {item.quest_name}")
        parts.extend(faction_parts(item))
        if Capability.MULTI_INSTANCE in item.capabilities:
            parts.append(item.instances[0].size_description)
            parts.append(f"{item.instance_count} regions")

        if item.is_space_object:
            parts.append("In space")
        else:
            parts.append(self.location_phrase(item, 0, distance))
            parts.append(self.fuel_phrase(distance))

        parts.append(f"{index + 1} of {total}")
        return SEPARATOR.join(p for p in parts if p)

    def instance_text(self, item: NavigationItem, instance_index: int) -> str:
        parts = []
        distance = self.distance_to(item, instance_index)
        if self.is_unreachable(item.tile_at_instance(instance_index)):
            parts.append("Unreachable")
        parts.append(item.label)
        if 0 <= instance_index < len(item.instances):
            parts.append(item.instances[instance_index].size_description)
        parts.append(self.location_phrase(item, instance_index, distance))
        parts.append(self.fuel_phrase(distance))
        parts.append(f"Region {instance_index + 1} of {item.instance_count}")
        return SEPARATOR.join(p for p in parts if p)

    def distance_text(self, item: NavigationItem, instance_index: int) -> str:
        if item.is_space_object:
            return "In space"
        distance = self.distance_to(item, instance_index)
        phrase = self.location_phrase(item, instance_index, distance)
        return phrase or f"{distance:.0f} tiles"

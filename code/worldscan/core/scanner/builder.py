"""
Assembles the category -> subcategory -> item hierarchy around an origin tile.
"""

import logging
from typing import Dict, List, Optional, Set

from ...cfg import ScannerConfig
from ...utils.cache import SpatialCache
from ...utils.math_utils import format_days
from ..world.interfaces import (
    FactionRelation,
    ObjectKind,
    RoutePlanner,
    TileGraph,
    WorldObject,
    WorldObjectProvider,
)
from .clustering import RegionClusterer
from .models import Category, ItemKind, NavigationItem, Region, RoadSegment, Subcategory


BIOME_DOMAIN = 'region-by-biome'
ROAD_DOMAIN = 'region-by-road'

RELATION_SUBCATEGORIES = {
    FactionRelation.PLAYER: 'Player',
    FactionRelation.ALLY: 'Allied',
    FactionRelation.NEUTRAL: 'Neutral',
    FactionRelation.HOSTILE: 'Hostile',
}


class CategoryBuilder:
    """
    This class builds the full list of non-empty categories for one origin.

    Categories come out in a fixed order: route waypoints, settlements, quest
    sites, caravans, other sites, biomes, roads and space objects. Objects with
    missing data are skipped and logged at DEBUG level.
    """
    def __init__(self, graph: TileGraph, objects: WorldObjectProvider, config: ScannerConfig,
                 route_planner: Optional[RoutePlanner] = None, cache: Optional[SpatialCache] = None):
        self.graph = graph
        self.objects = objects
        self.config = config
        self.route_planner = route_planner
        self.cache = cache if cache is not None else SpatialCache(graph, config.cache)
        self.clusterers = {
            BIOME_DOMAIN: RegionClusterer(graph, graph.biome_labels, config.clustering, Region),
            ROAD_DOMAIN: RegionClusterer(graph, graph.road_labels, config.clustering, RoadSegment),
        }
        self.logger = logging.getLogger(self.__class__.__name__)

    def build(self, origin: int) -> List[Category]:
        builders = [
            self.waypoints_category,
            self.settlements_category,
            self.quest_sites_category,
            self.caravans_category,
            self.other_sites_category,
            self.biomes_category,
            self.roads_category,
            self.space_objects_category,
        ]
        categories = []
        for create in builders:
            category = create(origin)
            if category is not None and not category.is_empty:
                categories.append(category)
        self.logger.debug(f"Built {len(categories)} categories from origin {origin}")
        return categories

    # Helpers

    def item_distance(self, origin: int, item: NavigationItem) -> float:
        target = item.tile_at_instance(0)
        if not self.graph.is_valid(origin) or not self.graph.is_valid(target):
            return 0.0
        return self.graph.distance(origin, target)

    def sort_by_distance(self, origin: int, items: List[NavigationItem]) -> List[NavigationItem]:
        for item in items:
            item.distance = self.item_distance(origin, item)
        return sorted(items, key=lambda item: item.distance)

    def on_surface(self, world_object: WorldObject) -> bool:
        return self.graph.is_valid(world_object.tile) and self.graph.is_surface_layer(world_object.tile)

    def object_item(self, world_object: WorldObject, kind: ItemKind, quest_name: Optional[str] = None) -> NavigationItem:
        return NavigationItem(
            label=world_object.label or "Unknown",
            tile=world_object.tile,
            kind=kind,
            world_object=world_object,
            faction=world_object.faction,
            quest_name=quest_name,
        )

    def quest_tiles(self) -> Set[int]:
        """Tiles targeted by any ongoing quest, hidden ones included"""
        tiles = set()
        for quest in self.objects.quests():
            if not quest.ongoing:
                continue
            for target in quest.targets:
                if target.world_object is not None:
                    tiles.add(target.world_object.tile)
                elif self.graph.is_valid(target.tile):
                    tiles.add(target.tile)
        return tiles

    # Category creators

    def waypoints_category(self, origin: int) -> Optional[Category]:
        planner = self.route_planner
        if planner is None or not planner.active or not planner.waypoints():
            return None

        subcategory = Subcategory('Waypoints')
        for i, waypoint in enumerate(planner.waypoints()):
            if not self.graph.is_valid(waypoint.tile):
                self.logger.debug(f"Skipping waypoint {i} on invalid tile {waypoint.tile}")
                continue
            label = f"Waypoint {i + 1}"
            summary = self.graph.describe(waypoint.tile)
            if summary:
                label += f": {summary}"
            if i >= 1:
                label += f". Estimated travel time: {format_days(planner.travel_days_to_waypoint(i))}"
            else:
                label += " (Start)"
            item = NavigationItem(label, waypoint.tile, ItemKind.WAYPOINT)
            item.distance = self.item_distance(origin, item)
            subcategory.items.append(item)

        return Category('Route Waypoints', [subcategory])

    def settlements_category(self, origin: int) -> Category:
        everything = Subcategory('All')
        by_relation: Dict[FactionRelation, Subcategory] = {
            relation: Subcategory(name) for relation, name in RELATION_SUBCATEGORIES.items()
        }

        for settlement in self.objects.settlements():
            if settlement.faction is None or not self.on_surface(settlement):
                self.logger.debug(f"Skipping settlement '{settlement.key}'")
                continue
            item = self.object_item(settlement, ItemKind.SETTLEMENT)
            everything.items.append(item)
            by_relation[settlement.faction.relation].items.append(item)

        subcategories = [everything] + list(by_relation.values())
        for subcategory in subcategories:
            subcategory.items = self.sort_by_distance(origin, subcategory.items)
        return Category('Settlements', subcategories)

    def quest_sites_category(self, origin: int) -> Category:
        subcategory = Subcategory('Active Quests')
        for quest in self.objects.quests():
            if not quest.ongoing or quest.hidden:
                continue
            for target in quest.targets:
                world_object = target.world_object
                if world_object is None and self.graph.is_valid(target.tile):
                    found = self.objects.objects_at(target.tile)
                    world_object = found[0] if found else None
                if world_object is None or not self.on_surface(world_object):
                    continue
                if (world_object.kind is ObjectKind.SETTLEMENT and world_object.faction is not None
                        and world_object.faction.is_player):
                    continue
                subcategory.items.append(self.object_item(world_object, ItemKind.QUEST_SITE, quest.name))

        subcategory.items = self.sort_by_distance(origin, subcategory.items)
        return Category('Quest Sites', [subcategory])

    def caravans_category(self, origin: int) -> Category:
        subcategory = Subcategory('Player Caravans')
        for caravan in self.objects.caravans():
            if caravan.faction is None or not caravan.faction.is_player or not self.on_surface(caravan):
                continue
            subcategory.items.append(self.object_item(caravan, ItemKind.CARAVAN))

        subcategory.items = self.sort_by_distance(origin, subcategory.items)
        return Category('Caravans', [subcategory])

    def other_sites_category(self, origin: int) -> Category:
        subcategory = Subcategory('Sites')
        quest_tiles = self.quest_tiles()
        for world_object in self.objects.all_objects():
            if world_object.kind in (ObjectKind.SETTLEMENT, ObjectKind.CARAVAN):
                continue
            if world_object.tile in quest_tiles or not self.on_surface(world_object):
                continue
            subcategory.items.append(self.object_item(world_object, ItemKind.SITE))

        subcategory.items = self.sort_by_distance(origin, subcategory.items)
        return Category('Other Sites', [subcategory])

    def region_items(self, origin: int, domain: str, kind: ItemKind) -> List[NavigationItem]:
        """One item per label, its regions as instances; the item tile is the nearest region's centre"""
        regions_by_label = self.cache.get(domain, origin, self.clusterers[domain].cluster)
        items = []
        for label, regions in regions_by_label.items():
            if not regions:
                continue
            items.append(NavigationItem(label, regions[0].center_tile, kind, instances=regions))
        return self.sort_by_distance(origin, items)

    def biomes_category(self, origin: int) -> Category:
        return Category('Biomes', [Subcategory('All Biomes', self.region_items(origin, BIOME_DOMAIN, ItemKind.BIOME))])

    def roads_category(self, origin: int) -> Category:
        return Category('Roads', [Subcategory('All Roads', self.region_items(origin, ROAD_DOMAIN, ItemKind.ROAD))])

    def space_objects_category(self, origin: int) -> Category:
        subcategory = Subcategory('Space Objects')
        for world_object in self.objects.all_objects():
            if not self.graph.is_valid(world_object.tile) or self.graph.is_surface_layer(world_object.tile):
                continue
            subcategory.items.append(self.object_item(world_object, ItemKind.SPACE_OBJECT))
        return Category('Not Accessible Yet', [subcategory])

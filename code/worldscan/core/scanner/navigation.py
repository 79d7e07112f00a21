"""
The world scanner session: a four-level cursor over the category tree.

Category commands rebuild the tree from the current selection; the other
commands build it lazily the first time. Unmet preconditions never raise,
they announce a short status message instead.
"""

import dataclasses
import logging
from typing import List, Optional

from ...cfg import ScannerConfig
from ...utils.cache import SpatialCache
from ..world.geometry import DirectionCalculator
from ..world.interfaces import (
    Announcer,
    CameraSink,
    LaunchTargeting,
    RoutePlanner,
    SpeechPriority,
    TileGraph,
    ViewState,
    WorldObjectProvider,
)
from .announcements import AnnouncementFormatter, category_text, subcategory_text
from .builder import CategoryBuilder
from .models import Category, Cursor, NavigationItem, Subcategory


NOT_ACTIVE = "World navigation not active"
NOTHING_FOUND = "No world objects found"
NO_SUBCATEGORIES = "No subcategories"
NO_ITEMS = "No items in this category"
NO_INSTANCES = "No instances to navigate"
NO_ITEM_SELECTED = "No item selected"


class WorldScanner:
    """
    This class owns all scanner state: the category list, the cursor and the
    region cache. Callers serialize access; every command runs synchronously.
    """
    def __init__(self, graph: TileGraph, objects: WorldObjectProvider, announcer: Announcer,
                 camera: CameraSink, view: ViewState, config: Optional[ScannerConfig] = None,
                 route_planner: Optional[RoutePlanner] = None, launch: Optional[LaunchTargeting] = None):
        self.graph = graph
        self.announcer = announcer
        self.camera = camera
        self.view = view
        self.config = config if config is not None else ScannerConfig.default()
        self.cache = SpatialCache(graph, self.config.cache)
        self.builder = CategoryBuilder(graph, objects, self.config, route_planner, self.cache)
        self.directions = DirectionCalculator(graph, self.config.direction)
        self.formatter = AnnouncementFormatter(graph, self.directions, view, route_planner, launch)

        self.categories: List[Category] = []
        self.cursor = Cursor()
        self.initialized = False
        self.logger = logging.getLogger(self.__class__.__name__)

    # Lifecycle

    def init(self) -> None:
        self.initialized = True
        self.logger.info("World scanner initialized")

    def reset(self) -> None:
        """Clear categories, indices and cached regions. Auto-jump is kept."""
        self.categories = []
        self.cursor.reset_indices()
        self.cache.clear()
        self.logger.debug("World scanner reset")

    def teardown(self) -> None:
        self.reset()
        self.initialized = False
        self.logger.info("World scanner torn down")

    def snapshot(self) -> Cursor:
        return dataclasses.replace(self.cursor)

    @property
    def is_active(self) -> bool:
        return self.initialized and self.view.active

    # Tree access

    def current_category(self) -> Optional[Category]:
        if 0 <= self.cursor.category_index < len(self.categories):
            return self.categories[self.cursor.category_index]
        return None

    def current_subcategory(self) -> Optional[Subcategory]:
        category = self.current_category()
        if category is None:
            return None
        if 0 <= self.cursor.subcategory_index < len(category.subcategories):
            return category.subcategories[self.cursor.subcategory_index]
        return None

    def current_item(self) -> Optional[NavigationItem]:
        subcategory = self.current_subcategory()
        if subcategory is None:
            return None
        if 0 <= self.cursor.item_index < len(subcategory.items):
            return subcategory.items[self.cursor.item_index]
        return None

    # Rebuild and validation

    def refresh(self) -> bool:
        """Rebuild the whole category list from the selected tile"""
        if not self.is_active:
            self.speak(NOT_ACTIVE, SpeechPriority.HIGH)
            return False

        self.categories = self.builder.build(self.view.selected_tile)
        if not self.categories:
            self.speak(NOTHING_FOUND, SpeechPriority.HIGH)
            return False

        self.validate_indices()
        return True

    def ensure_categories(self) -> bool:
        if self.categories:
            return True
        return self.refresh()

    def validate_indices(self) -> None:
        cursor = self.cursor
        if not 0 <= cursor.category_index < len(self.categories):
            cursor.category_index = 0

        category = self.current_category()
        if category is not None:
            if not 0 <= cursor.subcategory_index < len(category.subcategories):
                cursor.subcategory_index = 0
            self.skip_empty_subcategories(forward=True)

        subcategory = self.current_subcategory()
        if subcategory is not None and not 0 <= cursor.item_index < len(subcategory.items):
            cursor.item_index = 0

        item = self.current_item()
        if item is not None and not 0 <= cursor.instance_index < item.instance_count:
            cursor.instance_index = 0

    def skip_empty_subcategories(self, forward: bool) -> None:
        category = self.current_category()
        if category is None:
            return
        count = len(category.subcategories)
        step = 1 if forward else -1
        attempts = 0
        while attempts < count:
            subcategory = self.current_subcategory()
            if subcategory is not None and not subcategory.is_empty:
                break
            self.cursor.subcategory_index = (self.cursor.subcategory_index + step) % count
            attempts += 1

    def _guard(self) -> bool:
        if not self.is_active:
            self.speak(NOT_ACTIVE, SpeechPriority.HIGH)
            return False
        return True

    # Commands

    def toggle_auto_jump(self) -> None:
        self.cursor.auto_jump = not self.cursor.auto_jump
        status = "enabled" if self.cursor.auto_jump else "disabled"
        self.speak(f"Auto-jump mode {status}", SpeechPriority.HIGH)

    def next_category(self) -> None:
        self._step_category(1)

    def previous_category(self) -> None:
        self._step_category(-1)

    def _step_category(self, step: int) -> None:
        if not self._guard() or not self.refresh():
            return
        cursor = self.cursor
        cursor.category_index = (cursor.category_index + step) % len(self.categories)
        cursor.subcategory_index = 0
        cursor.item_index = 0
        cursor.instance_index = 0
        self.skip_empty_subcategories(forward=True)

        self.announce_category()
        self.announce_item()

    def next_subcategory(self) -> None:
        self._step_subcategory(1)

    def previous_subcategory(self) -> None:
        self._step_subcategory(-1)

    def _step_subcategory(self, step: int) -> None:
        if not self._guard() or not self.ensure_categories():
            return
        category = self.current_category()
        if category is None or len(category.subcategories) <= 1:
            self.speak(NO_SUBCATEGORIES)
            return

        count = len(category.subcategories)
        start = self.cursor.subcategory_index
        while True:
            self.cursor.subcategory_index = (self.cursor.subcategory_index + step) % count
            if self.cursor.subcategory_index == start:
                break
            if not category.subcategories[self.cursor.subcategory_index].is_empty:
                break
        self.cursor.item_index = 0
        self.cursor.instance_index = 0

        self.announce_subcategory()
        self.announce_item()

    def next_item(self) -> None:
        self._step_item(1)

    def previous_item(self) -> None:
        self._step_item(-1)

    def _step_item(self, step: int) -> None:
        if not self._guard():
            return
        if not self.categories:
            if not self.refresh():
                return
            self.announce_category()

        subcategory = self.current_subcategory()
        if subcategory is None or subcategory.is_empty:
            self.speak(NO_ITEMS)
            return

        self.cursor.item_index = (self.cursor.item_index + step) % len(subcategory.items)
        self.cursor.instance_index = 0

        if self.cursor.auto_jump:
            self.jump_to_current()
        else:
            self.announce_item()

    def next_instance(self) -> None:
        self._step_instance(1)

    def previous_instance(self) -> None:
        self._step_instance(-1)

    def _step_instance(self, step: int) -> None:
        if not self._guard() or not self.ensure_categories():
            return
        item = self.current_item()
        if item is None or not item.has_instances:
            self.speak(NO_INSTANCES)
            return

        self.cursor.instance_index = (self.cursor.instance_index + step) % item.instance_count

        if self.cursor.auto_jump:
            self.jump_to_current()
        else:
            self.announce_instance()

    def jump_to_current(self) -> None:
        if not self._guard() or not self.ensure_categories():
            return
        item = self.current_item()
        if item is None:
            self.speak(NO_ITEM_SELECTED, SpeechPriority.HIGH)
            return

        target = item.tile_at_instance(self.cursor.instance_index)
        self.view.selected_tile = target
        self.camera.select(item.world_object, target)
        self.camera.jump_to(target)
        self.camera.orient_north()
        self.logger.debug(f"Jumped to tile {target} ({item.label})")

        if item.has_instances:
            self.announce_instance()
        else:
            self.announce_item()

    def read_distance_and_direction(self) -> None:
        if not self._guard() or not self.ensure_categories():
            return
        item = self.current_item()
        if item is None:
            self.speak(NO_ITEM_SELECTED, SpeechPriority.HIGH)
            return
        self.speak(self.formatter.distance_text(item, self.cursor.instance_index))

    # Announcements

    def speak(self, text: str, priority: SpeechPriority = SpeechPriority.NORMAL) -> None:
        self.announcer.speak(text, priority)

    def announce_category(self) -> None:
        category = self.current_category()
        if category is not None:
            self.speak(category_text(category, self.cursor.category_index, len(self.categories)))

    def announce_subcategory(self) -> None:
        category = self.current_category()
        subcategory = self.current_subcategory()
        if category is not None and subcategory is not None:
            self.speak(subcategory_text(subcategory, self.cursor.subcategory_index, len(category.subcategories)))

    def announce_item(self) -> None:
        item = self.current_item()
        if item is None:
            self.speak(NO_ITEMS)
            return
        subcategory = self.current_subcategory()
        self.speak(self.formatter.item_text(item, self.cursor.item_index, len(subcategory.items)))

    def announce_instance(self) -> None:
        item = self.current_item()
        if item is None or not item.has_instances:
            return
        self.speak(self.formatter.instance_text(item, self.cursor.instance_index))

"""
Scanner module for region clustering, category building and navigation.

This module provides:
- models: Region, RoadSegment, NavigationItem, Subcategory, Category, Cursor
- RegionClusterer: Bounded BFS exploration and flood-fill region partition
- CategoryBuilder: Category hierarchy around an origin tile
- AnnouncementFormatter: Spoken text for items and instances
- WorldScanner: The navigation session and its commands
"""

from .models import (
    Region,
    RoadSegment,
    ItemKind,
    Capability,
    NavigationItem,
    Subcategory,
    Category,
    Cursor
)
from .clustering import RegionClusterer
from .builder import CategoryBuilder, BIOME_DOMAIN, ROAD_DOMAIN
from .announcements import AnnouncementFormatter, category_text, subcategory_text
from .navigation import WorldScanner

__all__ = [
    'Region',
    'RoadSegment',
    'ItemKind',
    'Capability',
    'NavigationItem',
    'Subcategory',
    'Category',
    'Cursor',
    'RegionClusterer',
    'CategoryBuilder',
    'BIOME_DOMAIN',
    'ROAD_DOMAIN',
    'AnnouncementFormatter',
    'category_text',
    'subcategory_text',
    'WorldScanner'
]

"""
Utility modules for the world scanner.

This module provides:
- math_utils: Centroid lookup and spoken number formatting
- cache: Per-domain spatial cache for clustered regions
"""

from .math_utils import (
    nearest_to_centroid,
    format_days,
    format_goodwill
)

from .cache import (
    CacheEntry,
    SpatialCache
)

__all__ = [
    # Math utilities
    'nearest_to_centroid',
    'format_days',
    'format_goodwill',

    # Caching
    'CacheEntry',
    'SpatialCache'
]

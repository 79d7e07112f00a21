"""
Configuration module for scanner settings.

Provides:
- ScannerConfig: Dataclass-based configuration with YAML loading
- ClusteringConfig: Region traversal bounds
- CacheConfig: Spatial cache staleness
- DirectionConfig: Compass sectors and proximity threshold
- WorldConfig: Procedural world generation for the CLI
"""

from .config import (
    ScannerConfig,
    ClusteringConfig,
    CacheConfig,
    DirectionConfig,
    WorldConfig
)

__all__ = [
    'ScannerConfig',
    'ClusteringConfig',
    'CacheConfig',
    'DirectionConfig',
    'WorldConfig'
]

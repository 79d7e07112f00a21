"""
Main configuration classes for the world scanner.

Provides dataclass-based configuration with YAML loading.
All default values are defined in default.yaml, not in Python code.
"""

import os
import yaml
from dataclasses import dataclass
from typing import Dict, Any, Optional


DEFAULTS_PATH = os.path.join(os.path.dirname(__file__), 'default.yaml')


@dataclass
class ClusteringConfig:
    """Bounds for the breadth-first region traversal"""
    max_radius: float
    max_tiles: int


@dataclass
class CacheConfig:
    """Spatial cache invalidation settings"""
    staleness_distance: float


@dataclass
class DirectionConfig:
    """Compass sector and proximity settings"""
    sector_width: float
    current_location_threshold: float

    @property
    def sector_offset(self) -> float:
        """Half a sector; boundaries sit at k * width + offset"""
        return self.sector_width / 2.0


@dataclass
class WorldConfig:
    """Procedural world generation settings used by the CLI"""
    shape: str
    size: int
    seed: int
    biome_count: int
    road_count: int


@dataclass
class ScannerConfig:
    """Top-level scanner configuration"""
    clustering: ClusteringConfig
    cache: CacheConfig
    direction: DirectionConfig
    world: WorldConfig

    @classmethod
    def default(cls) -> 'ScannerConfig':
        """Configuration built from the packaged defaults only."""
        return cls.from_params(None)

    @classmethod
    def from_params(cls, base_config_path: Optional[str] = None, **params) -> 'ScannerConfig':
        """
        Create configuration from YAML base and parameter overrides.

        Args:
            base_config_path: Optional path to a YAML file merged over the defaults
            **params: Parameters to override using dot notation keys

        Example:
            config = ScannerConfig.from_params(
                'scanner.yaml',
                **{
                    'clustering.max_radius': 60,
                    'cache.staleness_distance': 25.0,
                }
            )
        """
        with open(DEFAULTS_PATH, 'r') as f:
            defaults = yaml.safe_load(f)

        if base_config_path:
            if not os.path.exists(base_config_path):
                raise FileNotFoundError(f"Config file '{base_config_path}' not found")
            with open(base_config_path, 'r') as f:
                custom = yaml.safe_load(f) or {}
            defaults = cls._deep_update(defaults, custom)

        if params:
            nested_overrides = cls._params_to_nested_dict(params)
            defaults = cls._deep_update(defaults, nested_overrides)

        config = cls(
            clustering=ClusteringConfig(**defaults['clustering']),
            cache=CacheConfig(**defaults['cache']),
            direction=DirectionConfig(**defaults['direction']),
            world=WorldConfig(**defaults['world']),
        )
        config.validate()
        return config

    def validate(self) -> None:
        """Reject values the traversal and sector math cannot work with"""
        if self.clustering.max_radius < 0:
            raise ValueError(f"clustering.max_radius must be >= 0, got {self.clustering.max_radius}")
        if self.clustering.max_tiles < 1:
            raise ValueError(f"clustering.max_tiles must be >= 1, got {self.clustering.max_tiles}")
        if self.cache.staleness_distance < 0:
            raise ValueError(f"cache.staleness_distance must be >= 0, got {self.cache.staleness_distance}")
        if self.direction.sector_width <= 0 or 360.0 % self.direction.sector_width:
            raise ValueError(f"direction.sector_width must divide 360, got {self.direction.sector_width}")
        if self.world.shape not in ('planar', 'sphere'):
            raise ValueError(f"world.shape must be 'planar' or 'sphere', got {self.world.shape!r}")

    @staticmethod
    def _params_to_nested_dict(params: Dict[str, Any]) -> Dict[str, Any]:
        """Convert dot notation parameters to nested dictionary"""
        result = {}
        for key, value in params.items():
            keys = key.split('.')
            current = result
            for k in keys[:-1]:
                if k not in current:
                    current[k] = {}
                current = current[k]
            current[keys[-1]] = value
        return result

    @staticmethod
    def _deep_update(base_dict: Dict, update_dict: Dict) -> Dict:
        """Deep update dictionary, handling nested structures"""
        result = base_dict.copy()
        for key, value in update_dict.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ScannerConfig._deep_update(result[key], value)
            else:
                result[key] = value
        return result

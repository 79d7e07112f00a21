import logging
from typing import Optional, Sequence

import numpy as np

from ...cfg import DirectionConfig
from .interfaces import TileGraph


COMPASS_LABELS = ['North', 'Northeast', 'East', 'Southeast', 'South', 'Southwest', 'West', 'Northwest']
RELATIVE_LABELS = ['Ahead', 'Ahead-right', 'Right', 'Behind-right', 'Behind', 'Behind-left', 'Left', 'Ahead-left']

CURRENT_LOCATION = 'Current location'

_EPS = 1e-9


def project_on_plane(vector: np.ndarray, normal: np.ndarray) -> np.ndarray:
    """Component of vector orthogonal to the (unit) normal"""
    return vector - np.dot(vector, normal) * normal


def _normalized(vector: np.ndarray) -> Optional[np.ndarray]:
    norm = np.linalg.norm(vector)
    if norm < _EPS:
        return None
    return vector / norm


class DirectionCalculator:
    """
    This class turns a pair of tiles into a bearing and an 8-sector label,
    either absolute (compass) or relative to a facing direction.
    """
    def __init__(self, graph: TileGraph, config: DirectionConfig):
        self.graph = graph
        self.config = config
        self.logger = logging.getLogger(self.__class__.__name__)

    def tangent_basis(self, origin: int, facing: Optional[Sequence[float]] = None):
        """Return (normal, forward, right) unit vectors at the origin tile."""
        normal = _normalized(np.asarray(self.graph.surface_normal(origin), dtype=float))
        if normal is None:
            normal = np.array([0.0, 0.0, 1.0])

        forward = None
        if facing is not None:
            forward = _normalized(project_on_plane(np.asarray(facing, dtype=float), normal))
        if forward is None:
            forward = _normalized(project_on_plane(np.asarray(self.graph.reference_up, dtype=float), normal))
        if forward is None:
            # Reference up is parallel to the normal (standing on a pole)
            for axis in (np.array([1.0, 0.0, 0.0]), np.array([0.0, 1.0, 0.0])):
                forward = _normalized(project_on_plane(axis, normal))
                if forward is not None:
                    break

        right = np.cross(forward, normal)
        return normal, forward, right

    def bearing(self, origin: int, target: int, facing: Optional[Sequence[float]] = None) -> Optional[float]:
        """Angle in degrees in [0, 360), clockwise from forward; None if undefined."""
        if not self.graph.is_valid(origin) or not self.graph.is_valid(target):
            return None
        normal, forward, right = self.tangent_basis(origin, facing)
        direction = np.asarray(self.graph.position(target), dtype=float) - np.asarray(self.graph.position(origin), dtype=float)
        flat = _normalized(project_on_plane(direction, normal))
        if flat is None:
            return None
        angle = np.degrees(np.arctan2(np.dot(flat, right), np.dot(flat, forward)))
        return float(angle % 360.0)

    def sector_index(self, angle: float) -> int:
        width = self.config.sector_width
        count = int(round(360.0 / width))
        return int(((angle + self.config.sector_offset) % 360.0) // width) % count

    def compass_label(self, angle: float) -> str:
        return COMPASS_LABELS[self.sector_index(angle)]

    def relative_label(self, angle: float) -> str:
        return RELATIVE_LABELS[self.sector_index(angle)]

    def direction_label(self, origin: int, target: int, facing_mode: bool = False,
                        facing: Optional[Sequence[float]] = None) -> str:
        """Compass label by default, orientation-relative in facing mode; '' if undefined."""
        angle = self.bearing(origin, target, facing if facing_mode else None)
        if angle is None:
            return ''
        return self.relative_label(angle) if facing_mode else self.compass_label(angle)

    def is_current_location(self, distance: float) -> bool:
        return distance <= self.config.current_location_threshold

    def describe(self, origin: int, target: int, distance: float, facing_mode: bool = False,
                 facing: Optional[Sequence[float]] = None) -> str:
        """
        Spoken distance/direction phrase, e.g. "Northeast, 12 tiles".
        Within the current-location threshold no direction is given.
        """
        if self.is_current_location(distance):
            return CURRENT_LOCATION
        direction = self.direction_label(origin, target, facing_mode, facing)
        if not direction:
            return ''
        return f"{direction}, {distance:.0f} tiles"

"""
Various math and formatting utilities.
"""

from typing import Sequence

import numpy as np


def nearest_to_centroid(positions: Sequence[Sequence[float]]) -> int:
    """
    Index of the position closest to the arithmetic mean of all positions.
    Ties resolve to the lowest index.
    """
    points = np.asarray(positions, dtype=float)
    if len(points) == 0:
        raise ValueError("Cannot take the centroid of no positions")
    centroid = points.mean(axis=0)
    return int(np.argmin(np.linalg.norm(points - centroid, axis=1)))


def format_days(days: float) -> str:
    """Travel time with at most one decimal, e.g. '1 day', '2.5 days'"""
    rounded = round(float(days), 1)
    text = f"{rounded:.1f}".rstrip('0').rstrip('.')
    unit = 'day' if rounded == 1 else 'days'
    return f"{text} {unit}"


def format_goodwill(goodwill: int) -> str:
    """Signed goodwill, e.g. '+15', '-80', '+0'"""
    return f"{goodwill:+d}"

"""Conversion utilities for angles, rotations and geographic distances."""

import math
from typing import Tuple

from .constants import EARTH_RADIUS_M
from .types import GeoPoint


def rotate_point(x: float, y: float, angle_radians: float) -> Tuple[float, float]:
    """Rotate a point counter-clockwise about the origin.

    Args:
        x: X coordinate
        y: Y coordinate
        angle_radians: Rotation angle

    Returns:
        Tuple of rotated (x, y)
    """
    if angle_radians == 0:
        return x, y
    cos = math.cos(angle_radians)
    sin = math.sin(angle_radians)
    return x * cos - y * sin, x * sin + y * cos


def direction_angle(dx: float, dy: float) -> float:
    """Direction of the vector (dx, dy) in radians, via atan2."""
    return math.atan2(dy, dx)


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two geographic points.

    Args:
        a: First point (degrees)
        b: Second point (degrees)

    Returns:
        Distance in meters
    """
    phi1 = math.radians(a.lat)
    phi2 = math.radians(b.lat)
    d_phi = math.radians(b.lat - a.lat)
    d_lambda = math.radians(b.lon - a.lon)

    h = (math.sin(d_phi / 2) ** 2
         + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c

"""Type definitions for geocalib.

Render-space and geographic-space coordinates are distinct named types so a
``(lat, lon)`` pair cannot be passed where an ``(x, y)`` pair is expected
without it being visible at the call site.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, NamedTuple, Union

from .enums import ProjectionSource


# =============================================================================
# COORDINATE TYPES
# =============================================================================

class RenderPoint(NamedTuple):
    """A position in the client's render space (pixels, y grows downward)."""
    x: float
    y: float


class GeoPoint(NamedTuple):
    """A geographic position in degrees."""
    lat: float
    lon: float


class GeoBounds(NamedTuple):
    """Geographic viewport bounds as a corner pair."""
    north_east: GeoPoint
    south_west: GeoPoint

    @property
    def lat_span(self) -> float:
        return self.north_east.lat - self.south_west.lat

    @property
    def lon_span(self) -> float:
        return self.north_east.lon - self.south_west.lon

    @property
    def midpoint(self) -> GeoPoint:
        return GeoPoint(
            (self.north_east.lat + self.south_west.lat) / 2,
            (self.north_east.lon + self.south_west.lon) / 2
        )


class ViewportSize(NamedTuple):
    """Render viewport dimensions in pixels."""
    width: float
    height: float

    @property
    def center(self) -> RenderPoint:
        return RenderPoint(self.width / 2, self.height / 2)


# =============================================================================
# CALIBRATION STATE
# =============================================================================

@dataclass(frozen=True)
class CorrespondencePoint:
    """One observed pairing of a render position and its geographic position.

    ``observed_at`` is a monotonic timestamp used only to order points by
    recency.
    """
    render: RenderPoint
    geo: GeoPoint
    observed_at: float


@dataclass(frozen=True)
class TransformParameters:
    """Per-axis similarity transform from render to geographic space.

    Forward mapping: rotate the render point by ``rotation_radians`` about the
    origin, then ``lon = x' * scale_x + offset_x`` and
    ``lat = y' * scale_y + offset_y``.
    """
    scale_x: float = 1.0
    scale_y: float = 1.0
    offset_x: float = 0.0
    offset_y: float = 0.0
    rotation_radians: float = 0.0

    @property
    def rotation_degrees(self) -> float:
        return math.degrees(self.rotation_radians)

    @property
    def is_default(self) -> bool:
        return self == TransformParameters()

    @property
    def is_invertible(self) -> bool:
        return self.scale_x != 0 and self.scale_y != 0

    def as_dict(self) -> Dict[str, float]:
        """Parameter snapshot with rotation in degrees."""
        return {
            'scale_x': self.scale_x,
            'scale_y': self.scale_y,
            'offset_x': self.offset_x,
            'offset_y': self.offset_y,
            'rotation_degrees': self.rotation_degrees
        }


@dataclass(frozen=True)
class CalibrationStatus:
    """Read-only projection of the calibration state."""
    point_count: int
    is_calibrated: bool
    parameters: TransformParameters = field(default_factory=TransformParameters)

    def as_dict(self) -> Dict[str, Any]:
        return {
            'point_count': self.point_count,
            'is_calibrated': self.is_calibrated,
            'parameters': self.parameters.as_dict()
        }

    def format_status(self) -> str:
        """Format a human-readable status block."""
        params = self.parameters
        lines = [
            "Calibration Status",
            "=" * 50,
            f"Points: {self.point_count}",
            f"Calibrated: {'yes' if self.is_calibrated else 'no'}",
            f"Scale X: {params.scale_x:.9g}",
            f"Scale Y: {params.scale_y:.9g}",
            f"Offset X: {params.offset_x:.9g}",
            f"Offset Y: {params.offset_y:.9g}",
            f"Rotation: {params.rotation_degrees:.4f} deg"
        ]
        return "\n".join(lines)


# =============================================================================
# CONVERSION RESULTS
# =============================================================================

@dataclass(frozen=True)
class Projection:
    """A converted coordinate tagged with the path that produced it."""
    point: Union[GeoPoint, RenderPoint]
    source: ProjectionSource

    @property
    def is_degraded(self) -> bool:
        return self.source.is_degraded

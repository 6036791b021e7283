"""Forward and inverse application of the fitted transform."""

from typing import Callable, Optional

from loguru import logger

from ..core.conversion_utils import rotate_point
from ..core.enums import ProjectionSource
from ..core.exceptions import InverseUndefinedError
from ..core.interfaces import Logger
from ..core.types import GeoPoint, Projection, RenderPoint, TransformParameters
from .fallback import FallbackProjector
from .store import CalibrationStore


def apply_forward(params: TransformParameters, point: RenderPoint) -> GeoPoint:
    """Render -> geographic: rotate, then scale and offset."""
    x, y = rotate_point(point.x, point.y, params.rotation_radians)
    return GeoPoint(
        lat=y * params.scale_y + params.offset_y,
        lon=x * params.scale_x + params.offset_x
    )


def apply_inverse(params: TransformParameters, point: GeoPoint) -> RenderPoint:
    """Geographic -> render: remove offset and scale, then rotate back.

    Raises:
        InverseUndefinedError: If either scale factor is zero
    """
    if not params.is_invertible:
        raise InverseUndefinedError(params.scale_x, params.scale_y)

    x = (point.lon - params.offset_x) / params.scale_x
    y = (point.lat - params.offset_y) / params.scale_y
    return RenderPoint(*rotate_point(x, y, -params.rotation_radians))


class CoordinateMapper:
    """Converts positions between render and geographic space.

    Uses the store's current parameters once calibrated and the fallback
    projector otherwise. Holds no state of its own.
    """

    def __init__(
        self,
        store: CalibrationStore,
        fallback: FallbackProjector,
        logger_instance: Optional[Logger] = None
    ):
        self.store = store
        self.fallback = fallback
        self.logger = logger_instance or logger

    def to_geographic(self, point: RenderPoint) -> Projection:
        """Convert a render position to a geographic position."""
        if not self.store.is_calibrated:
            return self.fallback.to_geographic(point)
        return self._calibrated(apply_forward, point)

    def to_render(self, point: GeoPoint) -> Projection:
        """Convert a geographic position to a render position.

        Raises:
            InverseUndefinedError: If calibrated with a zero scale factor
        """
        if not self.store.is_calibrated:
            return self.fallback.to_render(point)
        return self._calibrated(apply_inverse, point)

    def _calibrated(self, convert: Callable, point) -> Projection:
        result = convert(self.store.parameters, point)
        self.logger.debug(f"{convert.__name__}: {tuple(point)} -> {tuple(result)}")
        return Projection(result, ProjectionSource.CALIBRATED)

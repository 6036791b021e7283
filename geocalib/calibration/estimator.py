"""Transform estimation from render/geographic correspondence points.

The fit is a deliberate approximation rather than a least-squares similarity
fit: scale comes from bounding-box span ratios over the most recent points,
offsets from the means, and rotation from the direction of a single vector
between the two most recent observations.
"""

from typing import Optional, Sequence, List

import numpy as np
from loguru import logger

from ..core.config_spec import CalibrationSettings
from ..core.conversion_utils import direction_angle
from ..core.exceptions import DegenerateSpanError, InsufficientDataError
from ..core.interfaces import Logger
from ..core.types import CorrespondencePoint, TransformParameters


def select_recent_points(
    points: Sequence[CorrespondencePoint],
    limit: int
) -> List[CorrespondencePoint]:
    """Return up to ``limit`` points, newest first.

    Points sharing a timestamp keep insertion order with the later insertion
    treated as newer.

    Args:
        points: Points in insertion order
        limit: Maximum number of points to return

    Returns:
        List of the most recent points, most recent first
    """
    newest_first = sorted(reversed(points), key=lambda p: p.observed_at, reverse=True)
    return newest_first[:limit]


def _axis_scale(
    geo_span: float,
    render_span: float,
    previous: float,
    axis: str,
    strict: bool,
    log: Logger
) -> float:
    """Scale for one axis, keeping ``previous`` when the render span is zero."""
    if render_span == 0:
        if strict:
            raise DegenerateSpanError(axis, render_span)
        log.warning(
            f"Render {axis} span is zero across calibration points; "
            f"keeping previous scale_{axis}={previous}"
        )
        return previous

    if geo_span == 0:
        log.warning(
            f"Geographic span for render {axis} axis is zero; "
            f"scale_{axis} collapses to 0 and the inverse transform is undefined"
        )
    return geo_span / render_span


def estimate_transform(
    points: Sequence[CorrespondencePoint],
    previous: Optional[TransformParameters] = None,
    settings: Optional[CalibrationSettings] = None,
    logger_instance: Optional[Logger] = None
) -> TransformParameters:
    """Derive transform parameters from correspondence points.

    Args:
        points: All stored correspondence points, in insertion order
        previous: Parameters in effect before this fit; scale factors are
            kept from here when a render span is degenerate
        settings: Point thresholds; defaults apply when None
        logger_instance: Optional logger (uses global if None)

    Returns:
        Newly fitted TransformParameters

    Raises:
        InsufficientDataError: If fewer than ``settings.min_points`` points exist
        DegenerateSpanError: If a render span is zero and ``settings.strict`` is set
    """
    settings = settings or CalibrationSettings()
    previous = previous or TransformParameters()
    log = logger_instance or logger

    if len(points) < settings.min_points:
        raise InsufficientDataError(settings.min_points, len(points))

    recent = select_recent_points(points, settings.max_recent_points)

    render = np.array([[p.render.x, p.render.y] for p in recent], dtype=float)
    geo = np.array([[p.geo.lat, p.geo.lon] for p in recent], dtype=float)

    mean_x, mean_y = render.mean(axis=0)
    mean_lat, mean_lon = geo.mean(axis=0)

    render_x_span, render_y_span = render.max(axis=0) - render.min(axis=0)
    lat_span, lon_span = geo.max(axis=0) - geo.min(axis=0)

    scale_x = _axis_scale(
        float(lon_span), float(render_x_span), previous.scale_x, 'x', settings.strict, log
    )
    scale_y = _axis_scale(
        float(lat_span), float(render_y_span), previous.scale_y, 'y', settings.strict, log
    )

    offset_x = float(mean_lon - mean_x * scale_x)
    offset_y = float(mean_lat - mean_y * scale_y)

    # Two-point heuristic: newest -> second newest, lon as the geo x-analog
    rotation = 0.0
    if len(recent) >= settings.min_rotation_points:
        newest, second = recent[0], recent[1]
        render_angle = direction_angle(
            second.render.x - newest.render.x,
            second.render.y - newest.render.y
        )
        geo_angle = direction_angle(
            second.geo.lon - newest.geo.lon,
            second.geo.lat - newest.geo.lat
        )
        rotation = geo_angle - render_angle

    return TransformParameters(
        scale_x=scale_x,
        scale_y=scale_y,
        offset_x=offset_x,
        offset_y=offset_y,
        rotation_radians=rotation
    )


class TransformEstimator:
    """Owns the current transform parameters and refits them on request."""

    def __init__(
        self,
        settings: Optional[CalibrationSettings] = None,
        logger_instance: Optional[Logger] = None
    ):
        """Initialize estimator with default parameters.

        Args:
            settings: Point thresholds; defaults apply when None
            logger_instance: Optional logger instance (uses global if None)
        """
        self.settings = settings or CalibrationSettings()
        self.logger = logger_instance or logger
        self._parameters = TransformParameters()

    @property
    def parameters(self) -> TransformParameters:
        return self._parameters

    def recompute(self, points: Sequence[CorrespondencePoint]) -> TransformParameters:
        """Refit parameters from ``points``.

        With fewer than the minimum number of points the previous parameters
        are kept and returned unchanged.

        Args:
            points: All stored correspondence points, in insertion order

        Returns:
            The parameters in effect after the call
        """
        if len(points) < self.settings.min_points:
            self.logger.warning(
                f"Need at least {self.settings.min_points} calibration points "
                f"to calculate transform, have {len(points)}"
            )
            return self._parameters

        self._parameters = estimate_transform(
            points, self._parameters, self.settings, self.logger
        )

        params = self._parameters
        self.logger.info(
            f"Calibration parameters calculated: scale=({params.scale_x:.6g}, "
            f"{params.scale_y:.6g}), offset=({params.offset_x:.6g}, "
            f"{params.offset_y:.6g}), rotation={params.rotation_degrees:.3f} deg"
        )
        return self._parameters

    def reset(self) -> None:
        """Restore default parameters."""
        self._parameters = TransformParameters()

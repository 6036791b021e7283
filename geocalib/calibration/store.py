"""Append-only store of observed correspondence points."""

import time
from typing import Callable, List, Optional, Tuple

from loguru import logger

from ..core.interfaces import Logger
from ..core.types import (
    CalibrationStatus, CorrespondencePoint, GeoPoint, RenderPoint, TransformParameters
)
from .estimator import TransformEstimator


class CalibrationStore:
    """Holds correspondence points and triggers refits as they arrive.

    Points are never mutated or de-duplicated. Every ``add_point`` that leaves
    the store with at least ``min_points`` points refits the transform in full.
    """

    def __init__(
        self,
        estimator: Optional[TransformEstimator] = None,
        clock: Callable[[], float] = time.monotonic,
        logger_instance: Optional[Logger] = None
    ):
        """Initialize an empty store.

        Args:
            estimator: Estimator that owns the transform parameters
            clock: Monotonic time source used to stamp points
            logger_instance: Optional logger instance (uses global if None)
        """
        self.logger = logger_instance or logger
        self.estimator = estimator or TransformEstimator(logger_instance=self.logger)
        self._clock = clock
        self._points: List[CorrespondencePoint] = []

    @property
    def points(self) -> Tuple[CorrespondencePoint, ...]:
        return tuple(self._points)

    @property
    def point_count(self) -> int:
        return len(self._points)

    @property
    def min_points(self) -> int:
        return self.estimator.settings.min_points

    @property
    def is_calibrated(self) -> bool:
        return self.point_count >= self.min_points

    @property
    def parameters(self) -> TransformParameters:
        return self.estimator.parameters

    def add_point(
        self,
        render_x: float,
        render_y: float,
        geo_lat: float,
        geo_lon: float
    ) -> CorrespondencePoint:
        """Record a render position observed at a known geographic position.

        Args:
            render_x: Render-space x
            render_y: Render-space y
            geo_lat: Latitude in degrees
            geo_lon: Longitude in degrees

        Returns:
            The stored CorrespondencePoint
        """
        return self.add_correspondence(
            RenderPoint(float(render_x), float(render_y)),
            GeoPoint(float(geo_lat), float(geo_lon))
        )

    def add_correspondence(self, render: RenderPoint, geo: GeoPoint) -> CorrespondencePoint:
        """Typed variant of :meth:`add_point`.

        The point is kept only if the refit it triggers succeeds.
        """
        point = CorrespondencePoint(render=render, geo=geo, observed_at=self._clock())
        candidate = self._points + [point]

        if len(candidate) >= self.min_points:
            self.estimator.recompute(candidate)

        self._points = candidate
        self.logger.debug(
            f"Calibration point {self.point_count} added: render={tuple(render)} geo={tuple(geo)}"
        )
        return point

    def clear(self) -> None:
        """Discard all points and reset the transform to defaults."""
        self._points = []
        self.estimator.reset()
        self.logger.info("Calibration data cleared")

    def status(self) -> CalibrationStatus:
        """Snapshot of point count, calibration state and parameters."""
        return CalibrationStatus(
            point_count=self.point_count,
            is_calibrated=self.is_calibrated,
            parameters=self.estimator.parameters
        )

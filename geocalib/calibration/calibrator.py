"""Coordinate calibrator: the engine's public entry point.

Wires a CalibrationStore, its TransformEstimator, a FallbackProjector and a
CoordinateMapper into one object. Each instance is an independent
calibration context; nothing is shared at module level.
"""

import time
from typing import Callable, Optional

from loguru import logger

from ..core.config_spec import CalibrationSettings, GeoCalibConfig
from ..core.interfaces import IMapProvider, IRenderHost, Logger
from ..core.types import (
    CalibrationStatus, CorrespondencePoint, GeoPoint, Projection, RenderPoint,
    TransformParameters
)
from ..providers.static import StaticMapProvider, StaticRenderHost
from .estimator import TransformEstimator
from .fallback import FallbackProjector
from .mapper import CoordinateMapper
from .store import CalibrationStore


class CoordinateCalibrator:
    """Learns and applies a render <-> geographic transform."""

    def __init__(
        self,
        render_host: IRenderHost,
        map_provider: Optional[IMapProvider] = None,
        settings: Optional[CalibrationSettings] = None,
        clock: Callable[[], float] = time.monotonic,
        logger_instance: Optional[Logger] = None
    ):
        """Initialize calibrator.

        Args:
            render_host: Supplies the viewport size for fallback projection
            map_provider: External map used before calibration is available
            settings: Point thresholds and strictness
            clock: Monotonic time source used to stamp points
            logger_instance: Optional logger instance (uses global if None)
        """
        self.settings = settings or CalibrationSettings()
        self.logger = logger_instance or logger

        self.estimator = TransformEstimator(self.settings, self.logger)
        self.store = CalibrationStore(self.estimator, clock, self.logger)
        self.fallback = FallbackProjector(
            render_host, map_provider, strict=self.settings.strict, logger_instance=self.logger
        )
        self.mapper = CoordinateMapper(self.store, self.fallback, self.logger)

    @classmethod
    def from_config(
        cls,
        config: GeoCalibConfig,
        logger_instance: Optional[Logger] = None
    ) -> 'CoordinateCalibrator':
        """Build a calibrator with static providers and preload configured points."""
        instance = cls(
            render_host=StaticRenderHost.from_config(config.viewport),
            map_provider=StaticMapProvider.from_config(config.map_view),
            settings=config.calibration,
            logger_instance=logger_instance
        )
        for spec in config.points:
            instance.store.add_correspondence(spec.render_point(), spec.geo_point())
        return instance

    @property
    def parameters(self) -> TransformParameters:
        return self.estimator.parameters

    @property
    def is_calibrated(self) -> bool:
        return self.store.is_calibrated

    def add_point(
        self,
        render_x: float,
        render_y: float,
        geo_lat: float,
        geo_lon: float
    ) -> CorrespondencePoint:
        """Record a correspondence point; refits once enough points exist."""
        return self.store.add_point(render_x, render_y, geo_lat, geo_lon)

    def clear(self) -> None:
        """Discard all points and reset the transform."""
        self.store.clear()

    def status(self) -> CalibrationStatus:
        return self.store.status()

    def to_geographic(self, point: RenderPoint) -> Projection:
        return self.mapper.to_geographic(point)

    def to_render(self, point: GeoPoint) -> Projection:
        return self.mapper.to_render(point)

    def log_calibration_summary(self) -> None:
        """Log the parameters currently applied to conversions."""
        if not self.is_calibrated:
            self.logger.warning(
                f"Not enough calibration points to apply calibration "
                f"({self.store.point_count}/{self.settings.min_points})"
            )
            return

        self.logger.info("📊 Current calibration parameters:")
        for name, value in self.parameters.as_dict().items():
            self.logger.info(f"   {name}: {value:.9g}")

"""Render-to-geographic calibration.

This module learns a transform from observed correspondence points and
converts coordinates in both directions, falling back to the map provider's
own projection until enough points are known.
"""

from .store import CalibrationStore
from .estimator import TransformEstimator, estimate_transform
from .mapper import CoordinateMapper
from .fallback import FallbackProjector
from .calibrator import CoordinateCalibrator
from .accuracy import PositionAccuracyTester, PositionTest, AccuracyStatistics

__all__ = [
    "CalibrationStore",
    "TransformEstimator",
    "estimate_transform",
    "CoordinateMapper",
    "FallbackProjector",
    "CoordinateCalibrator",
    "PositionAccuracyTester",
    "PositionTest",
    "AccuracyStatistics"
]

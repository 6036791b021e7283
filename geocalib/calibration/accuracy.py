"""Position accuracy testing for calibrated conversions.

Compares calculated geographic positions against independently known ones,
scores each comparison by great-circle distance, and summarises the history
as statistics and a text report.
"""

import time
from collections import deque
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Callable, List, Optional, Union

import numpy as np
import pandas as pd
from loguru import logger

from ..core.config_spec import AccuracySettings
from ..core.constants import AccuracyDefaults
from ..core.conversion_utils import haversine_distance
from ..core.enums import CalibrationQuality
from ..core.interfaces import Logger
from ..core.types import GeoPoint, RenderPoint


@dataclass(frozen=True)
class PositionTest:
    """One comparison between a calculated and an expected position."""
    timestamp: float
    render_x: float
    render_y: float
    calculated_lat: float
    calculated_lon: float
    expected_lat: float
    expected_lon: float
    distance_m: float
    accuracy: float
    degraded: bool = False


@dataclass(frozen=True)
class AccuracyStatistics:
    """Aggregate distance and accuracy over recorded tests."""
    total_tests: int = 0
    average_distance: float = 0.0
    average_accuracy: float = 0.0
    max_distance: float = 0.0
    min_distance: float = 0.0
    standard_deviation: float = 0.0

    @property
    def quality(self) -> CalibrationQuality:
        return CalibrationQuality.from_accuracy(self.average_accuracy)


def accuracy_score(distance: float, settings: Optional[AccuracySettings] = None) -> float:
    """Score a position error on a 0-100 scale.

    Args:
        distance: Error distance in meters
        settings: Thresholds; defaults apply when None

    Returns:
        100 within the perfect threshold, 90-100 up to the good threshold,
        50-90 up to the max distance, then decaying by 1 per 10 m to 0
    """
    settings = settings or AccuracySettings()
    perfect = settings.perfect_threshold_m
    good = settings.good_threshold_m
    max_distance = settings.max_distance_m

    if distance <= perfect:
        return 100.0
    if distance <= good:
        return 90 + 10 * (good - distance) / (good - perfect)
    if distance <= max_distance:
        return 50 + 40 * (max_distance - distance) / (max_distance - good)
    return max(0.0, 50 - (distance - max_distance) / 10)


def recommendations(stats: AccuracyStatistics) -> List[str]:
    """Advice lines derived from accuracy statistics."""
    advice = []

    if stats.average_distance > AccuracyDefaults.HIGH_MEAN_DISTANCE_M:
        advice.append("- The coordinate calculation needs significant improvement.")

    if stats.standard_deviation > AccuracyDefaults.HIGH_STD_DEVIATION_M:
        advice.append(
            "- Position calculations are inconsistent. "
            "Check for variable factors affecting calculations."
        )

    if stats.max_distance > AccuracyDefaults.OUTLIER_DISTANCE_M:
        advice.append(
            "- Extreme outliers detected. Review correspondence points for bad observations."
        )

    if not advice:
        if stats.average_accuracy >= 90:
            advice.append("- Current calibration is excellent. No changes needed.")
        else:
            advice.append("- Fine-tune the calibration for better precision.")

    return advice


class PositionAccuracyTester:
    """Records position tests and summarises calibration accuracy."""

    def __init__(
        self,
        settings: Optional[AccuracySettings] = None,
        clock: Callable[[], float] = time.time,
        logger_instance: Optional[Logger] = None
    ):
        """Initialize tester.

        Args:
            settings: Scoring thresholds and history size
            clock: Time source for test timestamps
            logger_instance: Optional logger instance (uses global if None)
        """
        self.settings = settings or AccuracySettings()
        self.logger = logger_instance or logger
        self._clock = clock
        self._tests = deque(maxlen=self.settings.history_size)

    @property
    def tests(self) -> List[PositionTest]:
        return list(self._tests)

    def record(
        self,
        render: RenderPoint,
        calculated: GeoPoint,
        expected: GeoPoint,
        degraded: bool = False
    ) -> PositionTest:
        """Score a calculated position against the expected one and store it."""
        distance = haversine_distance(calculated, expected)
        test = PositionTest(
            timestamp=self._clock(),
            render_x=render.x,
            render_y=render.y,
            calculated_lat=calculated.lat,
            calculated_lon=calculated.lon,
            expected_lat=expected.lat,
            expected_lon=expected.lon,
            distance_m=distance,
            accuracy=accuracy_score(distance, self.settings),
            degraded=degraded
        )
        self._tests.append(test)
        self.logger.debug(
            f"Position test: distance={test.distance_m:.2f}m accuracy={test.accuracy:.1f}%"
        )
        return test

    def evaluate(self, calibrator, render: RenderPoint, expected: GeoPoint) -> PositionTest:
        """Convert ``render`` with ``calibrator`` and record the result.

        Args:
            calibrator: Anything with ``to_geographic(RenderPoint) -> Projection``
            render: Render position to convert
            expected: Known true geographic position

        Returns:
            The recorded PositionTest
        """
        projection = calibrator.to_geographic(render)
        return self.record(render, projection.point, expected, projection.is_degraded)

    def statistics(self) -> AccuracyStatistics:
        """Aggregate statistics; all zero when no tests are recorded."""
        if not self._tests:
            return AccuracyStatistics()

        distances = np.array([t.distance_m for t in self._tests])
        accuracies = np.array([t.accuracy for t in self._tests])

        return AccuracyStatistics(
            total_tests=len(distances),
            average_distance=float(distances.mean()),
            average_accuracy=float(accuracies.mean()),
            max_distance=float(distances.max()),
            min_distance=float(distances.min()),
            standard_deviation=float(distances.std())
        )

    def format_report(self) -> str:
        """Format a human-readable calibration report."""
        stats = self.statistics()
        if stats.total_tests == 0:
            return "No position tests have been performed yet."

        lines = [
            "Position Calibration Report",
            "=" * 50,
            f"Total tests: {stats.total_tests}",
            f"Average distance: {stats.average_distance:.2f}m",
            f"Average accuracy: {stats.average_accuracy:.1f}%",
            f"Min distance: {stats.min_distance:.2f}m",
            f"Max distance: {stats.max_distance:.2f}m",
            f"Standard deviation: {stats.standard_deviation:.2f}m",
            "",
            f"Calibration Quality: {stats.quality.value}",
            "",
            "Recommendations:",
            *recommendations(stats)
        ]
        return "\n".join(lines)

    def to_dataframe(self) -> pd.DataFrame:
        """Recorded tests as a DataFrame, one row per test."""
        columns = list(PositionTest.__dataclass_fields__)
        return pd.DataFrame([asdict(t) for t in self._tests], columns=columns)

    def save_csv(self, output_path: Union[str, Path]) -> Path:
        """Write recorded tests to CSV.

        Args:
            output_path: Destination file

        Returns:
            Path of the written file
        """
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        self.to_dataframe().to_csv(output_path, index=False)
        self.logger.info(f"Position tests saved to: {output_path}")
        return output_path

    def clear(self) -> None:
        """Drop all recorded tests."""
        self._tests.clear()

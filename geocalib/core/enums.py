"""Enumerations for geocalib."""

from enum import Enum


class ProjectionSource(Enum):
    """Which path produced a converted coordinate."""
    CALIBRATED = "calibrated"
    PROVIDER = "provider"
    LINEAR = "linear"
    DEGRADED = "degraded"

    @property
    def is_degraded(self) -> bool:
        return self is ProjectionSource.DEGRADED


class CalibrationQuality(Enum):
    """Human-readable quality bands for position accuracy."""
    EXCELLENT = "Excellent"
    GOOD = "Good"
    MODERATE = "Moderate"
    POOR = "Poor"
    VERY_POOR = "Very Poor"

    @classmethod
    def from_accuracy(cls, mean_accuracy: float) -> 'CalibrationQuality':
        """Map a mean accuracy percentage to a quality band.

        Args:
            mean_accuracy: Mean accuracy score in percent (0-100)

        Returns:
            Matching CalibrationQuality
        """
        if mean_accuracy >= 90:
            return cls.EXCELLENT
        if mean_accuracy >= 75:
            return cls.GOOD
        if mean_accuracy >= 60:
            return cls.MODERATE
        if mean_accuracy >= 40:
            return cls.POOR
        return cls.VERY_POOR

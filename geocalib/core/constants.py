"""Constants used throughout geocalib."""


class CalibrationDefaults:
    """Calibration thresholds."""
    MIN_POINTS = 3
    MAX_RECENT_POINTS = 10
    MIN_ROTATION_POINTS = 4


class AccuracyDefaults:
    """Position accuracy thresholds (meters) and history size."""
    PERFECT_THRESHOLD_M = 1.0
    GOOD_THRESHOLD_M = 10.0
    MAX_DISTANCE_M = 100.0
    HISTORY_SIZE = 100

    # Recommendation triggers
    HIGH_MEAN_DISTANCE_M = 20.0
    HIGH_STD_DEVIATION_M = 10.0
    OUTLIER_DISTANCE_M = 50.0


# Mean Earth radius used by the haversine distance
EARTH_RADIUS_M = 6371e3

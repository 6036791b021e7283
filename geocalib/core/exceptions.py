"""Exception hierarchy for geocalib.

Exceptions are grouped by functional area. Every geocalib exception carries
a human-readable message plus an optional ``details`` dictionary with the
values that led to the failure.
"""

from typing import Any, Dict, List, Optional


class GeoCalibError(Exception):
    """Base exception for all geocalib errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize GeoCalibError with message and optional details.

        Args:
            message: Human-readable error message
            details: Optional dictionary with additional error context
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        """Return formatted error message with details if available."""
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({detail_str})"
        return self.message


# =============================================================================
# CALIBRATION EXCEPTIONS
# =============================================================================

class CalibrationError(GeoCalibError):
    """Base exception for transform estimation and coordinate mapping."""
    pass


class InsufficientDataError(CalibrationError):
    """Raised when too few correspondence points exist to fit a transform."""

    def __init__(self, required_points: int, available_points: int):
        """Initialize with point availability information.

        Args:
            required_points: Minimum number of points required
            available_points: Number of points available
        """
        message = (
            f"Insufficient calibration data: need {required_points} points, "
            f"have {available_points}"
        )
        super().__init__(message, {
            "required_points": required_points,
            "available_points": available_points
        })


class DegenerateSpanError(CalibrationError):
    """Raised in strict mode when a render-space span is zero."""

    def __init__(self, axis: str, span: float):
        """Initialize with the offending axis.

        Args:
            axis: Render axis whose span collapsed ('x' or 'y')
            span: The measured span
        """
        super().__init__(
            f"Render {axis} span is zero; scale factor is undefined",
            {"axis": axis, "span": span}
        )


class InverseUndefinedError(CalibrationError):
    """Raised when converting to render space while a scale factor is zero."""

    def __init__(self, scale_x: float, scale_y: float):
        super().__init__(
            "Transform has no inverse: scale factor is zero",
            {"scale_x": scale_x, "scale_y": scale_y}
        )


# =============================================================================
# PROVIDER EXCEPTIONS
# =============================================================================

class ProviderError(GeoCalibError):
    """Base exception for map provider and render host problems."""
    pass


class MissingProviderDataError(ProviderError):
    """Raised in strict mode when the map provider cannot supply viewport data."""

    def __init__(self, missing: List[str]):
        """Initialize with the list of unavailable provider values.

        Args:
            missing: Names of the values the provider could not supply
        """
        super().__init__(
            f"Map provider data unavailable: {', '.join(missing)}",
            {"missing": missing}
        )


# =============================================================================
# CONFIGURATION EXCEPTIONS
# =============================================================================

class ConfigurationError(GeoCalibError):
    """Base exception for configuration-related errors."""
    pass


class ConfigurationFileError(ConfigurationError):
    """Raised when configuration file cannot be found or parsed."""
    pass


class ConfigurationValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, errors: List[str]):
        """Initialize with all collected validation messages.

        Args:
            errors: One message per invalid field
        """
        message = "Configuration validation failed:\n" + "\n".join(
            f"  - {msg}" for msg in errors
        )
        super().__init__(message)
        self.errors = errors

"""Core types, configuration and interfaces for geocalib."""

# Types
from .types import (
    RenderPoint, GeoPoint, GeoBounds, ViewportSize,
    CorrespondencePoint, TransformParameters, CalibrationStatus, Projection
)
from .enums import ProjectionSource, CalibrationQuality

# Interfaces
from .interfaces import IMapProvider, IRenderHost

# Configuration
from .config_spec import GeoCalibConfig, validate_config, load_config

# Exceptions
from .exceptions import (
    GeoCalibError, CalibrationError, InsufficientDataError, DegenerateSpanError,
    InverseUndefinedError, ProviderError, MissingProviderDataError, ConfigurationError
)

__all__ = [
    # Types
    "RenderPoint",
    "GeoPoint",
    "GeoBounds",
    "ViewportSize",
    "CorrespondencePoint",
    "TransformParameters",
    "CalibrationStatus",
    "Projection",
    "ProjectionSource",
    "CalibrationQuality",

    # Interfaces
    "IMapProvider",
    "IRenderHost",

    # Configuration
    "GeoCalibConfig",
    "validate_config",
    "load_config",

    # Exceptions
    "GeoCalibError",
    "CalibrationError",
    "InsufficientDataError",
    "DegenerateSpanError",
    "InverseUndefinedError",
    "ProviderError",
    "MissingProviderDataError",
    "ConfigurationError"
]

"""Interfaces for the collaborators the calibration engine depends on."""

from abc import ABC, abstractmethod
from typing import Optional

from loguru import logger

from .types import GeoBounds, GeoPoint, RenderPoint, ViewportSize

# Type alias for logger
Logger = type(logger)


class IRenderHost(ABC):
    """Scene host that owns the render viewport."""

    @abstractmethod
    def get_viewport_size(self) -> ViewportSize:
        """Current viewport width and height in pixels."""
        pass


class IMapProvider(ABC):
    """External map that knows its own geographic viewport.

    Every method may return ``None`` when the provider cannot answer.
    """

    @abstractmethod
    def render_to_geographic(self, point: RenderPoint) -> Optional[GeoPoint]:
        """Provider's own render -> geographic conversion."""
        pass

    @abstractmethod
    def geographic_to_render(self, point: GeoPoint) -> Optional[RenderPoint]:
        """Provider's own geographic -> render conversion."""
        pass

    @abstractmethod
    def get_bounds(self) -> Optional[GeoBounds]:
        """Current geographic viewport bounds."""
        pass

    @abstractmethod
    def get_center(self) -> Optional[GeoPoint]:
        """Current geographic viewport center."""
        pass

"""Fixed-value render host and map provider.

Used by the CLI, where the viewport and the geographic view come from a
configuration file rather than a live scene or map widget.
"""

from typing import Callable, Optional

from ..core.config_spec import MapViewSettings, ViewportSettings
from ..core.interfaces import IMapProvider, IRenderHost
from ..core.types import GeoBounds, GeoPoint, RenderPoint, ViewportSize


class StaticRenderHost(IRenderHost):
    """Render host with a fixed viewport size."""

    def __init__(self, width: float, height: float):
        self._size = ViewportSize(float(width), float(height))

    @classmethod
    def from_config(cls, settings: ViewportSettings) -> 'StaticRenderHost':
        return cls(settings.width, settings.height)

    def get_viewport_size(self) -> ViewportSize:
        return self._size


class StaticMapProvider(IMapProvider):
    """Map provider reporting fixed bounds and center.

    It has no conversion of its own unless converters are injected, so the
    fallback projector goes straight to its linear projection.
    """

    def __init__(
        self,
        bounds: Optional[GeoBounds] = None,
        center: Optional[GeoPoint] = None,
        render_to_geo: Optional[Callable[[RenderPoint], Optional[GeoPoint]]] = None,
        geo_to_render: Optional[Callable[[GeoPoint], Optional[RenderPoint]]] = None
    ):
        """Initialize provider.

        Args:
            bounds: Geographic viewport bounds, None if unknown
            center: Geographic viewport center, None if unknown
            render_to_geo: Optional direct render -> geographic conversion
            geo_to_render: Optional direct geographic -> render conversion
        """
        self.bounds = bounds
        self.center = center
        self._render_to_geo = render_to_geo
        self._geo_to_render = geo_to_render

    @classmethod
    def from_config(cls, settings: Optional[MapViewSettings]) -> 'StaticMapProvider':
        """Build from map view settings; None yields a provider with no data."""
        if settings is None:
            return cls()
        return cls(bounds=settings.to_bounds(), center=settings.center_point())

    def render_to_geographic(self, point: RenderPoint) -> Optional[GeoPoint]:
        if self._render_to_geo is None:
            return None
        return self._render_to_geo(point)

    def geographic_to_render(self, point: GeoPoint) -> Optional[RenderPoint]:
        if self._geo_to_render is None:
            return None
        return self._geo_to_render(point)

    def get_bounds(self) -> Optional[GeoBounds]:
        return self.bounds

    def get_center(self) -> Optional[GeoPoint]:
        return self.center

"""Approximate conversions used before calibration has enough points."""

from typing import List, Optional, Tuple

from loguru import logger

from ..core.enums import ProjectionSource
from ..core.exceptions import MissingProviderDataError
from ..core.interfaces import IMapProvider, IRenderHost, Logger
from ..core.types import GeoBounds, GeoPoint, Projection, RenderPoint, ViewportSize


class FallbackProjector:
    """Converts coordinates without a fitted transform.

    Tries, in order: the map provider's own conversion, a linear
    degrees-per-pixel projection centred on the geographic and render viewport
    centres (north up, no rotation), and finally a degraded fixed answer.
    """

    def __init__(
        self,
        render_host: IRenderHost,
        map_provider: Optional[IMapProvider] = None,
        strict: bool = False,
        logger_instance: Optional[Logger] = None
    ):
        """Initialize projector.

        Args:
            render_host: Supplies the viewport size
            map_provider: Supplies direct conversions, bounds and center
            strict: Raise MissingProviderDataError instead of degrading
            logger_instance: Optional logger instance (uses global if None)
        """
        self.render_host = render_host
        self.map_provider = map_provider
        self.strict = strict
        self.logger = logger_instance or logger

    def to_geographic(self, point: RenderPoint) -> Projection:
        """Approximate geographic position of a render point."""
        if self.map_provider is not None:
            direct = self.map_provider.render_to_geographic(point)
            if direct is not None:
                return Projection(GeoPoint(*direct), ProjectionSource.PROVIDER)

        bounds, center, missing = self._viewport_reference()
        if center is None:
            return self._degraded(GeoPoint(0.0, 0.0), missing)
        if bounds is None:
            return self._degraded(center, missing)

        viewport = self.render_host.get_viewport_size()
        unusable = self._unusable_reference(bounds, viewport)
        if unusable is not None:
            return self._degraded(center, [unusable])

        degrees_per_pixel_x = bounds.lon_span / viewport.width
        degrees_per_pixel_y = bounds.lat_span / viewport.height
        screen_center = viewport.center

        lon = center.lon + (point.x - screen_center.x) * degrees_per_pixel_x
        # Render y grows downward
        lat = center.lat - (point.y - screen_center.y) * degrees_per_pixel_y
        return Projection(GeoPoint(lat, lon), ProjectionSource.LINEAR)

    def to_render(self, point: GeoPoint) -> Projection:
        """Approximate render position of a geographic point."""
        if self.map_provider is not None:
            direct = self.map_provider.geographic_to_render(point)
            if direct is not None:
                return Projection(RenderPoint(*direct), ProjectionSource.PROVIDER)

        viewport = self.render_host.get_viewport_size()
        screen_center = viewport.center

        bounds, center, missing = self._viewport_reference()
        if center is None or bounds is None:
            return self._degraded(screen_center, missing)
        unusable = self._unusable_reference(bounds, viewport)
        if unusable is not None:
            return self._degraded(screen_center, [unusable])

        pixels_per_degree_x = viewport.width / bounds.lon_span
        pixels_per_degree_y = viewport.height / bounds.lat_span

        x = screen_center.x + (point.lon - center.lon) * pixels_per_degree_x
        y = screen_center.y - (point.lat - center.lat) * pixels_per_degree_y
        return Projection(RenderPoint(x, y), ProjectionSource.LINEAR)

    def _viewport_reference(self) -> Tuple[Optional[GeoBounds], Optional[GeoPoint], List[str]]:
        """Bounds and center from the provider, with what was unavailable.

        The bounds midpoint stands in for a missing center.
        """
        if self.map_provider is None:
            return None, None, ["map provider"]

        bounds = self.map_provider.get_bounds()
        center = self.map_provider.get_center()
        missing = []
        if bounds is None:
            missing.append("bounds")
        if center is None:
            if bounds is not None:
                center = bounds.midpoint
            else:
                missing.append("center")
        return bounds, center, missing

    @staticmethod
    def _unusable_reference(bounds: GeoBounds, viewport: ViewportSize) -> Optional[str]:
        """Describe why a linear projection cannot be built, or None if it can."""
        if viewport.width <= 0 or viewport.height <= 0:
            return f"viewport size {tuple(viewport)}"
        if bounds.lon_span == 0 or bounds.lat_span == 0:
            return f"non-empty bounds {tuple(bounds)}"
        return None

    def _degraded(self, point, missing: List[str]) -> Projection:
        if self.strict:
            raise MissingProviderDataError(missing)
        self.logger.warning(
            f"Fallback projection degraded ({', '.join(missing)} unavailable); "
            f"returning {tuple(point)}"
        )
        return Projection(point, ProjectionSource.DEGRADED)

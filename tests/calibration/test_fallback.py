"""Tests for the pre-calibration fallback projector."""

import pytest
from unittest.mock import Mock

from geocalib.calibration.fallback import FallbackProjector
from geocalib.core.enums import ProjectionSource
from geocalib.core.exceptions import MissingProviderDataError
from geocalib.core.interfaces import IMapProvider
from geocalib.core.types import GeoBounds, GeoPoint, RenderPoint
from geocalib.providers import StaticMapProvider, StaticRenderHost


@pytest.fixture
def projector(render_host, unit_map_provider):
    return FallbackProjector(render_host, unit_map_provider)


class TestProviderConversion:
    """The provider's own conversion wins whenever it answers."""

    def test_direct_conversion_used(self, render_host):
        provider = Mock(spec=IMapProvider)
        provider.render_to_geographic.return_value = GeoPoint(12.0, 34.0)
        provider.geographic_to_render.return_value = RenderPoint(5.0, 6.0)
        projector = FallbackProjector(render_host, provider)

        geo = projector.to_geographic(RenderPoint(1, 2))
        render = projector.to_render(GeoPoint(3, 4))

        assert geo.point == GeoPoint(12.0, 34.0)
        assert geo.source is ProjectionSource.PROVIDER
        assert render.point == RenderPoint(5.0, 6.0)
        provider.render_to_geographic.assert_called_once_with(RenderPoint(1, 2))
        provider.get_bounds.assert_not_called()

    def test_declined_conversion_falls_through_to_linear(self, render_host):
        provider = StaticMapProvider(
            bounds=GeoBounds(GeoPoint(1, 1), GeoPoint(0, 0)),
            center=GeoPoint(0.5, 0.5),
            render_to_geo=lambda point: None
        )
        projector = FallbackProjector(render_host, provider)

        assert projector.to_geographic(RenderPoint(500, 500)).source is ProjectionSource.LINEAR


class TestLinearProjection:
    """Degrees-per-pixel projection around the viewport centres."""

    def test_viewport_center_maps_to_geo_center(self, projector):
        projection = projector.to_geographic(RenderPoint(500, 500))

        assert projection.point == pytest.approx((0.5, 0.5))
        assert projection.source is ProjectionSource.LINEAR
        assert not projection.is_degraded

    def test_north_is_up(self, projector):
        top = projector.to_geographic(RenderPoint(500, 0)).point
        right = projector.to_geographic(RenderPoint(1000, 500)).point

        assert top == pytest.approx((1.0, 0.5))
        assert right == pytest.approx((0.5, 1.0))

    def test_geo_to_render(self, projector):
        projection = projector.to_render(GeoPoint(0.75, 0.25))

        assert projection.point == pytest.approx((250.0, 250.0))
        assert projection.source is ProjectionSource.LINEAR

    def test_axes_scale_independently(self):
        provider = StaticMapProvider(
            bounds=GeoBounds(GeoPoint(10, 4), GeoPoint(0, 0)),
            center=GeoPoint(5, 2)
        )
        projector = FallbackProjector(StaticRenderHost(400, 500), provider)

        projection = projector.to_geographic(RenderPoint(300, 100))

        # 0.01 deg/px east-west, 0.02 deg/px north-south
        assert projection.point == pytest.approx((8.0, 3.0))

    def test_missing_center_uses_bounds_midpoint(self, render_host):
        provider = StaticMapProvider(bounds=GeoBounds(GeoPoint(1, 1), GeoPoint(0, 0)))
        projector = FallbackProjector(render_host, provider)

        projection = projector.to_geographic(RenderPoint(500, 500))

        assert projection.point == pytest.approx((0.5, 0.5))
        assert projection.source is ProjectionSource.LINEAR


class TestDegradedProjection:
    """Missing provider data degrades the result and flags it."""

    def test_no_bounds_or_center(self, render_host, warnings_containing):
        projector = FallbackProjector(render_host, StaticMapProvider())

        geo = projector.to_geographic(RenderPoint(10, 10))
        render = projector.to_render(GeoPoint(1, 1))

        assert geo.point == GeoPoint(0.0, 0.0)
        assert geo.is_degraded
        assert render.point == RenderPoint(500.0, 500.0)
        assert render.is_degraded
        assert warnings_containing("bounds, center unavailable")

    def test_center_without_bounds(self, render_host):
        projector = FallbackProjector(render_host, StaticMapProvider(center=GeoPoint(3, 4)))

        geo = projector.to_geographic(RenderPoint(10, 10))

        assert geo.point == GeoPoint(3, 4)
        assert geo.source is ProjectionSource.DEGRADED
        assert projector.to_render(GeoPoint(3, 4)).point == RenderPoint(500.0, 500.0)

    def test_no_provider_at_all(self, render_host):
        projector = FallbackProjector(render_host)

        assert projector.to_geographic(RenderPoint(1, 1)).point == GeoPoint(0.0, 0.0)
        assert projector.to_render(GeoPoint(1, 1)).is_degraded

    def test_zero_span_bounds_degrade_inverse(self, render_host):
        provider = StaticMapProvider(bounds=GeoBounds(GeoPoint(1, 1), GeoPoint(1, 0)))
        projector = FallbackProjector(render_host, provider)

        assert projector.to_render(GeoPoint(1, 0.5)).is_degraded

    def test_zero_viewport_degrades_forward(self, unit_map_provider):
        projector = FallbackProjector(StaticRenderHost(0, 0), unit_map_provider)

        projection = projector.to_geographic(RenderPoint(0, 0))

        assert projection.point == GeoPoint(0.5, 0.5)
        assert projection.is_degraded

    def test_zero_viewport_degrades_inverse(self, unit_map_provider):
        projector = FallbackProjector(StaticRenderHost(0, 0), unit_map_provider)

        projection = projector.to_render(GeoPoint(0.9, 0.1))

        assert projection.point == RenderPoint(0.0, 0.0)
        assert projection.source is ProjectionSource.DEGRADED

    def test_zero_span_bounds_degrade_forward(self, render_host, warnings_containing):
        provider = StaticMapProvider(bounds=GeoBounds(GeoPoint(1, 1), GeoPoint(1, 0)))
        projector = FallbackProjector(render_host, provider)

        projection = projector.to_geographic(RenderPoint(0, 0))

        # Center falls back to the bounds midpoint
        assert projection.point == GeoPoint(1.0, 0.5)
        assert projection.source is ProjectionSource.DEGRADED
        assert warnings_containing("non-empty bounds")

    def test_strict_mode_raises_on_zero_viewport(self, unit_map_provider):
        projector = FallbackProjector(StaticRenderHost(0, 0), unit_map_provider, strict=True)

        with pytest.raises(MissingProviderDataError):
            projector.to_render(GeoPoint(0.5, 0.5))

    def test_strict_mode_raises(self, render_host):
        projector = FallbackProjector(render_host, StaticMapProvider(), strict=True)

        with pytest.raises(MissingProviderDataError) as exc_info:
            projector.to_geographic(RenderPoint(1, 1))

        assert exc_info.value.details["missing"] == ["bounds", "center"]

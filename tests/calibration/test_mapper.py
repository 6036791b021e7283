"""Tests for forward/inverse coordinate mapping."""

import math

import numpy as np
import pytest
from unittest.mock import Mock

from geocalib.calibration.fallback import FallbackProjector
from geocalib.calibration.mapper import CoordinateMapper, apply_forward, apply_inverse
from geocalib.calibration.store import CalibrationStore
from geocalib.core.enums import ProjectionSource
from geocalib.core.exceptions import InverseUndefinedError
from geocalib.core.types import GeoPoint, Projection, RenderPoint, TransformParameters


@pytest.fixture
def store(clock):
    return CalibrationStore(clock=clock)


@pytest.fixture
def fallback():
    projector = Mock(spec=FallbackProjector)
    projector.to_geographic.return_value = Projection(GeoPoint(1, 2), ProjectionSource.LINEAR)
    projector.to_render.return_value = Projection(RenderPoint(3, 4), ProjectionSource.LINEAR)
    return projector


@pytest.fixture
def mapper(store, fallback):
    return CoordinateMapper(store, fallback)


class TestTransformApplication:
    """Test the forward and inverse formulas directly."""

    def test_forward_without_rotation(self):
        params = TransformParameters(scale_x=2.0, scale_y=3.0, offset_x=10.0, offset_y=20.0)

        assert apply_forward(params, RenderPoint(1, 1)) == GeoPoint(lat=23.0, lon=12.0)

    def test_forward_rotates_before_scaling(self):
        params = TransformParameters(rotation_radians=math.pi / 2)

        # (1, 0) rotated a quarter turn is (0, 1): lon from x', lat from y'
        assert apply_forward(params, RenderPoint(1, 0)) == pytest.approx((1.0, 0.0))

    def test_inverse_undoes_offset_then_scale(self):
        params = TransformParameters(scale_x=2.0, scale_y=3.0, offset_x=10.0, offset_y=20.0)

        assert apply_inverse(params, GeoPoint(lat=23.0, lon=12.0)) == RenderPoint(1.0, 1.0)

    @pytest.mark.parametrize("scale_x, scale_y", [(0.0, 1.0), (1.0, 0.0)])
    def test_inverse_undefined_for_zero_scale(self, scale_x, scale_y):
        params = TransformParameters(scale_x=scale_x, scale_y=scale_y)

        with pytest.raises(InverseUndefinedError):
            apply_inverse(params, GeoPoint(1, 1))

    def test_round_trip_with_rotation(self):
        params = TransformParameters(
            scale_x=3.2e-5, scale_y=-2.7e-5, offset_x=-122.4, offset_y=37.8,
            rotation_radians=0.3
        )
        rng = np.random.default_rng(42)

        for x, y in rng.uniform(-2000, 2000, size=(25, 2)):
            point = RenderPoint(float(x), float(y))
            back = apply_inverse(params, apply_forward(params, point))
            assert back == pytest.approx(point, rel=1e-9, abs=1e-6)


class TestCoordinateMapper:
    """Test routing between calibrated and fallback conversion."""

    def test_uncalibrated_delegates_to_fallback(self, mapper, fallback, store):
        store.add_point(0, 0, 0, 0)

        geo = mapper.to_geographic(RenderPoint(5, 5))
        render = mapper.to_render(GeoPoint(5, 5))

        assert geo.point == GeoPoint(1, 2)
        assert render.point == RenderPoint(3, 4)
        fallback.to_geographic.assert_called_once_with(RenderPoint(5, 5))
        fallback.to_render.assert_called_once_with(GeoPoint(5, 5))

    def test_calibrated_scenario_round_trip(self, mapper, fallback, store, scenario_points):
        for row in scenario_points:
            store.add_point(*row)

        geo = mapper.to_geographic(RenderPoint(50, 50))
        render = mapper.to_render(geo.point)

        assert geo.source is ProjectionSource.CALIBRATED
        assert geo.point == pytest.approx((0.5, 0.5))
        assert render.point == pytest.approx((50.0, 50.0))
        fallback.to_geographic.assert_not_called()

    def test_round_trip_with_estimated_rotation(self, mapper, store):
        for row in [(50, 50, 0.5, 0.5), (100, 100, 1, 1), (100, 0, 1, 0), (0, 0, 0, 0)]:
            store.add_point(*row)
        assert store.parameters.rotation_radians != 0

        for point in [RenderPoint(0, 0), RenderPoint(123.4, -56.7), RenderPoint(1e4, 3e3)]:
            back = mapper.to_render(mapper.to_geographic(point).point).point
            assert back == pytest.approx(point, rel=1e-9, abs=1e-9)

    def test_degenerate_geo_span_reports_inverse_undefined(self, mapper, store):
        for row in [(0, 0, 5, 5), (100, 0, 5, 5), (0, 100, 5, 5)]:
            store.add_point(*row)

        assert mapper.to_geographic(RenderPoint(42, 42)).point == GeoPoint(5.0, 5.0)
        with pytest.raises(InverseUndefinedError) as exc_info:
            mapper.to_render(GeoPoint(5, 5))
        assert exc_info.value.details == {"scale_x": 0.0, "scale_y": 0.0}

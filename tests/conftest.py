"""Shared fixtures for geocalib tests."""

import pytest
from loguru import logger

from geocalib.core.types import GeoBounds, GeoPoint
from geocalib.providers import StaticMapProvider, StaticRenderHost


class TickClock:
    """Deterministic monotonic clock advancing one unit per call."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        self.now += 1.0
        return self.now


@pytest.fixture
def clock():
    return TickClock()


@pytest.fixture
def log_records():
    """Capture loguru records emitted during a test."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)


@pytest.fixture
def render_host():
    return StaticRenderHost(1000, 1000)


@pytest.fixture
def unit_map_provider():
    """Map provider showing the unit square NE(1, 1) / SW(0, 0)."""
    return StaticMapProvider(
        bounds=GeoBounds(GeoPoint(1.0, 1.0), GeoPoint(0.0, 0.0)),
        center=GeoPoint(0.5, 0.5)
    )


@pytest.fixture
def scenario_points():
    """Three points giving scale 0.01 on both axes and zero offsets.

    Each entry is (render_x, render_y, lat, lon).
    """
    return [
        (0.0, 0.0, 0.0, 0.0),
        (100.0, 0.0, 0.0, 1.0),
        (0.0, 100.0, 1.0, 0.0),
    ]


@pytest.fixture
def warnings_containing(log_records):
    """Return a finder for captured warning messages containing some text."""
    def find(text):
        return [
            r["message"] for r in log_records
            if r["level"].name == "WARNING" and text in r["message"]
        ]
    return find

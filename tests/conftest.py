"""Shared test fixtures for geometry payloads and settings."""

import pytest

from geofence.core.config import Settings
from geofence.lib.geometry.types import Point, Polygon, Ring

# (lat, lon) pairs; closed unit square
SQUARE = [(0, 0), (0, 1), (1, 1), (1, 0), (0, 0)]
# Centered hole inside SQUARE
CENTER_HOLE = [(0.4, 0.4), (0.4, 0.6), (0.6, 0.6), (0.6, 0.4), (0.4, 0.4)]

EIFFEL_TOWER_POINT = '{"type":"Point","coordinates":[2.2945,48.8584]}'
OPERA_BLOCK_POLYGON = (
    '{"type":"Polygon","coordinates":[[[2.31,48.87],[2.314,48.87],[2.314,48.868],[2.31,48.868],[2.31,48.87]]]}'
)


def make_ring(pairs: list[tuple[float, float]]) -> Ring:
    """Build a Ring from (lat, lon) tuples."""
    return Ring(Point(lat, lon) for lat, lon in pairs)


@pytest.fixture
def settings(monkeypatch: pytest.MonkeyPatch) -> Settings:
    """Test application settings, isolated from the environment and .env."""
    for key in ("LOG_LEVEL", "LOG_DIR", "LOG_JSON", "DEFAULT_RADIUS_METERS", "COORDINATE_PRECISION"):
        monkeypatch.delenv(key, raising=False)
    return Settings(_env_file=None)


@pytest.fixture
def square_ring() -> Ring:
    """Unit square ring in (lat, lon)."""
    return make_ring(SQUARE)


@pytest.fixture
def square_polygon(square_ring: Ring) -> Polygon:
    """Unit square polygon without holes."""
    return Polygon([square_ring])


@pytest.fixture
def holed_polygon(square_ring: Ring) -> Polygon:
    """Unit square polygon with a centered 0.2 x 0.2 hole."""
    return Polygon([square_ring, make_ring(CENTER_HOLE)])

"""Immutable geometry value types in internal (latitude, longitude) order.

``Point``, ``Ring`` and ``Polygon`` validate their invariants on construction
and raise ``ValueError`` when violated.  Parsers and normalizers catch that
error and return ``None`` so malformed external data never escapes as an
exception.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator
from dataclasses import dataclass

MIN_RING_POINTS = 3


@dataclass(frozen=True)
class Point:
    """A WGS84 coordinate pair, latitude first."""

    latitude: float
    longitude: float

    def __post_init__(self) -> None:
        if not (math.isfinite(self.latitude) and math.isfinite(self.longitude)):
            msg = f"coordinates must be finite, got ({self.latitude}, {self.longitude})"
            raise ValueError(msg)
        if not (-90 <= self.latitude <= 90):
            msg = f"latitude must be between -90 and 90, got {self.latitude}"
            raise ValueError(msg)
        if not (-180 <= self.longitude <= 180):
            msg = f"longitude must be between -180 and 180, got {self.longitude}"
            raise ValueError(msg)

    def __str__(self) -> str:
        from geofence.lib.geometry.coordinates import format_coordinates

        return format_coordinates(self.latitude, self.longitude)

    def to_geojson_coordinates(self) -> list[float]:
        """Return ``[longitude, latitude]`` as used by GeoJSON."""
        return [self.longitude, self.latitude]

    def distance_to(self, other: Point) -> float:
        """Great-circle distance to ``other`` in meters."""
        from geofence.lib.geometry.distance import distance_meters

        return distance_meters(self, other)

    def equals(self, other: Point, tolerance_meters: float = 0.01) -> bool:
        """Compare with ``other`` within a distance tolerance.

        Args:
            other: Point to compare with.
            tolerance_meters: Maximum distance in meters; 0 or less requires
                identical coordinates.

        Returns:
            True if the points are the same within the tolerance.
        """
        if tolerance_meters <= 0:
            return self.latitude == other.latitude and self.longitude == other.longitude
        return self.distance_to(other) <= tolerance_meters


@dataclass(frozen=True)
class Ring:
    """A closed boundary of at least three points.

    The closing edge from the last point back to the first is implicit; an
    explicit repeat of the first point is allowed and harmless.
    """

    points: tuple[Point, ...]

    def __init__(self, points: Iterable[Point]) -> None:
        pts = tuple(points)
        if len(pts) < MIN_RING_POINTS:
            msg = f"ring must have at least {MIN_RING_POINTS} points, got {len(pts)}"
            raise ValueError(msg)
        object.__setattr__(self, "points", pts)

    def __len__(self) -> int:
        return len(self.points)

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    @property
    def is_closed(self) -> bool:
        """Whether the last point explicitly repeats the first."""
        return self.points[0] == self.points[-1]

    @property
    def bounds(self) -> tuple[float, float, float, float]:
        """Bounding box as ``(min_lat, min_lon, max_lat, max_lon)``."""
        lats = [p.latitude for p in self.points]
        lons = [p.longitude for p in self.points]
        return min(lats), min(lons), max(lats), max(lons)

    def reversed(self) -> Ring:
        """Return the same ring traversed in the opposite direction."""
        return Ring(reversed(self.points))


@dataclass(frozen=True)
class Polygon:
    """An outer ring followed by zero or more hole rings."""

    rings: tuple[Ring, ...]

    def __init__(self, rings: Iterable[Ring]) -> None:
        rs = tuple(rings)
        if not rs:
            msg = "polygon must have an outer ring"
            raise ValueError(msg)
        object.__setattr__(self, "rings", rs)

    @property
    def exterior(self) -> Ring:
        return self.rings[0]

    @property
    def holes(self) -> tuple[Ring, ...]:
        return self.rings[1:]


@dataclass(frozen=True)
class PointPlace:
    """A circular zone around ``center``."""

    center: Point
    tolerance_radius_meters: float = 0.0

    def __post_init__(self) -> None:
        if math.isnan(self.tolerance_radius_meters) or self.tolerance_radius_meters < 0:
            msg = f"tolerance_radius_meters must be a non-negative number, got {self.tolerance_radius_meters}"
            raise ValueError(msg)


@dataclass(frozen=True)
class PolygonPlace:
    """An arbitrary polygonal zone, holes included."""

    polygon: Polygon


Place = PointPlace | PolygonPlace

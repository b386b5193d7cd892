"""Great-circle distance on a spherical Earth."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from geofence.lib.geometry.types import Point

# Mean Earth radius (spherical model)
EARTH_RADIUS_METERS = 6_371_000.0

METERS_PER_MILE = 1_609.344


def distance_meters(a: Point, b: Point) -> float:
    """Haversine distance between two points.

    No ellipsoid or altitude correction is applied.

    Args:
        a: First point.
        b: Second point.

    Returns:
        Distance in meters; exactly 0.0 for coincident points and symmetric
        in its arguments.
    """
    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = math.radians(abs(b.latitude - a.latitude))
    dlon = math.radians(abs(b.longitude - a.longitude))

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    # Rounding can push h marginally outside [0, 1] for antipodal points
    h = min(1.0, max(0.0, h))
    return 2 * EARTH_RADIUS_METERS * math.asin(math.sqrt(h))


def meters_to_miles(meters: float) -> float:
    """Convert meters to statute miles."""
    return meters / METERS_PER_MILE

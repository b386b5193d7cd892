"""Point-in-polygon engine for segment, ring and polygon containment tests.

Containment uses even/odd ray casting with an explicit on-edge pre-check:

- A point on any edge or vertex of a ring is inside that ring.
- A polygon contains a point when its outer ring does and none of its holes
  do.  Because hole boundaries count as "inside the hole", a point exactly on
  a hole boundary is excluded from the polygon while a point on the outer
  boundary is included.

All functions are axis-order agnostic; they only require that every point
shares the same (latitude, longitude) convention.
"""

from collections.abc import Iterable, Sequence
from typing import Final

from geofence.lib.geometry.types import Point, Polygon, Ring

# Absolute tolerance (degrees / degrees squared) for on-segment collinearity
# and bounding-box checks
ON_SEGMENT_EPSILON: Final[float] = 1e-10


def is_point_on_segment(
    point: Point,
    start: Point,
    end: Point,
    eps: float = ON_SEGMENT_EPSILON,
) -> bool:
    """Test whether ``point`` lies on the segment ``start``-``end``.

    Args:
        point: Point to test.
        start: First segment endpoint.
        end: Second segment endpoint.
        eps: Absolute tolerance for the cross product and bounding box.

    Returns:
        True if the point is collinear with the segment and within its
        inclusive bounding box.

    Raises:
        ValueError: If eps is not positive.
    """
    if eps <= 0:
        msg = f"eps must be positive, got {eps}"
        raise ValueError(msg)

    y, x = point.latitude, point.longitude
    y1, x1 = start.latitude, start.longitude
    y2, x2 = end.latitude, end.longitude

    cross = (x - x1) * (y2 - y1) - (y - y1) * (x2 - x1)
    if abs(cross) > eps:
        return False

    return min(x1, x2) - eps <= x <= max(x1, x2) + eps and min(y1, y2) - eps <= y <= max(y1, y2) + eps


def _edges(ring: Ring) -> Iterable[tuple[Point, Point]]:
    """Yield every edge of the ring including the implicit closing edge."""
    points = ring.points
    previous = points[-1]
    for current in points:
        yield previous, current
        previous = current


def is_point_in_ring(point: Point, ring: Ring) -> bool:
    """Test whether ``point`` is inside or on the boundary of ``ring``.

    Args:
        point: Point to test.
        ring: Closed ring (explicit closing point optional).

    Returns:
        True if the point is on an edge/vertex or strictly inside.
    """
    min_lat, min_lon, max_lat, max_lon = ring.bounds
    eps = ON_SEGMENT_EPSILON
    if not (min_lat - eps <= point.latitude <= max_lat + eps and min_lon - eps <= point.longitude <= max_lon + eps):
        return False

    edges = list(_edges(ring))

    for start, end in edges:
        if is_point_on_segment(point, start, end):
            return True

    # Horizontal ray towards +longitude; toggles on each edge crossing
    y, x = point.latitude, point.longitude
    inside = False
    for start, end in edges:
        y1, x1 = start.latitude, start.longitude
        y2, x2 = end.latitude, end.longitude
        if (y1 > y) == (y2 > y):
            continue
        x_cross = x1 + (y - y1) * (x2 - x1) / (y2 - y1)
        if x < x_cross:
            inside = not inside
    return inside


def is_point_in_polygon(point: Point, polygon: Polygon | Sequence[Ring]) -> bool:
    """Test whether ``point`` is inside a polygon with optional holes.

    Args:
        point: Point to test.
        polygon: A Polygon, or a bare sequence of rings (outer first).

    Returns:
        True if the point is inside the outer ring and not inside any hole.
        Points on a hole boundary are excluded.
    """
    rings = polygon.rings if isinstance(polygon, Polygon) else tuple(polygon)
    if not rings:
        return False

    if not is_point_in_ring(point, rings[0]):
        return False

    return not any(is_point_in_ring(point, hole) for hole in rings[1:])


def is_point_in_multi_polygon(point: Point, polygons: Iterable[Polygon]) -> bool:
    """Test whether ``point`` is inside at least one of ``polygons``."""
    return any(is_point_in_polygon(point, polygon) for polygon in polygons)


def _distinct_vertices(ring: Ring) -> tuple[Point, ...]:
    points = ring.points
    return points[:-1] if ring.is_closed else points


def ring_centroid(ring: Ring) -> Point:
    """Mean of the ring's vertices, not counting an explicit closing point."""
    vertices = _distinct_vertices(ring)
    lat = sum(p.latitude for p in vertices) / len(vertices)
    lon = sum(p.longitude for p in vertices) / len(vertices)
    return Point(lat, lon)


def polygon_centroid(polygon: Polygon) -> Point:
    """Vertex centroid of the polygon's outer ring."""
    return ring_centroid(polygon.exterior)


def ring_area(ring: Ring) -> float:
    """Planar shoelace area of a ring in square degrees.

    Orientation-independent; no projection is applied, so the value is only
    meaningful for relative comparisons of small areas.
    """
    total = 0.0
    for start, end in _edges(ring):
        total += start.longitude * end.latitude - end.longitude * start.latitude
    return abs(total) / 2.0


def polygon_area(polygon: Polygon) -> float:
    """Outer ring area minus hole areas in square degrees, never negative."""
    area = ring_area(polygon.exterior) - sum(ring_area(hole) for hole in polygon.holes)
    return max(0.0, area)

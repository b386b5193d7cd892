"""Place authorization: is a point inside any of a list of authorized places?

Each place is a GeoJSON Point (matched within a tolerance radius) or a
GeoJSON Polygon (matched with the polygon engine).  Places that cannot be
decoded are skipped, never raised.
"""

from collections.abc import Iterable
from typing import Final

from loguru import logger

from geofence.lib.geometry.coordinates import parse_coordinates
from geofence.lib.geometry.geojson import GeometryInput, to_place
from geofence.lib.geometry.polygon import is_point_in_polygon
from geofence.lib.geometry.types import Place, Point, PointPlace, PolygonPlace

# Per-axis tolerance for radius-0 matching
EXACT_MATCH_EPSILON: Final[float] = 1e-12


def place_contains(place: Place, point: Point) -> bool:
    """Evaluate a single place against a point.

    A PointPlace with a zero radius only matches the exact same coordinates;
    callers needing tolerance must set ``tolerance_radius_meters``.

    Args:
        place: PointPlace or PolygonPlace.
        point: Query point.

    Returns:
        True if the point falls inside the place.
    """
    if isinstance(place, PointPlace):
        if place.tolerance_radius_meters > 0:
            return point.equals(place.center, place.tolerance_radius_meters)
        return (
            abs(point.latitude - place.center.latitude) < EXACT_MATCH_EPSILON
            and abs(point.longitude - place.center.longitude) < EXACT_MATCH_EPSILON
        )
    if isinstance(place, PolygonPlace):
        return is_point_in_polygon(point, place.polygon)
    msg = f"Unsupported place type: {type(place).__name__}"
    raise TypeError(msg)


def is_point_inside_places(
    point: Point,
    places: Iterable[GeometryInput],
    radius_meters: float = 0.0,
) -> bool:
    """Check whether a point falls inside any of the given places.

    Args:
        point: Query point.
        places: GeoJSON Point/Polygon payloads (JSON strings or mappings).
        radius_meters: Tolerance radius for Point places; 0.0 means exact match.

    Returns:
        True on the first matching place, False if none match or the list is
        empty.
    """
    for index, payload in enumerate(places):
        place = to_place(payload, radius_meters)
        if place is None:
            logger.debug(f"Skipping place {index}: not a valid Point or Polygon geometry")
            continue
        if place_contains(place, point):
            logger.debug(f"Point {point} matched place {index} ({type(place).__name__})")
            return True
    return False


def is_coordinates_inside_places(
    coordinates: str,
    places: Iterable[GeometryInput],
    radius_meters: float = 0.0,
) -> bool:
    """Parse a ``"lat,lon"`` string and check it against the given places.

    Returns:
        False if the coordinate string cannot be parsed, otherwise the result
        of :func:`is_point_inside_places`.
    """
    point = parse_coordinates(coordinates)
    if point is None:
        logger.debug(f"Rejecting unparseable coordinates: {coordinates!r}")
        return False
    return is_point_inside_places(point, places, radius_meters)

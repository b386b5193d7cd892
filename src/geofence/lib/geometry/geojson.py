"""GeoJSON normalizer that decodes Point/Polygon payloads into internal geometry.

GeoJSON stores positions as ``[longitude, latitude]``.  This module is the
only place where that order is swapped to the internal ``(latitude,
longitude)``; everything downstream is axis-order agnostic.

Every function returns None for malformed input; a polygon with any invalid
ring or position is rejected as a whole.
"""

import json
from collections.abc import Mapping
from numbers import Real
from typing import Any

from pydantic import ValidationError

from geofence.lib.geometry.types import MIN_RING_POINTS, Place, Point, PointPlace, Polygon, PolygonPlace, Ring
from geofence.schemas.geometry import GeometryPayload

GeometryInput = str | bytes | bytearray | Mapping[str, Any] | GeometryPayload


def decode_geometry(payload: GeometryInput) -> GeometryPayload | None:
    """Decode a JSON string or mapping into a GeometryPayload.

    Args:
        payload: JSON text, an already-decoded mapping, or a GeometryPayload.

    Returns:
        The payload, or None for invalid JSON or non-object input.
    """
    if isinstance(payload, GeometryPayload):
        return payload

    data: Any = payload
    if isinstance(payload, (str, bytes, bytearray)):
        try:
            data = json.loads(payload)
        except (ValueError, RecursionError):
            # ValueError covers JSONDecodeError, UnicodeDecodeError and
            # integers beyond the int-string conversion limit
            return None

    if not isinstance(data, Mapping):
        return None

    try:
        return GeometryPayload.model_validate(dict(data))
    except ValidationError:
        return None


def _to_internal_point(position: Any) -> Point | None:
    """Convert a ``[lon, lat]`` position to a Point, or None if malformed."""
    if not isinstance(position, (list, tuple)) or len(position) != 2:
        return None
    lon, lat = position
    # bool is a Real subclass; JSON true/false are not coordinates
    if any(isinstance(v, bool) or not isinstance(v, Real) for v in (lon, lat)):
        return None
    try:
        return Point(float(lat), float(lon))
    except (ValueError, OverflowError):
        return None


def to_point(payload: GeometryInput) -> Point | None:
    """Normalize a GeoJSON Point to an internal Point.

    Args:
        payload: ``{"type": "Point", "coordinates": [lon, lat]}`` as JSON or mapping.

    Returns:
        Point(lat, lon), or None if the type tag, coordinates or ranges are invalid.
    """
    geometry = decode_geometry(payload)
    if geometry is None or geometry.type_tag != "point":
        return None
    return _to_internal_point(geometry.coordinates)


def _to_ring(raw_ring: Any) -> Ring | None:
    if not isinstance(raw_ring, (list, tuple)) or len(raw_ring) < MIN_RING_POINTS:
        return None
    points: list[Point] = []
    for position in raw_ring:
        point = _to_internal_point(position)
        if point is None:
            return None
        points.append(point)
    return Ring(points)


def to_polygon(payload: GeometryInput) -> Polygon | None:
    """Normalize a GeoJSON Polygon to an internal Polygon.

    Args:
        payload: ``{"type": "Polygon", "coordinates": [[[lon, lat], ...], ...]}``.

    Returns:
        Polygon with rings in input order (outer first), or None if any ring
        or position is invalid.
    """
    geometry = decode_geometry(payload)
    if geometry is None or geometry.type_tag != "polygon":
        return None

    raw_rings = geometry.coordinates
    if not isinstance(raw_rings, (list, tuple)) or not raw_rings:
        return None

    rings: list[Ring] = []
    for raw_ring in raw_rings:
        ring = _to_ring(raw_ring)
        if ring is None:
            return None
        rings.append(ring)
    return Polygon(rings)


def to_place(payload: GeometryInput, radius_meters: float = 0.0) -> Place | None:
    """Build a Place from a Point or Polygon payload.

    Args:
        payload: Geometry payload.
        radius_meters: Tolerance radius attached to Point places.

    Returns:
        PointPlace, PolygonPlace, or None if the payload is neither.
    """
    geometry = decode_geometry(payload)
    if geometry is None:
        return None

    center = to_point(geometry)
    if center is not None:
        return PointPlace(center=center, tolerance_radius_meters=max(0.0, radius_meters))

    polygon = to_polygon(geometry)
    if polygon is not None:
        return PolygonPlace(polygon=polygon)

    return None

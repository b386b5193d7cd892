"""Coordinate string parsing and formatting.

Parses loosely formatted ``"lat,lon"`` / ``"lat;lon"`` strings into a
validated :class:`Point` and renders coordinate pairs back to a canonical
``"lat,lon"`` string.
"""

import math
import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

from geofence.lib.geometry.distance import distance_meters
from geofence.lib.geometry.types import Point

# Plain decimal literal, optional exponent; excludes nan/inf and underscores
_NUMBER_PATTERN = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

_WHITESPACE_PATTERN = re.compile(r"\s+")

# Strict "lat,lon" form with range enforced by the pattern itself
_STRICT_PATTERN = re.compile(
    r"^[-+]?([1-8]?\d(\.\d+)?|90(\.0+)?),\s*[-+]?(180(\.0+)?|((1[0-7]\d)|([1-9]?\d))(\.\d+)?)$"
)


def parse_coordinates(raw: str) -> Point | None:
    """Parse a ``"lat,lon"`` string into a Point.

    Accepts ``,`` or ``;`` as separator and ignores all whitespace.

    Args:
        raw: Coordinate string, e.g. ``" 48.8584 ; 2.2945 "``.

    Returns:
        The parsed Point, or None if the string is malformed or the values
        fall outside the valid latitude/longitude ranges.
    """
    if not isinstance(raw, str):
        return None

    compact = _WHITESPACE_PATTERN.sub("", raw).replace(";", ",")
    lat_str, sep, lon_str = compact.partition(",")
    if not sep:
        return None

    if not (_NUMBER_PATTERN.match(lat_str) and _NUMBER_PATTERN.match(lon_str)):
        return None

    try:
        return Point(float(lat_str), float(lon_str))
    except ValueError:
        return None


def _format_number(value: float, precision: int) -> str:
    exact = Decimal(repr(float(value)))
    with localcontext() as ctx:
        # Room for every integer digit plus the requested decimals
        ctx.prec = max(ctx.prec, max(exact.adjusted(), 0) + 1 + precision)
        rounded = exact.quantize(Decimal(1).scaleb(-precision), rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        rounded = rounded.copy_abs()
    return f"{rounded:f}"


def format_coordinates(latitude: float, longitude: float, precision: int = 6) -> str:
    """Render a coordinate pair as ``"lat,lon"``.

    Args:
        latitude: Latitude in degrees.
        longitude: Longitude in degrees.
        precision: Number of decimal digits; 0 emits integers without a
            decimal point.

    Returns:
        Canonical string using ``.`` as decimal separator, rounded half-up.

    Raises:
        ValueError: If precision is negative or a value is not finite.
    """
    if precision < 0:
        msg = f"precision must be >= 0, got {precision}"
        raise ValueError(msg)
    if not (math.isfinite(latitude) and math.isfinite(longitude)):
        msg = f"coordinates must be finite, got ({latitude}, {longitude})"
        raise ValueError(msg)
    return f"{_format_number(latitude, precision)},{_format_number(longitude, precision)}"


def is_valid_coordinate_string(raw: str) -> bool:
    """Strict check for the ``"lat,lon"`` form (comma only, ranges enforced)."""
    if not isinstance(raw, str):
        return False
    return _STRICT_PATTERN.match(raw) is not None


def to_geojson_coordinates(raw: str) -> list[float] | None:
    """Parse a ``"lat,lon"`` string and return it in GeoJSON ``[lon, lat]`` order."""
    point = parse_coordinates(raw)
    if point is None:
        return None
    return point.to_geojson_coordinates()


def coordinates_distance_meters(origin: str, destination: str) -> float | None:
    """Haversine distance between two ``"lat,lon"`` strings.

    Returns:
        Distance in meters, or None if either string cannot be parsed.
    """
    a = parse_coordinates(origin)
    b = parse_coordinates(destination)
    if a is None or b is None:
        return None
    return distance_meters(a, b)

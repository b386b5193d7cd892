"""Geometry library for point-in-place authorization.

Public API:
    - Point / Ring / Polygon: Immutable geometry value types (lat, lon order)
    - PointPlace / PolygonPlace / Place: Authorized place variants
    - parse_coordinates / format_coordinates: "lat,lon" string handling
    - is_valid_coordinate_string: Strict "lat,lon" format check
    - to_geojson_coordinates: "lat,lon" string to GeoJSON [lon, lat]
    - decode_geometry / to_point / to_polygon / to_place: GeoJSON normalization
    - distance_meters / meters_to_miles: Haversine distance
    - coordinates_distance_meters: Distance between two "lat,lon" strings
    - is_point_on_segment / is_point_in_ring / is_point_in_polygon: Containment tests
    - is_point_in_multi_polygon: Containment across several polygons
    - ring_centroid / polygon_centroid / ring_area / polygon_area: Ring measures
    - is_point_inside_places / is_coordinates_inside_places: Place authorization
    - place_contains: Single-place verdict
"""

from geofence.lib.geometry.authorizer import (
    EXACT_MATCH_EPSILON,
    is_coordinates_inside_places,
    is_point_inside_places,
    place_contains,
)
from geofence.lib.geometry.coordinates import (
    coordinates_distance_meters,
    format_coordinates,
    is_valid_coordinate_string,
    parse_coordinates,
    to_geojson_coordinates,
)
from geofence.lib.geometry.distance import EARTH_RADIUS_METERS, distance_meters, meters_to_miles
from geofence.lib.geometry.geojson import decode_geometry, to_place, to_point, to_polygon
from geofence.lib.geometry.polygon import (
    ON_SEGMENT_EPSILON,
    is_point_in_multi_polygon,
    is_point_in_polygon,
    is_point_in_ring,
    is_point_on_segment,
    polygon_area,
    polygon_centroid,
    ring_area,
    ring_centroid,
)
from geofence.lib.geometry.types import Place, Point, PointPlace, Polygon, PolygonPlace, Ring

__all__ = [
    "EARTH_RADIUS_METERS",
    "EXACT_MATCH_EPSILON",
    "ON_SEGMENT_EPSILON",
    "Place",
    "Point",
    "PointPlace",
    "Polygon",
    "PolygonPlace",
    "Ring",
    "coordinates_distance_meters",
    "decode_geometry",
    "distance_meters",
    "format_coordinates",
    "is_coordinates_inside_places",
    "is_point_in_multi_polygon",
    "is_point_in_polygon",
    "is_point_in_ring",
    "is_point_inside_places",
    "is_point_on_segment",
    "is_valid_coordinate_string",
    "meters_to_miles",
    "parse_coordinates",
    "place_contains",
    "polygon_area",
    "polygon_centroid",
    "ring_area",
    "ring_centroid",
    "to_geojson_coordinates",
    "to_place",
    "to_point",
    "to_polygon",
]

"""Typer CLI for checking points against authorized places."""

import json
from pathlib import Path

import typer

from geofence.core.config import get_settings
from geofence.core.logging import setup_logging
from geofence.lib.geometry import (
    Point,
    distance_meters,
    format_coordinates,
    is_point_inside_places,
    meters_to_miles,
    parse_coordinates,
    to_point,
    to_polygon,
)
from geofence.schemas.geometry import (
    DistanceResponse,
    NormalizedGeometryResponse,
    PlaceCheckResponse,
    PointResponse,
)

app = typer.Typer(name="geofence", help="Point-in-place geofencing CLI")


@app.callback()
def _main_callback() -> None:
    """Initialize logging for all CLI commands."""
    settings = get_settings()
    setup_logging(settings.log_level, log_dir=settings.log_dir, json_logs=settings.log_json)


def _parse_point_or_exit(raw: str) -> Point:
    point = parse_coordinates(raw)
    if point is None:
        typer.echo(f"Invalid coordinates: {raw!r} (expected 'lat,lon')", err=True)
        raise typer.Exit(code=2)
    return point


def _load_places_or_exit(path: Path) -> list:
    try:
        places = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError, RecursionError) as e:
        typer.echo(f"Cannot read places file {path}: {e}", err=True)
        raise typer.Exit(code=2) from e
    if not isinstance(places, list):
        typer.echo(f"Places file {path} must contain a JSON array of geometries", err=True)
        raise typer.Exit(code=2)
    return places


def _point_response(point: Point) -> PointResponse:
    return PointResponse(latitude=point.latitude, longitude=point.longitude)


@app.command()
def check(
    point: str = typer.Argument(..., help="Query point as 'lat,lon' or 'lat;lon'"),
    places_file: Path = typer.Option(..., "--places", help="JSON file with an array of GeoJSON Point/Polygon"),  # noqa: B008
    radius: float | None = typer.Option(None, "--radius", min=0, help="Tolerance radius in meters for Point places"),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON response"),  # noqa: FBT001
) -> None:
    """Check whether a point is inside any authorized place (exit 0 inside, 1 outside)."""
    settings = get_settings()
    query = _parse_point_or_exit(point)
    places = _load_places_or_exit(places_file)
    radius_meters = settings.default_radius_meters if radius is None else radius

    inside = is_point_inside_places(query, places, radius_meters=radius_meters)

    if as_json:
        response = PlaceCheckResponse(
            point=_point_response(query),
            radius_meters=radius_meters,
            places_count=len(places),
            inside=inside,
        )
        typer.echo(response.model_dump_json())
    else:
        rendered = format_coordinates(query.latitude, query.longitude, settings.coordinate_precision)
        typer.echo(f"{rendered}: {'inside' if inside else 'outside'} ({len(places)} places, radius {radius_meters} m)")

    if not inside:
        raise typer.Exit(code=1)


@app.command()
def distance(
    origin: str = typer.Argument(..., help="Origin as 'lat,lon'"),
    destination: str = typer.Argument(..., help="Destination as 'lat,lon'"),
    as_json: bool = typer.Option(False, "--json", help="Emit a JSON response"),  # noqa: FBT001
) -> None:
    """Print the great-circle distance between two points."""
    a = _parse_point_or_exit(origin)
    b = _parse_point_or_exit(destination)
    meters = distance_meters(a, b)

    if as_json:
        response = DistanceResponse(
            origin=_point_response(a),
            destination=_point_response(b),
            meters=meters,
            miles=meters_to_miles(meters),
        )
        typer.echo(response.model_dump_json())
    else:
        typer.echo(f"{meters:.3f} m ({meters_to_miles(meters):.3f} mi)")


@app.command()
def normalize(
    payload: str = typer.Argument(..., help='GeoJSON geometry, e.g. \'{"type":"Point","coordinates":[lon,lat]}\''),
) -> None:
    """Print a GeoJSON Point or Polygon in internal (lat, lon) order."""
    point = to_point(payload)
    if point is not None:
        response = NormalizedGeometryResponse(type="Point", point=_point_response(point))
        typer.echo(response.model_dump_json(exclude_none=True))
        return

    polygon = to_polygon(payload)
    if polygon is not None:
        rings = [[_point_response(p) for p in ring] for ring in polygon.rings]
        response = NormalizedGeometryResponse(type="Polygon", rings=rings)
        typer.echo(response.model_dump_json(exclude_none=True))
        return

    typer.echo("Payload is not a valid GeoJSON Point or Polygon", err=True)
    raise typer.Exit(code=2)


@app.command("format")
def format_command(
    latitude: float = typer.Argument(..., help="Latitude (-90 to 90)"),
    longitude: float = typer.Argument(..., help="Longitude (-180 to 180)"),
    precision: int | None = typer.Option(None, "--precision", min=0, help="Decimal digits"),
) -> None:
    """Render a coordinate pair as 'lat,lon'."""
    settings = get_settings()
    digits = settings.coordinate_precision if precision is None else precision
    try:
        rendered = format_coordinates(latitude, longitude, digits)
    except ValueError as e:
        typer.echo(f"Cannot format coordinates: {e}", err=True)
        raise typer.Exit(code=2) from e
    typer.echo(rendered)

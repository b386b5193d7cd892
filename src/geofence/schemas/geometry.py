"""Pydantic v2 schemas for geometry payloads and CLI responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class GeometryPayload(BaseModel):
    """A decoded GeoJSON-style geometry object.

    Structure is deliberately loose: ``type`` and ``coordinates`` are checked
    by the normalizers, which return None rather than raising on bad data.
    """

    model_config = ConfigDict(extra="allow", frozen=True)

    type: Any = None
    coordinates: Any = None

    @property
    def type_tag(self) -> str | None:
        """Lower-cased geometry type, or None when the tag is not a string."""
        if not isinstance(self.type, str):
            return None
        return self.type.strip().lower()


class PointResponse(BaseModel):
    """A point in internal (latitude, longitude) order."""

    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class NormalizedGeometryResponse(BaseModel):
    """Response for ``geofence normalize``."""

    type: str
    point: PointResponse | None = None
    rings: list[list[PointResponse]] | None = None


class PlaceCheckResponse(BaseModel):
    """Response for ``geofence check``."""

    point: PointResponse
    radius_meters: float = Field(..., ge=0)
    places_count: int = Field(..., ge=0)
    inside: bool


class DistanceResponse(BaseModel):
    """Response for ``geofence distance``."""

    origin: PointResponse
    destination: PointResponse
    meters: float = Field(..., ge=0)
    miles: float = Field(..., ge=0)

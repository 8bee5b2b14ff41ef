"""
Pydantic schemas for the engine boundary.

Separated from the service so they are reusable by any caller that
accepts loosely typed input (JSON bodies, queue messages, tests).
"""

from __future__ import annotations

from typing import Any, List, Optional

from pydantic import BaseModel, Field, field_validator

from floodroute.core.config import settings
from floodroute.engine.models import Coordinate, DeliveryRoute, Waypoint


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def normalise_forecast_days(days: Any) -> int:
    """
    Clamp a requested forecast length to the allowed window.

    Anything missing, non-integral (3.7, "2.5", booleans) or outside
    [MIN_FORECAST_DAYS, MAX_FORECAST_DAYS] falls back to
    DEFAULT_FORECAST_DAYS rather than being truncated or pinned to the
    nearest edge.
    """
    if isinstance(days, bool):
        return settings.DEFAULT_FORECAST_DAYS
    if isinstance(days, float) and not days.is_integer():
        return settings.DEFAULT_FORECAST_DAYS
    try:
        value = int(days)
    except (TypeError, ValueError):
        return settings.DEFAULT_FORECAST_DAYS
    if value < settings.MIN_FORECAST_DAYS or value > settings.MAX_FORECAST_DAYS:
        return settings.DEFAULT_FORECAST_DAYS
    return value


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------

class LocationInput(BaseModel):
    latitude: float = Field(
        ..., ge=-90.0, le=90.0,
        description="Latitude in decimal degrees",
        examples=[47.6062],
    )
    longitude: float = Field(
        ..., ge=-180.0, le=180.0,
        description="Longitude in decimal degrees",
        examples=[-122.3321],
    )

    def to_coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)


class ForecastQuery(BaseModel):
    """Forecast request; out-of-range day counts default to 5."""
    location: LocationInput
    days: int = Field(
        default=settings.DEFAULT_FORECAST_DAYS,
        description="Number of forecast days (1-7)",
    )

    @field_validator("days", mode="before")
    @classmethod
    def _clamp_days(cls, v: Any) -> int:
        return normalise_forecast_days(v)


class WaypointInput(BaseModel):
    latitude: float = Field(..., ge=-90.0, le=90.0)
    longitude: float = Field(..., ge=-180.0, le=180.0)
    name: Optional[str] = None
    description: Optional[str] = None
    sequence_number: Optional[int] = Field(default=None, ge=0)


class RouteInput(BaseModel):
    """A delivery route as supplied by the route-management layer."""
    route_id: str = Field(..., min_length=1)
    name: str = ""
    description: str = ""
    distance_miles: float = Field(default=0.0, ge=0.0)
    estimated_minutes: int = Field(default=0, ge=0)
    supplier: str = ""
    affected_products: List[str] = Field(default_factory=list)
    waypoints: List[WaypointInput] = Field(default_factory=list)

    def to_route(self) -> DeliveryRoute:
        """Build an engine route; waypoints keep their given order."""
        waypoints = [
            Waypoint(
                latitude=wp.latitude,
                longitude=wp.longitude,
                sequence_number=(
                    wp.sequence_number if wp.sequence_number is not None else i
                ),
                name=wp.name,
                description=wp.description,
            )
            for i, wp in enumerate(self.waypoints)
        ]
        return DeliveryRoute(
            route_id=self.route_id,
            name=self.name,
            description=self.description,
            distance_miles=self.distance_miles,
            estimated_minutes=self.estimated_minutes,
            supplier=self.supplier,
            affected_products=list(self.affected_products),
            waypoints=waypoints,
        )

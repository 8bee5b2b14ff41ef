"""
Engine boundary — validation and defaulting in front of the engine.

The route-management layer calls this module, never the simulator
directly.  All input checking happens here:

    • coordinates outside [-90, 90] / [-180, 180] → ValidationError
    • forecast day counts outside [1, 7]          → defaulted to 5
    • loosely typed route payloads                → DeliveryRoute
    • routes with no waypoints                    → InvalidRouteError

Usage:
    from floodroute.api.service import get_service

    service = get_service()
    service.forecast(47.6062, -122.3321, days=10)   # → 5 days
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Any, Iterable, List, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from floodroute.core.config import settings
from floodroute.core.errors import ValidationError
from floodroute.engine.models import (
    CurrentWeather,
    DeliveryRoute,
    ForecastDay,
    RouteRiskAssessment,
)
from floodroute.engine.route_risk import RouteRiskAggregator
from floodroute.engine.weather_simulator import WeatherSimulator
from floodroute.api.schemas import ForecastQuery, LocationInput, RouteInput

logger = logging.getLogger(__name__)

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def _validate(schema: Type[SchemaT], data: Any) -> SchemaT:
    """Run pydantic validation, re-raising failures as ValidationError."""
    try:
        return schema.model_validate(data)
    except PydanticValidationError as exc:
        errors = exc.errors()
        first = errors[0] if errors else {}
        field = ".".join(str(p) for p in first.get("loc", ())) or None
        logger.warning("Rejected %s input: %s", schema.__name__, first.get("msg"))
        raise ValidationError(
            f"Invalid {schema.__name__}: {first.get('msg', 'validation failed')}",
            field=field,
            errors=[
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")}
                for e in errors
            ],
        ) from exc


class RiskEngineService:
    """Validated entry points for weather lookups and route assessment."""

    def __init__(self, simulator: Optional[WeatherSimulator] = None):
        self.simulator = simulator or WeatherSimulator()
        self.aggregator = RouteRiskAggregator(self.simulator)

    def current_weather(self, latitude: float, longitude: float) -> CurrentWeather:
        location = _validate(
            LocationInput, {"latitude": latitude, "longitude": longitude}
        )
        return self.simulator.current_weather(location.to_coordinate())

    def forecast(
        self,
        latitude: float,
        longitude: float,
        days: Any = settings.DEFAULT_FORECAST_DAYS,
    ) -> List[ForecastDay]:
        query = _validate(
            ForecastQuery,
            {"location": {"latitude": latitude, "longitude": longitude}, "days": days},
        )
        if query.days != days:
            logger.info(
                "Forecast days %r out of range, using %d", days, query.days,
                extra={"forecast_days": query.days},
            )
        return self.simulator.forecast(query.location.to_coordinate(), query.days)

    def flood_risk(self, latitude: float, longitude: float) -> int:
        """Composite location flood risk, 0–10."""
        location = _validate(
            LocationInput, {"latitude": latitude, "longitude": longitude}
        )
        return self.simulator.flood_risk_for_location(location.to_coordinate())

    def assess_route(
        self,
        route: Union[DeliveryRoute, Mapping[str, Any]],
    ) -> RouteRiskAssessment:
        """
        Assess a route, annotating it in place.

        Accepts an engine ``DeliveryRoute`` or a mapping matching
        ``RouteInput``.  A mapping is converted first, so the caller
        should read annotations from ``DeliveryRoute`` objects it owns.
        """
        if not isinstance(route, DeliveryRoute):
            route = _validate(RouteInput, route).to_route()
        return self.aggregator.assess(route)

    def assess_routes(
        self,
        routes: Iterable[DeliveryRoute],
    ) -> List[RouteRiskAssessment]:
        """Re-assess every route, in order."""
        return [self.assess_route(route) for route in routes]


@lru_cache()
def get_service() -> RiskEngineService:
    """Cached service built from settings."""
    return RiskEngineService()

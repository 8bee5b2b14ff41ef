"""
Risk-scoring and weather-simulation engine.

Pure computation over the inputs it is given; the only shared state is
each ``WeatherSimulator``'s random generator.
"""

from .models import (
    ConditionCategory,
    Coordinate,
    CurrentWeather,
    DeliveryRoute,
    ForecastDay,
    RiskFactor,
    RouteRiskAssessment,
    Waypoint,
)
from .point_risk import composite_flood_risk, flood_risk, risk_description
from .region_bias import (
    DEFAULT_POLICY,
    BiasProfile,
    BoundingBoxRegion,
    RegionBiasPolicy,
    is_biased_region,
)
from .weather_simulator import WeatherSimulator
from .route_risk import RouteRiskAggregator

__all__ = [
    "ConditionCategory",
    "Coordinate",
    "CurrentWeather",
    "DeliveryRoute",
    "ForecastDay",
    "RiskFactor",
    "RouteRiskAssessment",
    "Waypoint",
    "composite_flood_risk",
    "flood_risk",
    "risk_description",
    "DEFAULT_POLICY",
    "BiasProfile",
    "BoundingBoxRegion",
    "RegionBiasPolicy",
    "is_biased_region",
    "WeatherSimulator",
    "RouteRiskAggregator",
]

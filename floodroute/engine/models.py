"""
Data structures shared by the weather simulator and the risk models.

Value objects (Coordinate, CurrentWeather, ForecastDay, RiskFactor,
RouteRiskAssessment) are produced fresh on every call and never cached.
Waypoint and DeliveryRoute are owned by the caller; the route aggregator
writes its annotations onto them in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import IntEnum
from typing import Any, Dict, List, Optional


class ConditionCategory(IntEnum):
    """Weather severity, ordered from driest to wettest."""
    CLEAR = 0
    PARTLY_CLOUDY = 1
    CLOUDY = 2
    LIGHT_RAIN = 3
    HEAVY_RAIN = 4

    @property
    def label(self) -> str:
        return _CONDITION_LABELS[self]

    @property
    def is_rain(self) -> bool:
        return self >= ConditionCategory.LIGHT_RAIN


_CONDITION_LABELS = {
    ConditionCategory.CLEAR: "Clear",
    ConditionCategory.PARTLY_CLOUDY: "Partly Cloudy",
    ConditionCategory.CLOUDY: "Cloudy",
    ConditionCategory.LIGHT_RAIN: "Light Rain",
    ConditionCategory.HEAVY_RAIN: "Heavy Rain",
}


@dataclass(frozen=True)
class Coordinate:
    """Geographic point in decimal degrees. No normalisation is applied."""
    latitude: float
    longitude: float

    def to_dict(self) -> Dict[str, float]:
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass
class CurrentWeather:
    """Snapshot of simulated conditions at a coordinate."""
    coordinate: Coordinate
    location: str
    condition: ConditionCategory
    description: str
    temperature_f: float
    humidity_pct: float
    wind_speed_mph: float
    wind_direction_deg: int
    precipitation_inches: float
    precipitation_probability: float
    recent_rainfall_inches: float      # accumulated over the past 24h
    flood_risk_level: int              # 0–10
    observation_time: datetime
    retrieval_time: datetime

    @property
    def summary(self) -> str:
        return f"{self.condition.label}: {self.description}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.coordinate.to_dict(),
            "location": self.location,
            "conditions": self.condition.label,
            "description": self.description,
            "temperature_f": round(self.temperature_f, 1),
            "humidity_pct": round(self.humidity_pct, 1),
            "wind_speed_mph": round(self.wind_speed_mph, 1),
            "wind_direction_deg": self.wind_direction_deg,
            "precipitation_inches": round(self.precipitation_inches, 2),
            "precipitation_probability": round(self.precipitation_probability, 1),
            "recent_rainfall_inches": round(self.recent_rainfall_inches, 2),
            "flood_risk_level": self.flood_risk_level,
            "observation_time": self.observation_time.isoformat(),
            "retrieval_time": self.retrieval_time.isoformat(),
        }


@dataclass
class ForecastDay:
    """One simulated forecast day."""
    coordinate: Coordinate
    forecast_date: date
    condition: ConditionCategory
    description: str
    high_temperature_f: float
    low_temperature_f: float
    precipitation_probability: float
    expected_rainfall_inches: float
    humidity_pct: float
    wind_speed_mph: float
    soil_saturation_pct: float         # 0–100
    flood_risk_level: int              # 0–10
    flood_risk_description: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            **self.coordinate.to_dict(),
            "forecast_date": self.forecast_date.isoformat(),
            "conditions": self.condition.label,
            "description": self.description,
            "high_temperature_f": round(self.high_temperature_f, 1),
            "low_temperature_f": round(self.low_temperature_f, 1),
            "precipitation_probability": round(self.precipitation_probability, 1),
            "expected_rainfall_inches": round(self.expected_rainfall_inches, 2),
            "humidity_pct": round(self.humidity_pct, 1),
            "wind_speed_mph": round(self.wind_speed_mph, 1),
            "soil_saturation_pct": round(self.soil_saturation_pct, 1),
            "flood_risk_level": self.flood_risk_level,
            "flood_risk_description": self.flood_risk_description,
        }


@dataclass(frozen=True)
class RiskFactor:
    """
    A named, weighted contributor to a route's overall risk.

    Attributes
    ----------
    name : str
        'Current Weather', 'Weather Forecast' or 'Route Terrain'.
    description : str
        Short explanation shown to the user.
    impact_level : int
        Factor's own risk score, 0–10.
    weight : float
        Share of the overall score, 0.0–1.0.
    """
    name: str
    description: str
    impact_level: int
    weight: float

    @property
    def weighted_impact(self) -> float:
        return self.impact_level * self.weight

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "impact_level": self.impact_level,
            "weight": self.weight,
            "weighted_contribution": round(self.weighted_impact, 4),
        }


@dataclass
class Waypoint:
    """A point along a delivery route, annotated with local flood risk."""
    latitude: float
    longitude: float
    sequence_number: int = 0
    name: Optional[str] = None
    description: Optional[str] = None

    # Written by the route aggregator
    local_risk_level: int = 0
    is_risk_point: bool = False

    @property
    def coordinate(self) -> Coordinate:
        return Coordinate(self.latitude, self.longitude)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "sequence_number": self.sequence_number,
            "name": self.name,
            "description": self.description,
            "local_risk_level": self.local_risk_level,
            "is_risk_point": self.is_risk_point,
        }


@dataclass
class DeliveryRoute:
    """A delivery route with ordered waypoints and its latest assessment."""
    route_id: str
    name: str = ""
    description: str = ""
    distance_miles: float = 0.0
    estimated_minutes: int = 0
    supplier: str = ""
    affected_products: List[str] = field(default_factory=list)
    waypoints: List[Waypoint] = field(default_factory=list)

    # Written by the route aggregator
    risk_level: int = 0
    weather_conditions: str = ""
    risk_factors: List[RiskFactor] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "route_id": self.route_id,
            "name": self.name,
            "description": self.description,
            "distance_miles": self.distance_miles,
            "estimated_minutes": self.estimated_minutes,
            "supplier": self.supplier,
            "affected_products": list(self.affected_products),
            "risk_level": self.risk_level,
            "weather_conditions": self.weather_conditions,
            "risk_factors": [rf.to_dict() for rf in self.risk_factors],
            "waypoints": [wp.to_dict() for wp in self.waypoints],
        }


@dataclass
class RouteRiskAssessment:
    """Complete output of a route risk assessment."""
    overall_risk_level: int            # 0–10
    risk_factors: List[RiskFactor]     # Current Weather, Weather Forecast, Route Terrain
    weather_conditions: str
    max_waypoint_risk: int = 0
    risk_point_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overall_risk_level": self.overall_risk_level,
            "weather_conditions": self.weather_conditions,
            "max_waypoint_risk": self.max_waypoint_risk,
            "risk_point_count": self.risk_point_count,
            "risk_factors": [rf.to_dict() for rf in self.risk_factors],
        }

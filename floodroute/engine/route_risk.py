"""
route_risk.py — Route-level flood risk aggregation.

Blends three explainable factors into one 0–10 route score:

═══════════════════════════════════════════════════════════════════════════
WEIGHTING FORMULA
═══════════════════════════════════════════════════════════════════════════

    Factor              Weight   Impact (0–10)
    ────────────────    ──────   ─────────────────────────────────────────
    Current Weather      0.40    point risk of the first waypoint's
                                 current weather
    Weather Forecast     0.30    composite location risk of the first
                                 waypoint (recent + 3-day expected rain)
    Route Terrain        0.30    max composite risk over all waypoints

    overall = clamp(round(Σ impact × weight), 0, 10)

The first waypoint is the representative sample for current conditions.

Side effects
============
``assess`` annotates every waypoint in place (``local_risk_level``,
``is_risk_point``) and writes ``risk_level``, ``risk_factors`` and
``weather_conditions`` onto the route, then returns the same values as a
``RouteRiskAssessment``.

The forecast factor calls the simulator again for the first waypoint
instead of reusing that waypoint's terrain score, so the two can differ
at the same location.
"""

from __future__ import annotations

import logging
from typing import Iterable, List

from floodroute.core.config import settings
from floodroute.core.errors import InvalidRouteError
from floodroute.core.logging_config import assessment_context
from floodroute.engine.models import (
    DeliveryRoute,
    RiskFactor,
    RouteRiskAssessment,
)
from floodroute.engine.point_risk import clamp_risk
from floodroute.engine.weather_simulator import WeatherSimulator

logger = logging.getLogger(__name__)


# ═══════════════════════════════════════════════════════════════════════════
# Constants
# ═══════════════════════════════════════════════════════════════════════════

# Factor weights (must sum to 1.0)
W_CURRENT_WEATHER = 0.40
W_FORECAST = 0.30
W_TERRAIN = 0.30

FACTOR_CURRENT_WEATHER = "Current Weather"
FACTOR_FORECAST = "Weather Forecast"
FACTOR_TERRAIN = "Route Terrain"

FORECAST_FACTOR_DESCRIPTION = "Based on precipitation forecast for next 72 hours"
TERRAIN_FACTOR_DESCRIPTION = "Based on elevation changes and known flood zones"


def weighted_risk(factors: Iterable[RiskFactor]) -> int:
    """Round and clamp the weighted sum of factor impacts."""
    return clamp_risk(sum(rf.weighted_impact for rf in factors))


class RouteRiskAggregator:
    """Scores delivery routes against a weather simulator."""

    def __init__(self, simulator: WeatherSimulator):
        self.simulator = simulator

    def assess(self, route: DeliveryRoute) -> RouteRiskAssessment:
        """
        Assess a route and annotate it in place.

        Raises
        ------
        InvalidRouteError
            If the route has no waypoints.
        """
        if not route.waypoints:
            raise InvalidRouteError(
                "Route has no waypoints to assess",
                route_id=route.route_id,
            )

        with assessment_context(route_id=route.route_id), self.simulator.lock:
            return self._assess(route)

    def _assess(self, route: DeliveryRoute) -> RouteRiskAssessment:
        # ---- Step 1: Waypoint risk ----
        max_waypoint_risk = 0
        risk_points = 0
        for waypoint in route.waypoints:
            local_risk = self.simulator.flood_risk_for_location(waypoint.coordinate)
            waypoint.local_risk_level = local_risk
            waypoint.is_risk_point = local_risk > settings.RISK_POINT_THRESHOLD
            if waypoint.is_risk_point:
                risk_points += 1
            max_waypoint_risk = max(max_waypoint_risk, local_risk)

        # ---- Step 2: Current conditions at the first waypoint ----
        origin = route.waypoints[0].coordinate
        weather = self.simulator.current_weather(origin)

        # ---- Step 3: Factors, fixed order ----
        forecast_risk = self.simulator.flood_risk_for_location(origin)
        factors: List[RiskFactor] = [
            RiskFactor(
                name=FACTOR_CURRENT_WEATHER,
                description=weather.condition.label,
                impact_level=weather.flood_risk_level,
                weight=W_CURRENT_WEATHER,
            ),
            RiskFactor(
                name=FACTOR_FORECAST,
                description=FORECAST_FACTOR_DESCRIPTION,
                impact_level=forecast_risk,
                weight=W_FORECAST,
            ),
            RiskFactor(
                name=FACTOR_TERRAIN,
                description=TERRAIN_FACTOR_DESCRIPTION,
                impact_level=max_waypoint_risk,
                weight=W_TERRAIN,
            ),
        ]

        # ---- Step 4: Overall score ----
        overall = weighted_risk(factors)

        # ---- Step 5: Write back onto the route ----
        route.risk_level = overall
        route.risk_factors = factors
        route.weather_conditions = weather.summary

        if forecast_risk != route.waypoints[0].local_risk_level:
            logger.debug(
                "Forecast factor %d differs from first waypoint terrain score %d",
                forecast_risk, route.waypoints[0].local_risk_level,
            )

        logger.info(
            "Route %s assessed: risk %d (%d/%d risk points)",
            route.route_id, overall, risk_points, len(route.waypoints),
            extra={
                "route_id": route.route_id,
                "risk_score": overall,
                "waypoint_count": len(route.waypoints),
            },
        )

        return RouteRiskAssessment(
            overall_risk_level=overall,
            risk_factors=factors,
            weather_conditions=weather.summary,
            max_waypoint_risk=max_waypoint_risk,
            risk_point_count=risk_points,
        )

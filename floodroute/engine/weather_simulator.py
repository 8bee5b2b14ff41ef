"""
weather_simulator.py — Deterministic simulated weather for flood scoring.

Produces current conditions and multi-day forecasts for a coordinate
from a single seeded ``numpy.random.RandomState``.  The values are not
meteorologically meaningful; what matters is that a given seed and call
sequence always reproduces the same draws, so assessments are testable.

Determinism rules
=================
    • One generator per simulator, injected or built from a seed.
    • Every call advances the generator — no per-coordinate memoisation,
      so two calls for the same coordinate return different draws.
    • Draw order inside each call is fixed (see ``current_weather`` and
      ``_simulate_day``).  Changing it changes every downstream value.
    • Access is serialised with a re-entrant lock.  Composite operations
      (``flood_risk_for_location``) and callers that need contiguous
      draws (the route aggregator) hold ``simulator.lock`` across the
      whole sequence.

Regional bias
=============
The bias policy maps each coordinate to a ``BiasProfile`` that decides
the condition draw set and the recent-rainfall range.  See
``region_bias.py``.
"""

from __future__ import annotations

import logging
import threading
import time
from datetime import date, datetime, timedelta, timezone
from typing import Callable, List, Optional

import numpy as np

from floodroute.core.config import settings
from floodroute.core.errors import ValidationError
from floodroute.engine.models import (
    ConditionCategory,
    Coordinate,
    CurrentWeather,
    ForecastDay,
)
from floodroute.engine.point_risk import (
    composite_flood_risk,
    flood_risk,
    risk_description,
)
from floodroute.engine.region_bias import (
    DEFAULT_POLICY,
    BiasPredicate,
    BiasProfile,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

CURRENT_DESCRIPTION = "Simulated weather data for development"
FORECAST_DESCRIPTION = "Simulated forecast data for development"

OBSERVATION_LAG = timedelta(hours=1)  # observation precedes retrieval

# (base, span) pairs — value = base + U[0, 1) × span
TEMPERATURE_F = (45.0, 20.0)
LOW_TEMPERATURE_F = (35.0, 15.0)
HUMIDITY_PCT = (70.0, 30.0)
WIND_SPEED_MPH = (5.0, 15.0)
PRECIPITATION_INCHES = (0.1, 0.5)
PRECIPITATION_PROBABILITY = (50.0, 50.0)

EXPECTED_RAINFALL = {
    ConditionCategory.LIGHT_RAIN: (0.1, 0.7),   # [0.1, 0.8) inches
    ConditionCategory.HEAVY_RAIN: (1.0, 1.5),   # [1.0, 2.5) inches
}

SOIL_SATURATION_BASE = 60.0
SOIL_SATURATION_PER_INCH = 20.0
SOIL_SATURATION_MAX = 100.0


def time_derived_seed() -> int:
    """Seed for production-like variability (fits RandomState's 32 bits)."""
    return int(time.time() * 1000) % (2 ** 32)


def soil_saturation(expected_rainfall_inches: float) -> float:
    return min(
        SOIL_SATURATION_MAX,
        SOIL_SATURATION_BASE + expected_rainfall_inches * SOIL_SATURATION_PER_INCH,
    )


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class WeatherSimulator:
    """
    Seeded generator of current weather and forecasts.

    Parameters
    ----------
    rng : numpy.random.RandomState | None
        Generator to own.  Takes precedence over ``seed``.
    seed : int | None
        Seed for a new generator.  Defaults to ``settings.SIMULATOR_SEED``;
        if that is None too, a time-derived seed is used.
    bias_policy : callable | None
        ``Coordinate -> BiasProfile``.  Defaults to the Pacific Northwest
        policy.
    clock : callable | None
        Returns "now" as a datetime; forecast dates are offset from
        ``clock().date()``.
    """

    def __init__(
        self,
        rng: Optional[np.random.RandomState] = None,
        *,
        seed: Optional[int] = None,
        bias_policy: Optional[BiasPredicate] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        if rng is None:
            if seed is None:
                seed = settings.SIMULATOR_SEED
            if seed is None:
                seed = time_derived_seed()
            rng = np.random.RandomState(seed)
            logger.info("Weather simulator seeded with %d", seed, extra={"seed": seed})
        self.seed = seed
        self.rng = rng
        self.bias_policy: BiasPredicate = bias_policy or DEFAULT_POLICY
        self.clock = clock or _utcnow
        self.lock = threading.RLock()

    # ── Draw helpers ──

    def _uniform(self, base_span) -> float:
        base, span = base_span
        return base + float(self.rng.random_sample()) * span

    def _choose(self, choices) -> ConditionCategory:
        return ConditionCategory(choices[int(self.rng.randint(len(choices)))])

    # ── Current weather ──

    def current_weather(self, coordinate: Coordinate) -> CurrentWeather:
        """
        Simulate current conditions at a coordinate.

        Draw order: condition, recent rainfall, temperature, humidity,
        wind speed, wind direction, precipitation (rain only),
        precipitation probability (cloudy or wetter only).
        """
        profile = self.bias_policy(coordinate)

        with self.lock:
            condition = self._choose(profile.current_conditions)
            recent_rainfall = self._uniform(
                (profile.recent_rainfall_base, profile.recent_rainfall_span)
            )
            temperature = self._uniform(TEMPERATURE_F)
            humidity = self._uniform(HUMIDITY_PCT)
            wind_speed = self._uniform(WIND_SPEED_MPH)
            wind_direction = int(self.rng.randint(360))
            precipitation = (
                self._uniform(PRECIPITATION_INCHES) if condition.is_rain else 0.0
            )
            precipitation_probability = (
                self._uniform(PRECIPITATION_PROBABILITY)
                if condition >= ConditionCategory.CLOUDY else 0.0
            )

        retrieval_time = self.clock()
        weather = CurrentWeather(
            coordinate=coordinate,
            location=f"Location near {coordinate.latitude}, {coordinate.longitude}",
            condition=condition,
            description=CURRENT_DESCRIPTION,
            temperature_f=temperature,
            humidity_pct=humidity,
            wind_speed_mph=wind_speed,
            wind_direction_deg=wind_direction,
            precipitation_inches=precipitation,
            precipitation_probability=precipitation_probability,
            recent_rainfall_inches=recent_rainfall,
            flood_risk_level=flood_risk(recent_rainfall, condition),
            observation_time=retrieval_time - OBSERVATION_LAG,
            retrieval_time=retrieval_time,
        )

        logger.debug(
            "Current weather %s, recent rain %.2f\", risk %d [%s]",
            condition.label, recent_rainfall, weather.flood_risk_level, profile.name,
            extra={
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "condition": condition.label,
                "risk_score": weather.flood_risk_level,
            },
        )
        return weather

    # ── Forecast ──

    def forecast(self, coordinate: Coordinate, days: int) -> List[ForecastDay]:
        """
        Simulate ``days`` consecutive forecast days starting today.

        The caller is responsible for clamping ``days`` to its allowed
        range; a non-positive count is rejected.
        """
        if days < 1:
            raise ValidationError(
                "Forecast day count must be at least 1",
                field="days",
                days=days,
            )

        profile = self.bias_policy(coordinate)
        today = self.clock().date()

        with self.lock:
            result = [
                self._simulate_day(coordinate, profile, today, i)
                for i in range(days)
            ]

        logger.debug(
            "Forecast of %d days [%s]", days, profile.name,
            extra={
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "forecast_days": days,
            },
        )
        return result

    def _simulate_day(
        self,
        coordinate: Coordinate,
        profile: BiasProfile,
        today: date,
        day_index: int,
    ) -> ForecastDay:
        """
        Draw order: condition, expected rainfall (rain only), high temp,
        low temp, precipitation probability (cloudy or wetter only),
        humidity, wind speed.
        """
        condition = self._choose(profile.forecast_conditions)
        if profile.progressive:
            condition = ConditionCategory(
                min(ConditionCategory.HEAVY_RAIN, condition + day_index % 3)
            )

        rainfall_range = EXPECTED_RAINFALL.get(condition)
        expected_rainfall = self._uniform(rainfall_range) if rainfall_range else 0.0

        high = self._uniform(TEMPERATURE_F)
        low = self._uniform(LOW_TEMPERATURE_F)
        precipitation_probability = (
            self._uniform(PRECIPITATION_PROBABILITY)
            if condition >= ConditionCategory.CLOUDY else 0.0
        )
        humidity = self._uniform(HUMIDITY_PCT)
        wind_speed = self._uniform(WIND_SPEED_MPH)

        level = flood_risk(expected_rainfall, condition)
        return ForecastDay(
            coordinate=coordinate,
            forecast_date=today + timedelta(days=day_index),
            condition=condition,
            description=FORECAST_DESCRIPTION,
            high_temperature_f=high,
            low_temperature_f=low,
            precipitation_probability=precipitation_probability,
            expected_rainfall_inches=expected_rainfall,
            humidity_pct=humidity,
            wind_speed_mph=wind_speed,
            soil_saturation_pct=soil_saturation(expected_rainfall),
            flood_risk_level=level,
            flood_risk_description=risk_description(level),
        )

    # ── Composite location risk ──

    def flood_risk_for_location(self, coordinate: Coordinate) -> int:
        """
        Composite flood risk: recent rainfall plus the next few days of
        expected rainfall, scaled ×2 and clamped to 0–10.

        Draws one current-weather sample followed by a
        ``settings.COMPOSITE_FORECAST_DAYS`` forecast, under one lock.
        """
        with self.lock:
            current = self.current_weather(coordinate)
            outlook = self.forecast(coordinate, settings.COMPOSITE_FORECAST_DAYS)

        level = composite_flood_risk(
            current.recent_rainfall_inches,
            (day.expected_rainfall_inches for day in outlook),
        )
        logger.debug(
            "Composite flood risk %d", level,
            extra={
                "lat": coordinate.latitude,
                "lon": coordinate.longitude,
                "risk_score": level,
            },
        )
        return level

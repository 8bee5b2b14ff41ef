"""
Tests for the deterministic weather simulator.

Covers:
    • Regional bias (Seattle wet, Null Island unbiased)
    • Derived-field rules for current weather and forecast days
    • Forecast length, dates and progressive wetting
    • Seed reproducibility and injected generators
    • Composite location risk
"""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from floodroute.core.config import settings
from floodroute.core.errors import ValidationError
from floodroute.engine.models import ConditionCategory, Coordinate
from floodroute.engine.point_risk import (
    composite_flood_risk,
    flood_risk,
    risk_description,
)
from floodroute.engine.region_bias import RegionBiasPolicy
from floodroute.engine.weather_simulator import (
    OBSERVATION_LAG,
    WeatherSimulator,
    soil_saturation,
)

SEATTLE = Coordinate(47.6062, -122.3321)
NULL_ISLAND = Coordinate(0.0, 0.0)
FIXED_NOW = datetime(2024, 11, 5, 12, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


@pytest.fixture
def simulator() -> WeatherSimulator:
    return WeatherSimulator(seed=42, clock=fixed_clock)


# ═══════════════════════════════════════════════════════════════════════════
# Current weather
# ═══════════════════════════════════════════════════════════════════════════

class TestCurrentWeatherBias:
    def test_seattle_is_rainy(self, simulator):
        for _ in range(100):
            weather = simulator.current_weather(SEATTLE)
            assert weather.condition in (
                ConditionCategory.LIGHT_RAIN, ConditionCategory.HEAVY_RAIN,
            )
            assert 0.5 <= weather.recent_rainfall_inches <= 2.5

    def test_null_island_light_rainfall(self, simulator):
        for _ in range(100):
            weather = simulator.current_weather(NULL_ISLAND)
            assert 0.0 <= weather.recent_rainfall_inches < 1.0

    def test_null_island_sees_every_condition(self, simulator):
        seen = {simulator.current_weather(NULL_ISLAND).condition for _ in range(200)}
        assert seen == set(ConditionCategory)

    def test_policy_without_regions_unbiases_seattle(self):
        sim = WeatherSimulator(seed=1, bias_policy=RegionBiasPolicy([]))
        for _ in range(50):
            assert sim.current_weather(SEATTLE).recent_rainfall_inches < 1.0


class TestCurrentWeatherFields:
    def test_ranges(self, simulator):
        for _ in range(100):
            w = simulator.current_weather(NULL_ISLAND)
            assert 45.0 <= w.temperature_f < 65.0
            assert 70.0 <= w.humidity_pct < 100.0
            assert 5.0 <= w.wind_speed_mph < 20.0
            assert 0 <= w.wind_direction_deg < 360

    def test_precipitation_only_when_raining(self, simulator):
        for _ in range(200):
            w = simulator.current_weather(NULL_ISLAND)
            if w.condition >= ConditionCategory.LIGHT_RAIN:
                assert 0.1 <= w.precipitation_inches < 0.6
            else:
                assert w.precipitation_inches == 0.0

    def test_probability_only_when_cloudy_or_wetter(self, simulator):
        for _ in range(200):
            w = simulator.current_weather(NULL_ISLAND)
            if w.condition >= ConditionCategory.CLOUDY:
                assert 50.0 <= w.precipitation_probability < 100.0
            else:
                assert w.precipitation_probability == 0.0

    def test_flood_level_uses_point_formula(self, simulator):
        for _ in range(50):
            w = simulator.current_weather(SEATTLE)
            assert w.flood_risk_level == flood_risk(w.recent_rainfall_inches, w.condition)
            assert 0 <= w.flood_risk_level <= 10

    def test_timestamps(self, simulator):
        w = simulator.current_weather(SEATTLE)
        assert w.retrieval_time == FIXED_NOW
        assert w.observation_time == FIXED_NOW - OBSERVATION_LAG
        assert w.observation_time < w.retrieval_time

    def test_summary_and_location(self, simulator):
        w = simulator.current_weather(SEATTLE)
        assert w.summary == f"{w.condition.label}: {w.description}"
        assert w.location == "Location near 47.6062, -122.3321"
        assert w.coordinate == SEATTLE

    def test_to_dict(self, simulator):
        d = simulator.current_weather(SEATTLE).to_dict()
        assert d["latitude"] == 47.6062
        assert d["conditions"] in ("Light Rain", "Heavy Rain")
        assert d["retrieval_time"] == FIXED_NOW.isoformat()


# ═══════════════════════════════════════════════════════════════════════════
# Forecast
# ═══════════════════════════════════════════════════════════════════════════

class TestForecast:
    @pytest.mark.parametrize("days", [1, 3, 5, 7])
    def test_length(self, simulator, days):
        assert len(simulator.forecast(NULL_ISLAND, days)) == days

    def test_consecutive_dates_from_today(self, simulator):
        outlook = simulator.forecast(SEATTLE, 7)
        assert [d.forecast_date for d in outlook] == [
            date(2024, 11, 5) + timedelta(days=i) for i in range(7)
        ]

    @pytest.mark.parametrize("days", [0, -1])
    def test_rejects_non_positive_days(self, simulator, days):
        with pytest.raises(ValidationError) as exc_info:
            simulator.forecast(SEATTLE, days)
        assert exc_info.value.details["field"] == "days"

    def test_rainfall_by_condition(self, simulator):
        for _ in range(40):
            for day in simulator.forecast(NULL_ISLAND, 7):
                if day.condition == ConditionCategory.HEAVY_RAIN:
                    assert 1.0 <= day.expected_rainfall_inches < 2.5
                elif day.condition == ConditionCategory.LIGHT_RAIN:
                    assert 0.1 <= day.expected_rainfall_inches < 0.8
                else:
                    assert day.expected_rainfall_inches == 0.0

    def test_derived_fields(self, simulator):
        for _ in range(40):
            for day in simulator.forecast(SEATTLE, 7):
                assert day.soil_saturation_pct == pytest.approx(
                    min(100.0, 60.0 + day.expected_rainfall_inches * 20.0)
                )
                assert 0.0 <= day.soil_saturation_pct <= 100.0
                assert day.flood_risk_level == flood_risk(
                    day.expected_rainfall_inches, day.condition
                )
                assert day.flood_risk_description == risk_description(day.flood_risk_level)
                if day.condition >= ConditionCategory.CLOUDY:
                    assert 50.0 <= day.precipitation_probability < 100.0
                else:
                    assert day.precipitation_probability == 0.0
                assert 45.0 <= day.high_temperature_f < 65.0
                assert 35.0 <= day.low_temperature_f < 50.0

    def test_biased_days_get_wetter(self, simulator):
        """Day i's ordinal is at least (i mod 3) inside the wet region."""
        for _ in range(40):
            outlook = simulator.forecast(SEATTLE, 7)
            assert outlook[0].condition <= ConditionCategory.CLOUDY
            for i, day in enumerate(outlook):
                assert day.condition >= i % 3

    def test_biased_first_day_never_rains(self, simulator):
        for _ in range(40):
            assert simulator.forecast(SEATTLE, 1)[0].expected_rainfall_inches == 0.0


class TestSoilSaturation:
    def test_formula(self):
        assert soil_saturation(0.0) == 60.0
        assert soil_saturation(1.0) == 80.0

    def test_capped(self):
        assert soil_saturation(2.5) == 100.0


# ═══════════════════════════════════════════════════════════════════════════
# Determinism
# ═══════════════════════════════════════════════════════════════════════════

def _run(sim: WeatherSimulator, coordinates):
    out = []
    for c in coordinates:
        out.append(sim.current_weather(c).to_dict())
        out.extend(d.to_dict() for d in sim.forecast(c, 3))
    return out


class TestDeterminism:
    COORDS = [SEATTLE, NULL_ISLAND, Coordinate(47.5412, -122.2714)]

    def test_same_seed_same_outputs(self):
        a = WeatherSimulator(seed=7, clock=fixed_clock)
        b = WeatherSimulator(seed=7, clock=fixed_clock)
        assert _run(a, self.COORDS) == _run(b, self.COORDS)

    def test_different_seed_different_outputs(self):
        a = WeatherSimulator(seed=7, clock=fixed_clock)
        b = WeatherSimulator(seed=8, clock=fixed_clock)
        assert _run(a, self.COORDS) != _run(b, self.COORDS)

    def test_injected_generator_matches_seed(self):
        a = WeatherSimulator(np.random.RandomState(3), clock=fixed_clock)
        b = WeatherSimulator(seed=3, clock=fixed_clock)
        assert _run(a, self.COORDS) == _run(b, self.COORDS)

    def test_repeat_calls_advance_state(self, simulator):
        first = simulator.current_weather(SEATTLE)
        second = simulator.current_weather(SEATTLE)
        assert first.recent_rainfall_inches != second.recent_rainfall_inches

    def test_settings_seed_is_default(self):
        a = WeatherSimulator(clock=fixed_clock)
        b = WeatherSimulator(seed=settings.SIMULATOR_SEED, clock=fixed_clock)
        assert a.seed == settings.SIMULATOR_SEED
        assert _run(a, self.COORDS) == _run(b, self.COORDS)

    def test_time_derived_seed_when_unset(self, monkeypatch):
        monkeypatch.setattr(settings, "SIMULATOR_SEED", None)
        sim = WeatherSimulator()
        assert isinstance(sim.seed, int)
        assert 0 <= sim.seed < 2 ** 32


# ═══════════════════════════════════════════════════════════════════════════
# Composite location risk
# ═══════════════════════════════════════════════════════════════════════════

class TestFloodRiskForLocation:
    def test_bounded(self, simulator):
        for coord in (SEATTLE, NULL_ISLAND, Coordinate(-33.87, 151.21)):
            for _ in range(30):
                assert 0 <= simulator.flood_risk_for_location(coord) <= 10

    def test_matches_manual_composite(self):
        """Same draws as current weather followed by a 3-day forecast."""
        a = WeatherSimulator(seed=21, clock=fixed_clock)
        b = WeatherSimulator(seed=21, clock=fixed_clock)
        for coord in (SEATTLE, NULL_ISLAND):
            current = b.current_weather(coord)
            outlook = b.forecast(coord, settings.COMPOSITE_FORECAST_DAYS)
            expected = composite_flood_risk(
                current.recent_rainfall_inches,
                [d.expected_rainfall_inches for d in outlook],
            )
            assert a.flood_risk_for_location(coord) == expected

    def test_seattle_has_nonzero_exposure(self, simulator):
        """Recent rain alone is ≥ 0.5", i.e. composite ≥ 1."""
        for _ in range(30):
            assert simulator.flood_risk_for_location(SEATTLE) >= 1

"""
point_risk.py — Flood risk scoring for a single location.

Two distinct formulas live here and must not be merged:

═══════════════════════════════════════════════════════════════════════════
1. POINT RISK  (one observation)
═══════════════════════════════════════════════════════════════════════════

    base        = rainfall_inches × 2.5
    multiplier  = 1.5  Heavy Rain
                  1.2  Light Rain
                  1.0  otherwise
    level       = clamp(round(base × multiplier), 0, 10)

    0.5" of rain ≈ level 1, 2" of rain ≈ level 5.  Used for current
    weather (recent 24h rainfall) and for each forecast day (expected
    rainfall).

═══════════════════════════════════════════════════════════════════════════
2. COMPOSITE LOCATION RISK  (combined exposure)
═══════════════════════════════════════════════════════════════════════════

    level = clamp(round((recent_24h + Σ expected_next_3_days) × 2), 0, 10)

    No condition multiplier.  Used for waypoints and for the route's
    forecast factor.

Rounding is half-up (2.5 → 3), not Python's round-half-to-even.
"""

from __future__ import annotations

import math
from typing import Iterable

from floodroute.engine.models import ConditionCategory

# ═══════════════════════════════════════════════════════════════════════════
# Constants
# ═══════════════════════════════════════════════════════════════════════════

MIN_RISK = 0
MAX_RISK = 10

RAINFALL_RISK_FACTOR = 2.5      # point risk per inch
COMPOSITE_RISK_FACTOR = 2.0     # composite risk per inch

CONDITION_MULTIPLIERS = {
    ConditionCategory.HEAVY_RAIN: 1.5,
    ConditionCategory.LIGHT_RAIN: 1.2,
}

# Description tiers (lower bound inclusive), checked top-down
HIGH_RISK_THRESHOLD = 8
MODERATE_RISK_THRESHOLD = 5
LOW_RISK_THRESHOLD = 2

RISK_DESCRIPTIONS = {
    "high": "High risk of flooding. Consider alternate routes.",
    "moderate": "Moderate flood risk. Monitor conditions.",
    "low": "Low flood risk. Exercise normal caution.",
    "minimal": "Minimal flood risk.",
}


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties away from zero for positives."""
    return int(math.floor(value + 0.5))


def clamp_risk(value: float) -> int:
    """Round and clamp any score to the 0–10 risk scale."""
    return max(MIN_RISK, min(MAX_RISK, round_half_up(value)))


# ═══════════════════════════════════════════════════════════════════════════
# Point risk
# ═══════════════════════════════════════════════════════════════════════════

def condition_multiplier(condition: ConditionCategory) -> float:
    return CONDITION_MULTIPLIERS.get(ConditionCategory(condition), 1.0)


def flood_risk(rainfall_inches: float, condition: ConditionCategory) -> int:
    """
    Flood risk level for one rainfall reading.

    Parameters
    ----------
    rainfall_inches : float
        Recent (current weather) or expected (forecast) rainfall.
    condition : ConditionCategory
        Weather condition accompanying the reading.

    Returns
    -------
    int
        Risk level ∈ [0, 10].

    Examples
    --------
    >>> flood_risk(0.0, ConditionCategory.CLEAR)
    0
    >>> flood_risk(2.0, ConditionCategory.HEAVY_RAIN)   # 5.0 × 1.5 = 7.5
    8
    """
    base_risk = rainfall_inches * RAINFALL_RISK_FACTOR
    return clamp_risk(base_risk * condition_multiplier(condition))


def risk_description(level: int) -> str:
    """Human-readable flood risk tier for a 0–10 level."""
    if level >= HIGH_RISK_THRESHOLD:
        return RISK_DESCRIPTIONS["high"]
    elif level >= MODERATE_RISK_THRESHOLD:
        return RISK_DESCRIPTIONS["moderate"]
    elif level >= LOW_RISK_THRESHOLD:
        return RISK_DESCRIPTIONS["low"]
    return RISK_DESCRIPTIONS["minimal"]


# ═══════════════════════════════════════════════════════════════════════════
# Composite location risk
# ═══════════════════════════════════════════════════════════════════════════

def composite_flood_risk(
    recent_rainfall_inches: float,
    expected_rainfall_inches: Iterable[float],
) -> int:
    """
    Combined-exposure risk from past and upcoming rainfall.

    Parameters
    ----------
    recent_rainfall_inches : float
        Rainfall over the past 24 hours.
    expected_rainfall_inches : iterable of float
        Expected rainfall for each forecast day in the window.

    Returns
    -------
    int
        Risk level ∈ [0, 10].
    """
    total = recent_rainfall_inches + sum(expected_rainfall_inches)
    return clamp_risk(total * COMPOSITE_RISK_FACTOR)

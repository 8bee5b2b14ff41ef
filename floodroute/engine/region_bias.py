"""
Regional bias policy — which weather profile the simulator uses where.

A policy is any callable ``Coordinate -> BiasProfile``.  The default
policy knows one wet region, the Pacific Northwest box

    45 < latitude < 49   and   -125 < longitude < -120

where current conditions are always rain, recent rainfall is heavier,
and forecast days get progressively wetter.  New regions are added by
passing extra ``BoundingBoxRegion`` entries to ``RegionBiasPolicy``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Tuple

from floodroute.engine.models import ConditionCategory, Coordinate

logger = logging.getLogger(__name__)

ALL_CONDITIONS: Tuple[ConditionCategory, ...] = tuple(ConditionCategory)


@dataclass(frozen=True)
class BiasProfile:
    """
    Parameters the simulator draws from for one class of location.

    Attributes
    ----------
    name : str
        Profile identifier, used in logs.
    current_conditions : tuple of ConditionCategory
        Current condition is drawn uniformly from these.
    recent_rainfall_base, recent_rainfall_span : float
        Recent 24h rainfall = base + U[0, 1) × span (inches).
    forecast_conditions : tuple of ConditionCategory
        Forecast condition is drawn uniformly from these.
    progressive : bool
        If True, forecast day i adds (i mod 3) to the drawn ordinal,
        capped at Heavy Rain, so later days trend wetter.
    biased : bool
        Marks a regional profile.  Only consulted for plain-callable
        policies; a ``RegionBiasPolicy`` answers from its regions.
    """
    name: str
    current_conditions: Tuple[ConditionCategory, ...] = ALL_CONDITIONS
    recent_rainfall_base: float = 0.0
    recent_rainfall_span: float = 1.0
    forecast_conditions: Tuple[ConditionCategory, ...] = ALL_CONDITIONS
    progressive: bool = False
    biased: bool = False


DEFAULT_PROFILE = BiasProfile(name="default")

WET_PROFILE = BiasProfile(
    name="wet",
    current_conditions=(ConditionCategory.LIGHT_RAIN, ConditionCategory.HEAVY_RAIN),
    recent_rainfall_base=0.5,
    recent_rainfall_span=2.0,
    forecast_conditions=(
        ConditionCategory.CLEAR,
        ConditionCategory.PARTLY_CLOUDY,
        ConditionCategory.CLOUDY,
    ),
    progressive=True,
    biased=True,
)


@dataclass(frozen=True)
class BoundingBoxRegion:
    """Named lat/lon box (open interval on every edge) mapped to a profile."""
    name: str
    lat_min: float
    lat_max: float
    lon_min: float
    lon_max: float
    profile: BiasProfile = WET_PROFILE

    def contains(self, coordinate: Coordinate) -> bool:
        return (
            self.lat_min < coordinate.latitude < self.lat_max
            and self.lon_min < coordinate.longitude < self.lon_max
        )


PACIFIC_NORTHWEST = BoundingBoxRegion(
    name="pacific_northwest",
    lat_min=45.0,
    lat_max=49.0,
    lon_min=-125.0,
    lon_max=-120.0,
)

BiasPredicate = Callable[[Coordinate], BiasProfile]


class RegionBiasPolicy:
    """First matching region wins; everything else gets the default profile."""

    def __init__(
        self,
        regions: Optional[Iterable[BoundingBoxRegion]] = None,
        default: BiasProfile = DEFAULT_PROFILE,
    ):
        self.regions: List[BoundingBoxRegion] = list(
            regions if regions is not None else (PACIFIC_NORTHWEST,)
        )
        self.default = default

    def region_for(self, coordinate: Coordinate) -> Optional[BoundingBoxRegion]:
        for region in self.regions:
            if region.contains(coordinate):
                return region
        return None

    def is_biased(self, coordinate: Coordinate) -> bool:
        return self.region_for(coordinate) is not None

    def __call__(self, coordinate: Coordinate) -> BiasProfile:
        region = self.region_for(coordinate)
        if region is None:
            return self.default
        logger.debug(
            "Coordinate (%.4f, %.4f) inside biased region %s",
            coordinate.latitude, coordinate.longitude, region.name,
            extra={"lat": coordinate.latitude, "lon": coordinate.longitude},
        )
        return region.profile


DEFAULT_POLICY = RegionBiasPolicy()


def is_biased_region(
    coordinate: Coordinate,
    policy: BiasPredicate = DEFAULT_POLICY,
) -> bool:
    """
    True if the coordinate falls in one of the policy's biased regions.

    A ``RegionBiasPolicy`` answers from its region list, so a custom
    default profile never counts as biased.  Any other callable is judged
    by the ``biased`` flag of the profile it returns.
    """
    if isinstance(policy, RegionBiasPolicy):
        return policy.is_biased(coordinate)
    return policy(coordinate).biased

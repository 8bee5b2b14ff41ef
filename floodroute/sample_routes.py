"""
Sample Seattle-area delivery routes for demos and tests.

Every call returns fresh objects, so callers can assess and mutate them
freely.  All waypoints fall inside the Pacific Northwest bias region.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from floodroute.engine.models import DeliveryRoute, Waypoint

# (latitude, longitude, name)
_Stop = Tuple[float, float, Optional[str]]


def _waypoints(stops: Sequence[_Stop]) -> List[Waypoint]:
    last = len(stops) - 1
    return [
        Waypoint(
            latitude=lat,
            longitude=lon,
            sequence_number=i,
            name=name,
            description=(
                "Starting point" if i == 0
                else "Destination point" if i == last
                else None
            ),
        )
        for i, (lat, lon, name) in enumerate(stops)
    ]


def downtown_to_capitol_hill() -> DeliveryRoute:
    return DeliveryRoute(
        route_id="route1",
        name="Downtown to Capitol Hill",
        description="Urban delivery route through downtown Seattle to Capitol Hill neighborhood",
        distance_miles=2.3,
        estimated_minutes=25,
        supplier="Urban Greens Nursery",
        affected_products=["Potted herbs", "Decorative plants"],
        waypoints=_waypoints([
            (47.6062, -122.3321, "Downtown Seattle"),
            (47.6104, -122.3260, None),
            (47.6152, -122.3214, None),
            (47.6195, -122.3185, None),
            (47.6231, -122.3142, "Capitol Hill"),
        ]),
    )


def ballard_to_fremont() -> DeliveryRoute:
    return DeliveryRoute(
        route_id="route2",
        name="Ballard to Fremont",
        description="Route crossing multiple bridges with potential flooding areas",
        distance_miles=2.1,
        estimated_minutes=20,
        supplier="Northgate Farms",
        affected_products=["Fresh produce", "Cut flowers"],
        waypoints=_waypoints([
            (47.6698, -122.3845, "Ballard"),
            (47.6605, -122.3730, None),
            (47.6515, -122.3590, None),
            (47.6470, -122.3480, "Fremont"),
        ]),
    )


def south_seattle_to_bellevue() -> DeliveryRoute:
    return DeliveryRoute(
        route_id="route3",
        name="South Seattle to Bellevue",
        description="Long route crossing Lake Washington with high flood risk areas",
        distance_miles=8.7,
        estimated_minutes=45,
        supplier="Eastside Organic Farms",
        affected_products=["Seasonal vegetables", "Organic fruit"],
        waypoints=_waypoints([
            (47.5412, -122.2714, "South Seattle"),
            (47.5494, -122.2699, None),
            (47.5587, -122.2651, None),
            (47.5667, -122.2532, None),
            (47.5750, -122.2357, None),
            (47.5902, -122.2237, "Bellevue"),
        ]),
    )


def sample_routes() -> List[DeliveryRoute]:
    return [
        downtown_to_capitol_hill(),
        ballard_to_fremont(),
        south_seattle_to_bellevue(),
    ]

"""
floodroute — flood risk scoring for delivery routes.

Sub-packages:
    core    — settings, logging, exception hierarchy
    engine  — weather simulation, point risk, route risk aggregation
    api     — in-process boundary used by route-management callers
"""

__version__ = "1.0.0"

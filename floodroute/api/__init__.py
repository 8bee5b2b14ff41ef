"""
In-process boundary for route-management callers.

Modules:
    schemas  — pydantic input models and forecast-day defaulting
    service  — RiskEngineService, validated entry points into the engine
"""

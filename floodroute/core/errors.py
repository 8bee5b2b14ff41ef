"""
Centralised error handling — exception hierarchy.

Provides:
    • Domain-specific exception classes
    • Consistent error payload format for callers that serve results

Usage:
    from floodroute.core.errors import (
        FloodRouteError,
        ValidationError,
        InvalidRouteError,
    )

    raise InvalidRouteError("Route has no waypoints", route_id="route1")
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class FloodRouteError(Exception):
    """Base exception for all engine errors."""

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        *,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Consistent error body for callers that expose engine failures."""
        body: Dict[str, Any] = {
            "error": {
                "code": self.error_code,
                "message": self.message,
                "status": self.status_code,
            }
        }
        if self.details:
            body["error"]["details"] = self.details
        return body


class ValidationError(FloodRouteError):
    """Input validation failed (422)."""

    def __init__(
        self,
        message: str,
        *,
        field: Optional[str] = None,
        error_code: str = "VALIDATION_ERROR",
        **details: Any,
    ):
        d = {**details}
        if field:
            d["field"] = field
        super().__init__(
            message=message,
            status_code=422,
            error_code=error_code,
            details=d,
        )


class InvalidRouteError(ValidationError):
    """Route cannot be assessed, e.g. it has no waypoints (422)."""

    def __init__(self, message: str = "Invalid route", **details: Any):
        super().__init__(
            message,
            field="waypoints",
            error_code="INVALID_ROUTE",
            **details,
        )

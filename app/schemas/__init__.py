"""
app/schemas package marker.
"""

from app.schemas.routes import (
    FieldErrorResponse,
    RouteHealthResponse,
    RouteListResponse,
    RouteRecordErrorResponse,
    RouteResponse,
    RouteSortField,
)

__all__ = [
    "FieldErrorResponse",
    "RouteHealthResponse",
    "RouteListResponse",
    "RouteRecordErrorResponse",
    "RouteResponse",
    "RouteSortField",
]

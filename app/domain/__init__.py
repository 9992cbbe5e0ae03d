"""
app/domain package marker.
"""

from app.domain.file_split import ScanSummary, SplitPart, SplitResult
from app.domain.gtfs_route import (
    FieldValidationError,
    ProcessedRoutes,
    Route,
    RouteRecordError,
    RouteStore,
    route_type_name,
)

__all__ = [
    "FieldValidationError",
    "ProcessedRoutes",
    "Route",
    "RouteRecordError",
    "RouteStore",
    "ScanSummary",
    "SplitPart",
    "SplitResult",
    "route_type_name",
]

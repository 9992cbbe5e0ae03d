"""
app/domain/gtfs_route.py

Domain models used by the routes.txt loading flow.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

ROUTE_TYPE_NAMES: dict[int, str] = {
    0: "Tram/Streetcar/Light Rail",
    1: "Subway/Metro",
    2: "Rail",
    3: "Bus",
    4: "Ferry",
    5: "Cable Tram",
    6: "Aerial Lift",
    7: "Funicular",
    11: "Trolleybus",
    12: "Monorail",
}


def route_type_name(route_type: int) -> str:
    """
    Return the human-readable name for a GTFS route_type code.
    """

    return ROUTE_TYPE_NAMES.get(route_type, f"Unknown ({route_type})")


@dataclass(frozen=True)
class Route:
    """
    Typed GTFS route record produced by row validation.
    """

    route_id: str
    route_short_name: str
    route_long_name: str
    route_type: int
    agency_id: str | None = None
    route_desc: str | None = None
    route_url: str | None = None
    route_color: str | None = None
    route_text_color: str | None = None
    route_sort_order: int | None = None

    @property
    def route_type_name(self) -> str:
        return route_type_name(self.route_type)

    @property
    def display_name(self) -> str:
        return self.route_long_name or self.route_short_name or "N/A"


@dataclass(frozen=True)
class FieldValidationError:
    """
    One field-level validation error for a CSV row.
    """

    row_number: int
    message: str
    column: str | None = None
    value: str | None = None


@dataclass(frozen=True)
class RouteRecordError:
    """
    A record (or raw input fragment) that could not become a Route.

    ``details`` holds the field errors for a rejected row, or a single
    message for a blob-level failure.
    """

    details: tuple[FieldValidationError, ...] | str
    record: Mapping[str, str] | None = None
    raw_input: str | None = None
    row_number: int | None = None

    @property
    def message(self) -> str:
        if isinstance(self.details, str):
            return self.details
        return "; ".join(f"{error.column}: {error.message}" for error in self.details)


@dataclass(frozen=True)
class ProcessedRoutes:
    """
    End-of-load result for one routes.txt source.

    ``success`` is False only when the source itself could not be read or
    parsed. Rejected rows leave it True.
    """

    routes: tuple[Route, ...]
    errors: tuple[RouteRecordError, ...]
    success: bool
    source_description: str
    rows_read: int = 0

    @property
    def rows_failed(self) -> int:
        return sum(1 for error in self.errors if error.record is not None)


@dataclass(frozen=True)
class RouteStore:
    """
    Loaded routes as handed to presentation consumers.
    """

    routes: tuple[Route, ...]
    routes_by_id: Mapping[str, Route]
    routes_error: str | None = None
    validation_errors: tuple[RouteRecordError, ...] = field(default_factory=tuple)

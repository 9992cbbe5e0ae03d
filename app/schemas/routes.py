"""
app/schemas/routes.py

Response schemas for route endpoints.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from app.domain.gtfs_route import Route, RouteRecordError

RouteSortField = Literal[
    "route_id",
    "agency_id",
    "route_short_name",
    "route_long_name",
    "route_desc",
    "route_type",
    "route_sort_order",
]


class RouteResponse(BaseModel):
    """
    API response model for one validated route.
    """

    route_id: str = Field(..., min_length=1)
    agency_id: str | None = None
    route_short_name: str
    route_long_name: str
    route_desc: str | None = None
    route_type: int
    route_type_name: str
    route_url: str | None = None
    route_color: str | None = None
    route_text_color: str | None = None
    route_sort_order: int | None = Field(default=None, ge=0)
    display_name: str

    @classmethod
    def from_route(cls, route: Route) -> "RouteResponse":
        return cls(
            route_id=route.route_id,
            agency_id=route.agency_id,
            route_short_name=route.route_short_name,
            route_long_name=route.route_long_name,
            route_desc=route.route_desc,
            route_type=route.route_type,
            route_type_name=route.route_type_name,
            route_url=route.route_url,
            route_color=route.route_color,
            route_text_color=route.route_text_color,
            route_sort_order=route.route_sort_order,
            display_name=route.display_name,
        )


class RouteListResponse(BaseModel):
    """
    API response model for a (possibly sorted and paged) route listing.
    """

    total: int = Field(..., ge=0)
    offset: int = Field(..., ge=0)
    routes: list[RouteResponse] = Field(default_factory=list)


class FieldErrorResponse(BaseModel):
    """
    API response model for one field-level validation error.
    """

    row_number: int = Field(..., ge=1)
    message: str
    column: str | None = None
    value: str | None = None


class RouteRecordErrorResponse(BaseModel):
    """
    API response model for one rejected record or source failure.
    """

    message: str
    row_number: int | None = None
    record: dict[str, str] | None = None
    raw_input: str | None = None
    field_errors: list[FieldErrorResponse] = Field(default_factory=list)

    @classmethod
    def from_error(cls, error: RouteRecordError) -> "RouteRecordErrorResponse":
        field_errors: list[FieldErrorResponse] = []
        if not isinstance(error.details, str):
            field_errors = [
                FieldErrorResponse(
                    row_number=detail.row_number,
                    message=detail.message,
                    column=detail.column,
                    value=detail.value,
                )
                for detail in error.details
            ]
        return cls(
            message=error.message,
            row_number=error.row_number,
            record=dict(error.record) if error.record is not None else None,
            raw_input=error.raw_input,
            field_errors=field_errors,
        )


class RouteHealthResponse(BaseModel):
    """
    API response model for route data availability.
    """

    status: Literal["ok", "degraded"]
    routes_loaded: int = Field(..., ge=0)
    validation_errors: int = Field(..., ge=0)
    routes_error: str | None = None

"""
app/api/routers/routes_router.py

Read-only endpoints over the routes loaded at startup.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.dependencies import get_route_store
from app.domain.gtfs_route import Route, RouteStore
from app.schemas.routes import (
    RouteHealthResponse,
    RouteListResponse,
    RouteRecordErrorResponse,
    RouteResponse,
    RouteSortField,
)

router = APIRouter(tags=["routes"])

MAX_PAGE_SIZE = 5000


def sort_routes(routes: tuple[Route, ...], *, sort_by: str, descending: bool) -> list[Route]:
    """
    Stable sort on one column; routes without a value always sort last.
    """

    present: list[Route] = []
    missing: list[Route] = []
    for route in routes:
        value: Any = getattr(route, sort_by)
        if value is None or value == "":
            missing.append(route)
        else:
            present.append(route)

    present.sort(key=lambda route: getattr(route, sort_by), reverse=descending)
    return present + missing


@router.get("/routes", response_model=RouteListResponse)
def list_routes(
    sort_by: RouteSortField | None = Query(default=None, description="Column to sort by"),
    descending: bool = Query(default=False, description="Sort in descending order"),
    offset: int = Query(default=0, ge=0),
    limit: int | None = Query(default=None, ge=1, le=MAX_PAGE_SIZE),
    store: RouteStore = Depends(get_route_store),
) -> RouteListResponse:
    """
    Return loaded routes in source order, or sorted by one column.
    """

    routes = list(store.routes)
    if sort_by is not None:
        routes = sort_routes(store.routes, sort_by=sort_by, descending=descending)

    end = None if limit is None else offset + limit
    return RouteListResponse(
        total=len(routes),
        offset=offset,
        routes=[RouteResponse.from_route(route) for route in routes[offset:end]],
    )


@router.get("/routes/{route_id}", response_model=RouteResponse)
def get_route(
    route_id: str,
    store: RouteStore = Depends(get_route_store),
) -> RouteResponse:
    """
    Look up one route by route_id.
    """

    route = store.routes_by_id.get(route_id)
    if route is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Route '{route_id}' not found.",
        )
    return RouteResponse.from_route(route)


@router.get("/validation-errors", response_model=list[RouteRecordErrorResponse])
def list_validation_errors(
    store: RouteStore = Depends(get_route_store),
) -> list[RouteRecordErrorResponse]:
    """
    Return records rejected during load, or the source failure.
    """

    return [RouteRecordErrorResponse.from_error(error) for error in store.validation_errors]


@router.get("/health", response_model=RouteHealthResponse)
def healthcheck(store: RouteStore = Depends(get_route_store)) -> RouteHealthResponse:
    rejected = sum(1 for error in store.validation_errors if error.record is not None)
    return RouteHealthResponse(
        status="degraded" if store.routes_error else "ok",
        routes_loaded=len(store.routes),
        validation_errors=rejected,
        routes_error=store.routes_error,
    )

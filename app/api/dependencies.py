"""
app/api/dependencies.py

Shared FastAPI dependencies.
"""

from __future__ import annotations

from fastapi import HTTPException, Request, status

from app.domain.gtfs_route import RouteStore


def get_route_store(request: Request) -> RouteStore:
    """
    Return the route store built once when the application was created.
    """

    store = getattr(request.app.state, "route_store", None)
    if store is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Route data has not been initialised.",
        )
    return store

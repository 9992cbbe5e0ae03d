from __future__ import annotations

import logging

from fastapi import FastAPI

from app.config import get_log_level
from app.domain.gtfs_route import RouteStore
from app.logging_utils import configure_logging
from app.services.route_store import load_route_store


def create_app(route_store: RouteStore | None = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Routes are loaded exactly once here unless a prepared store is passed in.
    """

    configure_logging(get_log_level())

    store = route_store if route_store is not None else load_route_store()
    logging.getLogger(__name__).info(
        "Route store ready routes=%d rejected=%d error=%r",
        len(store.routes),
        len(store.validation_errors),
        store.routes_error,
    )

    application = FastAPI(
        title="GTFS Routes API",
        version="1.0.0",
    )
    application.state.route_store = store

    from app.api.routers import routes_router

    application.include_router(routes_router)

    return application

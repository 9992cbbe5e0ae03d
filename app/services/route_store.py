"""
app/services/route_store.py

Route index construction and the startup-time route store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from types import MappingProxyType
from typing import Mapping

from app.config import RouteDataSettings, get_route_data_settings
from app.domain.gtfs_route import ProcessedRoutes, Route, RouteStore
from app.services.route_loader import RouteLoader

logger = logging.getLogger(__name__)

ROUTES_ERROR_MESSAGE = "Failed to load or process routes data. Check logs for details."


def build_route_index(routes: Iterable[Route]) -> dict[str, Route]:
    """
    Key routes by route_id in one pass.

    A later route with the same route_id replaces the earlier one.
    """

    index: dict[str, Route] = {}
    for route in routes:
        index[route.route_id] = route
    return index


def duplicate_route_ids(routes: Iterable[Route]) -> list[str]:
    """
    Return route_ids that occur more than once, in first-seen order.
    """

    seen: set[str] = set()
    duplicates: dict[str, None] = {}
    for route in routes:
        if route.route_id in seen:
            duplicates[route.route_id] = None
        seen.add(route.route_id)
    return list(duplicates)


def create_route_store(result: ProcessedRoutes) -> RouteStore:
    """
    Build the consumer-facing store from one load result.
    """

    routes_error: str | None = None
    if not result.success:
        routes_error = ROUTES_ERROR_MESSAGE
        logger.error(
            "Routes source failed to load source=%r errors=%s",
            result.source_description,
            [error.message for error in result.errors],
        )
    elif result.errors:
        logger.warning(
            "Some routes had validation issues during load and are missing source=%r rejected=%d",
            result.source_description,
            len(result.errors),
        )

    duplicates = duplicate_route_ids(result.routes)
    if duplicates:
        logger.warning(
            "Duplicate route_id values; the last occurrence is indexed route_ids=%s",
            duplicates,
        )

    routes_by_id: Mapping[str, Route] = MappingProxyType(build_route_index(result.routes))
    return RouteStore(
        routes=result.routes,
        routes_by_id=routes_by_id,
        routes_error=routes_error,
        validation_errors=result.errors,
    )


def load_route_store(settings: RouteDataSettings | None = None) -> RouteStore:
    """
    Load routes.txt once and return the immutable route store.
    """

    resolved = settings or get_route_data_settings()
    loader = RouteLoader(
        log_validation_errors=resolved.log_validation_errors,
        max_logged_validation_errors=resolved.max_logged_validation_errors,
    )
    return create_route_store(loader.load_file(resolved.routes_path))

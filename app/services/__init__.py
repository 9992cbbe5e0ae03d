"""
app/services package marker.
"""

from app.services.file_splitter import (
    EmptySourceFileError,
    GTFSFileSplitter,
    SourceDirectoryNotFoundError,
)
from app.services.route_loader import CSVFormatError, RouteLoader, load_routes, load_routes_file
from app.services.route_store import build_route_index, create_route_store, load_route_store

__all__ = [
    "CSVFormatError",
    "EmptySourceFileError",
    "GTFSFileSplitter",
    "RouteLoader",
    "SourceDirectoryNotFoundError",
    "build_route_index",
    "create_route_store",
    "load_route_store",
    "load_routes",
    "load_routes_file",
]

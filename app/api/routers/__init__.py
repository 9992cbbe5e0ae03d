"""
app/api/routers package marker.
"""

from app.api.routers.routes_router import router as routes_router

__all__ = [
    "routes_router",
]

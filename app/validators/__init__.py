"""
app/validators package marker.
"""

from app.validators.route_validator import RouteRowValidator

__all__ = [
    "RouteRowValidator",
]

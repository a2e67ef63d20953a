"""API router package for endpoint composition."""

from .debug import api_create_debug_router
from .health import api_create_health_router

__all__ = ["api_create_debug_router", "api_create_health_router"]

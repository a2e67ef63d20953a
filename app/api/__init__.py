"""API layer package for FastAPI application and route composition."""

from .application import create_api_application
from .responses import CORS_HEADERS, SERVED_ENDPOINTS, IndentedJSONResponse, api_build_not_found_payload

__all__ = [
    "CORS_HEADERS",
    "IndentedJSONResponse",
    "SERVED_ENDPOINTS",
    "api_build_not_found_payload",
    "create_api_application",
]

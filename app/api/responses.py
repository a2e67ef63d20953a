"""Shared response types and payloads for the health responder."""

import json
from typing import Any, Final

from fastapi.responses import JSONResponse

CORS_HEADERS: Final[dict[str, str]] = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}
SERVED_ENDPOINTS: Final[tuple[str, ...]] = ("/health", "/debug")


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with two-space indentation for operator readability."""

    def render(self, content: Any) -> bytes:
        return json.dumps(
            content,
            ensure_ascii=False,
            allow_nan=False,
            indent=2,
        ).encode("utf-8")


def api_build_not_found_payload() -> dict[str, object]:
    """Return the structured fallback body for unknown method/path combinations.

    Returns:
        dict[str, object]: Error payload listing the served endpoints.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "error": "Not Found",
        "message": "ClickUp MCP Server Debug Interface",
        "endpoints": list(SERVED_ENDPOINTS),
    }

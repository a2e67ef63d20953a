"""FastAPI application factory for the health responder.

This module composes the `/health` and `/debug` routers with permissive CORS
headers, a preflight short-circuit and a structured 404 fallback. Request
bodies are never read; every decision uses method and path only.
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.adapters import ProcessRuntimePort
from app.config import AppSettings

from .responses import CORS_HEADERS, api_build_not_found_payload
from .routers import api_create_debug_router, api_create_health_router

_FALLBACK_STATUS_CODES = frozenset({status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED})


def create_api_application(settings: AppSettings, process_runtime: ProcessRuntimePort) -> FastAPI:
    """Create the FastAPI application instance for the health responder.

    Args:
        settings: Validated application settings used for health metadata.
        process_runtime: Process runtime port used by health and debug endpoints.

    Returns:
        FastAPI: Framework application instance serving `/health` and `/debug`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    application = FastAPI(
        title="ClickUp MCP Server Debug Interface",
        version=settings.npm_package_version,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
        redirect_slashes=False,
    )

    @application.middleware("http")
    async def api_apply_cors_headers(
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        """Answer preflight requests directly and stamp CORS headers on every response.

        Args:
            request: Incoming request.
            call_next: Downstream ASGI handler.

        Returns:
            Response: Downstream response, or an empty 204 for `OPTIONS`.

        Raises:
            RuntimeError: Raised when downstream handling fails unexpectedly.
        """

        if request.method == "OPTIONS":
            response: Response = Response(status_code=status.HTTP_204_NO_CONTENT)
        else:
            response = await call_next(request)
        response.headers.update(CORS_HEADERS)
        return response

    @application.exception_handler(StarletteHTTPException)
    async def api_handle_http_exception(_request: Request, error: StarletteHTTPException) -> JSONResponse:
        """Map routing misses (unknown path or method) to the structured 404 body.

        Returns:
            JSONResponse: Structured not-found payload, or the original status and detail.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        if error.status_code in _FALLBACK_STATUS_CODES:
            return JSONResponse(content=api_build_not_found_payload(), status_code=status.HTTP_404_NOT_FOUND)
        return JSONResponse(content={"detail": error.detail}, status_code=error.status_code)

    application.include_router(api_create_health_router(settings=settings, process_runtime=process_runtime))
    application.include_router(api_create_debug_router(process_runtime=process_runtime))

    return application

"""Debug endpoint router exposing live process introspection.

The payload includes every environment variable, secrets included. Operators
must keep this surface off public networks.
"""

from fastapi import APIRouter, status

from app.adapters import ProcessRuntimePort
from app.domain import domain_build_debug_snapshot

from ..responses import IndentedJSONResponse


def api_create_debug_router(process_runtime: ProcessRuntimePort) -> APIRouter:
    """Create debug router with a live process snapshot endpoint.

    Args:
        process_runtime: Process runtime port supplying environment and platform data.

    Returns:
        APIRouter: Router exposing `/debug` endpoint.

    Raises:
        ValueError: Raised when process_runtime is invalid.
    """

    if process_runtime is None:
        raise ValueError("process_runtime must not be None")

    router = APIRouter(tags=["debug"])

    @router.get("/debug")
    def api_debug_snapshot() -> IndentedJSONResponse:
        debug_snapshot = domain_build_debug_snapshot(
            environment=process_runtime.runtime_environment(),
            argv=process_runtime.runtime_argv(),
            cwd=process_runtime.runtime_cwd(),
            versions=process_runtime.runtime_versions(),
            platform_name=process_runtime.runtime_platform(),
            arch=process_runtime.runtime_arch(),
        )
        return IndentedJSONResponse(content=debug_snapshot.to_payload(), status_code=status.HTTP_200_OK)

    return router

"""Health endpoint router composition for operational status checks."""

from fastapi import APIRouter, status

from app.adapters import ProcessRuntimePort
from app.config import AppSettings
from app.domain import domain_build_health_status

from ..responses import IndentedJSONResponse


def api_create_health_router(settings: AppSettings, process_runtime: ProcessRuntimePort) -> APIRouter:
    """Create health-check router reporting process and configuration status.

    Args:
        settings: Runtime settings used for version, environment and presence flags.
        process_runtime: Process runtime port supplying uptime and memory counters.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if process_runtime is None:
        raise ValueError("process_runtime must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> IndentedJSONResponse:
        """Return the health snapshot without probing dependent systems.

        Returns:
            IndentedJSONResponse: Health payload for platform checks and operators.

        Raises:
            RuntimeError: Raised when process counters cannot be read.
        """

        health_status = domain_build_health_status(
            settings=settings,
            uptime_seconds=process_runtime.runtime_uptime_seconds(),
            memory=process_runtime.runtime_memory_usage(),
        )
        return IndentedJSONResponse(content=health_status.to_payload(), status_code=status.HTTP_200_OK)

    return router

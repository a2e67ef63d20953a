"""Builders for request-scoped health and debug snapshots."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from datetime import datetime, timezone
from typing import Final

from app.config import DEFAULT_SERVICE_VERSION, SERVICE_NAME, AppSettings

from .models import ConfigPresence, DebugSnapshot, DeploymentMetadata, HealthStatus

HEALTHY_STATUS: Final[str] = "healthy"


def domain_build_config_presence(settings: AppSettings) -> ConfigPresence:
    """Derive presence flags from settings without exposing secret values.

    Args:
        settings: Runtime settings.

    Returns:
        ConfigPresence: Presence flags for ClickUp configuration.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return ConfigPresence(
        api_key_present=bool(settings.clickup_api_key),
        team_id_present=bool(settings.clickup_team_id),
        document_support=settings.document_support_enabled,
    )


def domain_build_health_status(
    settings: AppSettings,
    uptime_seconds: float,
    memory: Mapping[str, int],
    now: datetime | None = None,
) -> HealthStatus:
    """Build one health snapshot for the `/health` endpoint.

    Args:
        settings: Runtime settings supplying version, environment and deployment labels.
        uptime_seconds: Seconds since process start.
        memory: Process memory counters.
        now: Optional timestamp override, defaults to current UTC time.

    Returns:
        HealthStatus: Fully populated health snapshot.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    resolved_now = now or datetime.now(timezone.utc)
    return HealthStatus(
        status=HEALTHY_STATUS,
        timestamp=resolved_now.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
        service=SERVICE_NAME,
        version=settings.npm_package_version or DEFAULT_SERVICE_VERSION,
        environment=settings.node_env or "development",
        uptime_seconds=float(uptime_seconds),
        memory=dict(memory),
        clickup=domain_build_config_presence(settings),
        deployment=DeploymentMetadata(
            deployment_id=settings.railway_deployment_id or "unknown",
            service_name=settings.railway_service_name or SERVICE_NAME,
        ),
    )


def domain_build_debug_snapshot(
    environment: Mapping[str, str],
    argv: Sequence[str],
    cwd: str,
    versions: Mapping[str, str],
    platform_name: str,
    arch: str,
) -> DebugSnapshot:
    """Build one debug snapshot from live process state.

    Args:
        environment: Current process environment mapping.
        argv: Process argument list.
        cwd: Current working directory.
        versions: Runtime and library versions.
        platform_name: Operating system platform identifier.
        arch: Machine architecture.

    Returns:
        DebugSnapshot: Snapshot with copied collections.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return DebugSnapshot(
        environment=dict(environment),
        argv=list(argv),
        cwd=cwd,
        versions=dict(versions),
        platform=platform_name,
        arch=arch,
    )

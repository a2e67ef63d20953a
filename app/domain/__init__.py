"""Domain models used across application layer boundaries."""

from .models import ConfigPresence, DebugSnapshot, DeploymentMetadata, HealthStatus
from .snapshots import (
    HEALTHY_STATUS,
    domain_build_config_presence,
    domain_build_debug_snapshot,
    domain_build_health_status,
)

__all__ = [
    "ConfigPresence",
    "DebugSnapshot",
    "DeploymentMetadata",
    "HEALTHY_STATUS",
    "HealthStatus",
    "domain_build_config_presence",
    "domain_build_debug_snapshot",
    "domain_build_health_status",
]

"""Server runtime package for listener lifecycle and fatal error handling."""

from .fatal_errors import FatalErrorHooks
from .health_server import HealthServer, server_create_health_server
from .lifecycle import (
    EXIT_CODE_FAILURE,
    EXIT_CODE_SUCCESS,
    LifecycleState,
    LifecycleTransitionError,
    ShutdownCoordinator,
)

__all__ = [
    "EXIT_CODE_FAILURE",
    "EXIT_CODE_SUCCESS",
    "FatalErrorHooks",
    "HealthServer",
    "LifecycleState",
    "LifecycleTransitionError",
    "ShutdownCoordinator",
    "server_create_health_server",
]

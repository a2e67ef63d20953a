"""Uvicorn server wrapper binding the health responder to the process lifecycle."""

from __future__ import annotations

import asyncio
import logging
import socket
from types import FrameType

import uvicorn
from fastapi import FastAPI

from .fatal_errors import FatalErrorHooks
from .lifecycle import LifecycleState, ShutdownCoordinator

logger = logging.getLogger(__name__)


class HealthServer(uvicorn.Server):
    """Uvicorn server that reports readiness and shutdown to a shutdown coordinator.

    Uvicorn already drains in-flight requests once `should_exit` is set; this
    subclass only connects that switch to the coordinator and logs the
    moment the listener is bound.
    """

    def __init__(
        self,
        config: uvicorn.Config,
        coordinator: ShutdownCoordinator,
        fatal_error_hooks: FatalErrorHooks | None = None,
    ):
        super().__init__(config)
        self._coordinator = coordinator
        self._fatal_error_hooks = fatal_error_hooks
        coordinator.lifecycle_register_shutdown_listener(self.server_request_stop)

    def server_request_stop(self) -> None:
        """Stop accepting connections and let in-flight responses complete."""

        self.should_exit = True

    async def serve(self, sockets: list[socket.socket] | None = None) -> None:
        if self._fatal_error_hooks is not None:
            self._fatal_error_hooks.install_loop_handler(asyncio.get_running_loop())
        await super().serve(sockets=sockets)

    async def startup(self, sockets: list[socket.socket] | None = None) -> None:
        await super().startup(sockets=sockets)
        if self.started and self._coordinator.state is LifecycleState.STARTING:
            self._coordinator.lifecycle_transition(LifecycleState.RUNNING)
            logger.info("Health server listening on port %s", self.config.port)

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        # Uvicorn escalates a repeated SIGINT to force exit, so it sees the signal first.
        super().handle_exit(sig, frame)
        self._coordinator.handle_signal(sig, frame)


def server_create_health_server(
    application: FastAPI,
    host: str,
    port: int,
    coordinator: ShutdownCoordinator,
    fatal_error_hooks: FatalErrorHooks | None = None,
    log_level: str = "info",
) -> HealthServer:
    """Build a health server bound to the given address.

    Args:
        application: ASGI application serving health endpoints.
        host: Interface to bind.
        port: TCP port to bind.
        coordinator: Shutdown coordinator owning the process lifecycle.
        fatal_error_hooks: Optional hooks installed on the server event loop.
        log_level: Uvicorn log level name.

    Returns:
        HealthServer: Unstarted server instance.

    Raises:
        ValueError: Raised when the port is outside the TCP range.
    """

    if port < 1 or port > 65535:
        raise ValueError("port must be between 1 and 65535")

    config = uvicorn.Config(
        application,
        host=host,
        port=port,
        log_level=log_level,
        log_config=None,
    )
    return HealthServer(config=config, coordinator=coordinator, fatal_error_hooks=fatal_error_hooks)

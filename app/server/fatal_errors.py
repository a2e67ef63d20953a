"""Process-wide hooks that turn unhandled failures into fatal shutdowns.

A supervised deployment restarts the process, so any failure that escapes
request handling ends the process with exit code 1 instead of being
recovered in place.
"""

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from types import TracebackType
from typing import Any

from .lifecycle import EXIT_CODE_FAILURE, ShutdownCoordinator

logger = logging.getLogger(__name__)


class FatalErrorHooks:
    """Install uncaught-exception hooks that report to a shutdown coordinator."""

    def __init__(self, coordinator: ShutdownCoordinator):
        if coordinator is None:
            raise ValueError("coordinator must not be None")
        self._coordinator = coordinator

    def install(self) -> None:
        """Replace the interpreter and thread exception hooks."""

        sys.excepthook = self.handle_uncaught_exception
        threading.excepthook = self.handle_thread_exception

    def install_loop_handler(self, loop: asyncio.AbstractEventLoop) -> None:
        """Route unhandled asyncio task and callback errors to the coordinator.

        Args:
            loop: Running event loop hosting the health server.
        """

        loop.set_exception_handler(self.handle_loop_exception)

    def handle_uncaught_exception(
        self,
        exception_type: type[BaseException],
        exception: BaseException,
        traceback: TracebackType | None,
    ) -> None:
        """Log an exception that escaped the main thread.

        The interpreter exits with code 1 after this hook returns.
        """

        logger.critical("Uncaught exception", exc_info=(exception_type, exception, traceback))
        self._coordinator.request_shutdown(reason="uncaught exception", exit_code=EXIT_CODE_FAILURE)

    def handle_thread_exception(self, hook_arguments: threading.ExceptHookArgs) -> None:
        """Log an exception that escaped a worker thread and request fatal shutdown."""

        if hook_arguments.exc_type is SystemExit:
            return
        thread_name = hook_arguments.thread.name if hook_arguments.thread is not None else "unknown"
        logger.critical(
            "Uncaught exception in thread %s",
            thread_name,
            exc_info=(hook_arguments.exc_type, hook_arguments.exc_value, hook_arguments.exc_traceback),
        )
        self._coordinator.request_shutdown(reason="uncaught thread exception", exit_code=EXIT_CODE_FAILURE)

    def handle_loop_exception(self, _loop: asyncio.AbstractEventLoop, context: dict[str, Any]) -> None:
        """Log an unhandled asyncio error and request fatal shutdown.

        Args:
            _loop: Event loop reporting the error.
            context: asyncio error context with `message` and optional `exception`.
        """

        exception = context.get("exception")
        message = context.get("message", "unhandled asyncio error")
        if exception is not None:
            logger.critical(
                "Unhandled asyncio error: %s",
                message,
                exc_info=(type(exception), exception, exception.__traceback__),
            )
        else:
            logger.critical("Unhandled asyncio error: %s", message)
        self._coordinator.request_shutdown(reason="unhandled asyncio error", exit_code=EXIT_CODE_FAILURE)

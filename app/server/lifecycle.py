"""Process lifecycle state machine and shutdown coordination."""

from __future__ import annotations

import logging
import signal
import threading
from collections.abc import Callable
from enum import Enum
from types import FrameType
from typing import Final

logger = logging.getLogger(__name__)


class LifecycleState(str, Enum):
    """Process bootstrap lifecycle states."""

    VALIDATING = "validating"
    STARTING = "starting"
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


_ALLOWED_TRANSITIONS: Final[dict[LifecycleState, frozenset[LifecycleState]]] = {
    LifecycleState.VALIDATING: frozenset({LifecycleState.STARTING, LifecycleState.TERMINATED}),
    LifecycleState.STARTING: frozenset(
        {LifecycleState.RUNNING, LifecycleState.SHUTTING_DOWN, LifecycleState.TERMINATED}
    ),
    LifecycleState.RUNNING: frozenset({LifecycleState.SHUTTING_DOWN}),
    LifecycleState.SHUTTING_DOWN: frozenset({LifecycleState.TERMINATED}),
    LifecycleState.TERMINATED: frozenset(),
}

EXIT_CODE_SUCCESS: Final[int] = 0
EXIT_CODE_FAILURE: Final[int] = 1


class LifecycleTransitionError(RuntimeError):
    """Raised when a lifecycle transition is not permitted from the current state."""


class ShutdownCoordinator:
    """Own the bootstrap lifecycle and fan shutdown requests out to registered listeners.

    Termination signals and fatal error hooks both call `request_shutdown`;
    the listener registered by the health server stops accepting connections
    and lets in-flight responses finish. The exit code only ever escalates,
    so a fatal error during a graceful shutdown still ends with failure.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._state = LifecycleState.VALIDATING
        self._exit_code = EXIT_CODE_SUCCESS
        self._shutdown_reason: str | None = None
        self._listeners: list[Callable[[], None]] = []

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def exit_code(self) -> int:
        return self._exit_code

    @property
    def shutdown_reason(self) -> str | None:
        return self._shutdown_reason

    def lifecycle_transition(self, target_state: LifecycleState) -> None:
        """Move to the target lifecycle state.

        Args:
            target_state: Next lifecycle state.

        Raises:
            LifecycleTransitionError: Raised when the transition is not permitted.
        """

        with self._lock:
            self._lifecycle_transition_locked(target_state)

    def lifecycle_register_shutdown_listener(self, listener: Callable[[], None]) -> None:
        """Register a callable invoked once when shutdown is first requested.

        A listener registered after shutdown was already requested is invoked
        immediately.

        Args:
            listener: Zero-argument callable that stops the owning component.
        """

        with self._lock:
            already_shutting_down = self._shutdown_reason is not None
            self._listeners.append(listener)
        if already_shutting_down:
            listener()

    def request_shutdown(self, reason: str, exit_code: int = EXIT_CODE_SUCCESS) -> None:
        """Request orderly shutdown and record the resulting exit code.

        Args:
            reason: Human-readable shutdown trigger.
            exit_code: Exit code requested by the trigger.
        """

        with self._lock:
            self._exit_code = max(self._exit_code, exit_code)
            if self._shutdown_reason is not None:
                logger.debug("Shutdown already requested (%s); ignoring %s", self._shutdown_reason, reason)
                return
            self._shutdown_reason = reason
            if self._state in (LifecycleState.STARTING, LifecycleState.RUNNING):
                self._lifecycle_transition_locked(LifecycleState.SHUTTING_DOWN)
            listeners = list(self._listeners)

        logger.info("Received %s, shutting down gracefully...", reason)
        for listener in listeners:
            listener()

    def handle_signal(self, signal_number: int, _frame: FrameType | None = None) -> None:
        """Signal handler entry point for SIGINT and SIGTERM.

        Args:
            signal_number: Received signal number.
            _frame: Interrupted stack frame, unused.
        """

        if self._state is LifecycleState.TERMINATED:
            logger.debug("Ignoring %s received after termination", signal.Signals(signal_number).name)
            return
        self.request_shutdown(reason=signal.Signals(signal_number).name, exit_code=EXIT_CODE_SUCCESS)

    def install_signal_handlers(self) -> None:
        """Route SIGINT and SIGTERM to this coordinator.

        Raises:
            ValueError: Raised when called outside the main thread.
        """

        for signal_number in (signal.SIGINT, signal.SIGTERM):
            signal.signal(signal_number, self.handle_signal)

    def _lifecycle_transition_locked(self, target_state: LifecycleState) -> None:
        if target_state not in _ALLOWED_TRANSITIONS[self._state]:
            raise LifecycleTransitionError(
                f"lifecycle transition {self._state.value} -> {target_state.value} is not permitted"
            )
        logger.debug("Lifecycle %s -> %s", self._state.value, target_state.value)
        self._state = target_state

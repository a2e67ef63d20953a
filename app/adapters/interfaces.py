"""Typed interfaces for process runtime and third-party API boundaries."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class ProbeResult:
    """Outcome of one third-party API connectivity probe.

    Attributes:
        reachable: Whether the API answered with HTTP 200.
        status_code: HTTP status code, or None when no response was received.
        rate_limit_remaining: Remaining request quota header value, or None when absent.
        detail: Human-readable outcome summary for diagnostics.
    """

    reachable: bool
    status_code: int | None
    rate_limit_remaining: str | None
    detail: str


class ProcessRuntimePort(Protocol):
    """Port definition for reading live process state."""

    def runtime_uptime_seconds(self) -> float:
        """Return seconds elapsed since the process started.

        Returns:
            float: Process uptime in seconds.

        Raises:
            RuntimeError: Raised when process start time is unavailable.
        """

    def runtime_memory_usage(self) -> dict[str, int]:
        """Return process memory counters in bytes.

        Returns:
            dict[str, int]: Memory counters keyed by counter name.

        Raises:
            RuntimeError: Raised when memory counters are unavailable.
        """

    def runtime_environment(self) -> dict[str, str]:
        """Return a copy of the current process environment."""

    def runtime_argv(self) -> list[str]:
        """Return the process argument list."""

    def runtime_cwd(self) -> str:
        """Return the current working directory."""

    def runtime_versions(self) -> dict[str, str]:
        """Return interpreter and library versions."""

    def runtime_platform(self) -> str:
        """Return the operating system platform identifier."""

    def runtime_arch(self) -> str:
        """Return the machine architecture."""


class ApiProbePort(Protocol):
    """Port definition for third-party API connectivity checks."""

    def probe_source_name(self) -> str:
        """Return a stable label for the probed API."""

    def probe_check_connectivity(self) -> ProbeResult:
        """Check API reachability with configured credentials.

        Returns:
            ProbeResult: Probe outcome; failures are reported, never raised.

        Raises:
            RuntimeError: Implementations must not raise for transport failures.
        """

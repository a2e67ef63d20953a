"""Process runtime inspection backed by psutil and the interpreter."""

from __future__ import annotations

import os
import platform
import sys
import time
from importlib import metadata
from typing import Final

import psutil

from .interfaces import ProcessRuntimePort


class PsutilProcessRuntime(ProcessRuntimePort):
    """Read live state of the current process."""

    _REPORTED_DISTRIBUTIONS: Final[tuple[str, ...]] = (
        "fastapi",
        "starlette",
        "uvicorn",
        "pydantic",
        "pydantic-settings",
        "httpx",
        "psutil",
    )

    def __init__(self, process: psutil.Process | None = None):
        """Initialize runtime inspector.

        Args:
            process: Optional process handle, defaults to the current process.
        """

        self._process = process or psutil.Process(os.getpid())

    def runtime_uptime_seconds(self) -> float:
        """Return seconds elapsed since the process was created.

        Returns:
            float: Non-negative uptime in seconds.

        Raises:
            RuntimeError: Raised when the process start time cannot be read.
        """

        try:
            created_at = self._process.create_time()
        except psutil.Error as error:
            raise RuntimeError("process start time is unavailable") from error
        return max(0.0, time.time() - created_at)

    def runtime_memory_usage(self) -> dict[str, int]:
        """Return platform memory counters for the process.

        Returns:
            dict[str, int]: Counters such as `rss` and `vms` in bytes.

        Raises:
            RuntimeError: Raised when memory counters cannot be read.
        """

        try:
            memory_info = self._process.memory_info()
        except psutil.Error as error:
            raise RuntimeError("process memory counters are unavailable") from error
        return {name: int(value) for name, value in memory_info._asdict().items()}

    def runtime_environment(self) -> dict[str, str]:
        return dict(os.environ)

    def runtime_argv(self) -> list[str]:
        return list(sys.argv)

    def runtime_cwd(self) -> str:
        return os.getcwd()

    def runtime_versions(self) -> dict[str, str]:
        """Return interpreter version and installed versions of service libraries.

        Libraries that are not installed are omitted.

        Returns:
            dict[str, str]: Version strings keyed by component name.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        versions = {
            "python": platform.python_version(),
            "implementation": platform.python_implementation(),
        }
        for distribution_name in self._REPORTED_DISTRIBUTIONS:
            try:
                versions[distribution_name] = metadata.version(distribution_name)
            except metadata.PackageNotFoundError:
                continue
        return versions

    def runtime_platform(self) -> str:
        return sys.platform

    def runtime_arch(self) -> str:
        return platform.machine()

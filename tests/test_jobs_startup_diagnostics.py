"""Tests for startup diagnostics checks and main application handoff."""

from __future__ import annotations

import os
import textwrap
from pathlib import Path

import pytest

from app.adapters import ProbeResult
from app.config import AppSettings, config_load_settings
from app.jobs import (
    MainApplicationHandoffError,
    job_diagnostics_check_path,
    job_diagnostics_check_imports,
    job_diagnostics_describe_environment,
    job_diagnostics_run,
    job_handoff_resolve_entry,
    job_handoff_start,
)

pytestmark = pytest.mark.usefixtures("clean_service_environment")

_COMPLETE_ENVIRONMENT = {"CLICKUP_API_KEY": "pk_secret", "CLICKUP_TEAM_ID": "123", "PORT": "9090"}


class _StaticProcessRuntime:
    """Test double that returns deterministic process state."""

    def runtime_uptime_seconds(self) -> float:
        return 1.0

    def runtime_memory_usage(self) -> dict[str, int]:
        return {"rss": 2048}

    def runtime_environment(self) -> dict[str, str]:
        return dict(_COMPLETE_ENVIRONMENT)

    def runtime_argv(self) -> list[str]:
        return ["app.main", "diagnose"]

    def runtime_cwd(self) -> str:
        return "/srv/app"

    def runtime_versions(self) -> dict[str, str]:
        return {"python": "3.12.0"}

    def runtime_platform(self) -> str:
        return "linux"

    def runtime_arch(self) -> str:
        return "x86_64"


class _RecordingProbe:
    """Test double that records probe calls and returns a fixed result."""

    def __init__(self, reachable: bool = True):
        self.calls = 0
        self._reachable = reachable

    def probe_source_name(self) -> str:
        return "clickup_api"

    def probe_check_connectivity(self) -> ProbeResult:
        """Return the configured probe outcome.

        Returns:
            ProbeResult: Fixed probe outcome.

        Raises:
            RuntimeError: Never raised by this test double.
        """

        self.calls += 1
        return ProbeResult(
            reachable=self._reachable,
            status_code=200 if self._reachable else 401,
            rate_limit_remaining=None,
            detail="connection successful" if self._reachable else "unexpected status 401",
        )


def _write_entry_module(directory: Path, module_name: str, body: str) -> None:
    """Write an importable entry module into a directory on sys.path.

    Args:
        directory: Directory already prepended to sys.path.
        module_name: Module file stem.
        body: Module source.
    """

    (directory / f"{module_name}.py").write_text(textwrap.dedent(body), encoding="utf-8")


def _build_settings(entry: str, check_paths: tuple[str, ...] = (), team_id: str = "123") -> AppSettings:
    return AppSettings(
        _env_file=None,
        clickup_api_key="pk_secret",
        clickup_team_id=team_id,
        main_application_entry=entry,
        diagnostics_check_paths=check_paths,
    )


def test_jobs_diagnostics_describe_environment_masks_credentials() -> None:
    """Report credentials as set or missing and never echo their values.

    Returns:
        None: Assertions validate masking and defaults.

    Raises:
        AssertionError: Raised when secrets leak or defaults differ.
    """

    described = job_diagnostics_describe_environment({"CLICKUP_API_KEY": "pk_secret", "PORT": "9090"})

    assert described["CLICKUP_API_KEY"] == "Set"
    assert described["CLICKUP_TEAM_ID"] == "Missing"
    assert described["PORT"] == "9090"
    assert described["NODE_ENV"] == "Not set"
    assert described["DOCUMENT_SUPPORT"] == "false"
    assert described["LOG_LEVEL"] == "info"
    assert "pk_secret" not in described.values()


def test_jobs_diagnostics_check_path_reports_size_and_executable_bit(tmp_path: Path) -> None:
    """Report size and execute permission for files and existence for directories.

    Args:
        tmp_path: Temporary directory.

    Returns:
        None: Assertions validate filesystem reporting.

    Raises:
        AssertionError: Raised when stats are misreported.
    """

    script_path = tmp_path / "entry.py"
    script_path.write_text("print('hi')\n", encoding="utf-8")
    os.chmod(script_path, 0o755)

    file_result = job_diagnostics_check_path(str(script_path))
    directory_result = job_diagnostics_check_path(str(tmp_path))
    missing_result = job_diagnostics_check_path(str(tmp_path / "absent.py"))

    assert file_result.exists is True
    assert file_result.size_bytes == len("print('hi')\n")
    assert file_result.executable is True
    assert directory_result.is_directory is True
    assert directory_result.size_bytes is None
    assert missing_result.exists is False


def test_jobs_diagnostics_check_imports_reports_failures() -> None:
    """Report modules that cannot be imported without raising."""

    assert job_diagnostics_check_imports(("json", "module_that_does_not_exist_for_tests")) == (
        "module_that_does_not_exist_for_tests",
    )


def test_jobs_handoff_prefers_named_entry_then_main(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Resolve the named attribute first and fall back to `main`.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Temporary directory for entry modules.

    Returns:
        None: Assertions validate resolution order.

    Raises:
        AssertionError: Raised when resolution order differs.
    """

    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(
        tmp_path,
        "handoff_order_entry",
        """
        def start():
            return "start"

        def main():
            return "main"
        """,
    )

    assert job_handoff_resolve_entry("handoff_order_entry:start")() == "start"
    assert job_handoff_resolve_entry("handoff_order_entry:absent")() == "main"
    assert job_handoff_resolve_entry("handoff_order_entry")() == "main"


def test_jobs_handoff_rejects_module_without_entry(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Treat a module with neither entry point as an integration error.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Temporary directory for entry modules.

    Returns:
        None: Assertions validate error raising.

    Raises:
        AssertionError: Raised when absence is treated as success.
    """

    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(tmp_path, "handoff_empty_entry", "VALUE = 1\n")

    with pytest.raises(MainApplicationHandoffError, match="exposes no callable entry point"):
        job_handoff_resolve_entry("handoff_empty_entry:start")
    with pytest.raises(MainApplicationHandoffError, match="could not be imported"):
        job_handoff_resolve_entry("handoff_module_that_does_not_exist")


def test_jobs_handoff_awaits_coroutine_entry(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    """Drive asynchronous entry points to completion."""

    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(
        tmp_path,
        "handoff_async_entry",
        """
        async def main():
            return 7
        """,
    )

    assert job_handoff_start("handoff_async_entry") == 7


def test_jobs_diagnostics_run_stops_before_probe_when_credentials_are_missing() -> None:
    """Exit with code 1 before probing when a critical key is missing.

    Returns:
        None: Assertions validate fail-fast diagnostics.

    Raises:
        AssertionError: Raised when the probe or handoff runs.
    """

    probe = _RecordingProbe()

    exit_code = job_diagnostics_run(
        settings=_build_settings(entry="handoff_never_imported:main", team_id=""),
        environment={"CLICKUP_API_KEY": "pk_secret"},
        process_runtime=_StaticProcessRuntime(),
        probe=probe,
    )

    assert exit_code == 1
    assert probe.calls == 0


def test_jobs_diagnostics_run_hands_off_after_failed_probe(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Continue to the handoff when the probe fails and return the entry exit code.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Temporary directory for entry modules.
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate non-fatal probe handling and handoff result.

    Raises:
        AssertionError: Raised when the probe blocks startup.
    """

    caplog.set_level("INFO")
    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(
        tmp_path,
        "handoff_success_entry",
        """
        CALLS = []

        def start():
            CALLS.append("start")
            return 0
        """,
    )
    (tmp_path / "present.txt").write_text("x", encoding="utf-8")
    probe = _RecordingProbe(reachable=False)

    exit_code = job_diagnostics_run(
        settings=_build_settings(entry="handoff_success_entry:start", check_paths=("present.txt", "absent.txt")),
        environment=_COMPLETE_ENVIRONMENT,
        process_runtime=_StaticProcessRuntime(),
        probe=probe,
    )

    assert exit_code == 0
    assert probe.calls == 1
    assert "present.txt: Exists" in caplog.text
    assert "absent.txt: Missing" in caplog.text
    assert "Main application file has content" in caplog.text
    assert "1/2 paths present, 0 failed imports, API reachable: no" in caplog.text
    assert "pk_secret" not in caplog.text


def test_jobs_diagnostics_run_returns_failure_when_entry_raises(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Exit with code 1 when the main application raises during handoff.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Temporary directory for entry modules.

    Returns:
        None: Assertions validate handoff failure mapping.

    Raises:
        AssertionError: Raised when the failure is swallowed.
    """

    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(
        tmp_path,
        "handoff_failing_entry",
        """
        def main():
            raise RuntimeError("main application crashed")
        """,
    )

    exit_code = job_diagnostics_run(
        settings=_build_settings(entry="handoff_failing_entry"),
        environment=_COMPLETE_ENVIRONMENT,
        process_runtime=_StaticProcessRuntime(),
        probe=_RecordingProbe(),
    )

    assert exit_code == 1


def test_jobs_diagnostics_run_returns_failure_when_entry_is_missing(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Exit with code 1 when the main application exposes no entry point."""

    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(tmp_path, "handoff_entryless_module", "VALUE = 1\n")

    exit_code = job_diagnostics_run(
        settings=_build_settings(entry="handoff_entryless_module"),
        environment=_COMPLETE_ENVIRONMENT,
        process_runtime=_StaticProcessRuntime(),
        probe=_RecordingProbe(),
    )

    assert exit_code == 1


def test_jobs_diagnostics_describe_environment_reads_presence_from_settings() -> None:
    """Report credential presence from loaded settings, including whitespace-only keys."""

    settings = AppSettings(_env_file=None, clickup_api_key="  ", clickup_team_id="")

    described = job_diagnostics_describe_environment({}, settings=settings)

    assert described["CLICKUP_API_KEY"] == "Set"
    assert described["CLICKUP_TEAM_ID"] == "Missing"


def test_jobs_diagnostics_run_accepts_credentials_from_dotenv(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Validate required keys against loaded settings so dotenv-only keys pass.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Working directory holding the `.env` file and entry module.

    Returns:
        None: Assertions validate settings-based validation and probe wiring.

    Raises:
        AssertionError: Raised when dotenv credentials are ignored.
    """

    monkeypatch.syspath_prepend(str(tmp_path))
    _write_entry_module(
        tmp_path,
        "handoff_dotenv_entry",
        """
        def main():
            return 0
        """,
    )
    (tmp_path / ".env").write_text(
        "CLICKUP_API_KEY=pk_from_dotenv\nCLICKUP_TEAM_ID=456\nMAIN_APPLICATION_ENTRY=handoff_dotenv_entry\n",
        encoding="utf-8",
    )
    probe = _RecordingProbe()

    exit_code = job_diagnostics_run(
        settings=config_load_settings(),
        environment={},
        process_runtime=_StaticProcessRuntime(),
        probe=probe,
    )

    assert exit_code == 0
    assert probe.calls == 1

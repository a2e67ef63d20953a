"""Sequential startup diagnostics run before handing off to the main application.

Every check logs its findings. Only missing critical configuration and a
failed handoff are fatal; the API connectivity probe is a data point and
never blocks startup.
"""

from __future__ import annotations

import importlib
import importlib.util
import logging
import os
import stat
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Final

from app.adapters import ApiProbePort, ClickUpConnectivityProbe, ProbeResult, ProcessRuntimePort, PsutilProcessRuntime
from app.config import REQUIRED_ENVIRONMENT_KEYS, AppSettings, config_find_missing_required_keys

from .handoff import MainApplicationHandoffError, job_handoff_start

logger = logging.getLogger(__name__)

REQUIRED_STDLIB_MODULES: Final[tuple[str, ...]] = ("http", "pathlib", "json")
_REPORTED_PLAIN_VARIABLES: Final[tuple[tuple[str, str], ...]] = (
    ("PORT", "Not set"),
    ("NODE_ENV", "Not set"),
    ("DOCUMENT_SUPPORT", "false"),
    ("LOG_LEVEL", "info"),
)


@dataclass(frozen=True)
class PathCheckResult:
    """Filesystem check outcome for one configured path.

    Attributes:
        path: Checked path as configured.
        exists: Whether the path exists.
        is_directory: Whether the path is a directory.
        size_bytes: File size, None for directories or missing paths.
        executable: Whether any execute bit is set, None for missing paths.
    """

    path: str
    exists: bool
    is_directory: bool = False
    size_bytes: int | None = None
    executable: bool | None = None


@dataclass(frozen=True)
class DiagnosticsReport:
    """Collected results of one diagnostics run.

    Attributes:
        runtime: Interpreter and platform facts.
        environment: Reported environment values, secrets masked as set/missing.
        paths: Filesystem check results.
        failed_imports: Required modules that failed to import.
        artifact_path: Resolved main application file, None when unresolvable.
        artifact_length: Character count of the main application file, None when unreadable.
        missing_keys: Required configuration keys without a value.
        probe: API connectivity probe result, None when the probe did not run.
    """

    runtime: dict[str, object]
    environment: dict[str, str]
    paths: tuple[PathCheckResult, ...]
    failed_imports: tuple[str, ...]
    artifact_path: str | None
    artifact_length: int | None
    missing_keys: tuple[str, ...]
    probe: ProbeResult | None = None

    def report_is_startable(self) -> bool:
        return not self.missing_keys

    def report_summary(self) -> str:
        """Return a one-line summary of the collected results."""

        present_paths = sum(1 for result in self.paths if result.exists)
        if self.probe is None:
            api_status = "not checked"
        else:
            api_status = "yes" if self.probe.reachable else "no"
        return (
            f"{present_paths}/{len(self.paths)} paths present, "
            f"{len(self.failed_imports)} failed imports, API reachable: {api_status}"
        )


def job_diagnostics_collect_runtime(process_runtime: ProcessRuntimePort) -> dict[str, object]:
    """Collect and log interpreter, platform and memory facts.

    Args:
        process_runtime: Process runtime port.

    Returns:
        dict[str, object]: Runtime facts keyed by label.

    Raises:
        RuntimeError: Raised when process counters cannot be read.
    """

    runtime_facts: dict[str, object] = {
        "python_version": process_runtime.runtime_versions().get("python", "unknown"),
        "platform": process_runtime.runtime_platform(),
        "arch": process_runtime.runtime_arch(),
        "cwd": process_runtime.runtime_cwd(),
        "memory": process_runtime.runtime_memory_usage(),
    }
    logger.info("Environment check:")
    logger.info("  Python version: %s", runtime_facts["python_version"])
    logger.info("  Platform: %s", runtime_facts["platform"])
    logger.info("  Architecture: %s", runtime_facts["arch"])
    logger.info("  Working directory: %s", runtime_facts["cwd"])
    logger.info("  Memory usage: %s", runtime_facts["memory"])
    return runtime_facts


def job_diagnostics_describe_environment(
    environment: Mapping[str, str],
    settings: AppSettings | None = None,
) -> dict[str, str]:
    """Describe configuration variables without revealing secret values.

    Args:
        environment: Process environment mapping.
        settings: Optional loaded settings; when given, credential presence is read from them.

    Returns:
        dict[str, str]: Variable name to reported value.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    if settings is None:
        missing_keys = tuple(key for key in REQUIRED_ENVIRONMENT_KEYS if not environment.get(key))
    else:
        missing_keys = config_find_missing_required_keys(settings)
    described: dict[str, str] = {}
    for variable_name, fallback in _REPORTED_PLAIN_VARIABLES:
        described[variable_name] = environment.get(variable_name) or fallback
    for variable_name in REQUIRED_ENVIRONMENT_KEYS:
        described[variable_name] = "Missing" if variable_name in missing_keys else "Set"

    logger.info("Environment variables:")
    for variable_name, reported_value in described.items():
        logger.info("  %s: %s", variable_name, reported_value)
    return described


def job_diagnostics_check_path(path: str) -> PathCheckResult:
    """Check one filesystem path for existence, size and execute permission.

    Args:
        path: Path relative to the working directory or absolute.

    Returns:
        PathCheckResult: Check outcome; stat failures are logged and reported as missing details.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    candidate = Path(path)
    if not candidate.exists():
        return PathCheckResult(path=path, exists=False)
    if candidate.is_dir():
        return PathCheckResult(path=path, exists=True, is_directory=True)
    try:
        file_stat = candidate.stat()
    except OSError as error:
        logger.warning("    Error reading stats for %s: %s", path, error)
        return PathCheckResult(path=path, exists=True)
    return PathCheckResult(
        path=path,
        exists=True,
        size_bytes=file_stat.st_size,
        executable=bool(file_stat.st_mode & (stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)),
    )


def job_diagnostics_check_paths(paths: Sequence[str]) -> tuple[PathCheckResult, ...]:
    """Check and log every configured filesystem path."""

    logger.info("File system check:")
    results = tuple(job_diagnostics_check_path(path) for path in paths)
    for result in results:
        logger.info("  %s: %s", result.path, "Exists" if result.exists else "Missing")
        if result.size_bytes is not None:
            logger.info("    Size: %s bytes", result.size_bytes)
            logger.info("    Executable: %s", "Yes" if result.executable else "No")
    return results


def job_diagnostics_check_imports(module_names: Sequence[str] = REQUIRED_STDLIB_MODULES) -> tuple[str, ...]:
    """Import required modules and report the ones that fail.

    Args:
        module_names: Module names to import.

    Returns:
        tuple[str, ...]: Names of modules that could not be imported.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    logger.info("Import test:")
    failed_modules: list[str] = []
    for module_name in module_names:
        try:
            importlib.import_module(module_name)
        except ImportError as error:
            logger.error("  Import of %s failed: %s", module_name, error)
            failed_modules.append(module_name)
    if not failed_modules:
        logger.info("  Standard library modules OK")
    return tuple(failed_modules)


def job_diagnostics_resolve_artifact_path(entry_reference: str) -> str | None:
    """Locate the source file of the main application module without running it.

    Args:
        entry_reference: Entry reference in `module:attribute` form.

    Returns:
        str | None: Module file path, or None when the module cannot be located.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    module_name = entry_reference.partition(":")[0].strip()
    try:
        module_spec = importlib.util.find_spec(module_name)
    except (ImportError, ValueError) as error:
        logger.warning("  Main application module %s could not be located: %s", module_name, error)
        return None
    if module_spec is None or not module_spec.origin or not os.path.isfile(module_spec.origin):
        return None
    return module_spec.origin


def job_diagnostics_check_artifact(artifact_path: str | None) -> int | None:
    """Check that the main application file exists and has content.

    Args:
        artifact_path: Main application file path.

    Returns:
        int | None: Character count, or None when the file is missing or unreadable.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    logger.info("Application loading test:")
    if artifact_path is None or not os.path.isfile(artifact_path):
        logger.error("  Main application file missing")
        return None
    logger.info("  Main application file exists: %s", artifact_path)
    try:
        content = Path(artifact_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        logger.exception("  Application loading failed: %s", error)
        return None
    if content:
        logger.info("  Main application file has content (%s chars)", len(content))
    else:
        logger.error("  Main application file is empty")
    return len(content)


def job_diagnostics_validate_critical_environment(settings: AppSettings) -> tuple[str, ...]:
    """Return required keys missing from loaded settings, logging each outcome."""

    logger.info("Critical environment validation:")
    missing_keys = config_find_missing_required_keys(settings)
    for variable_name in REQUIRED_ENVIRONMENT_KEYS:
        if variable_name in missing_keys:
            logger.error("  CRITICAL: Missing %s", variable_name)
        else:
            logger.info("  %s is set", variable_name)
    return missing_keys


def job_diagnostics_collect(
    settings: AppSettings,
    environment: Mapping[str, str],
    process_runtime: ProcessRuntimePort,
) -> DiagnosticsReport:
    """Run every local check and return the collected report.

    Args:
        settings: Runtime settings supplying paths and the entry reference.
        environment: Process environment mapping.
        process_runtime: Process runtime port.

    Returns:
        DiagnosticsReport: Report without a probe result; the run attaches it after probing.

    Raises:
        RuntimeError: Raised when process counters cannot be read.
    """

    runtime_facts = job_diagnostics_collect_runtime(process_runtime)
    described_environment = job_diagnostics_describe_environment(environment, settings=settings)
    path_results = job_diagnostics_check_paths(settings.diagnostics_check_paths)
    failed_imports = job_diagnostics_check_imports()
    artifact_path = job_diagnostics_resolve_artifact_path(settings.main_application_entry)
    artifact_length = job_diagnostics_check_artifact(artifact_path)
    missing_keys = job_diagnostics_validate_critical_environment(settings)
    return DiagnosticsReport(
        runtime=runtime_facts,
        environment=described_environment,
        paths=path_results,
        failed_imports=failed_imports,
        artifact_path=artifact_path,
        artifact_length=artifact_length,
        missing_keys=missing_keys,
    )


def job_diagnostics_run(
    settings: AppSettings,
    environment: Mapping[str, str] | None = None,
    process_runtime: ProcessRuntimePort | None = None,
    probe: ApiProbePort | None = None,
) -> int:
    """Run startup diagnostics, probe ClickUp, then hand off to the main application.

    Args:
        settings: Runtime settings.
        environment: Optional environment mapping, defaults to the live process environment.
        process_runtime: Optional process runtime port.
        probe: Optional API probe, defaults to a ClickUp probe built from settings.

    Returns:
        int: Exit code; the entry point's integer result when it returns one, else 0 or 1.

    Raises:
        SystemExit: Propagated unchanged when the main application exits the process.
    """

    resolved_environment = os.environ if environment is None else environment
    logger.info("Starting ClickUp MCP Server debugging...")
    report = job_diagnostics_collect(
        settings=settings,
        environment=resolved_environment,
        process_runtime=process_runtime or PsutilProcessRuntime(),
    )
    if not report.report_is_startable():
        logger.critical("STARTUP FAILED: Missing critical environment variables")
        logger.critical("Fix: set %s in the deployment platform dashboard", " and ".join(report.missing_keys))
        return 1

    logger.info("ClickUp API connectivity test:")
    resolved_probe = probe or ClickUpConnectivityProbe(
        api_key=settings.clickup_api_key,
        base_url=settings.clickup_api_base_url,
        timeout_seconds=settings.clickup_probe_timeout_seconds,
    )
    probe_result = resolved_probe.probe_check_connectivity()
    logger.info("  %s probe: %s", resolved_probe.probe_source_name(), probe_result.detail)
    report = replace(report, probe=probe_result)

    logger.info("Debugging complete (%s). Starting main application...", report.report_summary())
    logger.info("=" * 60)
    try:
        handoff_result = job_handoff_start(settings.main_application_entry)
    except MainApplicationHandoffError as error:
        logger.critical("Failed to start main application: %s", error)
        return 1
    except Exception as error:
        logger.critical("Failed to start main application: %s", error, exc_info=True)
        return 1

    if isinstance(handoff_result, int) and not isinstance(handoff_result, bool):
        return handoff_result
    logger.info("Main application returned")
    return 0

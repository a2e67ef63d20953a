"""Job layer package for startup diagnostics and main application handoff."""

from .handoff import MainApplicationHandoffError, job_handoff_resolve_entry, job_handoff_start
from .startup_diagnostics import (
	REQUIRED_STDLIB_MODULES,
	DiagnosticsReport,
	PathCheckResult,
	job_diagnostics_check_artifact,
	job_diagnostics_check_imports,
	job_diagnostics_check_path,
	job_diagnostics_check_paths,
	job_diagnostics_collect,
	job_diagnostics_collect_runtime,
	job_diagnostics_describe_environment,
	job_diagnostics_resolve_artifact_path,
	job_diagnostics_run,
	job_diagnostics_validate_critical_environment,
)

__all__ = [
	"DiagnosticsReport",
	"MainApplicationHandoffError",
	"PathCheckResult",
	"REQUIRED_STDLIB_MODULES",
	"job_diagnostics_check_artifact",
	"job_diagnostics_check_imports",
	"job_diagnostics_check_path",
	"job_diagnostics_check_paths",
	"job_diagnostics_collect",
	"job_diagnostics_collect_runtime",
	"job_diagnostics_describe_environment",
	"job_diagnostics_resolve_artifact_path",
	"job_diagnostics_run",
	"job_diagnostics_validate_critical_environment",
	"job_handoff_resolve_entry",
	"job_handoff_start",
]

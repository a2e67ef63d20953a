"""Adapter layer package for process runtime and ClickUp integration boundaries."""

from .clickup_probe import ClickUpConnectivityProbe
from .interfaces import ApiProbePort, ProbeResult, ProcessRuntimePort
from .process_runtime import PsutilProcessRuntime

__all__ = [
	"ApiProbePort",
	"ClickUpConnectivityProbe",
	"ProbeResult",
	"ProcessRuntimePort",
	"PsutilProcessRuntime",
]

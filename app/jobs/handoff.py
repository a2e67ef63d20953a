"""Main application handoff used after startup diagnostics complete."""

from __future__ import annotations

import asyncio
import importlib
import inspect
import logging
from collections.abc import Callable
from typing import Any, Final

logger = logging.getLogger(__name__)

FALLBACK_ENTRY_ATTRIBUTE: Final[str] = "main"


class MainApplicationHandoffError(RuntimeError):
    """Raised when the main application entry point cannot be resolved."""


def job_handoff_resolve_entry(entry_reference: str) -> Callable[[], Any]:
    """Resolve a `module:attribute` reference to a callable entry point.

    The named attribute is tried first, then a callable named `main`. A
    module exposing neither is an integration error rather than a silent
    success.

    Args:
        entry_reference: Entry reference such as `app.main:main_serve` or `app.main`.

    Returns:
        Callable[[], Any]: Zero-argument entry point.

    Raises:
        MainApplicationHandoffError: Raised when the module cannot be imported or has no entry point.
    """

    module_name, _, attribute_name = entry_reference.strip().partition(":")
    if not module_name:
        raise MainApplicationHandoffError("entry reference must name a module")

    try:
        module = importlib.import_module(module_name)
    except ImportError as error:
        raise MainApplicationHandoffError(f"main application module `{module_name}` could not be imported") from error

    candidate_names = [name for name in (attribute_name, FALLBACK_ENTRY_ATTRIBUTE) if name]
    for candidate_name in dict.fromkeys(candidate_names):
        candidate = getattr(module, candidate_name, None)
        if callable(candidate):
            logger.debug("Resolved main application entry %s:%s", module_name, candidate_name)
            return candidate

    raise MainApplicationHandoffError(
        f"main application module `{module_name}` exposes no callable entry point "
        f"(tried: {', '.join(dict.fromkeys(candidate_names))})"
    )


def job_handoff_start(entry_reference: str) -> Any:
    """Resolve and invoke the main application entry point.

    Awaitable results are driven to completion on a fresh event loop.

    Args:
        entry_reference: Entry reference in `module:attribute` form.

    Returns:
        Any: Value returned by the entry point.

    Raises:
        MainApplicationHandoffError: Raised when the entry point cannot be resolved.
    """

    entry_point = job_handoff_resolve_entry(entry_reference)
    result = entry_point()
    if inspect.isawaitable(result):
        return asyncio.run(_job_handoff_await(result))
    return result


async def _job_handoff_await(awaitable: Any) -> Any:
    return await awaitable

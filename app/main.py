"""Main module entrypoint for local runtime execution.

This module configures logging and runs either the health service or the
startup diagnostics that hand off to the main application.
"""

import argparse
import logging

from app.bootstrap import bootstrap_run_service
from app.config import SettingsLoadError, config_configure_logging, config_load_settings
from app.jobs import job_diagnostics_run

logger = logging.getLogger(__name__)


def main() -> None:
    """Run selected runtime command and exit with its status code.

    Returns:
        None: This function does not return; it always raises SystemExit.

    Raises:
        SystemExit: Raised with the command exit code.
    """

    argument_parser = argparse.ArgumentParser(description="ClickUp MCP Server health and diagnostics entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="serve",
        choices=("serve", "diagnose"),
        help="Runtime command: `serve` starts the health server, `diagnose` runs startup diagnostics "
        "and then hands off to the main application",
        type=str,
    )
    parsed_arguments = argument_parser.parse_args()
    config_configure_logging()

    if parsed_arguments.command == "diagnose":
        raise SystemExit(main_diagnose())

    raise SystemExit(main_serve())


def main_serve() -> int:
    """Run the health service until shutdown.

    Returns:
        int: Process exit code.

    Raises:
        RuntimeError: Failures are reported through the exit code.
    """

    return bootstrap_run_service()


def main_diagnose() -> int:
    """Run startup diagnostics followed by the main application handoff.

    Returns:
        int: Process exit code.

    Raises:
        SystemExit: Propagated when the main application exits the process.
    """

    try:
        settings = config_load_settings()
    except SettingsLoadError as error:
        logger.critical("STARTUP FAILED: %s", error)
        return 1
    config_configure_logging(level=settings.log_level, log_format=settings.log_format)
    return job_diagnostics_run(settings=settings)


if __name__ == "__main__":
    main()

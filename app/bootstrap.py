"""Application bootstrap wiring for startup validation, listener start and shutdown."""

from __future__ import annotations

import logging

from fastapi import FastAPI

from app.adapters import ProcessRuntimePort, PsutilProcessRuntime
from app.api import create_api_application
from app.config import (
    AppSettings,
    MissingConfigurationError,
    SettingsLoadError,
    config_configure_logging,
    config_load_settings,
    config_require_settings,
)
from app.server import (
    EXIT_CODE_FAILURE,
    FatalErrorHooks,
    LifecycleState,
    ShutdownCoordinator,
    server_create_health_server,
)

logger = logging.getLogger(__name__)


def bootstrap_create_application(
    settings: AppSettings,
    process_runtime: ProcessRuntimePort | None = None,
) -> FastAPI:
    """Assemble the health responder application.

    Args:
        settings: Validated runtime settings.
        process_runtime: Optional process runtime port, defaults to psutil-backed inspection.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    return create_api_application(
        settings=settings,
        process_runtime=process_runtime or PsutilProcessRuntime(),
    )


def bootstrap_validate_configuration(
    coordinator: ShutdownCoordinator,
    settings: AppSettings | None = None,
) -> AppSettings | None:
    """Load settings and gate startup on required configuration keys.

    Missing keys end the lifecycle immediately; there is no partial-start mode.

    Args:
        coordinator: Shutdown coordinator owning the lifecycle.
        settings: Optional preloaded settings, loaded from the environment when omitted.

    Returns:
        AppSettings | None: Validated settings, or None when startup must abort.

    Raises:
        RuntimeError: This function reports configuration failures through its return value.
    """

    try:
        resolved_settings = settings or config_load_settings()
        config_require_settings(resolved_settings)
    except MissingConfigurationError as error:
        logger.error("Missing required environment variables: %s", ", ".join(error.missing_keys))
        logger.error("Set these variables in the deployment platform dashboard")
        coordinator.lifecycle_transition(LifecycleState.TERMINATED)
        return None
    except SettingsLoadError as error:
        logger.error("%s", error)
        coordinator.lifecycle_transition(LifecycleState.TERMINATED)
        return None

    config_configure_logging(level=resolved_settings.log_level, log_format=resolved_settings.log_format)
    logger.info("Environment validation passed")
    return resolved_settings


def bootstrap_run_service(
    settings: AppSettings | None = None,
    coordinator: ShutdownCoordinator | None = None,
    process_runtime: ProcessRuntimePort | None = None,
    install_process_hooks: bool = True,
) -> int:
    """Validate configuration, serve the health responder and wait for shutdown.

    Args:
        settings: Optional preloaded settings.
        coordinator: Optional shutdown coordinator, created when omitted.
        process_runtime: Optional process runtime port for the health responder.
        install_process_hooks: Whether to install signal handlers and fatal error hooks.

    Returns:
        int: Process exit code, 0 after graceful shutdown and 1 on any fatal failure.

    Raises:
        RuntimeError: Failures are reported through the exit code.
    """

    resolved_coordinator = coordinator or ShutdownCoordinator()
    logger.info("Starting Minimal ClickUp MCP Server...")

    validated_settings = bootstrap_validate_configuration(coordinator=resolved_coordinator, settings=settings)
    if validated_settings is None:
        return EXIT_CODE_FAILURE

    port = validated_settings.port
    logger.info("Starting on port %s", port)
    resolved_coordinator.lifecycle_transition(LifecycleState.STARTING)

    fatal_error_hooks: FatalErrorHooks | None = None
    if install_process_hooks:
        fatal_error_hooks = FatalErrorHooks(coordinator=resolved_coordinator)
        fatal_error_hooks.install()
        resolved_coordinator.install_signal_handlers()

    health_server = server_create_health_server(
        application=bootstrap_create_application(settings=validated_settings, process_runtime=process_runtime),
        host=validated_settings.application_host,
        port=port,
        coordinator=resolved_coordinator,
        fatal_error_hooks=fatal_error_hooks,
        log_level=validated_settings.log_level,
    )
    logger.info("Health check: http://localhost:%s/health", port)
    logger.info("Debug info: http://localhost:%s/debug", port)
    logger.warning("This is a minimal debug version; full MCP functionality is served by the main application")

    try:
        health_server.run()
    except SystemExit as error:
        # Uvicorn exits with status 1 when the listener cannot bind.
        logger.critical(
            "Health server failed to start on %s:%s (exit status %s)",
            validated_settings.application_host,
            port,
            error.code,
        )
        resolved_coordinator.request_shutdown(reason="startup failure", exit_code=EXIT_CODE_FAILURE)
        bootstrap_finish_lifecycle(resolved_coordinator)
        return EXIT_CODE_FAILURE

    if not health_server.started:
        logger.critical("Health server stopped before it started listening")
        resolved_coordinator.request_shutdown(reason="startup failure", exit_code=EXIT_CODE_FAILURE)

    logger.info("Health server closed")
    bootstrap_finish_lifecycle(resolved_coordinator)
    return resolved_coordinator.exit_code


def bootstrap_finish_lifecycle(coordinator: ShutdownCoordinator) -> None:
    """Drive the lifecycle to its terminal state once the listener is closed.

    Args:
        coordinator: Shutdown coordinator owning the lifecycle.

    Raises:
        LifecycleTransitionError: Raised when the lifecycle is in an unexpected state.
    """

    if coordinator.state is LifecycleState.RUNNING:
        coordinator.lifecycle_transition(LifecycleState.SHUTTING_DOWN)
    if coordinator.state is not LifecycleState.TERMINATED:
        coordinator.lifecycle_transition(LifecycleState.TERMINATED)

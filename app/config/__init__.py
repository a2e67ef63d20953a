"""Configuration package for runtime settings, logging and startup validation."""

from .logging import JsonLogFormatter, config_configure_logging
from .settings import (
    DEFAULT_SERVICE_VERSION,
    REQUIRED_ENVIRONMENT_KEYS,
    SERVICE_NAME,
    AppSettings,
    MissingConfigurationError,
    SettingsLoadError,
    config_find_missing_required_keys,
    config_load_settings,
    config_require_settings,
)

__all__ = [
    "AppSettings",
    "DEFAULT_SERVICE_VERSION",
    "JsonLogFormatter",
    "MissingConfigurationError",
    "REQUIRED_ENVIRONMENT_KEYS",
    "SERVICE_NAME",
    "SettingsLoadError",
    "config_configure_logging",
    "config_find_missing_required_keys",
    "config_load_settings",
    "config_require_settings",
]

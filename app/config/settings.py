"""Typed runtime settings with dotenv support and startup validation."""

from typing import Final

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SERVICE_NAME: Final[str] = "clickup-mcp-server"
DEFAULT_SERVICE_VERSION: Final[str] = "1.0.0"
REQUIRED_ENVIRONMENT_KEYS: Final[tuple[str, ...]] = ("CLICKUP_API_KEY", "CLICKUP_TEAM_ID")


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class MissingConfigurationError(SettingsLoadError):
    """Raised when required configuration keys are absent or empty.

    Attributes:
        missing_keys: Environment variable names that were not provided.
    """

    def __init__(self, missing_keys: tuple[str, ...]):
        super().__init__(f"Missing required environment variables: {', '.join(missing_keys)}")
        self.missing_keys = missing_keys


class AppSettings(BaseSettings):
    """Application settings for the health service and startup diagnostics.

    Environment variable names map directly to field names in uppercase.
    Example: `clickup_api_key` reads from `CLICKUP_API_KEY`.

    Attributes:
        port: Listener port for the health responder.
        application_host: Host interface for listener binding.
        node_env: Runtime environment label.
        npm_package_version: Service version label reported by `/health`.
        clickup_api_key: ClickUp personal API token.
        clickup_team_id: ClickUp workspace (team) identifier.
        document_support: Document feature toggle, enabled only by literal `true`.
        railway_deployment_id: Deployment identifier provided by the hosting platform.
        railway_service_name: Service name provided by the hosting platform.
        log_level: Root logging level name.
        log_format: Log line format, `plain` or `json`.
        clickup_api_base_url: Base URL used by the connectivity probe.
        clickup_probe_timeout_seconds: Connectivity probe timeout.
        main_application_entry: `module:attribute` reference used for diagnostics handoff.
        diagnostics_check_paths: Filesystem paths reported by startup diagnostics.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    port: int = Field(default=8000, ge=1, le=65535)
    application_host: str = Field(default="0.0.0.0")
    node_env: str = Field(default="development")
    npm_package_version: str = Field(default=DEFAULT_SERVICE_VERSION)
    clickup_api_key: str = Field(default="")
    clickup_team_id: str = Field(default="")
    document_support: str = Field(default="false")
    railway_deployment_id: str = Field(default="unknown")
    railway_service_name: str = Field(default=SERVICE_NAME)
    log_level: str = Field(default="info")
    log_format: str = Field(default="plain")
    clickup_api_base_url: str = Field(default="https://api.clickup.com/api/v2")
    clickup_probe_timeout_seconds: float = Field(default=10.0, gt=0)
    main_application_entry: str = Field(default="app.main:main_serve")
    diagnostics_check_paths: tuple[str, ...] = Field(default=("app/main.py", "pyproject.toml", "app"))

    @field_validator("port", mode="before")
    @classmethod
    def _default_blank_port(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return 8000
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"critical", "error", "warning", "info", "debug"}:
            raise ValueError("log_level must be one of critical, error, warning, info, debug")
        return normalized_value

    @field_validator("log_format")
    @classmethod
    def _validate_log_format(cls, value: str) -> str:
        normalized_value = value.strip().lower()
        if normalized_value not in {"plain", "json"}:
            raise ValueError("log_format must be `plain` or `json`")
        return normalized_value

    @field_validator("main_application_entry")
    @classmethod
    def _validate_entry_reference(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value or stripped_value.startswith(":"):
            raise ValueError("main_application_entry must name a module")
        return stripped_value

    @property
    def document_support_enabled(self) -> bool:
        """Return whether document support is switched on by the literal string `true`."""

        return self.document_support == "true"


def config_find_missing_required_keys(settings: AppSettings) -> tuple[str, ...]:
    """Return required environment keys that are absent or empty.

    Args:
        settings: Loaded runtime settings.

    Returns:
        tuple[str, ...]: Missing key names in declaration order, empty when complete.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    provided_values = {
        "CLICKUP_API_KEY": settings.clickup_api_key,
        "CLICKUP_TEAM_ID": settings.clickup_team_id,
    }
    return tuple(key for key in REQUIRED_ENVIRONMENT_KEYS if not provided_values[key])


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings values are invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error


def config_require_settings(settings: AppSettings) -> AppSettings:
    """Reject settings that lack any required configuration key.

    Args:
        settings: Loaded runtime settings.

    Returns:
        AppSettings: The same settings object when complete.

    Raises:
        MissingConfigurationError: Raised when at least one required key is missing.
    """

    missing_keys = config_find_missing_required_keys(settings)
    if missing_keys:
        raise MissingConfigurationError(missing_keys)
    return settings

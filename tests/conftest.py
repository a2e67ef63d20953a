"""Shared pytest fixtures for service configuration isolation."""

import pytest

_SERVICE_VARIABLES = (
    "PORT",
    "NODE_ENV",
    "NPM_PACKAGE_VERSION",
    "CLICKUP_API_KEY",
    "CLICKUP_TEAM_ID",
    "DOCUMENT_SUPPORT",
    "RAILWAY_DEPLOYMENT_ID",
    "RAILWAY_SERVICE_NAME",
    "LOG_LEVEL",
    "LOG_FORMAT",
    "MAIN_APPLICATION_ENTRY",
    "DIAGNOSTICS_CHECK_PATHS",
)


@pytest.fixture
def clean_service_environment(monkeypatch: pytest.MonkeyPatch, tmp_path) -> pytest.MonkeyPatch:
    """Remove service variables from the environment and isolate dotenv lookup.

    Args:
        monkeypatch: Pytest monkeypatch fixture.
        tmp_path: Empty working directory without a `.env` file.

    Returns:
        pytest.MonkeyPatch: The same monkeypatch fixture for further setup.
    """

    for variable_name in _SERVICE_VARIABLES:
        monkeypatch.delenv(variable_name, raising=False)
    monkeypatch.chdir(tmp_path)
    return monkeypatch

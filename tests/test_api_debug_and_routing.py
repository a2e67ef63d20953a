"""Tests for debug endpoint, CORS preflight and fallback routing behavior."""

import pytest
from fastapi.testclient import TestClient

from app.adapters import PsutilProcessRuntime
from app.api.application import create_api_application
from app.config import AppSettings

pytestmark = pytest.mark.usefixtures("clean_service_environment")


def _build_client() -> TestClient:
    """Create a test client backed by the live process runtime.

    Returns:
        TestClient: Client for the health responder application.

    Raises:
        ValueError: Raised by AppSettings when values are invalid.
    """

    settings = AppSettings(_env_file=None, clickup_api_key="abc", clickup_team_id="123")
    return TestClient(create_api_application(settings, PsutilProcessRuntime()))


def test_api_debug_reflects_live_environment_variables(monkeypatch: pytest.MonkeyPatch) -> None:
    """Include every current environment variable with its exact value.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate environment round-trip.

    Raises:
        AssertionError: Raised when environment values are missing or altered.
    """

    client = _build_client()
    monkeypatch.setenv("DEBUG_ROUND_TRIP_VALUE", "value with spaces = and symbols")

    response = client.get("/debug")

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/json"
    payload = response.json()
    assert payload["environment"]["DEBUG_ROUND_TRIP_VALUE"] == "value with spaces = and symbols"
    assert set(payload) == {"environment", "argv", "cwd", "versions", "platform", "arch"}
    assert isinstance(payload["argv"], list)
    assert "python" in payload["versions"]
    assert response.text.startswith('{\n  "environment"')


def test_api_options_returns_no_content_for_any_path() -> None:
    """Answer preflight on known and unknown paths with 204 and no body.

    Returns:
        None: Assertions validate preflight handling.

    Raises:
        AssertionError: Raised when preflight falls through to routing.
    """

    client = _build_client()

    for path in ("/health", "/debug", "/does-not-exist"):
        response = client.options(path)
        assert response.status_code == 204
        assert response.content == b""
        assert response.headers["access-control-allow-origin"] == "*"


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("GET", "/"),
        ("GET", "/unknown"),
        ("POST", "/health"),
        ("DELETE", "/debug"),
        ("GET", "/docs"),
        ("GET", "/openapi.json"),
        ("GET", "/health/"),
        ("GET", "/debug/"),
    ],
)
def test_api_unknown_routes_return_structured_not_found(method: str, path: str) -> None:
    """Return 404 with the endpoint list for unsupported method/path combinations.

    Args:
        method: HTTP method.
        path: Request path.

    Returns:
        None: Assertions validate fallback payload.

    Raises:
        AssertionError: Raised when fallback payload differs.
    """

    client = _build_client()

    response = client.request(method, path)

    assert response.status_code == 404
    assert response.headers["content-type"] == "application/json"
    assert response.headers["access-control-allow-origin"] == "*"
    assert response.json() == {
        "error": "Not Found",
        "message": "ClickUp MCP Server Debug Interface",
        "endpoints": ["/health", "/debug"],
    }


def test_api_ignores_request_body() -> None:
    """Answer GET requests the same way regardless of body content.

    Returns:
        None: Assertions validate body-independent routing.

    Raises:
        AssertionError: Raised when body content changes the response.
    """

    client = _build_client()

    response = client.request("GET", "/health", content=b"not json at all")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"

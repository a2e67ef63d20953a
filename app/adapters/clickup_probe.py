"""ClickUp API connectivity probe used by startup diagnostics."""

from __future__ import annotations

import logging
from typing import Final

import httpx

from .interfaces import ApiProbePort, ProbeResult

logger = logging.getLogger(__name__)


class ClickUpConnectivityProbe(ApiProbePort):
    """Probe ClickUp reachability by reading the authorized user profile."""

    _USER_AGENT: Final[str] = "clickup-mcp-server-diagnostics/1.0 (Python/httpx)"
    _PROBE_PATH: Final[str] = "/user"
    _RATE_LIMIT_HEADER: Final[str] = "x-ratelimit-remaining"

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.clickup.com/api/v2",
        timeout_seconds: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ):
        """Initialize ClickUp connectivity probe.

        Args:
            api_key: ClickUp personal API token sent in the `Authorization` header.
            base_url: ClickUp API base URL.
            timeout_seconds: Request timeout in seconds.
            transport: Optional httpx transport override.

        Raises:
            ValueError: Raised when configuration values are invalid.
        """

        normalized_base_url = base_url.strip()
        if not api_key:
            raise ValueError("api_key must not be empty")
        if not normalized_base_url:
            raise ValueError("base_url must not be blank")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

        self._api_key = api_key
        self._base_url = normalized_base_url.rstrip("/")
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    def probe_source_name(self) -> str:
        return "clickup_api"

    def probe_check_connectivity(self) -> ProbeResult:
        """Issue one authorized request and classify the outcome.

        Returns:
            ProbeResult: Reachable only when ClickUp answers HTTP 200.

        Raises:
            RuntimeError: This method does not raise for transport failures.
        """

        headers = {
            "Authorization": self._api_key,
            "Content-Type": "application/json",
            "User-Agent": self._USER_AGENT,
        }
        try:
            with httpx.Client(timeout=self._timeout_seconds, transport=self._transport) as client:
                response = client.get(f"{self._base_url}{self._PROBE_PATH}", headers=headers)
        except httpx.TimeoutException:
            logger.error("ClickUp API connection timed out after %.1fs", self._timeout_seconds)
            return ProbeResult(
                reachable=False,
                status_code=None,
                rate_limit_remaining=None,
                detail="connection timed out",
            )
        except httpx.HTTPError as error:
            logger.error("ClickUp API connection failed: %s", error)
            return ProbeResult(
                reachable=False,
                status_code=None,
                rate_limit_remaining=None,
                detail=f"connection failed: {error}",
            )
        except (httpx.InvalidURL, ValueError) as error:
            # Non-ASCII header values and malformed base URLs fail before any I/O.
            logger.error("ClickUp API request could not be built: %s", error)
            return ProbeResult(
                reachable=False,
                status_code=None,
                rate_limit_remaining=None,
                detail=f"invalid request: {error}",
            )

        rate_limit_remaining = response.headers.get(self._RATE_LIMIT_HEADER)
        logger.info("API response status: %s", response.status_code)
        logger.info("Rate limit remaining: %s", rate_limit_remaining or "Unknown")
        if response.status_code == httpx.codes.OK:
            logger.info("ClickUp API connection successful")
            return ProbeResult(
                reachable=True,
                status_code=response.status_code,
                rate_limit_remaining=rate_limit_remaining,
                detail="connection successful",
            )

        logger.warning("ClickUp API returned status %s", response.status_code)
        return ProbeResult(
            reachable=False,
            status_code=response.status_code,
            rate_limit_remaining=rate_limit_remaining,
            detail=f"unexpected status {response.status_code}",
        )

"""Typed domain models shared across runtime layers.

Every model here is a request-scoped snapshot: it is computed synchronously
while answering one request and is never stored.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ConfigPresence:
    """Presence flags for ClickUp configuration values.

    Attributes:
        api_key_present: Whether a non-empty API key is configured.
        team_id_present: Whether a non-empty team identifier is configured.
        document_support: Whether document support is switched on.
    """

    api_key_present: bool
    team_id_present: bool
    document_support: bool

    def to_payload(self) -> dict[str, bool]:
        """Return the camel-case JSON payload used by `/health`."""

        return {
            "apiKeyPresent": self.api_key_present,
            "teamIdPresent": self.team_id_present,
            "documentSupport": self.document_support,
        }


@dataclass(frozen=True)
class DeploymentMetadata:
    """Deployment identity reported by the hosting platform.

    Attributes:
        deployment_id: Platform deployment identifier.
        service_name: Platform service name.
    """

    deployment_id: str
    service_name: str

    def to_payload(self) -> dict[str, str]:
        return {"deployment_id": self.deployment_id, "service_name": self.service_name}


@dataclass(frozen=True)
class HealthStatus:
    """Health response contract used by the `/health` endpoint.

    The status is constant: the responder reports that it can answer, it
    does not probe dependent systems.

    Attributes:
        status: Overall status label.
        timestamp: ISO-8601 UTC timestamp of the response.
        service: Fixed service identifier.
        version: Service version label.
        environment: Runtime environment label.
        uptime_seconds: Seconds elapsed since process start.
        memory: Process memory counters in bytes.
        clickup: ClickUp configuration presence flags.
        deployment: Hosting platform deployment metadata.
    """

    status: str
    timestamp: str
    service: str
    version: str
    environment: str
    uptime_seconds: float
    memory: dict[str, int]
    clickup: ConfigPresence
    deployment: DeploymentMetadata

    def to_payload(self) -> dict[str, object]:
        """Return the JSON payload served by `/health`.

        Returns:
            dict[str, object]: Field mapping in response order.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        return {
            "status": self.status,
            "timestamp": self.timestamp,
            "service": self.service,
            "version": self.version,
            "environment": self.environment,
            "uptime": self.uptime_seconds,
            "memory": dict(self.memory),
            "clickup": self.clickup.to_payload(),
            "railway": self.deployment.to_payload(),
        }


@dataclass(frozen=True)
class DebugSnapshot:
    """Process introspection payload used by the `/debug` endpoint.

    The environment mapping is copied verbatim, secrets included.

    Attributes:
        environment: Full process environment mapping.
        argv: Process argument list.
        cwd: Current working directory.
        versions: Runtime and library versions.
        platform: Operating system platform identifier.
        arch: Machine architecture.
    """

    environment: dict[str, str]
    argv: list[str]
    cwd: str
    versions: dict[str, str] = field(default_factory=dict)
    platform: str = ""
    arch: str = ""

    def to_payload(self) -> dict[str, object]:
        return {
            "environment": dict(self.environment),
            "argv": list(self.argv),
            "cwd": self.cwd,
            "versions": dict(self.versions),
            "platform": self.platform,
            "arch": self.arch,
        }

"""Target resolution - determines Tempo vs Jira Cloud vs Jira Server."""

from dataclasses import dataclass
from enum import Enum

from core.config import TempoSettings
from core.exceptions import InvalidInput
from core.request_types import RequestDescriptor

CLOUD_DOMAIN = ".atlassian.net"


class TargetKind(str, Enum):
    TEMPO = "tempo"
    JIRA_CLOUD = "jira_cloud"
    JIRA_SERVER = "jira_server"


@dataclass(frozen=True)
class RouteDecision:
    """Resolved target for a request."""

    kind: TargetKind
    base_url: str

    @property
    def is_cloud(self) -> bool:
        return self.kind is TargetKind.JIRA_CLOUD


def normalize_base_url(base_url: str) -> str:
    """Prefix https:// when no scheme is given and strip trailing slashes."""
    if not base_url.startswith("http"):
        base_url = f"https://{base_url}"
    return base_url.rstrip("/")


class RouteDecider:
    """Resolve which upstream a descriptor targets, once per call."""

    def __init__(self, tempo: TempoSettings | None = None):
        self.tempo = tempo or TempoSettings()

    def decide(self, descriptor: RequestDescriptor) -> RouteDecision:
        """Return the target kind and base URL for the descriptor."""
        if descriptor.is_tempo:
            return RouteDecision(TargetKind.TEMPO, f"https://{self.tempo_host(descriptor.base_url)}")

        if not descriptor.base_url:
            raise InvalidInput("Jira base URL is required")

        base_url = normalize_base_url(descriptor.base_url)
        if CLOUD_DOMAIN in base_url:
            return RouteDecision(TargetKind.JIRA_CLOUD, base_url)
        return RouteDecision(TargetKind.JIRA_SERVER, base_url)

    def tempo_host(self, base_url: str) -> str:
        """EU host for cloud Jira sites, global host otherwise."""
        if CLOUD_DOMAIN in base_url:
            return self.tempo.cloud_host
        return self.tempo.default_host

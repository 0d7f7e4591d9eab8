"""Header construction for upstream requests."""

import base64

from core.request_types import RequestDescriptor
from core.router import CLOUD_DOMAIN

PREFORMATTED_PREFIXES = ("Basic ", "Bearer ")

COMMON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
    "X-Atlassian-Token": "nocheck",
}


def basic_credentials(email: str, token: str) -> str:
    """Return a Basic header value for email:token."""
    encoded = base64.b64encode(f"{email}:{token}".encode()).decode("ascii")
    return f"Basic {encoded}"


def infer_auth_scheme(target_url: str) -> str:
    """Pick the auth scheme when the caller did not specify one.

    Self-hosted Jira uses personal access tokens (bearer), cloud uses
    API tokens paired with the account email (basic). The whole target
    URL is checked, endpoint and query included.
    """
    if CLOUD_DOMAIN in target_url:
        return "basic"
    return "bearer"


class HeaderBuilder:
    """Build upstream headers for different targets."""

    def build_jira_headers(self, descriptor: RequestDescriptor, target_url: str) -> dict[str, str]:
        """Headers for Jira Cloud and Jira Server requests."""
        upstream = dict(COMMON_HEADERS)
        upstream["Authorization"] = self.jira_authorization(descriptor, target_url)
        return upstream

    def build_tempo_headers(self, api_token: str) -> dict[str, str]:
        """Build upstream headers for Tempo, which only accepts bearer tokens."""
        upstream = dict(COMMON_HEADERS)
        upstream["Authorization"] = f"Bearer {api_token}"
        upstream["X-Tempo-Api-Key"] = api_token
        return upstream

    def jira_authorization(self, descriptor: RequestDescriptor, target_url: str) -> str:
        token = descriptor.api_token.strip()
        if token.startswith(PREFORMATTED_PREFIXES):
            return token

        scheme = descriptor.auth_type
        if scheme not in ("basic", "bearer"):
            scheme = infer_auth_scheme(target_url)

        if scheme == "basic":
            return basic_credentials(descriptor.email, token)
        return f"Bearer {token}"

"""Endpoint rewriting and URL construction for Jira and Tempo."""

from core.router import RouteDecision, TargetKind

SERVER_SEARCH_REWRITE = ("/rest/api/3/search/jql", "/rest/api/2/search")
SERVER_VERSION_REWRITE = ("/rest/api/3/", "/rest/api/2/")
AUTH_TYPE_PARAM = "os_authType"


class RequestTransformer:
    """Build upstream URLs from a route decision and endpoint."""

    def build_url(self, decision: RouteDecision, endpoint: str) -> str:
        """Return the absolute upstream URL for the endpoint."""
        if decision.kind is TargetKind.TEMPO:
            return decision.base_url + self.ensure_leading_slash(endpoint)

        if decision.kind is TargetKind.JIRA_SERVER:
            endpoint = self.downgrade_api_version(endpoint)

        url = decision.base_url + self.ensure_leading_slash(endpoint)
        return self.append_auth_type(url)

    @staticmethod
    def ensure_leading_slash(endpoint: str) -> str:
        if endpoint.startswith("/"):
            return endpoint
        return f"/{endpoint}"

    @staticmethod
    def downgrade_api_version(endpoint: str) -> str:
        """Rewrite REST v3 paths to v2 for self-hosted Jira.

        Server/Data Center has no ``/search/jql`` resource, so that one maps
        to plain ``/rest/api/2/search``.
        """
        endpoint = endpoint.replace(*SERVER_SEARCH_REWRITE)
        return endpoint.replace(*SERVER_VERSION_REWRITE)

    @staticmethod
    def append_auth_type(url: str) -> str:
        """Append os_authType=basic unless the URL already carries it."""
        if AUTH_TYPE_PARAM in url:
            return url
        separator = "&" if "?" in url else "?"
        return f"{url}{separator}{AUTH_TYPE_PARAM}=basic"

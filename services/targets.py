"""Upstream target handlers for Jira and Tempo."""

from core.headers import HeaderBuilder
from core.protocols import RequestLogger
from core.request_types import PreparedRequest, RequestDescriptor
from core.router import RouteDecision
from core.transform import RequestTransformer

ALLOWED_METHODS = ("GET", "POST", "PUT", "DELETE")


def normalize_method(method: str | None) -> str | None:
    """Upper-cased method, or None when it is not one we forward."""
    method = (method or "GET").upper()
    if method in ALLOWED_METHODS:
        return method
    return None


class _Target:
    route_name = ""

    def __init__(
        self,
        logger: RequestLogger,
        transformer: RequestTransformer,
        header_builder: HeaderBuilder,
    ) -> None:
        self._logger = logger
        self._transformer = transformer
        self._headers = header_builder

    def _method(self, descriptor: RequestDescriptor) -> str:
        method = normalize_method(descriptor.method)
        if method is None:
            self._logger.log_warning(
                self.route_name,
                f"Unsupported method {descriptor.method!r}, sending GET",
            )
            return "GET"
        return method

    def _prepared(self, method: str, url: str, headers: dict[str, str], body) -> PreparedRequest:
        self._logger.log_request(self.route_name, method, url, headers, body)
        return PreparedRequest(self.route_name, method, url, headers, body)


class JiraTarget(_Target):
    """Jira-specific request preparation (cloud and self-hosted)."""

    route_name = "Jira"

    def prepare(self, descriptor: RequestDescriptor, decision: RouteDecision) -> PreparedRequest:
        """Prepare a request for Jira."""
        url = self._transformer.build_url(decision, descriptor.endpoint)
        headers = self._headers.build_jira_headers(descriptor, url)
        return self._prepared(self._method(descriptor), url, headers, descriptor.body)


class TempoTarget(_Target):
    """Tempo-specific request preparation."""

    route_name = "Tempo"

    def prepare(self, descriptor: RequestDescriptor, decision: RouteDecision) -> PreparedRequest:
        """Prepare a request for Tempo."""
        url = self._transformer.build_url(decision, descriptor.endpoint)
        headers = self._headers.build_tempo_headers(descriptor.api_token)
        return self._prepared(self._method(descriptor), url, headers, descriptor.body)

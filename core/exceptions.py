"""Custom exception hierarchy for the Jira/Tempo proxy."""


class ProxyError(Exception):
    """Base exception for all proxy errors.

    ``str(error)`` is the message shown to the caller.
    """


class InvalidInput(ProxyError):
    """Raised when a request descriptor cannot be proxied."""


class NetworkError(ProxyError):
    """Raised when the HTTP client could not complete the request."""


class NetworkTimeout(NetworkError):
    """Raised when the upstream request times out at the transport layer."""


class UpstreamError(ProxyError):
    """Raised when Jira or Tempo returns a non-2xx response.

    Attributes:
        status_code: HTTP status code from upstream
        body: Raw response body (empty if unreadable)
    """

    def __init__(self, status_code: int, body: str = "") -> None:
        super().__init__(f"Jira Error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class DecodeError(ProxyError):
    """Raised when a successful upstream response is not valid JSON."""

from typing import Any

import httpx
import pytest


class RecordingLogger:
    """RequestLogger that keeps everything it is told."""

    def __init__(self) -> None:
        self.requests: list[tuple[str, str, str]] = []
        self.warnings: list[tuple[str, str]] = []
        self.errors: list[tuple[str, int, str]] = []

    def log_request(
        self,
        route: str,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> None:
        self.requests.append((route, method, url))

    def log_warning(self, route: str, message: str) -> None:
        self.warnings.append((route, message))

    def log_error(self, route: str, status: int, message: str) -> None:
        self.errors.append((route, status, message))


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def captured() -> list[httpx.Request]:
    return []


@pytest.fixture
def make_client(captured):
    """Build an AsyncClient whose upstream answers with the given response."""

    def _make(response: httpx.Response | Exception | None = None) -> httpx.AsyncClient:
        def handler(request: httpx.Request) -> httpx.Response:
            captured.append(request)
            if isinstance(response, Exception):
                raise response
            return response if response is not None else httpx.Response(200, json={})

        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make

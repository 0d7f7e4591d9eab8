"""Shared protocol definitions."""

from typing import Any, Protocol


class RequestLogger(Protocol):
    """Protocol for request logging (Dashboard)."""

    def log_request(
        self,
        route: str,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> None: ...
    def log_warning(self, route: str, message: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...


class SilentRequestLogger:
    """RequestLogger that discards everything (library use without a dashboard)."""

    def log_request(
        self,
        route: str,
        method: str,
        url: str,
        headers: dict[str, str],
        body: Any = None,
    ) -> None:
        pass

    def log_warning(self, route: str, message: str) -> None:
        pass

    def log_error(self, route: str, status: int, message: str) -> None:
        pass

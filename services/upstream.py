"""HTTP execution of prepared upstream requests."""

import json
from typing import Any

import httpx

from core.exceptions import DecodeError, InvalidInput, NetworkError, NetworkTimeout, UpstreamError
from core.protocols import RequestLogger
from core.request_types import PreparedRequest


class _NoContent:
    def __repr__(self) -> str:
        return "NO_CONTENT"


NO_CONTENT = _NoContent()


class UpstreamClient:
    """Send prepared requests to Jira or Tempo and interpret the response."""

    def __init__(self, client: httpx.AsyncClient, logger: RequestLogger) -> None:
        self._client = client
        self._logger = logger

    async def send(self, prepared: PreparedRequest) -> Any:
        """Execute the request and return the parsed JSON body.

        Returns NO_CONTENT for 204 so it stays distinct from a JSON null.

        Raises:
            NetworkError: transport failure (NetworkTimeout on timeouts)
            UpstreamError: non-2xx status
            DecodeError: 2xx body that is not JSON
        """
        kwargs: dict[str, Any] = {"headers": prepared.headers}
        if prepared.body is not None:
            kwargs["json"] = prepared.body

        try:
            response = await self._client.request(
                prepared.method, prepared.url, follow_redirects=True, **kwargs
            )
        except httpx.TimeoutException as e:
            self._logger.log_error(prepared.route_name, 504, "Upstream timeout")
            raise NetworkTimeout(_describe(e)) from e
        except httpx.RequestError as e:
            self._logger.log_error(prepared.route_name, 502, str(e))
            raise NetworkError(_describe(e)) from e
        except (httpx.InvalidURL, UnicodeEncodeError) as e:
            # Headers must be ASCII; a stray character in the token lands here
            raise InvalidInput(str(e)) from e

        return self._interpret(prepared.route_name, response)

    def _interpret(self, route_name: str, response: httpx.Response) -> Any:
        if response.status_code == 204:
            return NO_CONTENT

        if not response.is_success:
            body = response.text
            self._logger.log_error(route_name, response.status_code, body)
            raise UpstreamError(response.status_code, body)

        try:
            return response.json()
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._logger.log_error(route_name, response.status_code, f"Invalid JSON: {e}")
            raise DecodeError(str(e)) from e


def _describe(error: Exception) -> str:
    """Transport errors sometimes carry no message; fall back to the type name."""
    return str(error) or type(error).__name__

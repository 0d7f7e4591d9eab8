"""Connection testing for Jira and Tempo credentials."""

from typing import Any, Literal

import httpx
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from core.headers import basic_credentials
from core.protocols import RequestLogger
from core.router import RouteDecider

TEMPO_PROBE_PATH = "/4/worklogs?limit=1"
JIRA_PROBE_PATHS = (
    "/rest/api/2/myself?os_authType=basic",
    "/rest/api/2/serverInfo?os_authType=basic",
)

_camel = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ConnectionTestRequest(BaseModel):
    model_config = _camel

    base_url: str = ""
    email: str = ""
    api_token: str = ""
    type: Literal["jira", "tempo"] = "jira"


class ConnectionTestResult(BaseModel):
    model_config = _camel

    success: bool
    message: str
    user_email: str | None = None
    server_info: str | None = None


class ConnectionTester:
    """Probe Jira or Tempo with the given credentials."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        logger: RequestLogger,
        decider: RouteDecider | None = None,
    ) -> None:
        self._client = client
        self._logger = logger
        self._decider = decider or RouteDecider()

    async def test(self, request: ConnectionTestRequest) -> ConnectionTestResult:
        base_url = request.base_url.strip().rstrip("/")
        email = request.email.strip()

        if not base_url or not request.api_token:
            return ConnectionTestResult(success=False, message="Base URL and API token are required")

        try:
            if request.type == "tempo":
                return await self._test_tempo(base_url, request.api_token)
            return await self._test_jira(base_url, email, request.api_token)
        except (httpx.HTTPError, ValueError) as e:
            self._logger.log_error("Connection", 502, str(e))
            return ConnectionTestResult(success=False, message=f"Connection error: {e}")

    async def _test_tempo(self, base_url: str, api_token: str) -> ConnectionTestResult:
        host = self._decider.tempo_host(base_url)
        response = await self._client.get(
            f"https://{host}{TEMPO_PROBE_PATH}",
            headers={"Authorization": f"Bearer {api_token}", "Accept": "application/json"},
        )
        if response.is_success:
            return ConnectionTestResult(
                success=True,
                message="Connected to Tempo",
                server_info=f"Host: {host} (v4)",
            )

        status = response.status_code
        message = f"Tempo Error ({status})"
        if status == 401:
            message = "Invalid Tempo API token"
        elif status == 403:
            message = "Token lacks permissions (Full Access required)"
        self._logger.log_error("Tempo", status, message)
        return ConnectionTestResult(success=False, message=message)

    async def _test_jira(self, base_url: str, email: str, api_token: str) -> ConnectionTestResult:
        # PAT first; it is what self-hosted instances accept
        strategies = (
            ("Bearer (PAT)", f"Bearer {api_token}"),
            ("Basic (Email:Token)", basic_credentials(email, api_token)),
        )
        last_status = 401

        for name, authorization in strategies:
            for path in JIRA_PROBE_PATHS:
                try:
                    response = await self._client.get(
                        f"{base_url}{path}",
                        headers={
                            "Authorization": authorization,
                            "Accept": "application/json",
                            "X-Atlassian-Token": "nocheck",
                            "X-Requested-With": "XMLHttpRequest",
                        },
                        follow_redirects=False,
                    )
                except httpx.RequestError as e:
                    self._logger.log_error("Jira", 502, f"{name} {path}: {e}")
                    continue

                last_status = response.status_code
                if response.is_success:
                    return self._jira_success(name, email, response.json())

        self._logger.log_error("Jira", last_status, "Connection test failed")
        if last_status == 401:
            return ConnectionTestResult(
                success=False,
                message="Error 401: Unauthorized. Check that the token is valid "
                "(try generating a new personal access token in Jira).",
            )
        return ConnectionTestResult(success=False, message=f"Jira Error ({last_status})")

    @staticmethod
    def _jira_success(strategy: str, email: str, data: Any) -> ConnectionTestResult:
        if not isinstance(data, dict):
            data = {}
        who = data.get("displayName") or data.get("name") or data.get("serverTitle") or "User"
        return ConnectionTestResult(
            success=True,
            message=f"Connected ({strategy})",
            user_email=data.get("emailAddress") or data.get("name") or email,
            server_info=f"Logged in as {who}",
        )

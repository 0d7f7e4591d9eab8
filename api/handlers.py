"""FastAPI route handlers."""

import json
from json import JSONDecodeError
from typing import Any

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from core.exceptions import (
    DecodeError,
    InvalidInput,
    NetworkError,
    NetworkTimeout,
    ProxyError,
    UpstreamError,
)
from services.connection import ConnectionTestRequest, ConnectionTestResult
from services.proxy import parse_descriptor
from services.upstream import NO_CONTENT

MAX_BODY_SIZE = 50 * 1024 * 1024  # 50MB


async def _parse_json_body(request: Request) -> Any | Response:
    """Parse request body as JSON, return the value or an error Response."""
    raw_body = await request.body()
    if len(raw_body) > MAX_BODY_SIZE:
        return _error_response("Request body too large", 413)

    try:
        return json.loads(raw_body.decode("utf-8", errors="replace"))
    except (JSONDecodeError, ValueError) as e:
        return _error_response(f"Invalid JSON: {e}", 400)


def _error_response(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _status_for(error: ProxyError) -> int:
    if isinstance(error, InvalidInput):
        return 400
    if isinstance(error, UpstreamError):
        # Redirects and other non-error statuses are not replayed to the UI
        return error.status_code if error.status_code >= 400 else 502
    if isinstance(error, NetworkTimeout):
        return 504
    if isinstance(error, (NetworkError, DecodeError)):
        return 502
    return 500


async def handle_jira_proxy(request: Request) -> Response:
    """Handle /api/jira/proxy: forward a descriptor to Jira or Tempo."""
    payload = await _parse_json_body(request)
    if isinstance(payload, Response):
        return payload

    proxy = request.app.state.jira_proxy
    try:
        result = await proxy.proxy(parse_descriptor(payload))
    except ProxyError as e:
        return _error_response(str(e), _status_for(e))

    if result is NO_CONTENT:
        return Response(status_code=204)
    return JSONResponse(result)


async def handle_test_connection(request: Request) -> Response:
    """Handle /api/test-connection: check Jira or Tempo credentials."""
    payload = await _parse_json_body(request)
    if isinstance(payload, Response):
        return payload

    try:
        test_request = ConnectionTestRequest.model_validate(payload)
    except ValidationError as e:
        result = ConnectionTestResult(success=False, message=f"Invalid request: {e.error_count()} error(s)")
    else:
        result = await request.app.state.connection_tester.test(test_request)

    return JSONResponse(result.model_dump(by_alias=True, exclude_none=True))

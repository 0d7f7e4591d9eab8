import json

import httpx
import pytest

from core.exceptions import DecodeError, NetworkError, NetworkTimeout, UpstreamError
from core.request_types import PreparedRequest
from services.upstream import NO_CONTENT, UpstreamClient

PREPARED = PreparedRequest(
    route_name="Jira",
    method="GET",
    url="https://my.atlassian.net/rest/api/3/myself?os_authType=basic",
    headers={"Authorization": "Bearer tok"},
)


@pytest.mark.asyncio
async def test_returns_parsed_json(make_client, logger, captured):
    upstream = UpstreamClient(make_client(httpx.Response(200, json={"name": "jdoe"})), logger)

    assert await upstream.send(PREPARED) == {"name": "jdoe"}
    assert captured[0].url == PREPARED.url
    assert captured[0].headers["Authorization"] == "Bearer tok"
    assert captured[0].content == b""


@pytest.mark.asyncio
async def test_no_content_is_a_distinct_marker(make_client, logger):
    upstream = UpstreamClient(make_client(httpx.Response(204)), logger)
    assert await upstream.send(PREPARED) is NO_CONTENT
    assert logger.errors == []


@pytest.mark.asyncio
async def test_error_status_raises_upstream_error(make_client, logger):
    body = '{"errorMessages":["not found"]}'
    upstream = UpstreamClient(make_client(httpx.Response(404, text=body)), logger)

    with pytest.raises(UpstreamError) as exc_info:
        await upstream.send(PREPARED)

    assert str(exc_info.value) == 'Jira Error (404): {"errorMessages":["not found"]}'
    assert exc_info.value.status_code == 404
    assert logger.errors == [("Jira", 404, body)]


@pytest.mark.asyncio
async def test_error_status_with_empty_body(make_client, logger):
    upstream = UpstreamClient(make_client(httpx.Response(500)), logger)

    with pytest.raises(UpstreamError, match=r"^Jira Error \(500\): $"):
        await upstream.send(PREPARED)


@pytest.mark.asyncio
async def test_invalid_json_raises_decode_error(make_client, logger):
    upstream = UpstreamClient(make_client(httpx.Response(200, text="<html>login</html>")), logger)

    with pytest.raises(DecodeError):
        await upstream.send(PREPARED)


@pytest.mark.asyncio
async def test_transport_failure_raises_network_error(make_client, logger):
    upstream = UpstreamClient(make_client(httpx.ConnectError("connection refused")), logger)

    with pytest.raises(NetworkError, match="connection refused"):
        await upstream.send(PREPARED)
    assert logger.errors[0][1] == 502


@pytest.mark.asyncio
async def test_timeout_raises_network_timeout(make_client, logger):
    upstream = UpstreamClient(make_client(httpx.ReadTimeout("timed out")), logger)

    with pytest.raises(NetworkTimeout):
        await upstream.send(PREPARED)
    assert logger.errors == [("Jira", 504, "Upstream timeout")]


@pytest.mark.asyncio
async def test_body_is_sent_as_json_for_any_method(make_client, logger, captured):
    upstream = UpstreamClient(make_client(httpx.Response(200, json=[])), logger)
    prepared = PreparedRequest("Jira", "GET", PREPARED.url, {}, body={"jql": "project = X"})

    await upstream.send(prepared)

    assert captured[0].method == "GET"
    assert json.loads(captured[0].content) == {"jql": "project = X"}


@pytest.mark.asyncio
async def test_json_null_is_not_no_content(make_client, logger):
    upstream = UpstreamClient(make_client(httpx.Response(200, text="null")), logger)
    assert await upstream.send(PREPARED) is None


@pytest.mark.asyncio
async def test_redirects_are_followed(logger):
    seen = []

    def handler(request):
        seen.append(request)
        if request.url.path == "/rest/api/3/myself":
            return httpx.Response(302, headers={"Location": "https://my.atlassian.net/new/myself"})
        return httpx.Response(200, json={"ok": True})

    async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
        result = await UpstreamClient(client, logger).send(PREPARED)

    assert result == {"ok": True}
    assert [r.url.path for r in seen] == ["/rest/api/3/myself", "/new/myself"]

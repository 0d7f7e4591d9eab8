"""The proxy command: descriptor in, JSON or error out."""

from typing import Any

import httpx
from pydantic import ValidationError

from core.config import Config
from core.exceptions import InvalidInput
from core.headers import HeaderBuilder
from core.protocols import RequestLogger, SilentRequestLogger
from core.request_types import RequestDescriptor
from core.router import RouteDecider
from core.transform import RequestTransformer
from services.routing_service import RoutingService
from services.upstream import NO_CONTENT, UpstreamClient


class JiraProxy:
    """Resolve, authenticate and forward a single request."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: Config | None = None,
        logger: RequestLogger | None = None,
    ) -> None:
        config = config or Config()
        logger = logger or SilentRequestLogger()
        self._routing = RoutingService(
            logger=logger,
            decider=RouteDecider(config.tempo),
            transformer=RequestTransformer(),
            header_builder=HeaderBuilder(),
        )
        self._upstream = UpstreamClient(client, logger)

    async def proxy(self, descriptor: RequestDescriptor) -> Any:
        """Forward the descriptor's request; raises ProxyError on failure.

        Returns NO_CONTENT when upstream answered 204.
        """
        prepared = self._routing.prepare(descriptor)
        return await self._upstream.send(prepared)


def parse_descriptor(payload: Any) -> RequestDescriptor:
    """Validate a camelCase JSON payload into a RequestDescriptor."""
    try:
        return RequestDescriptor.model_validate(payload)
    except ValidationError as e:
        # Field names and reasons only; the input may hold the API token
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise InvalidInput(f"Invalid request: {problems}") from e


def create_http_client(config: Config) -> httpx.AsyncClient:
    """Shared client settings for the proxy."""
    limits = httpx.Limits(
        max_connections=config.upstream.max_connections,
        max_keepalive_connections=config.upstream.max_keepalive_connections,
    )
    if config.upstream.timeout is None:
        return httpx.AsyncClient(limits=limits)
    return httpx.AsyncClient(timeout=config.upstream.timeout, limits=limits)


async def jira_proxy(
    payload: dict[str, Any],
    *,
    client: httpx.AsyncClient | None = None,
    config: Config | None = None,
    logger: RequestLogger | None = None,
) -> Any:
    """Host-facing command taking the camelCase request descriptor.

    Opens a private client when none is given. A 204 comes back as None.
    """
    descriptor = parse_descriptor(payload)
    config = config or Config()
    if client is not None:
        result = await JiraProxy(client, config, logger).proxy(descriptor)
    else:
        async with create_http_client(config) as own_client:
            result = await JiraProxy(own_client, config, logger).proxy(descriptor)
    return None if result is NO_CONTENT else result

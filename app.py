"""FastAPI application factory."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request

from api.handlers import handle_jira_proxy, handle_test_connection
from core.config import Config
from core.protocols import RequestLogger
from core.router import RouteDecider
from services.connection import ConnectionTester
from services.proxy import JiraProxy, create_http_client


def create_app(config: Config, logger: RequestLogger) -> FastAPI:
    """Create and configure the FastAPI application."""
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = create_http_client(config)
        app.state.jira_proxy = JiraProxy(client, config, logger)
        app.state.connection_tester = ConnectionTester(client, logger, RouteDecider(config.tempo))
        try:
            yield
        finally:
            await client.aclose()

    app = FastAPI(title="Jira/Tempo Proxy", version="0.1.0", lifespan=lifespan)

    @app.post("/api/jira/proxy")
    async def jira_proxy(request: Request):
        return await handle_jira_proxy(request)

    @app.post("/api/test-connection")
    async def test_connection(request: Request):
        return await handle_test_connection(request)

    return app

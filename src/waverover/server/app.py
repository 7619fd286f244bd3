"""FastAPI host for the Wave Rover MCP bridge.

Serves the MCP SSE transport together with a couple of plain HTTP
endpoints for operators:

    GET  /sse                       -> MCP event stream (one per client session)
    POST /messages/?session_id=...  <- MCP JSON-RPC messages
    GET  /health                    -> {"status": "ok", "rovers": 2}
    GET  /rovers                    -> [{"rover_id": "rover1", "address": ...}]

Every app instance owns its own registry and link, so several servers
(e.g. in tests) never share rover registrations.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator

import uvicorn
from fastapi import FastAPI
from pydantic import BaseModel
from starlette.requests import HTTPConnection
from starlette.types import ASGIApp, Receive, Scope, Send

from waverover import __version__
from waverover.config.settings import Settings
from waverover.rover.base import RoverLink
from waverover.rover.dispatcher import CommandDispatcher
from waverover.rover.http_backend import HttpRoverLink
from waverover.rover.registry import RoverRegistry
from waverover.server.tools import create_mcp_server

logger = logging.getLogger(__name__)

DEFAULT_CLIENT_ID = "defaultClientId"
CLIENT_ID_PARAM = "clientId"
CLIENT_ID_HEADER = "client-id"


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = __version__
    rovers: int = 0


class RoverInfo(BaseModel):
    rover_id: str
    address: str
    registered_at: datetime


# ---------------------------------------------------------------------------
# Client session labelling
# ---------------------------------------------------------------------------

def client_label(conn: HTTPConnection) -> str:
    """Label for the client behind a request.

    Taken from the ``clientId`` query parameter, then the ``client-id``
    header, falling back to ``defaultClientId``.
    """
    return (
        conn.query_params.get(CLIENT_ID_PARAM)
        or conn.headers.get(CLIENT_ID_HEADER)
        or DEFAULT_CLIENT_ID
    )


class ClientLabelMiddleware:
    """Stores the client label in ``scope["state"]`` and logs new sessions.

    Plain ASGI middleware so the long-lived SSE responses are passed
    through untouched.
    """

    def __init__(self, app: ASGIApp, sse_path: str = "/sse") -> None:
        self.app = app
        self.sse_path = sse_path

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            label = client_label(HTTPConnection(scope))
            scope.setdefault("state", {})["client_id"] = label
            if scope["path"] == self.sse_path:
                logger.info("MCP session opened by client %s", label)
        await self.app(scope, receive, send)


# ---------------------------------------------------------------------------
# Application factory
# ---------------------------------------------------------------------------

def create_app(
    settings: Settings | None = None,
    registry: RoverRegistry | None = None,
    link: RoverLink | None = None,
) -> FastAPI:
    """Create the bridge application.

    Args:
        settings: Server settings. Defaults are used if None.
        registry: Optional pre-populated registry (for testing).
        link: Optional pre-configured rover link (for testing).
    """
    settings = settings or Settings()
    registry = registry if registry is not None else RoverRegistry()
    if link is None:
        link = HttpRoverLink(
            timeout=settings.rover.http_timeout,
            command_path=settings.rover.command_path,
        )
    dispatcher = CommandDispatcher(registry, link)
    mcp = create_mcp_server(dispatcher, host=settings.server.host)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await app.state.link.connect()
        logger.info("Wave Rover bridge started")
        yield
        await app.state.link.disconnect()
        logger.info("Wave Rover bridge stopped")

    app = FastAPI(
        title="Wave Rover MCP",
        description="MCP bridge translating tool calls into Wave Rover HTTP commands",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.registry = registry
    app.state.link = link
    app.state.dispatcher = dispatcher
    app.state.mcp = mcp

    app.add_middleware(ClientLabelMiddleware, sse_path=mcp.settings.sse_path)

    @app.get("/health")
    async def health_check() -> HealthResponse:
        return HealthResponse(status="ok", rovers=len(app.state.registry))

    @app.get("/rovers")
    async def list_rovers() -> list[RoverInfo]:
        return [
            RoverInfo(
                rover_id=r.rover_id,
                address=r.address,
                registered_at=r.registered_at,
            )
            for r in app.state.registry.registrations()
        ]

    # Routes above take precedence over the catch-all mount.
    app.mount("/", mcp.sse_app())

    return app


# ---------------------------------------------------------------------------
# Standalone entry point
# ---------------------------------------------------------------------------

def main(settings: Settings | None = None) -> None:
    """Run the bridge server."""
    settings = settings or Settings()
    app = create_app(settings)
    logger.info(
        "MCP SSE endpoint: http://%s:%d/sse", settings.server.host, settings.server.port
    )
    uvicorn.run(app, host=settings.server.host, port=settings.server.port)


if __name__ == "__main__":
    main()

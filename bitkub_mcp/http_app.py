"""Streamable HTTP transport for the Bitkub MCP server"""

import contextlib
from collections.abc import AsyncIterator

import structlog
from mcp.server.streamable_http_manager import StreamableHTTPSessionManager
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route
from starlette.types import Receive, Scope, Send

from .config import SERVER_NAME, SERVER_VERSION
from .server import BitkubMCPServer
from .tools.catalog import TOOLS

logger = structlog.get_logger()

MCP_PATH = "/mcp"


class _MCPEndpoint:
    """ASGI endpoint forwarding /mcp traffic to the session manager"""

    def __init__(self, session_manager: StreamableHTTPSessionManager):
        self.session_manager = session_manager

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await self.session_manager.handle_request(scope, receive, send)


def create_http_app(mcp_server: BitkubMCPServer) -> Starlette:
    """Build the Starlette app serving MCP on /mcp and an info route on /.

    Session ids, per-session transports and cleanup on shutdown are handled
    by the SDK session manager.
    """
    session_manager = StreamableHTTPSessionManager(app=mcp_server.server)

    async def index(request: Request) -> JSONResponse:
        return JSONResponse(
            {
                "name": SERVER_NAME,
                "version": SERVER_VERSION,
                "status": "ok",
                "tools": len(TOOLS),
                "transport": "streamable-http",
                "endpoints": {"mcp": MCP_PATH},
            }
        )

    @contextlib.asynccontextmanager
    async def lifespan(app: Starlette) -> AsyncIterator[None]:
        async with session_manager.run():
            logger.info("Streamable HTTP session manager started", path=MCP_PATH)
            try:
                yield
            finally:
                logger.info("Shutting down...")

    return Starlette(
        routes=[
            Route("/", index, methods=["GET"]),
            Route(MCP_PATH, _MCPEndpoint(session_manager), methods=["GET", "POST", "DELETE"]),
        ],
        lifespan=lifespan,
    )

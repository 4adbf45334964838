"""Entry point for the Bitkub MCP server

Usage (stdio - for Claude Desktop / Cursor / VS Code):
    BITKUB_API_KEY=xxx BITKUB_SECRET_KEY=xxx bitkub-mcp

Usage (HTTP - Streamable HTTP transport):
    BITKUB_API_KEY=xxx BITKUB_SECRET_KEY=xxx bitkub-mcp --http

Market data tools work without API keys (public endpoints).
"""

import asyncio
import sys
from typing import Optional

import click
import structlog

from .config import SERVER_NAME, SERVER_VERSION, ServerConfig, setup_logging
from .server import BitkubMCPServer
from .telemetry import setup_tracing
from .tools.catalog import TOOLS

logger = structlog.get_logger()


def _run_http(mcp_server: BitkubMCPServer, host: str, port: int) -> None:
    import uvicorn

    from .http_app import MCP_PATH, create_http_app

    app = create_http_app(mcp_server)
    logger.info(
        "Bitkub MCP Server (HTTP) listening",
        host=host,
        port=port,
        endpoint=f"http://localhost:{port}{MCP_PATH}",
    )
    uvicorn.run(app, host=host, port=port, log_level=mcp_server.config.log_level.lower())


@click.command()
@click.version_option(SERVER_VERSION, prog_name=SERVER_NAME)
@click.option("--http", "use_http", is_flag=True, help="Serve Streamable HTTP instead of stdio")
@click.option("--host", default=None, help="HTTP listen host (default: $HOST or 0.0.0.0)")
@click.option("--port", type=int, default=None, help="HTTP listen port (default: $PORT or 3000)")
def main(use_http: bool, host: Optional[str], port: Optional[int]) -> None:
    """Bitkub exchange tools for MCP clients."""
    config = ServerConfig.from_env()
    setup_logging(config.log_level)
    setup_tracing(SERVER_NAME, config.otlp_endpoint)

    logger.info(
        "Bitkub MCP Server starting",
        transport="streamable-http" if use_http else "stdio",
        api_key="configured" if config.has_credentials else "not configured (market data only)",
        tools=len(TOOLS),
    )

    try:
        mcp_server = BitkubMCPServer(config)
        if use_http:
            _run_http(mcp_server, host or config.host, port or config.port)
        else:
            asyncio.run(mcp_server.run_stdio())
    except KeyboardInterrupt:
        logger.info("Bitkub MCP Server stopped")
        sys.exit(0)
    except Exception as e:
        logger.error("Fatal error running MCP server", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

"""Bitkub MCP Server - tool, prompt and resource handlers"""

import json
from typing import Any, Callable, Optional

import structlog
from mcp import types
from mcp.server.lowlevel import Server
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.stdio import stdio_server

from .api_client import BitkubAPIClient
from .clients.errors import MISSING_CREDENTIALS_MESSAGE
from .config import (
    SERVER_NAME,
    SERVER_VERSION,
    BitkubCredentials,
    ServerConfig,
    credentials_from_values,
)
from .prompts import PROMPTS
from .tools.catalog import PUBLIC_TOOLS, TOOLS, TOOLS_BY_NAME, category_counts
from .tools.dispatch import CREDENTIAL_ARGS, ToolResult, invoke_tool

logger = structlog.get_logger()

SERVER_INFO_URI = "bitkub://server-info"

ClientFactory = Callable[[Optional[BitkubCredentials]], BitkubAPIClient]


class BitkubMCPServer:
    """MCP server exposing the Bitkub REST API as tools.

    A fresh BitkubAPIClient is built for every tool call from the credentials
    in effect for that call, so concurrent sessions never share a client.
    """

    def __init__(
        self,
        config: Optional[ServerConfig] = None,
        client_factory: Optional[ClientFactory] = None,
    ):
        self.config = config or ServerConfig.from_env()
        self._client_factory = client_factory or self._default_client
        self.server = Server(SERVER_NAME, version=SERVER_VERSION)
        self._register_handlers()
        logger.info(
            "Bitkub MCP Server initialized",
            credentials="configured" if self.config.has_credentials else "not configured",
            tools=len(TOOLS),
        )

    def _default_client(
        self, credentials: Optional[BitkubCredentials]
    ) -> BitkubAPIClient:
        return BitkubAPIClient(
            credentials, base_url=self.config.base_url, timeout=self.config.timeout
        )

    def _register_handlers(self) -> None:
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)
        self.server.list_prompts()(self.list_prompts)
        self.server.get_prompt()(self.get_prompt)
        self.server.list_resources()(self.list_resources)
        self.server.read_resource()(self.read_resource)

    # ====================
    # Tools
    # ====================

    async def list_tools(self) -> list[types.Tool]:
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
                annotations=types.ToolAnnotations(**tool.annotations.to_dict()),
            )
            for tool in TOOLS
        ]

    async def call_tool(
        self, name: str, arguments: Optional[dict[str, Any]]
    ) -> types.CallToolResult:
        arguments = arguments or {}
        credentials = self.resolve_credentials(arguments)

        if credentials is None and name in TOOLS_BY_NAME and name not in PUBLIC_TOOLS:
            logger.warning("Signed tool called without credentials", tool=name)
            return self._to_call_result(ToolResult.failure(MISSING_CREDENTIALS_MESSAGE))

        async with self._client_factory(credentials) as client:
            result = await invoke_tool(name, arguments, client)
        return self._to_call_result(result)

    @staticmethod
    def _to_call_result(result: ToolResult) -> types.CallToolResult:
        return types.CallToolResult(
            content=[types.TextContent(type="text", text=result.text)],
            isError=result.is_error,
        )

    def resolve_credentials(
        self, arguments: dict[str, Any]
    ) -> Optional[BitkubCredentials]:
        """Credentials for one call.

        Precedence: server configuration, then the HTTP session's query
        parameters, then BITKUB_API_KEY / BITKUB_SECRET_KEY tool arguments.
        """
        if self.config.has_credentials:
            return self.config.credentials

        query = self._request_query_params()
        if query is not None:
            credentials = credentials_from_values(
                query.get("BITKUB_API_KEY"), query.get("BITKUB_SECRET_KEY")
            )
            if credentials is not None:
                return credentials

        if CREDENTIAL_ARGS & arguments.keys():
            return credentials_from_values(
                arguments.get("BITKUB_API_KEY"), arguments.get("BITKUB_SECRET_KEY")
            )
        return None

    def _request_query_params(self) -> Optional[Any]:
        """Query parameters of the HTTP request carrying this call, if any"""
        try:
            ctx = self.server.request_context
        except LookupError:
            return None
        request = getattr(ctx, "request", None)
        return getattr(request, "query_params", None)

    # ====================
    # Prompts
    # ====================

    async def list_prompts(self) -> list[types.Prompt]:
        return [
            types.Prompt(name=prompt.name, description=prompt.description)
            for prompt in PROMPTS.values()
        ]

    async def get_prompt(
        self, name: str, arguments: Optional[dict[str, str]] = None
    ) -> types.GetPromptResult:
        prompt = PROMPTS.get(name)
        if prompt is None:
            raise ValueError(f"Unknown prompt: {name}")
        return types.GetPromptResult(
            description=prompt.description,
            messages=[
                types.PromptMessage(
                    role="user",
                    content=types.TextContent(type="text", text=prompt.text),
                )
            ],
        )

    # ====================
    # Resources
    # ====================

    async def list_resources(self) -> list[types.Resource]:
        return [
            types.Resource(
                uri=SERVER_INFO_URI,
                name="server-info",
                description="Connection status and available tools for this Bitkub MCP server",
                mimeType="application/json",
            )
        ]

    async def read_resource(self, uri: Any) -> list[ReadResourceContents]:
        if str(uri) != SERVER_INFO_URI:
            raise ValueError(f"Unknown resource: {uri}")
        return [
            ReadResourceContents(
                content=json.dumps(self.server_info(), indent=2),
                mime_type="application/json",
            )
        ]

    def server_info(self) -> dict[str, Any]:
        return {
            "name": SERVER_NAME,
            "version": SERVER_VERSION,
            "connected": self.config.has_credentials,
            "tools_available": len(TOOLS),
            "tool_categories": category_counts(),
            "base_url": self.config.base_url,
        }

    # ====================
    # Transports
    # ====================

    async def run_stdio(self) -> None:
        """Serve a single MCP client over stdin/stdout"""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Bitkub MCP Server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

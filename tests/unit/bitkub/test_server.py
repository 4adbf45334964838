"""Tests for the MCP server handlers"""

import json
from unittest.mock import patch

import pytest
from mcp import types

from bitkub_mcp.config import BitkubCredentials, ServerConfig
from bitkub_mcp.server import SERVER_INFO_URI, BitkubMCPServer

BASE_URL = "https://api.bitkub.com"
API_KEY = "test-api-key"
SECRET_KEY = "test-secret-key"


@pytest.fixture
def factory_calls():
    return []


@pytest.fixture
def make_server(make_client, factory_calls):
    """Server whose clients talk to the fake exchange"""

    def _make(config=None):
        def client_factory(credentials):
            factory_calls.append(credentials)
            return make_client(credentials)

        return BitkubMCPServer(
            config=config or ServerConfig(base_url=BASE_URL), client_factory=client_factory
        )

    return _make


class TestListTools:
    @pytest.mark.asyncio
    async def test_lists_all_tools_with_annotations(self, make_server):
        tools = await make_server().list_tools()

        assert len(tools) == 28
        ticker = next(tool for tool in tools if tool.name == "btk_ticker")
        assert ticker.inputSchema["type"] == "object"
        assert ticker.annotations.readOnlyHint is True

        withdraw = next(tool for tool in tools if tool.name == "btk_crypto_withdraw")
        assert withdraw.annotations.destructiveHint is True


class TestCallTool:
    @pytest.mark.asyncio
    async def test_public_tool_without_credentials(self, make_server, fake_bitkub):
        fake_bitkub.respond("/api/v3/market/symbols", json={"error": 0, "result": []})

        result = await make_server().call_tool("btk_symbols", None)

        assert isinstance(result, types.CallToolResult)
        assert result.isError is False
        assert json.loads(result.content[0].text) == {"error": 0, "result": []}

    @pytest.mark.asyncio
    async def test_signed_tool_without_credentials(
        self, make_server, fake_bitkub, factory_calls
    ):
        result = await make_server().call_tool("btk_balances", {})

        assert result.isError is True
        assert result.content[0].text.startswith("Error: BITKUB_API_KEY")
        assert factory_calls == []
        assert fake_bitkub.requests == []

    @pytest.mark.asyncio
    async def test_public_tools_skip_credential_check(self, make_server, factory_calls):
        result = await make_server().call_tool("btk_server_time", {})

        assert result.isError is False
        assert factory_calls == [None]

    @pytest.mark.asyncio
    async def test_empty_secret_argument_is_not_a_credential(
        self, make_server, fake_bitkub, factory_calls
    ):
        result = await make_server().call_tool(
            "btk_wallet", {"BITKUB_API_KEY": API_KEY, "BITKUB_SECRET_KEY": ""}
        )

        assert result.isError is True
        assert factory_calls == []
        assert fake_bitkub.requests == []

    @pytest.mark.asyncio
    async def test_credentials_from_arguments_sign_the_request(
        self, make_server, fake_bitkub
    ):
        result = await make_server().call_tool(
            "btk_wallet", {"BITKUB_API_KEY": API_KEY, "BITKUB_SECRET_KEY": SECRET_KEY}
        )

        assert result.isError is False
        request = fake_bitkub.calls_to("/api/v3/market/wallet")[0]
        assert request.headers["X-BTK-APIKEY"] == API_KEY
        assert request.url.query == b""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, make_server):
        result = await make_server().call_tool("btk_nope", {})

        assert result.isError is True
        assert result.content[0].text == "Error: Unknown tool: btk_nope"

    @pytest.mark.asyncio
    async def test_each_call_gets_its_own_client(self, make_server, factory_calls):
        server = make_server()

        await server.call_tool("btk_server_time", {})
        await server.call_tool("btk_server_time", {})

        assert len(factory_calls) == 2


class TestResolveCredentials:
    def test_configured_credentials_win(self, make_server, credentials):
        server = make_server(ServerConfig(credentials=credentials, base_url=BASE_URL))

        with patch.object(
            server,
            "_request_query_params",
            return_value={"BITKUB_API_KEY": "q", "BITKUB_SECRET_KEY": "q"},
        ):
            resolved = server.resolve_credentials(
                {"BITKUB_API_KEY": "a", "BITKUB_SECRET_KEY": "a"}
            )

        assert resolved is credentials

    def test_query_parameters_beat_arguments(self, make_server):
        server = make_server()

        with patch.object(
            server,
            "_request_query_params",
            return_value={"BITKUB_API_KEY": "q-key", "BITKUB_SECRET_KEY": "q-secret"},
        ):
            resolved = server.resolve_credentials(
                {"BITKUB_API_KEY": "a", "BITKUB_SECRET_KEY": "a"}
            )

        assert resolved == BitkubCredentials("q-key", "q-secret")

    def test_incomplete_query_falls_back_to_arguments(self, make_server):
        server = make_server()

        with patch.object(
            server, "_request_query_params", return_value={"BITKUB_API_KEY": "q-key"}
        ):
            resolved = server.resolve_credentials(
                {"BITKUB_API_KEY": "a-key", "BITKUB_SECRET_KEY": "a-secret"}
            )

        assert resolved == BitkubCredentials("a-key", "a-secret")

    def test_no_request_context_outside_a_session(self, make_server):
        assert make_server()._request_query_params() is None

    def test_nothing_configured(self, make_server):
        assert make_server().resolve_credentials({"sym": "THB_BTC"}) is None


class TestPrompts:
    @pytest.mark.asyncio
    async def test_list_prompts(self, make_server):
        prompts = await make_server().list_prompts()
        assert {p.name for p in prompts} == {"market-data-analysis", "trading-guide"}

    @pytest.mark.asyncio
    async def test_get_prompt(self, make_server):
        result = await make_server().get_prompt("trading-guide")

        assert result.messages[0].role == "user"
        assert "btk_place_bid_test" in result.messages[0].content.text

    @pytest.mark.asyncio
    async def test_unknown_prompt(self, make_server):
        with pytest.raises(ValueError, match="Unknown prompt"):
            await make_server().get_prompt("nope")


class TestResources:
    @pytest.mark.asyncio
    async def test_list_resources(self, make_server):
        resources = await make_server().list_resources()
        assert [str(r.uri) for r in resources] == [SERVER_INFO_URI]

    @pytest.mark.asyncio
    async def test_read_server_info(self, make_server, credentials):
        server = make_server(ServerConfig(credentials=credentials, base_url=BASE_URL))

        contents = await server.read_resource(SERVER_INFO_URI)

        info = json.loads(contents[0].content)
        assert contents[0].mime_type == "application/json"
        assert info["connected"] is True
        assert info["tools_available"] == 28
        assert info["tool_categories"]["orders"] == 8
        assert SECRET_KEY not in contents[0].content

    @pytest.mark.asyncio
    async def test_unknown_resource(self, make_server):
        with pytest.raises(ValueError, match="Unknown resource"):
            await make_server().read_resource("bitkub://nope")

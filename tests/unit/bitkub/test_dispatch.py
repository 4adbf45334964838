"""Tests for tool dispatch and the protocol boundary"""

import json

import pytest

from bitkub_mcp.tools.catalog import TOOLS_BY_NAME
from bitkub_mcp.tools.dispatch import (
    DISPATCH_TABLE,
    ToolName,
    ToolResult,
    filter_fields,
    handle_tool_call,
    invoke_tool,
    resolve_tool,
    strip_internal_args,
)


class TestDispatchTable:
    def test_every_tool_has_a_handler(self):
        assert set(DISPATCH_TABLE) == set(ToolName)
        assert {tool.value for tool in ToolName} == set(TOOLS_BY_NAME)

    def test_resolve_known_tool(self):
        assert resolve_tool("btk_ticker") is ToolName.TICKER

    def test_resolve_unknown_tool(self):
        with pytest.raises(ValueError, match="Unknown tool: btk_nope"):
            resolve_tool("btk_nope")


class TestStripInternalArgs:
    def test_removes_credentials_and_fields(self):
        params, fields = strip_internal_args(
            {
                "sym": "THB_BTC",
                "BITKUB_API_KEY": "k",
                "BITKUB_SECRET_KEY": "s",
                "_fields": "last, high24hr",
            }
        )
        assert params == {"sym": "THB_BTC"}
        assert fields == ["last", "high24hr"]

    def test_none_values_are_dropped(self):
        params, fields = strip_internal_args({"sym": "THB_BTC", "lmt": None})
        assert params == {"sym": "THB_BTC"}
        assert fields is None

    def test_empty_arguments(self):
        assert strip_internal_args(None) == ({}, None)
        assert strip_internal_args({"_fields": " , "}) == ({}, None)


class TestFilterFields:
    def test_no_fields_returns_data_unchanged(self):
        data = {"error": 0, "result": {"a": 1}}
        assert filter_fields(data, None) is data

    def test_envelope_list_result_filtered_per_item(self):
        data = {"error": 0, "result": [{"id": 1, "rate": 2, "amount": 3}, {"id": 2, "rate": 4}]}
        assert filter_fields(data, ["id", "rate"]) == {
            "error": 0,
            "result": [{"id": 1, "rate": 2}, {"id": 2, "rate": 4}],
        }

    def test_envelope_object_result(self):
        data = {"error": 0, "result": {"THB": 100, "BTC": 0.1, "ETH": 2}}
        assert filter_fields(data, ["BTC"]) == {"error": 0, "result": {"BTC": 0.1}}

    def test_bare_list_filtered_per_item(self):
        data = [{"symbol": "THB_BTC", "last": 1, "high_24_hr": 2}]
        assert filter_fields(data, ["symbol", "last"]) == [{"symbol": "THB_BTC", "last": 1}]

    def test_scalars_pass_through(self):
        assert filter_fields(1707220534359, ["x"]) == 1707220534359

    def test_missing_fields_are_skipped(self):
        assert filter_fields({"a": 1}, ["a", "zzz"]) == {"a": 1}


class TestToolResult:
    def test_success_is_pretty_json(self):
        result = ToolResult.success({"error": 0, "result": {"THB": 100}})
        assert not result.is_error
        assert json.loads(result.text) == {"error": 0, "result": {"THB": 100}}
        assert "\n" in result.text

    def test_success_keeps_non_ascii(self):
        assert "บาท" in ToolResult.success({"name": "บาท"}).text

    def test_failure_prefix(self):
        result = ToolResult.failure("Bitkub API Error 18: Insufficient balance")
        assert result.is_error
        assert result.text == "Error: Bitkub API Error 18: Insufficient balance"


class TestHandleToolCall:
    @pytest.mark.asyncio
    async def test_ticker_without_symbol_sends_no_query(self, fake_bitkub, make_client):
        fake_bitkub.respond("/api/v3/market/ticker", json=[{"symbol": "THB_BTC", "last": 1}])

        async with make_client() as client:
            result = await handle_tool_call("btk_ticker", {}, client)

        assert result == [{"symbol": "THB_BTC", "last": 1}]
        request = fake_bitkub.calls_to("/api/v3/market/ticker")[0]
        assert request.url.query == b""

    @pytest.mark.asyncio
    async def test_tradingview_history_forwards_range(self, fake_bitkub, make_client):
        fake_bitkub.respond("/api/tradingview/history", json={"s": "ok", "c": [1.0]})

        async with make_client() as client:
            await handle_tool_call(
                "btk_tradingview_history",
                {"symbol": "THB_BTC", "resolution": "1D", "from": 10, "to": 20},
                client,
            )

        request = fake_bitkub.calls_to("/api/tradingview/history")[0]
        assert request.url.params["from"] == "10"
        assert request.url.params["to"] == "20"

    @pytest.mark.asyncio
    async def test_fields_filter_applies_to_response(self, fake_bitkub, make_client, credentials):
        fake_bitkub.respond(
            "/api/v3/market/balances",
            json={"error": 0, "result": {"THB": {"available": 1}, "BTC": {"available": 2}}},
        )

        async with make_client(credentials) as client:
            result = await handle_tool_call("btk_balances", {"_fields": "BTC"}, client)

        assert result == {"error": 0, "result": {"BTC": {"available": 2}}}
        request = fake_bitkub.calls_to("/api/v3/market/balances")[0]
        assert request.content == b""


class TestInvokeTool:
    @pytest.mark.asyncio
    async def test_success(self, fake_bitkub, make_client):
        fake_bitkub.respond("/api/status", json=[{"name": "Non-secure endpoints", "status": "ok"}])

        async with make_client() as client:
            result = await invoke_tool("btk_server_status", {}, client)

        assert not result.is_error
        assert json.loads(result.text)[0]["status"] == "ok"

    @pytest.mark.asyncio
    async def test_unknown_tool(self, fake_bitkub, make_client):
        async with make_client() as client:
            result = await invoke_tool("btk_nope", {}, client)

        assert result.is_error
        assert result.text == "Error: Unknown tool: btk_nope"
        assert fake_bitkub.requests == []

    @pytest.mark.asyncio
    async def test_api_error_becomes_error_result(self, fake_bitkub, make_client, credentials):
        fake_bitkub.respond("/api/v3/market/place-bid", json={"error": 18})

        async with make_client(credentials) as client:
            result = await invoke_tool(
                "btk_place_bid", {"sym": "THB_BTC", "amt": 1000, "typ": "market"}, client
            )

        assert result.is_error
        assert "18" in result.text
        assert "Insufficient balance" in result.text

    @pytest.mark.asyncio
    async def test_missing_credentials(self, fake_bitkub, make_client):
        async with make_client() as client:
            result = await invoke_tool("btk_wallet", {}, client)

        assert result.is_error
        assert "BITKUB_API_KEY" in result.text
        assert fake_bitkub.requests == []

    @pytest.mark.asyncio
    async def test_missing_required_argument(self, fake_bitkub, make_client):
        async with make_client() as client:
            result = await invoke_tool("btk_bids", {}, client)

        assert result.is_error
        assert result.text.startswith("Error: Invalid arguments for btk_bids")
        assert fake_bitkub.requests == []

    @pytest.mark.asyncio
    async def test_unexpected_argument(self, make_client):
        async with make_client() as client:
            result = await invoke_tool("btk_symbols", {"bogus": 1}, client)

        assert result.is_error
        assert "Invalid arguments" in result.text

    @pytest.mark.asyncio
    async def test_credential_arguments_are_not_forwarded(
        self, fake_bitkub, make_client, credentials
    ):
        async with make_client(credentials) as client:
            result = await invoke_tool(
                "btk_my_open_orders",
                {"sym": "THB_BTC", "BITKUB_API_KEY": "x", "BITKUB_SECRET_KEY": "y"},
                client,
            )

        assert not result.is_error
        request = fake_bitkub.calls_to("/api/v3/market/my-open-orders")[0]
        assert json.loads(request.content) == {"sym": "THB_BTC"}

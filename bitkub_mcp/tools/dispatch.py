"""
Dispatch table mapping tool names to Bitkub client calls.

Every catalogued tool has exactly one handler. Handlers receive the facade
client and the tool arguments with protocol-internal keys already removed.
invoke_tool() is the protocol boundary: it always returns a ToolResult and
never lets an exception escape.
"""

import json
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Mapping, Optional

import structlog

from ..api_client import BitkubAPIClient
from ..clients import BitkubError
from ..telemetry import tool_span
from .catalog import FIELDS_ARG, TOOLS_BY_NAME

logger = structlog.get_logger()

CREDENTIAL_ARGS = frozenset({"BITKUB_API_KEY", "BITKUB_SECRET_KEY"})
INTERNAL_ARGS = frozenset({FIELDS_ARG}) | CREDENTIAL_ARGS


class ToolName(str, Enum):
    # General / Market Data
    SERVER_TIME = "btk_server_time"
    SERVER_STATUS = "btk_server_status"
    SYMBOLS = "btk_symbols"
    TICKER = "btk_ticker"
    RECENT_TRADES = "btk_recent_trades"
    BIDS = "btk_bids"
    ASKS = "btk_asks"
    BOOKS = "btk_books"
    DEPTH = "btk_depth"
    TRADINGVIEW_HISTORY = "btk_tradingview_history"
    # Account
    WALLET = "btk_wallet"
    BALANCES = "btk_balances"
    TRADING_CREDITS = "btk_trading_credits"
    USER_LIMITS = "btk_user_limits"
    # Orders
    PLACE_BID = "btk_place_bid"
    PLACE_ASK = "btk_place_ask"
    PLACE_BID_TEST = "btk_place_bid_test"
    PLACE_ASK_TEST = "btk_place_ask_test"
    CANCEL_ORDER = "btk_cancel_order"
    MY_OPEN_ORDERS = "btk_my_open_orders"
    MY_ORDER_HISTORY = "btk_my_order_history"
    ORDER_INFO = "btk_order_info"
    # Crypto / Wallet
    CRYPTO_ADDRESSES = "btk_crypto_addresses"
    CRYPTO_WITHDRAW = "btk_crypto_withdraw"
    CRYPTO_INTERNAL_WITHDRAW = "btk_crypto_internal_withdraw"
    CRYPTO_DEPOSIT_HISTORY = "btk_crypto_deposit_history"
    CRYPTO_WITHDRAW_HISTORY = "btk_crypto_withdraw_history"
    CRYPTO_GENERATE_ADDRESS = "btk_crypto_generate_address"


Handler = Callable[[BitkubAPIClient, dict[str, Any]], Awaitable[Any]]


@dataclass(frozen=True)
class ToolResult:
    """Textual tool outcome handed back to the protocol runtime"""

    text: str
    is_error: bool = False

    @classmethod
    def success(cls, data: Any) -> "ToolResult":
        return cls(json.dumps(data, indent=2, ensure_ascii=False, default=str))

    @classmethod
    def failure(cls, message: str) -> "ToolResult":
        return cls(f"Error: {message}", is_error=True)


def _tradingview_history(client: BitkubAPIClient, args: dict[str, Any]):
    # "from" is reserved in Python
    renamed = {"from": "from_ts", "to": "to_ts"}
    kwargs = {renamed.get(key, key): value for key, value in args.items()}
    return client.market.get_tradingview_history(**kwargs)


DISPATCH_TABLE: dict[ToolName, Handler] = {
    ToolName.SERVER_TIME: lambda c, a: c.market.get_server_time(**a),
    ToolName.SERVER_STATUS: lambda c, a: c.market.get_server_status(**a),
    ToolName.SYMBOLS: lambda c, a: c.market.get_symbols(**a),
    ToolName.TICKER: lambda c, a: c.market.get_ticker(**a),
    ToolName.RECENT_TRADES: lambda c, a: c.market.get_recent_trades(**a),
    ToolName.BIDS: lambda c, a: c.market.get_bids(**a),
    ToolName.ASKS: lambda c, a: c.market.get_asks(**a),
    ToolName.BOOKS: lambda c, a: c.market.get_books(**a),
    ToolName.DEPTH: lambda c, a: c.market.get_depth(**a),
    ToolName.TRADINGVIEW_HISTORY: _tradingview_history,
    ToolName.WALLET: lambda c, a: c.account.get_wallet(**a),
    ToolName.BALANCES: lambda c, a: c.account.get_balances(**a),
    ToolName.TRADING_CREDITS: lambda c, a: c.account.get_trading_credits(**a),
    ToolName.USER_LIMITS: lambda c, a: c.account.get_user_limits(**a),
    ToolName.PLACE_BID: lambda c, a: c.orders.place_bid(**a),
    ToolName.PLACE_ASK: lambda c, a: c.orders.place_ask(**a),
    ToolName.PLACE_BID_TEST: lambda c, a: c.orders.place_bid_test(**a),
    ToolName.PLACE_ASK_TEST: lambda c, a: c.orders.place_ask_test(**a),
    ToolName.CANCEL_ORDER: lambda c, a: c.orders.cancel_order(**a),
    ToolName.MY_OPEN_ORDERS: lambda c, a: c.orders.get_my_open_orders(**a),
    ToolName.MY_ORDER_HISTORY: lambda c, a: c.orders.get_my_order_history(**a),
    ToolName.ORDER_INFO: lambda c, a: c.orders.get_order_info(**a),
    ToolName.CRYPTO_ADDRESSES: lambda c, a: c.crypto.get_addresses(**a),
    ToolName.CRYPTO_WITHDRAW: lambda c, a: c.crypto.withdraw(**a),
    ToolName.CRYPTO_INTERNAL_WITHDRAW: lambda c, a: c.crypto.internal_withdraw(**a),
    ToolName.CRYPTO_DEPOSIT_HISTORY: lambda c, a: c.crypto.get_deposit_history(**a),
    ToolName.CRYPTO_WITHDRAW_HISTORY: lambda c, a: c.crypto.get_withdraw_history(**a),
    ToolName.CRYPTO_GENERATE_ADDRESS: lambda c, a: c.crypto.generate_address(**a),
}


def _check_dispatch_table() -> None:
    """Every enum member needs a handler and a catalogue entry, and vice versa"""
    missing_handlers = set(ToolName) - set(DISPATCH_TABLE)
    if missing_handlers:
        raise RuntimeError(f"Tools without handlers: {sorted(missing_handlers)}")
    names = {tool.value for tool in ToolName}
    if names != set(TOOLS_BY_NAME):
        raise RuntimeError(
            "Tool catalogue and dispatch table disagree: "
            f"{sorted(names ^ set(TOOLS_BY_NAME))}"
        )


_check_dispatch_table()


def strip_internal_args(
    args: Optional[Mapping[str, Any]],
) -> tuple[dict[str, Any], Optional[list[str]]]:
    """Split protocol-internal keys off the tool arguments.

    Returns the parameters to forward and the requested response fields
    (None when no _fields filter was given). None-valued arguments are
    dropped so that omitted and null arguments behave the same.
    """
    args = dict(args or {})
    raw_fields = args.get(FIELDS_ARG)
    params = {
        key: value
        for key, value in args.items()
        if key not in INTERNAL_ARGS and value is not None
    }

    fields = None
    if isinstance(raw_fields, str):
        fields = [f.strip() for f in raw_fields.split(",") if f.strip()] or None
    return params, fields


def _pick(item: Any, fields: list[str]) -> Any:
    if isinstance(item, dict):
        return {key: item[key] for key in fields if key in item}
    return item


def filter_fields(data: Any, fields: Optional[list[str]]) -> Any:
    """Keep only the requested keys of a response.

    For an API envelope the filter applies to "result" (each element when it
    is a list); any other object is filtered at the top level.
    """
    if not fields:
        return data
    if isinstance(data, dict) and "result" in data:
        result = data["result"]
        if isinstance(result, list):
            filtered = [_pick(item, fields) for item in result]
        else:
            filtered = _pick(result, fields)
        return {**data, "result": filtered}
    if isinstance(data, list):
        return [_pick(item, fields) for item in data]
    return _pick(data, fields)


def resolve_tool(name: str) -> ToolName:
    """ValueError when the name is not a known tool"""
    try:
        return ToolName(name)
    except ValueError:
        raise ValueError(f"Unknown tool: {name}") from None


async def handle_tool_call(
    tool_name: str, args: Optional[Mapping[str, Any]], client: BitkubAPIClient
) -> Any:
    """Run one tool against the client and return the filtered API response.

    Raises BitkubError on API failures and ValueError for unknown tools.
    """
    tool = resolve_tool(tool_name)
    params, fields = strip_internal_args(args)
    with tool_span(tool.value, params):
        result = await DISPATCH_TABLE[tool](client, params)
    return filter_fields(result, fields)


async def invoke_tool(
    tool_name: str, args: Optional[Mapping[str, Any]], client: BitkubAPIClient
) -> ToolResult:
    """Protocol boundary: every outcome becomes a ToolResult"""
    try:
        resolve_tool(tool_name)
    except ValueError as e:
        logger.warning("Unknown tool requested", tool=tool_name)
        return ToolResult.failure(str(e))

    try:
        result = await handle_tool_call(tool_name, args, client)
    except BitkubError as e:
        logger.error("Tool call failed", tool=tool_name, error=e.message, code=e.code)
        return ToolResult.failure(e.message)
    except (TypeError, ValueError) as e:
        logger.error("Invalid tool call", tool=tool_name, error=str(e))
        return ToolResult.failure(f"Invalid arguments for {tool_name}: {e}")
    except Exception as e:
        logger.error("Unexpected tool failure", tool=tool_name, error=str(e), exc_info=True)
        return ToolResult.failure(str(e))

    logger.info("Tool call completed", tool=tool_name)
    return ToolResult.success(result)

"""Bitkub tool catalogue: 28 tool definitions advertised to MCP clients"""

from dataclasses import dataclass, field
from typing import Any

FIELDS_ARG = "_fields"


@dataclass(frozen=True)
class ToolAnnotations:
    title: str
    read_only: bool = True
    destructive: bool = False
    idempotent: bool = True
    open_world: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "readOnlyHint": self.read_only,
            "destructiveHint": self.destructive,
            "idempotentHint": self.idempotent,
            "openWorldHint": self.open_world,
        }


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    category: str
    annotations: ToolAnnotations
    properties: dict[str, Any] = field(default_factory=dict)
    required: tuple[str, ...] = ()
    public: bool = False

    @property
    def input_schema(self) -> dict[str, Any]:
        schema: dict[str, Any] = {"type": "object", "properties": dict(self.properties)}
        if self.required:
            schema["required"] = list(self.required)
        return schema


def _prop(type_: str, description: str) -> dict[str, str]:
    return {"type": type_, "description": description}


_FIELDS = _prop("string", "Comma-separated list of fields to include in response")
_SYM = _prop("string", 'Symbol (e.g., "THB_BTC")')
_CUR = _prop("string", 'Currency (e.g., "BTC", "ETH")')
_SIDE = _prop("string", 'Side: "buy" or "sell"')
_ORDER_TYPE = _prop("string", 'Order type: "limit" or "market"')
_PAGE = _prop("integer", "Page number")
_PAGE_LIMIT = _prop("integer", "Results per page")

_MUTATING = dict(read_only=False, idempotent=False)
_DESTRUCTIVE = dict(read_only=False, destructive=True, idempotent=False)

MARKET = "general_market_data"
ACCOUNT = "account"
ORDERS = "orders"
CRYPTO = "crypto_wallet"


def _book_tool(name: str, description: str, title: str, limit_doc: str) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        category=MARKET,
        annotations=ToolAnnotations(title),
        properties={
            "sym": _SYM,
            "lmt": _prop("integer", limit_doc),
            FIELDS_ARG: _FIELDS,
        },
        required=("sym",),
        public=True,
    )


def _order_tool(
    name: str, description: str, title: str, amount_doc: str, rate_doc: str,
    client_id_doc: str, test: bool,
) -> ToolDefinition:
    return ToolDefinition(
        name=name,
        description=description,
        category=ORDERS,
        annotations=ToolAnnotations(title) if test else ToolAnnotations(title, **_MUTATING),
        properties={
            "sym": _SYM,
            "amt": _prop("number", amount_doc),
            "rat": _prop("number", rate_doc),
            "typ": _ORDER_TYPE,
            "client_id": _prop("string", client_id_doc),
        },
        required=("sym", "amt", "typ"),
    )


TOOLS: tuple[ToolDefinition, ...] = (
    # General / Market Data (10)
    ToolDefinition(
        name="btk_server_time",
        description=(
            "Get Bitkub server time (millisecond timestamp). Use to check "
            "connectivity and sync timestamps for signed requests."
        ),
        category=MARKET,
        annotations=ToolAnnotations("Get Server Time"),
        properties={FIELDS_ARG: _FIELDS},
        public=True,
    ),
    ToolDefinition(
        name="btk_server_status",
        description=(
            "Get Bitkub API server status. Returns status for both non-secure "
            "and secure endpoints."
        ),
        category=MARKET,
        annotations=ToolAnnotations("Get Server Status"),
        properties={FIELDS_ARG: _FIELDS},
        public=True,
    ),
    ToolDefinition(
        name="btk_symbols",
        description=(
            "List all trading symbols on Bitkub with details: base/quote asset, "
            "price scale, min order size, status, market segment. The \"source\" "
            "field indicates \"exchange\" (regular) or \"broker\" (broker coins)."
        ),
        category=MARKET,
        annotations=ToolAnnotations("List All Symbols"),
        properties={FIELDS_ARG: _FIELDS},
        public=True,
    ),
    ToolDefinition(
        name="btk_ticker",
        description=(
            "Get 24-hour ticker data: last price, bid/ask, percent change, volume, "
            "high/low. Returns all symbols if no sym specified."
        ),
        category=MARKET,
        annotations=ToolAnnotations("Get Ticker"),
        properties={
            "sym": _prop("string", 'Symbol (e.g., "THB_BTC"). Omit for all symbols.'),
            FIELDS_ARG: _FIELDS,
        },
        public=True,
    ),
    _book_tool(
        "btk_recent_trades",
        "Get recent trades for a symbol. Each trade includes timestamp, price, "
        "amount, and side (BUY/SELL).",
        "Get Recent Trades",
        "Number of trades to return (default: 10, max: 100)",
    ),
    _book_tool(
        "btk_bids",
        "Get buy-side order book (bids) for a symbol. Each entry: [price, volume, timestamp].",
        "Get Bids (Buy Orders)",
        "Number of entries (default: 10, max: 100)",
    ),
    _book_tool(
        "btk_asks",
        "Get sell-side order book (asks) for a symbol. Each entry: [price, volume, timestamp].",
        "Get Asks (Sell Orders)",
        "Number of entries (default: 10, max: 100)",
    ),
    _book_tool(
        "btk_books",
        "Get complete order book (both bids and asks) for a symbol.",
        "Get Order Book (Complete)",
        "Entries per side (default: 10, max: 100)",
    ),
    _book_tool(
        "btk_depth",
        "Get market depth for a symbol. Similar to order book but without "
        "timestamps, just [price, volume] pairs.",
        "Get Market Depth",
        "Number of levels (default: 10, max: 100)",
    ),
    ToolDefinition(
        name="btk_tradingview_history",
        description=(
            "Get TradingView-compatible OHLCV candlestick data. Returns arrays of "
            "open, high, low, close, volume for charting."
        ),
        category=MARKET,
        annotations=ToolAnnotations("Get TradingView History"),
        properties={
            "symbol": _SYM,
            "resolution": _prop("string", "Candle interval: 1, 5, 15, 60, 240, or 1D"),
            "from": _prop("integer", "Start time (UNIX timestamp in seconds)"),
            "to": _prop("integer", "End time (UNIX timestamp in seconds)"),
            FIELDS_ARG: _FIELDS,
        },
        required=("symbol", "resolution", "from", "to"),
        public=True,
    ),
    # Account (4)
    ToolDefinition(
        name="btk_wallet",
        description=(
            "Get available balances for all currencies. Shows only available "
            "balance (not reserved). For full balance info, use btk_balances."
        ),
        category=ACCOUNT,
        annotations=ToolAnnotations("Get Wallet (Available Balance)"),
        properties={FIELDS_ARG: _FIELDS},
    ),
    ToolDefinition(
        name="btk_balances",
        description=(
            "Get complete balances for all currencies including both available "
            "and reserved amounts."
        ),
        category=ACCOUNT,
        annotations=ToolAnnotations("Get Balances (Full)"),
        properties={FIELDS_ARG: _FIELDS},
    ),
    ToolDefinition(
        name="btk_trading_credits",
        description=(
            "Get trading credit balance. Trading credits can be used to offset "
            "trading fees."
        ),
        category=ACCOUNT,
        annotations=ToolAnnotations("Get Trading Credits"),
        properties={FIELDS_ARG: _FIELDS},
    ),
    ToolDefinition(
        name="btk_user_limits",
        description=(
            "Get user deposit/withdrawal limits and current usage for both "
            "crypto and fiat currencies."
        ),
        category=ACCOUNT,
        annotations=ToolAnnotations("Get User Limits"),
        properties={FIELDS_ARG: _FIELDS},
    ),
    # Orders (8)
    _order_tool(
        "btk_place_bid",
        "Place a buy order. For limit orders specify rate. For market orders, "
        "rate is ignored. WARNING: Uses real money.",
        "Place Buy Order",
        "Amount in quote currency (THB). No trailing zeros.",
        "Rate/price. Required for limit orders, ignored for market orders.",
        "Custom order ID for tracking (optional)",
        test=False,
    ),
    _order_tool(
        "btk_place_ask",
        "Place a sell order. For limit orders specify rate. For market orders, "
        "rate is ignored. WARNING: Uses real money.",
        "Place Sell Order",
        "Amount in base currency (e.g., BTC amount). No trailing zeros.",
        "Rate/price. Required for limit orders, ignored for market orders.",
        "Custom order ID for tracking (optional)",
        test=False,
    ),
    _order_tool(
        "btk_place_bid_test",
        "Test (dry run) a buy order. Validates parameters without placing an "
        "actual order. Safe to use, no real money involved.",
        "Test Buy Order (Dry Run)",
        "Amount in quote currency (THB)",
        "Rate/price for limit orders",
        "Custom order ID (optional)",
        test=True,
    ),
    _order_tool(
        "btk_place_ask_test",
        "Test (dry run) a sell order. Validates parameters without placing an "
        "actual order. Safe to use, no real money involved.",
        "Test Sell Order (Dry Run)",
        "Amount in base currency",
        "Rate/price for limit orders",
        "Custom order ID (optional)",
        test=True,
    ),
    ToolDefinition(
        name="btk_cancel_order",
        description="Cancel an open order. Requires symbol, order ID, and side (buy/sell).",
        category=ORDERS,
        annotations=ToolAnnotations("Cancel Order", **_DESTRUCTIVE),
        properties={
            "sym": _SYM,
            "id": _prop("string", "Order ID to cancel"),
            "sd": _SIDE,
        },
        required=("sym", "id", "sd"),
    ),
    ToolDefinition(
        name="btk_my_open_orders",
        description="Get all open (pending) orders for a symbol.",
        category=ORDERS,
        annotations=ToolAnnotations("Get My Open Orders"),
        properties={"sym": _SYM, FIELDS_ARG: _FIELDS},
        required=("sym",),
    ),
    ToolDefinition(
        name="btk_my_order_history",
        description=(
            "Get order history for a symbol. Supports pagination and date range "
            "filtering. History older than 90 days is archived."
        ),
        category=ORDERS,
        annotations=ToolAnnotations("Get My Order History"),
        properties={
            "sym": _SYM,
            "p": _prop("integer", "Page number (default: 1)"),
            "lmt": _prop("integer", "Results per page (default: 10, max: 100)"),
            "start": _prop("integer", "Start timestamp (UNIX milliseconds)"),
            "end": _prop("integer", "End timestamp (UNIX milliseconds)"),
            FIELDS_ARG: _FIELDS,
        },
        required=("sym",),
    ),
    ToolDefinition(
        name="btk_order_info",
        description=(
            "Get detailed information about a specific order including fill "
            "history, status, and remaining amount."
        ),
        category=ORDERS,
        annotations=ToolAnnotations("Get Order Info"),
        properties={
            "sym": _SYM,
            "id": _prop("string", "Order ID"),
            "sd": _SIDE,
            FIELDS_ARG: _FIELDS,
        },
        required=("sym", "id", "sd"),
    ),
    # Crypto / Wallet (6)
    ToolDefinition(
        name="btk_crypto_addresses",
        description=(
            "List all crypto deposit addresses for your account. Shows currency, "
            "address, tag/memo, and network."
        ),
        category=CRYPTO,
        annotations=ToolAnnotations("List Crypto Addresses"),
        properties={"p": _PAGE, "lmt": _PAGE_LIMIT, FIELDS_ARG: _FIELDS},
    ),
    ToolDefinition(
        name="btk_crypto_withdraw",
        description=(
            "Withdraw crypto to an external address. WARNING: IRREVERSIBLE. "
            "Double-check address, network, and amount before executing."
        ),
        category=CRYPTO,
        annotations=ToolAnnotations("Withdraw Crypto", **_DESTRUCTIVE),
        properties={
            "cur": _CUR,
            "amt": _prop("number", "Amount to withdraw"),
            "adr": _prop("string", "Destination address"),
            "mem": _prop("string", "Memo/tag (required for some networks like XRP, ATOM)"),
            "net": _prop("string", 'Network (e.g., "BTC", "ETH", "BSC", "TRC20")'),
        },
        required=("cur", "amt", "adr", "net"),
    ),
    ToolDefinition(
        name="btk_crypto_internal_withdraw",
        description=(
            "Transfer crypto to another Bitkub user by email or phone number. "
            "Faster and cheaper than blockchain withdrawal. WARNING: IRREVERSIBLE."
        ),
        category=CRYPTO,
        annotations=ToolAnnotations("Internal Withdraw (Bitkub-to-Bitkub)", **_DESTRUCTIVE),
        properties={
            "cur": _CUR,
            "amt": _prop("number", "Amount to transfer"),
            "adr": _prop("string", "Destination Bitkub email or phone number"),
            "mem": _prop("string", "Memo (optional)"),
        },
        required=("cur", "amt", "adr"),
    ),
    ToolDefinition(
        name="btk_crypto_deposit_history",
        description=(
            "Get crypto deposit history with status, confirmations, and "
            "transaction details."
        ),
        category=CRYPTO,
        annotations=ToolAnnotations("Get Deposit History"),
        properties={"p": _PAGE, "lmt": _PAGE_LIMIT, FIELDS_ARG: _FIELDS},
    ),
    ToolDefinition(
        name="btk_crypto_withdraw_history",
        description=(
            "Get crypto withdrawal history with status, fees, and transaction details."
        ),
        category=CRYPTO,
        annotations=ToolAnnotations("Get Withdrawal History"),
        properties={"p": _PAGE, "lmt": _PAGE_LIMIT, FIELDS_ARG: _FIELDS},
    ),
    ToolDefinition(
        name="btk_crypto_generate_address",
        description="Generate a new crypto deposit address for a specific currency.",
        category=CRYPTO,
        annotations=ToolAnnotations("Generate Deposit Address", **_MUTATING),
        properties={"cur": _CUR},
        required=("cur",),
    ),
)


TOOLS_BY_NAME: dict[str, ToolDefinition] = {tool.name: tool for tool in TOOLS}

PUBLIC_TOOLS: frozenset[str] = frozenset(tool.name for tool in TOOLS if tool.public)


def category_counts() -> dict[str, int]:
    counts: dict[str, int] = {}
    for tool in TOOLS:
        counts[tool.category] = counts.get(tool.category, 0) + 1
    return counts

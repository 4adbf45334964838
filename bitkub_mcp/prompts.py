"""Prompt templates offered alongside the Bitkub tools"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PromptTemplate:
    name: str
    description: str
    text: str


MARKET_DATA_ANALYSIS = PromptTemplate(
    name="market-data-analysis",
    description="Guide for fetching and analyzing Bitkub market data",
    text="\n".join(
        [
            "You are a Bitkub market data analyst. Help me fetch and analyze crypto "
            "market data from Thailand's leading exchange.",
            "",
            "Available market tools:",
            "1. **Price check**: btk_ticker for current price, volume, 24hr change "
            "(single or all symbols)",
            "2. **Order book**: btk_bids (buy side), btk_asks (sell side), btk_books "
            "(both), btk_depth (no timestamps)",
            "3. **Recent trades**: btk_recent_trades for latest executed trades",
            "4. **Candlesticks**: btk_tradingview_history for OHLCV data "
            "(1m, 5m, 15m, 1h, 4h, 1D)",
            "5. **Symbols**: btk_symbols for all trading pairs with rules and status",
            "6. **Server**: btk_server_time for connectivity, btk_server_status for "
            "API health",
            "",
            "Tips:",
            "- Symbol format: THB_BTC, THB_ETH, THB_ADA (THB prefix with underscore)",
            "- All prices are in Thai Baht (THB)",
            "- Market data endpoints are public (no API key needed)",
            '- Use btk_symbols to check if a pair is "exchange" or "broker" type',
        ]
    ),
)

TRADING_GUIDE = PromptTemplate(
    name="trading-guide",
    description="Guide for placing and managing orders on Bitkub safely",
    text="\n".join(
        [
            "You are a Bitkub trading assistant. Help me manage orders safely.",
            "",
            "WARNING: All trading operations use REAL MONEY.",
            "",
            "Available trading tools:",
            "1. **Buy order**: btk_place_bid (limit or market)",
            "2. **Sell order**: btk_place_ask (limit or market)",
            "3. **Test buy**: btk_place_bid_test (dry run, no real money)",
            "4. **Test sell**: btk_place_ask_test (dry run, no real money)",
            "5. **Cancel order**: btk_cancel_order",
            "6. **Open orders**: btk_my_open_orders",
            "7. **Order history**: btk_my_order_history (paginated, 90-day archive)",
            "8. **Order detail**: btk_order_info (fill history, status)",
            "",
            "Account tools:",
            "- btk_wallet: available balances",
            "- btk_balances: available + reserved balances",
            "- btk_trading_credits: fee credit balance",
            "- btk_user_limits: deposit/withdrawal limits",
            "",
            "ALWAYS use test endpoints first (btk_place_bid_test / btk_place_ask_test).",
            "ALWAYS check btk_balances before placing orders.",
            "ALWAYS verify order with btk_order_info after placement.",
        ]
    ),
)

PROMPTS: dict[str, PromptTemplate] = {
    prompt.name: prompt for prompt in (MARKET_DATA_ANALYSIS, TRADING_GUIDE)
}

"""Market data API client (non-secure endpoints)"""

from typing import Any, Optional

from .base import BaseAPIClient


class MarketAPIClient(BaseAPIClient):
    """API client for public market data"""

    async def get_server_time(self) -> dict[str, Any]:
        """Get server time in milliseconds"""
        return await self._public_get("/api/v3/servertime")

    async def get_server_status(self) -> list[dict[str, Any]]:
        """Get status of the non-secure and secure endpoint groups"""
        return await self._public_get("/api/status")

    async def get_symbols(self) -> dict[str, Any]:
        """List all trading symbols"""
        return await self._public_get("/api/v3/market/symbols")

    async def get_ticker(self, sym: Optional[str] = None) -> Any:
        """Get 24h ticker for one symbol, or for every symbol when sym is omitted"""
        return await self._public_get("/api/v3/market/ticker", {"sym": sym})

    async def get_recent_trades(
        self, sym: str, lmt: Optional[int] = None
    ) -> dict[str, Any]:
        return await self._public_get(
            "/api/v3/market/trades", {"sym": sym, "lmt": lmt}
        )

    async def get_bids(self, sym: str, lmt: Optional[int] = None) -> dict[str, Any]:
        return await self._public_get("/api/v3/market/bids", {"sym": sym, "lmt": lmt})

    async def get_asks(self, sym: str, lmt: Optional[int] = None) -> dict[str, Any]:
        return await self._public_get("/api/v3/market/asks", {"sym": sym, "lmt": lmt})

    async def get_books(self, sym: str, lmt: Optional[int] = None) -> dict[str, Any]:
        return await self._public_get(
            "/api/v3/market/books", {"sym": sym, "lmt": lmt}
        )

    async def get_depth(self, sym: str, lmt: Optional[int] = None) -> dict[str, Any]:
        return await self._public_get(
            "/api/v3/market/depth", {"sym": sym, "lmt": lmt}
        )

    async def get_tradingview_history(
        self, symbol: str, resolution: str, from_ts: int, to_ts: int
    ) -> dict[str, Any]:
        """Get OHLCV candles; from_ts/to_ts are UNIX seconds"""
        params = {
            "symbol": symbol,
            "resolution": resolution,
            "from": from_ts,
            "to": to_ts,
        }
        return await self._public_get("/api/tradingview/history", params)

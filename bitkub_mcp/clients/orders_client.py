"""Order management API client (secure endpoints)"""

from typing import Any, Optional

from .base import BaseAPIClient


class OrdersAPIClient(BaseAPIClient):
    """API client for placing, cancelling and querying orders"""

    async def place_bid(
        self,
        sym: str,
        amt: float,
        typ: str,
        rat: Optional[float] = None,
        client_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Place a buy order; amt is in the quote currency (THB)"""
        payload = self._payload(sym=sym, amt=amt, rat=rat, typ=typ, client_id=client_id)
        return await self._signed_post("/api/v3/market/place-bid", payload)

    async def place_ask(
        self,
        sym: str,
        amt: float,
        typ: str,
        rat: Optional[float] = None,
        client_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Place a sell order; amt is in the base currency"""
        payload = self._payload(sym=sym, amt=amt, rat=rat, typ=typ, client_id=client_id)
        return await self._signed_post("/api/v3/market/place-ask", payload)

    async def place_bid_test(
        self,
        sym: str,
        amt: float,
        typ: str,
        rat: Optional[float] = None,
        client_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Validate a buy order without placing it"""
        payload = self._payload(sym=sym, amt=amt, rat=rat, typ=typ, client_id=client_id)
        return await self._signed_post("/api/v3/market/place-bid/test", payload)

    async def place_ask_test(
        self,
        sym: str,
        amt: float,
        typ: str,
        rat: Optional[float] = None,
        client_id: Optional[str] = None,
    ) -> dict[str, Any]:
        """Validate a sell order without placing it"""
        payload = self._payload(sym=sym, amt=amt, rat=rat, typ=typ, client_id=client_id)
        return await self._signed_post("/api/v3/market/place-ask/test", payload)

    async def cancel_order(self, sym: str, id: str, sd: str) -> dict[str, Any]:
        payload = self._payload(sym=sym, id=id, sd=sd)
        return await self._signed_post("/api/v3/market/cancel-order", payload)

    async def get_my_open_orders(self, sym: str) -> dict[str, Any]:
        return await self._signed_post(
            "/api/v3/market/my-open-orders", self._payload(sym=sym)
        )

    async def get_my_order_history(
        self,
        sym: str,
        p: Optional[int] = None,
        lmt: Optional[int] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
    ) -> dict[str, Any]:
        """Paginated order history; start/end are UNIX milliseconds"""
        payload = self._payload(sym=sym, p=p, lmt=lmt, start=start, end=end)
        return await self._signed_post("/api/v3/market/my-order-history", payload)

    async def get_order_info(self, sym: str, id: str, sd: str) -> dict[str, Any]:
        payload = self._payload(sym=sym, id=id, sd=sd)
        return await self._signed_post("/api/v3/market/order-info", payload)

"""Account API client (secure endpoints)"""

from typing import Any

from .base import BaseAPIClient


class AccountAPIClient(BaseAPIClient):
    """API client for balances and account limits"""

    async def get_wallet(self) -> dict[str, Any]:
        """Available balances only"""
        return await self._signed_get("/api/v3/market/wallet")

    async def get_balances(self) -> dict[str, Any]:
        """Available and reserved balances"""
        return await self._signed_post("/api/v3/market/balances")

    async def get_trading_credits(self) -> dict[str, Any]:
        return await self._signed_post("/api/v3/market/trading-credits")

    async def get_user_limits(self) -> dict[str, Any]:
        return await self._signed_post("/api/v3/user/limits")

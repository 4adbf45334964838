"""Crypto wallet API client (secure endpoints)"""

from typing import Any, Optional

from .base import BaseAPIClient


class CryptoAPIClient(BaseAPIClient):
    """API client for deposit addresses, deposits and withdrawals"""

    async def get_addresses(
        self, p: Optional[int] = None, lmt: Optional[int] = None
    ) -> dict[str, Any]:
        return await self._signed_post(
            "/api/v4/crypto/addresses", self._payload(p=p, lmt=lmt)
        )

    async def withdraw(
        self,
        cur: str,
        amt: float,
        adr: str,
        net: str,
        mem: Optional[str] = None,
    ) -> dict[str, Any]:
        """Withdraw to an external address. Irreversible."""
        payload = self._payload(cur=cur, amt=amt, adr=adr, mem=mem, net=net)
        return await self._signed_post("/api/v4/crypto/withdraw", payload)

    async def internal_withdraw(
        self, cur: str, amt: float, adr: str, mem: Optional[str] = None
    ) -> dict[str, Any]:
        """Transfer to another Bitkub user by email or phone. Irreversible."""
        payload = self._payload(cur=cur, amt=amt, adr=adr, mem=mem)
        return await self._signed_post("/api/v4/crypto/internal-withdraw", payload)

    async def get_deposit_history(
        self, p: Optional[int] = None, lmt: Optional[int] = None
    ) -> dict[str, Any]:
        return await self._signed_post(
            "/api/v4/crypto/deposit-history", self._payload(p=p, lmt=lmt)
        )

    async def get_withdraw_history(
        self, p: Optional[int] = None, lmt: Optional[int] = None
    ) -> dict[str, Any]:
        return await self._signed_post(
            "/api/v4/crypto/withdraw-history", self._payload(p=p, lmt=lmt)
        )

    async def generate_address(self, cur: str) -> dict[str, Any]:
        return await self._signed_post(
            "/api/v4/crypto/generate-address", self._payload(cur=cur)
        )

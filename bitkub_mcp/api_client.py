"""
Unified Bitkub API Client Facade

Groups the domain clients behind one object bound to a single credential pair:

    async with BitkubAPIClient(credentials) as client:
        ticker = await client.market.get_ticker(sym="THB_BTC")
        balances = await client.account.get_balances()
"""

from typing import Optional

import httpx
import structlog

from .clients import (
    AccountAPIClient,
    BitkubError,
    CryptoAPIClient,
    MarketAPIClient,
    OrdersAPIClient,
)
from .config import API_TIMEOUT, BITKUB_API_URL, BitkubCredentials

logger = structlog.get_logger()


class BitkubAPIClient:
    """
    Facade combining the market, account, orders and crypto clients.

    One instance serves one credential pair. Hosts that handle several
    credential sets construct one instance per set instead of swapping
    credentials on a shared instance.
    """

    def __init__(
        self,
        credentials: Optional[BitkubCredentials] = None,
        base_url: str = BITKUB_API_URL,
        timeout: float = API_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.credentials = credentials

        self.market = MarketAPIClient(base_url, timeout, credentials, transport)
        self.account = AccountAPIClient(base_url, timeout, credentials, transport)
        self.orders = OrdersAPIClient(base_url, timeout, credentials, transport)
        self.crypto = CryptoAPIClient(base_url, timeout, credentials, transport)

        logger.debug(
            "Bitkub API client initialized",
            base_url=self.base_url,
            authenticated=bool(credentials and credentials.is_complete),
        )

    async def __aenter__(self):
        """Enter async context - initialize all domain clients"""
        await self.market.__aenter__()
        await self.account.__aenter__()
        await self.orders.__aenter__()
        await self.crypto.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context - cleanup all domain clients"""
        await self.market.__aexit__(exc_type, exc_val, exc_tb)
        await self.account.__aexit__(exc_type, exc_val, exc_tb)
        await self.orders.__aexit__(exc_type, exc_val, exc_tb)
        await self.crypto.__aexit__(exc_type, exc_val, exc_tb)


__all__ = ["BitkubAPIClient", "BitkubError"]

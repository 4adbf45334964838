"""Domain-specific API clients for the Bitkub REST API"""

from .account_client import AccountAPIClient
from .base import BaseAPIClient
from .crypto_client import CryptoAPIClient
from .errors import (
    BitkubAPIError,
    BitkubError,
    BitkubTransportError,
    MissingCredentialsError,
    describe_error,
)
from .market_client import MarketAPIClient
from .orders_client import OrdersAPIClient

__all__ = [
    "BaseAPIClient",
    "BitkubError",
    "BitkubAPIError",
    "BitkubTransportError",
    "MissingCredentialsError",
    "describe_error",
    "AccountAPIClient",
    "CryptoAPIClient",
    "MarketAPIClient",
    "OrdersAPIClient",
]

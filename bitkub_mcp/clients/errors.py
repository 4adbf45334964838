"""Bitkub error taxonomy and exception types"""

from typing import Optional

# Application error codes returned in the response envelope "error" field
ERROR_MESSAGES: dict[int, str] = {
    1: "Invalid JSON payload",
    2: "Missing X-BTK-APIKEY",
    3: "Invalid API key",
    4: "API pending for activation",
    5: "IP not allowed",
    6: "Missing / invalid signature",
    7: "Missing timestamp",
    8: "Invalid timestamp",
    9: "Invalid user",
    10: "Invalid parameter",
    11: "Invalid symbol",
    12: "Invalid amount",
    13: "Invalid rate",
    14: "Improper rate",
    15: "Amount too low",
    16: "Failed to get balance",
    17: "Wallet is empty",
    18: "Insufficient balance",
    19: "Failed to insert order",
    20: "Failed to deduct balance",
    21: "Invalid order for cancellation",
    22: "Invalid side",
    23: "Failed to update order status",
    24: "Invalid order for lookup",
    25: "KYC level 1 required",
    30: "Limit exceeded",
    40: "Pending withdrawal exists",
    41: "Invalid currency for withdrawal",
    42: "Address is not in whitelist",
    43: "Failed to deduct crypto",
    44: "Failed to create withdrawal record",
    45: "Nonce has to be numeric",
    46: "Invalid nonce",
    47: "Withdrawal limit exceeded",
    48: "Invalid bank account",
    49: "Bank limit exceeded",
    50: "Pending withdrawal exists",
    51: "Withdrawal is under maintenance",
    90: "Server error",
}

MISSING_CREDENTIALS_MESSAGE = (
    "BITKUB_API_KEY and BITKUB_SECRET_KEY are required for this operation. "
    "Set them as environment variables or pass via config."
)


def describe_error(code: int) -> str:
    """Return the human-readable explanation for a Bitkub error code.

    Total over all integers: codes outside the table still explain themselves.
    """
    return ERROR_MESSAGES.get(code, f"Unknown error (code: {code})")


class BitkubError(Exception):
    """Base exception for every failure raised by the Bitkub client"""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.code = code
        self.details = details or {}
        super().__init__(message)


class MissingCredentialsError(BitkubError):
    """Raised before any network call when a signed request lacks credentials"""

    def __init__(self, message: str = MISSING_CREDENTIALS_MESSAGE):
        super().__init__(message)


class BitkubTransportError(BitkubError):
    """Non-2xx HTTP status, network failure or undecodable response body"""


class BitkubAPIError(BitkubError):
    """HTTP success but a nonzero envelope error code"""

    def __init__(
        self,
        code: int,
        status_code: Optional[int] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(
            f"Bitkub API Error {code}: {describe_error(code)}",
            status_code=status_code,
            code=code,
            details=details,
        )

"""Canonical request signing for Bitkub secure endpoints.

Secure endpoints authenticate with three headers:

    X-BTK-APIKEY     public API key
    X-BTK-TIMESTAMP  server time in milliseconds (from /api/v3/servertime)
    X-BTK-SIGN       hex HMAC-SHA256 of the canonical signing string

The canonical signing string is the plain concatenation

    timestamp + method + path + query + payload

where ``query`` carries its leading ``?`` only when non-empty and ``payload``
is the compact JSON body, or the empty string when there is no body. The
server recomputes the same string from the bytes it receives, so the payload
must be signed exactly as it is sent.
"""

import hashlib
import hmac
import json
import math
from decimal import Decimal
from typing import Any, Mapping, Optional
from urllib.parse import urlencode

API_KEY_HEADER = "X-BTK-APIKEY"
TIMESTAMP_HEADER = "X-BTK-TIMESTAMP"
SIGNATURE_HEADER = "X-BTK-SIGN"


def _query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_query_string(params: Optional[Mapping[str, Any]]) -> str:
    """Percent-encode params, dropping keys whose value is None.

    Falsy but present values (0, False, "") are kept.
    """
    if not params:
        return ""
    pairs = [(k, _query_value(v)) for k, v in params.items() if v is not None]
    return urlencode(pairs)


def format_number(value: float) -> str:
    """Plain decimal text for a float: 1000.0 -> "1000", 1e-05 -> "0.00001".

    Bitkub rejects exponent notation and trailing zeros in amounts and rates.
    """
    if not math.isfinite(value):
        raise ValueError(f"Out of range float values are not JSON compliant: {value!r}")
    if value.is_integer():
        return str(int(value))
    return format(Decimal(repr(value)), "f")


def _encode(value: Any) -> str:
    if isinstance(value, float):
        return format_number(value)
    if isinstance(value, Mapping):
        items = (
            f"{json.dumps(str(k), ensure_ascii=False)}:{_encode(v)}"
            for k, v in value.items()
        )
        return "{" + ",".join(items) + "}"
    if isinstance(value, (list, tuple)):
        return "[" + ",".join(_encode(v) for v in value) + "]"
    return json.dumps(value, ensure_ascii=False)


def serialize_payload(payload: Optional[Mapping[str, Any]]) -> str:
    """Compact JSON for a request body, or "" when there is nothing to send.

    Floats are written in plain decimal form (see format_number) so the
    signed text matches what the exchange expects byte for byte.
    """
    if not payload:
        return ""
    return _encode(payload)


def canonical_string(
    timestamp: int, method: str, path: str, query: str = "", payload: str = ""
) -> str:
    """Assemble the string the signature covers.

    ``query`` is the bare query string; the ``?`` prefix is added here.
    """
    query_part = f"?{query}" if query else ""
    return f"{timestamp}{method.upper()}{path}{query_part}{payload}"


def sign(secret: str, message: str) -> str:
    """Lowercase hex HMAC-SHA256 of message keyed with secret"""
    return hmac.new(
        secret.encode("utf-8"), message.encode("utf-8"), hashlib.sha256
    ).hexdigest()


def signed_headers(api_key: str, timestamp: int, signature: str) -> dict[str, str]:
    return {
        API_KEY_HEADER: api_key,
        TIMESTAMP_HEADER: str(timestamp),
        SIGNATURE_HEADER: signature,
    }

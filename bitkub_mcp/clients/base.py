"""Base HTTP client for Bitkub API communication"""

from typing import Any, Mapping, Optional

import httpx
import structlog

from ..config import BitkubCredentials
from .errors import (
    BitkubAPIError,
    BitkubTransportError,
    MissingCredentialsError,
    describe_error,
)
from .signing import (
    build_query_string,
    canonical_string,
    serialize_payload,
    sign,
    signed_headers,
)

logger = structlog.get_logger()

SERVER_TIME_PATH = "/api/v3/servertime"


def _decode_error_body(response: httpx.Response) -> dict[str, Any]:
    """Best-effort JSON decode of a failed response.

    An unparseable or non-object body degrades to an empty dict.
    """
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _envelope_error_code(data: Any) -> Optional[int]:
    if not isinstance(data, dict):
        return None
    code = data.get("error")
    if isinstance(code, bool) or not isinstance(code, int) or code == 0:
        return None
    return code


class BaseAPIClient:
    """Shared HTTP client functionality for all Bitkub domain clients"""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        credentials: Optional[BitkubCredentials] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.credentials = credentials
        self.client: Optional[httpx.AsyncClient] = None
        self._transport = transport

    async def __aenter__(self):
        """Async context manager entry"""
        self.client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=self.timeout,
            headers={"Accept": "application/json"},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.client:
            await self.client.aclose()

    async def _public_get(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Non-secure GET: no authentication headers"""
        query = build_query_string(params)
        return await self._send("GET", path, query=query)

    async def _signed_get(
        self, path: str, params: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Secure GET: parameters travel in the signed query string"""
        credentials = self._require_credentials()
        timestamp = await self._server_timestamp()
        query = build_query_string(params)

        signature = sign(
            credentials.secret_key, canonical_string(timestamp, "GET", path, query)
        )
        return await self._send(
            "GET",
            path,
            query=query,
            headers=signed_headers(credentials.api_key, timestamp, signature),
        )

    async def _signed_post(
        self, path: str, payload: Optional[Mapping[str, Any]] = None
    ) -> Any:
        """Secure POST: parameters travel only in the signed JSON body"""
        credentials = self._require_credentials()
        timestamp = await self._server_timestamp()
        body = serialize_payload(payload)

        signature = sign(
            credentials.secret_key,
            canonical_string(timestamp, "POST", path, payload=body),
        )
        headers = signed_headers(credentials.api_key, timestamp, signature)
        headers["Content-Type"] = "application/json"
        return await self._send(
            "POST",
            path,
            headers=headers,
            content=body.encode("utf-8") if body else None,
        )

    @staticmethod
    def _payload(**fields: Any) -> dict[str, Any]:
        """Request body from keyword fields, omitting the ones left as None"""
        return {key: value for key, value in fields.items() if value is not None}

    def _require_credentials(self) -> BitkubCredentials:
        if self.credentials is None or not self.credentials.is_complete:
            raise MissingCredentialsError()
        return self.credentials

    async def _server_timestamp(self) -> int:
        """Current server clock in milliseconds, used instead of the local clock"""
        data = await self._public_get(SERVER_TIME_PATH)
        if isinstance(data, dict):
            data = data.get("result")
        try:
            return int(data)
        except (TypeError, ValueError) as e:
            raise BitkubTransportError(
                f"Bitkub server time response is not a timestamp: {data!r}"
            ) from e

    async def _send(
        self,
        method: str,
        path: str,
        query: str = "",
        headers: Optional[dict[str, str]] = None,
        content: Optional[bytes] = None,
    ) -> Any:
        """Execute one request and normalize every failure into a BitkubError"""
        if not self.client:
            raise BitkubTransportError(
                "API client not initialized. Use async context manager."
            )

        url = path if path.startswith("/") else f"/{path}"
        if query:
            url = f"{url}?{query}"

        try:
            logger.debug("Bitkub request", method=method, path=path)
            response = await self.client.request(
                method, url, headers=headers, content=content
            )
        except httpx.TimeoutException as e:
            logger.error("Request timed out", method=method, path=path)
            raise BitkubTransportError(f"Request timed out: {str(e)}") from e
        except httpx.RequestError as e:
            logger.error("Request error", method=method, path=path, error=str(e))
            raise BitkubTransportError(f"Request failed: {str(e)}") from e

        if not response.is_success:
            raise self._transport_error(response, path)

        try:
            data = response.json()
        except ValueError as e:
            logger.error(
                "Invalid JSON response", status=response.status_code, path=path
            )
            raise BitkubTransportError(
                f"Bitkub HTTP {response.status_code}: invalid JSON response",
                status_code=response.status_code,
            ) from e

        code = _envelope_error_code(data)
        if code is not None:
            logger.warning("Bitkub API error", code=code, path=path)
            raise BitkubAPIError(code, status_code=response.status_code, details=data)

        logger.debug("Bitkub response", status=response.status_code, path=path)
        return data

    def _transport_error(
        self, response: httpx.Response, path: str
    ) -> BitkubTransportError:
        error_data = _decode_error_body(response)
        code = _envelope_error_code(error_data)
        logger.error(
            "HTTP error", status=response.status_code, code=code, path=path
        )

        text = error_data.get("error")
        if code is not None:
            explanation = f"Bitkub API Error {code}: {describe_error(code)}"
        elif isinstance(text, str) and text.strip():
            explanation = text
        else:
            explanation = response.reason_phrase or "Request failed"
        return BitkubTransportError(
            f"Bitkub HTTP {response.status_code}: {explanation}",
            status_code=response.status_code,
            code=code,
            details=error_data,
        )

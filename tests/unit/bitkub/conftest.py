"""Shared fixtures for Bitkub MCP unit tests"""

import itertools
from typing import Callable

import httpx
import pytest

from bitkub_mcp.api_client import BitkubAPIClient
from bitkub_mcp.config import BitkubCredentials

BASE_URL = "https://api.bitkub.com"
SERVER_TIME = 1707220534359
API_KEY = "test-api-key"
SECRET_KEY = "test-secret-key"

Route = Callable[[httpx.Request], httpx.Response]


class FakeBitkub:
    """httpx handler imitating Bitkub.

    Serves an advancing server clock on /api/v3/servertime, canned responses
    for registered paths and an empty success envelope for everything else.
    Every request is recorded.
    """

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[str, Route] = {}
        self.clock = itertools.count(SERVER_TIME)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is not None:
            return route(request)
        if request.url.path == "/api/v3/servertime":
            return httpx.Response(200, json=next(self.clock))
        return httpx.Response(200, json={"error": 0, "result": {}})

    def respond(self, path: str, status_code: int = 200, **kwargs) -> None:
        self.routes[path] = lambda request: httpx.Response(status_code, **kwargs)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def calls_to(self, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path == path]


@pytest.fixture
def credentials():
    return BitkubCredentials(api_key=API_KEY, secret_key=SECRET_KEY)


@pytest.fixture
def fake_bitkub():
    return FakeBitkub()


@pytest.fixture
def make_client(fake_bitkub):
    """Factory for facade clients wired to the fake exchange"""

    def _make(credentials=None):
        return BitkubAPIClient(
            credentials, base_url=BASE_URL, timeout=5.0, transport=fake_bitkub.transport
        )

    return _make

"""
Pytest configuration and common fixtures for geoclient tests.

Provides stub HTTP transports so that clients can be tested against canned
responses without network access. All fixtures follow camelCase naming
convention.
"""

from pathlib import Path
from typing import Callable, Dict, Generator, List, Tuple

import httpx
import pytest

from geoclient.nominatim import NominatimClient

TEST_BASE_URL = "https://nominatim.example.org"

# ============================================================================
# Transport Fixtures
# ============================================================================


class RecordedTransport(httpx.MockTransport):
    """MockTransport serving recorded response bodies by request path.

    Every handled request is kept in `requests` for later assertions.
    """

    def __init__(self, routes: Dict[str, Tuple[int, bytes, str]]):
        self.routes = routes
        self.requests: List[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path.lstrip("/")
        if path not in self.routes:
            return httpx.Response(404, json={"error": f"No recording for {path}"})
        statusCode, body, contentType = self.routes[path]
        return httpx.Response(statusCode, content=body, headers={"Content-Type": contentType})


@pytest.fixture
def recordedClientFactory() -> Generator[Callable[..., Tuple[NominatimClient, RecordedTransport]], None, None]:
    """
    Factory building a NominatimClient on top of RecordedTransport.

    Returns:
        Callable taking a path -> (status, body, content type) mapping

    Example:
        def testSearch(recordedClientFactory):
            client, transport = recordedClientFactory({"search": (200, b"[]", "application/json")})
            assert client.find(client.newSearch().query("x")) == []
    """
    clients: List[NominatimClient] = []

    def factory(routes: Dict[str, Tuple[int, bytes, str]], **kwargs):
        transport = RecordedTransport(routes)
        httpClient = httpx.Client(base_url=TEST_BASE_URL, transport=transport)
        client = NominatimClient(TEST_BASE_URL, httpClient, **kwargs)
        clients.append(client)
        return client, transport

    yield factory

    for client in clients:
        client.getClient().close()


@pytest.fixture
def loadGolden() -> Callable[[Path, str], bytes]:
    """Read a recorded response body from a golden data directory"""

    def loader(directory: Path, name: str) -> bytes:
        return (directory / name).read_bytes()

    return loader

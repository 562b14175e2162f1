import httpx
import pytest
from fastapi.testclient import TestClient

from config import Settings
from main import app, get_http_client, get_settings

CRON_TOKEN = "cron-secret"
FINNHUB_TOKEN = "finnhub-secret"
SYMBOLS = ["AAPL", "AMD", "CRM", "MSFT", "NIO", "NVDA", "TSLA", "XPEV"]

FLAT_QUOTE = {"o": 100, "h": 101, "l": 99, "c": 100, "pc": 99.5, "t": 1700000000}
FAR_LEVELS = {"levels": [200]}


class FakeFinnhub:
    """Serves canned quote/level payloads per symbol and records every request."""

    def __init__(self):
        self.quotes = {}
        self.levels = {}
        self.failing = set()
        self.unreachable = set()
        self.garbled = set()
        self.requests = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        symbol = request.url.params["symbol"]

        if symbol in self.unreachable:
            raise httpx.ConnectError("connection refused", request=request)
        if symbol in self.failing:
            return httpx.Response(500, text="boom")
        if symbol in self.garbled:
            return httpx.Response(200, text="<html>")

        if request.url.path.endswith("/quote"):
            return httpx.Response(200, json=self.quotes.get(symbol, FLAT_QUOTE))
        if request.url.path.endswith("/scan/support-resistance"):
            return httpx.Response(200, json=self.levels.get(symbol, FAR_LEVELS))
        return httpx.Response(404)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


@pytest.fixture
def finnhub():
    return FakeFinnhub()


@pytest.fixture
def settings():
    return Settings(
        cron_token=CRON_TOKEN,
        finnhub_auth_token=FINNHUB_TOKEN,
        finnhub_api_base="https://finnhub.test/api/v1",
        symbols=list(SYMBOLS),
    )


@pytest.fixture
def client(settings, finnhub):
    async def _http_client():
        async with finnhub.client() as c:
            yield c

    app.dependency_overrides[get_settings] = lambda: settings
    app.dependency_overrides[get_http_client] = _http_client
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"authorization": f"Bearer {CRON_TOKEN}"}

# services/finnhub.py

import httpx

from config import Settings


class UpstreamError(Exception):
    """
    Raised when Finnhub cannot be reached or returns something unusable.

    Kept separate from HTTPException so the partial scan can skip a failed
    symbol without also swallowing real bugs; main.py maps it to a 502.
    """

    def __init__(self, symbol: str, detail: str):
        super().__init__(f"{symbol}: {detail}")
        self.symbol = symbol
        self.detail = detail


async def _get_json(client: httpx.AsyncClient, settings: Settings, path: str, symbol: str, resolution: str):
    url = f"{settings.finnhub_api_base}{path}"
    params = {
        "resolution": resolution,
        "symbol": symbol,
    }
    headers = {"x-finnhub-token": settings.finnhub_auth_token or ""}

    try:
        resp = await client.get(url, params=params, headers=headers)
    except httpx.HTTPError as e:
        raise UpstreamError(symbol, f"Network error on {path}: {e}") from e

    if resp.status_code != 200:
        raise UpstreamError(symbol, f"Finnhub {path} returned {resp.status_code}")

    try:
        return resp.json()
    except ValueError as e:
        raise UpstreamError(symbol, f"Finnhub {path} returned a non-JSON body") from e


async def fetch_quote(client: httpx.AsyncClient, settings: Settings, symbol: str, resolution: str):
    """
    Fetches the current daily quote for a symbol.
    Finnhub answers with {"o", "h", "l", "c", ...}.
    """
    return await _get_json(client, settings, "/quote", symbol, resolution)


async def fetch_support_resistance(client: httpx.AsyncClient, settings: Settings, symbol: str, resolution: str):
    """
    Fetches the detected support/resistance levels for a symbol.
    Finnhub answers with {"levels": [...]}.
    """
    return await _get_json(client, settings, "/scan/support-resistance", symbol, resolution)

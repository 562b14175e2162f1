# services/scanner.py

import asyncio
from typing import List

import httpx

from config import Settings
from models.levels import ScanResult
from services.finnhub import UpstreamError, fetch_quote, fetch_support_resistance
from services.levels import determine_level_breaks, parse_results


async def scan_symbol(client: httpx.AsyncClient, settings: Settings, symbol: str) -> ScanResult:
    """
    Fetches quote + levels for one symbol in parallel and reports broken levels.
    """

    quote_data, levels_data = await asyncio.gather(
        fetch_quote(client, settings, symbol, settings.resolution),
        fetch_support_resistance(client, settings, symbol, settings.resolution),
    )

    parsed = parse_results(symbol, quote_data, levels_data)
    return ScanResult(symbol=symbol, broken_levels=determine_level_breaks(parsed))


async def scan_symbols(client: httpx.AsyncClient, settings: Settings) -> List[ScanResult]:
    """
    Scans every configured symbol concurrently. Results keep universe order.

    By default the first UpstreamError fails the whole scan. With
    `allow_partial`, failed symbols are logged and left out instead.
    """

    tasks = [scan_symbol(client, settings, symbol) for symbol in settings.symbols]

    if not settings.allow_partial:
        return list(await asyncio.gather(*tasks))

    settled = await asyncio.gather(*tasks, return_exceptions=True)

    results = []
    for symbol, outcome in zip(settings.symbols, settled):
        if isinstance(outcome, UpstreamError):
            print(f"Skipping {symbol}: {outcome.detail}")
            continue
        if isinstance(outcome, BaseException):
            raise outcome
        results.append(outcome)

    return results


def filter_broken(results: List[ScanResult]) -> List[ScanResult]:
    return [r for r in results if r.broken_levels]

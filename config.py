import os
from dataclasses import dataclass, field
from typing import List, Optional

from dotenv import load_dotenv

FINNHUB_API_BASE = "https://finnhub.io/api/v1"

DEFAULT_SYMBOLS = ["AAPL", "AMD", "CRM", "MSFT", "NIO", "NVDA", "TSLA", "XPEV"]
DEFAULT_RESOLUTION = "D"


@dataclass
class Settings:
    cron_token: Optional[str] = None
    finnhub_auth_token: Optional[str] = None
    finnhub_api_base: str = FINNHUB_API_BASE
    symbols: List[str] = field(default_factory=lambda: list(DEFAULT_SYMBOLS))
    resolution: str = DEFAULT_RESOLUTION
    timeout: float = 10.0
    allow_partial: bool = False


def _parse_symbols(raw: Optional[str]) -> List[str]:
    if not raw:
        return list(DEFAULT_SYMBOLS)
    symbols = [s.strip().upper() for s in raw.split(",")]
    return [s for s in symbols if s] or list(DEFAULT_SYMBOLS)


def _parse_bool(raw: Optional[str]) -> bool:
    return (raw or "").strip().lower() in ("1", "true", "yes", "on")


def load_settings() -> Settings:
    """
    Reads process configuration once at startup.
    A missing CRON_TOKEN is not fatal here; the handler reports it per request.
    """
    load_dotenv()

    return Settings(
        cron_token=os.getenv("CRON_TOKEN") or None,
        finnhub_auth_token=os.getenv("FINNHUB_AUTH_TOKEN") or None,
        finnhub_api_base=(os.getenv("FINNHUB_API_BASE") or FINNHUB_API_BASE).rstrip("/"),
        symbols=_parse_symbols(os.getenv("SCAN_SYMBOLS")),
        resolution=os.getenv("SCAN_RESOLUTION") or DEFAULT_RESOLUTION,
        timeout=float(os.getenv("FINNHUB_TIMEOUT") or 10.0),
        allow_partial=_parse_bool(os.getenv("SCAN_ALLOW_PARTIAL")),
    )

from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
import httpx

from config import Settings, load_settings
from services.finnhub import UpstreamError
from services.scanner import filter_broken, scan_symbols
from utils.auth import redact_headers, validate_authorization

# -----------------------------
# Configuration (read once at cold start)
# -----------------------------

settings = load_settings()

# -----------------------------
# FastAPI app setup
# -----------------------------

app = FastAPI(
    title="Level-Break Scanner",
    description="Reports which support/resistance levels today's price action broke for a fixed set of symbols.",
    version="1.0.0",
)

# -----------------------------
# Dependencies
# -----------------------------

def get_settings() -> Settings:
    return settings


async def get_http_client(settings: Settings = Depends(get_settings)):
    async with httpx.AsyncClient(timeout=settings.timeout) as client:
        yield client

# -----------------------------
# Error handling
# -----------------------------

@app.exception_handler(UpstreamError)
async def upstream_error_handler(request: Request, exc: UpstreamError):
    print("UPSTREAM ERROR:", exc)
    return PlainTextResponse("upstream error", status_code=502)

# -----------------------------
# Quotes endpoint
# -----------------------------

@app.api_route("/quotes", methods=["GET", "POST"])
async def get_quotes(
    request: Request,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    print("REQUEST:", {
        "method": request.method,
        "path": request.url.path,
        "headers": redact_headers(request.headers),
        "query": dict(request.query_params),
    })

    if not settings.cron_token:
        return PlainTextResponse("config not setup", status_code=500)

    if not validate_authorization(request.headers, settings.cron_token):
        return PlainTextResponse("unauthorized", status_code=401)

    # Presence is required, but the scan always uses the configured
    # universe and resolution.
    symbol = request.query_params.get("symbol")
    resolution = request.query_params.get("resolution")

    if not symbol:
        return PlainTextResponse("missing symbol", status_code=412)

    if not resolution:
        return PlainTextResponse("missing resolution", status_code=412)

    results = filter_broken(await scan_symbols(client, settings))

    return JSONResponse(
        content=[r.model_dump(by_alias=True, exclude_none=True) for r in results],
        status_code=200,
    )


if __name__ == "__main__":
    import os
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=int(os.getenv("PORT", "8080")))

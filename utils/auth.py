# utils/auth.py

from typing import Mapping, Optional


def extract_token(authorization: Optional[str]) -> Optional[str]:
    """
    Pulls the token out of an "<scheme> <token>" header value.
    Returns None when there is no second part.
    """
    parts = (authorization or "").split(" ")
    if len(parts) < 2:
        return None
    return parts[1]


def validate_authorization(headers: Mapping[str, str], cron_token: Optional[str]) -> bool:
    token = extract_token(headers.get("authorization"))
    return cron_token is not None and token == cron_token


def redact_headers(headers: Mapping[str, str]) -> dict:
    return {
        k: ("<redacted>" if k.lower() == "authorization" else v)
        for k, v in headers.items()
    }

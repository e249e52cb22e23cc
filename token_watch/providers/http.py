"""
Shared HTTP plumbing for provider clients.

get_json performs exactly one GET and never raises for provider-side problems:
transport errors, non-2xx statuses and undecodable bodies are logged, recorded
on the caller's ProviderHealth and returned as None. No retries.
"""
from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

import requests

from .base import ProviderHealth

logger = logging.getLogger(__name__)

HTTP_TIMEOUT_S = 15.0


def safe_get(d: Any, path: str, default: Any = None) -> Any:
    cur: Any = d
    for key in path.split("."):
        if not isinstance(cur, dict) or key not in cur:
            return default
        cur = cur[key]
    return cur


def to_float(x: Any) -> Optional[float]:
    """Parse a number or numeric string; None for missing, unparsable or non-finite input."""
    if x is None or isinstance(x, bool):
        return None
    try:
        value = float(x)
    except (TypeError, ValueError):
        return None
    return value if math.isfinite(value) else None


def to_int(x: Any) -> Optional[int]:
    if x is None or isinstance(x, bool):
        return None
    try:
        return int(x)
    except (TypeError, ValueError):
        return None


def record_failure(health: ProviderHealth, reason: str) -> None:
    """Log a provider failure and count it against the provider's health."""
    health.record_failure(reason)
    logger.warning(
        "%s unavailable (%s, failures=%d): %s",
        health.provider_name, health.status.value, health.fail_count, reason[:200],
    )


def get_json(
    url: str,
    health: ProviderHealth,
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
    timeout: float = HTTP_TIMEOUT_S,
) -> Optional[Any]:
    """GET url and return the decoded JSON body, or None on any failure."""
    logger.debug("%s GET %s params=%s", health.provider_name, url, params)
    try:
        resp = requests.get(url, params=params or {}, headers=headers or {}, timeout=timeout)
    except requests.RequestException as exc:
        record_failure(health, f"request error: {type(exc).__name__}: {exc}")
        return None

    status = resp.status_code
    if status == 429:
        record_failure(health, "rate limit (HTTP 429)")
        return None
    if not 200 <= status < 300:
        record_failure(health, f"HTTP {status}")
        return None

    try:
        return resp.json()
    except ValueError as exc:
        record_failure(health, f"malformed JSON: {exc}")
        return None

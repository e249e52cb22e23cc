"""
Jupiter spot price provider.

Uses the public Jupiter price API (no authentication required):
  GET https://lite-api.jup.ag/price/v2?ids={address}

Response shape:
  {"data": {"<address>": {"id": "<address>", "type": "derivedPrice", "price": "0.0123"}}, "timeTaken": 0.003}

A missing entry is reported as absence, never as a zero price.
"""
from __future__ import annotations

from .base import FetchResult, ProviderHealth
from .http import HTTP_TIMEOUT_S, get_json, record_failure, safe_get, to_float

JUPITER_BASE_URL = "https://lite-api.jup.ag"
PRICE_PATH = "/price/v2"


class JupiterSpotProvider:
    """Fetch spot prices by token address from the Jupiter public API."""

    def __init__(self, base_url: str = JUPITER_BASE_URL, timeout: float = HTTP_TIMEOUT_S):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.health = ProviderHealth(provider_name=self.provider_name)

    @property
    def provider_name(self) -> str:
        return "jupiter"

    def get_price(self, token_address: str) -> FetchResult[float]:
        data = get_json(
            self.base_url + PRICE_PATH,
            self.health,
            params={"ids": token_address},
            timeout=self.timeout,
        )
        if data is None:
            return FetchResult.absent(self.provider_name)

        prices = safe_get(data, "data")
        entry = prices.get(token_address) if isinstance(prices, dict) else None
        if not isinstance(entry, dict):
            record_failure(self.health, f"no price entry for {token_address}")
            return FetchResult.absent(self.provider_name)

        price = to_float(entry.get("price"))
        if price is None or price < 0:
            record_failure(self.health, f"invalid price {entry.get('price')!r} for {token_address}")
            return FetchResult.absent(self.provider_name)

        self.health.record_success()
        return FetchResult.of(self.provider_name, price)

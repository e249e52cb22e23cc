"""
Birdeye API client and the three Birdeye-backed providers.

All field-name assumptions for Birdeye responses live in this module.

Every Birdeye endpoint requires an API key. Without one, the providers return
absence without touching the network.

Response envelope (all endpoints):
  {"success": true, "data": {...}}

token_overview data (fields used):
  {"marketCap": 1234567.8, "mc": 1234567.8, "priceChange24hPercent": -3.2,
   "holder": 4821, "liquidity": 250000.0, ...}

history_price data:
  {"items": [{"address": "...", "unixTime": 1726617600, "value": 0.0119}, ...]}

price_volume/single data:
  {"price": 0.0123, "priceChangePercent": 4.1, "volumeUSD": 81234.5,
   "volumeChangePercent": -12.7, "updateUnixTime": 1726700400, ...}
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional

from ..changes import SECONDS_PER_DAY, historical_changes, samples_frame
from .base import (
    FetchResult,
    HistoricalChange,
    PriceVolume,
    ProviderHealth,
    TokenOverview,
    VolumeWindow,
)
from .http import HTTP_TIMEOUT_S, get_json, record_failure, to_float, to_int

logger = logging.getLogger(__name__)

# --- Endpoint configuration (update if Birdeye changes) ---
BIRDEYE_BASE_URL = "https://public-api.birdeye.so"
TOKEN_OVERVIEW_PATH = "/defi/token_overview"
HISTORY_PRICE_PATH = "/defi/history_price"
PRICE_VOLUME_PATH = "/defi/price_volume/single"

DEFAULT_HISTORY_INTERVAL = "1D"
DEFAULT_HISTORY_WINDOW_DAYS = 31


class BirdeyeClient:
    """
    Birdeye API client: credential gate, auth headers and envelope validation.

    request() returns the payload's "data" object, or None when the key is
    missing, the call fails, or the envelope is not successful.
    """

    def __init__(
        self,
        api_token: Optional[str],
        base_url: str = BIRDEYE_BASE_URL,
        chain: str = "solana",
        timeout: float = HTTP_TIMEOUT_S,
    ):
        self.api_token = api_token or None
        self.base_url = base_url.rstrip("/")
        self.chain = chain.lower()
        self.timeout = timeout

    @property
    def has_credential(self) -> bool:
        return self.api_token is not None

    def request(
        self,
        path: str,
        health: ProviderHealth,
        params: Optional[Dict[str, Any]] = None,
    ) -> Optional[Dict[str, Any]]:
        if not self.has_credential:
            record_failure(health, "missing Birdeye API key; request skipped")
            return None

        headers = {"X-API-KEY": str(self.api_token), "x-chain": self.chain, "accept": "application/json"}
        body = get_json(self.base_url + path, health, params=params, headers=headers, timeout=self.timeout)
        if body is None:
            return None
        if not isinstance(body, dict) or body.get("success") is not True:
            message = body.get("message") if isinstance(body, dict) else type(body).__name__
            record_failure(health, f"unsuccessful payload: {message}")
            return None

        data = body.get("data")
        if not isinstance(data, dict):
            record_failure(health, "payload has no data object")
            return None
        return data


class BirdeyeOverviewProvider:
    """Market cap, 24h change, holder count and liquidity from token_overview."""

    def __init__(self, client: BirdeyeClient):
        self.client = client
        self.health = ProviderHealth(provider_name=self.provider_name)

    @property
    def provider_name(self) -> str:
        return "birdeye_overview"

    def get_overview(self, token_address: str) -> FetchResult[TokenOverview]:
        data = self.client.request(TOKEN_OVERVIEW_PATH, self.health, params={"address": token_address})
        if data is None:
            return FetchResult.absent(self.provider_name)

        market_cap = to_float(data.get("marketCap"))
        if market_cap is None:
            market_cap = to_float(data.get("mc"))
        self.health.record_success()
        return FetchResult.of(
            self.provider_name,
            TokenOverview(
                market_cap=market_cap,
                price_change_24h_percent=to_float(data.get("priceChange24hPercent")),
                holders=to_int(data.get("holder")),
                liquidity=to_float(data.get("liquidity")),
            ),
        )


class BirdeyeHistoryProvider:
    """
    One-week and one-month change from history_price samples.

    Fetches window_days of samples ending now, then compares current_price with
    the sample nearest to 7 and 30 days ago (see token_watch.changes).
    """

    def __init__(
        self,
        client: BirdeyeClient,
        interval: str = DEFAULT_HISTORY_INTERVAL,
        window_days: int = DEFAULT_HISTORY_WINDOW_DAYS,
        now_fn: Callable[[], float] = time.time,
    ):
        self.client = client
        self.interval = interval
        self.window_days = window_days
        self._now = now_fn
        self.health = ProviderHealth(provider_name=self.provider_name)

    @property
    def provider_name(self) -> str:
        return "birdeye_history"

    def get_changes(
        self, token_address: str, current_price: Optional[float]
    ) -> FetchResult[HistoricalChange]:
        if current_price is None:
            logger.debug("No current price for %s; historical change skipped", token_address)
            return FetchResult.absent(self.provider_name)

        now_ts = int(self._now())
        params = {
            "address": token_address,
            "address_type": "token",
            "type": self.interval,
            "time_from": now_ts - self.window_days * SECONDS_PER_DAY,
            "time_to": now_ts,
        }
        data = self.client.request(HISTORY_PRICE_PATH, self.health, params=params)
        if data is None:
            return FetchResult.absent(self.provider_name)

        items = data.get("items")
        frame = samples_frame(items if isinstance(items, list) else [])
        if frame.empty:
            record_failure(self.health, f"empty price history for {token_address}")
            return FetchResult.absent(self.provider_name)

        self.health.record_success()
        return FetchResult.of(self.provider_name, historical_changes(frame, current_price, now_ts))


class BirdeyePriceVolumeProvider:
    """Price and volume with their change percentages for a 1h or 24h window."""

    def __init__(self, client: BirdeyeClient):
        self.client = client
        self.health = ProviderHealth(provider_name=self.provider_name)

    @property
    def provider_name(self) -> str:
        return "birdeye_price_volume"

    def get_price_volume(self, token_address: str, window: VolumeWindow) -> FetchResult[PriceVolume]:
        params = {"address": token_address, "type": window.value}
        data = self.client.request(PRICE_VOLUME_PATH, self.health, params=params)
        if data is None:
            return FetchResult.absent(self.provider_name)

        self.health.record_success()
        return FetchResult.of(
            self.provider_name,
            PriceVolume(
                window=window,
                price=to_float(data.get("price")),
                price_change_percent=to_float(data.get("priceChangePercent")),
                volume_usd=to_float(data.get("volumeUSD")),
                volume_change_percent=to_float(data.get("volumeChangePercent")),
            ),
        )

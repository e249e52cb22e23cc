"""
Fake providers for aggregator and scheduler tests: deterministic data, per-address
absence, call recording. No live network.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Optional, Tuple

from token_watch.providers.base import (
    FetchResult,
    HistoricalChange,
    PriceVolume,
    TokenOverview,
    VolumeWindow,
)

LABS = "LABSh5DTebUcUbEoLzXKCiXFJLecDFiDWiBGUU1GpxR"
SOL = "So11111111111111111111111111111111111111112"


# ---------------------------------------------------------------------------
# Spot: fixed prices per address; missing or None means absent
# ---------------------------------------------------------------------------


class FakeSpotProvider:
    """Spot provider with fixed prices per address. Unknown addresses are absent."""

    def __init__(self, prices: Optional[Dict[str, Optional[float]]] = None, name: str = "fake_spot"):
        self._name = name
        self._prices = {LABS: 2.0, SOL: 100.0} if prices is None else dict(prices)
        self.calls: List[str] = []
        # called with the address before each lookup; lets tests act while a call is in flight
        self.on_call: Optional[Callable[[str], None]] = None

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def get_price(self, token_address: str) -> FetchResult[float]:
        self.calls.append(token_address)
        if self.on_call is not None:
            self.on_call(token_address)
        price = self._prices.get(token_address)
        if price is None:
            return FetchResult.absent(self._name)
        return FetchResult.of(self._name, price)


# ---------------------------------------------------------------------------
# Overview / history / volume: fixed value or always absent
# ---------------------------------------------------------------------------


class FakeOverviewProvider:
    def __init__(self, overview: Optional[TokenOverview] = None, name: str = "fake_overview"):
        self._name = name
        self._overview = overview
        self.call_count = 0

    @property
    def provider_name(self) -> str:
        return self._name

    def get_overview(self, token_address: str) -> FetchResult[TokenOverview]:
        self.call_count += 1
        return FetchResult(provider_name=self._name, value=self._overview)


class FakeHistoryProvider:
    def __init__(self, changes: Optional[HistoricalChange] = None, name: str = "fake_history"):
        self._name = name
        self._changes = changes
        self.calls: List[Tuple[str, Optional[float]]] = []

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.calls)

    def get_changes(self, token_address: str, current_price: Optional[float]) -> FetchResult[HistoricalChange]:
        self.calls.append((token_address, current_price))
        return FetchResult(provider_name=self._name, value=self._changes)


class FakeVolumeProvider:
    """Returns the configured PriceVolume per window; windows not configured are absent."""

    def __init__(self, volumes: Optional[Dict[VolumeWindow, PriceVolume]] = None, name: str = "fake_volume"):
        self._name = name
        self._volumes = dict(volumes or {})
        self.windows: List[VolumeWindow] = []

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def call_count(self) -> int:
        return len(self.windows)

    def get_price_volume(self, token_address: str, window: VolumeWindow) -> FetchResult[PriceVolume]:
        self.windows.append(window)
        return FetchResult(provider_name=self._name, value=self._volumes.get(window))


def full_overview() -> TokenOverview:
    return TokenOverview(
        market_cap=12_345_678.9,
        price_change_24h_percent=-3.25,
        holders=4821,
        liquidity=250_000.5,
    )


def full_volumes() -> Dict[VolumeWindow, PriceVolume]:
    return {
        VolumeWindow.H1: PriceVolume(
            window=VolumeWindow.H1, price=2.0, price_change_percent=0.5,
            volume_usd=1_500.0, volume_change_percent=12.5,
        ),
        VolumeWindow.H24: PriceVolume(
            window=VolumeWindow.H24, price=2.0, price_change_percent=-3.25,
            volume_usd=81_234.5, volume_change_percent=-7.0,
        ),
    }

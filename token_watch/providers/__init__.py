"""
Provider contracts for token market data.

Concrete clients live in submodules (jupiter, birdeye) and are wired together in
token_watch.defaults; this package surface exposes the data contracts only.
"""

from __future__ import annotations

from .base import (
    FetchResult,
    HistoricalChange,
    HistoricalChangeProvider,
    PriceVolume,
    PriceVolumeProvider,
    ProviderHealth,
    ProviderStatus,
    SpotPriceProvider,
    TokenOverview,
    TokenOverviewProvider,
    VolumeWindow,
)

__all__ = [
    "FetchResult",
    "HistoricalChange",
    "HistoricalChangeProvider",
    "PriceVolume",
    "PriceVolumeProvider",
    "ProviderHealth",
    "ProviderStatus",
    "SpotPriceProvider",
    "TokenOverview",
    "TokenOverviewProvider",
    "VolumeWindow",
]

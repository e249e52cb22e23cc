"""
Metrics aggregation: combine independently failing provider calls into one snapshot.

get_snapshot returns a MetricsSnapshot when the primary spot price is available
(any other field may be None) and NotDisplayable when it is not. Figures pass
through unrounded; formatting belongs to the presentation layer.
"""
from __future__ import annotations

import logging
import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from .providers.base import (
    HistoricalChange,
    HistoricalChangeProvider,
    PriceVolume,
    PriceVolumeProvider,
    SpotPriceProvider,
    TokenOverview,
    TokenOverviewProvider,
    VolumeWindow,
)

logger = logging.getLogger(__name__)


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="seconds")


@dataclass(frozen=True)
class MetricsSnapshot:
    """Aggregated metrics for one token at one instant. Only price is guaranteed."""

    token_address: str
    label: str
    price: float
    reference_label: str
    fetched_at_utc: str
    reference_price: Optional[float] = None
    ratio: Optional[float] = None
    liquidity: Optional[float] = None
    market_cap: Optional[float] = None
    holders: Optional[int] = None
    change_24h: Optional[float] = None
    change_1w: Optional[float] = None
    change_1m: Optional[float] = None
    volume_1h: Optional[float] = None
    volume_1h_change: Optional[float] = None
    volume_24h: Optional[float] = None
    volume_24h_change: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NotDisplayable:
    """The primary price could not be obtained; consumers render a degraded message."""

    token_address: str
    label: str
    reason: str = "primary price unavailable"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


SnapshotResult = Union[MetricsSnapshot, NotDisplayable]


def cross_ratio(primary: Optional[float], reference: Optional[float]) -> Optional[float]:
    """primary / reference, or None when either is missing or reference is zero."""
    if primary is None or reference is None or reference == 0:
        return None
    ratio = primary / reference
    return ratio if math.isfinite(ratio) else None


class MetricsAggregator:
    """
    Builds snapshots for a primary token priced against a reference token.

    Provider calls are total (they return FetchResult, never raise), so the
    only guard logic here is presence of inputs.
    """

    def __init__(
        self,
        spot: SpotPriceProvider,
        overview: TokenOverviewProvider,
        history: HistoricalChangeProvider,
        volume: PriceVolumeProvider,
        reference_address: str,
        reference_label: str = "SOL",
    ) -> None:
        self.spot = spot
        self.overview = overview
        self.history = history
        self.volume = volume
        self.reference_address = reference_address
        self.reference_label = reference_label

    def get_price_snapshot(self, token_address: str, label: str) -> SnapshotResult:
        """Minimal snapshot: spot price only, no other provider is called."""
        price = self.spot.get_price(token_address).value
        if price is None:
            logger.warning("No spot price for %s (%s)", label, token_address)
            return NotDisplayable(token_address=token_address, label=label)
        return MetricsSnapshot(
            token_address=token_address,
            label=label,
            price=price,
            reference_label=self.reference_label,
            fetched_at_utc=_utc_now_iso(),
        )

    def get_snapshot(self, token_address: str, label: str) -> SnapshotResult:
        logger.info("Fetching metrics for %s (%s)", label, token_address)
        price = self.spot.get_price(token_address).value
        if price is None:
            logger.warning("No spot price for %s (%s); snapshot not displayable", label, token_address)
            return NotDisplayable(token_address=token_address, label=label)

        reference_price = self.spot.get_price(self.reference_address).value
        overview = self.overview.get_overview(token_address).value or TokenOverview()
        changes = self.history.get_changes(token_address, price).value or HistoricalChange()
        volumes = self._volume_windows(token_address)

        if reference_price is None:
            logger.warning("No %s reference price; ratio omitted for %s", self.reference_label, label)

        vol_1h = volumes.get(VolumeWindow.H1) or PriceVolume(window=VolumeWindow.H1)
        vol_24h = volumes.get(VolumeWindow.H24) or PriceVolume(window=VolumeWindow.H24)
        return MetricsSnapshot(
            token_address=token_address,
            label=label,
            price=price,
            reference_label=self.reference_label,
            fetched_at_utc=_utc_now_iso(),
            reference_price=reference_price,
            ratio=cross_ratio(price, reference_price),
            liquidity=overview.liquidity,
            market_cap=overview.market_cap,
            holders=overview.holders,
            change_24h=overview.price_change_24h_percent,
            change_1w=changes.change_1w,
            change_1m=changes.change_1m,
            volume_1h=vol_1h.volume_usd,
            volume_1h_change=vol_1h.volume_change_percent,
            volume_24h=vol_24h.volume_usd,
            volume_24h_change=vol_24h.volume_change_percent,
        )

    def _volume_windows(self, token_address: str) -> Dict[VolumeWindow, Optional[PriceVolume]]:
        """Both volume windows, fetched concurrently."""
        with ThreadPoolExecutor(max_workers=len(VolumeWindow)) as pool:
            futures = {
                window: pool.submit(self.volume.get_price_volume, token_address, window)
                for window in VolumeWindow
            }
            return {window: future.result().value for window, future in futures.items()}

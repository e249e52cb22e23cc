"""
Default wiring: build providers, the aggregator and the status scheduler from config.

Config values come from token_watch.config.get_config() unless a dict is passed in.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from . import config as cfg_mod
from .aggregator import MetricsAggregator
from .providers.birdeye import (
    BirdeyeClient,
    BirdeyeHistoryProvider,
    BirdeyeOverviewProvider,
    BirdeyePriceVolumeProvider,
)
from .providers.jupiter import JupiterSpotProvider
from .scheduler import PresentationHost, Rotation, StatusScheduler, TimerFactory, thread_timer

logger = logging.getLogger(__name__)


@dataclass
class DefaultProviders:
    spot: JupiterSpotProvider
    overview: BirdeyeOverviewProvider
    history: BirdeyeHistoryProvider
    volume: BirdeyePriceVolumeProvider


def create_default_providers(cfg: Optional[dict] = None) -> DefaultProviders:
    """Jupiter for spot prices, Birdeye for overview, history and volume."""
    cfg = cfg or cfg_mod.get_config()
    timeout = cfg_mod.http_timeout_seconds(cfg)
    api_key = cfg_mod.birdeye_api_key(cfg)
    if api_key is None:
        logger.warning("BIRDEYE_API_KEY not set; overview, history and volume will be unavailable")

    birdeye = BirdeyeClient(
        api_key,
        base_url=cfg["birdeye"]["base_url"],
        chain=cfg_mod.chain(cfg),
        timeout=timeout,
    )
    history = cfg.get("history") or {}
    return DefaultProviders(
        spot=JupiterSpotProvider(base_url=cfg["jupiter"]["base_url"], timeout=timeout),
        overview=BirdeyeOverviewProvider(birdeye),
        history=BirdeyeHistoryProvider(
            birdeye,
            interval=str(history.get("interval", "1D")),
            window_days=int(history.get("window_days", 31)),
        ),
        volume=BirdeyePriceVolumeProvider(birdeye),
    )


def build_aggregator(
    cfg: Optional[dict] = None,
    providers: Optional[DefaultProviders] = None,
) -> MetricsAggregator:
    cfg = cfg or cfg_mod.get_config()
    p = providers or create_default_providers(cfg)
    reference = cfg_mod.reference_token(cfg)
    return MetricsAggregator(
        spot=p.spot,
        overview=p.overview,
        history=p.history,
        volume=p.volume,
        reference_address=reference.address,
        reference_label=reference.label,
    )


def build_scheduler(
    host: PresentationHost,
    cfg: Optional[dict] = None,
    aggregator: Optional[MetricsAggregator] = None,
    interval_seconds: Optional[float] = None,
    timer_factory: TimerFactory = thread_timer,
) -> StatusScheduler:
    cfg = cfg or cfg_mod.get_config()
    return StatusScheduler(
        aggregator=aggregator or build_aggregator(cfg),
        host=host,
        tokens=cfg_mod.known_tokens(cfg),
        rotation=Rotation(cfg_mod.rotation(cfg)),
        interval_seconds=cfg_mod.update_interval(cfg) if interval_seconds is None else interval_seconds,
        status_decimals=cfg_mod.status_price_decimals(cfg),
        timer_factory=timer_factory,
    )

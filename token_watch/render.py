"""
Plain-text rendering of snapshots for the command line.

Missing fields render as "N/A"; a NotDisplayable result renders the degraded message.
"""
from __future__ import annotations

from typing import List, Optional, Tuple

from .aggregator import MetricsSnapshot, NotDisplayable, SnapshotResult

NA = "N/A"
COULD_NOT_FETCH = "Could not fetch all token prices at the moment."
FOOTER = "Prices from Birdeye and Jupiter APIs"


def usd_value(value: Optional[float], decimals: int = 2) -> str:
    """$ with thousands grouping, e.g. 1234567.891 -> $1,234,567.89."""
    if value is None:
        return NA
    return f"${value:,.{decimals}f}"


def percent(value: Optional[float]) -> str:
    if value is None:
        return NA
    return f"{value:.2f}%"


def plain(value: Optional[float], decimals: int) -> str:
    if value is None:
        return NA
    return f"{value:.{decimals}f}"


def snapshot_rows(snapshot: MetricsSnapshot, decimals: int = 2) -> List[Tuple[str, str]]:
    return [
        ("Price", usd_value(snapshot.price, 4)),
        ("Liquidity", usd_value(snapshot.liquidity, decimals)),
        (f"{snapshot.label}/{snapshot.reference_label}", plain(snapshot.ratio, 6)),
        ("Market Cap", usd_value(snapshot.market_cap, decimals)),
        ("Holders", NA if snapshot.holders is None else str(snapshot.holders)),
        ("1D Change", percent(snapshot.change_24h)),
        ("1W Change", percent(snapshot.change_1w)),
        ("1Mo Change", percent(snapshot.change_1m)),
        ("1Hr Volume", usd_value(snapshot.volume_1h, decimals)),
        ("1Hr Volume Change", percent(snapshot.volume_1h_change)),
        ("1D Volume", usd_value(snapshot.volume_24h, decimals)),
        ("1D Volume Change", percent(snapshot.volume_24h_change)),
        (snapshot.reference_label, usd_value(snapshot.reference_price, decimals)),
    ]


def render_snapshot(result: SnapshotResult, decimals: int = 2) -> str:
    if isinstance(result, NotDisplayable):
        return COULD_NOT_FETCH
    rows = snapshot_rows(result, decimals)
    width = max(len(name) for name, _ in rows)
    lines = [f"{result.label} Token Prices & Liquidity", ""]
    lines.extend(f"  {name.ljust(width)}  {value}" for name, value in rows)
    lines.extend(["", f"{FOOTER} ({result.fetched_at_utc})"])
    return "\n".join(lines)

"""
Historical price change: nearest-sample lookup and percentage change against it.

Samples are (unix_time, price) pairs. For each target offset the sample with the
smallest absolute distance to now - offset is used; ties go to the earlier sample.
"""
from __future__ import annotations

from typing import Any, Iterable, Optional

import numpy as np
import pandas as pd

from .providers.base import HistoricalChange
from .providers.http import to_float, to_int

SECONDS_PER_DAY = 86_400
WEEK_OFFSET_S = 7 * SECONDS_PER_DAY
MONTH_OFFSET_S = 30 * SECONDS_PER_DAY


def samples_frame(items: Iterable[Any]) -> pd.DataFrame:
    """
    Normalize raw history items to a frame sorted by unix_time.

    Accepts Birdeye history_price items ({"unixTime": ..., "value": ...}); items
    missing either field are dropped.
    """
    rows = []
    for item in items:
        if not isinstance(item, dict):
            continue
        ts = to_int(item.get("unixTime") or item.get("unix_time"))
        price = to_float(item.get("value"))
        if ts is None or price is None:
            continue
        rows.append((ts, price))
    frame = pd.DataFrame(rows, columns=["unix_time", "price"])
    return frame.sort_values("unix_time", kind="mergesort").reset_index(drop=True)


def nearest_sample(frame: pd.DataFrame, target_ts: int) -> Optional[float]:
    """Price of the sample closest in time to target_ts, or None for an empty frame."""
    if frame.empty:
        return None
    distance = np.abs(frame["unix_time"].to_numpy(dtype=np.int64) - int(target_ts))
    return float(frame["price"].iloc[int(distance.argmin())])


def percent_change(current: Optional[float], reference: Optional[float]) -> Optional[float]:
    """(current - reference) / reference * 100; None when either side is missing or reference is 0."""
    if current is None or reference is None or reference == 0:
        return None
    return (current - reference) / reference * 100.0


def historical_changes(
    frame: pd.DataFrame,
    current_price: Optional[float],
    now_ts: int,
    week_offset_s: int = WEEK_OFFSET_S,
    month_offset_s: int = MONTH_OFFSET_S,
) -> HistoricalChange:
    return HistoricalChange(
        change_1w=percent_change(current_price, nearest_sample(frame, now_ts - week_offset_s)),
        change_1m=percent_change(current_price, nearest_sample(frame, now_ts - month_offset_s)),
    )

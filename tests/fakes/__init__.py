"""Fake providers, presentation targets and a simulated clock for tests (no live network)."""

from .presentation import FailingTarget, FakeHost, RecordingTarget
from .providers import (
    LABS,
    SOL,
    FakeHistoryProvider,
    FakeOverviewProvider,
    FakeSpotProvider,
    FakeVolumeProvider,
    full_overview,
    full_volumes,
)
from .timers import FakeClock, FakeTimer

__all__ = [
    "LABS",
    "SOL",
    "FailingTarget",
    "FakeClock",
    "FakeHistoryProvider",
    "FakeHost",
    "FakeOverviewProvider",
    "FakeSpotProvider",
    "FakeTimer",
    "FakeVolumeProvider",
    "RecordingTarget",
    "full_overview",
    "full_volumes",
]

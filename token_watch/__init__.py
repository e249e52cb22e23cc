"""
Top-level public API surface.
Token market metrics aggregated from unreliable providers, plus a rotating status scheduler.
Does not import cli.
"""

from __future__ import annotations

from ._version import __version__
from .aggregator import MetricsAggregator, MetricsSnapshot, NotDisplayable, cross_ratio
from .defaults import build_aggregator, build_scheduler
from .scheduler import Rotation, StatusScheduler, StatusUpdate

# Do not add exports without updating __all__.
__all__ = [
    "__version__",
    "MetricsAggregator",
    "MetricsSnapshot",
    "NotDisplayable",
    "Rotation",
    "StatusScheduler",
    "StatusUpdate",
    "build_aggregator",
    "build_scheduler",
    "cross_ratio",
]

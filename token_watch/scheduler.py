"""
Status scheduler: a rotating, repeating price status pushed to presentation targets.

States:
- IDLE: no timer armed.
- RUNNING: one repeating timer armed; each fire re-arms first, then runs one tick.

Transitions:
- IDLE -> RUNNING: start() arms the repeating timer and a zero-delay timer for
  the immediate update, then returns without waiting for providers.
- RUNNING -> RUNNING: start() again cancels the old timer before arming a new one.
- RUNNING -> IDLE: stop(). stop() while IDLE is a no-op.
- RUNNING -> IDLE: start() with a host that is not ready, which then raises.

Every armed timer carries the generation it was armed in; a callback from an
older generation returns without doing anything, so no tick from a replaced
timer can run after a restart. stop() cancels the pending timer only; work
already in flight finishes but does not re-arm.
"""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Protocol, Sequence, Tuple

from .aggregator import MetricsAggregator, MetricsSnapshot
from .config import KnownToken
from .core.errors import ClientNotReadyError, ConfigError

logger = logging.getLogger(__name__)


class PresentationTarget(Protocol):
    """One display surface (e.g. the bot member in one guild). Either call may fail."""

    name: str

    def set_display_name(self, text: str) -> None: ...

    def set_activity_text(self, text: str) -> None: ...


class PresentationHost(Protocol):
    """The connected host process; targets() is re-read on every tick."""

    def is_ready(self) -> bool: ...

    def targets(self) -> Iterable[PresentationTarget]: ...


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def thread_timer(interval: float, function: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(interval, function)
    timer.daemon = True
    return timer


@dataclass(frozen=True)
class StatusUpdate:
    display_name: str
    activity_text: str


def format_status(key: str, price: float, decimals: int = 4) -> StatusUpdate:
    return StatusUpdate(display_name=f"${price:.{decimals}f}", activity_text=f"{key} Price")


class Rotation:
    """Ordered token keys plus a current index that wraps on advance()."""

    def __init__(self, entries: Sequence[str], index: int = 0) -> None:
        if not entries:
            raise ConfigError("rotation must contain at least one entry")
        self.entries: List[str] = list(entries)
        self.index = index % len(self.entries)

    @property
    def current(self) -> str:
        return self.entries[self.index]

    def advance(self) -> int:
        self.index = (self.index + 1) % len(self.entries)
        return self.index


class StatusScheduler:
    """
    Rotates through configured tokens, pushing "$<price>" / "<KEY> Price" to every target.

    Rotation index, timer handle and generation are guarded by one lock, so
    overlapping ticks never lose a rotation step.
    """

    def __init__(
        self,
        aggregator: MetricsAggregator,
        host: PresentationHost,
        tokens: Dict[str, KnownToken],
        rotation: Rotation,
        interval_seconds: float,
        status_decimals: int = 4,
        timer_factory: TimerFactory = thread_timer,
    ) -> None:
        if not tokens:
            raise ConfigError("status scheduler needs at least one known token")
        if interval_seconds <= 0:
            raise ConfigError(f"interval_seconds must be positive, got {interval_seconds}")
        self.aggregator = aggregator
        self.host = host
        self.tokens = dict(tokens)
        self.rotation = rotation
        self.interval_seconds = interval_seconds
        self.status_decimals = status_decimals
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._timer: Optional[TimerHandle] = None
        self._kickoff: Optional[TimerHandle] = None
        self._generation = 0
        self._running = False

    @property
    def is_running(self) -> bool:
        return self._running

    def start(self) -> None:
        """
        Arm the repeating timer and dispatch one immediate update on a zero-delay timer.

        Returns without waiting for provider calls. A host that is not ready stops
        any running loop before ClientNotReadyError is raised.
        """
        if not self.host.is_ready():
            self.stop()
            raise ClientNotReadyError("presentation host is not ready; cannot start status loop")

        logger.info("Starting status update loop...")
        with self._lock:
            self._cancel_timer_locked()
            self._generation += 1
            generation = self._generation
            self._running = True
            self._arm_locked(generation)
            self._kickoff = self._timer_factory(0, lambda: self._on_kickoff(generation))
            self._kickoff.start()
        logger.info("Status loop initialized with %s second interval", self.interval_seconds)

    def stop(self) -> None:
        with self._lock:
            if not self._running:
                return
            self._running = False
            self._generation += 1
            self._cancel_timer_locked()
        logger.info("Status update loop stopped")

    def update_status(self, entry: str) -> Optional[StatusUpdate]:
        """
        Run one status update for a rotation entry. Never raises.

        Returns the update pushed to targets, or None when the tick was skipped.
        """
        try:
            token = self.resolve_entry(entry)
            if not self.host.is_ready():
                logger.error("Presentation host not ready; status update for %s skipped", token.key)
                return None

            snapshot = self.aggregator.get_price_snapshot(token.address, token.label)
            if not isinstance(snapshot, MetricsSnapshot):
                logger.warning("No price for %s; status update skipped", token.key)
                return None

            update = format_status(token.key, snapshot.price, self.status_decimals)
            names, activities, total = self._push(update)
            logger.info(
                "Status updated (display name %d/%d, activity %d/%d): %s | %s",
                names, total, activities, total, update.display_name, update.activity_text,
            )
            return update
        except Exception:
            logger.exception("Error updating status for rotation entry %r", entry)
            return None

    def resolve_entry(self, entry: str) -> KnownToken:
        """Known token for a rotation entry; unknown entries fall back to the first known token."""
        token = self.tokens.get(str(entry).upper())
        if token is not None:
            return token
        fallback = next(iter(self.tokens.values()))
        logger.warning("Unknown rotation entry %r; falling back to %s", entry, fallback.key)
        return fallback

    def _push(self, update: StatusUpdate) -> Tuple[int, int, int]:
        """Push both fields to every target; each call may fail on its own."""
        names = activities = 0
        targets = list(self.host.targets())
        for target in targets:
            label = getattr(target, "name", target)
            try:
                target.set_display_name(update.display_name)
                names += 1
            except Exception as exc:
                logger.warning("Failed to set display name on %s: %s", label, exc)
            try:
                target.set_activity_text(update.activity_text)
                activities += 1
            except Exception as exc:
                logger.warning("Failed to set activity on %s: %s", label, exc)
        return names, activities, len(targets)

    def _on_kickoff(self, generation: int) -> None:
        with self._lock:
            if not self._running or generation != self._generation:
                return
            self._kickoff = None
            entry = self.rotation.current
        self.update_status(entry)

    def _on_timer(self, generation: int) -> None:
        with self._lock:
            if not self._running or generation != self._generation:
                return
            self._arm_locked(generation)
            self.rotation.advance()
            entry = self.rotation.current
        self.update_status(entry)

    def _arm_locked(self, generation: int) -> None:
        timer = self._timer_factory(self.interval_seconds, lambda: self._on_timer(generation))
        self._timer = timer
        timer.start()

    def _cancel_timer_locked(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        if self._kickoff is not None:
            self._kickoff.cancel()
            self._kickoff = None

"""
Simulated time for scheduler tests.

FakeClock.timer has the threading.Timer(interval, function) signature; advance()
fires started, uncancelled timers in due order, including timers armed while firing.
fire() runs one timer immediately, e.g. from inside a tick that is still in flight.
"""

from __future__ import annotations

from typing import Callable, List


class FakeTimer:
    def __init__(self, clock: "FakeClock", interval: float, function: Callable[[], None]):
        self._clock = clock
        self.interval = interval
        self.function = function
        self.due_at: float = float("inf")
        self.started = False
        self.cancelled = False
        self.fired = False

    @property
    def active(self) -> bool:
        return self.started and not self.cancelled and not self.fired

    def start(self) -> None:
        self.started = True
        self.due_at = self._clock.now + self.interval

    def cancel(self) -> None:
        self.cancelled = True


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def timer(self, interval: float, function: Callable[[], None]) -> FakeTimer:
        t = FakeTimer(self, interval, function)
        self.timers.append(t)
        return t

    @property
    def active_timers(self) -> List[FakeTimer]:
        return [t for t in self.timers if t.active]

    def fire(self, timer: FakeTimer) -> None:
        """Fire one timer now, regardless of its due time (an overlapping tick)."""
        timer.fired = True
        timer.function()

    def advance(self, seconds: float) -> None:
        end = self.now + seconds
        while True:
            due = [t for t in self.active_timers if t.due_at <= end]
            if not due:
                break
            t = min(due, key=lambda x: x.due_at)
            self.now = t.due_at
            t.fired = True
            t.function()
        self.now = end

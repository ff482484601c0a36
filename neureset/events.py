"""Signals, a simulated millisecond clock and timers driven by it."""

from __future__ import annotations

import itertools
from typing import Any, Callable


class Signal:
    """A list of callables invoked, in connection order, on every emit."""

    def __init__(self) -> None:
        self._slots: list[Callable[..., Any]] = []

    def connect(self, slot: Callable[..., Any]) -> None:
        self._slots.append(slot)

    def disconnect(self, slot: Callable[..., Any]) -> None:
        try:
            self._slots.remove(slot)
        except ValueError:
            raise ValueError(f"{slot!r} is not connected") from None

    def emit(self, *args: Any) -> None:
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)


class Clock:
    """Simulated time in milliseconds; advancing it fires the timers that fall due."""

    def __init__(self, start: int = 0) -> None:
        self._now = start
        self._timers: list[Timer] = []
        self._sequence = itertools.count()

    def now(self) -> int:
        return self._now

    def advance(self, ms: int) -> None:
        """Move time forward by ``ms``, firing due timers in deadline order."""
        if ms < 0:
            raise ValueError("cannot move the clock backwards")
        target = self._now + ms
        while True:
            due = [t for t in self._timers if t._active and t._deadline <= target]
            if not due:
                break
            timer = min(due, key=lambda t: (t._deadline, t._order))
            self._now = timer._deadline
            timer._fire()
        self._now = target

    def _register(self, timer: Timer) -> None:
        self._timers.append(timer)

    def _next_order(self) -> int:
        return next(self._sequence)


class Timer:
    """A repeating or single-shot timer whose ``timeout`` signal fires on a clock."""

    def __init__(self, clock: Clock, interval: int = 0, single_shot: bool = False) -> None:
        self.clock = clock
        self.interval = interval
        self.single_shot = single_shot
        self.timeout = Signal()
        self._active = False
        self._deadline = 0
        self._order = 0
        clock._register(self)

    def start(self, interval: int | None = None) -> None:
        """Start or restart the timer, optionally with a new interval."""
        if interval is not None:
            self.interval = interval
        if self.interval < 0:
            raise ValueError("timer interval must not be negative")
        if self.interval == 0 and not self.single_shot:
            raise ValueError("a repeating timer needs a positive interval")
        self._deadline = self.clock.now() + self.interval
        self._order = self.clock._next_order()
        self._active = True

    def stop(self) -> None:
        self._active = False

    def is_active(self) -> bool:
        return self._active

    def _fire(self) -> None:
        if self.single_shot:
            self._active = False
        else:
            self._deadline += self.interval
        self.timeout.emit()


class ElapsedTimer:
    """Measures milliseconds passed on a clock since it was started."""

    def __init__(self, clock: Clock) -> None:
        self.clock = clock
        self._started_at: int | None = None

    def start(self) -> None:
        self._started_at = self.clock.now()

    def restart(self) -> int:
        """Restart and return the time elapsed before the restart (0 if never started)."""
        passed = 0 if self._started_at is None else self.elapsed()
        self.start()
        return passed

    def elapsed(self) -> int:
        if self._started_at is None:
            raise RuntimeError("elapsed timer has not been started")
        return self.clock.now() - self._started_at
"""
Purpose: Cancellable timers for the autocomplete debounce window.
What it does:
- Scheduler: anything with call_later(delay, callback) -> TimerHandle.
- ThreadingScheduler: production scheduler backed by threading.Timer.
- Debouncer: keeps at most one pending timer; every trigger() cancels the
  previous one, so only the timer that fires last without being superseded runs.

Tests (and hosts with their own event loop) inject a different Scheduler.
"""

from __future__ import annotations

import threading
from typing import Callable, Optional, Protocol


class TimerHandle(Protocol):
    def cancel(self) -> None:
        ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        ...


class ThreadingScheduler:
    """
    Runs callbacks on a daemon threading.Timer.
    """
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer


class Debouncer:
    """
    Explicit cancellable-timer abstraction.

    trigger(fn) schedules fn after `delay` seconds and cancels whatever was
    pending before. The callback receives no arguments; bind the latest value
    into it at trigger time instead of reading mutable outer state later.
    """
    def __init__(self, scheduler: Scheduler, delay: float):
        self.scheduler = scheduler
        self.delay = delay
        self._pending: Optional[TimerHandle] = None
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def trigger(self, callback: Callable[[], None]) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1
            generation = self._generation

            def fire() -> None:
                # a timer that was already running when cancel() was called
                # must still lose to the newer one
                with self._lock:
                    if generation != self._generation:
                        return
                    self._pending = None
                callback()

            self._pending = self.scheduler.call_later(self.delay, fire)

    def cancel(self) -> None:
        with self._lock:
            self._cancel_locked()
            self._generation += 1

    def _cancel_locked(self) -> None:
        if self._pending is not None:
            self._pending.cancel()
            self._pending = None

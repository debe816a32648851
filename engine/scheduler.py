"""
scheduler.py — Cooperative Delayed Callbacks
=============================================
A tiny single-thread timer queue.  The playback controller never sleeps
and never spawns threads; it asks the scheduler to call it back later and
keeps the returned handle so it can cancel it.

    sched  = Scheduler()
    handle = sched.call_later(500, advance)
    …
    handle.cancel()            # a cancelled handle never fires
    sched.run_due()            # fire everything whose time has come

Whoever owns the event loop (the Flask host on every request, a desktop
timer, a test) calls run_due().  Callbacks scheduled from inside a firing
callback are timed from that callback's due time, not from "now", so a
late run_due() catches up step by step instead of dropping steps.

Thread safety:
  NOT thread-safe.  The host must drive one scheduler from one thread at
  a time (the Flask host holds a per-session lock).
"""

import heapq
import itertools
import time
from typing import Callable, List, Optional, Tuple


def _monotonic_ms() -> float:
    return time.monotonic() * 1000.0


class TimerHandle:
    """One pending callback.  Created by Scheduler.call_later()."""

    __slots__ = ("due_ms", "callback", "cancelled", "fired")

    def __init__(self, due_ms: float, callback: Callable[[], None]):
        self.due_ms:    float                = due_ms
        self.callback:  Callable[[], None]   = callback
        self.cancelled: bool                 = False
        self.fired:     bool                 = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)

    def __repr__(self) -> str:
        state = "cancelled" if self.cancelled else ("fired" if self.fired else "pending")
        return f"TimerHandle(due_ms={self.due_ms:.1f}, {state})"


class Scheduler:
    """
    Attributes:
        clock : Zero-arg callable returning milliseconds (monotonic by default).
                Tests pass a fake clock to drive time by hand.
    """

    def __init__(self, clock: Optional[Callable[[], float]] = None):
        self.clock: Callable[[], float] = clock or _monotonic_ms
        self._queue: List[Tuple[float, int, TimerHandle]] = []
        self._seq = itertools.count()
        # virtual "now" while a callback is firing
        self._firing_at: Optional[float] = None

    def now_ms(self) -> float:
        if self._firing_at is not None:
            return self._firing_at
        return self.clock()

    def call_later(self, delay_ms: float, callback: Callable[[], None]) -> TimerHandle:
        handle = TimerHandle(self.now_ms() + max(0.0, delay_ms), callback)
        heapq.heappush(self._queue, (handle.due_ms, next(self._seq), handle))
        return handle

    def run_due(self) -> int:
        """Fire every pending callback whose due time has passed.  Returns how many fired."""
        now = self.clock()
        fired = 0
        while self._queue and self._queue[0][0] <= now:
            due, _, handle = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            handle.fired = True
            self._firing_at = due
            try:
                handle.callback()
            finally:
                self._firing_at = None
            fired += 1
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._queue if h.pending)

    def next_due_ms(self) -> Optional[float]:
        for due, _, h in sorted(self._queue, key=lambda e: (e[0], e[1])):
            if h.pending:
                return due
        return None

    def clear(self) -> None:
        for _, _, h in self._queue:
            h.cancel()
        self._queue = []

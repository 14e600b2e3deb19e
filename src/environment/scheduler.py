"""
Single-threaded scheduling of delayed game transitions.

Nothing here runs on its own: the host (a UI loop, the CLI runner, a test)
moves the virtual clock forward with `advance`, and due callbacks fire in
order on the caller's stack.
"""

import heapq
import itertools
from typing import Callable, List, Optional, Tuple


def _tick(t: float) -> float:
    # Keeps chained delays such as 0.6 + 0.8 landing exactly on 1.4
    return round(t, 9)


class ScheduledCall:
    """Handle for a pending callback; cancel it to stop it from firing."""

    __slots__ = ("due", "interval", "callback", "cancelled", "fired")

    def __init__(self, due: float, callback: Callable[[], None], interval: Optional[float] = None):
        self.due = due
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def finished(self) -> bool:
        """Cancelled, or a one-shot call that has already run."""
        return self.cancelled or (self.fired and not self.repeating)

    @property
    def repeating(self) -> bool:
        return self.interval is not None


class Scheduler:
    """Virtual clock with one-shot and repeating callbacks."""

    def __init__(self):
        self.now = 0.0
        self._queue: List[Tuple[float, int, ScheduledCall]] = []
        self._counter = itertools.count()

    def _push(self, call: ScheduledCall) -> ScheduledCall:
        heapq.heappush(self._queue, (call.due, next(self._counter), call))
        return call

    def call_later(self, delay: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run `callback` once, `delay` seconds from now."""
        if delay < 0:
            raise ValueError(f"Delay must be non-negative, got {delay}")
        return self._push(ScheduledCall(_tick(self.now + delay), callback))

    def call_every(self, interval: float, callback: Callable[[], None]) -> ScheduledCall:
        """Run `callback` every `interval` seconds until cancelled."""
        if interval <= 0:
            raise ValueError(f"Interval must be positive, got {interval}")
        return self._push(ScheduledCall(_tick(self.now + interval), callback, interval))

    def next_due(self) -> Optional[float]:
        """Clock time of the next live callback, if any."""
        while self._queue and self._queue[0][2].cancelled:
            heapq.heappop(self._queue)
        return self._queue[0][0] if self._queue else None

    @property
    def pending(self) -> int:
        return sum(1 for _, _, call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """
        Move the clock forward, firing every callback that falls due.

        Callbacks fire in due-time order, ties in registration order, with
        the clock set to their due time. Callbacks scheduled while advancing
        fire in the same call if they fall due. Returns the number fired.
        """
        if seconds < 0:
            raise ValueError(f"Cannot move the clock backwards ({seconds})")

        target = _tick(self.now + seconds)
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, call = heapq.heappop(self._queue)
            if call.cancelled:
                continue
            self.now = due
            call.fired = True
            call.callback()
            fired += 1
            if call.repeating and not call.cancelled:
                call.due = _tick(due + call.interval)
                self._push(call)

        self.now = target
        return fired

    def cancel_all(self) -> None:
        for _, _, call in self._queue:
            call.cancel()
        self._queue = []

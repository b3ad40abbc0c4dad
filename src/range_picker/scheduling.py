"""
Scheduling

Cancellable delayed callbacks for the drag-move debounce. The selection
engine only ever talks to the Scheduler protocol, so tests drive time with
ManualScheduler and applications plug in their event loop (asyncio here, Qt
in qt_bridge).
"""

from __future__ import annotations
import asyncio
import heapq
import itertools
import logging
from typing import Callable, List, Optional, Protocol, Tuple


logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    """Anything that can run a callback after a delay in milliseconds."""

    def call_later(self, delay_ms: int, callback: Callback) -> TimerHandle: ...


class _ManualHandle:
    def __init__(self, due_ms: int):
        self.due_ms = due_ms
        self.cancelled = False

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Deterministic scheduler with an explicit clock.

    Time only moves when advance() is called; due callbacks run in due order,
    ties in scheduling order.
    """

    def __init__(self, start_ms: int = 0):
        self._now_ms = start_ms
        self._queue: List[Tuple[int, int, _ManualHandle, Callback]] = []
        self._sequence = itertools.count()

    @property
    def now_ms(self) -> int:
        return self._now_ms

    @property
    def pending_count(self) -> int:
        return sum(1 for _, _, handle, _ in self._queue if not handle.cancelled)

    def call_later(self, delay_ms: int, callback: Callback) -> _ManualHandle:
        handle = _ManualHandle(self._now_ms + max(0, delay_ms))
        heapq.heappush(self._queue, (handle.due_ms, next(self._sequence), handle, callback))
        return handle

    def advance(self, ms: int) -> int:
        """Move the clock forward and run what became due. Returns callbacks run."""
        target = self._now_ms + ms
        ran = 0
        while self._queue and self._queue[0][0] <= target:
            due_ms, _, handle, callback = heapq.heappop(self._queue)
            if handle.cancelled:
                continue
            self._now_ms = due_ms
            callback()
            ran += 1
        self._now_ms = target
        return ran

    def flush(self) -> int:
        """Run everything still pending, however far away."""
        ran = 0
        while self._queue:
            ran += self.advance(self._queue[0][0] - self._now_ms)
        return ran


class _ImmediateHandle:
    def cancel(self) -> None:
        pass


class ImmediateScheduler:
    """Runs callbacks synchronously. Debouncing degenerates to pass-through."""

    def call_later(self, delay_ms: int, callback: Callback) -> _ImmediateHandle:
        callback()
        return _ImmediateHandle()


class AsyncioScheduler:
    """Schedules on an asyncio event loop (the running loop by default)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._loop = loop

    def call_later(self, delay_ms: int, callback: Callback) -> asyncio.TimerHandle:
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay_ms / 1000.0, callback)


class Debouncer:
    """
    Single-slot timer: at most one pending callback. Scheduling a new one
    cancels and replaces the pending one.
    """

    def __init__(self, scheduler: Scheduler, delay_ms: int):
        self._scheduler = scheduler
        self._delay_ms = delay_ms
        self._handle: Optional[TimerHandle] = None
        self._generation = 0
        self._pending = False

    @property
    def pending(self) -> bool:
        return self._pending

    @property
    def delay_ms(self) -> int:
        return self._delay_ms

    @delay_ms.setter
    def delay_ms(self, delay_ms: int) -> None:
        """New delay applies from the next schedule(); a pending callback keeps its timer."""
        self._delay_ms = delay_ms

    def schedule(self, callback: Callback) -> None:
        self.cancel()
        self._generation += 1
        generation = self._generation
        self._pending = True

        def fire() -> None:
            # Stale timers from schedulers that cannot cancel are ignored
            if generation != self._generation or not self._pending:
                return
            self._pending = False
            self._handle = None
            callback()

        handle = self._scheduler.call_later(self._delay_ms, fire)
        # The scheduler may already have run `fire` synchronously
        if self._pending and generation == self._generation:
            self._handle = handle

    def cancel(self) -> bool:
        """Cancel the pending callback. Returns True if one was pending."""
        if not self._pending:
            return False
        self._pending = False
        self._generation += 1
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        logger.debug("Pending debounce cancelled")
        return True

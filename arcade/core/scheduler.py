"""
Delayed transitions (the opponent's move, resolving a pair of memory cards).

Engines only need `call_later(delay, callback)` returning a cancellable handle.
Two implementations:

* ManualScheduler: a virtual clock moved forward by hand (tests, deterministic replay).
* AsyncioScheduler: hands the callback to a running asyncio event loop.
"""

import asyncio
import heapq
import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, Optional, Protocol

logger = logging.getLogger(__name__)

Callback = Callable[[], None]


class Handle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> Handle:
        """Run callback once after `delay` seconds."""
        ...


@dataclass(order=True)
class ScheduledCall:
    due: float
    sequence: int
    callback: Callback = field(compare=False)
    cancelled: bool = field(default=False, compare=False)

    def cancel(self) -> None:
        self.cancelled = True


class ManualScheduler:
    """
    Virtual clock.
    ---

    Nothing happens until advance() / run_all() is called. Callbacks fire in order of due time
    (ties in order of scheduling), and a callback may schedule further calls which fire in the same advance()
    if they fall inside the window.
    """

    def __init__(self) -> None:
        self.now = 0.0
        self._queue: list[ScheduledCall] = []
        self._counter = itertools.count()

    def call_later(self, delay: float, callback: Callback) -> ScheduledCall:
        call = ScheduledCall(self.now + delay, next(self._counter), callback)
        heapq.heappush(self._queue, call)
        return call

    @property
    def pending(self) -> int:
        return sum(1 for call in self._queue if not call.cancelled)

    def advance(self, seconds: float) -> int:
        """Move the clock forward and fire everything that became due. Returns the number of callbacks fired."""
        deadline = self.now + seconds
        fired = 0
        while self._queue and self._queue[0].due <= deadline:
            call = heapq.heappop(self._queue)
            self.now = call.due
            if call.cancelled:
                continue
            call.callback()
            fired += 1
        self.now = deadline
        return fired

    def run_all(self) -> int:
        """Fire everything that is pending, however far in the future."""
        fired = 0
        while self._queue:
            call = heapq.heappop(self._queue)
            self.now = max(self.now, call.due)
            if call.cancelled:
                continue
            call.callback()
            fired += 1
        return fired


class AsyncioScheduler:
    """Schedule on an asyncio event loop (single-threaded, so one callback runs to completion at a time)."""

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        return self._loop or asyncio.get_running_loop()

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        logger.debug("Scheduling %s in %.2fs", getattr(callback, "__name__", callback), delay)
        return self.loop.call_later(delay, callback)

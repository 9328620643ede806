"""Timer scheduling used to drive the timed flow transitions.

Flows never sleep; they ask a :class:`Scheduler` to call them back later and
keep the returned handle so the transition can be cancelled.
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Protocol

Callback = Callable[[], None]


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


class Scheduler(Protocol):
    def call_later(self, delay: float, callback: Callback) -> TimerHandle: ...

    def time(self) -> float: ...


class AsyncioScheduler:
    """Schedules callbacks on an asyncio event loop.

    The loop is resolved lazily so the scheduler can be created outside a
    running loop and used from coroutines later on.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None) -> None:
        self._loop = loop

    def call_later(self, delay: float, callback: Callback) -> asyncio.TimerHandle:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        loop = self._loop or asyncio.get_running_loop()
        return loop.call_later(delay, callback)

    def time(self) -> float:
        loop = self._loop or asyncio.get_running_loop()
        return loop.time()


@dataclass
class ManualTimer:
    due: float
    callback: Callback
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class ManualScheduler:
    """Deterministic scheduler whose clock only moves when advanced."""

    now: float = 0.0
    _queue: List[tuple] = field(default_factory=list, repr=False)
    _counter: itertools.count = field(default_factory=itertools.count, repr=False)

    def call_later(self, delay: float, callback: Callback) -> ManualTimer:
        if delay < 0:
            raise ValueError("delay must be non-negative")
        timer = ManualTimer(due=self.now + delay, callback=callback)
        heapq.heappush(self._queue, (timer.due, next(self._counter), timer))
        return timer

    def time(self) -> float:
        return self.now

    def advance(self, dt: float) -> int:
        """Move the clock forward by ``dt`` seconds, firing due timers in order.

        Returns the number of callbacks that ran.
        """

        if dt < 0:
            raise ValueError("dt must be non-negative")
        target = self.now + dt
        fired = 0
        while self._queue and self._queue[0][0] <= target:
            due, _, timer = heapq.heappop(self._queue)
            self.now = due
            if timer.cancelled:
                continue
            timer.callback()
            fired += 1
        self.now = target
        return fired

    def run_all(self, limit: int = 1000) -> int:
        """Fire every pending timer, including ones scheduled while running."""

        fired = 0
        for _ in range(limit):
            pending = [entry for entry in self._queue if not entry[2].cancelled]
            if not pending:
                break
            fired += self.advance(min(entry[0] for entry in pending) - self.now)
        return fired

    @property
    def pending(self) -> int:
        return sum(1 for entry in self._queue if not entry[2].cancelled)

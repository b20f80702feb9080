"""Schedulers — cancellable delayed callbacks used for debouncing."""

from __future__ import annotations

import asyncio
import heapq
import itertools
from abc import ABC, abstractmethod
from typing import Callable, Optional


class TimerHandle(ABC):
    @abstractmethod
    def cancel(self) -> None: ...

    @abstractmethod
    def cancelled(self) -> bool: ...


class Scheduler(ABC):
    @abstractmethod
    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        """Run callback once after delay seconds unless the handle is cancelled."""

    def close(self) -> None:
        """Release resources owned by the scheduler."""


class _AsyncioTimerHandle(TimerHandle):
    def __init__(self, handle: asyncio.TimerHandle):
        self._handle = handle

    def cancel(self) -> None:
        self._handle.cancel()

    def cancelled(self) -> bool:
        return self._handle.cancelled()


class AsyncioScheduler(Scheduler):
    """Scheduler backed by an asyncio event loop's ``call_later``.

    The loop is resolved once, on construction: the given loop, else the
    running loop. Without either a private loop is created; timers scheduled
    on it fire once the caller runs ``scheduler.loop``.
    """

    def __init__(self, loop: Optional[asyncio.AbstractEventLoop] = None):
        self._owns_loop = False
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                loop = asyncio.new_event_loop()
                self._owns_loop = True
        self.loop = loop

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        return _AsyncioTimerHandle(self.loop.call_later(delay, callback))

    def close(self) -> None:
        if self._owns_loop and not self.loop.is_closed():
            self.loop.close()


class _ManualTimerHandle(TimerHandle):
    def __init__(self, due: float, callback: Callable[[], None]):
        self.due = due
        self.callback = callback
        self._cancelled = False

    def cancel(self) -> None:
        self._cancelled = True

    def cancelled(self) -> bool:
        return self._cancelled


class ManualScheduler(Scheduler):
    """Virtual-clock scheduler. Time only moves when ``advance()`` is called."""

    def __init__(self) -> None:
        self.now = 0.0
        self._seq = itertools.count()
        self._heap: list[tuple[float, int, _ManualTimerHandle]] = []

    def call_later(self, delay: float, callback: Callable[[], None]) -> TimerHandle:
        handle = _ManualTimerHandle(self.now + max(delay, 0.0), callback)
        heapq.heappush(self._heap, (handle.due, next(self._seq), handle))
        return handle

    @property
    def pending(self) -> int:
        return sum(1 for _, _, h in self._heap if not h.cancelled())

    def advance(self, seconds: float) -> None:
        """Move the clock forward, running due callbacks in due-time order."""
        target = self.now + seconds
        while self._heap and self._heap[0][0] <= target:
            due, _, handle = heapq.heappop(self._heap)
            if handle.cancelled():
                continue
            self.now = due
            handle.callback()
        self.now = target

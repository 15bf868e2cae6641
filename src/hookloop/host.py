"""Host adapters — the event loop a Runtime is layered over.

A host supplies four things:
- after(delay, callback): single-shot deferred call
- register_source(key) / unregister_source(key): start/stop delivering a key
- bind(dispatch): receive the entry point to call when a registered key fires
- now(): monotonic seconds

ManualHost is a deterministic virtual clock for tests and scripted driving.
AsyncioHost runs on an asyncio event loop. The Textual adapter lives in
hookloop.textual (opt-in).
"""

from __future__ import annotations

import asyncio
import heapq
import itertools
import logging
from typing import Any, Callable, Hashable, Protocol

logger = logging.getLogger("hookloop.host")

Dispatch = Callable[..., None]


class Host(Protocol):
    def after(self, delay: float, callback: Callable[[], Any]) -> None: ...

    def register_source(self, key: Hashable) -> None: ...

    def unregister_source(self, key: Hashable) -> None: ...

    def bind(self, dispatch: Dispatch) -> None: ...

    def now(self) -> float: ...


class _SourceTracking:
    """Registered-key bookkeeping shared by the shipped hosts."""

    def __init__(self) -> None:
        self.registered: set[Hashable] = set()
        self._dispatch: Dispatch | None = None

    def bind(self, dispatch: Dispatch) -> None:
        self._dispatch = dispatch

    def register_source(self, key: Hashable) -> None:
        logger.debug("register source %r", key)
        self.registered.add(key)

    def unregister_source(self, key: Hashable) -> None:
        logger.debug("unregister source %r", key)
        self.registered.discard(key)

    def emit(self, key: Hashable, *args) -> bool:
        """Deliver a notification. Unregistered keys are dropped.

        Returns True if the notification reached the dispatcher.
        """
        if key not in self.registered or self._dispatch is None:
            return False
        self._dispatch(key, *args)
        return True


class ManualHost(_SourceTracking):
    """Virtual-clock host. Nothing runs until the test drives it.

    Usage:
        host = ManualHost()
        host.after(0, lambda: print("tick"))
        host.run_pending()   # prints "tick"
    """

    def __init__(self) -> None:
        super().__init__()
        self._clock = 0.0
        self._seq = itertools.count()
        self._queue: list[tuple[float, int, Callable[[], Any]]] = []
        self.scheduled = 0  # total after() calls, for assertions

    def now(self) -> float:
        return self._clock

    def after(self, delay: float, callback: Callable[[], Any]) -> None:
        self.scheduled += 1
        heapq.heappush(self._queue, (self._clock + max(delay, 0.0), next(self._seq), callback))

    @property
    def pending(self) -> int:
        return len(self._queue)

    def run_pending(self) -> int:
        """Run one tick: every task due at the current time, in schedule order.

        Tasks scheduled while the tick runs wait for the next tick.
        Returns the number of tasks run.
        """
        due = []
        while self._queue and self._queue[0][0] <= self._clock:
            due.append(heapq.heappop(self._queue))
        for _, _, callback in due:
            callback()
        return len(due)

    def advance(self, seconds: float) -> int:
        """Move the clock forward, running ticks as tasks fall due.

        Each instant is ticked at most once. Work scheduled for an instant
        that was already ticked runs on the next later step, or at the end
        of the window; whatever it re-arms after that waits for the next call.
        """
        target = self._clock + seconds
        ran = 0
        step = None
        while self._queue:
            due = max(self._clock, self._queue[0][0])
            if step is not None and due <= step:
                due = min([t for t, _, _ in self._queue if t > step] + [target])
            if due > target or (step is not None and due <= step):
                break
            self._clock = step = due
            ran += self.run_pending()
        self._clock = target
        return ran

    def drain(self, max_ticks: int = 1000) -> int:
        """Run ticks until the queue is empty. Stops after max_ticks."""
        ran = 0
        for _ in range(max_ticks):
            if not self._queue:
                break
            self._clock = max(self._clock, self._queue[0][0])
            ran += self.run_pending()
        return ran


class AsyncioHost(_SourceTracking):
    """Host backed by an asyncio event loop.

    The loop defaults to the running loop at the time of the first after() call.
    Pass it explicitly if emit_threadsafe() may be the first thing to need it.
    """

    def __init__(self, loop: asyncio.AbstractEventLoop | None = None) -> None:
        super().__init__()
        self._loop = loop

    @property
    def loop(self) -> asyncio.AbstractEventLoop:
        if self._loop is None:
            self._loop = asyncio.get_running_loop()
        return self._loop

    def now(self) -> float:
        return self.loop.time()

    def after(self, delay: float, callback: Callable[[], Any]) -> None:
        self.loop.call_later(max(delay, 0.0), callback)

    def emit_threadsafe(self, key: Hashable, *args) -> None:
        """Marshal a notification from another thread onto the loop thread."""
        self.loop.call_soon_threadsafe(lambda: self.emit(key, *args))

"""Lifecycle bootstrap — load hooks, init hooks and the per-tick update loop."""

from __future__ import annotations

from typing import Any, Callable

from hookloop.host import Host

FRAME_INTERVAL = 1 / 60


class Lifecycle:
    def __init__(self, host: Host, update_interval: float = FRAME_INTERVAL) -> None:
        self._host = host
        self._update_interval = update_interval
        self._load_hooks: list[Callable[[], Any]] = []
        self._update_hooks: list[Callable[[float], Any]] = []
        self._last_tick: float | None = None
        self.loaded = False

    def on_load(self, fn: Callable[[], Any]) -> None:
        self._load_hooks.append(fn)

    @property
    def load_hook_count(self) -> int:
        return len(self._load_hooks)

    def on_init(self, fn: Callable[[], Any]) -> None:
        fn()

    def on_update(self, fn: Callable[[float], Any]) -> None:
        """Call fn(elapsed_seconds) every update_interval. The first hook starts the ticker.

        An interval of 0 re-arms on every loop iteration and keeps the loop busy.
        """
        self._update_hooks.append(fn)
        if self._last_tick is None:
            self._last_tick = self._host.now()
            self._host.after(self._update_interval, self._tick)

    def run_load_hooks(self) -> None:
        self.loaded = True
        for fn in list(self._load_hooks):
            fn()

    def _tick(self) -> None:
        now = self._host.now()
        delta = now - self._last_tick
        self._last_tick = now
        # Re-arm first so a raising hook does not stop the loop.
        self._host.after(self._update_interval, self._tick)
        for fn in list(self._update_hooks):
            fn(delta)

"""Runtime — the context object every hook entry point hangs off.

One Runtime owns one StateStore, EffectRegistry, Scheduler and
EventMultiplexer plus the bootstrap collaborators. Nothing is module-global,
so independent runtimes can share a process (and a test session).

Registration identity is positional. Cells and effects must be created in
the same order every time a setup function runs; check_registration() is
an opt-in way to assert that.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable, Iterable, MutableMapping, Sequence

from hookloop.commands import CommandRegistry
from hookloop.effect import Effect, EffectRegistry
from hookloop.errors import HookOrderError
from hookloop.events import EventMultiplexer, Handler, Unsubscribe
from hookloop.hooks import use_hook
from hookloop.host import Host
from hookloop.lifecycle import FRAME_INTERVAL, Lifecycle
from hookloop.saved import SavedCell, use_saved_variable
from hookloop.scheduler import Scheduler
from hookloop.state import StateCell, StateStore

logger = logging.getLogger("hookloop.runtime")

Inspector = Callable[[dict[str, Any]], Any]


class Runtime:
    """Hooks-style reactive runtime layered over a host event loop.

    Usage:
        host = ManualHost()
        rt = Runtime(host)
        count = rt.use_state(0)
        log = []
        rt.use_effect(lambda: log.append(count.get()), [count])

        rt.request_flush()
        host.run_pending()   # log == [0]
        count.set(1)
        count.set(2)
        host.run_pending()   # log == [0, 2] — one flush for both writes
    """

    def __init__(
        self,
        host: Host,
        *,
        name: str = "hookloop",
        flush_delay: float = 0.0,
        ready_event: Hashable = "READY",
        saved_variables: MutableMapping[str, Any] | None = None,
        inspector: Inspector | None = None,
        update_interval: float = FRAME_INTERVAL,
    ) -> None:
        self.host = host
        self.name = name
        self.effects = EffectRegistry()
        self.scheduler = Scheduler(host, self.effects.evaluate_all, flush_delay)
        self.store = StateStore(self.scheduler.request_flush)
        self.events = EventMultiplexer(host)
        self.lifecycle = Lifecycle(host, update_interval)
        self.commands = CommandRegistry()
        self.saved_variables: MutableMapping[str, Any] = {} if saved_variables is None else saved_variables
        self.debug_values: dict[str, Any] = {}
        self._inspector = inspector

        host.bind(self.events.dispatch)
        self._unsubscribe_ready = self.events.subscribe([ready_event], self._on_ready)

    # ─── Core hooks ──────────────────────────────────────────────────────────

    def use_state(self, value: Any) -> StateCell:
        return self.store.create_cell(value)

    def use_effect(self, fn: Callable[[], Any], deps: Iterable[StateCell] | Any) -> Effect:
        """Register fn to run on flushes where a cell in deps changed.

        Pass ALWAYS to run on every flush. An empty list runs on the first
        flush only.
        """
        return self.effects.register_effect(fn, deps)

    def use_event(self, fn: Handler, events: Iterable[Hashable], once: bool = False) -> Unsubscribe:
        return self.events.subscribe(events, fn, once)

    def dispatch(self, key: Hashable, *args) -> None:
        self.events.dispatch(key, *args)

    def request_flush(self) -> None:
        self.scheduler.request_flush()

    def next_tick(self, fn: Callable[[], Any], delay: float = 0.0) -> None:
        self.host.after(delay, fn)

    # ─── Collaborators ───────────────────────────────────────────────────────

    def use_saved_variable(self, group: str, name: str, default: Any) -> SavedCell:
        return use_saved_variable(self, self.saved_variables, group, name, default)

    def use_debug_value(self, label: str, cell: StateCell) -> Effect:
        def _mirror() -> None:
            self.debug_values[label] = cell.get()

        return self.use_effect(_mirror, [cell])

    def use_slash_cmd(self, fn: Callable[..., Any], aliases: Sequence[str]) -> str:
        return self.commands.register(fn, aliases)

    def use_hook(self, target: Any, attr: str, fn: Callable[..., Any], kind: str = "replace", once: bool = False):
        return use_hook(target, attr, fn, kind, once)

    def on_load(self, fn: Callable[[], Any]) -> None:
        self.lifecycle.on_load(fn)

    def on_init(self, fn: Callable[[], Any]) -> None:
        self.lifecycle.on_init(fn)

    def on_update(self, fn: Callable[[float], Any]) -> None:
        self.lifecycle.on_update(fn)

    def check_registration(self, cells: int | None = None, effects: int | None = None) -> None:
        """Raise HookOrderError if the tracked counts differ from the expected ones."""
        if cells is not None and cells != len(self.store):
            raise HookOrderError("cells", cells, len(self.store))
        if effects is not None and effects != len(self.effects):
            raise HookOrderError("effects", effects, len(self.effects))

    # ─── Bootstrap ───────────────────────────────────────────────────────────

    def _on_ready(self, event: Hashable, target: Any = None, *args) -> None:
        if target != self.name:
            return
        self._unsubscribe_ready()
        logger.info("%s ready: running %d load hooks", self.name, self.lifecycle.load_hook_count)
        self.lifecycle.run_load_hooks()
        self.request_flush()
        self.next_tick(self._show_debug_values)

    def _show_debug_values(self) -> None:
        if not self.debug_values or self._inspector is None:
            return
        self._inspector(self.debug_values)

    def __repr__(self) -> str:
        return f"Runtime({self.name!r}, cells={len(self.store)}, effects={len(self.effects)})"

"""Event multiplexer — fans external notifications out to subscribers.

Each key maps to an ordered handler list. A key is registered with the host
exactly while its list is non-empty. dispatch() iterates a snapshot of the
list, so a handler may unsubscribe itself (once-handlers) or subscribe new
handlers without disturbing the pass in progress.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Hashable, Iterable

from hookloop.host import Host

Handler = Callable[..., Any]
Unsubscribe = Callable[[], None]


class EventMultiplexer:
    def __init__(self, host: Host) -> None:
        self._host = host
        self._listeners: dict[Hashable, list[Handler]] = {}

    def subscribe(self, keys: Iterable[Hashable], handler: Handler, once: bool = False) -> Unsubscribe:
        """Append handler to every key in keys. Returns an unsubscribe function.

        Handlers are called as handler(key, *args). With once=True, the first
        invocation unsubscribes before returning the handler's result.
        """
        if isinstance(keys, str):
            keys = [keys]
        keys = list(dict.fromkeys(keys))

        if once:
            inner = handler

            @functools.wraps(inner)
            def handler(*args):
                result = inner(*args)
                unsubscribe()
                return result

        def unsubscribe() -> None:
            for key in keys:
                self._remove(key, handler)

        for key in keys:
            handlers = self._listeners.get(key)
            if handlers is None:
                handlers = self._listeners[key] = []
                self._host.register_source(key)
            handlers.append(handler)

        return unsubscribe

    def _remove(self, key: Hashable, handler: Handler) -> None:
        handlers = self._listeners.get(key)
        if handlers is None:
            return
        for i, h in enumerate(handlers):
            if h is handler:
                del handlers[i]
                break
        if not handlers:
            del self._listeners[key]
            self._host.unregister_source(key)

    def dispatch(self, key: Hashable, *args) -> None:
        """Call every handler subscribed to key when dispatch starts, in order."""
        for handler in tuple(self._listeners.get(key, ())):
            handler(key, *args)

    def subscribers(self, key: Hashable) -> list[Handler]:
        return list(self._listeners.get(key, ()))

    def __contains__(self, key: Hashable) -> bool:
        return key in self._listeners

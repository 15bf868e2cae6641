"""Textual integration for hookloop. Opt-in — requires textual.

TextualHost drives a Runtime from a Textual App's message loop. effect()
registers an effect that is skipped while the widget tree is not queryable
and tolerates NoMatches from widget queries.
"""

import threading
import time
from contextlib import contextmanager

from textual.css.query import NoMatches

from hookloop.host import _SourceTracking

# ids of apps whose widgets are being swapped; guarded effects skip them.
_paused_apps: set[int] = set()


class TextualHost(_SourceTracking):
    """Host backed by a Textual App.

    Zero-delay tasks go through App.call_later (next idle), others through
    App.set_timer.
    """

    def __init__(self, app) -> None:
        super().__init__()
        self.app = app
        self._main = threading.get_ident()

    def now(self) -> float:
        return time.monotonic()

    def after(self, delay, callback) -> None:
        if delay <= 0:
            self.app.call_later(callback)
        else:
            self.app.set_timer(delay, callback)

    def emit_threadsafe(self, key, *args) -> None:
        """Deliver a notification from any thread on the app's thread."""
        if threading.get_ident() != self._main:
            self.app.call_from_thread(self.emit, key, *args)
        else:
            self.emit(key, *args)


@contextmanager
def pause(app):
    """Suspend guarded effects during widget replacement."""
    key = id(app)
    _paused_apps.add(key)
    try:
        yield
    finally:
        _paused_apps.discard(key)


def is_safe(app) -> bool:
    """True when guarded effects may touch the app's widgets."""
    return app.is_running and id(app) not in _paused_apps


def effect(runtime, app, fn, deps):
    """runtime.use_effect() that safely touches Textual widgets.

    The dependency snapshots are still refreshed while paused, so a change
    that lands during a pause is not replayed afterwards.
    """

    def _guarded():
        if not is_safe(app):
            return
        try:
            fn()
        except NoMatches:
            pass

    return runtime.use_effect(_guarded, deps)

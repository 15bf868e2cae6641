"""Effects — callbacks re-run when their dependency cells change.

Each effect keeps a fixed list of snapshots pairing a cell getter with the
last value seen for it. A flush walks every effect in registration order,
refreshes every snapshot, and calls the effects whose snapshots moved.

Identity is positional: the Nth register_effect() call is the Nth effect.
"""

from __future__ import annotations

from typing import Any, Callable, Iterable

_UNSET = object()


class _Always:
    """Sentinel dependency list: re-run on every flush."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "ALWAYS"


ALWAYS = _Always()


class DependencySnapshot:
    __slots__ = ("getter", "cached")

    def __init__(self, getter: Callable[[], Any]) -> None:
        self.getter = getter
        self.cached = _UNSET

    def refresh(self) -> bool:
        """Read the current value; store it and return True if it differs."""
        value = self.getter()
        if self.cached is _UNSET or self.cached != value:
            self.cached = value
            return True
        return False


class Effect:
    __slots__ = ("fn", "deps", "evaluated")

    def __init__(self, fn: Callable[[], Any], deps: tuple[DependencySnapshot, ...] | None) -> None:
        self.fn = fn
        self.deps = deps
        self.evaluated = False

    def is_dirty(self) -> bool:
        if self.deps is None:
            return True
        # An empty list still runs on its first evaluation.
        dirty = not self.evaluated
        self.evaluated = True
        # No short-circuit: every snapshot is refreshed on every pass.
        for snapshot in self.deps:
            if snapshot.refresh():
                dirty = True
        return dirty

    def __repr__(self) -> str:
        deps = "ALWAYS" if self.deps is None else f"{len(self.deps)} deps"
        return f"Effect({getattr(self.fn, '__name__', self.fn)!r}, {deps})"


class EffectRegistry:
    """Ordered, append-only list of effects."""

    def __init__(self) -> None:
        self._effects: list[Effect] = []

    def register_effect(self, fn: Callable[[], Any], deps: Iterable | _Always) -> Effect:
        """Register fn against deps.

        deps is ALWAYS (run on every flush) or an iterable of cells — anything
        with a get() method. An empty iterable runs once, on the first flush.
        """
        if deps is None:
            raise TypeError("deps must be ALWAYS or an iterable of cells, not None")
        if deps is ALWAYS:
            effect = Effect(fn, None)
        else:
            effect = Effect(fn, tuple(DependencySnapshot(dep.get) for dep in deps))
        self._effects.append(effect)
        return effect

    def evaluate_all(self) -> int:
        """Run every dirty effect in registration order.

        A raising callback aborts the pass; later effects are not evaluated.
        Returns the number of callbacks invoked.
        """
        ran = 0
        for effect in list(self._effects):
            if effect.is_dirty():
                effect.fn()
                ran += 1
        return ran

    def __len__(self) -> int:
        return len(self._effects)

"""Function hooks — swap or post-hook a callable attribute on a host object.

"replace" routes calls to the hook while it is enabled and to the original
afterwards. "post" always calls the original first, then the hook with the
same arguments, and returns the original's result.

Hooks are plain callables, not descriptors: install them on modules or
instances, not on classes.
"""

from __future__ import annotations

import functools
from typing import Any, Callable

KINDS = ("replace", "post")


class FunctionHook:
    """Callable installed in place of the hooked attribute."""

    def __init__(self, fn: Callable[..., Any], original: Callable[..., Any] | None, kind: str, once: bool) -> None:
        if original is not None:
            functools.update_wrapper(self, original, updated=())
        self.fn = fn
        self.original = original
        self.kind = kind
        self.once = once
        self.enabled = True

    def unhook(self) -> None:
        self.enabled = False

    def __call__(self, *args, **kwargs):
        run_hook = self.enabled
        if self.once:
            self.unhook()

        if self.kind == "post":
            result = self.original(*args, **kwargs) if self.original is not None else None
            if run_hook:
                self.fn(*args, **kwargs)
            return result

        if run_hook:
            return self.fn(*args, **kwargs)
        if self.original is not None:
            return self.original(*args, **kwargs)
        return None


def use_hook(
    target: Any,
    attr: str,
    fn: Callable[..., Any],
    kind: str = "replace",
    once: bool = False,
) -> Callable[[], None]:
    """Install fn on target.attr. Returns the unhook function."""
    if kind not in KINDS:
        raise ValueError(f"unknown hook kind {kind!r}, expected one of {KINDS}")
    original = getattr(target, attr, None)
    if kind == "post" and original is None:
        raise ValueError(f"cannot post-hook missing attribute {attr!r}")
    hook = FunctionHook(fn, original, kind, once)
    setattr(target, attr, hook)
    return hook.unhook

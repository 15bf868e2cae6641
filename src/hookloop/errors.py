"""Exceptions raised by hookloop itself.

Callback failures are never wrapped: an effect or handler that raises
propagates its own exception to whoever triggered the pass.
"""


class HookloopError(Exception):
    """Base class for errors raised by the runtime."""


class HookOrderError(HookloopError):
    """Registration count differs from what the caller expected."""

    def __init__(self, kind: str, expected: int, actual: int) -> None:
        super().__init__(f"expected {expected} {kind}, runtime tracks {actual}")
        self.kind = kind
        self.expected = expected
        self.actual = actual


class UnknownCommandError(HookloopError, LookupError):
    """No slash command is registered under the given alias."""

"""Slash commands — route "/alias arg arg" lines to registered callbacks."""

from __future__ import annotations

from typing import Any, Callable, Sequence

from hookloop.errors import UnknownCommandError


class CommandRegistry:
    def __init__(self) -> None:
        self._handlers: dict[str, Callable[..., Any]] = {}
        self._aliases: dict[str, str] = {}

    def register(self, fn: Callable[..., Any], aliases: Sequence[str]) -> str:
        """Bind fn under every alias. Returns the command name (first alias, upper-cased)."""
        if not aliases:
            raise ValueError("a slash command needs at least one alias")
        name = aliases[0].upper()
        for alias in aliases:
            self._aliases["/" + alias.lstrip("/").lower()] = name
        self._handlers[name] = fn
        return name

    def execute(self, text: str) -> Any:
        """Run a command line. Arguments are the whitespace-separated words after the alias."""
        words = text.split()
        if not words:
            raise UnknownCommandError(text)
        alias = words[0].lower()
        if not alias.startswith("/"):
            alias = "/" + alias
        name = self._aliases.get(alias)
        if name is None:
            raise UnknownCommandError(words[0])
        return self._handlers[name](*words[1:])

    def aliases(self, name: str) -> list[str]:
        return [alias for alias, target in self._aliases.items() if target == name.upper()]

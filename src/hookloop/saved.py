"""Saved variables — state cells mirrored into a persistent backing mapping.

The backing store is a mapping of group name to a dict of variables, the
shape a host persists between sessions. Values are restored when the
runtime signals ready and written back by an effect on every change.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, MutableMapping

from hookloop.state import StateCell

if TYPE_CHECKING:
    from hookloop.runtime import Runtime

logger = logging.getLogger("hookloop.saved")


class SavedCell(StateCell):
    """A StateCell that also knows where it is persisted."""

    __slots__ = ("group", "name", "default")

    def __repr__(self) -> str:
        return f"SavedCell({self.group}.{self.name}, {self.get()!r})"


def use_saved_variable(
    runtime: Runtime,
    backing: MutableMapping[str, Any],
    group: str,
    name: str,
    default: Any,
) -> SavedCell:
    cell = runtime.store.create_cell(default, SavedCell)
    cell.group = group
    cell.name = name
    cell.default = default

    def _restore() -> None:
        table = backing.setdefault(group, {})
        if table.get(name) is None:
            table[name] = default
        logger.info("restored %s.%s = %r", group, name, table[name])
        cell.set(table[name])

    def _persist() -> None:
        # Before ready the backing mapping still holds the stored value.
        if not runtime.lifecycle.loaded:
            return
        backing.setdefault(group, {})[name] = cell.get()

    runtime.on_load(_restore)
    runtime.use_effect(_persist, [cell])
    return cell

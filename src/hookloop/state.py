"""State cells — positional value slots with write notification.

The store is append-only. A cell is a thin handle holding its slot index;
the value itself lives in the store and is read through it on every get().
"""

from __future__ import annotations

from typing import Any, Callable, Generic, TypeVar

T = TypeVar("T")


class StateCell(Generic[T]):
    """Accessor pair bound to one slot of a StateStore."""

    __slots__ = ("_store", "ref")

    def __init__(self, store: StateStore, ref: int) -> None:
        self._store = store
        self.ref = ref

    def get(self) -> T:
        return self._store._slots[self.ref]

    def set(self, value: T) -> None:
        """Overwrite the slot and request a flush. No equality check."""
        self._store._slots[self.ref] = value
        self._store._on_write()

    def __repr__(self) -> str:
        return f"StateCell(#{self.ref}, {self.get()!r})"


class StateStore:
    """Ordered, append-only sequence of value slots."""

    def __init__(self, on_write: Callable[[], Any]) -> None:
        self._slots: list[Any] = []
        self._on_write = on_write

    def create_cell(self, value: T, cell_type: type[StateCell] = StateCell) -> StateCell[T]:
        """Append a slot holding value. The returned cell's ref is its index."""
        self._slots.append(value)
        return cell_type(self, len(self._slots) - 1)

    def __len__(self) -> int:
        return len(self._slots)

    def __getitem__(self, ref: int) -> Any:
        return self._slots[ref]

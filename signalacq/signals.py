"""A minimal signal/slot mechanism for notifying observers of state changes."""

from __future__ import annotations

from typing import Any, Callable

Slot = Callable[..., Any]


class Signal:
    """A list of callables that are invoked, in connection order, on emit."""

    def __init__(self) -> None:
        self._slots: list[Slot] = []

    def connect(self, slot: Slot) -> Slot:
        """Connect ``slot``; the same slot may be connected more than once."""
        if not callable(slot):
            raise TypeError(f"slot must be callable, got {type(slot).__name__}")
        self._slots.append(slot)
        return slot

    def disconnect(self, slot: Slot) -> None:
        """Remove every connection of ``slot``.

        Raises ``ValueError`` if the slot was never connected.
        """
        remaining = [s for s in self._slots if s != slot]
        if len(remaining) == len(self._slots):
            raise ValueError("slot is not connected")
        self._slots = remaining

    def emit(self, *args: Any) -> None:
        """Call every connected slot with ``args``."""
        for slot in list(self._slots):
            slot(*args)

    def __len__(self) -> int:
        return len(self._slots)
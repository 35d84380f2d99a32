"""Sample number formats, byte orders and a single-choice format selector."""

from __future__ import annotations

from enum import Enum

from signalacq.signals import Signal


class NumberFormat(Enum):
    """Binary encoding of a single sample."""

    UINT8 = "uint8"
    UINT16 = "uint16"
    UINT32 = "uint32"
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    FLOAT = "float"
    DOUBLE = "double"


class Endianness(Enum):
    """Byte order of multi-byte samples."""

    LITTLE = "little"
    BIG = "big"


class NumberFormatBox:
    """Holds exactly one selected number format."""

    def __init__(self, selection: NumberFormat = NumberFormat.UINT8) -> None:
        self._selection = NumberFormat(selection)
        self.selection_changed = Signal()

    def current_selection(self) -> NumberFormat:
        """Return the currently selected number format."""
        return self._selection

    def set_selection(self, nf: NumberFormat | str) -> None:
        """Select ``nf``; emits ``selection_changed`` if it differs."""
        nf = NumberFormat(nf)
        if nf is self._selection:
            return
        self._selection = nf
        self.selection_changed.emit(nf)
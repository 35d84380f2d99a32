"""Reverse the byte order of IEEE-754 single and double precision values."""

import struct

_FLOAT = struct.Struct("<f")
_FLOAT_SWAPPED = struct.Struct(">f")
_DOUBLE = struct.Struct("<d")
_DOUBLE_SWAPPED = struct.Struct(">d")


def byteswap_float(value: float) -> float:
    """Return ``value`` as a 32-bit float with its four bytes reversed."""
    return _FLOAT_SWAPPED.unpack(_FLOAT.pack(value))[0]


def byteswap_double(value: float) -> float:
    """Return ``value`` as a 64-bit float with its eight bytes reversed."""
    return _DOUBLE_SWAPPED.unpack(_DOUBLE.pack(value))[0]
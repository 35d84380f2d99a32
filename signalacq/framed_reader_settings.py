"""Settings of the custom framed binary reader."""

from __future__ import annotations

import string
from enum import Enum
from typing import Any

from signalacq import settings as keys
from signalacq.number_format import Endianness, NumberFormat, NumberFormatBox
from signalacq.settings import MAX_NUM_CHANNELS, Settings
from signalacq.signals import Signal

DEFAULT_SYNC_WORD = "AA BB"
MIN_NUM_CHANNELS = 1
FIXED_FRAME_SIZE_MIN = 1
ERROR_STYLE = "color: red;"

_HEX_OR_SPACE = set(string.hexdigits + " ")


class SizeFieldType(Enum):
    """How the payload size of a frame is determined."""

    FIXED = 0
    FIELD_1BYTE = 1
    FIELD_2BYTE = 2


_SIZE_FIELD_TEXT = {
    SizeFieldType.FIXED: "fixed",
    SizeFieldType.FIELD_1BYTE: "field1byte",
    SizeFieldType.FIELD_2BYTE: "field2byte",
}
_SIZE_FIELD_FROM_TEXT = {text: kind for kind, text in _SIZE_FIELD_TEXT.items()}


def normalize_sync_word(text: str) -> str:
    """Upper-case the hex digits and group them into space separated bytes."""
    digits = "".join(text.split()).upper()
    return " ".join(digits[i : i + 2] for i in range(0, len(digits), 2))


def is_valid_sync_word_text(text: str) -> bool:
    """Whether ``text`` contains only hex digits and spaces."""
    return set(text) <= _HEX_OR_SPACE


def parse_sync_word(text: str) -> bytes:
    """Decode a hex sync word; a missing nibble gives empty bytes."""
    if not is_valid_sync_word_text(text):
        raise ValueError(f"invalid sync word: {text!r}")
    digits = text.replace(" ", "")
    if len(digits) % 2:
        return b""
    return bytes.fromhex(digits)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_int(value: Any) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


class FramedReaderSettings:
    """User-editable configuration of the framed reader."""

    def __init__(self) -> None:
        self.sync_word_changed = Signal()
        self.size_field_changed = Signal()
        self.checksum_changed = Signal()
        self.num_of_channels_changed = Signal()
        self.number_format_changed = Signal()
        self.debug_mode_changed = Signal()

        self._format_box = NumberFormatBox()
        self._format_box.selection_changed.connect(self.number_format_changed.emit)
        self._num_of_channels = MIN_NUM_CHANNELS
        self._endianness = Endianness.LITTLE
        self._sync_word_text = DEFAULT_SYNC_WORD
        self._size_field_type = SizeFieldType.FIXED
        self._fixed_frame_size = FIXED_FRAME_SIZE_MIN
        self._checksum = False
        self._debug_mode = False
        self.message = ""
        self.message_style = ""

    @property
    def sync_word_text(self) -> str:
        """The sync word as entered, hex bytes separated by spaces."""
        return self._sync_word_text

    @sync_word_text.setter
    def sync_word_text(self, text: str) -> None:
        if not is_valid_sync_word_text(text):
            raise ValueError(f"invalid sync word: {text!r}")
        if text == self._sync_word_text:
            return
        self._sync_word_text = text
        self.sync_word_changed.emit(self.sync_word)

    @property
    def sync_word(self) -> bytes:
        """The decoded sync word; empty if a nibble is missing."""
        return parse_sync_word(self._sync_word_text)

    @property
    def num_of_channels(self) -> int:
        return self._num_of_channels

    @num_of_channels.setter
    def num_of_channels(self, value: int) -> None:
        value = min(max(int(value), MIN_NUM_CHANNELS), MAX_NUM_CHANNELS)
        if value == self._num_of_channels:
            return
        self._num_of_channels = value
        self.num_of_channels_changed.emit(value)

    @property
    def number_format(self) -> NumberFormat:
        return self._format_box.current_selection()

    @number_format.setter
    def number_format(self, value: NumberFormat | str) -> None:
        self._format_box.set_selection(value)

    @property
    def endianness(self) -> Endianness:
        return self._endianness

    @endianness.setter
    def endianness(self, value: Endianness | str) -> None:
        self._endianness = Endianness(value)

    @property
    def size_field_type(self) -> SizeFieldType:
        return self._size_field_type

    @size_field_type.setter
    def size_field_type(self, value: SizeFieldType) -> None:
        value = SizeFieldType(value)
        if value is self._size_field_type:
            return
        self._size_field_type = value
        size = self._fixed_frame_size if value is SizeFieldType.FIXED else 0
        self.size_field_changed.emit(value, size)

    @property
    def fixed_frame_size(self) -> int:
        return self._fixed_frame_size

    @fixed_frame_size.setter
    def fixed_frame_size(self, value: int) -> None:
        value = max(int(value), FIXED_FRAME_SIZE_MIN)
        if value == self._fixed_frame_size:
            return
        self._fixed_frame_size = value
        if self._size_field_type is SizeFieldType.FIXED:
            self.size_field_changed.emit(SizeFieldType.FIXED, value)

    @property
    def checksum_enabled(self) -> bool:
        return self._checksum

    @checksum_enabled.setter
    def checksum_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._checksum:
            return
        self._checksum = enabled
        self.checksum_changed.emit(enabled)

    @property
    def debug_mode_enabled(self) -> bool:
        return self._debug_mode

    @debug_mode_enabled.setter
    def debug_mode_enabled(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._debug_mode:
            return
        self._debug_mode = enabled
        self.debug_mode_changed.emit(enabled)

    def show_message(self, message: str, error: bool = False) -> None:
        """Display a status message, styled as an error if ``error``."""
        self.message = message
        self.message_style = ERROR_STYLE if error else ""

    def save_settings(self, settings: Settings) -> None:
        """Store the configuration into ``settings``."""
        with settings.group(keys.GROUP_CUSTOM_FRAME):
            settings.set_value(keys.CUSTOM_FRAME_NUM_OF_CHANNELS, self.num_of_channels)
            settings.set_value(keys.CUSTOM_FRAME_NUMBER_FORMAT, self.number_format.value)
            settings.set_value(keys.CUSTOM_FRAME_ENDIANNESS, self.endianness.value)
            settings.set_value(keys.CUSTOM_FRAME_FRAME_START, self.sync_word_text)
            settings.set_value(
                keys.CUSTOM_FRAME_SIZE_FIELD_TYPE,
                _SIZE_FIELD_TEXT[self.size_field_type],
            )
            settings.set_value(keys.CUSTOM_FRAME_FIXED_FRAME_SIZE, self.fixed_frame_size)
            settings.set_value(keys.CUSTOM_FRAME_CHECKSUM, self.checksum_enabled)
            settings.set_value(keys.CUSTOM_FRAME_DEBUG_MODE, self.debug_mode_enabled)

    def load_settings(self, settings: Settings) -> None:
        """Load the configuration from ``settings``; invalid values are ignored."""
        with settings.group(keys.GROUP_CUSTOM_FRAME):
            self.num_of_channels = _to_int(
                settings.value(keys.CUSTOM_FRAME_NUM_OF_CHANNELS, self.num_of_channels)
            )

            nf_text = settings.value(keys.CUSTOM_FRAME_NUMBER_FORMAT, "")
            try:
                self.number_format = NumberFormat(str(nf_text))
            except ValueError:
                pass

            endianness_text = str(settings.value(keys.CUSTOM_FRAME_ENDIANNESS, ""))
            if endianness_text in (e.value for e in Endianness):
                self.endianness = Endianness(endianness_text)

            frame_start = normalize_sync_word(
                str(settings.value(keys.CUSTOM_FRAME_FRAME_START, self.sync_word_text))
            )
            if is_valid_sync_word_text(frame_start):
                self.sync_word_text = frame_start

            self.fixed_frame_size = _to_int(
                settings.value(keys.CUSTOM_FRAME_FIXED_FRAME_SIZE, self.fixed_frame_size)
            )

            size_field_text = str(settings.value(keys.CUSTOM_FRAME_SIZE_FIELD_TYPE, ""))
            if size_field_text in _SIZE_FIELD_FROM_TEXT:
                self.size_field_type = _SIZE_FIELD_FROM_TEXT[size_field_text]

            self.checksum_enabled = _to_bool(
                settings.value(keys.CUSTOM_FRAME_CHECKSUM, self.checksum_enabled)
            )
            self.debug_mode_enabled = _to_bool(
                settings.value(keys.CUSTOM_FRAME_DEBUG_MODE, self.debug_mode_enabled)
            )
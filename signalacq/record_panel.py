"""Recording file selection and CSV recording options of the record panel."""

from __future__ import annotations

import logging
import os
import re
from datetime import datetime
from enum import Enum
from typing import Any, Callable

from signalacq import settings as keys
from signalacq.settings import Settings
from signalacq.signals import Signal

log = logging.getLogger(__name__)

DEFAULT_SEPARATOR = ","
DEFAULT_DECIMALS = 6

_TRAILING_NUMBER = re.compile(r"(.*?)(\d+)(?!.*\d)(.*)")


class TimestampOption(Enum):
    """How each recorded row is timestamped."""

    DISABLED = "disabled"
    SECONDS = "seconds"
    SECONDS_PRECISION = "seconds_with_precision"
    MILLISECONDS = "milliseconds"


class OverwriteChoice(Enum):
    """Answer to the question of what to do with an existing file."""

    CANCEL = "cancel"
    OVERWRITE = "overwrite"
    SELECT_ANOTHER = "select_another"


ChooseFile = Callable[[], "str | None"]
ConfirmOverwrite = Callable[[str], OverwriteChoice]


def increment_file_name(path: str) -> str:
    """Return ``path`` with the last number in its base name incremented.

    A base name without a number gets ``_1`` appended. The suffix after
    the last dot is kept.
    """
    directory, name = os.path.split(path)
    base, dot, suffix = name.rpartition(".")
    if not dot:
        base, suffix = name, ""

    match = _TRAILING_NUMBER.match(base)
    if match:
        base = f"{match.group(1)}{int(match.group(2)) + 1}{match.group(3)}"
    else:
        base += "_1"

    if suffix:
        suffix = "." + suffix
    return f"{directory or '.'}/{base}{suffix}"


def format_timestamp(template: str, when: datetime | None = None) -> str:
    """Expand the ``strftime`` directives in ``template`` for ``when`` (default now)."""
    if when is None:
        when = datetime.now()
    return when.strftime(template)


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class RecordPanel:
    """Chooses the file to record into and holds the recording options.

    ``choose_file`` is asked for a file name when one is needed and
    returns ``None`` if the user cancels. ``confirm_overwrite`` is asked
    what to do when the chosen file already exists; without it the
    answer is ``OverwriteChoice.CANCEL``.
    """

    def __init__(
        self,
        choose_file: ChooseFile | None = None,
        confirm_overwrite: ConfirmOverwrite | None = None,
        exists: Callable[[str], bool] = os.path.exists,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self.record_paused_changed = Signal()

        self.choose_file = choose_file
        self.confirm_overwrite = confirm_overwrite
        self._exists = exists
        self._clock = clock

        self._selected_file = ""
        self.overwrite_selected = False

        self.auto_increment = False
        self._record_paused = False
        self.stop_on_close = True
        self.header = True
        self.disable_buffering = False
        self.separator_text = DEFAULT_SEPARATOR
        self.decimals = DEFAULT_DECIMALS
        self.timestamp_enabled = False
        self.timestamp_format = TimestampOption.SECONDS

    @property
    def record_paused(self) -> bool:
        """Whether incoming data is not written while recording."""
        return self._record_paused

    @record_paused.setter
    def record_paused(self, paused: bool) -> None:
        paused = bool(paused)
        if paused == self._record_paused:
            return
        self._record_paused = paused
        self.record_paused_changed.emit(paused)

    @property
    def selected_file(self) -> str:
        """The file name as entered; it may not be valid."""
        return self._selected_file

    @selected_file.setter
    def selected_file(self, file_name: str) -> None:
        self._selected_file = str(file_name)

    def select_file(self) -> bool:
        """Ask the user for a file; returns False if the user cancels."""
        file_name = self.choose_file() if self.choose_file is not None else None
        if not file_name:
            return False
        self.selected_file = file_name
        self.overwrite_selected = self._exists(file_name)
        return True

    def _confirm_overwrite(self, file_name: str) -> bool:
        choice = (
            self.confirm_overwrite(file_name)
            if self.confirm_overwrite is not None
            else OverwriteChoice.CANCEL
        )
        choice = OverwriteChoice(choice)
        if choice is OverwriteChoice.CANCEL:
            return False
        if choice is OverwriteChoice.OVERWRITE:
            self.selected_file = file_name
            return True
        return self.select_file()

    def _increment_file_name(self) -> bool:
        auto_file_name = increment_file_name(self.selected_file)
        if self._exists(auto_file_name):
            return self._confirm_overwrite(auto_file_name)
        self.selected_file = auto_file_name
        return True

    def get_selected_file(self) -> str | None:
        """Resolve a file name that can be recorded into right away.

        Handles an empty selection, time format directives in the name,
        automatic increment and overwrite confirmation. Returns ``None``
        if the user cancels.
        """
        if not self.selected_file and not self.select_file():
            return None

        if "%" in self.selected_file:
            stamped = format_timestamp(self.selected_file, self._clock())
            if not self._exists(stamped) or self._confirm_overwrite(stamped):
                return stamped
            return None

        if not self.overwrite_selected and self._exists(self.selected_file):
            if self.auto_increment:
                if not self._increment_file_name():
                    return None
            elif not self._confirm_overwrite(self.selected_file):
                return None

        return self.selected_file

    @property
    def separator(self) -> str:
        """Column separator, with ``\\t`` turned into a TAB character."""
        return self.separator_text.replace("\\t", "\t")

    @property
    def timestamp_option(self) -> TimestampOption:
        """The timestamp format in use, or ``DISABLED``."""
        if self.timestamp_enabled:
            return self.timestamp_format
        return TimestampOption.DISABLED

    def save_settings(self, settings: Settings) -> None:
        """Store the record options into ``settings``."""
        with settings.group(keys.GROUP_RECORD):
            settings.set_value(keys.RECORD_AUTO_INCREMENT, self.auto_increment)
            settings.set_value(keys.RECORD_RECORD_PAUSED, self.record_paused)
            settings.set_value(keys.RECORD_STOP_ON_CLOSE, self.stop_on_close)
            settings.set_value(keys.RECORD_HEADER, self.header)
            settings.set_value(keys.RECORD_DISABLE_BUFFERING, self.disable_buffering)
            settings.set_value(keys.RECORD_SEPARATOR, self.separator_text)
            settings.set_value(keys.RECORD_DECIMALS, str(self.decimals))
            settings.set_value(keys.RECORD_TIMESTAMP, self.timestamp_enabled)
            settings.set_value(keys.RECORD_TIMESTAMP_FORMAT, self.timestamp_format.value)

    def load_settings(self, settings: Settings) -> None:
        """Load the record options from ``settings``; missing keys keep their value."""
        with settings.group(keys.GROUP_RECORD):
            self.auto_increment = _to_bool(
                settings.value(keys.RECORD_AUTO_INCREMENT, self.auto_increment)
            )
            self.record_paused = _to_bool(
                settings.value(keys.RECORD_RECORD_PAUSED, self.record_paused)
            )
            self.stop_on_close = _to_bool(
                settings.value(keys.RECORD_STOP_ON_CLOSE, self.stop_on_close)
            )
            self.header = _to_bool(settings.value(keys.RECORD_HEADER, self.header))
            self.disable_buffering = _to_bool(
                settings.value(keys.RECORD_DISABLE_BUFFERING, self.disable_buffering)
            )
            self.separator_text = str(
                settings.value(keys.RECORD_SEPARATOR, self.separator_text)
            )
            self.decimals = _to_int(
                settings.value(keys.RECORD_DECIMALS, self.decimals), self.decimals
            )
            self.timestamp_enabled = _to_bool(
                settings.value(keys.RECORD_TIMESTAMP, self.timestamp_enabled)
            )

            format_text = str(settings.value(keys.RECORD_TIMESTAMP_FORMAT, "") or "")
            if format_text:
                try:
                    option = TimestampOption(format_text)
                except ValueError:
                    option = TimestampOption.DISABLED
                if option is TimestampOption.DISABLED:
                    log.error("Invalid timestamp format option: %s", format_text)
                else:
                    self.timestamp_format = option
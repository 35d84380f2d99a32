"""Collapsible tab panel that hides on double click and shows on click."""

from __future__ import annotations

import time
from typing import Callable

from signalacq.signals import Signal

DOUBLE_CLICK_DELAY = 0.2
"""Seconds after a toggle before tab bar clicks are honoured again."""

SHOWN_MAX_HEIGHT = 100000

HIDE_ACTION_TEXT = "▾"
HIDE_ACTION_TOOLTIP = "Hide Panels"


class HidableTabs:
    """Tracks whether the panel area is collapsed down to its tab bar.

    While shown, a double click on the tab bar hides the panels; while
    hidden, a single click shows them. After each toggle the tab bar
    ignores clicks for ``DOUBLE_CLICK_DELAY`` so that the clicks of a
    double click do not toggle twice.
    """

    def __init__(
        self,
        tab_bar_height: int = 0,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.tab_bar_height = tab_bar_height
        self._clock = clock
        self._hidden = False
        self._max_height = SHOWN_MAX_HEIGHT
        self._armed_at = float("-inf")
        self.toggled = Signal()

    @property
    def hidden(self) -> bool:
        return self._hidden

    @property
    def max_height(self) -> int:
        """Maximum height of the panel area."""
        return self._max_height

    def set_hidden(self, hidden: bool) -> None:
        """Hide or show the panels."""
        hidden = bool(hidden)
        if hidden == self._hidden:
            return
        self._hidden = hidden
        self._max_height = self.tab_bar_height if hidden else SHOWN_MAX_HEIGHT
        self._armed_at = self._clock() + DOUBLE_CLICK_DELAY
        self.toggled.emit(hidden)

    def _listening(self) -> bool:
        return self._clock() >= self._armed_at

    def on_tab_bar_clicked(self) -> bool:
        """Handle a click on the tab bar; returns whether panels were shown."""
        if self._hidden and self._listening():
            self.set_hidden(False)
            return True
        return False

    def on_tab_bar_double_clicked(self) -> bool:
        """Handle a double click; returns whether panels were hidden."""
        if not self._hidden and self._listening():
            self.set_hidden(True)
            return True
        return False

    def show_tabs(self) -> None:
        self.set_hidden(False)
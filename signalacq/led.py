"""State and drawing geometry of a round indicator LED."""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass

from signalacq.signals import Signal

RGB = tuple[int, int, int]

DEFAULT_COLOR: RGB = (107, 223, 51)
BORDER_COLOR: RGB = (130, 130, 130)
SHINE_ALPHA_ON = 200
SHINE_ALPHA_OFF = 50
GLOW_ALPHA = 0.5

SIZE_HINT = (20, 20)
MINIMUM_SIZE_HINT = (10, 10)


def _validate_color(color: RGB) -> RGB:
    values = tuple(int(c) for c in color)
    if len(values) != 3 or any(not 0 <= c <= 255 for c in values):
        raise ValueError(f"invalid RGB color: {color!r}")
    return values  # type: ignore[return-value]


def _darker(color: RGB) -> RGB:
    """Halve the HSV value of ``color``."""
    h, s, v = colorsys.rgb_to_hsv(*(c / 255 for c in color))
    r, g, b = colorsys.hsv_to_rgb(h, s, v / 2)
    return (round(r * 255), round(g * 255), round(b * 255))


def _round_half_away(x: float) -> int:
    return math.floor(x + 0.5) if x >= 0 else math.ceil(x - 0.5)


@dataclass(frozen=True)
class LedGeometry:
    """Everything needed to paint the LED in a given area."""

    center: tuple[int, int]
    glow_radius: float
    border_radius: float
    inner_radius: float
    shine_radius: float
    border_color: RGB
    fill_color: RGB
    glow: bool
    glow_stop: float
    shine_alpha: int
    shine_focal: tuple[int, int]


class Led:
    """An on/off indicator with a configurable color."""

    def __init__(self, color: RGB = DEFAULT_COLOR, on: bool = True) -> None:
        self._color = _validate_color(color)
        self._on = bool(on)
        self.color_changed = Signal()
        self.on_changed = Signal()

    @property
    def color(self) -> RGB:
        """The lit color of the LED."""
        return self._color

    @color.setter
    def color(self, value: RGB) -> None:
        value = _validate_color(value)
        if value == self._color:
            return
        self._color = value
        self.color_changed.emit(value)

    @property
    def on(self) -> bool:
        """Whether the LED is lit."""
        return self._on

    @on.setter
    def on(self, value: bool) -> None:
        value = bool(value)
        if value == self._on:
            return
        self._on = value
        self.on_changed.emit(value)

    def turn_on(self) -> None:
        self.on = True

    def turn_off(self) -> None:
        self.on = False

    def toggle(self) -> None:
        self.on = not self._on

    def size_hint(self) -> tuple[int, int]:
        return SIZE_HINT

    def minimum_size_hint(self) -> tuple[int, int]:
        return MINIMUM_SIZE_HINT

    def geometry(self, width: int, height: int) -> LedGeometry:
        """Compute the painting geometry for a ``width`` x ``height`` area."""
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        r = min(width, height) // 2
        glow_offset = max(2.0, r / 5)
        border_offset = max(1.0, r / 10)
        shine_offset = max(1.0, r / 20)
        center = (width // 2, height // 2)

        glow_radius = float(r)
        border_radius = glow_radius - glow_offset
        inner_radius = border_radius - border_offset
        shine_radius = inner_radius - shine_offset

        half = _round_half_away(shine_radius / 2)
        return LedGeometry(
            center=center,
            glow_radius=glow_radius,
            border_radius=border_radius,
            inner_radius=inner_radius,
            shine_radius=shine_radius,
            border_color=BORDER_COLOR,
            fill_color=self._color if self._on else _darker(self._color),
            glow=self._on,
            glow_stop=(r - glow_offset) / r if r else 0.0,
            shine_alpha=SHINE_ALPHA_ON if self._on else SHINE_ALPHA_OFF,
            shine_focal=(center[0] - half, center[1] - half),
        )
"""Plot scaling, width and sample count settings of the plot panel."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable

from signalacq import settings as keys
from signalacq.settings import Settings
from signalacq.signals import Signal

NUMSAMPLES_CONFIRM_AT = 1000000
"""Confirmation is asked before the number of samples exceeds this."""

X_DECIMALS = 3
"""Number of decimals kept for the x axis limits."""

X_STEP = 10 ** -X_DECIMALS
"""Smallest gap kept between the x axis minimum and maximum."""

DEFAULT_NUM_OF_SAMPLES = 1000
DEFAULT_PLOT_WIDTH = 1000
DEFAULT_X_MIN = 0.0
DEFAULT_X_MAX = 1000.0
DEFAULT_Y_MIN = 0.0
DEFAULT_Y_MAX = 1000.0
DEFAULT_LINE_THICKNESS = 1

AUTO_SCALE_Y_MIN = 0.0
AUTO_SCALE_Y_MAX = 1.0
INDEX_X_MIN = 0.0
INDEX_X_MAX = 1.0

ConfirmCallback = Callable[[int], bool]


@dataclass(frozen=True)
class ScaleRange:
    """A named preset for the y axis limits."""

    label: str
    rmin: float
    rmax: float


def range_presets() -> list[ScaleRange]:
    """Return the y axis range presets offered to the user, in display order."""
    presets: list[ScaleRange] = []
    for nbits in range(8, 25):
        rmax = 2 ** (nbits - 1) - 1
        rmin = -rmax - 1
        presets.append(
            ScaleRange(f"Signed {nbits} bits {rmin} to +{rmax}", float(rmin), float(rmax))
        )
    for nbits in range(8, 25):
        rmax = 2**nbits - 1
        presets.append(ScaleRange(f"Unsigned {nbits} bits 0 to +{rmax}", 0.0, float(rmax)))
    presets.extend(
        [
            ScaleRange("-1 to +1", -1.0, 1.0),
            ScaleRange("0 to +1", 0.0, 1.0),
            ScaleRange("-100 to +100", -100.0, 100.0),
            ScaleRange("0 to +100", 0.0, 100.0),
        ]
    )
    return presets


def _to_bool(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() not in ("", "0", "false")
    return bool(value)


def _to_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


def _to_float(value: Any, fallback: float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return fallback


class PlotControlPanel:
    """Holds the plot configuration and announces its changes.

    ``confirm`` is asked, with the requested value, before the number of
    samples is set above ``NUMSAMPLES_CONFIRM_AT``; a false answer keeps
    the previous value. Without a callback the change is accepted.
    """

    def __init__(self, confirm: ConfirmCallback | None = None) -> None:
        self.num_of_samples_changed = Signal()
        self.y_scale_changed = Signal()
        self.x_scale_changed = Signal()
        self.plot_width_changed = Signal()
        self.line_thickness_changed = Signal()

        self.confirm = confirm
        self.warn_num_of_samples = True

        self._num_of_samples = DEFAULT_NUM_OF_SAMPLES
        self._plot_width_samples = DEFAULT_PLOT_WIDTH
        self._auto_scale = True
        self._y_min = DEFAULT_Y_MIN
        self._y_max = DEFAULT_Y_MAX
        self._x_axis_as_index = True
        self._x_min = DEFAULT_X_MIN
        self._x_max = DEFAULT_X_MAX
        self._line_thickness = DEFAULT_LINE_THICKNESS

    # number of samples

    @property
    def num_of_samples(self) -> int:
        """Number of samples shown in the plot."""
        return self._num_of_samples

    @num_of_samples.setter
    def num_of_samples(self, value: int) -> None:
        value = max(int(value), 1)
        if value == self._num_of_samples:
            return
        if (
            self.warn_num_of_samples
            and value > NUMSAMPLES_CONFIRM_AT
            and self.confirm is not None
            and not self.confirm(value)
        ):
            return
        self._num_of_samples = value
        self.num_of_samples_changed.emit(value)

    # y axis

    @property
    def auto_scale(self) -> bool:
        """Whether the y axis scales itself to the data."""
        return self._auto_scale

    @auto_scale.setter
    def auto_scale(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._auto_scale:
            return
        self._auto_scale = enabled
        if enabled:
            self.y_scale_changed.emit(True, AUTO_SCALE_Y_MIN, AUTO_SCALE_Y_MAX)
        else:
            self.y_scale_changed.emit(False, self._y_min, self._y_max)

    @property
    def y_min(self) -> float:
        return self._y_min

    @y_min.setter
    def y_min(self, value: float) -> None:
        value = float(value)
        if value == self._y_min:
            return
        self._y_min = value
        self._on_y_scale_changed()

    @property
    def y_max(self) -> float:
        return self._y_max

    @y_max.setter
    def y_max(self, value: float) -> None:
        value = float(value)
        if value == self._y_max:
            return
        self._y_max = value
        self._on_y_scale_changed()

    def _on_y_scale_changed(self) -> None:
        if not self._auto_scale:
            self.y_scale_changed.emit(False, self._y_min, self._y_max)

    def select_range(self, index: int) -> ScaleRange:
        """Apply the range preset at ``index`` and turn auto scaling off."""
        preset = range_presets()[index]
        self.y_min = preset.rmin
        self.y_max = preset.rmax
        self.auto_scale = False
        return preset

    # x axis

    @property
    def x_axis_as_index(self) -> bool:
        """Whether the x axis shows sample indexes instead of a custom range."""
        return self._x_axis_as_index

    @x_axis_as_index.setter
    def x_axis_as_index(self, enabled: bool) -> None:
        enabled = bool(enabled)
        if enabled == self._x_axis_as_index:
            return
        self._x_axis_as_index = enabled
        if enabled:
            self.x_scale_changed.emit(True, INDEX_X_MIN, INDEX_X_MAX)
        else:
            self.x_scale_changed.emit(False, self._x_min, self._x_max)
        self.plot_width_changed.emit(self.plot_width)

    @property
    def x_min(self) -> float:
        return self._x_min

    @x_min.setter
    def x_min(self, value: float) -> None:
        value = round(min(float(value), self._x_max - X_STEP), X_DECIMALS)
        if value == self._x_min:
            return
        self._x_min = value
        self._on_x_scale_changed()

    @property
    def x_max(self) -> float:
        return self._x_max

    @x_max.setter
    def x_max(self, value: float) -> None:
        value = round(max(float(value), self._x_min + X_STEP), X_DECIMALS)
        if value == self._x_max:
            return
        self._x_max = value
        self._on_x_scale_changed()

    def _on_x_scale_changed(self) -> None:
        if not self._x_axis_as_index:
            self.x_scale_changed.emit(False, self._x_min, self._x_max)
            self.plot_width_changed.emit(self.plot_width)

    # width and line

    @property
    def plot_width_samples(self) -> int:
        """Plot width as entered, in samples."""
        return self._plot_width_samples

    @plot_width_samples.setter
    def plot_width_samples(self, value: int) -> None:
        value = max(int(value), 1)
        if value == self._plot_width_samples:
            return
        self._plot_width_samples = value
        self.plot_width_changed.emit(self.plot_width)

    @property
    def plot_width(self) -> float:
        """Plot width adjusted for the x axis scaling."""
        value = float(self._plot_width_samples)
        if not self._x_axis_as_index:
            value *= (self._x_max - self._x_min) / self._num_of_samples
        return value

    @property
    def line_thickness(self) -> int:
        return self._line_thickness

    @line_thickness.setter
    def line_thickness(self, value: int) -> None:
        value = max(int(value), 1)
        if value == self._line_thickness:
            return
        self._line_thickness = value
        self.line_thickness_changed.emit(value)

    # persistence

    def save_settings(self, settings: Settings) -> None:
        """Store the plot settings into ``settings``."""
        with settings.group(keys.GROUP_PLOT):
            settings.set_value(keys.PLOT_NUM_OF_SAMPLES, self.num_of_samples)
            settings.set_value(keys.PLOT_PLOT_WIDTH, self.plot_width_samples)
            settings.set_value(keys.PLOT_INDEX_AS_X, self.x_axis_as_index)
            settings.set_value(keys.PLOT_X_MAX, self.x_max)
            settings.set_value(keys.PLOT_X_MIN, self.x_min)
            settings.set_value(keys.PLOT_AUTO_SCALE, self.auto_scale)
            settings.set_value(keys.PLOT_Y_MAX, self.y_max)
            settings.set_value(keys.PLOT_Y_MIN, self.y_min)
            settings.set_value(keys.PLOT_LINE_THICKNESS, self.line_thickness)

    def load_settings(self, settings: Settings) -> None:
        """Load the plot settings from ``settings``; missing keys keep their value."""
        with settings.group(keys.GROUP_PLOT):
            self.num_of_samples = _to_int(
                settings.value(keys.PLOT_NUM_OF_SAMPLES, self.num_of_samples),
                self.num_of_samples,
            )
            self.plot_width_samples = _to_int(
                settings.value(keys.PLOT_PLOT_WIDTH, self.plot_width_samples),
                self.plot_width_samples,
            )
            self.x_axis_as_index = _to_bool(
                settings.value(keys.PLOT_INDEX_AS_X, self.x_axis_as_index)
            )
            self.x_max = _to_float(settings.value(keys.PLOT_X_MAX, self.x_max), self.x_max)
            self.x_min = _to_float(settings.value(keys.PLOT_X_MIN, self.x_min), self.x_min)
            self.auto_scale = _to_bool(settings.value(keys.PLOT_AUTO_SCALE, self.auto_scale))
            self.y_max = _to_float(settings.value(keys.PLOT_Y_MAX, self.y_max), self.y_max)
            self.y_min = _to_float(settings.value(keys.PLOT_Y_MIN, self.y_min), self.y_min)
            self.line_thickness = _to_int(
                settings.value(keys.PLOT_LINE_THICKNESS, self.line_thickness),
                self.line_thickness,
            )
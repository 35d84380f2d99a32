"""Serial port selection and line settings of the port panel."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, IntEnum, IntFlag
from typing import Any, Iterable

from signalacq import settings as keys
from signalacq.device_model import SerialPortInfo
from signalacq.led import Led
from signalacq.settings import Settings
from signalacq.signals import Signal

log = logging.getLogger(__name__)

STANDARD_BAUD_RATES = (
    110, 300, 600, 1200, 2400, 4800, 9600, 14400, 19200,
    38400, 57600, 115200, 128000, 256000,
)
DEFAULT_BAUD_RATE = "9600"

PLACEHOLDER_NO_PORTS = "No port found - enter name"
PLACEHOLDER_SELECT = "Select port or enter name"

PIN_LED_COLOR = (255, 255, 0)


class Parity(IntEnum):
    """Parity checking mode."""

    NONE = 0
    EVEN = 2
    ODD = 3


class DataBits(IntEnum):
    """Number of data bits in a character."""

    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8


class StopBits(IntEnum):
    """Number of stop bits after a character."""

    ONE = 1
    TWO = 2


class FlowControl(IntEnum):
    """Flow control mode."""

    NONE = 0
    HARDWARE = 1
    SOFTWARE = 2


class PinoutSignal(IntFlag):
    """State of the serial line's pinout signals."""

    NO_SIGNAL = 0
    TRANSMITTED_DATA = 0x01
    RECEIVED_DATA = 0x02
    DATA_TERMINAL_READY = 0x04
    DATA_CARRIER_DETECT = 0x08
    DATA_SET_READY = 0x10
    RING_INDICATOR = 0x20
    REQUEST_TO_SEND = 0x40
    CLEAR_TO_SEND = 0x80


class _TextOption(Enum):
    pass


_PARITY_TEXT = {Parity.NONE: "none", Parity.ODD: "odd", Parity.EVEN: "even"}
_PARITY_FROM_TEXT = {text: parity for parity, text in _PARITY_TEXT.items()}

_FLOW_CONTROL_TEXT = {
    FlowControl.HARDWARE: "hardware",
    FlowControl.SOFTWARE: "software",
    FlowControl.NONE: "none",
}


@dataclass(frozen=True)
class PortRequest:
    """Everything needed to open or close a port."""

    port_name: str
    baud_rate: int
    parity: Parity
    data_bits: DataBits
    stop_bits: StopBits
    flow_control: FlowControl
    dtr: bool
    rts: bool


def _display_text(info: SerialPortInfo) -> str:
    if info.description:
        return f"{info.port_name} {info.description}"
    return info.port_name


def _to_int(value: Any, fallback: int) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        return fallback


class PortControl:
    """Port list, selected port and line settings, with pin indicators."""

    def __init__(self) -> None:
        self.toggle_port_requested = Signal()
        self.baud_rate_changed = Signal()
        self.parity_changed = Signal()
        self.data_bits_changed = Signal()
        self.stop_bits_changed = Signal()
        self.flow_control_changed = Signal()
        self.dtr_changed = Signal()
        self.rts_changed = Signal()

        self._ports: list[SerialPortInfo] = []
        self._current: int | None = None
        self.port_text = ""
        self.placeholder_text = PLACEHOLDER_NO_PORTS

        self.baud_rates: list[str] = [str(b) for b in STANDARD_BAUD_RATES]
        self._baud_rate = DEFAULT_BAUD_RATE
        self._parity = Parity.NONE
        self._data_bits = DataBits.EIGHT
        self._stop_bits = StopBits.ONE
        self._flow_control = FlowControl.NONE

        self.is_open = False
        self.reload_enabled = True
        self.port_list_enabled = True
        self._max_bit_rate = 0

        self.dtr_led = Led(on=True)
        self.rts_led = Led(on=True)
        self.dcd_led = Led(PIN_LED_COLOR)
        self.dsr_led = Led(PIN_LED_COLOR)
        self.ri_led = Led(PIN_LED_COLOR)
        self.cts_led = Led(PIN_LED_COLOR)

    # port list

    @property
    def ports(self) -> list[SerialPortInfo]:
        """The listed ports, in display order."""
        return list(self._ports)

    @property
    def current_index(self) -> int | None:
        """Index of the selected list entry, if any."""
        return self._current

    def _index_of(self, text: str) -> int:
        for i, info in enumerate(self._ports):
            if _display_text(info) == text:
                return i
        return -1

    def _index_of_name(self, name: str) -> int:
        for i, info in enumerate(self._ports):
            if info.port_name == name:
                return i
        return -1

    def _set_current(self, index: int | None) -> None:
        self._current = index
        self.port_text = "" if index is None else _display_text(self._ports[index])

    def load_port_list(self, ports: Iterable[SerialPortInfo | str]) -> None:
        """Replace the port list, keeping the selected port if still present."""
        previous = (
            self._ports[self._current].port_name if self._current is not None else ""
        )
        self._ports = [
            p if isinstance(p, SerialPortInfo) else SerialPortInfo(str(p)) for p in ports
        ]
        index = self._index_of_name(previous) if previous else -1
        if index >= 0:
            self._set_current(index)
        elif self._ports:
            self._set_current(0)
        else:
            self._set_current(None)
        self.placeholder_text = PLACEHOLDER_SELECT if self._ports else PLACEHOLDER_NO_PORTS

    def select_port(self, port_name: str) -> None:
        """Select ``port_name``, adding it to the list if it is not there."""
        index = self._index_of_name(port_name)
        if index < 0:
            self._ports.append(SerialPortInfo(port_name))
            index = len(self._ports) - 1
        self._set_current(index)

    def selected_port_name(self) -> str:
        """The port name currently selected or entered."""
        index = self._index_of(self.port_text)
        if index < 0:
            return self.port_text
        return self._ports[index].port_name

    # line settings

    @property
    def baud_rate(self) -> str:
        """The baud rate text as shown in the selector."""
        return self._baud_rate

    @baud_rate.setter
    def baud_rate(self, value: str) -> None:
        value = str(value)
        if value == self._baud_rate:
            return
        self._baud_rate = value
        self.baud_rate_changed.emit(value)

    def select_baudrate(self, baud_rate: str) -> None:
        """Show ``baud_rate`` in the selector and announce it."""
        self._baud_rate = str(baud_rate)
        self.baud_rate_changed.emit(self._baud_rate)

    @property
    def parity(self) -> Parity:
        return self._parity

    @parity.setter
    def parity(self, value: Parity) -> None:
        self._parity = Parity(value)
        self.parity_changed.emit(self._parity)

    @property
    def data_bits(self) -> DataBits:
        return self._data_bits

    @data_bits.setter
    def data_bits(self, value: DataBits) -> None:
        self._data_bits = DataBits(value)
        self.data_bits_changed.emit(self._data_bits)

    @property
    def stop_bits(self) -> StopBits:
        return self._stop_bits

    @stop_bits.setter
    def stop_bits(self, value: StopBits) -> None:
        self._stop_bits = StopBits(value)
        self.stop_bits_changed.emit(self._stop_bits)

    @property
    def flow_control(self) -> FlowControl:
        return self._flow_control

    @flow_control.setter
    def flow_control(self, value: FlowControl) -> None:
        self._flow_control = FlowControl(value)
        self.flow_control_changed.emit(self._flow_control)

    def current_parity_text(self) -> str:
        """Parity as stored in settings."""
        return _PARITY_TEXT[self._parity]

    def current_flow_control_text(self) -> str:
        """Flow control as stored in settings."""
        return _FLOW_CONTROL_TEXT[self._flow_control]

    # opening

    def toggle_port(self) -> PortRequest:
        """Request the selected port to be opened or closed.

        An entered name not yet in the list is added and selected.
        Raises ``ValueError`` if no port name is selected or entered.
        """
        port_text = self.port_text.strip()
        if not port_text:
            raise ValueError("Select or enter a port name!")
        if self._index_of(port_text) < 0:
            self._ports.append(SerialPortInfo(port_text))
            self._set_current(len(self._ports) - 1)
        port_name = (
            self._ports[self._current].port_name
            if self._current is not None
            else port_text
        )
        request = PortRequest(
            port_name=port_name,
            baud_rate=_to_int(self._baud_rate, 0),
            parity=self._parity,
            data_bits=self._data_bits,
            stop_bits=self._stop_bits,
            flow_control=self._flow_control,
            dtr=self.dtr_led.on,
            rts=self.rts_led.on,
        )
        self.toggle_port_requested.emit(request)
        return request

    def open_port(self) -> PortRequest:
        """Trigger the open action."""
        return self.toggle_port()

    def port_toggled(self, opened: bool) -> None:
        """Reflect the port's open state; the list is locked while open."""
        self.is_open = bool(opened)
        self.reload_enabled = not self.is_open
        self.port_list_enabled = not self.is_open

    # output and input pins

    def toggle_dtr(self) -> bool:
        """Toggle the DTR output and return its new state."""
        self.dtr_led.toggle()
        self.dtr_changed.emit(self.dtr_led.on)
        return self.dtr_led.on

    def toggle_rts(self) -> bool:
        """Toggle the RTS output and return its new state."""
        self.rts_led.toggle()
        self.rts_changed.emit(self.rts_led.on)
        return self.rts_led.on

    def update_pin_leds(self, pinout: PinoutSignal | int) -> None:
        """Show the state of the input pins."""
        pinout = PinoutSignal(pinout)
        self.dcd_led.on = bool(pinout & PinoutSignal.DATA_CARRIER_DETECT)
        self.dsr_led.on = bool(pinout & PinoutSignal.DATA_SET_READY)
        self.ri_led.on = bool(pinout & PinoutSignal.RING_INDICATOR)
        self.cts_led.on = bool(pinout & PinoutSignal.CLEAR_TO_SEND)

    @property
    def max_bit_rate(self) -> int:
        """Maximum bit rate for the current line settings."""
        return self._max_bit_rate

    @max_bit_rate.setter
    def max_bit_rate(self, value: int) -> None:
        if value < 0:
            raise ValueError("bit rate must not be negative")
        self._max_bit_rate = int(value)

    # persistence

    def save_settings(self, settings: Settings) -> None:
        """Store the port settings into ``settings``."""
        with settings.group(keys.GROUP_PORT):
            settings.set_value(keys.PORT_SELECTED_PORT, self.selected_port_name())
            settings.set_value(keys.PORT_BAUD_RATE, self._baud_rate)
            settings.set_value(keys.PORT_PARITY, self.current_parity_text())
            settings.set_value(keys.PORT_DATA_BITS, int(self._data_bits))
            settings.set_value(keys.PORT_STOP_BITS, int(self._stop_bits))
            settings.set_value(keys.PORT_FLOW_CONTROL, self.current_flow_control_text())

    def load_settings(self, settings: Settings) -> None:
        """Load the port settings from ``settings``; invalid values are ignored."""
        with settings.group(keys.GROUP_PORT):
            port_name = str(settings.value(keys.PORT_SELECTED_PORT, "") or "")
            if port_name:
                index = self._index_of_name(port_name)
                if index > -1:
                    self._set_current(index)

            baud_text = str(settings.value(keys.PORT_BAUD_RATE, self._baud_rate))
            if baud_text in self.baud_rates:
                self.baud_rate = baud_text
            else:
                rate = _to_int(baud_text, 0) if baud_text.isdigit() else 0
                if rate > 0:
                    self.baud_rates.insert(0, baud_text)
                    self.baud_rate = baud_text
                else:
                    log.error("Invalid baud setting: %s", baud_text)

            parity_text = str(settings.value(keys.PORT_PARITY, self.current_parity_text()))
            self._parity = _PARITY_FROM_TEXT.get(parity_text, self._parity)

            data_bits = _to_int(
                settings.value(keys.PORT_DATA_BITS, int(self._data_bits)),
                int(self._data_bits),
            )
            if 5 <= data_bits <= 8:
                self._data_bits = DataBits(data_bits)

            stop_bits = _to_int(
                settings.value(keys.PORT_STOP_BITS, int(self._stop_bits)),
                int(self._stop_bits),
            )
            if stop_bits in (StopBits.ONE, StopBits.TWO):
                self._stop_bits = StopBits(stop_bits)

            flow_text = str(
                settings.value(keys.PORT_FLOW_CONTROL, self.current_flow_control_text())
            )
            if flow_text == "hardware":
                self._flow_control = FlowControl.HARDWARE
            elif flow_text == "software":
                self._flow_control = FlowControl.SOFTWARE
            else:
                self._flow_control = FlowControl.NONE
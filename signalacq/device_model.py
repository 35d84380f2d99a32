"""List models of discovered Bluetooth devices, characteristics and serial ports."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any
from uuid import UUID

from signalacq.signals import Signal


class Role(Enum):
    """Kinds of data a model row can provide."""

    DISPLAY = "display"
    USER = "user"


@dataclass(frozen=True)
class BluetoothDeviceInfo:
    """Description of a discovered Bluetooth device."""

    name: str
    address: str = ""


@dataclass(frozen=True)
class SerialPortInfo:
    """Description of an available serial port."""

    port_name: str
    description: str = ""


@dataclass(frozen=True)
class CharacteristicDetails:
    """A GATT characteristic together with its owning service."""

    service_uuid: UUID
    characteristic_uuid: UUID
    properties: int


def _uuid_text(value: UUID) -> str:
    return "{" + str(value) + "}"


class BluetoothDeviceModel:
    """Ordered list of Bluetooth devices displayed by name."""

    def __init__(self) -> None:
        self._devices: list[BluetoothDeviceInfo] = []
        self.rows_inserted = Signal()

    def add_device(self, device_info: BluetoothDeviceInfo) -> None:
        """Append a device as a new row."""
        self._devices.append(device_info)
        self.rows_inserted.emit(len(self._devices) - 1)

    def device_info(self, row: int) -> BluetoothDeviceInfo:
        """Return the device stored at ``row``."""
        return self._devices[row]

    def display_name(self, row: int) -> str:
        """Return the text shown for ``row``."""
        return self._devices[row].name

    def __len__(self) -> int:
        return len(self._devices)


class BluetoothCharModel:
    """List of unique (service, characteristic) pairs."""

    def __init__(self) -> None:
        self._characteristics: list[CharacteristicDetails] = []
        self.rows_inserted = Signal()
        self.model_reset = Signal()

    def add_characteristic(
        self, service_uuid: UUID, characteristic_uuid: UUID, properties: int
    ) -> bool:
        """Append a characteristic unless the same pair is already present.

        Returns whether a row was added.
        """
        for details in self._characteristics:
            if (
                details.service_uuid == service_uuid
                and details.characteristic_uuid == characteristic_uuid
            ):
                return False
        self._characteristics.append(
            CharacteristicDetails(service_uuid, characteristic_uuid, properties)
        )
        self.rows_inserted.emit(len(self._characteristics) - 1)
        return True

    def clear_all(self) -> None:
        """Remove every characteristic except the first one."""
        if self._characteristics:
            del self._characteristics[1:]
            self.model_reset.emit()

    def data(self, row: int, role: Role = Role.DISPLAY) -> Any:
        """Return the display text or the details for ``row``, else None."""
        if row < 0 or row >= len(self._characteristics):
            return None
        details = self._characteristics[row]
        if role is Role.DISPLAY:
            return _uuid_text(details.characteristic_uuid)
        if role is Role.USER:
            return details
        return None

    def __len__(self) -> int:
        return len(self._characteristics)


class SerialPortModel:
    """Ordered list of serial ports displayed as ``name-description``."""

    def __init__(self) -> None:
        self._ports: list[SerialPortInfo] = []
        self.rows_inserted = Signal()

    def add_serial_port(self, port_info: SerialPortInfo) -> None:
        """Append a port as a new row."""
        self._ports.append(port_info)
        self.rows_inserted.emit(len(self._ports) - 1)

    def serial_port_info(self, row: int) -> SerialPortInfo:
        """Return the port stored at ``row``."""
        return self._ports[row]

    def display_name(self, row: int) -> str:
        """Return the text shown for ``row``."""
        info = self._ports[row]
        return f"{info.port_name}-{info.description}"

    def __len__(self) -> int:
        return len(self._ports)
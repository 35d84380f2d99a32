from uuid import UUID

import pytest

from signalacq.device_model import (
    BluetoothCharModel,
    BluetoothDeviceInfo,
    BluetoothDeviceModel,
    CharacteristicDetails,
    Role,
    SerialPortInfo,
    SerialPortModel,
)

SERVICE = UUID("0000180d-0000-1000-8000-00805f9b34fb")
CHAR_A = UUID("00002a37-0000-1000-8000-00805f9b34fb")
CHAR_B = UUID("00002a38-0000-1000-8000-00805f9b34fb")


def test_device_model_stores_and_displays_devices():
    model = BluetoothDeviceModel()
    inserted = []
    model.rows_inserted.connect(inserted.append)
    info = BluetoothDeviceInfo("Sensor", "00:00:00:00:00:01")
    model.add_device(info)
    assert len(model) == 1
    assert model.device_info(0) == info
    assert model.display_name(0) == "Sensor"
    assert inserted == [0]


def test_device_model_bad_row_raises():
    with pytest.raises(IndexError):
        BluetoothDeviceModel().device_info(0)


def test_char_model_rejects_duplicates():
    model = BluetoothCharModel()
    assert model.add_characteristic(SERVICE, CHAR_A, 0x10) is True
    assert model.add_characteristic(SERVICE, CHAR_A, 0x02) is False
    assert model.add_characteristic(SERVICE, CHAR_B, 0x10) is True
    assert len(model) == 2


def test_char_model_data_roles():
    model = BluetoothCharModel()
    model.add_characteristic(SERVICE, CHAR_A, 0x12)
    assert model.data(0, Role.DISPLAY) == "{" + str(CHAR_A) + "}"
    assert model.data(0, Role.USER) == CharacteristicDetails(SERVICE, CHAR_A, 0x12)
    assert model.data(1, Role.DISPLAY) is None
    assert model.data(-1, Role.USER) is None


def test_char_model_clear_keeps_first_entry():
    model = BluetoothCharModel()
    resets = []
    model.model_reset.connect(lambda: resets.append(True))
    model.add_characteristic(SERVICE, CHAR_A, 0)
    model.add_characteristic(SERVICE, CHAR_B, 0)
    model.clear_all()
    assert len(model) == 1
    assert model.data(0, Role.USER).characteristic_uuid == CHAR_A
    assert resets == [True]


def test_char_model_clear_on_empty_does_not_reset():
    model = BluetoothCharModel()
    resets = []
    model.model_reset.connect(lambda: resets.append(True))
    model.clear_all()
    assert resets == []
    assert len(model) == 0


def test_serial_port_model_display_joins_name_and_description():
    model = SerialPortModel()
    info = SerialPortInfo("COM3", "USB Serial")
    model.add_serial_port(info)
    assert model.display_name(0) == "COM3-USB Serial"
    assert model.serial_port_info(0) == info
    assert len(model) == 1
import pytest

from signalacq import settings as keys
from signalacq.device_model import SerialPortInfo
from signalacq.port_control import (
    DEFAULT_BAUD_RATE,
    PLACEHOLDER_NO_PORTS,
    PLACEHOLDER_SELECT,
    DataBits,
    FlowControl,
    Parity,
    PinoutSignal,
    PortControl,
    PortRequest,
    StopBits,
)
from signalacq.settings import Settings


@pytest.fixture
def control():
    pc = PortControl()
    pc.load_port_list([SerialPortInfo("ttyUSB0", "Adapter"), SerialPortInfo("ttyS1")])
    return pc


def test_defaults():
    pc = PortControl()
    assert pc.baud_rate == DEFAULT_BAUD_RATE == "9600"
    assert pc.current_parity_text() == "none"
    assert pc.current_flow_control_text() == "none"
    assert pc.placeholder_text == PLACEHOLDER_NO_PORTS


def test_load_port_list_sets_placeholder(control):
    assert control.placeholder_text == PLACEHOLDER_SELECT
    assert len(control.ports) == 2


def test_load_port_list_keeps_selection(control):
    control.select_port("ttyS1")
    control.load_port_list(["ttyACM0", "ttyS1"])
    assert control.selected_port_name() == "ttyS1"
    assert control.current_index == 1


def test_select_port_adds_unknown(control):
    control.select_port("ttyXYZ")
    assert control.ports[-1].port_name == "ttyXYZ"
    assert control.selected_port_name() == "ttyXYZ"


def test_selected_port_name_from_display_text(control):
    control.select_port("ttyUSB0")
    assert control.port_text != "ttyUSB0"
    assert control.selected_port_name() == "ttyUSB0"


def test_selected_port_name_entered_text(control):
    control.port_text = "customport"
    assert control.selected_port_name() == "customport"


def test_toggle_port_emits_request(control):
    received = []
    control.toggle_port_requested.connect(received.append)
    control.select_port("ttyUSB0")
    control.parity = Parity.EVEN
    request = control.toggle_port()
    assert received == [request]
    assert request == PortRequest(
        "ttyUSB0", 9600, Parity.EVEN, DataBits.EIGHT, StopBits.ONE,
        FlowControl.NONE, True, True,
    )


def test_toggle_port_adds_entered_name(control):
    control.port_text = "  newport  "
    request = control.open_port()
    assert request.port_name == "newport"
    assert control.ports[-1].port_name == "newport"


def test_toggle_port_empty_raises():
    pc = PortControl()
    with pytest.raises(ValueError):
        pc.toggle_port()


def test_port_toggled_locks_list(control):
    control.port_toggled(True)
    assert control.is_open and not control.reload_enabled and not control.port_list_enabled
    control.port_toggled(False)
    assert not control.is_open and control.reload_enabled and control.port_list_enabled


def test_toggle_dtr_rts(control):
    dtr, rts = [], []
    control.dtr_changed.connect(dtr.append)
    control.rts_changed.connect(rts.append)
    assert control.toggle_dtr() is False
    assert control.toggle_rts() is False
    assert control.toggle_dtr() is True
    assert dtr == [False, True]
    assert rts == [False]
    assert control.toggle_port().dtr is True


def test_update_pin_leds(control):
    control.update_pin_leds(PinoutSignal.DATA_CARRIER_DETECT | PinoutSignal.CLEAR_TO_SEND)
    assert control.dcd_led.on and control.cts_led.on
    assert not control.dsr_led.on and not control.ri_led.on


def test_select_baudrate_emits(control):
    seen = []
    control.baud_rate_changed.connect(seen.append)
    control.select_baudrate("115200")
    assert control.baud_rate == "115200"
    assert seen == ["115200"]


def test_max_bit_rate(control):
    control.max_bit_rate = 960
    assert control.max_bit_rate == 960
    with pytest.raises(ValueError):
        control.max_bit_rate = -1


def test_settings_round_trip(control):
    control.select_port("ttyS1")
    control.select_baudrate("57600")
    control.parity = Parity.ODD
    control.data_bits = DataBits.SEVEN
    control.stop_bits = StopBits.TWO
    control.flow_control = FlowControl.HARDWARE
    store = Settings()
    control.save_settings(store)

    other = PortControl()
    other.load_port_list(["ttyUSB0", "ttyS1"])
    other.load_settings(store)
    assert other.selected_port_name() == "ttyS1"
    assert other.baud_rate == "57600"
    assert other.parity is Parity.ODD
    assert other.data_bits is DataBits.SEVEN
    assert other.stop_bits is StopBits.TWO
    assert other.current_flow_control_text() == "hardware"


def test_saved_values(control):
    store = Settings()
    control.save_settings(store)
    with store.group(keys.GROUP_PORT):
        assert store.value(keys.PORT_PARITY) == "none"
        assert store.value(keys.PORT_BAUD_RATE) == "9600"
        assert store.value(keys.PORT_DATA_BITS) == int(control.data_bits)


def test_load_custom_baud_inserted():
    pc = PortControl()
    store = Settings({"Port/baudRate": "250000"})
    pc.load_settings(store)
    assert pc.baud_rates[0] == "250000"
    assert pc.baud_rate == "250000"


def test_load_invalid_values_ignored():
    pc = PortControl()
    store = Settings(
        {
            "Port/baudRate": "fast",
            "Port/parity": "bogus",
            "Port/dataBits": 12,
            "Port/stopBits": 7,
            "Port/flowControl": "software",
        }
    )
    pc.load_settings(store)
    assert pc.baud_rate == DEFAULT_BAUD_RATE
    assert "fast" not in pc.baud_rates
    assert pc.parity is Parity.NONE
    assert pc.data_bits is DataBits.EIGHT
    assert pc.stop_bits is StopBits.ONE
    assert pc.flow_control is FlowControl.SOFTWARE


def test_load_unknown_port_not_selected(control):
    control.select_port("ttyUSB0")
    control.load_settings(Settings({"Port/selectedPort": "missing"}))
    assert control.selected_port_name() == "ttyUSB0"
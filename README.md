# signalacq

State and settings logic for the panels of a signal acquisition front end
that reads data from serial ports or Bluetooth LE devices and plots it.
Nothing here depends on a GUI toolkit. Each panel is a plain object. You can
read and change its state and save it to a `Settings` store or restore it
from one. Changes are reported through small `Signal` objects.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Modules

- `signalacq.signals`: `Signal`, which has `connect`, `disconnect` and `emit`. Calling `disconnect` on a slot that was never connected raises `ValueError`.
- `signalacq.settings`: `Settings`, a flat key/value store whose keys are scoped by groups. Use `with settings.group(name):` to scope keys, then `value(key, default)`, `set_value(key, value)` and `contains(key)`. `to_dict()` returns a copy of every value, keyed by its full `Group/key` path. The module also holds the setting group and key names and `MAX_NUM_CHANNELS` (64).
- `signalacq.byteswap`: `byteswap_float` and `byteswap_double` reverse the byte order of a 32-bit or 64-bit IEEE float.
- `signalacq.framebuffer`: `Range` and the abstract buffer interfaces `FrameBuffer`, `ResizableBuffer`, `WFrameBuffer` and `XFrameBuffer`.
- `signalacq.device_model`: row lists of discovered devices. `BluetoothDeviceModel` lists Bluetooth devices. `BluetoothCharModel` holds unique service/characteristic pairs, and its `clear_all` keeps the first row. `SerialPortModel` lists serial ports and displays each one as `name-description`.
- `signalacq.led`: `Led`, an on/off indicator with an RGB colour. Its `geometry(width, height)` returns an `LedGeometry` with the radii, colours and shine position for painting.
- `signalacq.hidable_tabs`: `HidableTabs` tracks whether a panel area is collapsed to its tab bar. A double click on the bar hides the panels and a single click shows them again. For a short delay after each toggle, clicks are ignored.
- `signalacq.number_format`: the enums `NumberFormat` and `Endianness`, and `NumberFormatBox`, which holds one selected format.
- `signalacq.framed_reader_settings`: `FramedReaderSettings` and `SizeFieldType`, plus the helpers `normalize_sync_word`, `is_valid_sync_word_text` and `parse_sync_word`.
- `signalacq.plot_control`: `PlotControlPanel` covers sample count, y auto-scaling and limits, x axis as index or a custom range, plot width and line thickness. It can ask a `confirm` callback before setting a very large sample count. `range_presets()` lists the y range presets.
- `signalacq.port_control`: `PortControl` manages the port list and selection, baud rate, `Parity`, `DataBits`, `StopBits` and `FlowControl`. It also handles the DTR/RTS outputs and the input pin LEDs. `toggle_port()` returns a `PortRequest` and emits `toggle_port_requested` with it.
- `signalacq.record_panel`: `RecordPanel` resolves the file to record into. It expands `strftime` directives in the name, can increment the name automatically, and asks about overwriting through callbacks. The helpers are `increment_file_name` and `format_timestamp`.
- `signalacq.update_check`: `UpdateChecker` fetches a JSON release description from a URL you supply. The fetch runs on a worker thread or inline, and you can pass your own `fetch` function. It compares the release's `tag_name` with the current version. `UpdateCheckDialog` keeps the result text and the date of the last check. The helpers are `parse_version` and `evaluate_release`.

## Example

```python
from signalacq.settings import Settings
from signalacq.framed_reader_settings import FramedReaderSettings, parse_sync_word

print(parse_sync_word("AA BB"))   # b'\xaa\xbb'

frame = FramedReaderSettings()
frame.num_of_channels = 4
store = Settings()
frame.save_settings(store)

restored = FramedReaderSettings()
restored.load_settings(store)
assert restored.sync_word == frame.sync_word
assert restored.num_of_channels == 4
```

Each panel writes to its own settings group, so one `Settings` object can
hold the state of all of them.

## What this package does not do

- It has no windows or widgets and no command to start. It provides only the state behind the panels.
- It does not open serial ports or connect to Bluetooth devices. `PortControl` only emits a `PortRequest`, and the device models only list what you add to them.
- It does not decode incoming data, draw plots or write recordings. `RecordPanel` chooses the file name and options but writes nothing.
- `Settings` is kept in memory. To persist it, store the result of `to_dict()` yourself and pass that mapping back to `Settings(values)` to restore it.
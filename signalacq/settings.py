"""Setting groups, setting keys and a grouped key/value settings store."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterator, Mapping

MAX_NUM_CHANNELS = 64
"""Maximum number of channels that can be set by the user."""

# setting groups
GROUP_MAIN_WINDOW = "MainWindow"
GROUP_PORT = "Port"
GROUP_DATA_FORMAT = "DataFormat"
GROUP_BINARY = "DataFormat_Binary"
GROUP_ASCII = "DataFormat_ASCII"
GROUP_CUSTOM_FRAME = "DataFormat_CustomFrame"
GROUP_CHANNELS = "Channels"
GROUP_PLOT = "Plot"
GROUP_COMMANDS = "Commands"
GROUP_RECORD = "Record"
GROUP_TEXT_VIEW = "TextView"
GROUP_UPDATE_CHECK = "UpdateCheck"

# main window keys
MAIN_WINDOW_SIZE = "size"
MAIN_WINDOW_POS = "pos"
MAIN_WINDOW_SELECTED_DEVICE = "SelectedDevice"
MAIN_WINDOW_ACTIVE_PANEL = "activePanel"
MAIN_WINDOW_HIDE_PANELS = "hidePanels"
MAIN_WINDOW_MAXIMIZED = "maximized"
MAIN_WINDOW_STATE = "state"

# port keys
PORT_SELECTED_PORT = "selectedPort"
PORT_BAUD_RATE = "baudRate"
PORT_PARITY = "parity"
PORT_DATA_BITS = "dataBits"
PORT_STOP_BITS = "stopBits"
PORT_FLOW_CONTROL = "flowControl"

# data format panel keys
DATA_FORMAT_FORMAT = "format"

# binary stream reader keys
BINARY_NUM_OF_CHANNELS = "numOfChannels"
BINARY_NUMBER_FORMAT = "numberFormat"
BINARY_ENDIANNESS = "endianness"

# ascii reader keys
ASCII_NUM_OF_CHANNELS = "numOfChannels"
ASCII_DELIMITER = "delimiter"
ASCII_CUSTOM_DELIMITER = "customDelimiter"
ASCII_FILTER_MODE = "filterMode"
ASCII_FILTER_PREFIX = "filterPrefix"
ASCII_HEX = "hex"

# framed reader keys
CUSTOM_FRAME_NUM_OF_CHANNELS = "numOfChannels"
CUSTOM_FRAME_FRAME_START = "frameStart"
CUSTOM_FRAME_SIZE_FIELD_TYPE = "fixedSize"
CUSTOM_FRAME_FIXED_FRAME_SIZE = "frameSize"
CUSTOM_FRAME_NUMBER_FORMAT = "numberFormat"
CUSTOM_FRAME_ENDIANNESS = "endianness"
CUSTOM_FRAME_CHECKSUM = "checksum"
CUSTOM_FRAME_DEBUG_MODE = "debugMode"

# channel info keys
CHANNELS_CHANNEL = "channel"
CHANNELS_NAME = "name"
CHANNELS_COLOR = "color"
CHANNELS_VISIBLE = "visible"
CHANNELS_GAIN = "gain"
CHANNELS_GAIN_ENABLED = "gainEnabled"
CHANNELS_OFFSET = "offset"
CHANNELS_OFFSET_ENABLED = "offsetEnabled"

# plot keys
PLOT_NUM_OF_SAMPLES = "numOfSamples"
PLOT_PLOT_WIDTH = "plotWidth"
PLOT_INDEX_AS_X = "indexAsX"
PLOT_X_MAX = "xMax"
PLOT_X_MIN = "xMin"
PLOT_AUTO_SCALE = "autoScale"
PLOT_Y_MAX = "yMax"
PLOT_Y_MIN = "yMin"
PLOT_DARK_BACKGROUND = "darkBackground"
PLOT_GRID = "grid"
PLOT_MINOR_GRID = "minorGrid"
PLOT_LEGEND = "legend"
PLOT_LEGEND_POS = "legendPos"
PLOT_MULTI_PLOT = "multiPlot"
PLOT_SYMBOLS = "symbols"
PLOT_LINE_THICKNESS = "lineThickness"

# command keys
COMMANDS_COMMAND_SERIAL = "commandSerial"
COMMANDS_COMMAND_BLE = "commandBLE"
COMMANDS_NAME = "name"
COMMANDS_TYPE = "type"
COMMANDS_DATA = "data"
COMMANDS_SERVICE_UUID = "ServcUuid"
COMMANDS_CHAR_UUID = "CharUuid"
COMMANDS_CHAR_FLAGS = "CharFlags"

# record panel keys
RECORD_AUTO_INCREMENT = "autoIncrement"
RECORD_RECORD_PAUSED = "recordPaused"
RECORD_STOP_ON_CLOSE = "stopOnClose"
RECORD_HEADER = "header"
RECORD_SEPARATOR = "separator"
RECORD_DISABLE_BUFFERING = "disableBuffering"
RECORD_TIMESTAMP = "timestamp"
RECORD_TIMESTAMP_FORMAT = "timestampFormat"
RECORD_DECIMALS = "decimals"

# text view keys
TEXT_VIEW_NUM_LINES = "numLines"
TEXT_VIEW_DECIMALS = "decimals"

# update check keys
UPDATE_CHECK_PERIODIC = "periodicCheck"
UPDATE_CHECK_LAST_CHECK = "lastCheck"


class Settings:
    """Flat key/value store whose keys are scoped by nested groups.

    Keys inside a group are stored as ``"Group/key"``, nested groups
    joining with ``/``.
    """

    def __init__(self, values: Mapping[str, Any] | None = None) -> None:
        self._values: dict[str, Any] = dict(values or {})
        self._prefix: list[str] = []

    @contextmanager
    def group(self, name: str) -> Iterator["Settings"]:
        """Scope key access to ``name`` for the duration of the block."""
        name = name.strip("/")
        if not name:
            raise ValueError("group name must not be empty")
        self._prefix.append(name)
        try:
            yield self
        finally:
            self._prefix.pop()

    def _full_key(self, key: str) -> str:
        if not key:
            raise ValueError("key must not be empty")
        return "/".join([*self._prefix, key])

    def value(self, key: str, default: Any = None) -> Any:
        """Return the stored value for ``key`` or ``default`` if absent."""
        return self._values.get(self._full_key(key), default)

    def set_value(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key`` in the current group."""
        self._values[self._full_key(key)] = value

    def contains(self, key: str) -> bool:
        """Whether ``key`` exists in the current group."""
        return self._full_key(key) in self._values

    def to_dict(self) -> dict[str, Any]:
        """Return a copy of all stored values keyed by full path."""
        return dict(self._values)
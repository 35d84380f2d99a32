import pytest

from signalacq.number_format import Endianness, NumberFormat, NumberFormatBox


def test_all_formats_are_selectable():
    box = NumberFormatBox()
    for nf in NumberFormat:
        box.set_selection(nf)
        assert box.current_selection() is nf


def test_selection_by_value_string():
    box = NumberFormatBox()
    box.set_selection(NumberFormat.DOUBLE.value)
    assert box.current_selection() is NumberFormat.DOUBLE


def test_selection_changed_only_on_change():
    box = NumberFormatBox(NumberFormat.INT16)
    seen = []
    box.selection_changed.connect(seen.append)
    box.set_selection(NumberFormat.INT16)
    box.set_selection(NumberFormat.FLOAT)
    assert seen == [NumberFormat.FLOAT]


def test_invalid_selection_rejected():
    box = NumberFormatBox()
    with pytest.raises(ValueError):
        box.set_selection("int64")
    assert box.current_selection() is NumberFormat.UINT8


def test_endianness_values_match_setting_text():
    assert Endianness("little") is Endianness.LITTLE
    assert Endianness("big") is Endianness.BIG


def test_format_value_round_trip():
    for nf in NumberFormat:
        assert NumberFormat(nf.value) is nf
import pytest

from signalacq.plot_control import (
    NUMSAMPLES_CONFIRM_AT,
    X_STEP,
    PlotControlPanel,
    ScaleRange,
    range_presets,
)
from signalacq.settings import Settings


def _recorder(signal):
    calls = []
    signal.connect(lambda *args: calls.append(args))
    return calls


def test_range_presets_first_and_last():
    presets = range_presets()
    assert presets[0] == ScaleRange("Signed 8 bits -128 to +127", -128.0, 127.0)
    assert presets[-1] == ScaleRange("0 to +100", 0.0, 100.0)


def test_range_presets_cover_all_bit_widths():
    presets = range_presets()
    signed = [p for p in presets if p.label.startswith("Signed")]
    unsigned = [p for p in presets if p.label.startswith("Unsigned")]
    assert len(signed) == len(unsigned) == 17
    for nbits, preset in zip(range(8, 25), signed):
        assert preset.rmax - preset.rmin + 1 == 2**nbits
        assert preset.rmin == -(preset.rmax + 1)
    for nbits, preset in zip(range(8, 25), unsigned):
        assert preset.rmin == 0
        assert preset.rmax == 2**nbits - 1
        assert preset.label.endswith(f"+{int(preset.rmax)}")


def test_num_of_samples_below_threshold_needs_no_confirmation():
    asked = []
    panel = PlotControlPanel(confirm=lambda v: asked.append(v) or False)
    changes = _recorder(panel.num_of_samples_changed)
    panel.num_of_samples = 500
    assert panel.num_of_samples == 500
    assert changes == [(500,)]
    assert asked == []


def test_num_of_samples_rejected_keeps_old_value():
    panel = PlotControlPanel(confirm=lambda v: False)
    changes = _recorder(panel.num_of_samples_changed)
    old = panel.num_of_samples
    panel.num_of_samples = NUMSAMPLES_CONFIRM_AT + 1
    assert panel.num_of_samples == old
    assert changes == []


def test_num_of_samples_accepted_and_warning_disabled():
    asked = []
    panel = PlotControlPanel(confirm=lambda v: asked.append(v) or True)
    panel.num_of_samples = NUMSAMPLES_CONFIRM_AT + 1
    assert panel.num_of_samples == NUMSAMPLES_CONFIRM_AT + 1
    assert asked == [NUMSAMPLES_CONFIRM_AT + 1]

    panel.warn_num_of_samples = False
    panel.num_of_samples = NUMSAMPLES_CONFIRM_AT + 2
    assert asked == [NUMSAMPLES_CONFIRM_AT + 1]
    assert panel.num_of_samples == NUMSAMPLES_CONFIRM_AT + 2


def test_auto_scale_toggle_emits_scale():
    panel = PlotControlPanel()
    calls = _recorder(panel.y_scale_changed)
    panel.auto_scale = False
    panel.auto_scale = True
    assert calls == [(False, panel.y_min, panel.y_max), (True, 0.0, 1.0)]


def test_y_limits_emit_only_without_auto_scale():
    panel = PlotControlPanel()
    calls = _recorder(panel.y_scale_changed)
    panel.y_min = -5
    assert calls == []
    panel.auto_scale = False
    calls.clear()
    panel.y_max = 42
    assert calls == [(False, -5.0, 42.0)]


def test_select_range_applies_preset():
    panel = PlotControlPanel()
    preset = panel.select_range(-2)
    assert preset == range_presets()[-2]
    assert (panel.y_min, panel.y_max) == (preset.rmin, preset.rmax)
    assert panel.auto_scale is False


def test_select_range_invalid_index():
    panel = PlotControlPanel()
    with pytest.raises(IndexError):
        panel.select_range(len(range_presets()))


def test_x_limits_keep_a_gap():
    panel = PlotControlPanel()
    panel.x_min = panel.x_max + 10
    assert panel.x_min == pytest.approx(panel.x_max - X_STEP)
    panel.x_max = panel.x_min - 10
    assert panel.x_max == pytest.approx(panel.x_min + X_STEP)
    assert panel.x_max > panel.x_min


def test_plot_width_as_index_is_raw_value():
    panel = PlotControlPanel()
    panel.plot_width_samples = 250
    assert panel.x_axis_as_index is True
    assert panel.plot_width == 250.0


def test_plot_width_scaled_by_x_range():
    panel = PlotControlPanel()
    widths = _recorder(panel.plot_width_changed)
    xscales = _recorder(panel.x_scale_changed)
    panel.x_axis_as_index = False
    panel.x_max = 2000
    expected = panel.plot_width_samples * (panel.x_max - panel.x_min) / panel.num_of_samples
    assert panel.plot_width == pytest.approx(expected)
    assert widths[-1] == (pytest.approx(expected),)
    assert xscales[-1] == (False, panel.x_min, panel.x_max)


def test_x_limits_silent_in_index_mode():
    panel = PlotControlPanel()
    calls = _recorder(panel.x_scale_changed)
    panel.x_min = 3
    assert calls == []
    assert panel.x_min == 3.0


def test_line_thickness_emits():
    panel = PlotControlPanel()
    calls = _recorder(panel.line_thickness_changed)
    panel.line_thickness = 4
    panel.line_thickness = 4
    assert calls == [(4,)]
    assert panel.line_thickness == 4


def test_save_load_round_trip():
    source = PlotControlPanel()
    source.num_of_samples = 321
    source.plot_width_samples = 123
    source.x_axis_as_index = False
    source.x_max = 50
    source.x_min = -50
    source.auto_scale = False
    source.y_max = 7.5
    source.y_min = -2.5
    source.line_thickness = 3
    store = Settings()
    source.save_settings(store)
    assert store.to_dict()["Plot/numOfSamples"] == 321

    target = PlotControlPanel()
    target.load_settings(store)
    assert (target.num_of_samples, target.plot_width_samples) == (321, 123)
    assert target.x_axis_as_index is False
    assert (target.x_min, target.x_max) == (-50.0, 50.0)
    assert target.auto_scale is False
    assert (target.y_min, target.y_max) == (-2.5, 7.5)
    assert target.line_thickness == 3


def test_load_missing_keys_keeps_values():
    panel = PlotControlPanel()
    before = (panel.num_of_samples, panel.x_max, panel.auto_scale, panel.line_thickness)
    panel.load_settings(Settings())
    assert (panel.num_of_samples, panel.x_max, panel.auto_scale, panel.line_thickness) == before


def test_load_string_values():
    panel = PlotControlPanel()
    panel.load_settings(
        Settings({"Plot/autoScale": "false", "Plot/numOfSamples": "77", "Plot/yMax": "bad"})
    )
    assert panel.auto_scale is False
    assert panel.num_of_samples == 77
    assert panel.y_max == PlotControlPanel().y_max
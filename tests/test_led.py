import pytest

from signalacq.led import (
    BORDER_COLOR,
    DEFAULT_COLOR,
    SHINE_ALPHA_OFF,
    SHINE_ALPHA_ON,
    Led,
)


def test_default_state():
    led = Led()
    assert led.on is True
    assert led.color == (107, 223, 51)


def test_size_hints():
    led = Led()
    assert led.size_hint() == (20, 20)
    assert led.minimum_size_hint() == (10, 10)


def test_toggle_emits_on_changed():
    led = Led()
    seen = []
    led.on_changed.connect(seen.append)
    led.toggle()
    led.toggle()
    assert seen == [False, True]
    assert led.on is True


def test_turn_on_when_already_on_does_not_emit():
    led = Led()
    seen = []
    led.on_changed.connect(seen.append)
    led.turn_on()
    led.turn_off()
    led.turn_off()
    assert seen == [False]


def test_color_change_emits_only_on_change():
    led = Led()
    seen = []
    led.color_changed.connect(seen.append)
    led.color = DEFAULT_COLOR
    led.color = (255, 255, 0)
    assert seen == [(255, 255, 0)]
    assert led.color == (255, 255, 0)


def test_invalid_color_rejected():
    led = Led()
    seen = []
    led.color_changed.connect(seen.append)
    with pytest.raises(ValueError):
        led.color = (300, 0, 0)
    assert led.color == DEFAULT_COLOR
    assert seen == []


def test_geometry_radii_are_nested():
    g = Led().geometry(20, 20)
    assert g.center == (10, 10)
    assert g.glow_radius > g.border_radius > g.inner_radius > g.shine_radius
    assert g.border_radius == 8.0


def test_geometry_on_has_glow_and_full_color():
    led = Led()
    g = led.geometry(40, 30)
    assert g.glow is True
    assert g.fill_color == led.color
    assert g.shine_alpha == SHINE_ALPHA_ON
    assert g.border_color == BORDER_COLOR
    assert 0 < g.glow_stop < 1


def test_geometry_off_is_darker_without_glow():
    led = Led(on=False)
    g = led.geometry(20, 20)
    assert g.glow is False
    assert g.shine_alpha == SHINE_ALPHA_OFF
    assert all(d <= c for d, c in zip(g.fill_color, led.color))
    assert g.fill_color != led.color


def test_geometry_uses_smaller_dimension():
    led = Led()
    assert led.geometry(100, 20).glow_radius == led.geometry(20, 100).glow_radius


def test_geometry_negative_size_rejected():
    with pytest.raises(ValueError):
        Led().geometry(-1, 10)
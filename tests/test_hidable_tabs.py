from signalacq.hidable_tabs import DOUBLE_CLICK_DELAY, SHOWN_MAX_HEIGHT, HidableTabs


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


def make(height=25):
    clock = FakeClock()
    return HidableTabs(tab_bar_height=height, clock=clock), clock


def test_initially_shown_with_big_max_height():
    tabs, _ = make()
    assert tabs.hidden is False
    assert tabs.max_height == 100000


def test_double_click_hides_to_tab_bar_height():
    tabs, _ = make(height=25)
    assert tabs.on_tab_bar_double_clicked() is True
    assert tabs.hidden is True
    assert tabs.max_height == 25


def test_click_ignored_while_shown():
    tabs, _ = make()
    assert tabs.on_tab_bar_clicked() is False
    assert tabs.hidden is False


def test_click_right_after_hide_is_ignored():
    tabs, clock = make()
    tabs.on_tab_bar_double_clicked()
    clock.now += DOUBLE_CLICK_DELAY / 2
    assert tabs.on_tab_bar_clicked() is False
    assert tabs.hidden is True


def test_click_after_delay_shows():
    tabs, clock = make()
    tabs.on_tab_bar_double_clicked()
    clock.now += DOUBLE_CLICK_DELAY
    assert tabs.on_tab_bar_clicked() is True
    assert tabs.hidden is False
    assert tabs.max_height == SHOWN_MAX_HEIGHT


def test_double_click_right_after_show_is_ignored():
    tabs, clock = make()
    tabs.set_hidden(True)
    clock.now += 1
    tabs.on_tab_bar_clicked()
    assert tabs.on_tab_bar_double_clicked() is False
    assert tabs.hidden is False


def test_toggled_signal_and_show_tabs():
    tabs, _ = make()
    seen = []
    tabs.toggled.connect(seen.append)
    tabs.set_hidden(True)
    tabs.set_hidden(True)
    tabs.show_tabs()
    assert seen == [True, False]
import pytest

from termwidgets.button import Button
from termwidgets.events import Key, KeyEvent, MouseAction, MouseEvent
from termwidgets.screen import Screen


def _no_focus(_primitive):
    pass


def test_initial_rect_fits_label():
    button = Button("Hit Enter")
    x, y, width, height = button.rect
    assert (x, y, height) == (0, 0, 1)
    assert width - 4 == len("Hit Enter")


def test_enter_calls_selected():
    calls = []
    button = Button("Go")
    button.selected_func = lambda: calls.append("selected")
    button.input_handler()(KeyEvent(Key.ENTER), _no_focus)
    assert calls == ["selected"]


@pytest.mark.parametrize("key", [Key.TAB, Key.BACKTAB, Key.ESCAPE])
def test_leaving_keys_call_exit(key):
    keys = []
    button = Button("Go")
    button.exit_func = keys.append
    button.input_handler()(KeyEvent(key), _no_focus)
    assert keys == [key]


def test_other_keys_do_nothing():
    calls = []
    button = Button("Go")
    button.selected_func = lambda: calls.append("selected")
    button.exit_func = calls.append
    button.input_handler()(KeyEvent(Key.RUNE, "a"), _no_focus)
    assert calls == []


def test_input_capture_can_stop_event():
    calls = []
    button = Button("Go")
    button.selected_func = lambda: calls.append("selected")
    button.input_capture = lambda event: None
    button.input_handler()(KeyEvent(Key.ENTER), _no_focus)
    assert calls == []


def test_mouse_outside_is_ignored():
    button = Button("Go")
    assert button.mouse_handler()(MouseAction.LEFT_DOWN, MouseEvent(50, 50), _no_focus) == (False, None)


def test_mouse_down_takes_focus():
    focused = []
    button = Button("Go")
    result = button.mouse_handler()(MouseAction.LEFT_DOWN, MouseEvent(1, 0), focused.append)
    assert result == (True, None)
    assert focused == [button]


def test_mouse_click_selects():
    calls = []
    button = Button("Go")
    button.selected_func = lambda: calls.append("selected")
    result = button.mouse_handler()(MouseAction.LEFT_CLICK, MouseEvent(1, 0), _no_focus)
    assert result == (True, None)
    assert calls == ["selected"]


def test_draw_centres_label_with_style():
    screen = Screen(10, 3)
    button = Button("Go")
    button.set_rect(0, 0, 10, 1)
    button.draw(screen)
    row = screen.lines()[0]
    assert row.strip() == "Go"
    start = row.index("G")
    assert start == len(row) - row.index("o") - 1
    assert screen.get_content(start, 0) == ("G", button.style)


def test_draw_focused_uses_activated_style_and_restores_border():
    screen = Screen(10, 3)
    button = Button("Go")
    button.set_rect(0, 0, 10, 1)
    border_before = button.border_color
    button.focus(_no_focus)
    button.draw(screen)
    start = screen.lines()[0].index("G")
    assert screen.get_content(start, 0) == ("G", button.activated_style)
    assert button.border_color == border_before
    assert button.background_color == button.activated_style.bg
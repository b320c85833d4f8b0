import threading
import time

import pytest

from termwidgets.application import Application
from termwidgets.borders import BORDERS
from termwidgets.box import Box
from termwidgets.button import Button
from termwidgets.center import Center
from termwidgets.events import (
    ButtonMask,
    ErrorEvent,
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    ResizeEvent,
)
from termwidgets.screen import Screen


def _start(app):
    errors = []

    def target():
        try:
            app.run()
        except BaseException as exc:  # noqa: BLE001
            errors.append(exc)

    thread = threading.Thread(target=target, daemon=True)
    thread.start()
    return thread, errors


def _wait_for(condition, timeout=5.0):
    deadline = time.monotonic() + timeout
    while time.monotonic() < deadline:
        if condition():
            return True
        time.sleep(0.01)
    return False


def test_set_screen_initialises_screen():
    screen = Screen(10, 4)
    app = Application().set_screen(screen)
    assert screen.initialized
    assert app.screen is screen


def test_force_draw_fills_screen_with_root():
    screen = Screen(20, 5)
    box = Box()
    box.border = True
    app = Application().set_screen(screen).set_root(box, True)
    app.force_draw()
    assert box.rect == (0, 0, 20, 5)
    frame = BORDERS.frame(True)
    lines = screen.lines()
    assert lines[0][0] == frame.top_left
    assert lines[4][19] == frame.bottom_right
    assert screen.show_count == 1


def test_set_focus_blurs_previous():
    screen = Screen(10, 4)
    first, second = Box(), Box()
    app = Application().set_screen(screen)
    app.set_focus(first)
    assert first.has_focus()
    app.set_focus(second)
    assert not first.has_focus()
    assert second.has_focus()
    assert app.focus is second
    assert screen.cursor_visible is False


def test_set_root_delegates_focus_through_center():
    inner = Box()
    center = Center(inner, 4, 2)
    app = Application().set_root(center, True)
    assert app.focus is inner
    assert inner.has_focus()
    assert center.has_focus()


def test_before_draw_returning_true_skips_root():
    screen = Screen(10, 4)
    drawn = []
    box = Box()
    box.draw_func = lambda s, x, y, w, h: drawn.append(True) or (x, y, w, h)
    app = Application().set_screen(screen).set_root(box, True)
    app.before_draw = lambda s: True
    app.force_draw()
    assert drawn == []
    assert screen.show_count == 1


def test_after_draw_receives_screen():
    screen = Screen(10, 4)
    seen = []
    app = Application().set_screen(screen).set_root(Box(), True)
    app.after_draw = seen.append
    app.force_draw()
    assert seen == [screen]


def test_enable_mouse_switches_screen():
    screen = Screen(10, 4)
    app = Application().set_screen(screen)
    app.enable_mouse(True)
    assert screen.mouse_enabled
    assert app.mouse_enabled
    app.enable_mouse(False)
    assert not screen.mouse_enabled


def test_resize_to_full_screen():
    screen = Screen(30, 7)
    box = Box()
    Application().set_screen(screen).resize_to_full_screen(box)
    assert box.rect == (0, 0, 30, 7)


def test_resize_to_full_screen_without_screen_raises():
    with pytest.raises(RuntimeError):
        Application().resize_to_full_screen(Box())


def test_stop_without_screen_does_nothing():
    app = Application()
    app.stop()
    assert app.screen is None


def test_suspend_without_screen_returns_false():
    called = []
    assert Application().suspend(lambda: called.append(1)) is False
    assert called == []


def test_suspend_calls_function_and_resumes():
    screen = Screen(10, 4)
    app = Application().set_screen(screen)
    states = []
    inner = []

    def during():
        states.append(screen.suspended)
        inner.append(app.suspend(lambda: None))

    assert app.suspend(during) is True
    assert states == [True]
    assert inner == [False]
    assert screen.suspended is False


def test_enter_key_reaches_focused_root():
    screen = Screen(20, 3)
    pressed = []
    button = Button("OK")
    button.selected_func = lambda: pressed.append(True)
    app = Application().set_screen(screen).set_root(button, False)
    screen.post_event(KeyEvent(Key.ENTER))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert pressed == [True]
    assert screen.finalized
    assert app.screen is None


def test_input_capture_can_swallow_keys():
    screen = Screen(20, 3)
    pressed = []
    captured = []
    button = Button("OK")
    button.selected_func = lambda: pressed.append(True)
    app = Application().set_screen(screen).set_root(button, False)

    def capture(event):
        captured.append(event.key)
        return None if event.key == Key.ENTER else event

    app.input_capture = capture
    screen.post_event(KeyEvent(Key.ENTER))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert pressed == []
    assert captured == [Key.ENTER, Key.CTRL_C]


def test_error_event_stops_and_raises():
    screen = Screen(10, 3)
    app = Application().set_screen(screen).set_root(Box(), True)
    screen.post_event(ErrorEvent("boom"))
    with pytest.raises(ErrorEvent, match="boom"):
        app.run()
    assert screen.finalized


def test_resize_redraws():
    screen = Screen(10, 3)
    app = Application().set_screen(screen).set_root(Box(), True)
    screen.post_event(ResizeEvent(10, 3))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert screen.show_count == 2


def test_mouse_click_actions_and_selection():
    screen = Screen(20, 3)
    clicks = []
    actions = []
    button = Button("OK")
    button.selected_func = lambda: clicks.append(True)
    app = Application().set_screen(screen).set_root(button, False).enable_mouse(True)

    def capture(event, action):
        actions.append(action)
        return event, action

    app.mouse_capture = capture
    screen.post_event(MouseEvent(1, 0, ButtonMask.PRIMARY))
    screen.post_event(MouseEvent(1, 0, ButtonMask.NONE))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert actions == [
        MouseAction.MOVE,
        MouseAction.LEFT_DOWN,
        MouseAction.LEFT_UP,
        MouseAction.LEFT_CLICK,
    ]
    assert clicks == [True]


def test_second_quick_click_is_double_click():
    screen = Screen(20, 3)
    actions = []
    app = Application().set_screen(screen).set_root(Button("OK"), False)
    app.mouse_capture = lambda event, action: (actions.append(action), (event, action))[1]
    for buttons in (ButtonMask.PRIMARY, ButtonMask.NONE) * 2:
        screen.post_event(MouseEvent(1, 0, buttons))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert actions[-1] == MouseAction.LEFT_DOUBLE_CLICK
    assert actions.count(MouseAction.LEFT_CLICK) == 1


def test_mouse_capture_returning_none_blocks_handler():
    screen = Screen(20, 3)
    clicks = []
    button = Button("OK")
    button.selected_func = lambda: clicks.append(True)
    app = Application().set_screen(screen).set_root(button, False)
    app.mouse_capture = lambda event, action: (None, action)
    screen.post_event(MouseEvent(1, 0, ButtonMask.PRIMARY))
    screen.post_event(MouseEvent(1, 0, ButtonMask.NONE))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert clicks == []


def test_scroll_wheel_fires_scroll_action():
    screen = Screen(20, 3)
    actions = []
    app = Application().set_screen(screen).set_root(Box(), True)
    app.mouse_capture = lambda event, action: (actions.append(action), (event, action))[1]
    screen.post_event(MouseEvent(0, 0, ButtonMask.WHEEL_DOWN))
    screen.post_event(KeyEvent(Key.CTRL_C))
    app.run()
    assert actions == [MouseAction.SCROLL_DOWN]


def test_queue_update_runs_in_loop_thread():
    screen = Screen(10, 3)
    app = Application().set_screen(screen)
    thread, errors = _start(app)
    ran_in = []
    app.queue_update(lambda: ran_in.append(threading.current_thread()))
    app.stop()
    thread.join(5)
    assert not thread.is_alive()
    assert ran_in == [thread]
    assert errors == []


def test_sync_and_queue_update_draw():
    screen = Screen(10, 3)
    app = Application().set_screen(screen).set_root(Box(), True)
    thread, errors = _start(app)
    app.sync()
    app.queue_update(lambda: None)
    assert screen.sync_count == 1
    before = screen.show_count
    values = []
    app.queue_update_draw(lambda: values.append(1))
    assert values == [1]
    assert screen.show_count == before + 1
    app.draw()
    assert screen.show_count == before + 2
    app.stop()
    thread.join(5)
    assert not thread.is_alive()
    assert errors == []


def test_set_screen_while_running_replaces_screen():
    first = Screen(10, 3)
    second = Screen(12, 4)
    box = Box()
    app = Application().set_screen(first).set_root(box, True)
    thread, errors = _start(app)
    app.queue_update(lambda: None)
    app.set_screen(second)
    assert first.finalized
    assert _wait_for(lambda: app.screen is second and second.show_count > 0)
    assert box.rect == (0, 0, 12, 4)
    app.stop()
    thread.join(5)
    assert not thread.is_alive()
    assert errors == []
    assert second.finalized
import dataclasses

import pytest

from termwidgets.events import (
    ButtonMask,
    ErrorEvent,
    Key,
    KeyEvent,
    MouseEvent,
    ResizeEvent,
)


def test_mouse_position():
    event = MouseEvent(7, 3, ButtonMask.PRIMARY)
    assert event.position() == (7, 3)


def test_mouse_buttons_default_to_none():
    assert MouseEvent(0, 0).buttons == ButtonMask.NONE
    assert not MouseEvent(0, 0).buttons & ButtonMask.PRIMARY


def test_mouse_buttons_combine():
    event = MouseEvent(1, 1, ButtonMask.PRIMARY | ButtonMask.WHEEL_UP)
    assert event.buttons & ButtonMask.PRIMARY
    assert event.buttons & ButtonMask.WHEEL_UP
    assert not event.buttons & ButtonMask.MIDDLE
    changes = event.buttons ^ ButtonMask.PRIMARY
    assert changes == ButtonMask.WHEEL_UP


def test_rune_event_keeps_character():
    event = KeyEvent(Key.RUNE, "a")
    assert event.key is Key.RUNE
    assert event.char == "a"


def test_key_given_as_number_is_converted():
    assert KeyEvent(int(Key.ENTER)).key is Key.ENTER


@pytest.mark.parametrize(
    "key, char",
    [(Key.RUNE, ""), (Key.RUNE, "ab"), (Key.ENTER, "x")],
)
def test_invalid_key_events(key, char):
    with pytest.raises(ValueError):
        KeyEvent(key, char)


def test_unknown_key_number_is_rejected():
    with pytest.raises(ValueError):
        KeyEvent(99999)


def test_key_events_are_frozen_and_hashable():
    event = KeyEvent(Key.TAB)
    with pytest.raises(dataclasses.FrozenInstanceError):
        event.char = "x"
    assert {KeyEvent(Key.TAB), KeyEvent(Key.TAB), KeyEvent(Key.BACKTAB)} == {
        KeyEvent(Key.TAB),
        KeyEvent(Key.BACKTAB),
    }


def test_resize_event_equality():
    assert ResizeEvent(80, 24) == ResizeEvent(80, 24)
    assert ResizeEvent(80, 24) != ResizeEvent(24, 80)


def test_error_event_carries_message():
    error = ErrorEvent("terminal lost")
    assert str(error) == "terminal lost"
    assert error.args == ("terminal lost",)
"""Input events and mouse actions delivered to primitives."""

from __future__ import annotations

import enum
from dataclasses import dataclass


class MouseAction(enum.IntEnum):
    """What the mouse is logically doing."""

    MOVE = 0
    LEFT_DOWN = enum.auto()
    LEFT_UP = enum.auto()
    LEFT_CLICK = enum.auto()
    LEFT_DOUBLE_CLICK = enum.auto()
    MIDDLE_DOWN = enum.auto()
    MIDDLE_UP = enum.auto()
    MIDDLE_CLICK = enum.auto()
    MIDDLE_DOUBLE_CLICK = enum.auto()
    RIGHT_DOWN = enum.auto()
    RIGHT_UP = enum.auto()
    RIGHT_CLICK = enum.auto()
    RIGHT_DOUBLE_CLICK = enum.auto()
    SCROLL_UP = enum.auto()
    SCROLL_DOWN = enum.auto()
    SCROLL_LEFT = enum.auto()
    SCROLL_RIGHT = enum.auto()


class Key(enum.IntEnum):
    """Keys reported by key events; ``RUNE`` carries a printable character."""

    CTRL_A = 1
    CTRL_B = 2
    CTRL_C = 3
    CTRL_D = 4
    CTRL_E = 5
    CTRL_F = 6
    CTRL_G = 7
    BACKSPACE = 8
    TAB = 9
    CTRL_J = 10
    CTRL_K = 11
    CTRL_L = 12
    ENTER = 13
    CTRL_N = 14
    CTRL_O = 15
    CTRL_P = 16
    CTRL_Q = 17
    CTRL_R = 18
    CTRL_S = 19
    CTRL_T = 20
    CTRL_U = 21
    CTRL_V = 22
    CTRL_W = 23
    CTRL_X = 24
    CTRL_Y = 25
    CTRL_Z = 26
    ESCAPE = 27
    BACKSPACE2 = 127
    RUNE = 256
    UP = 257
    DOWN = 258
    RIGHT = 259
    LEFT = 260
    PGUP = 265
    PGDN = 266
    HOME = 267
    END = 268
    INSERT = 269
    DELETE = 270
    BACKTAB = 277
    F1 = 279
    F2 = 280
    F3 = 281
    F4 = 282
    F5 = 283
    F6 = 284
    F7 = 285
    F8 = 286
    F9 = 287
    F10 = 288
    F11 = 289
    F12 = 290


class ButtonMask(enum.IntFlag):
    """The mouse buttons and wheel directions active in a mouse event."""

    NONE = 0
    PRIMARY = 1 << 0
    SECONDARY = 1 << 1
    MIDDLE = 1 << 2
    WHEEL_UP = 1 << 8
    WHEEL_DOWN = 1 << 9
    WHEEL_LEFT = 1 << 10
    WHEEL_RIGHT = 1 << 11


@dataclass(frozen=True)
class KeyEvent:
    """A key press. ``char`` is set exactly when ``key`` is ``Key.RUNE``."""

    key: Key
    char: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "key", Key(self.key))
        if self.key is Key.RUNE:
            if len(self.char) != 1:
                raise ValueError("a rune event needs exactly one character")
        elif self.char:
            raise ValueError(f"{self.key.name} events carry no character")


@dataclass(frozen=True)
class MouseEvent:
    """A mouse event at a screen position with the buttons held down."""

    x: int
    y: int
    buttons: ButtonMask = ButtonMask.NONE

    def position(self) -> tuple[int, int]:
        """Return the event's (x, y) screen coordinates."""
        return self.x, self.y


@dataclass(frozen=True)
class ResizeEvent:
    """The screen changed to the given size."""

    width: int
    height: int


class ErrorEvent(Exception):
    """An error reported by the screen; it stops the application."""
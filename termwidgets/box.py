"""The base primitive: a rectangle with optional border and title."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from .borders import BORDERS, HORIZONTAL_ELLIPSIS
from .events import KeyEvent, MouseAction, MouseEvent
from .screen import Align, Attr, Screen, Style, print_text

DEFAULT_BACKGROUND_COLOR = "black"
DEFAULT_BORDER_COLOR = "white"
DEFAULT_TITLE_COLOR = "white"

SetFocus = Callable[[Any], None]
InputHandler = Callable[[KeyEvent, SetFocus], None]
MouseHandler = Callable[[MouseAction, MouseEvent, SetFocus], "tuple[bool, Any]"]
InputCapture = Callable[[KeyEvent], Optional[KeyEvent]]
MouseCapture = Callable[[MouseAction, MouseEvent], "tuple[MouseAction, Optional[MouseEvent]]"]
DrawFunc = Callable[[Screen, int, int, int, int], "tuple[int, int, int, int]"]


class Box:
    """A primitive with a background, an optional border and a title.

    Other primitives build on it. ``input_capture`` and ``mouse_capture``
    may intercept events before the default handlers see them; a capture
    that returns ``None`` for the event stops it.
    """

    def __init__(self) -> None:
        self._x = 0
        self._y = 0
        self._width = 15
        self._height = 10
        self._inner: Optional[tuple[int, int, int, int]] = None
        self._padding = (0, 0, 0, 0)
        self._background_color = DEFAULT_BACKGROUND_COLOR
        self._has_focus = False
        self.border_style = Style(fg=DEFAULT_BORDER_COLOR, bg=DEFAULT_BACKGROUND_COLOR)
        self.border = False
        self.title = ""
        self.title_color = DEFAULT_TITLE_COLOR
        self.title_align = Align.CENTER
        self.dont_clear = False
        self.input_capture: Optional[InputCapture] = None
        self.mouse_capture: Optional[MouseCapture] = None
        self.draw_func: Optional[DrawFunc] = None
        self.focus_func: Optional[Callable[[], None]] = None
        self.blur_func: Optional[Callable[[], None]] = None

    @property
    def rect(self) -> tuple[int, int, int, int]:
        """The (x, y, width, height) of the box."""
        return self._x, self._y, self._width, self._height

    @property
    def background_color(self) -> str:
        return self._background_color

    @background_color.setter
    def background_color(self, color: str) -> None:
        self._background_color = color
        self.border_style = self.border_style.background(color)

    @property
    def border_color(self) -> str:
        return self.border_style.fg

    @border_color.setter
    def border_color(self, color: str) -> None:
        self.border_style = self.border_style.foreground(color)

    @property
    def border_attributes(self) -> Attr:
        return self.border_style.attrs

    @border_attributes.setter
    def border_attributes(self, attrs: Attr) -> None:
        self.border_style = self.border_style.attributes(attrs)

    def set_rect(self, x: int, y: int, width: int, height: int) -> None:
        """Move and resize the box."""
        self._x, self._y, self._width, self._height = x, y, width, height
        self._inner = None

    def set_border_padding(self, top: int, bottom: int, left: int, right: int) -> None:
        """Set the space between the border and the content."""
        self._padding = (top, bottom, left, right)

    def inner_rect(self) -> tuple[int, int, int, int]:
        """Return the content area inside border and padding, never negative in size."""
        if self._inner is not None:
            return self._inner
        x, y, width, height = self.rect
        if self.border:
            x, y, width, height = x + 1, y + 1, width - 2, height - 2
        top, bottom, left, right = self._padding
        return (
            x + left,
            y + top,
            max(width - left - right, 0),
            max(height - top - bottom, 0),
        )

    def in_rect(self, x: int, y: int) -> bool:
        """Tell whether a screen coordinate lies within the box."""
        rect_x, rect_y, width, height = self.rect
        return rect_x <= x < rect_x + width and rect_y <= y < rect_y + height

    def wrap_input_handler(self, handler: Optional[InputHandler]) -> InputHandler:
        """Put the input capture in front of a key handler."""

        def wrapped(event: KeyEvent, set_focus: SetFocus) -> None:
            if self.input_capture is not None:
                event = self.input_capture(event)
            if event is not None and handler is not None:
                handler(event, set_focus)

        return wrapped

    def input_handler(self) -> InputHandler:
        """Return the key handler; a plain box only runs the capture."""
        return self.wrap_input_handler(None)

    def wrap_mouse_handler(self, handler: Optional[MouseHandler]) -> MouseHandler:
        """Put the mouse capture in front of a mouse handler."""

        def wrapped(action: MouseAction, event: MouseEvent, set_focus: SetFocus) -> tuple[bool, Any]:
            if self.mouse_capture is not None:
                action, event = self.mouse_capture(action, event)
            if event is not None and handler is not None:
                return handler(action, event, set_focus)
            return False, None

        return wrapped

    def mouse_handler(self) -> MouseHandler:
        """Return the mouse handler; a left press inside takes the focus."""

        def handle(action: MouseAction, event: MouseEvent, set_focus: SetFocus) -> tuple[bool, Any]:
            if action is MouseAction.LEFT_DOWN and self.in_rect(*event.position()):
                set_focus(self)
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)

    def draw(self, screen: Screen) -> None:
        """Draw the box onto the screen."""
        self.draw_for_subclass(screen, self)

    def draw_for_subclass(self, screen: Screen, primitive: Any) -> None:
        """Draw the box frame, using ``primitive``'s focus to pick the border."""
        x, y, width, height = self.rect
        if width <= 0 or height <= 0:
            return

        if not self.dont_clear:
            background = Style().background(self._background_color)
            for row in range(y, y + height):
                for column in range(x, x + width):
                    screen.set_content(column, row, " ", background)

        if self.border and width >= 2 and height >= 2:
            self._draw_border(screen, primitive.has_focus())

        if self.draw_func is not None:
            self._inner = self.draw_func(screen, x, y, width, height)
        else:
            self._inner = None
            self._inner = self.inner_rect()

    def _draw_border(self, screen: Screen, focused: bool) -> None:
        x, y, width, height = self.rect
        frame = BORDERS.frame(focused)
        style = self.border_style
        right, bottom = x + width - 1, y + height - 1
        for column in range(x + 1, right):
            screen.set_content(column, y, frame.horizontal, style)
            screen.set_content(column, bottom, frame.horizontal, style)
        for row in range(y + 1, bottom):
            screen.set_content(x, row, frame.vertical, style)
            screen.set_content(right, row, frame.vertical, style)
        screen.set_content(x, y, frame.top_left, style)
        screen.set_content(right, y, frame.top_right, style)
        screen.set_content(x, bottom, frame.bottom_left, style)
        screen.set_content(right, bottom, frame.bottom_right, style)

        if self.title and width >= 4:
            title_style = Style(fg=self.title_color, bg=style.bg)
            printed, _ = print_text(
                screen, self.title, x + 1, y, width - 2, self.title_align, title_style
            )
            if 0 < printed < len(self.title):
                _, cell_style = screen.get_content(right - 1, y)
                print_text(
                    screen,
                    HORIZONTAL_ELLIPSIS,
                    right - 1,
                    y,
                    1,
                    Align.LEFT,
                    Style(fg=cell_style.fg, bg=cell_style.bg),
                )

    def focus(self, delegate: SetFocus) -> None:
        """Called when the box receives focus."""
        self._has_focus = True
        if self.focus_func is not None:
            self.focus_func()

    def blur(self) -> None:
        """Called when the box loses focus."""
        if self.blur_func is not None:
            self.blur_func()
        self._has_focus = False

    def has_focus(self) -> bool:
        """Tell whether the box has focus."""
        return self._has_focus
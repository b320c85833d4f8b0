"""A checkbox for boolean values."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from wcwidth import wcwidth

from .box import Box, InputHandler, MouseHandler, SetFocus
from .events import Key, KeyEvent, MouseAction, MouseEvent
from .screen import Align, Screen, Style, print_text

SECONDARY_TEXT_COLOR = "yellow"
CONTRAST_BACKGROUND_COLOR = "blue"
PRIMARY_TEXT_COLOR = "white"

_DONE_KEYS = (Key.TAB, Key.BACKTAB, Key.ESCAPE)


def _text_width(text: str) -> int:
    return sum(max(wcwidth(char), 0) for char in text)


class Checkbox(Box):
    """A label followed by a box that can be checked and unchecked.

    ``changed_func`` receives the new state when the user toggles the box;
    ``done_func`` and ``finished_func`` receive the key used to leave it.
    """

    def __init__(self) -> None:
        super().__init__()
        self.checked = False
        self.label = ""
        self.label_width = 0
        self.label_color = SECONDARY_TEXT_COLOR
        self.field_background_color = CONTRAST_BACKGROUND_COLOR
        self.field_text_color = PRIMARY_TEXT_COLOR
        self.checked_string = "X"
        self.changed_func: Optional[Callable[[bool], None]] = None
        self.done_func: Optional[Callable[[Key], None]] = None
        self.finished_func: Optional[Callable[[Key], None]] = None

    @property
    def field_width(self) -> int:
        return 3

    @property
    def field_height(self) -> int:
        return 1

    def set_form_attributes(
        self,
        label_width: int,
        label_color: str,
        bg_color: str,
        field_text_color: str,
        field_bg_color: str,
    ) -> Checkbox:
        """Apply the attributes shared by all items of a form."""
        self.label_width = label_width
        self.label_color = label_color
        self._background_color = bg_color
        self.field_text_color = field_text_color
        self.field_background_color = field_bg_color
        return self

    def _toggle(self) -> None:
        self.checked = not self.checked
        if self.changed_func is not None:
            self.changed_func(self.checked)

    def draw(self, screen: Screen) -> None:
        """Draw the label and the checkbox field."""
        self.draw_for_subclass(screen, self)
        x, y, width, height = self.inner_rect()
        if height < 1 or width <= 0:
            return

        label_style = Style(fg=self.label_color, bg=self.background_color)
        if self.label_width > 0:
            label_width = min(self.label_width, width)
            print_text(screen, self.label, x, y, label_width, Align.LEFT, label_style)
            x += label_width
        else:
            _, drawn = print_text(screen, self.label, x, y, width, Align.LEFT, label_style)
            x += drawn

        field_style = Style(fg=self.field_text_color, bg=self.field_background_color)
        if self.has_focus():
            field_style = Style(fg=self.field_background_color, bg=self.field_text_color)
        box_width = _text_width(self.checked_string)
        mark = self.checked_string if self.checked else " " * box_width
        print_text(screen, f"[{mark}]", x, y, box_width + 2, Align.LEFT, field_style)

    def input_handler(self) -> InputHandler:
        """Return the key handler: Enter or space toggles, Tab/Backtab/Escape leave."""

        def handle(event: KeyEvent, set_focus: SetFocus) -> None:
            if event.key == Key.ENTER or (event.key == Key.RUNE and event.char == " "):
                self._toggle()
            elif event.key in _DONE_KEYS:
                if self.done_func is not None:
                    self.done_func(event.key)
                if self.finished_func is not None:
                    self.finished_func(event.key)

        return self.wrap_input_handler(handle)

    def mouse_handler(self) -> MouseHandler:
        """Return the mouse handler: on the checkbox row a press focuses, a click toggles."""

        def handle(action: MouseAction, event: MouseEvent, set_focus: SetFocus) -> tuple[bool, Any]:
            x, y = event.position()
            _, rect_y, _, _ = self.inner_rect()
            if not self.in_rect(x, y):
                return False, None
            if y == rect_y:
                if action == MouseAction.LEFT_DOWN:
                    set_focus(self)
                    return True, None
                if action == MouseAction.LEFT_CLICK:
                    self._toggle()
                    return True, None
            return False, None

        return self.wrap_mouse_handler(handle)
"""A labelled button that triggers an action when selected."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, Optional

from wcwidth import wcwidth

from .box import Box, InputHandler, MouseHandler, SetFocus
from .events import Key, KeyEvent, MouseAction, MouseEvent
from .screen import Align, Screen, Style, print_text

CONTRAST_BACKGROUND_COLOR = "blue"
PRIMARY_TEXT_COLOR = "white"
INVERSE_TEXT_COLOR = "blue"

_EXIT_KEYS = (Key.BACKTAB, Key.TAB, Key.ESCAPE)


def _text_width(text: str) -> int:
    return sum(max(wcwidth(char), 0) for char in text)


class Button(Box):
    """A box with a centred label that reacts to Enter and mouse clicks.

    ``selected_func`` is called when the button is selected; ``exit_func``
    receives the key (Tab, Backtab or Escape) used to leave the button.
    """

    def __init__(self, label: str) -> None:
        super().__init__()
        self.set_rect(0, 0, _text_width(label) + 4, 1)
        self.label = label
        self.style = Style(fg=PRIMARY_TEXT_COLOR, bg=CONTRAST_BACKGROUND_COLOR)
        self.activated_style = Style(fg=INVERSE_TEXT_COLOR, bg=PRIMARY_TEXT_COLOR)
        self.selected_func: Optional[Callable[[], None]] = None
        self.exit_func: Optional[Callable[[Key], None]] = None

    @property
    def label_color(self) -> str:
        return self.style.fg

    @label_color.setter
    def label_color(self, color: str) -> None:
        self.style = self.style.foreground(color)

    @property
    def label_color_activated(self) -> str:
        return self.activated_style.fg

    @label_color_activated.setter
    def label_color_activated(self, color: str) -> None:
        self.activated_style = self.activated_style.foreground(color)

    @property
    def background_color_activated(self) -> str:
        return self.activated_style.bg

    @background_color_activated.setter
    def background_color_activated(self, color: str) -> None:
        self.activated_style = self.activated_style.background(color)

    def draw(self, screen: Screen) -> None:
        """Draw the button, highlighted while it has focus."""
        style = self.style
        saved_border_color: Optional[str] = None
        if self.has_focus():
            style = self.activated_style
            saved_border_color = self.border_color
            self.border_color = style.bg
        self.background_color = style.bg
        try:
            self.draw_for_subclass(screen, self)
            x, y, width, height = self.inner_rect()
            if width > 0 and height > 0:
                print_text(screen, self.label, x, y + height // 2, width, Align.CENTER, style)
        finally:
            if saved_border_color is not None:
                self.border_color = saved_border_color

    def input_handler(self) -> InputHandler:
        """Return the key handler: Enter selects, Tab/Backtab/Escape leave."""

        def handle(event: KeyEvent, set_focus: SetFocus) -> None:
            if event.key == Key.ENTER:
                if self.selected_func is not None:
                    self.selected_func()
            elif event.key in _EXIT_KEYS:
                if self.exit_func is not None:
                    self.exit_func(event.key)

        return self.wrap_input_handler(handle)

    def mouse_handler(self) -> MouseHandler:
        """Return the mouse handler: a press focuses, a click selects."""

        def handle(action: MouseAction, event: MouseEvent, set_focus: SetFocus) -> tuple[bool, Any]:
            if not self.in_rect(*event.position()):
                return False, None
            if action == MouseAction.LEFT_DOWN:
                set_focus(self)
                return True, None
            if action == MouseAction.LEFT_CLICK:
                if self.selected_func is not None:
                    self.selected_func()
                return True, None
            return False, None

        return self.wrap_mouse_handler(handle)
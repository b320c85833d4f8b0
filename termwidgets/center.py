"""A wrapper that places another primitive in the middle of its area."""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any, Optional

from .box import Box, InputHandler, MouseHandler, SetFocus
from .events import KeyEvent, MouseAction, MouseEvent
from .screen import Screen


class Center(Box):
    """Surrounds a primitive with space so it is shown centred.

    The primitive keeps its requested size unless the available area is
    smaller, in which case it is clamped to that area.
    """

    def __init__(self, primitive: Any, width: int, height: int) -> None:
        super().__init__()
        self._primitive = primitive
        self._content_width = width
        self._content_height = height
        self._set_focus: Optional[SetFocus] = None

    @property
    def primitive(self) -> Any:
        """The primitive shown in the middle."""
        return self._primitive

    @property
    def content_size(self) -> tuple[int, int]:
        """The requested (width, height) of the contained primitive."""
        return self._content_width, self._content_height

    def resize(self, width: int, height: int) -> Center:
        """Change the requested size; non-positive values leave a dimension unchanged."""
        if width > 0:
            self._content_width = width
        if height > 0:
            self._content_height = height
        return self

    def set_primitive(self, primitive: Any) -> Center:
        """Replace the contained primitive, keeping the focus on it if it had it."""
        had_focus = self._primitive.has_focus()
        self._primitive = primitive
        if had_focus and self._set_focus is not None:
            self._set_focus(primitive)
        return self

    def draw(self, screen: Screen) -> None:
        """Draw the background and the centred primitive."""
        x, y, inner_width, inner_height = self.inner_rect()
        width, height = self._content_width, self._content_height
        if width < inner_width:
            x += (inner_width - width) >> 1
        elif width > inner_width:
            width = inner_width
        if height < inner_height:
            y += (inner_height - height) >> 1
        elif height > inner_height:
            height = inner_height

        own_focus = SimpleNamespace(has_focus=lambda: Box.has_focus(self))
        self.draw_for_subclass(screen, own_focus)
        self._primitive.set_rect(x, y, width, height)
        self._primitive.draw(screen)

    def focus(self, delegate: SetFocus) -> None:
        """Hand the focus on to the contained primitive."""
        self._set_focus = delegate
        delegate(self._primitive)
        super().focus(delegate)

    def has_focus(self) -> bool:
        """Tell whether the contained primitive has focus."""
        return self._primitive.has_focus()

    def mouse_handler(self) -> MouseHandler:
        """Pass mouse events to the primitive; a press elsewhere focuses the wrapper."""

        def handle(action: MouseAction, event: MouseEvent, set_focus: SetFocus) -> tuple[bool, Any]:
            if not self.in_rect(*event.position()):
                return False, None
            consumed, capture = self._primitive.mouse_handler()(action, event, set_focus)
            if consumed:
                return True, capture
            if action == MouseAction.LEFT_DOWN:
                set_focus(self)
                return True, capture
            return False, capture

        return self.wrap_mouse_handler(handle)

    def input_handler(self) -> InputHandler:
        """Pass key events to the contained primitive."""

        def handle(event: KeyEvent, set_focus: SetFocus) -> None:
            handler = self._primitive.input_handler()
            if handler is not None:
                handler(event, set_focus)

        return self.wrap_input_handler(handle)
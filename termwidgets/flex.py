"""A flexbox-style layout that arranges primitives in a row or column."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .box import Box, InputHandler, MouseHandler, SetFocus
from .events import KeyEvent, MouseAction, MouseEvent
from .screen import Screen

FLEX_ROW = 0
"""One item per row: items are stacked vertically."""
FLEX_COLUMN = 1
"""One item per column: items are placed side by side."""
FLEX_ROW_CSS = 1
"""As in CSS: items distributed along a row."""
FLEX_COLUMN_CSS = 0
"""As in CSS: items distributed within a column."""


@dataclass
class FlexItem:
    """Layout options for one item of a flex container.

    ``item`` may be ``None`` for an empty slot that still takes up space.
    A positive ``fixed_size`` overrides ``proportion``.
    """

    item: Optional[Any]
    fixed_size: int = 0
    proportion: int = 1
    focus: bool = False


class Flex(Box):
    """Arranges primitives horizontally or vertically.

    Each item has either a fixed size or a share of the remaining space in
    proportion to the other flexible items. ``direction`` is ``FLEX_COLUMN``
    (side by side, the default) or ``FLEX_ROW`` (stacked). With
    ``full_screen`` set, the layout takes up the whole screen. The
    background is not cleared, so empty slots leave the screen unchanged.
    """

    def __init__(self) -> None:
        super().__init__()
        self.dont_clear = True
        self.direction = FLEX_COLUMN
        self.full_screen = False
        self._items: list[FlexItem] = []

    @property
    def items(self) -> list[FlexItem]:
        """A copy of the layout entries, in order."""
        return list(self._items)

    def add_item(self, item: Optional[Any], fixed_size: int, proportion: int, focus: bool) -> Flex:
        """Append an item with a fixed size or a proportional share of space."""
        self._items.append(FlexItem(item, fixed_size, proportion, focus))
        return self

    def remove_item(self, primitive: Any) -> Flex:
        """Remove every entry for the given primitive, keeping the others in order."""
        self._items = [entry for entry in self._items if entry.item is not primitive]
        return self

    def resize_item(self, primitive: Any, fixed_size: int, proportion: int) -> Flex:
        """Change the size of every entry for the given primitive."""
        for entry in self._items:
            if entry.item is primitive:
                entry.fixed_size = fixed_size
                entry.proportion = proportion
        return self

    def resize_item_at(self, index: int, fixed_size: int, proportion: int) -> Flex:
        """Change the size of the entry at ``index``; raises IndexError if out of range."""
        entry = self._items[index]
        entry.fixed_size = fixed_size
        entry.proportion = proportion
        return self

    def clear(self) -> Flex:
        """Remove all items."""
        self._items = []
        return self

    def __len__(self) -> int:
        return len(self._items)

    def __getitem__(self, index: int) -> Optional[Any]:
        return self._items[index].item

    def draw(self, screen: Screen) -> None:
        """Lay out the items and draw them; focused items are drawn last."""
        self.draw_for_subclass(screen, self)

        if self.full_screen:
            width, height = screen.size()
            self.set_rect(0, 0, width, height)

        x, y, width, height = self.inner_rect()
        vertical = self.direction == FLEX_ROW
        remaining = height if vertical else width
        proportion_sum = 0
        for entry in self._items:
            if entry.fixed_size > 0:
                remaining -= entry.fixed_size
            else:
                proportion_sum += entry.proportion

        position = y if vertical else x
        deferred: list[Any] = []
        for entry in self._items:
            size = entry.fixed_size
            if size <= 0:
                if proportion_sum > 0:
                    size = remaining * entry.proportion // proportion_sum
                    remaining -= size
                    proportion_sum -= entry.proportion
                else:
                    size = 0
            primitive = entry.item
            if primitive is not None:
                if self.direction == FLEX_COLUMN:
                    primitive.set_rect(position, y, size, height)
                else:
                    primitive.set_rect(x, position, width, size)
            position += size

            if primitive is not None:
                if primitive.has_focus():
                    deferred.append(primitive)
                else:
                    primitive.draw(screen)

        for primitive in reversed(deferred):
            primitive.draw(screen)

    def focus(self, delegate: SetFocus) -> None:
        """Give the focus to the first item marked for it, else take it."""
        for entry in self._items:
            if entry.item is not None and entry.focus:
                delegate(entry.item)
                return
        super().focus(delegate)

    def has_focus(self) -> bool:
        """Tell whether the container or any of its items has focus."""
        if any(entry.item is not None and entry.item.has_focus() for entry in self._items):
            return True
        return super().has_focus()

    def mouse_handler(self) -> MouseHandler:
        """Pass mouse events to the first item that consumes them."""

        def handle(action: MouseAction, event: MouseEvent, set_focus: SetFocus) -> tuple[bool, Any]:
            if not self.in_rect(*event.position()):
                return False, None
            capture = None
            for entry in self._items:
                if entry.item is None:
                    continue
                consumed, capture = entry.item.mouse_handler()(action, event, set_focus)
                if consumed:
                    return True, capture
            return False, capture

        return self.wrap_mouse_handler(handle)

    def input_handler(self) -> InputHandler:
        """Pass key events to the item that has focus."""

        def handle(event: KeyEvent, set_focus: SetFocus) -> None:
            for entry in self._items:
                if entry.item is not None and entry.item.has_focus():
                    handler = entry.item.input_handler()
                    if handler is not None:
                        handler(event, set_focus)
                        return

        return self.wrap_input_handler(handle)
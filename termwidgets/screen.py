"""An in-memory cell screen, text styles and text printing."""

from __future__ import annotations

import enum
import queue
import threading
from dataclasses import dataclass, replace
from typing import Any

from wcwidth import wcwidth

DEFAULT_COLOR = "default"


class Align(enum.IntEnum):
    """Horizontal alignment of text within an area."""

    LEFT = 0
    CENTER = 1
    RIGHT = 2


class Attr(enum.IntFlag):
    """Text attributes that can be combined with ``|``."""

    NONE = 0
    BOLD = 1 << 0
    BLINK = 1 << 1
    REVERSE = 1 << 2
    UNDERLINE = 1 << 3
    DIM = 1 << 4
    ITALIC = 1 << 5
    STRIKETHROUGH = 1 << 6


@dataclass(frozen=True)
class Style:
    """Foreground colour, background colour and attributes of a cell."""

    fg: str = DEFAULT_COLOR
    bg: str = DEFAULT_COLOR
    attrs: Attr = Attr.NONE

    def foreground(self, color: str) -> Style:
        """Return a copy with the given foreground colour."""
        return replace(self, fg=color)

    def background(self, color: str) -> Style:
        """Return a copy with the given background colour."""
        return replace(self, bg=color)

    def attributes(self, attrs: Attr) -> Style:
        """Return a copy with the given attributes."""
        return replace(self, attrs=Attr(attrs))


_BLANK = (" ", Style())


class Screen:
    """A grid of styled cells with an event queue.

    Drawing goes into memory; ``lines()`` returns what is on the screen.
    Events posted with ``post_event`` are handed out by ``poll_event``;
    after ``fini`` the poll returns ``None``.
    """

    def __init__(self, width: int = 80, height: int = 25) -> None:
        if width < 0 or height < 0:
            raise ValueError("screen dimensions must not be negative")
        self._width = width
        self._height = height
        self._cells = [[_BLANK] * width for _ in range(height)]
        self._lock = threading.Lock()
        self._events: queue.Queue[Any] = queue.Queue()
        self.initialized = False
        self.finalized = False
        self.suspended = False
        self.mouse_enabled = False
        self.cursor_visible = True
        self.show_count = 0
        self.sync_count = 0

    def init(self) -> None:
        """Make the screen ready for drawing and events."""
        if self.finalized:
            self._events = queue.Queue()
        self.initialized = True
        self.finalized = False
        self.suspended = False
        self.clear()

    def fini(self) -> None:
        """Shut the screen down; a pending or later poll returns ``None``."""
        if self.finalized:
            return
        self.finalized = True
        self.initialized = False
        self._events.put(None)

    def size(self) -> tuple[int, int]:
        """Return the (width, height) of the screen in cells."""
        return self._width, self._height

    def set_content(self, x: int, y: int, char: str, style: Style) -> None:
        """Put a character with a style into a cell; off-screen cells are ignored."""
        if 0 <= x < self._width and 0 <= y < self._height:
            with self._lock:
                self._cells[y][x] = (char, style)

    def get_content(self, x: int, y: int) -> tuple[str, Style]:
        """Return the character and style of a cell; off-screen cells are blank."""
        if 0 <= x < self._width and 0 <= y < self._height:
            with self._lock:
                return self._cells[y][x]
        return _BLANK

    def clear(self) -> None:
        """Reset every cell to a blank with the default style."""
        with self._lock:
            for row in self._cells:
                row[:] = [_BLANK] * self._width

    def show(self) -> None:
        """Make the drawn content visible."""
        self.show_count += 1

    def sync(self) -> None:
        """Redraw the whole screen from the cell buffer."""
        self.sync_count += 1

    def hide_cursor(self) -> None:
        """Hide the text cursor."""
        self.cursor_visible = False

    def enable_mouse(self) -> None:
        """Start reporting mouse events."""
        self.mouse_enabled = True

    def disable_mouse(self) -> None:
        """Stop reporting mouse events."""
        self.mouse_enabled = False

    def post_event(self, event: Any) -> None:
        """Queue an event for ``poll_event``."""
        self._events.put(event)

    def poll_event(self) -> Any:
        """Wait for and return the next event, or ``None`` once finalised."""
        return self._events.get()

    def suspend(self) -> None:
        """Leave screen mode temporarily."""
        if not self.initialized:
            raise RuntimeError("screen is not initialised")
        if self.suspended:
            raise RuntimeError("screen is already suspended")
        self.suspended = True

    def resume(self) -> None:
        """Return to screen mode after ``suspend``."""
        if not self.suspended:
            raise RuntimeError("screen is not suspended")
        self.suspended = False

    def lines(self) -> list[str]:
        """Return the characters on the screen, one string per row."""
        with self._lock:
            return ["".join(char for char, _ in row) for row in self._cells]


def _clusters(text: str) -> list[tuple[str, int]]:
    """Split text into printable clusters with their cell widths."""
    clusters: list[tuple[str, int]] = []
    for char in text:
        width = wcwidth(char)
        if width < 0:
            continue
        if width == 0:
            if clusters:
                chars, cluster_width = clusters[-1]
                clusters[-1] = (chars + char, cluster_width)
            continue
        clusters.append((char, width))
    return clusters


def _trim_start(clusters: list[tuple[str, int]], limit: int) -> list[tuple[str, int]]:
    width = sum(w for _, w in clusters)
    start = 0
    while width > limit:
        width -= clusters[start][1]
        start += 1
    return clusters[start:]


def _trim_end(clusters: list[tuple[str, int]], limit: int) -> list[tuple[str, int]]:
    width = sum(w for _, w in clusters)
    end = len(clusters)
    while width > limit:
        end -= 1
        width -= clusters[end][1]
    return clusters[:end]


def print_text(
    screen: Screen,
    text: str,
    x: int,
    y: int,
    max_width: int,
    align: Align = Align.LEFT,
    style: Style = Style(),
) -> tuple[int, int]:
    """Print text on one row within ``max_width`` cells.

    Text that does not fit is cut at the end (left alignment), at the start
    (right alignment) or at both ends (centred). Returns the number of
    characters printed and the number of cells they take up.
    """
    if max_width <= 0 or not text:
        return 0, 0
    clusters = _clusters(text)
    total = sum(w for _, w in clusters)
    if total > max_width:
        excess = total - max_width
        if align is Align.RIGHT:
            clusters = _trim_start(clusters, max_width)
        elif align is Align.CENTER:
            clusters = _trim_end(_trim_start(clusters, total - excess // 2), max_width)
        else:
            clusters = _trim_end(clusters, max_width)

    width = sum(w for _, w in clusters)
    if align is Align.RIGHT:
        position = x + max_width - width
    elif align is Align.CENTER:
        position = x + (max_width - width) // 2
    else:
        position = x

    for chars, cell_width in clusters:
        screen.set_content(position, y, chars, style)
        for offset in range(1, cell_width):
            screen.set_content(position + offset, y, "", style)
        position += cell_width

    return sum(len(chars) for chars, _ in clusters), width
"""Characters used to draw box borders."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

HORIZONTAL_ELLIPSIS = "\u2026"


class Frame(NamedTuple):
    """The six characters needed to draw a rectangular frame."""

    horizontal: str
    vertical: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str


@dataclass
class BorderSet:
    """Border characters, with a separate set for focused primitives."""

    horizontal: str = "\u2500"
    vertical: str = "\u2502"
    top_left: str = "\u250c"
    top_right: str = "\u2510"
    bottom_left: str = "\u2514"
    bottom_right: str = "\u2518"

    left_t: str = "\u251c"
    right_t: str = "\u2524"
    top_t: str = "\u252c"
    bottom_t: str = "\u2534"
    cross: str = "\u253c"

    horizontal_focus: str = "\u2550"
    vertical_focus: str = "\u2551"
    top_left_focus: str = "\u2554"
    top_right_focus: str = "\u2557"
    bottom_left_focus: str = "\u255a"
    bottom_right_focus: str = "\u255d"

    def frame(self, focused: bool) -> Frame:
        """Return the frame characters for a focused or unfocused primitive."""
        if focused:
            return Frame(
                self.horizontal_focus,
                self.vertical_focus,
                self.top_left_focus,
                self.top_right_focus,
                self.bottom_left_focus,
                self.bottom_right_focus,
            )
        return Frame(
            self.horizontal,
            self.vertical,
            self.top_left,
            self.top_right,
            self.bottom_left,
            self.bottom_right,
        )


BORDERS = BorderSet()
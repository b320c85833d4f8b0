"""Translation of ANSI escape sequences into colour tags."""

from __future__ import annotations

import enum
from typing import Protocol


class _TextSink(Protocol):
    def write(self, text: str) -> object: ...


class _State(enum.Enum):
    TEXT = enum.auto()
    ESCAPE = enum.auto()
    SUBSTRING = enum.auto()
    CONTROL_SEQUENCE = enum.auto()


_ESC = "\x1b"
_RESET_TAG = "[-:-:-]"

_COLOR_NAMES = (
    "black",
    "maroon",
    "green",
    "olive",
    "navy",
    "purple",
    "teal",
    "silver",
    "gray",
    "red",
    "lime",
    "yellow",
    "blue",
    "fuchsia",
    "aqua",
    "white",
)

_SET_ATTRIBUTE = {
    "1": "b",
    "01": "b",
    "2": "d",
    "02": "d",
    "4": "u",
    "04": "u",
    "5": "l",
    "05": "l",
}
_CLEAR_ATTRIBUTES = {"22": "bd", "24": "u", "25": "l"}

_FOREGROUND = {str(n): n - 30 for n in range(30, 38)} | {
    str(n): n - 82 for n in range(90, 98)
}
_BACKGROUND = {str(n): n - 40 for n in range(40, 48)} | {
    str(n): n - 92 for n in range(100, 108)
}


def _atoi(text: str) -> int:
    try:
        return int(text)
    except ValueError:
        return 0


def _lookup_color(number: int) -> str:
    if 0 <= number <= 15:
        return _COLOR_NAMES[number]
    return "black"


def _hex_color(red: int, green: int, blue: int) -> str:
    return f"#{red:02x}{green:02x}{blue:02x}"


def _extended_color(args: list[str]) -> str:
    """Resolve the arguments following a 38 or 48 parameter to a colour."""
    if args[:1] == ["5"] and len(args) > 1:
        number = _atoi(args[1])
        if number <= 15:
            return _lookup_color(number)
        if number <= 231:
            cube = number - 16
            red, green, blue = cube // 36, (cube // 6) % 6, cube % 6
            return _hex_color(255 * red // 5, 255 * green // 5, 255 * blue // 5)
        if number <= 255:
            grey = 255 * (number - 232) // 23
            return _hex_color(grey, grey, grey)
        return ""
    if args[:1] == ["2"] and len(args) > 3:
        red, green, blue = (_atoi(field) for field in args[1:4])
        return _hex_color(red, green, blue)
    return ""


class AnsiWriter:
    """A text sink that turns ANSI escape codes into colour tags.

    Recognised colour and attribute sequences become tags; all other escape
    sequences are removed. The translated text goes to ``stream``. Parser
    state and the current attributes carry over from one write to the next.
    """

    def __init__(self, stream: _TextSink) -> None:
        self._stream = stream
        self._state = _State.TEXT
        self._parameters: list[str] = []
        self._intermediate: list[str] = []
        self._attributes = ""

    def write(self, text: str | bytes) -> int:
        """Translate ``text`` and write it out; return the length taken in."""
        length = len(text)
        if isinstance(text, (bytes, bytearray)):
            text = bytes(text).decode("utf-8", errors="replace")

        out: list[str] = []
        for char in text:
            if self._state is _State.ESCAPE:
                self._handle_escape(char, out)
            elif self._state is _State.CONTROL_SEQUENCE:
                self._handle_control(char, out)
            elif self._state is _State.SUBSTRING:
                if char == _ESC:
                    self._state = _State.ESCAPE
            elif char == _ESC:
                self._state = _State.ESCAPE
            else:
                out.append(char)

        self._stream.write("".join(out))
        return length

    def _handle_escape(self, char: str, out: list[str]) -> None:
        if char == "[":
            self._parameters.clear()
            self._intermediate.clear()
            self._state = _State.CONTROL_SEQUENCE
        elif char == "c":
            out.append(_RESET_TAG)
            self._state = _State.TEXT
        elif char in "P]X^_":
            self._state = _State.SUBSTRING
        else:
            self._state = _State.TEXT

    def _handle_control(self, char: str, out: list[str]) -> None:
        code = ord(char)
        if 0x30 <= code <= 0x3F:
            self._parameters.append(char)
        elif 0x20 <= code <= 0x2F:
            self._intermediate.append(char)
        elif 0x40 <= code <= 0x7E:
            params = "".join(self._parameters)
            if char == "E":
                out.append("\n" * (_atoi(params) or 1))
            elif char == "m":
                out.append(self._select_graphic_rendition(params))
            self._state = _State.TEXT
        else:
            self._state = _State.TEXT

    def _select_graphic_rendition(self, params: str) -> str:
        fields = params.split(";")
        if not params or fields == ["0"]:
            self._attributes = ""
            return _RESET_TAG

        foreground = background = ""
        for index, field in enumerate(fields):
            if field in _SET_ATTRIBUTE:
                flag = _SET_ATTRIBUTE[field]
                if flag not in self._attributes:
                    self._attributes += flag
            elif field in _CLEAR_ATTRIBUTES:
                for flag in _CLEAR_ATTRIBUTES[field]:
                    self._attributes = self._attributes.replace(flag, "", 1)
            elif field in _FOREGROUND:
                foreground = _lookup_color(_FOREGROUND[field])
            elif field == "39":
                foreground = "-"
            elif field in _BACKGROUND:
                background = _lookup_color(_BACKGROUND[field])
            elif field == "49":
                background = "-"
            elif field in ("38", "48"):
                color = _extended_color(fields[index + 1 :])
                if color:
                    if field == "38":
                        foreground = color
                    else:
                        background = color
                break

        if not (foreground or background or self._attributes):
            return ""
        colon = ":" if self._attributes else ""
        return f"[{foreground}:{background}{colon}{self._attributes}]"


def translate_ansi(text: str) -> str:
    """Return ``text`` with ANSI escape sequences replaced by colour tags."""
    parts: list[str] = []

    class _Collector:
        def write(self, chunk: str) -> int:
            parts.append(chunk)
            return len(chunk)

    AnsiWriter(_Collector()).write(text)
    return "".join(parts)
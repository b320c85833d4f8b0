"""Widgets, a flexbox layout, an in-memory screen and an event loop for terminal user interfaces."""

__version__ = "0.1.0"

__all__ = [
    "ansi",
    "application",
    "borders",
    "box",
    "button",
    "center",
    "checkbox",
    "events",
    "flex",
    "screen",
]
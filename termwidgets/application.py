"""The application: event loop, focus handling and screen updates."""

from __future__ import annotations

import queue
import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Optional

from .events import (
    ButtonMask,
    ErrorEvent,
    Key,
    KeyEvent,
    MouseAction,
    MouseEvent,
    ResizeEvent,
)
from .screen import Screen

REDRAW_PAUSE = 0.05
"""The minimum time in seconds between two redraws caused by resizing."""

DOUBLE_CLICK_INTERVAL = 0.5
"""The longest time in seconds between two clicks that form a double click."""

KeyCapture = Callable[[KeyEvent], Optional[KeyEvent]]
AppMouseCapture = Callable[
    [Optional[MouseEvent], MouseAction], "tuple[Optional[MouseEvent], MouseAction]"
]


@dataclass
class _QueuedUpdate:
    func: Callable[[], None]
    done: Optional[threading.Event] = None


_BUTTON_ACTIONS = (
    (
        ButtonMask.PRIMARY,
        MouseAction.LEFT_DOWN,
        MouseAction.LEFT_UP,
        MouseAction.LEFT_CLICK,
        MouseAction.LEFT_DOUBLE_CLICK,
    ),
    (
        ButtonMask.MIDDLE,
        MouseAction.MIDDLE_DOWN,
        MouseAction.MIDDLE_UP,
        MouseAction.MIDDLE_CLICK,
        MouseAction.MIDDLE_DOUBLE_CLICK,
    ),
    (
        ButtonMask.SECONDARY,
        MouseAction.RIGHT_DOWN,
        MouseAction.RIGHT_UP,
        MouseAction.RIGHT_CLICK,
        MouseAction.RIGHT_DOUBLE_CLICK,
    ),
)

_WHEEL_ACTIONS = (
    (ButtonMask.WHEEL_UP, MouseAction.SCROLL_UP),
    (ButtonMask.WHEEL_DOWN, MouseAction.SCROLL_DOWN),
    (ButtonMask.WHEEL_LEFT, MouseAction.SCROLL_LEFT),
    (ButtonMask.WHEEL_RIGHT, MouseAction.SCROLL_RIGHT),
)

_DOWN_ACTIONS = (MouseAction.LEFT_DOWN, MouseAction.MIDDLE_DOWN, MouseAction.RIGHT_DOWN)


class Application:
    """The top node of an application: owns the screen, root and focus.

    ``input_capture`` sees every key event first and may replace it or
    return ``None`` to stop it. ``mouse_capture`` does the same for mouse
    events together with their action. ``before_draw`` runs before the
    root is drawn and skips drawing it by returning true; ``after_draw``
    runs after the root was drawn. Ctrl-C stops the application.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._screen: Optional[Screen] = None
        self._focus: Any = None
        self._root: Any = None
        self._root_fullscreen = False
        self._mouse_enabled = False
        self.input_capture: Optional[KeyCapture] = None
        self.mouse_capture: Optional[AppMouseCapture] = None
        self.before_draw: Optional[Callable[[Screen], bool]] = None
        self.after_draw: Optional[Callable[[Screen], None]] = None
        self._queue: queue.Queue[Any] = queue.Queue()
        self._screen_replacement: queue.Queue[Optional[Screen]] = queue.Queue()
        self._mouse_capturing_primitive: Any = None
        self._last_mouse = (0, 0)
        self._mouse_down = (0, 0)
        self._last_mouse_click: Optional[float] = None
        self._last_mouse_buttons = ButtonMask.NONE

    @property
    def screen(self) -> Optional[Screen]:
        """The screen in use, or ``None`` when there is none."""
        with self._lock:
            return self._screen

    @property
    def root(self) -> Any:
        """The root primitive."""
        with self._lock:
            return self._root

    @property
    def focus(self) -> Any:
        """The primitive that has the keyboard focus, or ``None``."""
        with self._lock:
            return self._focus

    @property
    def mouse_enabled(self) -> bool:
        """Whether mouse events are reported."""
        with self._lock:
            return self._mouse_enabled

    def set_screen(self, screen: Optional[Screen]) -> Application:
        """Use the given screen; while running, the current one is replaced."""
        if screen is None:
            return self
        with self._lock:
            old = self._screen
            if old is None:
                self._screen = screen
        if old is None:
            screen.init()
            return self
        old.fini()
        self._screen_replacement.put(screen)
        return self

    def enable_mouse(self, enable: bool) -> Application:
        """Switch mouse events on or off."""
        with self._lock:
            if enable != self._mouse_enabled and self._screen is not None:
                if enable:
                    self._screen.enable_mouse()
                else:
                    self._screen.disable_mouse()
            self._mouse_enabled = enable
        return self

    def run(self) -> None:
        """Run the event loop until ``stop`` is called.

        An ``ErrorEvent`` from the screen stops the loop and is raised.
        """
        with self._lock:
            if self._screen is None:
                self._screen = Screen()
                self._screen.init()
                if self._mouse_enabled:
                    self._screen.enable_mouse()

        poller = threading.Thread(target=self._poll_events, daemon=True)
        app_error: Optional[ErrorEvent] = None
        last_redraw: Optional[float] = None
        redraw_timer: Optional[threading.Timer] = None
        try:
            self._draw()
            poller.start()
            while True:
                item = self._queue.get()
                if item is None:
                    break
                if isinstance(item, _QueuedUpdate):
                    try:
                        item.func()
                    finally:
                        if item.done is not None:
                            item.done.set()
                elif isinstance(item, KeyEvent):
                    self._handle_key(item)
                elif isinstance(item, ResizeEvent):
                    now = time.monotonic()
                    if last_redraw is not None and now - last_redraw < REDRAW_PAUSE:
                        if redraw_timer is not None:
                            redraw_timer.cancel()
                        redraw_timer = threading.Timer(
                            REDRAW_PAUSE, self._queue.put, args=(item,)
                        )
                        redraw_timer.daemon = True
                        redraw_timer.start()
                    screen = self.screen
                    if screen is None:
                        continue
                    last_redraw = time.monotonic()
                    screen.clear()
                    self._draw()
                elif isinstance(item, MouseEvent):
                    consumed, is_down = self._fire_mouse_actions(item)
                    if consumed:
                        self._draw()
                    self._last_mouse_buttons = item.buttons
                    if is_down:
                        self._mouse_down = item.position()
                elif isinstance(item, ErrorEvent):
                    app_error = item
                    self.stop()
        except BaseException:
            with self._lock:
                screen = self._screen
                self._screen = None
            if screen is not None:
                screen.fini()
            self._screen_replacement.put(None)
            raise
        finally:
            if redraw_timer is not None:
                redraw_timer.cancel()

        poller.join()
        with self._lock:
            self._screen = None
        if app_error is not None:
            raise app_error

    def _poll_events(self) -> None:
        while True:
            screen = self.screen
            if screen is None:
                self.queue_event(None)
                return
            event = screen.poll_event()
            if event is not None:
                self.queue_event(event)
                continue

            replacement = self._screen_replacement.get()
            if replacement is None:
                self.queue_event(None)
                return
            with self._lock:
                self._screen = replacement
                mouse = self._mouse_enabled
            try:
                replacement.init()
            except Exception as exc:
                self.queue_event(ErrorEvent(str(exc)))
                continue
            if mouse:
                replacement.enable_mouse()
            self._draw()

    def _handle_key(self, event: KeyEvent) -> None:
        with self._lock:
            root = self._root
            capture = self.input_capture

        redraw = False
        if capture is not None:
            captured = capture(event)
            if captured is None:
                self._draw()
                return
            event = captured
            redraw = True

        if event.key == Key.CTRL_C:
            self.stop()
            return

        if root is not None and root.has_focus():
            handler = root.input_handler()
            if handler is not None:
                handler(event, self.set_focus)
                redraw = True

        if redraw:
            self._draw()

    def _fire_mouse_actions(self, event: MouseEvent) -> tuple[bool, bool]:
        consumed = False
        is_down = False
        target: Any = None
        current: Optional[MouseEvent] = event

        def fire(action: MouseAction) -> None:
            nonlocal consumed, is_down, target, current
            if action in _DOWN_ACTIONS:
                is_down = True

            if self.mouse_capture is not None:
                current, action = self.mouse_capture(current, action)
                if current is None:
                    consumed = True
                    return

            if self._mouse_capturing_primitive is not None:
                primitive = self._mouse_capturing_primitive
                target = primitive
            elif target is not None:
                primitive = target
            else:
                primitive = self._root

            capturing = None
            if primitive is not None:
                handler = primitive.mouse_handler()
                if handler is not None:
                    was_consumed, capturing = handler(action, current, self.set_focus)
                    if was_consumed:
                        consumed = True
            self._mouse_capturing_primitive = capturing

        x, y = event.position()
        buttons = event.buttons
        click_moved = (x, y) != self._mouse_down
        changes = buttons ^ self._last_mouse_buttons

        if (x, y) != self._last_mouse:
            fire(MouseAction.MOVE)
            self._last_mouse = (x, y)

        for button, down, up, click, double_click in _BUTTON_ACTIONS:
            if not changes & button:
                continue
            if buttons & button:
                fire(down)
                continue
            fire(up)
            if not click_moved and current is not None:
                now = time.monotonic()
                last = self._last_mouse_click
                if last is None or last + DOUBLE_CLICK_INTERVAL < now:
                    fire(click)
                    self._last_mouse_click = time.monotonic()
                else:
                    fire(double_click)
                    self._last_mouse_click = None

        for button, action in _WHEEL_ACTIONS:
            if buttons & button:
                fire(action)

        return consumed, is_down

    def stop(self) -> None:
        """Stop the application so that ``run`` returns."""
        with self._lock:
            screen = self._screen
            if screen is None:
                return
            self._screen = None
            screen.fini()
            self._screen_replacement.put(None)

    def suspend(self, func: Callable[[], None]) -> bool:
        """Leave screen mode, call ``func``, then return to screen mode.

        Returns false without calling ``func`` if there is no screen or it
        cannot be suspended.
        """
        screen = self.screen
        if screen is None:
            return False
        try:
            screen.suspend()
        except RuntimeError:
            return False

        func()

        with self._lock:
            current = self._screen
        if current is not screen:
            screen.fini()
            if current is None:
                return True
        else:
            try:
                screen.resume()
            except RuntimeError:
                pass
        return True

    def draw(self) -> Application:
        """Redraw the screen from within the event loop.

        Blocks until the loop has drawn, so it must not be called from the
        loop itself.
        """
        self.queue_update(self._draw)
        return self

    def force_draw(self) -> Application:
        """Redraw the screen immediately."""
        return self._draw()

    def _draw(self) -> Application:
        with self._lock:
            screen = self._screen
            root = self._root
            if screen is None or root is None:
                return self
            if self._root_fullscreen:
                width, height = screen.size()
                root.set_rect(0, 0, width, height)
            if self.before_draw is not None and self.before_draw(screen):
                screen.show()
                return self
            root.draw(screen)
            if self.after_draw is not None:
                self.after_draw(screen)
            screen.show()
        return self

    def sync(self) -> Application:
        """Resynchronise the whole screen during the next loop cycle."""

        def resync() -> None:
            screen = self.screen
            if screen is not None:
                screen.sync()

        self._queue.put(_QueuedUpdate(resync))
        return self

    def set_root(self, root: Any, fullscreen: bool) -> Application:
        """Set the root primitive and give it the focus.

        With ``fullscreen`` the root is resized to fill the screen on each draw.
        """
        with self._lock:
            self._root = root
            self._root_fullscreen = fullscreen
            if self._screen is not None:
                self._screen.clear()
        self.set_focus(root)
        return self

    def resize_to_full_screen(self, primitive: Any) -> Application:
        """Resize a primitive to fill the entire screen."""
        screen = self.screen
        if screen is None:
            raise RuntimeError("the application has no screen")
        width, height = screen.size()
        primitive.set_rect(0, 0, width, height)
        return self

    def set_focus(self, primitive: Any) -> Application:
        """Move the focus to a primitive, blurring the previous one."""
        with self._lock:
            if self._focus is not None:
                self._focus.blur()
            self._focus = primitive
            if self._screen is not None:
                self._screen.hide_cursor()
        if primitive is not None:
            primitive.focus(self.set_focus)
        return self

    def queue_update(self, func: Callable[[], None]) -> Application:
        """Run ``func`` in the event loop and wait until it has run."""
        done = threading.Event()
        self._queue.put(_QueuedUpdate(func, done))
        done.wait()
        return self

    def queue_update_draw(self, func: Callable[[], None]) -> Application:
        """Like ``queue_update`` but redraws the screen after ``func``."""

        def update() -> None:
            func()
            self._draw()

        return self.queue_update(update)

    def queue_event(self, event: Any) -> Application:
        """Send an event to the event loop; ``None`` ends the loop."""
        self._queue.put(event)
        return self
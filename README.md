# termwidgets

Building blocks for terminal user interfaces: a small set of widgets, a
flexbox layout, an in-memory screen to draw them on, and an application loop
that routes key and mouse events to them.

## Modules

| Module                    | Contents                                                                      |
|---------------------------|-------------------------------------------------------------------------------|
| `termwidgets.box`         | `Box`: the base widget, with a rectangle, optional border and title, padding and focus |
| `termwidgets.button`      | `Button`: a labelled box that calls `selected_func` on Enter or a click        |
| `termwidgets.checkbox`    | `Checkbox`: a boolean field, toggled with Enter, space or a click             |
| `termwidgets.center`      | `Center`: shows another widget at a requested size in the middle of its area  |
| `termwidgets.flex`        | `Flex`, `FlexItem`, `FLEX_ROW`, `FLEX_COLUMN`: a flexbox layout                |
| `termwidgets.application` | `Application`: the event loop, focus handling and redraws                     |
| `termwidgets.screen`      | `Screen`, `Style`, `Attr`, `Align`, `print_text`                              |
| `termwidgets.events`      | `KeyEvent`, `MouseEvent`, `ResizeEvent`, `ErrorEvent`, `Key`, `ButtonMask`, `MouseAction` |
| `termwidgets.borders`     | `BorderSet`, `BORDERS`: the characters used to draw frames, plain and focused |
| `termwidgets.ansi`        | `AnsiWriter`, `translate_ansi`: turn ANSI escape codes into colour tags       |

## Installation

```
pip install termwidgets
```

The only runtime dependency is `wcwidth`, used to measure the cell width of
wide characters.

## Drawing widgets

Widgets draw onto a `Screen`, a grid of styled cells held in memory.
`Screen.lines()` returns what is on it, one string per row:

```python
from termwidgets.box import Box
from termwidgets.screen import Screen

screen = Screen(30, 5)
screen.init()

box = Box()
box.set_rect(0, 0, 30, 5)
box.border = True
box.title = "Hello"
box.draw(screen)

for line in screen.lines():
    print(line)
```

A box's look is set through attributes such as `border`, `title`,
`title_color`, `title_align`, `background_color`, `border_color` and
`border_attributes`. `Box.inner_rect()` gives the area left for content once
border and padding are taken off; `set_border_padding(top, bottom, left,
right)` changes the padding. A focused widget's border is drawn with the
double-line characters of `BORDERS`.

`print_text(screen, text, x, y, max_width, align, style)` prints one row of
text, cutting it to fit, and returns the number of characters printed and the
cells they take up.

## Layout

`Flex` arranges its items side by side (`FLEX_COLUMN`, the default) or
stacked (`FLEX_ROW`, set through `direction`). Each item has either a fixed
size or a proportion of the space that is left:

```python
from termwidgets.box import Box
from termwidgets.flex import Flex

flex = Flex()
flex.add_item(Box(), 0, 1, False)   # one share of the free width
flex.add_item(Box(), 0, 2, True)    # two shares, receives the focus
flex.add_item(Box(), 20, 1, False)  # always 20 columns wide

print(len(flex))   # 3
first = flex[0]
```

Items can be changed later with `resize_item`, `resize_item_at`,
`remove_item` and `clear`; `items` returns a copy of the entries. With
`full_screen` set, the layout takes up the whole screen when drawn.

`Center(primitive, width, height)` shows a widget at the requested size in
the middle of the space it is given, clamped when the space is smaller;
`resize` and `set_primitive` change it.

## Running an application

`Application` owns a screen and a root widget. Key events go to the root and
on to the widget with focus, mouse events are turned into actions such as
clicks and double clicks, and the screen is redrawn after each event that was
handled. Events reach the loop from `Screen.poll_event()`, so with the
in-memory screen they are posted to it:

```python
from termwidgets.application import Application
from termwidgets.button import Button
from termwidgets.events import Key, KeyEvent
from termwidgets.screen import Screen

screen = Screen(40, 10)
app = Application()
app.set_screen(screen)

button = Button("Close")
button.selected_func = app.stop
app.set_root(button, True)

screen.post_event(KeyEvent(Key.ENTER))
app.run()
print(screen.lines()[0])
```

`run()` returns once `stop()` is called or Ctrl-C arrives; an `ErrorEvent`
posted by the screen stops the loop and is raised. Without a screen set,
`run()` creates a default 80×25 `Screen`.

From other threads, hand work to the loop with `queue_update(func)` or
`queue_update_draw(func)` (both wait until `func` has run) and feed it events
with `queue_event(event)`. `draw()` asks the loop to redraw and waits for it,
so it must not be called from inside the loop; `force_draw()` redraws at
once. `set_focus(widget)` moves the keyboard focus, `enable_mouse(enable)`
switches mouse reporting, and `suspend(func)` leaves screen mode while
`func` runs. `input_capture`, `mouse_capture`, `before_draw` and `after_draw`
let you intercept events and drawing.

## ANSI text

Text written by other tools often carries ANSI escape codes. They can be
turned into colour tags:

```python
from termwidgets.ansi import translate_ansi

translate_ansi("\x1b[31mred\x1b[0m")
# '[maroon:]red[-:-:-]'
```

`AnsiWriter(stream)` does the same for text written to it piece by piece and
passes the result on to `stream`.

## What it does not do

`Screen` keeps its cells in memory: it does not read the keyboard or mouse of
a real terminal and does not write to one. To put widgets on a terminal you
need to supply the events and render `lines()` yourself. The colour tags
produced by `translate_ansi` are plain text; `print_text` prints them as they
are. The widget set is limited to the ones listed above.

## Running the tests

```
pip install termwidgets[test]
pytest
```
"""Focusable inputs: URL field, method selector, body editor, response viewer.

These are plain models, not Textual widgets. The controller forwards keys to
whichever one owns the current mode, and the panels in hylea.tui.panels
display whatever render() returns. Dimensions are pushed in via resize();
an input never asks the terminal how big it is.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from rich.cells import cell_len, chop_cells
from rich.text import Text

from hylea.core.methods import METHOD_ORDER, HttpMethod
from hylea.tui.events import CursorPlaced, Effect, KeyPress, Scrolled, ValueChanged

CURSOR_STYLE = "reverse"
TAB_SPACES = "    "


def _fit(lines: list[Text], width: int, height: int) -> Text:
    """Clip/pad lines to exactly width x height cells."""
    if width <= 0 or height <= 0:
        return Text()
    rows = list(lines[:height])
    rows.extend(Text() for _ in range(height - len(rows)))
    for row in rows:
        row.truncate(width, overflow="crop", pad=True)
    return Text("\n").join(rows)


def _with_cursor(visible: str, cursor: int | None) -> Text:
    """Render a line with an inverted cell at cursor (block past the end)."""
    line = Text(visible)
    if cursor is None:
        return line
    if cursor < len(visible):
        line.stylize(CURSOR_STYLE, cursor, cursor + 1)
    else:
        line.append(" ", style=CURSOR_STYLE)
    return line


def _scroll_to(offset: int, position: int, span: int) -> int:
    """Smallest change to offset that keeps position inside [offset, offset+span)."""
    span = max(1, span)
    if position < offset:
        return position
    if position >= offset + span:
        return position - span + 1
    return offset


def _chop(line: str, width: int) -> list[str]:
    """Split line into pieces of at most width terminal cells."""
    if width <= 0 or not line:
        return []
    # A double-width char in a one-cell box gets a piece of its own.
    return [piece for piece in chop_cells(line, width) if piece]


def _clip(text: str, width: int) -> str:
    """Longest prefix of text that fits in width cells."""
    pieces = _chop(text, width)
    return pieces[0] if pieces else ""


def _cursor_cells(line: str, start: int, cursor: int) -> int:
    """Cells from line[start] through the cursor cell inclusive."""
    under = max(1, cell_len(line[cursor])) if cursor < len(line) else 1
    return cell_len(line[start:cursor]) + under


def _scroll_line_to(offset: int, line: str, cursor: int, width: int) -> int:
    """Smallest change to the char offset that keeps the cursor cell in view."""
    width = max(1, width)
    if cursor < offset:
        return cursor
    # Printable chars take at least one cell, so no more than width of them fit.
    offset = max(offset, cursor - width)
    while offset < cursor and _cursor_cells(line, offset, cursor) > width:
        offset += 1
    return offset


class FocusableInput(ABC):
    """An editable region that may hold exclusive keyboard focus.

    handle() and paste() are no-ops returning None while unfocused.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._focused = False
        self.width = 0
        self.height = 0

    @property
    def focused(self) -> bool:
        return self._focused

    def focus(self) -> Effect | None:
        self._focused = True
        return None

    def blur(self) -> None:
        self._focused = False

    def handle(self, key: KeyPress) -> Effect | None:
        if not self._focused:
            return None
        return self._handle(key)

    def paste(self, text: str) -> Effect | None:
        if not self._focused:
            return None
        return self._paste(text)

    def _paste(self, text: str) -> Effect | None:
        """Read-only inputs ignore pasted text."""
        return None

    def resize(self, width: int, height: int) -> None:
        self.width = max(0, width)
        self.height = max(0, height)
        self._reflow()

    def _reflow(self) -> None:
        pass

    @abstractmethod
    def _handle(self, key: KeyPress) -> Effect | None:
        ...

    @abstractmethod
    def render(self) -> Text:
        ...


class TextField(FocusableInput):
    """Single-line editor with horizontal scrolling."""

    def __init__(self, name: str, value: str = "") -> None:
        super().__init__(name)
        self._value = value
        self.cursor = len(value)
        self._offset = 0

    @property
    def value(self) -> str:
        return self._value

    def set_value(self, value: str) -> None:
        self._value = value
        self.cursor = len(value)
        self._reflow()

    def focus(self) -> Effect | None:
        super().focus()
        self._reflow()
        return self._cursor_effect()

    def _cursor_effect(self) -> CursorPlaced:
        return CursorPlaced(self.name, cell_len(self._value[self._offset : self.cursor]))

    def _edit(self, value: str, cursor: int) -> ValueChanged:
        self._value = value
        self.cursor = cursor
        self._reflow()
        return ValueChanged(self.name)

    def _move(self, cursor: int) -> CursorPlaced:
        self.cursor = max(0, min(cursor, len(self._value)))
        self._reflow()
        return self._cursor_effect()

    def _handle(self, key: KeyPress) -> Effect | None:
        value, cursor = self._value, self.cursor
        k = key.key

        if k == "backspace":
            if cursor == 0:
                return None
            return self._edit(value[: cursor - 1] + value[cursor:], cursor - 1)
        if k == "delete":
            if cursor >= len(value):
                return None
            return self._edit(value[:cursor] + value[cursor + 1 :], cursor)
        if k == "ctrl+u":
            return self._edit(value[cursor:], 0)
        if k == "ctrl+k":
            return self._edit(value[:cursor], cursor)
        if k == "ctrl+w":
            start = len(value[:cursor].rstrip())
            while start > 0 and not value[start - 1].isspace():
                start -= 1
            return self._edit(value[:start] + value[cursor:], start)

        if k == "left":
            return self._move(cursor - 1)
        if k == "right":
            return self._move(cursor + 1)
        if k in ("home", "ctrl+a"):
            return self._move(0)
        if k in ("end", "ctrl+e"):
            return self._move(len(value))

        ch = key.printable
        if ch is not None:
            return self._edit(value[:cursor] + ch + value[cursor:], cursor + 1)
        return None

    def _paste(self, text: str) -> Effect | None:
        # Single line: newlines and other control characters are dropped.
        clean = "".join(ch for ch in text if ch.isprintable())
        if not clean:
            return None
        value, cursor = self._value, self.cursor
        return self._edit(value[:cursor] + clean + value[cursor:], cursor + len(clean))

    def _reflow(self) -> None:
        value = self._value
        self._offset = _scroll_line_to(self._offset, value, self.cursor, self.width)
        # Don't leave blank space on the left after deletions.
        while self._offset > 0 and cell_len(value[self._offset - 1 :]) + 1 <= self.width:
            self._offset -= 1

    def render(self) -> Text:
        visible = _clip(self._value[self._offset :], self.width)
        cursor = self.cursor - self._offset if self._focused else None
        return _fit([_with_cursor(visible, cursor)], self.width, self.height)


class MethodSelector(FocusableInput):
    """Cycles through the closed HttpMethod set by index."""

    _NEXT_KEYS = frozenset({"down", "right", "j", "space", "tab"})
    _PREV_KEYS = frozenset({"up", "left", "k", "shift+tab"})

    def __init__(self, name: str = "method", value: HttpMethod = HttpMethod.GET) -> None:
        super().__init__(name)
        self.index = METHOD_ORDER.index(value)

    @property
    def value(self) -> HttpMethod:
        return METHOD_ORDER[self.index]

    def set_value(self, value: HttpMethod) -> None:
        self.index = METHOD_ORDER.index(value)

    def _handle(self, key: KeyPress) -> Effect | None:
        if key.key in self._NEXT_KEYS:
            step = 1
        elif key.key in self._PREV_KEYS:
            step = -1
        else:
            return None
        self.index = (self.index + step) % len(METHOD_ORDER)
        return ValueChanged(self.name)

    def render(self) -> Text:
        label = Text(self.value.value, style="bold")
        if self._focused:
            label.stylize(CURSOR_STYLE)
        return _fit([label], self.width, self.height)


class BodyEditor(FocusableInput):
    """Multi-line editor for the request body."""

    def __init__(self, name: str = "body", text: str = "") -> None:
        super().__init__(name)
        self.lines: list[str] = text.split("\n")
        self.row = len(self.lines) - 1
        self.col = len(self.lines[-1])
        self._scroll_row = 0
        self._scroll_col = 0

    @property
    def text(self) -> str:
        return "\n".join(self.lines)

    def set_text(self, text: str) -> None:
        self.lines = text.split("\n")
        self.row = len(self.lines) - 1
        self.col = len(self.lines[-1])
        self._reflow()

    def focus(self) -> Effect | None:
        super().focus()
        self._reflow()
        return self._cursor_effect()

    def _cursor_effect(self) -> CursorPlaced:
        line = self.lines[self.row]
        column = cell_len(line[self._scroll_col : self.col])
        return CursorPlaced(self.name, column, self.row - self._scroll_row)

    def _insert(self, s: str) -> ValueChanged:
        line = self.lines[self.row]
        self.lines[self.row] = line[: self.col] + s + line[self.col :]
        self.col += len(s)
        self._reflow()
        return ValueChanged(self.name)

    def _paste(self, text: str) -> Effect | None:
        text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\t", TAB_SPACES)
        text = "".join(ch for ch in text if ch == "\n" or ch.isprintable())
        if not text:
            return None
        line = self.lines[self.row]
        pieces = text.split("\n")
        last = pieces[-1]
        pieces[0] = line[: self.col] + pieces[0]
        pieces[-1] = pieces[-1] + line[self.col :]
        self.lines[self.row : self.row + 1] = pieces
        self.row += len(pieces) - 1
        self.col = len(last) if len(pieces) > 1 else self.col + len(last)
        self._reflow()
        return ValueChanged(self.name)

    def _newline(self) -> ValueChanged:
        line = self.lines[self.row]
        self.lines[self.row : self.row + 1] = [line[: self.col], line[self.col :]]
        self.row += 1
        self.col = 0
        self._reflow()
        return ValueChanged(self.name)

    def _backspace(self) -> Effect | None:
        if self.col > 0:
            line = self.lines[self.row]
            self.lines[self.row] = line[: self.col - 1] + line[self.col :]
            self.col -= 1
        elif self.row > 0:
            prev = self.lines[self.row - 1]
            self.lines[self.row - 1 : self.row + 1] = [prev + self.lines[self.row]]
            self.row -= 1
            self.col = len(prev)
        else:
            return None
        self._reflow()
        return ValueChanged(self.name)

    def _delete(self) -> Effect | None:
        line = self.lines[self.row]
        if self.col < len(line):
            self.lines[self.row] = line[: self.col] + line[self.col + 1 :]
        elif self.row < len(self.lines) - 1:
            self.lines[self.row : self.row + 2] = [line + self.lines[self.row + 1]]
        else:
            return None
        self._reflow()
        return ValueChanged(self.name)

    def _move_to(self, row: int, col: int) -> CursorPlaced:
        self.row = max(0, min(row, len(self.lines) - 1))
        self.col = max(0, min(col, len(self.lines[self.row])))
        self._reflow()
        return self._cursor_effect()

    def _handle(self, key: KeyPress) -> Effect | None:
        k = key.key
        if k == "enter":
            return self._newline()
        if k == "tab":
            return self._insert(TAB_SPACES)
        if k == "backspace":
            return self._backspace()
        if k == "delete":
            return self._delete()

        if k == "left":
            if self.col == 0 and self.row > 0:
                return self._move_to(self.row - 1, len(self.lines[self.row - 1]))
            return self._move_to(self.row, self.col - 1)
        if k == "right":
            if self.col == len(self.lines[self.row]) and self.row < len(self.lines) - 1:
                return self._move_to(self.row + 1, 0)
            return self._move_to(self.row, self.col + 1)
        if k == "up":
            return self._move_to(self.row - 1, self.col)
        if k == "down":
            return self._move_to(self.row + 1, self.col)
        if k == "pageup":
            return self._move_to(self.row - max(1, self.height), self.col)
        if k == "pagedown":
            return self._move_to(self.row + max(1, self.height), self.col)
        if k in ("home", "ctrl+a"):
            return self._move_to(self.row, 0)
        if k in ("end", "ctrl+e"):
            return self._move_to(self.row, len(self.lines[self.row]))

        ch = key.printable
        if ch is not None:
            return self._insert(ch)
        return None

    def _reflow(self) -> None:
        self._scroll_row = _scroll_to(self._scroll_row, self.row, self.height)
        line = self.lines[self.row]
        self._scroll_col = _scroll_line_to(self._scroll_col, line, self.col, self.width)

    def render(self) -> Text:
        rows = []
        visible = self.lines[self._scroll_row : self._scroll_row + self.height]
        for i, line in enumerate(visible, start=self._scroll_row):
            segment = _clip(line[self._scroll_col :], self.width)
            cursor = self.col - self._scroll_col if (self._focused and i == self.row) else None
            rows.append(_with_cursor(segment, cursor))
        return _fit(rows, self.width, self.height)


def wrap_lines(content: str, width: int) -> list[str]:
    """Hard-wrap content to width cells, preserving blank lines."""
    if width <= 0:
        return []
    wrapped: list[str] = []
    for line in content.expandtabs(4).split("\n"):
        wrapped.extend(_chop(line, width) or [""])
    return wrapped


class ResponseViewer(FocusableInput):
    """Read-only, soft-wrapped, scrollable view of the response."""

    def __init__(self, name: str = "response") -> None:
        super().__init__(name)
        self.content = ""
        self.style = ""
        self.offset = 0
        self._wrapped: list[str] = []

    def set_content(self, content: str, style: str = "") -> None:
        self.content = content
        self.style = style
        self.offset = 0
        self._reflow()

    @property
    def max_offset(self) -> int:
        return max(0, len(self._wrapped) - self.height)

    def _scroll(self, offset: int) -> Scrolled:
        self.offset = max(0, min(offset, self.max_offset))
        return Scrolled(self.name, self.offset)

    def _handle(self, key: KeyPress) -> Effect | None:
        k = key.key
        page = max(1, self.height)
        if k in ("down", "j"):
            return self._scroll(self.offset + 1)
        if k in ("up", "k"):
            return self._scroll(self.offset - 1)
        if k in ("pagedown", "space"):
            return self._scroll(self.offset + page)
        if k == "pageup":
            return self._scroll(self.offset - page)
        if k in ("home", "g"):
            return self._scroll(0)
        if k in ("end", "G"):
            return self._scroll(self.max_offset)
        return None

    def _reflow(self) -> None:
        self._wrapped = wrap_lines(self.content, self.width)
        self.offset = max(0, min(self.offset, self.max_offset))

    def render(self) -> Text:
        visible = self._wrapped[self.offset : self.offset + self.height]
        return _fit([Text(line, style=self.style) for line in visible], self.width, self.height)

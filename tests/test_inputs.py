"""Tests for the focusable input models."""

import pytest
from rich.cells import cell_len

from hylea.core.methods import HttpMethod
from hylea.tui.events import CursorPlaced, KeyPress, Scrolled, ValueChanged
from hylea.tui.inputs import (
    BodyEditor,
    MethodSelector,
    ResponseViewer,
    TextField,
    wrap_lines,
)


def _type(widget, text: str) -> None:
    for ch in text:
        widget.handle(KeyPress.char(ch))


def _keys(widget, *names: str) -> None:
    for name in names:
        widget.handle(KeyPress(name))


def _rows(widget) -> list[str]:
    return widget.render().plain.split("\n")


ALL_INPUTS = [
    pytest.param(lambda: TextField("url"), id="text-field"),
    pytest.param(lambda: MethodSelector(), id="method"),
    pytest.param(lambda: BodyEditor(), id="body"),
    pytest.param(lambda: ResponseViewer(), id="response"),
]


class TestFocusContract:
    @pytest.mark.parametrize("factory", ALL_INPUTS)
    def test_unfocused_input_ignores_keys(self, factory):
        widget = factory()
        widget.resize(20, 3)
        before = widget.render()
        for key in (KeyPress.char("x"), KeyPress("backspace"), KeyPress("down"), KeyPress("enter")):
            assert widget.handle(key) is None
        assert widget.render() == before

    @pytest.mark.parametrize("factory", ALL_INPUTS)
    def test_focus_and_blur_toggle_focused(self, factory):
        widget = factory()
        assert not widget.focused
        widget.focus()
        assert widget.focused
        widget.blur()
        assert not widget.focused

    @pytest.mark.parametrize("factory", ALL_INPUTS)
    @pytest.mark.parametrize("width, height", [(10, 1), (15, 4), (1, 1)])
    def test_render_is_exactly_the_supplied_size(self, factory, width, height):
        widget = factory()
        widget.focus()
        widget.resize(width, height)
        rows = _rows(widget)
        assert len(rows) == height
        assert all(len(row) == width for row in rows)

    @pytest.mark.parametrize("factory", ALL_INPUTS)
    def test_zero_size_renders_nothing(self, factory):
        widget = factory()
        widget.resize(0, 0)
        assert widget.render().plain == ""


class TestTextField:
    @pytest.fixture
    def field(self):
        field = TextField("url")
        field.resize(40, 1)
        field.focus()
        return field

    def test_focus_places_cursor(self):
        field = TextField("url", "http://x")
        field.resize(40, 1)
        assert field.focus() == CursorPlaced("url", 8)

    def test_typing_inserts_at_cursor(self, field):
        _type(field, "http://exmple.test")
        _keys(field, *["left"] * 9)
        assert field.handle(KeyPress.char("a")) == ValueChanged("url")
        assert field.value == "http://example.test"

    def test_space_is_inserted(self, field):
        _type(field, "a b")
        assert field.value == "a b"

    def test_backspace_and_delete(self, field):
        _type(field, "abcd")
        _keys(field, "backspace")
        assert field.value == "abc"
        _keys(field, "home", "delete")
        assert field.value == "bc"

    def test_backspace_at_start_is_noop(self, field):
        _type(field, "ab")
        _keys(field, "home")
        assert field.handle(KeyPress("backspace")) is None
        assert field.value == "ab"

    def test_home_end_and_emacs_aliases(self, field):
        _type(field, "abc")
        assert field.handle(KeyPress("ctrl+a")) == CursorPlaced("url", 0)
        assert field.cursor == 0
        _keys(field, "ctrl+e")
        assert field.cursor == 3
        _keys(field, "home")
        assert field.cursor == 0
        _keys(field, "end")
        assert field.cursor == 3

    def test_cursor_is_clamped(self, field):
        _type(field, "ab")
        _keys(field, "right", "right")
        assert field.cursor == 2
        _keys(field, "home", "left")
        assert field.cursor == 0

    def test_kill_keys(self, field):
        _type(field, "http://host/path")
        _keys(field, *["left"] * 5, "ctrl+k")
        assert field.value == "http://host"
        _keys(field, "ctrl+u")
        assert field.value == ""

    def test_ctrl_w_deletes_previous_word(self, field):
        _type(field, "alpha beta  ")
        _keys(field, "ctrl+w")
        assert field.value == "alpha "
        _keys(field, "ctrl+w")
        assert field.value == ""

    def test_control_keys_are_not_inserted(self, field):
        assert field.handle(KeyPress("ctrl+x", "\x18")) is None
        assert field.value == ""

    def test_long_value_scrolls_to_keep_cursor_visible(self):
        field = TextField("url", "0123456789abcdef")
        field.resize(8, 1)
        field.focus()
        assert field.render().plain == "9abcdef "
        _keys(field, "home")
        assert field.render().plain == "01234567"

    def test_unfocused_render_has_no_cursor(self):
        field = TextField("url", "abc")
        field.resize(5, 1)
        assert field.render().plain == "abc  "
        assert not field.render().spans


class TestMethodSelector:
    def test_defaults_to_get(self):
        assert MethodSelector().value is HttpMethod.GET

    def test_cycles_through_enum(self):
        selector = MethodSelector()
        selector.focus()
        assert selector.handle(KeyPress("down")) == ValueChanged("method")
        assert selector.value is HttpMethod.POST
        _keys(selector, "down")
        assert selector.value is HttpMethod.GET
        _keys(selector, "up")
        assert selector.value is HttpMethod.POST

    def test_other_keys_are_ignored(self):
        selector = MethodSelector()
        selector.focus()
        assert selector.handle(KeyPress.char("x")) is None
        assert selector.value is HttpMethod.GET

    def test_renders_method_name(self):
        selector = MethodSelector(value=HttpMethod.POST)
        selector.resize(4, 1)
        assert selector.render().plain == "POST"


class TestBodyEditor:
    @pytest.fixture
    def editor(self):
        editor = BodyEditor()
        editor.resize(20, 4)
        editor.focus()
        return editor

    def test_enter_splits_lines(self, editor):
        _type(editor, '{"a":1}')
        _keys(editor, "left", "enter")
        assert editor.text == '{"a":1\n}'
        assert (editor.row, editor.col) == (1, 0)

    def test_tab_inserts_spaces(self, editor):
        _keys(editor, "tab")
        _type(editor, "x")
        assert editor.text == "    x"

    def test_backspace_joins_lines(self, editor):
        _type(editor, "ab")
        _keys(editor, "enter")
        _type(editor, "cd")
        _keys(editor, "home", "backspace")
        assert editor.text == "abcd"
        assert (editor.row, editor.col) == (0, 2)

    def test_delete_joins_next_line(self, editor):
        editor.set_text("ab\ncd")
        _keys(editor, "up", "end", "delete")
        assert editor.text == "abcd"

    def test_backspace_at_origin_is_noop(self, editor):
        assert editor.handle(KeyPress("backspace")) is None

    def test_vertical_movement_clamps_column(self, editor):
        editor.set_text("long line\nab")
        _keys(editor, "up", "end", "down")
        assert (editor.row, editor.col) == (1, 2)

    def test_left_right_wrap_across_lines(self, editor):
        editor.set_text("ab\ncd")
        _keys(editor, "home", "left")
        assert (editor.row, editor.col) == (0, 2)
        _keys(editor, "right")
        assert (editor.row, editor.col) == (1, 0)

    def test_viewport_follows_cursor(self):
        editor = BodyEditor(text="\n".join(f"line{i}" for i in range(10)))
        editor.resize(10, 3)
        editor.focus()
        assert _rows(editor)[-1].startswith("line9")
        _keys(editor, "pageup", "pageup", "pageup", "pageup")
        assert _rows(editor)[0].startswith("line0")

    def test_set_text_round_trips(self, editor):
        editor.set_text('{\n  "k": "v"\n}')
        assert editor.text == '{\n  "k": "v"\n}'


class TestResponseViewer:
    def test_content_wraps_to_width(self):
        viewer = ResponseViewer()
        viewer.resize(4, 3)
        viewer.set_content("abcdefghij")
        assert _rows(viewer) == ["abcd", "efgh", "ij  "]

    def test_scrolling(self):
        viewer = ResponseViewer()
        viewer.resize(10, 2)
        viewer.set_content("\n".join(str(i) for i in range(6)))
        viewer.focus()
        assert viewer.handle(KeyPress("down")) == Scrolled("response", 1)
        assert _rows(viewer)[0].strip() == "1"
        _keys(viewer, "G")
        assert viewer.offset == 4
        _keys(viewer, "down")
        assert viewer.offset == 4
        _keys(viewer, "g")
        assert viewer.offset == 0
        _keys(viewer, "pagedown")
        assert viewer.offset == 2

    def test_set_content_resets_scroll(self):
        viewer = ResponseViewer()
        viewer.resize(10, 2)
        viewer.set_content("a\nb\nc\nd")
        viewer.focus()
        _keys(viewer, "end")
        viewer.set_content("x\ny\nz")
        assert viewer.offset == 0

    def test_shrinking_content_clamps_offset_on_resize(self):
        viewer = ResponseViewer()
        viewer.resize(10, 2)
        viewer.set_content("a\nb\nc\nd")
        viewer.focus()
        _keys(viewer, "end")
        viewer.resize(10, 10)
        assert viewer.offset == 0

    def test_style_applies_to_rows(self):
        viewer = ResponseViewer()
        viewer.resize(10, 1)
        viewer.set_content("boom", style="bold red")
        assert any(str(span.style) == "bold red" for span in viewer.render().spans)


@pytest.mark.parametrize(
    "content, width, expected",
    [
        ("", 5, [""]),
        ("abc", 5, ["abc"]),
        ("abcdef", 3, ["abc", "def"]),
        ("a\n\nb", 5, ["a", "", "b"]),
        ("\tx", 10, ["    x"]),
        ("abc", 0, []),
        ("日本語のテキストです", 10, ["日本語のテ", "キストです"]),
        ("ab日本", 5, ["ab日", "本"]),
        ("日本", 1, ["日", "本"]),
    ],
)
def test_wrap_lines(content, width, expected):
    assert wrap_lines(content, width) == expected


class TestDoubleWidthText:
    def test_response_wraps_by_cells(self):
        viewer = ResponseViewer()
        viewer.resize(10, 5)
        viewer.set_content("日本語のテキストです")
        rows = _rows(viewer)
        assert rows[:2] == ["日本語のテ", "キストです"]
        assert all(cell_len(row) == 10 for row in rows)

    def test_text_field_scrolls_by_cells(self):
        field = TextField("url", "日本語テキスト")
        field.resize(8, 1)
        assert field.focus() == CursorPlaced("url", 6)
        assert field.render().plain == "キスト  "
        _keys(field, "home")
        assert field.render().plain == "日本語テ"
        _keys(field, *["right"] * 5)
        row = field.render().plain
        assert "キ" in row
        assert cell_len(row) == 8

    def test_body_editor_scrolls_by_cells(self):
        editor = BodyEditor(text="ab\n日本語テキスト")
        editor.resize(8, 2)
        editor.focus()
        rows = _rows(editor)
        assert rows[1].startswith("キスト")
        assert all(cell_len(row) == 8 for row in rows)

    @pytest.mark.parametrize("factory", ALL_INPUTS)
    def test_wide_content_never_overflows(self, factory):
        widget = factory()
        widget.resize(5, 2)
        widget.focus()
        if isinstance(widget, ResponseViewer):
            widget.set_content("日本語" * 4)
        elif isinstance(widget, TextField):
            widget.set_value("日本語" * 4)
        elif isinstance(widget, BodyEditor):
            widget.set_text("日本語" * 4)
        assert all(cell_len(row) == 5 for row in _rows(widget))


class TestPaste:
    def test_text_field_drops_newlines(self):
        field = TextField("url", "x")
        field.resize(40, 1)
        field.focus()
        _keys(field, "home")
        assert field.paste("http://a\r\n/b\n") == ValueChanged("url")
        assert field.value == "http://a/bx"
        assert field.cursor == len("http://a/b")

    def test_body_editor_keeps_newlines(self):
        editor = BodyEditor(text="{}")
        editor.resize(20, 5)
        editor.focus()
        _keys(editor, "left")
        editor.paste('\r\n    "k": 1\n')
        assert editor.text == '{\n    "k": 1\n}'
        assert (editor.row, editor.col) == (2, 0)

    def test_body_editor_single_line_paste_moves_cursor(self):
        editor = BodyEditor(text="ad")
        editor.resize(20, 5)
        editor.focus()
        _keys(editor, "left")
        editor.paste("bc")
        assert editor.text == "abcd"
        assert (editor.row, editor.col) == (0, 3)

    @pytest.mark.parametrize("factory", ALL_INPUTS)
    def test_unfocused_inputs_ignore_paste(self, factory):
        widget = factory()
        widget.resize(20, 3)
        before = widget.render()
        assert widget.paste("pasted") is None
        assert widget.render() == before

    def test_read_only_inputs_ignore_paste(self):
        selector = MethodSelector()
        viewer = ResponseViewer()
        for widget in (selector, viewer):
            widget.focus()
            assert widget.paste("POST") is None
        assert selector.value is HttpMethod.GET

    def test_empty_paste_is_noop(self):
        field = TextField("url", "a")
        field.focus()
        assert field.paste("\n") is None
        assert field.value == "a"

"""Textual panels that display the controller's inputs.

Panels hold no editing state. The app pushes geometry (apply_box) and
content (refresh_from_source / update_display) into them after every event.
"""

from __future__ import annotations

from rich.text import Text
from textual.widgets import Static

from hylea.tui.input_modes import FOOTER_KEYS, MODE_TITLES, Mode
from hylea.tui.inputs import FocusableInput
from hylea.tui.layout import Box

FOCUS_BORDER_COLOR = "#ff0000"


class InputPanel(Static):
    """Bordered box around one FocusableInput; border turns red while focused."""

    DEFAULT_CSS = f"""
    InputPanel {{
        border: solid $panel-lighten-2;
        padding: 0;
        width: auto;
        height: auto;
    }}

    InputPanel.-focused {{
        border: solid {FOCUS_BORDER_COLOR};
    }}
    """

    def __init__(self, source: FocusableInput, title: str, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._source = source
        self.rendered = Text()
        self.border_title = title

    @property
    def source(self) -> FocusableInput:
        return self._source

    def apply_box(self, box: Box) -> None:
        self.styles.width = box.width
        self.styles.height = box.height

    def refresh_from_source(self) -> None:
        self.set_class(self._source.focused, "-focused")
        self.rendered = self._source.render()
        self.update(self.rendered)


def render_status_line(
    elapsed: str,
    *,
    active: bool,
    status: int | None,
    failed: bool,
    width: int,
) -> Text:
    """One-line status: elapsed time, in-flight marker, last HTTP status."""
    line = Text()
    line.append(elapsed, style="bold")
    if active:
        line.append("  ● sending", style="yellow")
    elif failed:
        line.append("  error", style="bold red")
    elif status is not None:
        style = "green" if status < 400 else "red"
        line.append(f"  HTTP {status}", style=style)
    line.truncate(max(0, width), overflow="crop")
    return line


class StatusBar(Static):
    DEFAULT_CSS = """
    StatusBar {
        border: solid $panel-lighten-2;
        padding: 0;
        width: auto;
        height: auto;
    }
    """

    def __init__(self, **kwargs) -> None:
        super().__init__("", **kwargs)
        self._line_width = 0
        self.border_title = "Time"

    def apply_box(self, box: Box) -> None:
        self.styles.width = box.width
        self.styles.height = box.height
        self._line_width = box.inner_width

    def update_display(self, elapsed: str, *, active: bool, status: int | None, failed: bool) -> None:
        self.update(
            render_status_line(
                elapsed, active=active, status=status, failed=failed, width=self._line_width
            )
        )


def render_footer(mode: Mode) -> Text:
    """Mode badge followed by the keys available in that mode."""
    line = Text()
    line.append(f" {MODE_TITLES[mode]} ", style="bold reverse")
    for key, description in FOOTER_KEYS[mode]:
        line.append("  ")
        line.append(key, style="bold")
        line.append(f" {description}", style="dim")
    return line


class ModeFooter(Static):
    DEFAULT_CSS = """
    ModeFooter {
        dock: bottom;
        height: 1;
        width: 100%;
    }
    """

    def update_display(self, mode: Mode) -> None:
        self.update(render_footer(mode))


def create_input_panel(source: FocusableInput, title: str, panel_id: str) -> InputPanel:
    """Factory function for creating an InputPanel bound to an input."""
    return InputPanel(source, title, id=panel_id)

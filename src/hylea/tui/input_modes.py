"""Mode system for key dispatch.

All keyboard input routes through HyleaApp.on_key into the ModeController.
Textual BINDINGS are not used for mode keys; the controller is the sole
dispatcher.
"""

from enum import Enum, auto


class Mode(Enum):
    """Which input currently owns the keyboard."""
    OVERVIEW = auto()
    EDITING_URL = auto()
    EDITING_METHOD = auto()
    EDITING_BODY = auto()
    VIEWING_RESPONSE = auto()


# Textual key names
KEY_ESCAPE = "escape"
KEY_ENTER = "enter"
KEY_INTERRUPT = "ctrl+c"


# [LAW:one-source-of-truth] Overview key -> target mode.
OVERVIEW_MODE_KEYS: dict[str, Mode] = {
    "u": Mode.EDITING_URL,
    "m": Mode.EDITING_METHOD,
    "b": Mode.EDITING_BODY,
    "r": Mode.VIEWING_RESPONSE,
}
OVERVIEW_SEND_KEY = KEY_ENTER
OVERVIEW_QUIT_KEY = "q"


# Footer display per mode: list of (key, description) tuples.
FOOTER_KEYS: dict[Mode, list[tuple[str, str]]] = {
    Mode.OVERVIEW: [
        ("u", "url"),
        ("m", "method"),
        ("b", "body"),
        ("r", "response"),
        ("enter", "send"),
        ("q", "quit"),
    ],
    Mode.EDITING_URL: [
        ("enter", "send"),
        ("esc", "done"),
        ("^A/^E", "home/end"),
        ("^W", "del-word"),
        ("^U", "clear"),
    ],
    Mode.EDITING_METHOD: [
        ("↑/↓", "change"),
        ("esc", "done"),
    ],
    Mode.EDITING_BODY: [
        ("enter", "newline"),
        ("tab", "indent"),
        ("esc", "done"),
    ],
    Mode.VIEWING_RESPONSE: [
        ("j/k", "scroll"),
        ("pgup/pgdn", "page"),
        ("g/G", "top/bottom"),
        ("esc", "done"),
    ],
}


MODE_TITLES: dict[Mode, str] = {
    Mode.OVERVIEW: "OVERVIEW",
    Mode.EDITING_URL: "URL",
    Mode.EDITING_METHOD: "METHOD",
    Mode.EDITING_BODY: "BODY",
    Mode.VIEWING_RESPONSE: "RESPONSE",
}

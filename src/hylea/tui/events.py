"""Input events and follow-up effects exchanged with the mode controller.

KeyPress mirrors the two fields of textual.events.Key the controller needs,
so the controller and inputs can be driven without a running terminal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class KeyPress:
    key: str
    character: str | None = None

    @classmethod
    def from_textual(cls, event) -> KeyPress:
        return cls(key=event.key, character=event.character)

    @classmethod
    def char(cls, ch: str) -> KeyPress:
        """A printable key as Textual reports it ("space" for " ")."""
        return cls(key="space" if ch == " " else ch, character=ch)

    @property
    def printable(self) -> str | None:
        ch = self.character
        if ch and len(ch) == 1 and ch.isprintable():
            return ch
        return None


# ─── Effects ─────────────────────────────────────────────────────────────────


class Effect:
    """Marker base for follow-up effects returned from handlers."""


@dataclass(frozen=True)
class Quit(Effect):
    pass


@dataclass(frozen=True)
class RequestStarted(Effect):
    tag: int


@dataclass(frozen=True)
class FocusChanged(Effect):
    mode: object


@dataclass(frozen=True)
class CursorPlaced(Effect):
    name: str
    column: int
    row: int = 0


@dataclass(frozen=True)
class ValueChanged(Effect):
    name: str


@dataclass(frozen=True)
class Scrolled(Effect):
    name: str
    offset: int

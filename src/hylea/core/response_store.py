"""Last response accepted into the UI."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from hylea.core.errors import RequestError
from hylea.core.formatting import prettify

if TYPE_CHECKING:
    from hylea.pipeline.dispatcher import RequestResult


@dataclass
class ResponseStore:
    """Body/error of the most recent non-stale result.

    Written only by ModeController.apply_result after the tag check.
    """

    body: str = ""
    error: RequestError | None = None
    status: int | None = None
    tag: int = 0

    @property
    def is_empty(self) -> bool:
        return self.tag == 0

    def accept(self, result: RequestResult) -> None:
        self.tag = result.tag
        self.status = result.status
        self.error = result.error
        self.body = "" if result.error is not None else result.body

    def display_text(self) -> str:
        if self.error is not None:
            return f"Error: {self.error}"
        return prettify(self.body)

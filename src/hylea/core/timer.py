"""Elapsed-time tracking for the in-flight request.

While active, elapsed() is measured live against the clock. After stop()
the value is frozen at the duration between start() and stop().
"""

from __future__ import annotations

import time
from typing import Callable


class RequestTimer:
    """Tracks whether a request is in flight and how long the last one took."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self.active: bool = False
        self.started_at: float | None = None
        self.last_duration: float = 0.0

    def start(self) -> None:
        self.active = True
        self.started_at = self._clock()

    def stop(self) -> None:
        # Only the first stop after a start freezes the duration.
        if not self.active:
            return
        self.active = False
        self.last_duration = max(0.0, self._clock() - self.started_at)

    def elapsed(self) -> float:
        if self.active:
            return max(0.0, self._clock() - self.started_at)
        return self.last_duration

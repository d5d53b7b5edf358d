"""Top-level mode state machine.

// [LAW:single-enforcer] ModeController is the only place that changes mode,
//   moves focus between inputs, or applies request results to shown state.

States: OVERVIEW, EDITING_URL, EDITING_METHOD, EDITING_BODY, VIEWING_RESPONSE.
OVERVIEW is both the initial state and the state every other mode returns
to on escape. Keys not bound in the active mode are forwarded verbatim to
the input that owns it.

Each per-mode handler checks that the controller really is in its mode and
raises ModeInvariantError otherwise. That is a controller bug and is never
caught.
"""

from __future__ import annotations

import logging
from typing import Callable

from hylea.core.errors import ModeInvariantError
from hylea.core.formatting import format_duration
from hylea.core.methods import HttpMethod
from hylea.core.response_store import ResponseStore
from hylea.core.timer import RequestTimer
from hylea.pipeline.dispatcher import RequestDispatcher, RequestResult
from hylea.tui.events import Effect, FocusChanged, KeyPress, Quit, RequestStarted
from hylea.tui.input_modes import (
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    OVERVIEW_MODE_KEYS,
    OVERVIEW_QUIT_KEY,
    OVERVIEW_SEND_KEY,
    Mode,
)
from hylea.tui.inputs import BodyEditor, FocusableInput, MethodSelector, ResponseViewer, TextField
from hylea.tui.layout import Layout, compute_layout

logger = logging.getLogger(__name__)

ERROR_STYLE = "bold red"


class ModeController:
    """Routes events to the input owning the active mode.

    The dispatcher is built by the caller-supplied factory so that it can
    share this controller's timer.
    """

    def __init__(
        self,
        make_dispatcher: Callable[[RequestTimer], RequestDispatcher],
        *,
        url: str = "",
        method: HttpMethod = HttpMethod.GET,
        body: str = "",
        timer: RequestTimer | None = None,
    ) -> None:
        self.mode = Mode.OVERVIEW
        self.timer = timer if timer is not None else RequestTimer()
        self.store = ResponseStore()
        self.dispatcher = make_dispatcher(self.timer)
        self.layout: Layout = compute_layout(0, 0)

        self.url_field = TextField("url", url)
        self.method_selector = MethodSelector("method", method)
        self.body_editor = BodyEditor("body", body)
        self.response_viewer = ResponseViewer("response")

        # [LAW:one-source-of-truth] Mode -> owned input.
        self._owners: dict[Mode, FocusableInput] = {
            Mode.EDITING_URL: self.url_field,
            Mode.EDITING_METHOD: self.method_selector,
            Mode.EDITING_BODY: self.body_editor,
            Mode.VIEWING_RESPONSE: self.response_viewer,
        }
        self._handlers: dict[Mode, Callable[[KeyPress], list[Effect]]] = {
            Mode.OVERVIEW: self._handle_overview_key,
            Mode.EDITING_URL: self._handle_url_key,
            Mode.EDITING_METHOD: self._handle_method_key,
            Mode.EDITING_BODY: self._handle_body_key,
            Mode.VIEWING_RESPONSE: self._handle_response_key,
        }

    # ─── Introspection ─────────────────────────────────────────────────

    @property
    def inputs(self) -> tuple[FocusableInput, ...]:
        return tuple(self._owners.values())

    def owner(self, mode: Mode) -> FocusableInput | None:
        return self._owners.get(mode)

    def focused_inputs(self) -> list[FocusableInput]:
        return [w for w in self.inputs if w.focused]

    def elapsed_text(self) -> str:
        return format_duration(self.timer.elapsed())

    # ─── Key dispatch ──────────────────────────────────────────────────

    def handle_key(self, key: KeyPress) -> list[Effect]:
        if key.key == KEY_INTERRUPT:
            return [Quit()]
        return self._handlers[self.mode](key)

    def handle_paste(self, text: str) -> list[Effect]:
        """Insert pasted text into the input owning the active mode, if any."""
        owner = self._owners.get(self.mode)
        if owner is None:
            return []
        effect = owner.paste(text)
        return [] if effect is None else [effect]

    def _expect(self, mode: Mode) -> None:
        if self.mode is not mode:
            raise ModeInvariantError(
                f"cannot use {mode.name} handler in {self.mode.name} mode"
            )

    def _switch_to(self, mode: Mode) -> list[Effect]:
        previous = self._owners.get(self.mode)
        if previous is not None:
            previous.blur()
        logger.debug("mode %s -> %s", self.mode.name, mode.name)
        self.mode = mode
        effects: list[Effect] = [FocusChanged(mode)]
        target = self._owners.get(mode)
        if target is not None:
            effect = target.focus()
            if effect is not None:
                effects.append(effect)
        return effects

    def _forward(self, key: KeyPress) -> list[Effect]:
        effect = self._owners[self.mode].handle(key)
        return [] if effect is None else [effect]

    def _handle_overview_key(self, key: KeyPress) -> list[Effect]:
        self._expect(Mode.OVERVIEW)
        if key.key in OVERVIEW_MODE_KEYS:
            return self._switch_to(OVERVIEW_MODE_KEYS[key.key])
        if key.key == OVERVIEW_SEND_KEY:
            return [self.start_request()]
        if key.key == OVERVIEW_QUIT_KEY:
            return [Quit()]
        return []

    def _handle_url_key(self, key: KeyPress) -> list[Effect]:
        self._expect(Mode.EDITING_URL)
        if key.key == KEY_ESCAPE:
            return self._switch_to(Mode.OVERVIEW)
        if key.key == KEY_ENTER:
            effects = self._switch_to(Mode.OVERVIEW)
            effects.append(self.start_request())
            return effects
        return self._forward(key)

    def _handle_method_key(self, key: KeyPress) -> list[Effect]:
        self._expect(Mode.EDITING_METHOD)
        if key.key == KEY_ESCAPE:
            return self._switch_to(Mode.OVERVIEW)
        return self._forward(key)

    def _handle_body_key(self, key: KeyPress) -> list[Effect]:
        self._expect(Mode.EDITING_BODY)
        if key.key == KEY_ESCAPE:
            return self._switch_to(Mode.OVERVIEW)
        return self._forward(key)

    def _handle_response_key(self, key: KeyPress) -> list[Effect]:
        self._expect(Mode.VIEWING_RESPONSE)
        if key.key == KEY_ESCAPE:
            return self._switch_to(Mode.OVERVIEW)
        return self._forward(key)

    # ─── Requests ──────────────────────────────────────────────────────

    def start_request(self) -> RequestStarted:
        self.dispatcher.start(
            self.method_selector.value,
            self.url_field.value,
            self.body_editor.text,
        )
        return RequestStarted(self.dispatcher.current_tag)

    def apply_result(self, result: RequestResult) -> bool:
        """Merge a delivered result into shown state if it is still current.

        Returns False (and changes nothing) for stale results.
        """
        if not self.dispatcher.is_current(result.tag):
            logger.debug(
                "discarding stale result #%d (current #%d)",
                result.tag,
                self.dispatcher.current_tag,
            )
            return False
        self.timer.stop()
        self.store.accept(result)
        style = ERROR_STYLE if result.error is not None else ""
        self.response_viewer.set_content(self.store.display_text(), style=style)
        return True

    # ─── Resize ────────────────────────────────────────────────────────

    def resize(self, width: int, height: int) -> Layout:
        """Recompute geometry and push inner sizes to every input."""
        layout = compute_layout(width, height)
        self.layout = layout
        self.method_selector.resize(layout.method.inner_width, layout.method.inner_height)
        self.url_field.resize(layout.url.inner_width, layout.url.inner_height)
        self.body_editor.resize(layout.body.inner_width, layout.body.inner_height)
        self.response_viewer.resize(layout.response.inner_width, layout.response.inner_height)
        return layout

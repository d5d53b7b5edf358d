"""Main TUI application using Textual.

// [LAW:locality-or-seam] Thin shell around ModeController: translates Textual
//   key/resize events into controller calls, runs requests on thread workers,
//   and repaints panels from controller state.

Textual's message pump is the single event loop that owns all mutable state.
Request workers never touch that state; they post ResponseReceived and the
controller decides on the pump whether the result is still current.
"""

from __future__ import annotations

import logging

from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.css.query import NoMatches
from textual.message import Message

from hylea.config import ClientConfig
from hylea.pipeline.dispatcher import RequestDispatcher, RequestResult
from hylea.pipeline.transport import Transport, UrllibTransport
from hylea.tui.controller import ModeController
from hylea.tui.events import KeyPress, Quit, RequestStarted
from hylea.tui.panels import InputPanel, ModeFooter, StatusBar, create_input_panel

logger = logging.getLogger(__name__)

TICK_INTERVAL_S = 0.05


class ResponseReceived(Message, bubble=False):
    """Thread-safe bridge: request worker → app message pump."""

    def __init__(self, result: RequestResult) -> None:
        self.result = result
        super().__init__()


class HyleaApp(App):
    """Full-screen HTTP client."""

    CSS = """
    #columns {
        height: 1fr;
    }

    #request-column, #response-column, #request-row {
        width: auto;
        height: auto;
    }
    """

    # ctrl+c quits from any mode, even before on_key sees it.
    BINDINGS = [Binding("ctrl+c", "quit", "Quit", show=False, priority=True)]

    def __init__(
        self,
        config: ClientConfig | None = None,
        transport: Transport | None = None,
    ):
        super().__init__()
        self._client_config = config if config is not None else ClientConfig()
        self._http_transport = (
            transport if transport is not None else UrllibTransport(self._client_config.timeout)
        )
        self.controller = ModeController(
            self._make_dispatcher,
            url=self._client_config.url,
            method=self._client_config.method,
            body=self._client_config.body,
        )

    def _make_dispatcher(self, timer) -> RequestDispatcher:
        return RequestDispatcher(
            self._http_transport,
            timer,
            deliver=self._deliver_result,
            submit=self._submit_request,
        )

    # ─── Widget accessors ──────────────────────────────────────────────

    def _query_safe(self, selector):
        try:
            return self.query_one(selector)
        except NoMatches:
            return None

    def _get_status(self) -> StatusBar | None:
        return self._query_safe(StatusBar)

    def _get_footer(self) -> ModeFooter | None:
        return self._query_safe(ModeFooter)

    def _input_panels(self) -> list[InputPanel]:
        return list(self.query(InputPanel))

    # ─── Lifecycle ─────────────────────────────────────────────────────

    def compose(self) -> ComposeResult:
        c = self.controller
        with Horizontal(id="columns"):
            with Vertical(id="request-column"):
                with Horizontal(id="request-row"):
                    yield create_input_panel(c.method_selector, "Method", "method-panel")
                    yield create_input_panel(c.url_field, "URL", "url-panel")
                yield create_input_panel(c.body_editor, "Body", "body-panel")
            with Vertical(id="response-column"):
                yield create_input_panel(c.response_viewer, "Response", "response-panel")
                yield StatusBar(id="status-bar")
        yield ModeFooter(id="footer")

    def on_mount(self) -> None:
        logger.info("hylea started (%dx%d)", self.size.width, self.size.height)
        self._apply_size(self.size.width, self.size.height)
        self.set_interval(TICK_INTERVAL_S, self._tick)

    def on_unmount(self) -> None:
        logger.info("hylea shutting down")
        self.controller.dispatcher.shutdown()

    # ─── Request plumbing ──────────────────────────────────────────────

    def _submit_request(self, job):
        return self.run_worker(
            job,
            name=f"request-{self.controller.dispatcher.current_tag}",
            group="requests",
            thread=True,
            exclusive=False,
        )

    def _deliver_result(self, result: RequestResult) -> None:
        # Called on the worker thread; post_message is thread-safe.
        self.post_message(ResponseReceived(result))

    def on_response_received(self, message: ResponseReceived) -> None:
        self.controller.apply_result(message.result)
        self._refresh_all()

    # ─── Rendering ─────────────────────────────────────────────────────

    def _apply_size(self, width: int, height: int) -> None:
        layout = self.controller.resize(width, height)
        boxes = {
            "method-panel": layout.method,
            "url-panel": layout.url,
            "body-panel": layout.body,
            "response-panel": layout.response,
        }
        for panel in self._input_panels():
            panel.apply_box(boxes[panel.id])
        status = self._get_status()
        if status is not None:
            status.apply_box(layout.status)
        self._refresh_all()

    def _refresh_status(self) -> None:
        status = self._get_status()
        if status is None:
            return
        c = self.controller
        status.update_display(
            c.elapsed_text(),
            active=c.timer.active,
            status=c.store.status,
            failed=c.store.error is not None,
        )

    def _refresh_all(self) -> None:
        for panel in self._input_panels():
            panel.refresh_from_source()
        self._refresh_status()
        footer = self._get_footer()
        if footer is not None:
            footer.update_display(self.controller.mode)

    def _tick(self) -> None:
        if self.controller.timer.active:
            self._refresh_status()

    # ─── Event dispatch ────────────────────────────────────────────────

    def on_resize(self, event) -> None:
        self._apply_size(event.size.width, event.size.height)

    async def on_key(self, event) -> None:
        """// [LAW:single-enforcer] on_key is the sole key dispatcher."""
        event.prevent_default()
        event.stop()
        effects = self.controller.handle_key(KeyPress.from_textual(event))
        for effect in effects:
            if isinstance(effect, RequestStarted):
                logger.debug("request #%d dispatched", effect.tag)
            elif isinstance(effect, Quit):
                self.exit()
                return
        self._refresh_all()

    def on_paste(self, event) -> None:
        """Bracketed paste arrives as one event, not as key presses."""
        event.stop()
        if self.controller.handle_paste(event.text):
            self._refresh_all()

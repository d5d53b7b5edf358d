"""Asynchronous request lifecycle with generation tags.

// [LAW:single-enforcer] The dispatcher is the sole allocator of generation
//   tags. It never writes ResponseStore; results are delivered back to the
//   event loop, which decides whether they are still current.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable

from hylea.core.errors import RequestError, TransportError, UnsupportedMethod
from hylea.core.methods import HttpMethod, parse_method
from hylea.core.timer import RequestTimer
from hylea.pipeline.transport import Transport

logger = logging.getLogger(__name__)

JSON_CONTENT_TYPE = "application/json"
EMPTY_JSON_BODY = "{}"


@dataclass(frozen=True)
class RequestResult:
    """Outcome of one request attempt, produced at most once per tag."""

    tag: int
    body: str = ""
    error: RequestError | None = None
    status: int | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class RequestSpec:
    tag: int
    method: object
    url: str
    body: str | None


def perform(transport: Transport, spec: RequestSpec) -> RequestResult:
    """Run one request synchronously and fold any failure into the result."""
    try:
        method = parse_method(spec.method)
        if method is HttpMethod.GET:
            response = transport.send(method.value, spec.url)
        elif method is HttpMethod.POST:
            payload = EMPTY_JSON_BODY if spec.body is None else spec.body
            response = transport.send(
                method.value,
                spec.url,
                payload.encode("utf-8"),
                {"Content-Type": JSON_CONTENT_TYPE},
            )
        else:
            raise UnsupportedMethod(method)
    except RequestError as e:
        return RequestResult(tag=spec.tag, error=e)
    except Exception as e:
        # Nothing may escape the worker thread; surface it like a send failure.
        logger.exception("request #%d raised unexpectedly", spec.tag)
        return RequestResult(tag=spec.tag, error=TransportError(f"failed to send request: {e}"))
    return RequestResult(tag=spec.tag, body=response.body, status=response.status)


class RequestDispatcher:
    """Starts requests off the event loop and tags their results.

    submit(job) schedules a zero-argument callable in the background and
    returns a handle for it. deliver(result) must enqueue the result onto
    the event loop; it is called from the background thread.
    """

    def __init__(
        self,
        transport: Transport,
        timer: RequestTimer,
        deliver: Callable[[RequestResult], None],
        submit: Callable[[Callable[[], None]], object] | None = None,
    ) -> None:
        self._transport = transport
        self._timer = timer
        self._deliver = deliver
        self._executor: ThreadPoolExecutor | None = None
        if submit is None:
            self._executor = ThreadPoolExecutor(
                max_workers=4, thread_name_prefix="hylea-request"
            )
            submit = self._executor.submit
        self._submit = submit
        self._current_tag = 0

    @property
    def current_tag(self) -> int:
        return self._current_tag

    def is_current(self, tag: int) -> bool:
        return tag == self._current_tag

    def start(self, method, url: str, body: str | None = None):
        # Tag is bumped before any background work exists.
        self._current_tag += 1
        spec = RequestSpec(tag=self._current_tag, method=method, url=url, body=body)
        self._timer.start()
        logger.info("request #%d started: %s %s", spec.tag, _method_name(method), url)

        def job() -> None:
            result = perform(self._transport, spec)
            if result.error is not None:
                logger.warning("request #%d failed: %s", result.tag, result.error)
            else:
                logger.info("request #%d completed: status=%s", result.tag, result.status)
            self._deliver(result)

        return self._submit(job)

    def shutdown(self) -> None:
        if self._executor is not None:
            self._executor.shutdown(wait=False, cancel_futures=True)


def _method_name(method) -> str:
    return method.value if isinstance(method, HttpMethod) else str(method)

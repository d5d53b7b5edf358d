"""HTTP transport collaborator.

The dispatcher only needs "send a request, get status and body, or fail".
UrllibTransport is the production implementation; tests substitute stubs
that satisfy the Transport protocol.
"""

from __future__ import annotations

import http.client
import logging
import socket
import urllib.error
import urllib.request
from dataclasses import dataclass
from typing import Protocol

from hylea.core.errors import ReadError, TransportError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0


@dataclass(frozen=True)
class TransportResponse:
    status: int
    body: str


class Transport(Protocol):
    def send(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        """Perform one request. Raises TransportError or ReadError."""
        ...


def _decode(raw: bytes) -> str:
    return raw.decode("utf-8", errors="replace")


class UrllibTransport:
    """Transport backed by urllib.request.

    4xx/5xx replies are responses, not failures: their status and body are
    returned like any other reply.
    """

    def __init__(self, timeout: float | None = DEFAULT_TIMEOUT) -> None:
        self._timeout = timeout

    def send(
        self,
        method: str,
        url: str,
        body: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> TransportResponse:
        try:
            request = urllib.request.Request(
                url, data=body, headers=dict(headers or {}), method=method
            )
        except ValueError as e:
            raise TransportError(f"failed to send request: {e}") from e

        logger.debug("%s %s (%d body bytes)", method, url, len(body or b""))
        kwargs = {} if self._timeout is None else {"timeout": self._timeout}
        try:
            response = urllib.request.urlopen(request, **kwargs)
        except urllib.error.HTTPError as e:
            with e:
                return TransportResponse(status=e.code, body=self._read(e))
        except (
            urllib.error.URLError,
            http.client.HTTPException,
            socket.timeout,
            OSError,
            ValueError,
        ) as e:
            raise TransportError(f"failed to send request: {e}") from e

        with response:
            return TransportResponse(status=response.status, body=self._read(response))

    @staticmethod
    def _read(response) -> str:
        try:
            return _decode(response.read())
        except (http.client.HTTPException, OSError, ValueError) as e:
            raise ReadError(f"failed to read response: {e}") from e

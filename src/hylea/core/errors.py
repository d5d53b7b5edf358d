"""Error taxonomy for hylea.

RequestError subclasses travel inside RequestResult.error and are never
raised across the event-loop boundary. ModeInvariantError is the opposite:
a controller bug that must abort.
"""


class RequestError(Exception):
    """Base class for failures carried as a request result."""


class TransportError(RequestError):
    """Connect, DNS or timeout failure before a response arrived."""


class ReadError(RequestError):
    """Failure while reading the response body."""


class UnsupportedMethod(RequestError):
    """Method outside the closed HttpMethod set."""

    def __init__(self, method) -> None:
        self.method = method
        super().__init__(f"unsupported method: {method!r}")


class ModeInvariantError(AssertionError):
    """A mode handler was invoked while the controller was in another mode."""

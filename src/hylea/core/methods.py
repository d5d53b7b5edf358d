"""Closed set of HTTP methods the client can send."""

from enum import Enum

from hylea.core.errors import UnsupportedMethod


class HttpMethod(Enum):
    GET = "GET"
    POST = "POST"

    @property
    def has_body(self) -> bool:
        return self is HttpMethod.POST


METHOD_ORDER: tuple[HttpMethod, ...] = tuple(HttpMethod)


def parse_method(value) -> HttpMethod:
    """Coerce a method name or member to HttpMethod.

    Raises UnsupportedMethod for anything outside the enum.
    """
    if isinstance(value, HttpMethod):
        return value
    try:
        return HttpMethod(str(value).strip().upper())
    except ValueError:
        raise UnsupportedMethod(value) from None

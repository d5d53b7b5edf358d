"""Tests for the closed HTTP method set."""

import pytest

from hylea.core.errors import UnsupportedMethod
from hylea.core.methods import METHOD_ORDER, HttpMethod, parse_method


def test_method_order_starts_with_get():
    assert METHOD_ORDER == (HttpMethod.GET, HttpMethod.POST)


def test_only_post_has_body():
    assert HttpMethod.POST.has_body
    assert not HttpMethod.GET.has_body


@pytest.mark.parametrize("raw", ["GET", "get", " Get ", HttpMethod.GET])
def test_parse_method_accepts_names_and_members(raw):
    assert parse_method(raw) is HttpMethod.GET


@pytest.mark.parametrize("raw", ["PUT", "DELETE", "", None, 3])
def test_parse_method_rejects_unknown(raw):
    with pytest.raises(UnsupportedMethod) as exc_info:
        parse_method(raw)
    assert exc_info.value.method == raw

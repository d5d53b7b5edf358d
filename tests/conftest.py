"""Pytest configuration and shared fixtures for hylea tests."""

import pytest

from tests.harness.fakes import FakeClock, StubTransport


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stub_transport():
    return StubTransport()

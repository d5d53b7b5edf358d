"""Test harness for hylea.

Re-exports all public API for convenient imports:
    from tests.harness import run_app, press_and_settle, StubTransport, ...
"""

from tests.harness.app_runner import run_app, wait_for_requests
from tests.harness.interactions import (
    paste_and_settle,
    press_and_settle,
    press_sequence,
    resize_and_settle,
)
from tests.harness.fakes import (
    FakeClock,
    ManualSubmitter,
    ResultSink,
    StubTransport,
    make_controller,
)

__all__ = [
    "run_app",
    "wait_for_requests",
    "paste_and_settle",
    "press_and_settle",
    "press_sequence",
    "resize_and_settle",
    "FakeClock",
    "ManualSubmitter",
    "ResultSink",
    "StubTransport",
    "make_controller",
]

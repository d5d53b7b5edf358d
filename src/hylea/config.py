"""Runtime configuration from command-line arguments.

Only logging reads the environment (see hylea.io.logging_setup); everything
the client itself needs comes from argv.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

from hylea.core.methods import HttpMethod
from hylea.pipeline.transport import DEFAULT_TIMEOUT


@dataclass(frozen=True)
class ClientConfig:
    url: str = ""
    method: HttpMethod = HttpMethod.GET
    body: str = ""
    # None disables the transport timeout.
    timeout: float | None = DEFAULT_TIMEOUT


def _non_negative_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {raw!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0: {raw!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hylea",
        description="Full-screen terminal HTTP client",
    )
    parser.add_argument("--url", type=str, default="", help="Initial request URL")
    parser.add_argument(
        "--method",
        type=str.upper,
        choices=[m.value for m in HttpMethod],
        default=HttpMethod.GET.value,
        help="Initial request method (default: GET)",
    )
    parser.add_argument("--body", type=str, default="", help="Initial request body")
    parser.add_argument(
        "--timeout",
        type=_non_negative_float,
        default=DEFAULT_TIMEOUT,
        help=f"Request timeout in seconds, 0 to wait forever (default: {DEFAULT_TIMEOUT:g})",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> ClientConfig:
    args = build_parser().parse_args(argv)
    return ClientConfig(
        url=args.url,
        method=HttpMethod(args.method),
        body=args.body,
        timeout=args.timeout or None,
    )

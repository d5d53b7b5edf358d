"""CLI entry point for hylea."""

import logging
import sys

import hylea.io.logging_setup
from hylea.config import parse_args
from hylea.tui.app import HyleaApp

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
    config = parse_args(argv)
    runtime = hylea.io.logging_setup.configure()
    logger.info(
        "logging to %s at %s (timeout=%s)", runtime.file_path, runtime.level_name, config.timeout
    )

    app = HyleaApp(config=config)
    app.run()

    # A fatal error inside the UI (e.g. a mode invariant) sets a non-zero code.
    code = app.return_code or 0
    logger.info("hylea exited with code %d", code)
    return code


if __name__ == "__main__":
    sys.exit(main())

# src/todo_cli/cli/main.py

"""
CLI entrypoint.

settings -> logging -> load store -> dispatch one command -> print -> exit code.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence

from ..cli.bootstrap import create_store
from ..cli.commands import registry
from ..config import Settings, get_settings
from ..errors import TodoError, format_error
from ..logging_setup import level_from_name, setup_logging

logger = logging.getLogger(__name__)

EXIT_STORE_ERROR = 1


def main(argv: Sequence[str] | None = None, *, settings: Settings | None = None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    setup_logging(
        console_level=level_from_name(settings.log_level),
        log_file=settings.log_file,
    )
    logger.debug("Starting %s argv=%s file=%s", settings.app_name, list(argv), settings.file_path)

    try:
        store = create_store(settings=settings)
        result = registry.handle(store, argv)
    except TodoError as e:
        # Console already gets the message below; keep the traceback for the log file.
        logger.debug("Command aborted: %s", format_error(e), exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_STORE_ERROR

    print(result.text)
    return result.exit_code


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()

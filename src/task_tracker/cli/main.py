# src/task_tracker/cli/main.py

"""
CLI entrypoint.

One invocation = one command:
load the task file, dispatch argv, save on success, map the outcome to an exit code.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state
from ..cli.commands import registry
from ..config import get_settings
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1


def _report_failure(exc: Exception) -> int:
    print(f"An exception has occurred: {exc!r}")
    return EXIT_ERROR


def main(argv: list[str] | None = None, *, settings=None) -> int:
    if argv is None:
        argv = sys.argv[1:]
    if settings is None:
        settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)
    setup_logging(log_dir=getattr(settings, "log_dir", None), console_level=console_level)

    logger.debug("Starting %s argv=%r", getattr(settings, "app_name", "task-tracker"), argv)

    try:
        state = create_initial_state(settings=settings)

        result = registry.handle(state, argv)
        if result.text:
            print(result.text)

        if not result.should_save:
            logger.debug("Command ended with %s; task file left untouched.", result.kind)
            return EXIT_ERROR

        state.task_store.save()
    except Exception as e:
        # Load, output and save failures all end here; nothing is saved past this point.
        logger.exception("Command failed argv=%r tasks=%s", argv, settings.tasks_path)
        return _report_failure(e)

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())

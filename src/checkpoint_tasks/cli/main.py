# src/checkpoint_tasks/cli/main.py

"""
CLI entrypoint.

Initializes logging, loads the task tree, runs the console REPL and saves on
the way out.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state, save_tasks
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import setup_logging
from ..tasks.errors import CorruptTaskData

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    log_file = setup_logging(log_dir=settings.log_dir, console_level=console_level)
    logger.info("Starting %s (log file: %s)...", settings.app_name, log_file)

    try:
        state = create_initial_state(settings=settings)
    except CorruptTaskData as e:
        logger.error("Refusing to start: %s", e)
        return 1

    try:
        run_console_loop(state)
    finally:
        save_tasks(state)
        logger.info("Bye.")
    return 0


if __name__ == "__main__":
    sys.exit(main())

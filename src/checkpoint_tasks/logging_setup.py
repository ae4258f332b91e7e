# src/checkpoint_tasks/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

APP_LOGGER = "checkpoint_tasks"
# Engine modules log every renumber and status change at DEBUG.
ENGINE_LOGGER = f"{APP_LOGGER}.tasks"
LOG_FILE_NAME = "checkpoint.log"


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide what reaches the console next to the REPL prompt:
    - checkpoint_tasks.cli / .connectors / .core / .storage: as configured
    - checkpoint_tasks.tasks.*: WARNING+ only (per-task chatter goes to the file)
    - py.warnings and third-party loggers: ERROR+ only
    """

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name

        if name == ENGINE_LOGGER or name.startswith(ENGINE_LOGGER + "."):
            return record.levelno >= logging.WARNING
        if name == APP_LOGGER or name.startswith(APP_LOGGER + "."):
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/checkpoint",
    console_level: int = logging.INFO,
    file_level: int = logging.DEBUG,
) -> Path:
    """
    Route all logging to two handlers on the root logger:
    - stderr, filtered by `_ConsoleNoiseFilter` so the task list stays readable
    - `<log_dir>/checkpoint.log`, unfiltered, for replaying what the engine did

    Call once from `main()` before the store is loaded; earlier handlers are
    replaced. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter())
    root.addHandler(console)

    file_handler = logging.FileHandler(str(log_file), encoding="utf-8")
    file_handler.setLevel(file_level)
    file_handler.setFormatter(fmt)
    root.addHandler(file_handler)

    # warnings.warn(...) arrives as 'py.warnings' and is filtered like third-party noise
    logging.captureWarnings(True)

    return log_file

# src/checkpoint_tasks/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- loads persisted tasks and wires the store + persistence into AppState,
- writes tasks back on shutdown.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.state import AppState
from ..storage.json_store import JsonTaskFile
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    settings.log_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    Corrupt task files are not silently replaced: CorruptTaskData propagates
    so the caller can refuse to start instead of overwriting user data.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    persistence = JsonTaskFile(settings.tasks_path)
    store = TaskStore(persistence.load())

    return AppState(
        settings=settings,
        task_store=store,
        persistence=persistence,
        autosave=settings.autosave,
        page_size=settings.page_size,
    )


def save_tasks(state: AppState) -> None:
    """Best-effort save used on shutdown."""
    try:
        state.persist()
        logger.info("Saved %d tasks.", state.task_store.count_tasks())
    except Exception:
        logger.exception("Failed to save tasks.")

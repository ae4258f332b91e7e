# src/checkpoint_tasks/core/state.py

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from ..tasks.hierarchy_view import StatusFilter
from .ports import TaskPersistence, TaskRepo

logger = logging.getLogger(__name__)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: object

    task_store: TaskRepo
    persistence: TaskPersistence | None = None
    autosave: bool = True

    # View state is owned here, never by the store.
    status_filter: StatusFilter = StatusFilter.ALL
    expanded: set[int] = field(default_factory=set)
    page: int = 1
    page_size: int = 20

    def persist(self) -> None:
        """Write the full task list through the persistence port (if any)."""
        if self.persistence is None:
            return
        self.persistence.save(self.task_store.to_records())

    def after_mutation(self) -> None:
        if not self.autosave:
            return
        try:
            self.persist()
        except OSError:
            logger.exception("Autosave failed; changes are kept in memory.")

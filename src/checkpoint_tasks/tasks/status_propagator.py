# src/checkpoint_tasks/tasks/status_propagator.py

from __future__ import annotations

"""
Status automaton.

Per-task states: IN_PROGRESS, DONE, COMPLETE. Transitions only happen on
external events (a toggle or a reparent); the two ascents below restore the
ancestor invariants afterwards:

- upgrade: DONE -> COMPLETE when every direct child is COMPLETE, then retry
  on the parent; stops at the first task that does not qualify.
- downgrade: COMPLETE -> DONE on each ancestor until the first one that is
  not COMPLETE. Ancestors never drop to IN_PROGRESS.
"""

import logging
from collections.abc import Mapping

from .task_models import Task, TaskStatus
from .tree import children_of

logger = logging.getLogger(__name__)


class StatusPropagator:
    def __init__(self, tasks: Mapping[int, Task]) -> None:
        self._tasks = tasks

    def _set(self, task: Task, status: TaskStatus) -> None:
        logger.debug("status id=%s %s -> %s", task.id, task.status, status)
        task.status = status

    # ---- events ----

    def toggle(self, task: Task) -> None:
        """DONE and COMPLETE both count as "on" and switch back to IN_PROGRESS."""
        if task.status.is_on:
            self.toggle_off(task)
        else:
            self.toggle_on(task)

    def toggle_on(self, task: Task) -> None:
        self._set(task, TaskStatus.DONE)
        self.upgrade_attempt(task)

    def toggle_off(self, task: Task) -> None:
        self._set(task, TaskStatus.IN_PROGRESS)
        self.downgrade_ascent(task.parent_id)

    def after_reparent(self, task: Task, old_parent_id: int | None, new_parent_id: int | None) -> None:
        self.downgrade_ascent(old_parent_id)
        # The arriving subtree may break the new parent's COMPLETE status.
        self.downgrade_ascent(new_parent_id)
        self.upgrade_attempt(task)

    # ---- ascents ----

    def upgrade_attempt(self, task: Task | None) -> None:
        while task is not None:
            if task.status is not TaskStatus.DONE:
                return
            # Vacuously true for a childless task.
            if not all(c.status is TaskStatus.COMPLETE for c in children_of(self._tasks, task.id)):
                return
            self._set(task, TaskStatus.COMPLETE)
            task = self._tasks.get(task.parent_id) if task.parent_id is not None else None

    def downgrade_ascent(self, parent_id: int | None) -> None:
        while parent_id is not None:
            ancestor = self._tasks.get(parent_id)
            if ancestor is None or ancestor.status is not TaskStatus.COMPLETE:
                return
            self._set(ancestor, TaskStatus.DONE)
            parent_id = ancestor.parent_id

# src/checkpoint_tasks/tasks/tree.py

"""
Navigation helpers over a task arena (mapping id -> Task).

Parents do not hold child pointers; children reference their parent by id.
Child lookups are derived on demand from the `parent_id` edges.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterator, Mapping

from .task_models import Task

TaskArena = Mapping[int, Task]


def children_of(tasks: TaskArena, parent_id: int | None) -> list[Task]:
    """Direct children of `parent_id` (roots when None), in arena order."""
    return [t for t in tasks.values() if t.parent_id == parent_id]


def child_index(tasks: TaskArena) -> dict[int | None, list[Task]]:
    index: dict[int | None, list[Task]] = defaultdict(list)
    for t in tasks.values():
        index[t.parent_id].append(t)
    return index


def ancestors(tasks: TaskArena, task_id: int) -> Iterator[Task]:
    """Strict ancestors of `task_id`, nearest first. Assumes an acyclic arena."""
    task = tasks.get(task_id)
    parent_id = task.parent_id if task is not None else None
    while parent_id is not None:
        parent = tasks.get(parent_id)
        if parent is None:
            return
        yield parent
        parent_id = parent.parent_id

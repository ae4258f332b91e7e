# src/checkpoint_tasks/tasks/hierarchy_view.py

from __future__ import annotations

"""
Read-only presentation traversal over a TaskStore snapshot.

Filter, expansion and page are caller-owned view state and are passed in on
every call; nothing here mutates tasks.
"""

import math
from collections.abc import Collection, Iterable
from dataclasses import dataclass
from enum import StrEnum

from .display_ids import display_id_key
from .task_models import Task, TaskStatus
from .tree import child_index


class StatusFilter(StrEnum):
    ALL = "ALL"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    COMPLETE = "COMPLETE"

    @classmethod
    def parse(cls, raw: str) -> StatusFilter:
        """Case-insensitive; accepts "in-progress" / "in_progress" alike."""
        key = (raw or "").strip().upper().replace("-", "_")
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"unknown status filter {raw!r}") from None

    def matches(self, status: TaskStatus) -> bool:
        return self is StatusFilter.ALL or self.value == status.value


@dataclass(slots=True, frozen=True)
class DependencyStats:
    total: int
    done: int
    complete: int


@dataclass(slots=True, frozen=True)
class TaskRow:
    task: Task
    depth: int
    has_children: bool
    stats: DependencyStats


@dataclass(slots=True, frozen=True)
class Page:
    items: tuple[TaskRow, ...]
    number: int
    total_pages: int

    @property
    def has_next(self) -> bool:
        return self.number < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.number > 1


class HierarchyView:
    def __init__(self, tasks: Iterable[Task]) -> None:
        self._tasks: dict[int, Task] = {t.id: t for t in tasks}
        self._children = child_index(self._tasks)
        for kids in self._children.values():
            kids.sort(key=lambda t: display_id_key(t.display_id))

    def ordered(self) -> list[tuple[Task, int]]:
        """
        Pre-order (task, depth) pairs: roots by display id, each followed by
        its own subtree, siblings by display id.
        """
        out: list[tuple[Task, int]] = []
        stack = [(t, 0) for t in reversed(self._children.get(None, []))]
        while stack:
            task, depth = stack.pop()
            out.append((task, depth))
            for child in reversed(self._children.get(task.id, [])):
                stack.append((child, depth + 1))
        return out

    def dependency_stats(self, task_id: int) -> DependencyStats:
        kids = self._children.get(task_id, [])
        return DependencyStats(
            total=len(kids),
            done=sum(1 for c in kids if c.status is not TaskStatus.IN_PROGRESS),
            complete=sum(1 for c in kids if c.status is TaskStatus.COMPLETE),
        )

    def is_visible(self, task: Task, expanded: Collection[int]) -> bool:
        """Roots are visible; a child needs an expanded, visible parent."""
        current = task
        while current.parent_id is not None:
            parent = self._tasks.get(current.parent_id)
            if parent is None or parent.id not in expanded:
                return False
            current = parent
        return True

    def rows(
        self,
        status_filter: StatusFilter = StatusFilter.ALL,
        expanded: Collection[int] = frozenset(),
    ) -> list[TaskRow]:
        rows: list[TaskRow] = []
        for task, depth in self.ordered():
            if not status_filter.matches(task.status):
                continue
            if not self.is_visible(task, expanded):
                continue
            rows.append(
                TaskRow(
                    task=task,
                    depth=depth,
                    has_children=bool(self._children.get(task.id)),
                    stats=self.dependency_stats(task.id),
                )
            )
        return rows

    @staticmethod
    def page(rows: list[TaskRow], number: int, per_page: int) -> Page:
        per_page = max(1, int(per_page))
        total_pages = max(1, math.ceil(len(rows) / per_page))
        number = min(max(1, int(number)), total_pages)
        start = (number - 1) * per_page
        return Page(items=tuple(rows[start : start + per_page]), number=number, total_pages=total_pages)

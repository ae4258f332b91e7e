# src/checkpoint_tasks/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Final

from .cycle_guard import would_cycle
from .display_ids import (
    allocate,
    display_id_key,
    is_valid_display_id,
    renumber_siblings,
    renumber_subtree,
)
from .errors import (
    CorruptTaskData,
    CycleDetected,
    InvalidName,
    ParentNotFound,
    SelfParent,
    TaskNotFound,
)
from .status_propagator import StatusPropagator
from .task_models import Task, TaskStatus
from .tree import ancestors, child_index, children_of

logger = logging.getLogger(__name__)


class _Unset:
    def __repr__(self) -> str:
        return "UNSET"


UNSET: Final = _Unset()

Snapshot = tuple[Task, ...]


class TaskStore:
    """
    In-memory task tree.

    The store owns an arena of tasks keyed by a stable integer id. Every
    command is one transaction:
      validate -> mutate in place -> renumber (if moved) -> propagate status
    Validation errors are raised before anything changes, so a rejected
    command leaves the tree exactly as it was.

    Callers never get the live records: `create_task` returns a copy and the
    other commands return a snapshot (tuple of copies).
    """

    def __init__(self, records: Iterable[Mapping[str, Any]] | None = None) -> None:
        self._tasks: dict[int, Task] = {}
        self._next_id = 1
        self._status = StatusPropagator(self._tasks)
        if records:
            self._load(records)
        logger.info("TaskStore ready total=%s next_id=%s", len(self._tasks), self._next_id)

    # ---- loading ----

    def _load(self, records: Iterable[Mapping[str, Any]]) -> None:
        tasks: dict[int, Task] = {}
        seen_display: set[str] = set()
        for raw in records:
            task = Task.from_record(raw)
            if task.id < 1:
                raise CorruptTaskData(f"task id must be positive, got {task.id}")
            if task.id in tasks:
                raise CorruptTaskData(f"duplicate task id {task.id}")
            if not is_valid_display_id(task.display_id):
                raise CorruptTaskData(f"task {task.id}: invalid displayId {task.display_id!r}")
            if task.display_id in seen_display:
                raise CorruptTaskData(f"duplicate displayId {task.display_id!r}")
            if not task.name.strip():
                raise CorruptTaskData(f"task {task.id}: empty name")
            seen_display.add(task.display_id)
            tasks[task.id] = task

        for task in tasks.values():
            if task.parent_id is None:
                continue
            if task.parent_id not in tasks:
                raise CorruptTaskData(f"task {task.id}: unknown parentId {task.parent_id}")
            if would_cycle(task.parent_id, task.id, tasks):
                raise CorruptTaskData(f"task {task.id}: parent chain contains a cycle")

        self._tasks.update(tasks)
        self._next_id = max(tasks, default=0) + 1

        renumbered = self._renumber_all()
        if renumbered:
            logger.warning("Loaded display ids had gaps; renumbered %s task(s)", renumbered)

        problems = self.check_invariants()
        for problem in problems:
            logger.warning("Loaded tasks violate an invariant: %s", problem)

    def _renumber_all(self) -> int:
        """
        Make every sibling group dense (1..N, in current display-id order).

        Files written by older versions can have gaps ("1", "3"); allocation
        counts siblings, so a gap would hand out an id that is already taken.
        Returns how many tasks changed.
        """
        before = {t.id: t.display_id for t in self._tasks.values()}
        roots = sorted(children_of(self._tasks, None), key=lambda t: display_id_key(t.display_id))
        for position, root in enumerate(roots):
            renumber_subtree(self._tasks, root.id, allocate(None, position))
        return sum(1 for t in self._tasks.values() if t.display_id != before[t.id])

    # ---- queries ----

    def __len__(self) -> int:
        return len(self._tasks)

    def count_tasks(self) -> int:
        return len(self._tasks)

    def get(self, task_id: int) -> Task | None:
        task = self._tasks.get(task_id)
        return task.copy() if task is not None else None

    def find_by_display_id(self, display_id: str) -> Task | None:
        task = self._find_by_display_id(display_id)
        return task.copy() if task is not None else None

    def children_of(self, task_id: int | None) -> list[Task]:
        kids = sorted(children_of(self._tasks, task_id), key=lambda t: display_id_key(t.display_id))
        return [t.copy() for t in kids]

    def roots(self) -> list[Task]:
        return self.children_of(None)

    def ancestors_of(self, task_id: int) -> list[Task]:
        """Strict ancestors of a task, nearest first."""
        self._require(task_id)
        return [t.copy() for t in ancestors(self._tasks, task_id)]

    def snapshot(self) -> Snapshot:
        return tuple(t.copy() for t in self._tasks.values())

    def to_records(self) -> list[dict[str, Any]]:
        return [t.to_record() for t in self._tasks.values()]

    def _find_by_display_id(self, display_id: str) -> Task | None:
        for task in self._tasks.values():
            if task.display_id == display_id:
                return task
        return None

    def _require(self, task_id: int) -> Task:
        task = self._tasks.get(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    # ---- commands ----

    def create_task(self, name: str, parent_display_id: str | None = None) -> Task:
        clean_name = (name or "").strip()
        if not clean_name:
            logger.info("create rejected: empty name")
            raise InvalidName()

        parent: Task | None = None
        parent_ref = (parent_display_id or "").strip()
        if parent_ref:
            parent = self._find_by_display_id(parent_ref)
            if parent is None:
                logger.info("create rejected: parent %r not found", parent_ref)
                raise ParentNotFound(parent_ref)
            if would_cycle(parent.id, self._next_id, self._tasks):
                logger.info("create rejected: cycle above parent id=%s", parent.id)
                raise CycleDetected(None, parent.id)

        parent_id = parent.id if parent is not None else None
        display_id = allocate(
            parent.display_id if parent is not None else None,
            len(children_of(self._tasks, parent_id)),
        )

        task = Task(
            id=self._next_id,
            display_id=display_id,
            name=clean_name,
            status=TaskStatus.IN_PROGRESS,
            parent_id=parent_id,
        )
        self._tasks[task.id] = task
        self._next_id += 1

        if parent_id is not None:
            # A new IN_PROGRESS child can not leave its ancestors COMPLETE.
            self._status.downgrade_ascent(parent_id)

        logger.debug("Task created id=%s display_id=%s parent_id=%s", task.id, display_id, parent_id)
        return task.copy()

    def toggle_status(self, task_id: int) -> Snapshot:
        task = self._require(task_id)
        before = task.status
        self._status.toggle(task)
        logger.debug("Task toggled id=%s %s -> %s", task.id, before, task.status)
        return self.snapshot()

    def edit_task(
        self,
        task_id: int,
        *,
        name: str | None | _Unset = UNSET,
        parent_display_id: str | None | _Unset = UNSET,
    ) -> Snapshot:
        """
        Rename and/or reparent a task.

        name: trimmed; blank (or None) keeps the current name.
        parent_display_id: UNSET leaves the parent alone; None or a blank
        string detaches the task to the top level; anything else must name
        an existing task that is neither the task itself nor one of its
        descendants.
        """
        task = self._require(task_id)

        old_parent_id = task.parent_id
        new_parent_id = old_parent_id
        if not isinstance(parent_display_id, _Unset):
            new_parent_id = self._resolve_new_parent(task, parent_display_id)

        # validation is over; from here on the edit always commits
        if isinstance(name, str) and name.strip():
            task.name = name.strip()

        if new_parent_id != old_parent_id:
            self._move(task, old_parent_id, new_parent_id)

        return self.snapshot()

    def _resolve_new_parent(self, task: Task, parent_display_id: str | None) -> int | None:
        ref = (parent_display_id or "").strip()
        if not ref:
            return None

        parent = self._find_by_display_id(ref)
        if parent is None:
            logger.info("edit rejected id=%s: parent %r not found", task.id, ref)
            raise ParentNotFound(ref)
        if parent.id == task.id:
            logger.info("edit rejected id=%s: self parent", task.id)
            raise SelfParent(task.id)
        if would_cycle(parent.id, task.id, self._tasks, descending=True):
            logger.info("edit rejected id=%s: parent id=%s is a descendant", task.id, parent.id)
            raise CycleDetected(task.id, parent.id)
        return parent.id

    def _move(self, task: Task, old_parent_id: int | None, new_parent_id: int | None) -> None:
        new_parent = self._tasks[new_parent_id] if new_parent_id is not None else None
        siblings = [t for t in children_of(self._tasks, new_parent_id) if t.id != task.id]
        new_display_id = allocate(
            new_parent.display_id if new_parent is not None else None,
            len(siblings),
        )

        task.parent_id = new_parent_id
        renumber_subtree(self._tasks, task.id, new_display_id)
        # close the gap the move left behind
        renumber_siblings(self._tasks, old_parent_id)

        self._status.after_reparent(task, old_parent_id, new_parent_id)
        logger.debug(
            "Task moved id=%s parent %s -> %s display_id=%s",
            task.id,
            old_parent_id,
            new_parent_id,
            task.display_id,
        )

    # ---- diagnostics ----

    def check_invariants(self) -> list[str]:
        """Return human-readable invariant violations (empty when healthy)."""
        problems: list[str] = []
        index = child_index(self._tasks)

        for task in self._tasks.values():
            if task.parent_id is not None and would_cycle(task.parent_id, task.id, self._tasks):
                problems.append(f"task {task.id}: parent chain contains a cycle")

        for parent_id, kids in index.items():
            parent = self._tasks.get(parent_id) if parent_id is not None else None
            prefix = parent.display_id if parent is not None else None
            ordered = sorted(kids, key=lambda t: display_id_key(t.display_id))
            for position, kid in enumerate(ordered, start=1):
                expected = allocate(prefix, position - 1)
                if kid.display_id != expected:
                    problems.append(f"task {kid.id}: displayId {kid.display_id!r}, expected {expected!r}")

        for task in self._tasks.values():
            kids = index.get(task.id, [])
            if task.status is TaskStatus.COMPLETE and any(k.status is not TaskStatus.COMPLETE for k in kids):
                problems.append(f"task {task.id}: COMPLETE with a child that is not COMPLETE")

        return problems

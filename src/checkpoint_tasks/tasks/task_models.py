# src/checkpoint_tasks/tasks/task_models.py

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any

from .errors import CorruptTaskData


class TaskStatus(StrEnum):
    """
    Task completion status.

    Doneness order: IN_PROGRESS < DONE <= COMPLETE.
    - DONE: the task itself was checked off.
    - COMPLETE: DONE and every direct child is COMPLETE.
    """

    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    COMPLETE = "COMPLETE"

    @property
    def is_on(self) -> bool:
        return self is not TaskStatus.IN_PROGRESS

    @classmethod
    def from_record(cls, raw: Any) -> TaskStatus:
        try:
            return cls(str(raw))
        except ValueError:
            raise CorruptTaskData(f"unknown status {raw!r}") from None


@dataclass(slots=True)
class Task:
    id: int
    display_id: str
    name: str
    status: TaskStatus = TaskStatus.IN_PROGRESS
    parent_id: int | None = None

    def copy(self) -> Task:
        return replace(self)

    def to_record(self) -> dict[str, Any]:
        """Persisted form: exactly the five stored fields, camelCase keys."""
        return {
            "id": self.id,
            "displayId": self.display_id,
            "name": self.name,
            "status": self.status.value,
            "parentId": self.parent_id,
        }

    @classmethod
    def from_record(cls, raw: Mapping[str, Any]) -> Task:
        if not isinstance(raw, Mapping):
            raise CorruptTaskData(f"task record must be an object, got {type(raw).__name__}")

        try:
            task_id = raw["id"]
            display_id = raw["displayId"]
            name = raw["name"]
        except KeyError as e:
            raise CorruptTaskData(f"task record is missing {e.args[0]!r}") from None

        parent_id = raw.get("parentId")
        # bool is an int subclass; reject it explicitly
        if not isinstance(task_id, int) or isinstance(task_id, bool):
            raise CorruptTaskData(f"task id must be an integer, got {task_id!r}")
        if parent_id is not None and (not isinstance(parent_id, int) or isinstance(parent_id, bool)):
            raise CorruptTaskData(f"task {task_id}: parentId must be an integer or null")
        if not isinstance(display_id, str) or not isinstance(name, str):
            raise CorruptTaskData(f"task {task_id}: displayId and name must be strings")

        return cls(
            id=task_id,
            display_id=display_id,
            name=name,
            status=TaskStatus.from_record(raw.get("status", TaskStatus.IN_PROGRESS.value)),
            parent_id=parent_id,
        )

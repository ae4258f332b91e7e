# src/checkpoint_tasks/tasks/errors.py

"""
Failure taxonomy of the task tree engine.

Every error is caller-recoverable: it is raised before the store mutates
anything, so the tree is exactly as it was before the call. `code` is a
stable tag the command layer (or any other caller) can switch on.
"""

from __future__ import annotations


class TaskTreeError(Exception):
    code = "TaskTreeError"


class ParentNotFound(TaskTreeError):
    code = "ParentNotFound"

    def __init__(self, display_id: str) -> None:
        super().__init__(f'Parent task "{display_id}" does not exist.')
        self.display_id = display_id


class SelfParent(TaskTreeError):
    code = "SelfParent"

    def __init__(self, task_id: int) -> None:
        super().__init__("A task cannot be its own parent.")
        self.task_id = task_id


class CycleDetected(TaskTreeError):
    code = "CycleDetected"

    def __init__(self, task_id: int | None, parent_id: int) -> None:
        super().__init__("Circular dependency detected.")
        self.task_id = task_id
        self.parent_id = parent_id


class TaskNotFound(TaskTreeError):
    code = "TaskNotFound"

    def __init__(self, task_id: int | str) -> None:
        super().__init__(f"Task {task_id} does not exist.")
        self.task_id = task_id


class InvalidName(TaskTreeError):
    code = "InvalidName"

    def __init__(self) -> None:
        super().__init__("Task name is required.")


class InvalidDisplayId(TaskTreeError):
    code = "InvalidDisplayId"

    def __init__(self, text: str) -> None:
        super().__init__(f"Invalid task id {text!r} (expected e.g. 1, 1.2, 1.2.10).")
        self.text = text


class CorruptTaskData(TaskTreeError):
    """Persisted tasks cannot be loaded without breaking the tree model."""

    code = "CorruptTaskData"

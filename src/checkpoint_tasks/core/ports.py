# src/checkpoint_tasks/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the command layer.

Commands depend on Protocols instead of concrete implementations, so the
persistence backend can be swapped and tests can pass in-memory fakes.
"""

from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from ..tasks.task_models import Task


class TaskRepo(Protocol):
    # Commands
    def create_task(self, name: str, parent_display_id: str | None = None) -> Task: ...
    def toggle_status(self, task_id: int) -> tuple[Task, ...]: ...
    def edit_task(self, task_id: int, *, name: Any = ..., parent_display_id: Any = ...) -> tuple[Task, ...]: ...

    # Queries
    def get(self, task_id: int) -> Task | None: ...
    def find_by_display_id(self, display_id: str) -> Task | None: ...
    def ancestors_of(self, task_id: int) -> list[Task]: ...
    def snapshot(self) -> tuple[Task, ...]: ...
    def to_records(self) -> list[dict[str, Any]]: ...
    def check_invariants(self) -> list[str]: ...
    def count_tasks(self) -> int: ...


class TaskPersistence(Protocol):
    def load(self) -> list[dict[str, Any]]: ...
    def save(self, records: Iterable[Mapping[str, Any]]) -> None: ...

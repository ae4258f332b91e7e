# tests/fakes.py

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from checkpoint_tasks.core.ports import TaskPersistence


@dataclass(slots=True)
class FakeTaskFile(TaskPersistence):
    """
    In-memory TaskPersistence.

    - Captures every save for assertions
    - load() returns the last saved records (or the seed)
    """

    records: list[dict[str, Any]] = field(default_factory=list)
    saves: int = 0

    def load(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self.records)

    def save(self, records: Iterable[Mapping[str, Any]]) -> None:
        self.records = [dict(r) for r in records]
        self.saves += 1

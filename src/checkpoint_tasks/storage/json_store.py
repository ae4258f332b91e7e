# src/checkpoint_tasks/storage/json_store.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from ..tasks.errors import CorruptTaskData

logger = logging.getLogger(__name__)


class JsonTaskFile:
    """
    JSON file holding the full task list (array of task records).

    - missing file, empty file and `[]` are all a valid cold start
    - writes go to a .tmp sibling first, then replace the real file
    """

    def __init__(self, path: str | Path = "tasks.json") -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def load(self) -> list[dict[str, Any]]:
        if not self._path.exists():
            logger.info("No task file at %s, starting empty.", self._path)
            return []

        raw = self._path.read_text("utf-8")
        if not raw.strip():
            return []

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CorruptTaskData(f"{self._path}: invalid JSON ({e.msg} at line {e.lineno})") from e

        if not isinstance(data, list):
            raise CorruptTaskData(f"{self._path}: expected a JSON array of tasks")
        if not all(isinstance(item, dict) for item in data):
            raise CorruptTaskData(f"{self._path}: every task record must be an object")

        logger.info("Loaded %d tasks from %s", len(data), self._path)
        return data

    def save(self, records: Iterable[Mapping[str, Any]]) -> None:
        items = [dict(r) for r in records]
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self._path.with_suffix(".tmp")
        tmp.write_text(json.dumps(items, ensure_ascii=False, indent=2), "utf-8")
        os.replace(tmp, self._path)
        with contextlib.suppress(OSError):
            os.chmod(self._path, 0o600)
        logger.debug("Saved %d tasks to %s", len(items), self._path)

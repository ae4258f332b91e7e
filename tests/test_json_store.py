# tests/test_json_store.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from checkpoint_tasks.storage.json_store import JsonTaskFile
from checkpoint_tasks.tasks.errors import CorruptTaskData
from checkpoint_tasks.tasks.task_store import TaskStore


def test_missing_and_empty_files_are_a_cold_start(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    assert JsonTaskFile(path).load() == []

    path.write_text("", "utf-8")
    assert JsonTaskFile(path).load() == []

    path.write_text("[]", "utf-8")
    assert JsonTaskFile(path).load() == []


def test_store_survives_save_and_load(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "tasks.json"
    store = TaskStore()
    store.create_task("Ship release")
    store.create_task("Write changelog", "1")
    store.create_task("Tag «v1»", "1")
    store.toggle_status(2)

    JsonTaskFile(path).save(store.to_records())
    reloaded = TaskStore(JsonTaskFile(path).load())

    assert reloaded.snapshot() == store.snapshot()
    assert not path.with_suffix(".tmp").exists()


def test_saved_records_have_exactly_the_stored_fields(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore()
    store.create_task("A")
    store.create_task("B", "1")

    JsonTaskFile(path).save(store.to_records())
    data = json.loads(path.read_text("utf-8"))

    assert data == [
        {"id": 1, "displayId": "1", "name": "A", "status": "IN_PROGRESS", "parentId": None},
        {"id": 2, "displayId": "1.1", "name": "B", "status": "IN_PROGRESS", "parentId": 1},
    ]


def test_save_is_stable_across_round_trips(tmp_path: Path) -> None:
    path = tmp_path / "tasks.json"
    store = TaskStore()
    store.create_task("A")
    store.create_task("B", "1")
    JsonTaskFile(path).save(store.to_records())
    first = path.read_bytes()

    JsonTaskFile(path).save(TaskStore(JsonTaskFile(path).load()).to_records())
    assert path.read_bytes() == first


@pytest.mark.parametrize("content", ["{not json", '{"id": 1}', "[1, 2]"])
def test_corrupt_files_raise(tmp_path: Path, content: str) -> None:
    path = tmp_path / "tasks.json"
    path.write_text(content, "utf-8")
    with pytest.raises(CorruptTaskData):
        JsonTaskFile(path).load()

# tests/test_bootstrap.py

from __future__ import annotations

import json
from pathlib import Path

import pytest

from checkpoint_tasks.cli.bootstrap import create_initial_state, save_tasks
from checkpoint_tasks.config import Settings
from checkpoint_tasks.tasks.errors import CorruptTaskData


def test_cold_start_creates_dirs_and_empty_store(settings) -> None:
    state = create_initial_state(settings=settings)

    assert settings.data_dir.is_dir()
    assert settings.log_dir.is_dir()
    assert state.task_store.count_tasks() == 0
    assert state.page_size == 20


def test_tasks_survive_a_restart(settings) -> None:
    state = create_initial_state(settings=settings)
    state.task_store.create_task("A")
    state.task_store.create_task("B", "1")
    state.task_store.toggle_status(2)
    save_tasks(state)

    again = create_initial_state(settings=settings)
    assert again.task_store.snapshot() == state.task_store.snapshot()


def test_corrupt_task_file_is_not_overwritten(settings) -> None:
    settings.tasks_path.parent.mkdir(parents=True, exist_ok=True)
    bad = [{"id": 1, "displayId": "1", "name": "A", "status": "DONE", "parentId": 1}]
    settings.tasks_path.write_text(json.dumps(bad), "utf-8")

    with pytest.raises(CorruptTaskData):
        create_initial_state(settings=settings)
    assert json.loads(settings.tasks_path.read_text("utf-8")) == bad


def test_settings_from_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("CHECKPOINT_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("CHECKPOINT_PAGE_SIZE", "5")
    monkeypatch.setenv("CHECKPOINT_AUTOSAVE", "off")
    monkeypatch.delenv("CHECKPOINT_TASKS_PATH", raising=False)
    monkeypatch.delenv("CHECKPOINT_LOG_DIR", raising=False)

    s = Settings.from_env()
    assert s.data_dir == tmp_path
    assert s.tasks_path == tmp_path / "tasks.json"
    assert s.log_dir == tmp_path
    assert s.page_size == 5
    assert s.autosave is False


def test_settings_ignore_bad_numbers(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CHECKPOINT_PAGE_SIZE", "lots")
    assert Settings.from_env().page_size == 20
    monkeypatch.setenv("CHECKPOINT_PAGE_SIZE", "0")
    assert Settings.from_env().page_size == 1

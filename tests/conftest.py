# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from checkpoint_tasks.core.state import AppState
from checkpoint_tasks.tasks.task_store import TaskStore

from fakes import FakeTaskFile


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="checkpoint-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        tasks_path=tmp_path / "data" / "tasks.json",
        log_dir=tmp_path / "logs",
        page_size=20,
        autosave=True,
    )


@pytest.fixture()
def store() -> TaskStore:
    return TaskStore()


@pytest.fixture()
def persistence() -> FakeTaskFile:
    return FakeTaskFile()


@pytest.fixture()
def state(settings: SimpleNamespace, store: TaskStore, persistence: FakeTaskFile) -> AppState:
    """
    AppState wired with an in-memory persistence fake.

    NOTE: the store is the real TaskStore; its behaviour is what we test.
    """
    return AppState(
        settings=settings,
        task_store=store,
        persistence=persistence,
        autosave=True,
        page_size=settings.page_size,
    )

# tests/test_console_connector.py

from __future__ import annotations

import builtins
from collections.abc import Iterator

import pytest

from checkpoint_tasks.connectors.console_connector import run_console_loop


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


def test_bare_text_adds_a_task_and_exit_stops(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["Buy milk", "", "/toggle 1", "/exit", "/add never"])
    run_console_loop(state)

    out = capsys.readouterr().out
    assert "Created 1 Buy milk (@1)." in out
    assert "1 Buy milk: COMPLETE" in out
    assert state.task_store.count_tasks() == 1


def test_eof_ends_the_loop(state, monkeypatch, capsys) -> None:
    _feed(monkeypatch, ["/add A", "/edit 1 --parent 1"])
    run_console_loop(state)

    out = capsys.readouterr().out
    assert "[SelfParent]" in out

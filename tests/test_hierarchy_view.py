# tests/test_hierarchy_view.py

from __future__ import annotations

import pytest

from checkpoint_tasks.tasks.hierarchy_view import HierarchyView, StatusFilter
from checkpoint_tasks.tasks.task_models import Task, TaskStatus
from checkpoint_tasks.tasks.task_store import TaskStore


def _tasks() -> list[Task]:
    # arena order deliberately differs from display order
    return [
        Task(5, "10", "ten"),
        Task(1, "1", "one"),
        Task(3, "1.10", "one.ten", parent_id=1),
        Task(2, "1.2", "one.two", status=TaskStatus.DONE, parent_id=1),
        Task(4, "1.2.1", "one.two.one", status=TaskStatus.COMPLETE, parent_id=2),
        Task(6, "2", "two", status=TaskStatus.COMPLETE),
    ]


def test_preorder_with_numeric_sibling_order() -> None:
    view = HierarchyView(_tasks())
    assert [(t.display_id, depth) for t, depth in view.ordered()] == [
        ("1", 0),
        ("1.2", 1),
        ("1.2.1", 2),
        ("1.10", 1),
        ("2", 0),
        ("10", 0),
    ]


def test_collapsed_tree_shows_roots_only() -> None:
    rows = HierarchyView(_tasks()).rows()
    assert [r.task.display_id for r in rows] == ["1", "2", "10"]
    assert rows[0].has_children is True
    assert rows[1].has_children is False


def test_visibility_requires_every_ancestor_expanded() -> None:
    view = HierarchyView(_tasks())

    rows = view.rows(expanded={1})
    assert [r.task.display_id for r in rows] == ["1", "1.2", "1.10", "2", "10"]

    # 2 expanded but its parent 1 collapsed -> 1.2.1 stays hidden
    rows = view.rows(expanded={2})
    assert [r.task.display_id for r in rows] == ["1", "2", "10"]

    rows = view.rows(expanded={1, 2})
    assert "1.2.1" in [r.task.display_id for r in rows]


def test_status_filter_is_exact_match_on_stored_status() -> None:
    view = HierarchyView(_tasks())
    expanded = {1, 2}

    done = view.rows(StatusFilter.DONE, expanded)
    assert [r.task.display_id for r in done] == ["1.2"]

    complete = view.rows(StatusFilter.COMPLETE, expanded)
    assert [r.task.display_id for r in complete] == ["1.2.1", "2"]

    in_progress = view.rows(StatusFilter.IN_PROGRESS, expanded)
    assert [r.task.display_id for r in in_progress] == ["1", "1.10", "10"]


def test_dependency_stats() -> None:
    view = HierarchyView(_tasks())
    stats = view.dependency_stats(1)
    assert (stats.total, stats.done, stats.complete) == (2, 1, 0)

    stats = view.dependency_stats(2)
    assert (stats.total, stats.done, stats.complete) == (1, 1, 1)

    assert view.dependency_stats(6).total == 0


def test_depth_is_reported_on_rows() -> None:
    rows = HierarchyView(_tasks()).rows(expanded={1, 2})
    depths = {r.task.display_id: r.depth for r in rows}
    assert depths["1"] == 0
    assert depths["1.2"] == 1
    assert depths["1.2.1"] == 2


def test_view_never_mutates_the_store() -> None:
    store = TaskStore()
    store.create_task("A")
    store.create_task("B", "1")
    before = store.snapshot()

    view = HierarchyView(store.snapshot())
    view.rows(StatusFilter.ALL, {1})
    assert store.snapshot() == before


def test_pagination_clamps_page_number() -> None:
    tasks = [Task(i, str(i), f"t{i}") for i in range(1, 46)]
    view = HierarchyView(tasks)
    rows = view.rows()

    first = view.page(rows, 1, 20)
    assert len(first.items) == 20
    assert (first.number, first.total_pages) == (1, 3)
    assert first.has_next and not first.has_prev

    last = view.page(rows, 99, 20)
    assert last.number == 3
    assert [r.task.display_id for r in last.items] == [str(i) for i in range(41, 46)]

    assert view.page(rows, 0, 20).number == 1


def test_empty_listing_has_one_empty_page() -> None:
    page = HierarchyView([]).page([], 3, 20)
    assert page.items == ()
    assert (page.number, page.total_pages) == (1, 1)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("all", StatusFilter.ALL),
        ("in-progress", StatusFilter.IN_PROGRESS),
        ("IN_PROGRESS", StatusFilter.IN_PROGRESS),
        (" Done ", StatusFilter.DONE),
        ("complete", StatusFilter.COMPLETE),
    ],
)
def test_status_filter_parse(raw: str, expected: StatusFilter) -> None:
    assert StatusFilter.parse(raw) is expected


def test_status_filter_parse_rejects_unknown() -> None:
    with pytest.raises(ValueError):
        StatusFilter.parse("finished")

# src/checkpoint_tasks/tasks/cycle_guard.py

from __future__ import annotations

from .tree import TaskArena, child_index


def would_cycle_ascending(candidate_parent_id: int, node_id: int | None, tasks: TaskArena) -> bool:
    """
    Walk from the candidate parent towards its root.

    Used on create, where `node_id` is not in the arena yet (pass None or the
    id about to be assigned). True iff the walk meets `node_id` or revisits a
    task before reaching a root.
    """
    visited: set[int] = set()
    current: int | None = candidate_parent_id
    while current is not None:
        if current == node_id or current in visited:
            return True
        visited.add(current)
        task = tasks.get(current)
        if task is None:
            return False
        current = task.parent_id
    return False


def would_cycle_descending(candidate_parent_id: int, node_id: int, tasks: TaskArena) -> bool:
    """
    True iff the candidate parent is `node_id` itself or lies in the subtree
    rooted at `node_id` (the move would hang a task below its own descendant).

    Used on reparent, where both endpoints already exist.
    """
    if candidate_parent_id == node_id:
        return True

    index = child_index(tasks)
    seen: set[int] = set()
    stack = [node_id]
    while stack:
        current = stack.pop()
        for child in index.get(current, ()):
            if child.id == candidate_parent_id:
                return True
            if child.id not in seen:
                seen.add(child.id)
                stack.append(child.id)
    return False


def would_cycle(
    candidate_parent_id: int,
    node_id: int | None,
    tasks: TaskArena,
    *,
    descending: bool = False,
) -> bool:
    if descending:
        if node_id is None:
            return False
        return would_cycle_descending(candidate_parent_id, node_id, tasks)
    return would_cycle_ascending(candidate_parent_id, node_id, tasks)

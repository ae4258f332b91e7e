# src/checkpoint_tasks/tasks/display_ids.py

"""
Hierarchical display identifiers ("1", "1.2", "1.2.10").

A display id is the path of 1-based sibling ordinals from a root. Ordering
is numeric per component, and a prefix sorts before its own extensions:
"1" < "1.1" < "1.2" < "1.10" < "2".
"""

from __future__ import annotations

import logging
import re
from collections.abc import MutableMapping

from .errors import InvalidDisplayId
from .task_models import Task
from .tree import children_of

logger = logging.getLogger(__name__)

DISPLAY_ID_RE = re.compile(r"^[1-9][0-9]*(?:\.[1-9][0-9]*)*$")


def is_valid_display_id(text: str) -> bool:
    return bool(DISPLAY_ID_RE.match(text or ""))


def parse_display_id(text: str) -> tuple[int, ...]:
    if not is_valid_display_id(text):
        raise InvalidDisplayId(text)
    return tuple(int(part) for part in text.split("."))


def display_id_key(text: str) -> tuple[int, ...]:
    """
    Sort key for display ids.

    Tuple comparison gives both rules at once: component-wise integer order,
    and a shorter prefix before its extensions. Malformed text sorts last
    instead of raising, so a view never crashes on foreign data.
    """
    try:
        return parse_display_id(text)
    except InvalidDisplayId:
        return (2**63,)


def compare_display_ids(a: str, b: str) -> int:
    ka, kb = display_id_key(a), display_id_key(b)
    return (ka > kb) - (ka < kb)


def allocate(parent_display_id: str | None, existing_sibling_count: int) -> str:
    """Creation-time rule: next ordinal after the siblings that already exist."""
    ordinal = existing_sibling_count + 1
    if parent_display_id is None:
        return str(ordinal)
    return f"{parent_display_id}.{ordinal}"


def renumber_subtree(tasks: MutableMapping[int, Task], root_id: int, new_display_id: str) -> None:
    """
    Give `root_id` the id `new_display_id` and renumber all of its descendants.

    Children keep their relative order (by current display id) and get dense
    ordinals 1..N under the new prefix.
    """
    stack = [(root_id, new_display_id)]
    while stack:
        task_id, display_id = stack.pop()
        task = tasks[task_id]
        if task.display_id != display_id:
            logger.debug("renumber id=%s %s -> %s", task_id, task.display_id, display_id)
        task.display_id = display_id

        kids = sorted(children_of(tasks, task_id), key=lambda t: display_id_key(t.display_id))
        for position, child in enumerate(kids, start=1):
            stack.append((child.id, f"{display_id}.{position}"))


def renumber_siblings(tasks: MutableMapping[int, Task], parent_id: int | None) -> None:
    """Re-densify one sibling group (roots when `parent_id` is None)."""
    prefix = None if parent_id is None else tasks[parent_id].display_id
    group = sorted(children_of(tasks, parent_id), key=lambda t: display_id_key(t.display_id))
    for position, task in enumerate(group, start=1):
        wanted = allocate(prefix, position - 1)
        if task.display_id != wanted:
            renumber_subtree(tasks, task.id, wanted)

# src/checkpoint_tasks/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable
from typing import cast

from ..core.state import AppState
from ..tasks.display_ids import is_valid_display_id
from ..tasks.errors import TaskNotFound, TaskTreeError
from ..tasks.hierarchy_view import HierarchyView, StatusFilter, TaskRow
from ..tasks.task_models import Task
from ..tasks.task_store import UNSET

CommandEmitter = Callable[[str], None]
CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], CommandEmitter | None], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Engine failures (TaskTreeError) are turned into a one-line reply; the
        store rejected the command before changing anything.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 3

        try:
            if nparams >= 3:
                h3 = cast(CommandHandler3, handler)
                return h3(state, args, emit)

            h2 = cast(CommandHandler2, handler)
            return h2(state, args)
        except TaskTreeError as e:
            logger.debug("/%s rejected: %s", name, e.code)
            return f"[{e.code}] {e}"

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- argument helpers ----


def _split_options(args: list[str], options: set[str]) -> tuple[list[str], dict[str, list[str]]]:
    """
    Split "words --opt value words" into positional words and option values.
    An option collects every word up to the next option.
    """
    positional: list[str] = []
    values: dict[str, list[str]] = {}
    current: list[str] = positional
    for token in args:
        if token.lower() in options:
            current = values.setdefault(token.lower(), [])
            continue
        current.append(token)
    return positional, values


def resolve_task(state: AppState, ref: str) -> Task:
    """
    Resolve a task reference typed by the user.

    "1.2" is a display id (what /list shows); "@7" is the stable internal id.
    """
    ref = ref.strip()
    if ref.startswith("@"):
        raw = ref[1:]
        if not raw.isdigit():
            raise TaskNotFound(ref)
        task = state.task_store.get(int(raw))
    elif is_valid_display_id(ref):
        task = state.task_store.find_by_display_id(ref)
    else:
        task = None
    if task is None:
        raise TaskNotFound(ref)
    return task


def format_row(row: TaskRow, expanded: set[int]) -> str:
    task = row.task
    if row.has_children:
        marker = "-" if task.id in expanded else "+"
    else:
        marker = " "
    line = f"{'  ' * row.depth}{marker} {task.display_id}  [{task.status.value}] {task.name}"
    if row.has_children:
        s = row.stats
        line += f"  (Dependencies: {s.done}/{s.total} done, {s.complete}/{s.total} complete)"
    return line


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_add(state: AppState, args: list[str]) -> str:
    """
    /add <name...>                       -> new top-level task
    /add <name...> --parent <displayId>  -> new sub-task
    """
    words, opts = _split_options(args, {"--parent", "-p"})
    if any(not opts[key] for key in opts):
        return "Usage: /add <name> [--parent <displayId>]"
    parent_words = opts.get("--parent") or opts.get("-p")
    parent = " ".join(parent_words) if parent_words else None

    task = state.task_store.create_task(" ".join(words), parent)
    # the new row must be visible, so open every collapsed level above it
    state.expanded.update(a.id for a in state.task_store.ancestors_of(task.id))
    state.after_mutation()
    return f"Created {task.display_id} {task.name} (@{task.id})."


def cmd_toggle(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /toggle <displayId|@id>"
    task = resolve_task(state, args[0])
    state.task_store.toggle_status(task.id)
    state.after_mutation()

    updated = resolve_task(state, f"@{task.id}")
    return f"{updated.display_id} {updated.name}: {updated.status.value}"


def cmd_edit(state: AppState, args: list[str]) -> str:
    """
    /edit <ref> --name <text...>         -> rename
    /edit <ref> --parent <displayId>     -> move under another task
    /edit <ref> --root                   -> move to the top level
    """
    words, opts = _split_options(args, {"--name", "--parent", "--root"})
    if len(words) != 1 or not opts:
        return "Usage: /edit <displayId|@id> [--name <text>] [--parent <displayId> | --root]"
    if "--parent" in opts and "--root" in opts:
        return "Use either --parent or --root, not both."
    # --root is the only way to detach; an empty --parent is a typo
    if any(not opts[key] for key in ("--name", "--parent") if key in opts):
        return "Usage: /edit <displayId|@id> [--name <text>] [--parent <displayId> | --root]"

    task = resolve_task(state, words[0])

    name = " ".join(opts["--name"]) if "--name" in opts else UNSET
    parent = UNSET
    if "--root" in opts:
        parent = None
    elif "--parent" in opts:
        parent = " ".join(opts["--parent"])

    state.task_store.edit_task(task.id, name=name, parent_display_id=parent)
    state.after_mutation()

    updated = resolve_task(state, f"@{task.id}")
    return f"Updated {updated.display_id} {updated.name}."


def cmd_list(state: AppState, args: list[str]) -> str:
    view = HierarchyView(state.task_store.snapshot())
    rows = view.rows(state.status_filter, state.expanded)
    page = view.page(rows, state.page, state.page_size)
    state.page = page.number

    if not page.items:
        return f"No tasks (filter: {state.status_filter.value})."

    lines = [format_row(row, state.expanded) for row in page.items]
    lines.append(
        f"Page {page.number}/{page.total_pages} | {len(rows)} rows | filter: {state.status_filter.value}"
    )
    return "\n".join(lines)


def cmd_filter(state: AppState, args: list[str]) -> str:
    if not args:
        return f"Filter is {state.status_filter.value}. Use /filter all|in_progress|done|complete."
    try:
        state.status_filter = StatusFilter.parse(args[0])
    except ValueError:
        return "Usage: /filter all|in_progress|done|complete"
    state.page = 1
    return f"Filter set to {state.status_filter.value}."


def _set_expanded(state: AppState, args: list[str], expand: bool) -> str:
    verb, done = ("expand", "Expanded") if expand else ("collapse", "Collapsed")
    if len(args) != 1:
        return f"Usage: /{verb} <displayId|@id|all>"

    if args[0].lower() == "all":
        if expand:
            state.expanded = {t.parent_id for t in state.task_store.snapshot() if t.parent_id is not None}
        else:
            state.expanded = set()
        state.page = 1
        return f"{done} all."

    task = resolve_task(state, args[0])
    if expand:
        state.expanded.add(task.id)
    else:
        state.expanded.discard(task.id)
    state.page = 1
    return f"{done} {task.display_id}."


def cmd_expand(state: AppState, args: list[str]) -> str:
    return _set_expanded(state, args, expand=True)


def cmd_collapse(state: AppState, args: list[str]) -> str:
    return _set_expanded(state, args, expand=False)


def cmd_page(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /page <n|next|prev>"
    arg = args[0].lower()
    if arg == "next":
        state.page += 1
    elif arg == "prev":
        state.page = max(1, state.page - 1)
    elif arg.isdigit():
        state.page = int(arg)
    else:
        return "Usage: /page <n|next|prev>"
    return cmd_list(state, [])


def cmd_check(state: AppState, args: list[str]) -> str:
    problems = state.task_store.check_invariants()
    if not problems:
        return f"OK: {state.task_store.count_tasks()} tasks, all invariants hold."
    return "\n".join(["Invariant violations:", *(f"  {p}" for p in problems)])


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if state.persistence is None:
        return "No persistence configured."
    if emit:
        emit("Saving tasks...")
    state.persist()
    return f"Saved {state.task_store.count_tasks()} tasks."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register(
    "add", cmd_add, help_text="Create a task: /add <name> [--parent <displayId>].", aliases=["a"]
)
registry.register(
    "toggle", cmd_toggle, help_text="Check/uncheck a task: /toggle <displayId|@id>.", aliases=["t"]
)
registry.register(
    "edit",
    cmd_edit,
    help_text="Rename/move: /edit <ref> [--name <text>] [--parent <displayId> | --root].",
    aliases=["e"],
)
registry.register("list", cmd_list, help_text="Show the task tree (current page).", aliases=["ls"])
registry.register("filter", cmd_filter, help_text="Filter rows: /filter all|in_progress|done|complete.")
registry.register("expand", cmd_expand, help_text="Show sub-tasks: /expand <ref>|all.")
registry.register("collapse", cmd_collapse, help_text="Hide sub-tasks: /collapse <ref>|all.")
registry.register("page", cmd_page, help_text="Change page: /page <n|next|prev>.")
registry.register("check", cmd_check, help_text="Verify tree invariants.")
registry.register("save", cmd_save, help_text="Write tasks to disk now.")

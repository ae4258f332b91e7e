"""
Task tree engine.

Components:
- task_models.py: data structures (Task, TaskStatus) and record form
- errors.py: caller-recoverable failures (ParentNotFound, CycleDetected, ...)
- display_ids.py: hierarchical ids ("1.2.1"): ordering, allocation, renumbering
- cycle_guard.py: ascending/descending cycle checks
- status_propagator.py: IN_PROGRESS / DONE / COMPLETE automaton
- task_store.py: in-memory arena + create/toggle/edit transactions
- hierarchy_view.py: read-only ordered, filtered, collapsible listing
"""

# src/todo_list/tasks/filters.py

from __future__ import annotations

from collections.abc import Iterable

from .task_models import FilterMode, Task, TaskList


def matches(task: Task, mode: FilterMode) -> bool:
    if mode == FilterMode.ONGOING:
        return not task.completed
    if mode == FilterMode.COMPLETED:
        return task.completed
    return True


def filter_tasks(tasks: Iterable[Task], mode: FilterMode) -> TaskList:
    """
    Visible subsequence of `tasks` for `mode`.

    Pure: input order is kept and nothing is mutated. ONGOING and COMPLETED partition
    the input exactly.
    """
    return tuple(t for t in tasks if matches(t, mode))


def count_by_mode(tasks: Iterable[Task]) -> dict[FilterMode, int]:
    counts = {mode: 0 for mode in FilterMode}
    for t in tasks:
        counts[FilterMode.ALL] += 1
        counts[FilterMode.COMPLETED if t.completed else FilterMode.ONGOING] += 1
    return counts

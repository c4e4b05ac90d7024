# src/todo_list/core/view_model.py

"""
Read-only view model consumed by the presentation layer.

`render` is pure: it takes the current snapshot and ViewState and returns plain frozen
records. Row numbers are 1-based positions in the *visible* list; the console maps them
back to task ids before calling the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..tasks.filters import count_by_mode, filter_tasks
from ..tasks.task_models import FilterMode, Priority, TaskList
from .state import ViewState


@dataclass(frozen=True, slots=True)
class TaskRow:
    number: int
    id: str
    text: str
    completed: bool
    priority: Priority
    created_at: datetime | None
    completed_at: datetime | None
    editing: bool

    @property
    def status(self) -> str:
        return "Completed" if self.completed else "Ongoing"


@dataclass(frozen=True, slots=True)
class Screen:
    rows: tuple[TaskRow, ...]
    filter_mode: FilterMode
    counts: dict[FilterMode, int]
    editing_id: str | None
    draft_text: str
    draft_priority: Priority

    @property
    def is_empty(self) -> bool:
        return not self.rows

    def row(self, number: int) -> TaskRow | None:
        if 1 <= number <= len(self.rows):
            return self.rows[number - 1]
        return None


def render(tasks: TaskList, view: ViewState) -> Screen:
    editing_id = view.draft.target_id
    visible = filter_tasks(tasks, view.filter_mode)
    rows = tuple(
        TaskRow(
            number=i,
            id=t.id,
            text=t.text,
            completed=t.completed,
            priority=t.priority,
            created_at=t.created_at,
            completed_at=t.completed_at,
            editing=t.id == editing_id,
        )
        for i, t in enumerate(visible, start=1)
    )
    return Screen(
        rows=rows,
        filter_mode=view.filter_mode,
        counts=count_by_mode(tasks),
        editing_id=editing_id,
        draft_text=view.draft.text,
        draft_priority=view.draft.priority,
    )

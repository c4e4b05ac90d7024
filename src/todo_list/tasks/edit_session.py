# src/todo_list/tasks/edit_session.py

from __future__ import annotations

"""
Edit draft: the staging area behind the input box.

A draft either targets an existing task (editing) or nothing (creating). All transitions
are pure functions returning a new EditDraft; only `commit` touches the store.
"""

from dataclasses import dataclass, replace

from .task_models import Priority, TaskList
from .task_store import TaskStore


@dataclass(frozen=True, slots=True)
class EditDraft:
    target_id: str | None = None
    text: str = ""
    priority: Priority = Priority.MEDIUM

    @property
    def is_editing(self) -> bool:
        return self.target_id is not None


def new_draft(priority: Priority = Priority.MEDIUM) -> EditDraft:
    return EditDraft(priority=priority)


def begin(store: TaskStore, task_id: str) -> EditDraft:
    """Stage the task's current text/priority. Raises NotFoundError; replaces any previous draft."""
    task = store.get(task_id)
    return EditDraft(target_id=task.id, text=task.text, priority=task.priority)


def set_text(draft: EditDraft, text: str) -> EditDraft:
    return replace(draft, text=text)


def set_priority(draft: EditDraft, priority: Priority) -> EditDraft:
    return replace(draft, priority=Priority(priority))


def cancel(draft: EditDraft, default_priority: Priority = Priority.MEDIUM) -> EditDraft:
    return new_draft(default_priority)


def commit(
    draft: EditDraft,
    store: TaskStore,
    *,
    default_priority: Priority = Priority.MEDIUM,
) -> tuple[TaskList, EditDraft]:
    """
    Apply the draft: update the target when editing, add a new task otherwise.

    On success returns (new snapshot, fresh draft). On ValidationError / NotFoundError the
    exception propagates and the caller keeps its current draft.
    """
    if draft.target_id is not None:
        tasks = store.update(draft.target_id, draft.text, draft.priority)
    else:
        tasks = store.add(draft.text, draft.priority)
    return tasks, new_draft(default_priority)

# src/todo_list/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Any

from ..storage.persistence import PersistenceAdapter
from ..tasks.edit_session import EditDraft
from ..tasks.task_models import FilterMode
from ..tasks.task_store import TaskStore


@dataclass(frozen=True, slots=True)
class ViewState:
    """
    Everything the UI remembers between commands besides the tasks themselves.

    Not persisted. Changed only through the pure helpers below.
    """

    filter_mode: FilterMode = FilterMode.ALL
    draft: EditDraft = field(default_factory=EditDraft)


def with_filter(view: ViewState, mode: FilterMode) -> ViewState:
    return replace(view, filter_mode=FilterMode(mode))


def with_draft(view: ViewState, draft: EditDraft) -> ViewState:
    return replace(view, draft=draft)


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskStore
    persistence: PersistenceAdapter
    writer: Any  # PersistenceWriter | InlineWriter

    view: ViewState = field(default_factory=ViewState)

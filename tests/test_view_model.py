# tests/test_view_model.py

from __future__ import annotations

from todo_list.core.state import ViewState, with_draft, with_filter
from todo_list.core.view_model import render
from todo_list.tasks import edit_session
from todo_list.tasks.task_models import FilterMode, Priority
from todo_list.tasks.task_store import TaskStore


def test_render_visible_rows_and_counts(store: TaskStore) -> None:
    store.add("A", Priority.LOW)
    b = store.add("B", Priority.HIGH)[-1].id
    store.toggle_complete(b)

    view = with_filter(ViewState(), FilterMode.COMPLETED)
    screen = render(store.tasks, view)

    assert [r.text for r in screen.rows] == ["B"]
    assert screen.rows[0].number == 1
    assert screen.rows[0].status == "Completed"
    assert screen.counts == {FilterMode.ALL: 2, FilterMode.ONGOING: 1, FilterMode.COMPLETED: 1}
    assert screen.row(1) is screen.rows[0]
    assert screen.row(2) is None


def test_render_marks_the_task_being_edited(store: TaskStore) -> None:
    a = store.add("A", Priority.LOW)[-1].id
    store.add("B", Priority.LOW)

    view = with_draft(ViewState(), edit_session.begin(store, a))
    screen = render(store.tasks, view)

    assert screen.editing_id == a
    assert [r.editing for r in screen.rows] == [True, False]
    assert screen.draft_text == "A"


def test_view_transitions_are_pure() -> None:
    view = ViewState()
    other = with_filter(view, FilterMode.ONGOING)
    assert view.filter_mode == FilterMode.ALL
    assert other.filter_mode == FilterMode.ONGOING
    assert render((), other).is_empty

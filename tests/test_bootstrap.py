# tests/test_bootstrap.py

from __future__ import annotations

from types import SimpleNamespace

from todo_list.cli.bootstrap import create_initial_state, shutdown_state
from todo_list.cli.commands import submit_text
from todo_list.storage.writer import PersistenceWriter
from todo_list.tasks.task_models import Priority


def test_tasks_survive_a_restart_with_background_saves(settings: SimpleNamespace) -> None:
    settings.async_saves = True

    first = create_initial_state(settings=settings)
    assert isinstance(first.writer, PersistenceWriter)
    submit_text(first, "persist me")
    submit_text(first, "and me")
    first.store.toggle_complete(first.store.tasks[0].id)
    shutdown_state(first)

    second = create_initial_state(settings=settings)
    try:
        assert [(t.text, t.completed) for t in second.store.tasks] == [
            ("persist me", True),
            ("and me", False),
        ]
        assert second.store.tasks[0].completed_at is not None
    finally:
        shutdown_state(second)


def test_json_backend_and_default_priority(settings: SimpleNamespace) -> None:
    settings.storage_backend = "json"
    settings.default_priority = Priority.LOW

    state = create_initial_state(settings=settings)
    try:
        assert state.view.draft.priority == Priority.LOW
        submit_text(state, "json task")
        assert state.view.draft.priority == Priority.LOW
    finally:
        shutdown_state(state)

    assert settings.json_path.exists()
    again = create_initial_state(settings=settings)
    try:
        assert [(t.text, t.priority) for t in again.store.tasks] == [("json task", Priority.LOW)]
    finally:
        shutdown_state(again)

# tests/conftest.py

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path
from types import SimpleNamespace

import pytest

from todo_list.cli.bootstrap import create_initial_state
from todo_list.core.state import AppState
from todo_list.tasks.task_models import Priority
from todo_list.tasks.task_store import TaskStore

from .fakes import FakeClock, MemoryKeyValueStore, RecordingWriter, SeqIds


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="todo-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        db_path=tmp_path / "todo.sqlite3",
        json_path=tmp_path / "todo.json",
        storage_backend="sqlite",
        storage_key="tasks",
        async_saves=False,
        default_priority=Priority.MEDIUM,
    )


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def writer() -> RecordingWriter:
    return RecordingWriter()


@pytest.fixture()
def store(writer: RecordingWriter, clock: FakeClock) -> TaskStore:
    return TaskStore(writer, clock=clock, id_factory=SeqIds())


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStore) -> Iterator[AppState]:
    """
    AppState wired through the real composition root, on an in-memory key/value store.
    Saves are inline (settings.async_saves=False) so assertions see them immediately.
    """
    st = create_initial_state(settings=settings, storage=kv)
    yield st
    st.writer.close()

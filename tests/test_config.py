# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from todo_list.config import Settings
from todo_list.tasks.task_models import Priority


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "TODO_APP_NAME",
        "TODO_LOG_LEVEL",
        "TODO_DATA_DIR",
        "TODO_DB_PATH",
        "TODO_JSON_PATH",
        "TODO_STORAGE_BACKEND",
        "TODO_STORAGE_KEY",
        "TODO_ASYNC_SAVES",
        "TODO_DEFAULT_PRIORITY",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults() -> None:
    s = Settings.from_env()
    assert s.app_name == "todo"
    assert s.log_level == "INFO"
    assert s.data_dir == Path(".local/todo")
    assert s.db_path == Path(".local/todo/todo.sqlite3")
    assert s.storage_backend == "sqlite"
    assert s.storage_key == "tasks"
    assert s.async_saves is True
    assert s.default_priority == Priority.MEDIUM


def test_env_overrides(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TODO_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TODO_STORAGE_BACKEND", "JSON")
    monkeypatch.setenv("TODO_ASYNC_SAVES", "off")
    monkeypatch.setenv("TODO_DEFAULT_PRIORITY", "high")
    monkeypatch.setenv("TODO_LOG_LEVEL", "debug")

    s = Settings.from_env()

    assert s.json_path == tmp_path / "todo.json"
    assert s.storage_backend == "json"
    assert s.async_saves is False
    assert s.default_priority == Priority.HIGH
    assert s.log_level == "DEBUG"


def test_malformed_values_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TODO_STORAGE_BACKEND", "postgres")
    monkeypatch.setenv("TODO_DEFAULT_PRIORITY", "urgent")
    monkeypatch.setenv("TODO_STORAGE_KEY", "   ")

    s = Settings.from_env()

    assert s.storage_backend == "sqlite"
    assert s.default_priority == Priority.MEDIUM
    assert s.storage_key == "tasks"

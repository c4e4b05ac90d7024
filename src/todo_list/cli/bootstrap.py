# src/todo_list/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the storage backend, persistence adapter, writer and TaskStore into AppState.
"""

from __future__ import annotations

import contextlib
import logging

from ..config import get_settings
from ..core.ports import KeyValueStorage
from ..core.state import AppState, ViewState
from ..storage.kv_store import JsonFileKeyValueStore, SQLiteKeyValueStore
from ..storage.persistence import PersistenceAdapter
from ..storage.writer import InlineWriter, PersistenceWriter
from ..tasks.edit_session import new_draft
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    with contextlib.suppress(OSError):
        settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> KeyValueStorage:
    backend = getattr(settings, "storage_backend", "sqlite")
    if backend == "json":
        return JsonFileKeyValueStore(settings.json_path)
    return SQLiteKeyValueStore(settings.db_path)


def create_initial_state(*, settings=None, storage: KeyValueStorage | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings (and storage) injectable makes the app easier to test and avoids
    hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if storage is None:
        storage = create_storage(settings)
    persistence = PersistenceAdapter(storage, key=getattr(settings, "storage_key", "tasks"))

    writer: PersistenceWriter | InlineWriter
    if getattr(settings, "async_saves", True):
        writer = PersistenceWriter(persistence)
    else:
        writer = InlineWriter(persistence)

    store = TaskStore.open(persistence, writer)

    return AppState(
        settings=settings,
        store=store,
        persistence=persistence,
        writer=writer,
        view=ViewState(draft=new_draft(settings.default_priority)),
    )


def shutdown_state(state: AppState) -> None:
    """Flush pending saves and stop the writer (no exceptions should escape)."""
    try:
        state.writer.close()
    except Exception:
        logger.exception("Failed to stop the persistence writer.")

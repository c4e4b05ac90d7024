# src/todo_list/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and makes testing easier.
"""

from concurrent.futures import Future
from typing import Protocol

from ..tasks.task_models import TaskList


class KeyValueStorage(Protocol):
    """
    Durable string key/value storage.

    Implementations raise StorageError on I/O failure and make `set` atomic:
    a reader sees either the previous value or the new one, never a partial write.
    """

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...
    def describe(self) -> str: ...


class TaskLoader(Protocol):
    def load(self) -> TaskList: ...


class SnapshotWriter(Protocol):
    """
    Where TaskStore sends each new snapshot.

    `submit` must not block on I/O and must not raise for storage failures; the returned
    future resolves once the snapshot is durable (or carries the StorageError).
    """

    def submit(self, tasks: TaskList) -> Future[None]: ...

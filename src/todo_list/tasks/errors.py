# src/todo_list/tasks/errors.py

from __future__ import annotations


class TodoError(Exception):
    """Base class for errors raised by the task core."""


class ValidationError(TodoError):
    """Task text is empty after trimming whitespace."""


class NotFoundError(TodoError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"task not found: {task_id}")
        self.task_id = task_id


class StorageError(TodoError):
    """
    Durable storage could not be read or written.

    Raised by key/value backends only; PersistenceAdapter and PersistenceWriter catch it,
    log it and keep the in-memory snapshot authoritative.
    """

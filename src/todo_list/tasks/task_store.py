# src/todo_list/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from dataclasses import replace
from datetime import datetime

from ..core.ports import SnapshotWriter, TaskLoader
from .errors import NotFoundError, ValidationError
from .task_models import Priority, Task, TaskList, new_task_id, to_millis, utc_now

logger = logging.getLogger(__name__)


def clean_text(text: str | None) -> str:
    s = (text or "").strip()
    if not s:
        raise ValidationError("Please enter a task")
    return s


class TaskStore:
    """
    In-memory task list (source of truth).

    Every successful mutation:
    - builds a new immutable snapshot (tuple) instead of editing the old one,
    - hands the snapshot to the writer, which persists it in issuance order.

    Failed mutations raise ValidationError / NotFoundError before touching the snapshot,
    so nothing is scheduled for them.
    """

    def __init__(
        self,
        writer: SnapshotWriter,
        tasks: Iterable[Task] = (),
        *,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = new_task_id,
    ) -> None:
        self._writer = writer
        self._tasks: TaskList = tuple(tasks)
        self._clock = clock
        self._id_factory = id_factory
        self._last_save: Future[None] | None = None

    @classmethod
    def open(cls, loader: TaskLoader, writer: SnapshotWriter, **kwargs) -> TaskStore:
        tasks = loader.load()
        logger.info("TaskStore ready total=%s", len(tasks))
        return cls(writer, tasks, **kwargs)

    # ---- read API ----

    @property
    def tasks(self) -> TaskList:
        return self._tasks

    @property
    def last_save(self) -> Future[None] | None:
        """Completion handle of the most recently scheduled save (None before any mutation)."""
        return self._last_save

    def get(self, task_id: str) -> Task:
        return self._tasks[self._index_of(task_id)]

    def __len__(self) -> int:
        return len(self._tasks)

    # ---- low-level helpers ----

    def _index_of(self, task_id: str) -> int:
        for i, t in enumerate(self._tasks):
            if t.id == task_id:
                return i
        raise NotFoundError(task_id)

    def _now(self) -> datetime:
        return to_millis(self._clock())

    def _commit(self, tasks: TaskList) -> TaskList:
        self._tasks = tasks
        self._last_save = self._writer.submit(tasks)
        return tasks

    def _replace_at(self, index: int, task: Task) -> TaskList:
        return self._tasks[:index] + (task,) + self._tasks[index + 1 :]

    # ---- mutations ----

    def add(self, text: str, priority: Priority = Priority.MEDIUM) -> TaskList:
        task = Task(
            id=self._id_factory(),
            text=clean_text(text),
            completed=False,
            priority=Priority(priority),
            created_at=self._now(),
            completed_at=None,
        )
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.value)
        return self._commit(self._tasks + (task,))

    def update(self, task_id: str, text: str, priority: Priority) -> TaskList:
        index = self._index_of(task_id)
        new_text = clean_text(text)
        task = replace(self._tasks[index], text=new_text, priority=Priority(priority))
        logger.debug("Task updated id=%s priority=%s", task_id, task.priority.value)
        return self._commit(self._replace_at(index, task))

    def remove(self, task_id: str) -> TaskList:
        index = self._index_of(task_id)
        logger.debug("Task removed id=%s", task_id)
        return self._commit(self._tasks[:index] + self._tasks[index + 1 :])

    def toggle_complete(self, task_id: str) -> TaskList:
        index = self._index_of(task_id)
        old = self._tasks[index]
        if old.completed:
            task = replace(old, completed=False, completed_at=None)
        else:
            task = replace(old, completed=True, completed_at=self._now())
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        return self._commit(self._replace_at(index, task))

# src/todo_list/storage/writer.py

from __future__ import annotations

import logging
import queue
import threading
from concurrent.futures import Future
from dataclasses import dataclass

from ..tasks.task_models import TaskList
from .persistence import PersistenceAdapter

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class _SaveJob:
    seq: int
    tasks: TaskList
    future: Future[None]


class PersistenceWriter:
    """
    Single-writer save queue.

    Design goals:
    - Does not block the caller: snapshots are written by one worker thread.
    - Saves are applied strictly in the order they were submitted (FIFO, one worker),
      so the last submitted snapshot is the durable one.
    - Failures are logged and recorded on the returned future and on `last_error`;
      they never propagate into TaskStore.

    After `close()`, `submit` saves synchronously in the calling thread.
    """

    def __init__(self, persistence: PersistenceAdapter, *, name: str = "todo-writer") -> None:
        self._persistence = persistence
        self._queue: queue.Queue[_SaveJob | None] = queue.Queue()
        self._lock = threading.Lock()
        self._seq = 0
        self._closed = False

        self.saved_count = 0
        self.failed_count = 0
        self.last_error: Exception | None = None

        self._worker = threading.Thread(target=self._run, name=name, daemon=True)
        self._worker.start()
        logger.debug("Persistence writer started (%s).", persistence.describe())

    def _apply(self, job: _SaveJob) -> None:
        try:
            self._persistence.try_save(job.tasks)
        except Exception as e:  # worker must survive any single failed save
            logger.exception("Error saving tasks (save #%d)", job.seq)
            self.failed_count += 1
            self.last_error = e
            job.future.set_exception(e)
        else:
            self.saved_count += 1
            self.last_error = None
            job.future.set_result(None)

    def _run(self) -> None:
        while True:
            job = self._queue.get()
            try:
                if job is None:
                    logger.debug("Persistence writer received stop signal.")
                    return
                if job.future.set_running_or_notify_cancel():
                    self._apply(job)
            finally:
                self._queue.task_done()

    def submit(self, tasks: TaskList) -> Future[None]:
        """Queue a snapshot for saving and return its completion handle."""
        future: Future[None] = Future()
        with self._lock:
            self._seq += 1
            job = _SaveJob(seq=self._seq, tasks=tasks, future=future)
            closed = self._closed
            if not closed:
                self._queue.put(job)
        if closed:
            logger.debug("Persistence writer closed; saving #%d inline.", job.seq)
            future.set_running_or_notify_cancel()
            self._apply(job)
        return future

    def flush(self) -> None:
        """Block until every queued save has been applied."""
        self._queue.join()

    def close(self, timeout: float = 5.0) -> None:
        """Drain pending saves and stop the worker (idempotent)."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(None)

        logger.debug("Stopping persistence writer...")
        self._queue.join()
        self._worker.join(timeout=timeout)
        logger.debug(
            "Persistence writer stopped (saved=%d failed=%d).", self.saved_count, self.failed_count
        )

    def __enter__(self) -> PersistenceWriter:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()


class InlineWriter:
    """Saves in the calling thread (TODO_ASYNC_SAVES=false)."""

    def __init__(self, persistence: PersistenceAdapter) -> None:
        self._persistence = persistence
        self.last_error: Exception | None = None

    def submit(self, tasks: TaskList) -> Future[None]:
        future: Future[None] = Future()
        future.set_running_or_notify_cancel()
        try:
            self._persistence.try_save(tasks)
        except Exception as e:  # a failed save must not reach TaskStore
            logger.exception("Error saving tasks")
            self.last_error = e
            future.set_exception(e)
        else:
            self.last_error = None
            future.set_result(None)
        return future

    def flush(self) -> None:
        return

    def close(self, timeout: float = 5.0) -> None:
        return

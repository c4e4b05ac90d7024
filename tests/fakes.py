# tests/fakes.py

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from todo_list.tasks.errors import StorageError
from todo_list.tasks.task_models import TaskList


class FakeClock:
    """Deterministic clock: every call returns the current value, `advance` moves it."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 9, 30, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> datetime:
        self.now = self.now + timedelta(**kwargs)
        return self.now


class SeqIds:
    def __init__(self, prefix: str = "t") -> None:
        self.prefix = prefix
        self.n = 0

    def __call__(self) -> str:
        self.n += 1
        return f"{self.prefix}{self.n}"


@dataclass(slots=True)
class RecordingWriter:
    """SnapshotWriter that keeps every submitted snapshot and completes immediately."""

    snapshots: list[TaskList] = field(default_factory=list)

    def submit(self, tasks: TaskList) -> Future[None]:
        self.snapshots.append(tasks)
        fut: Future[None] = Future()
        fut.set_result(None)
        return fut


class MemoryKeyValueStore:
    """
    In-memory KeyValueStorage with failure switches.

    `writes` keeps every value written, in order, for ordering assertions.
    """

    def __init__(self, data: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(data or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_reads = False
        self.fail_writes = False

    def describe(self) -> str:
        return "memory"

    def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise StorageError("read failed (fake)")
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageError("write failed (fake)")
        self.data[key] = value
        self.writes.append((key, value))

    def delete(self, key: str) -> None:
        self.data.pop(key, None)

# src/todo_list/tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import StrEnum


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str | None, default: Priority | None = None) -> Priority:
        """
        Case-insensitive lookup ("high", "HIGH", "High", "h").

        Falls back to `default` when given, otherwise raises ValueError.
        """
        s = raw.strip().lower() if isinstance(raw, str) else ""
        for p in cls:
            if s and (s == p.value.lower() or s == p.value[0].lower()):
                return p
        if default is not None:
            return default
        raise ValueError(f"unknown priority: {raw!r}")

    @classmethod
    def from_db(cls, raw: str | None) -> Priority:
        return cls.parse(raw, default=cls.MEDIUM)


class FilterMode(StrEnum):
    ALL = "All"
    ONGOING = "Ongoing"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | None) -> FilterMode:
        s = raw.strip().lower() if isinstance(raw, str) else ""
        aliases = {
            "all": cls.ALL,
            "a": cls.ALL,
            "ongoing": cls.ONGOING,
            "open": cls.ONGOING,
            "todo": cls.ONGOING,
            "o": cls.ONGOING,
            "completed": cls.COMPLETED,
            "done": cls.COMPLETED,
            "c": cls.COMPLETED,
        }
        try:
            return aliases[s]
        except KeyError:
            raise ValueError(f"unknown filter: {raw!r}") from None


def to_millis(dt: datetime) -> datetime:
    """Drop sub-millisecond precision; stored timestamps carry milliseconds."""
    return dt.replace(microsecond=dt.microsecond // 1000 * 1000)


def utc_now() -> datetime:
    return to_millis(datetime.now(UTC))


def new_task_id() -> str:
    return uuid.uuid4().hex


@dataclass(frozen=True, slots=True)
class Task:
    """
    One to-do item.

    Notes:
    - `id` is generated once and never reused; every store operation addresses tasks by it.
    - `created_at` may be None only for records migrated from the legacy format.
    - Tasks created or toggled by TaskStore keep `completed_at is not None == completed`.
    """

    id: str
    text: str
    completed: bool
    priority: Priority
    created_at: datetime | None
    completed_at: datetime | None = None

    @property
    def is_ongoing(self) -> bool:
        return not self.completed


TaskList = tuple[Task, ...]

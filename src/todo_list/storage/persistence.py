# src/todo_list/storage/persistence.py

"""
Task list persistence.

One storage key holds the whole list as JSON. Current format (version 2):

    {"version": 2, "tasks": [{"id", "text", "completed", "priority",
                              "createdAt", "completedAt"}, ...]}

Older saves are a bare JSON array of records without ids (timestamps optional); they are
read as version 1 and migrated forward on load.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from typing import Any

from ..core.ports import KeyValueStorage
from ..tasks.errors import StorageError
from ..tasks.task_models import Priority, Task, TaskList, new_task_id

logger = logging.getLogger(__name__)

SCHEMA_VERSION = 2
LEGACY_VERSION = 1
DEFAULT_KEY = "tasks"

Record = dict[str, Any]


class UnsupportedFormat(ValueError):
    pass


# ---- timestamps ----


def format_timestamp(dt: datetime | None) -> str | None:
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: Any) -> datetime | None:
    """ISO-8601 -> aware UTC datetime. Missing or unparsable values are treated as absent."""
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        dt = datetime.fromisoformat(raw.strip())
    except ValueError:
        logger.warning("Ignoring unparsable timestamp %r", raw)
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    try:
        return dt.astimezone(UTC)
    except OverflowError:
        logger.warning("Ignoring out-of-range timestamp %r", raw)
        return None


# ---- records ----


def task_to_record(task: Task) -> Record:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "priority": task.priority.value,
        "createdAt": format_timestamp(task.created_at),
        "completedAt": format_timestamp(task.completed_at),
    }


def record_to_task(rec: Any) -> Task | None:
    """Build a Task from a v2 record; returns None (and logs) for records that cannot be used."""
    if not isinstance(rec, dict):
        logger.warning("Skipping non-object task record: %r", rec)
        return None

    text = rec.get("text")
    text = text.strip() if isinstance(text, str) else ""
    if not text:
        logger.warning("Skipping task record with empty text id=%s", rec.get("id"))
        return None

    task_id = rec.get("id")
    if not isinstance(task_id, str) or not task_id:
        task_id = new_task_id()

    completed = rec.get("completed") is True
    # A stale completedAt on an ongoing task is dropped.
    completed_at = parse_timestamp(rec.get("completedAt")) if completed else None

    return Task(
        id=task_id,
        text=text,
        completed=completed,
        priority=Priority.from_db(rec.get("priority")),
        created_at=parse_timestamp(rec.get("createdAt")),
        completed_at=completed_at,
    )


# ---- schema versions ----


def _migrate_v1_to_v2(records: list[Any]) -> list[Any]:
    out: list[Any] = []
    for rec in records:
        if isinstance(rec, dict):
            rec = {**rec, "id": new_task_id()}
        out.append(rec)
    return out


_MIGRATIONS: dict[int, Callable[[list[Any]], list[Any]]] = {
    LEGACY_VERSION: _migrate_v1_to_v2,
}


def decode_payload(raw: str) -> TaskList:
    """
    Parse a stored payload into tasks.

    Raises ValueError (incl. json.JSONDecodeError / UnsupportedFormat) when the payload as
    a whole is unusable; bad individual records are skipped.
    """
    data = json.loads(raw)

    if isinstance(data, list):
        version, records = LEGACY_VERSION, data
    elif isinstance(data, dict) and isinstance(data.get("tasks"), list):
        version = data.get("version", LEGACY_VERSION)
        records = data["tasks"]
        if not isinstance(version, int) or isinstance(version, bool):
            raise UnsupportedFormat(f"bad schema version: {version!r}")
    else:
        raise UnsupportedFormat("expected a task array or a versioned envelope")

    if version > SCHEMA_VERSION:
        raise UnsupportedFormat(f"schema version {version} is newer than {SCHEMA_VERSION}")

    while version < SCHEMA_VERSION:
        migrate = _MIGRATIONS.get(version)
        if migrate is None:
            raise UnsupportedFormat(f"no migration from schema version {version}")
        records = migrate(records)
        logger.info("Migrated %d task records v%d -> v%d", len(records), version, version + 1)
        version += 1

    tasks: list[Task] = []
    seen: set[str] = set()
    for rec in records:
        task = record_to_task(rec)
        if task is None:
            continue
        if task.id in seen:
            logger.warning("Duplicate task id=%s; assigning a new one", task.id)
            task = replace(task, id=new_task_id())
        seen.add(task.id)
        tasks.append(task)
    return tuple(tasks)


def encode_payload(tasks: TaskList) -> str:
    return json.dumps(
        {"version": SCHEMA_VERSION, "tasks": [task_to_record(t) for t in tasks]},
        ensure_ascii=False,
    )


class PersistenceAdapter:
    """
    Load/save the task list under a single storage key.

    Neither `load` nor `save` raises: storage and parse failures are logged and treated
    as "no data" / "not saved". `try_save` reports the failure to callers that want it
    (the background writer).
    """

    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_KEY) -> None:
        self._storage = storage
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def describe(self) -> str:
        return f"{self._storage.describe()}#{self._key}"

    def load(self) -> TaskList:
        try:
            raw = self._storage.get(self._key)
        except StorageError:
            logger.exception("Error loading tasks from %s", self.describe())
            return ()

        if raw is None:
            logger.info("No saved tasks in %s", self.describe())
            return ()

        try:
            tasks = decode_payload(raw)
        except (ValueError, RecursionError):
            logger.exception("Saved tasks in %s could not be parsed; starting empty", self.describe())
            return ()

        logger.info("Loaded %d tasks from %s", len(tasks), self.describe())
        return tasks

    def try_save(self, tasks: TaskList) -> None:
        """Write the full list. Raises StorageError on failure."""
        self._storage.set(self._key, encode_payload(tasks))
        logger.debug("Saved %d tasks to %s", len(tasks), self.describe())

    def save(self, tasks: TaskList) -> bool:
        try:
            self.try_save(tasks)
        except StorageError:
            logger.exception("Error saving tasks to %s", self.describe())
            return False
        return True

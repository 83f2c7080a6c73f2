"""In-memory task repository.

Tasks only live as long as the process. Every public method takes the
repository lock, so each call is observed as a single step even when
handlers run on worker threads.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, Generic, TypeVar

from pydantic import ValidationError

from hypertask.models import Priority, Task, TaskCreate, TaskUpdate

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """The operation succeeded and produced ``value``."""

    value: T


@dataclass(frozen=True)
class Invalid:
    """Submitted data broke a field rule."""

    message: str
    field: str | None = None


@dataclass(frozen=True)
class NotFound:
    """No task is stored under ``task_id``."""

    task_id: str


Outcome = Ok[Task] | Invalid | NotFound

SEED_TASKS: tuple[dict[str, Any], ...] = (
    {
        "title": "Complete the project setup",
        "description": "Initial setup for the Shoelace and HTMX demo",
        "priority": Priority.MEDIUM,
        "completed": False,
        "age": timedelta(0),
    },
    {
        "title": "Research Web Components",
        "description": "Look into Shoelace and other component libraries",
        "priority": Priority.LOW,
        "completed": True,
        "age": timedelta(days=1),
    },
    {
        "title": "Implement server endpoints",
        "description": "Create the API for task management",
        "priority": Priority.HIGH,
        "completed": False,
        "age": timedelta(0),
    },
)


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _invalid_from(exc: ValidationError) -> Invalid:
    """Reduce a pydantic error to the first broken field rule."""
    error = exc.errors()[0]
    loc = error.get("loc") or (None,)
    cause = error.get("ctx", {}).get("error")
    message = str(cause) if cause is not None else error["msg"]
    return Invalid(message=message, field=str(loc[0]) if loc[0] is not None else None)


class TaskRepository:
    """Validated in-memory task storage."""

    def __init__(self, clock: Callable[[], datetime] | None = None) -> None:
        """Initialize an empty repository.

        Args:
            clock: Returns the current time for ``created_at``. Defaults to
                ``datetime.now(UTC)``.
        """
        self._tasks: dict[str, Task] = {}
        self._ids = itertools.count(1)
        self._clock = clock or _utc_now
        self._lock = threading.RLock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        with self._lock:
            return task_id in self._tasks

    def _allocate_id(self) -> str:
        return str(next(self._ids))

    def seed(self) -> list[Task]:
        """Insert the example tasks. They take the first ids ("1", "2", "3")."""
        now = self._clock()
        seeded = []
        with self._lock:
            for data in SEED_TASKS:
                task = Task(
                    id=self._allocate_id(),
                    title=data["title"],
                    description=data["description"],
                    priority=data["priority"],
                    completed=data["completed"],
                    created_at=now - data["age"],
                )
                self._tasks[task.id] = task
                seeded.append(task)
        logger.debug("Seeded %d tasks", len(seeded))
        return seeded

    def list(self, completed: bool | None = None) -> list[Task]:
        """Return tasks matching ``completed`` (all when None), newest first."""
        with self._lock:
            tasks = [
                task
                for task in self._tasks.values()
                if completed is None or task.completed is completed
            ]
        # sorted() is stable, so equal timestamps keep insertion order.
        return sorted(tasks, key=lambda t: t.created_at, reverse=True)

    def get(self, task_id: str) -> Ok[Task] | NotFound:
        """Look a task up by id."""
        with self._lock:
            task = self._tasks.get(task_id)
        if task is None:
            return NotFound(task_id)
        return Ok(task)

    def create(self, fields: Mapping[str, Any]) -> Ok[Task] | Invalid:
        """Validate ``fields`` and store a new, incomplete task."""
        try:
            data = TaskCreate.model_validate(dict(fields))
        except ValidationError as exc:
            return _invalid_from(exc)

        with self._lock:
            task = Task(
                id=self._allocate_id(),
                title=data.title,
                description=data.description,
                priority=data.priority,
                completed=False,
                created_at=self._clock(),
            )
            self._tasks[task.id] = task
        logger.info("Created task %s", task.id)
        return Ok(task)

    def update(self, task_id: str, fields: Mapping[str, Any]) -> Outcome:
        """Merge the supplied ``fields`` over an existing task.

        Fields that are not supplied keep their current value, so an empty
        mapping returns the task unchanged.
        """
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return NotFound(task_id)

            try:
                data = TaskUpdate.model_validate(dict(fields))
            except ValidationError as exc:
                return _invalid_from(exc)

            changes = data.model_dump(exclude_unset=True)
            if not changes:
                return Ok(task)

            updated = task.model_copy(update=changes)
            self._tasks[task_id] = updated
        logger.info("Updated task %s (%s)", task_id, ", ".join(sorted(changes)))
        return Ok(updated)

    def toggle_completion(self, task_id: str) -> Ok[Task] | NotFound:
        """Flip ``completed`` on an existing task."""
        with self._lock:
            task = self._tasks.get(task_id)
            if task is None:
                return NotFound(task_id)
            updated = task.model_copy(update={"completed": not task.completed})
            self._tasks[task_id] = updated
        logger.info("Task %s completed=%s", task_id, updated.completed)
        return Ok(updated)

    def delete(self, task_id: str) -> bool:
        """Delete a task. Returns True if deleted, False if not found."""
        with self._lock:
            if task_id not in self._tasks:
                return False
            del self._tasks[task_id]
        logger.info("Deleted task %s", task_id)
        return True

    def clear(self) -> None:
        """Remove every task. Ids handed out so far are never reused."""
        with self._lock:
            self._tasks.clear()

"""
Storage contract for the Todo service.

Every backend implements :class:`TaskStore`.  Route handlers only ever talk
to this interface, so the in-memory and SQLite backends are interchangeable
and the choice is made once, at application start-up.

Error taxonomy:
    - :class:`TaskNotFoundError` -- no live task carries the requested id.
    - :class:`StorageError` -- the backend itself failed (open, write,
      connectivity).  Backend exceptions are chained as ``__cause__``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from typing import Any


class TaskStoreError(Exception):
    """Base class for errors raised by a task store."""


class TaskNotFoundError(TaskStoreError):
    """Raised when no live task has the requested id."""

    def __init__(self, task_id: int) -> None:
        super().__init__(f"task with id={task_id} not found")
        self.task_id = task_id


class StorageError(TaskStoreError):
    """Raised when the storage backend fails to execute an operation."""


@dataclass(frozen=True)
class Task:
    """
    A stored task.

    Attributes:
        id: Identifier assigned by the store at creation time.
        text: Free-form task text (may be empty).
    """

    id: int
    text: str

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON-ready representation of the task."""
        return asdict(self)


class TaskStore(ABC):
    """
    Contract shared by all task storage backends.

    Implementations must never reuse an id, and ``get_tasks`` must return
    exactly the tasks for which ``get_task`` succeeds.
    """

    #: Short backend name reported by the health endpoint.
    backend_name: str = "abstract"

    @abstractmethod
    def create_task(self, text: str) -> int:
        """
        Store a new task and return its freshly assigned id.

        Raises:
            StorageError: If the backend fails to persist the task.
        """

    @abstractmethod
    def get_tasks(self) -> list[Task]:
        """
        Return a snapshot of all live tasks.

        Callers must not rely on ordering.  This never raises; a backend
        fault yields an empty list.
        """

    @abstractmethod
    def get_task(self, task_id: int) -> Task:
        """
        Return the task with the given id.

        Raises:
            TaskNotFoundError: If no live task has this id.
            StorageError: If the backend fails to look the task up.
        """

    @abstractmethod
    def delete_task(self, task_id: int) -> None:
        """
        Delete the task with the given id.

        Raises:
            TaskNotFoundError: If no live task has this id.
            StorageError: If the backend fails to delete the task.
        """

    def close(self) -> None:
        """Release backend resources.  The default does nothing."""

    def __enter__(self) -> TaskStore:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

"""
In-memory task store.

Tasks live in a plain dict for the lifetime of the process.  A single lock
guards the dict and the id counter, so every operation on one store
instance is serialised: concurrent creates get distinct ids and a get
racing a delete sees the task either fully present or fully gone.
"""

from __future__ import annotations

import logging
import threading

from todo_app.store import Task, TaskNotFoundError, TaskStore

logger = logging.getLogger(__name__)


class InMemoryTaskStore(TaskStore):
    """Volatile, dict-backed :class:`TaskStore`.  Ids start at 0."""

    backend_name = "memory"

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tasks: dict[int, Task] = {}
        self._next_id = 0

    def create_task(self, text: str) -> int:
        with self._lock:
            task = Task(id=self._next_id, text=text)
            self._tasks[task.id] = task
            self._next_id += 1

        logger.debug("Stored task %d in memory", task.id)
        return task.id

    def get_tasks(self) -> list[Task]:
        with self._lock:
            return list(self._tasks.values())

    def get_task(self, task_id: int) -> Task:
        with self._lock:
            try:
                return self._tasks[task_id]
            except KeyError:
                raise TaskNotFoundError(task_id) from None

    def delete_task(self, task_id: int) -> None:
        with self._lock:
            if task_id not in self._tasks:
                raise TaskNotFoundError(task_id)
            del self._tasks[task_id]

        logger.debug("Deleted task %d from memory", task_id)

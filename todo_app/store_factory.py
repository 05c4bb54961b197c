"""Backend selection for the task store."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from todo_app.memory_store import InMemoryTaskStore
from todo_app.sqlite_store import SqliteTaskStore
from todo_app.store import TaskStore

logger = logging.getLogger(__name__)


def build_store(settings: Mapping[str, Any]) -> TaskStore:
    """
    Construct the task store selected by configuration.

    Args:
        settings: Mapping with ``TASKS_PERSIST`` (bool) and, when
            persisting, ``TASKS_DB_PATH`` (path of the SQLite file).
            A Flask ``app.config`` works as-is.

    Returns:
        A SQLite-backed store when ``TASKS_PERSIST`` is true, otherwise an
        in-memory store.

    Raises:
        StorageError: If the SQLite store cannot be opened.
    """
    if settings.get("TASKS_PERSIST", False):
        db_path = settings.get("TASKS_DB_PATH") or "tasks.db"
        logger.info("Using SQLite task store at %s", db_path)
        return SqliteTaskStore(db_path)

    logger.info("Using in-memory task store")
    return InMemoryTaskStore()

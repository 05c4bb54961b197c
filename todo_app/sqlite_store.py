"""
SQLite file-backed task store.

Tasks are persisted to a single ``tasks`` table inside one SQLite file
through a SQLAlchemy engine.  The table is created on construction if it
does not exist yet, so reopening the same file keeps earlier tasks.

The store holds no lock of its own: concurrent access is only as safe as
SQLite's own file locking and transaction isolation make it.
"""

from __future__ import annotations

import logging
import os
from typing import Any

from sqlalchemy import Engine, LargeBinary, cast, create_engine, delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from todo_app.models import Base, TaskRecord
from todo_app.store import StorageError, Task, TaskNotFoundError, TaskStore

logger = logging.getLogger(__name__)


# Text is fetched as raw bytes so one row that is not valid UTF-8 cannot fail
# the whole fetch inside the driver; it is decoded per row instead.
_RAW_TEXT = cast(TaskRecord.text, LargeBinary)


def _decode_row(row: Any) -> Task | None:
    """Build a Task from an ``(id, raw_text)`` row, or None if it does not decode."""
    task_id, raw_text = row
    if not isinstance(task_id, int) or not isinstance(raw_text, bytes):
        return None
    try:
        text = raw_text.decode("utf-8")
    except UnicodeDecodeError:
        return None
    return Task(id=task_id, text=text)


class SqliteTaskStore(TaskStore):
    """
    Durable :class:`TaskStore` backed by a SQLite file.

    Args:
        db_path: Path of the SQLite database file.  The parent directory
            must already exist.

    Raises:
        StorageError: If the file cannot be opened or the table cannot be
            created.  A store that fails here must not be used.
    """

    backend_name = "sqlite"

    def __init__(self, db_path: str | os.PathLike[str]) -> None:
        self.db_path = os.fspath(db_path)
        try:
            self._engine: Engine = create_engine(
                f"sqlite:///{self.db_path}",
                # Request threads share the engine's pooled connections
                connect_args={"check_same_thread": False},
            )
            Base.metadata.create_all(self._engine)
        except SQLAlchemyError as exc:
            raise StorageError(
                f"cannot open task database at '{self.db_path}': {exc}"
            ) from exc

        self._session_factory = sessionmaker(self._engine, expire_on_commit=False)
        logger.info("SQLite task store ready at %s", self.db_path)

    def _session(self) -> Session:
        return self._session_factory()

    def create_task(self, text: str) -> int:
        # Lone surrogates in the text cannot be encoded by the driver
        try:
            with self._session() as session:
                record = TaskRecord(text=text)
                session.add(record)
                session.flush()
                task_id = record.id
                session.commit()
        except (SQLAlchemyError, UnicodeError) as exc:
            raise StorageError(f"failed to insert task: {exc}") from exc

        if task_id is None:
            raise StorageError("database did not return an id for the new task")

        logger.debug("Inserted task %d", task_id)
        return task_id

    def get_tasks(self) -> list[Task]:
        try:
            with self._session() as session:
                rows = session.execute(
                    select(TaskRecord.id, _RAW_TEXT).order_by(TaskRecord.id)
                ).all()
        except SQLAlchemyError:
            # Listing never fails for callers; the fault only reaches the log
            logger.exception("Failed to list tasks from %s", self.db_path)
            return []

        tasks = []
        for row in rows:
            task = _decode_row(row)
            if task is None:
                logger.warning("Skipping undecodable task row: %r", tuple(row))
                continue
            tasks.append(task)
        return tasks

    def get_task(self, task_id: int) -> Task:
        try:
            with self._session() as session:
                row = session.execute(
                    select(TaskRecord.id, _RAW_TEXT).where(TaskRecord.id == task_id)
                ).first()
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(f"failed to fetch task {task_id}: {exc}") from exc

        if row is None:
            raise TaskNotFoundError(task_id)

        task = _decode_row(row)
        if task is None:
            raise StorageError(f"task {task_id} could not be decoded")
        return task

    def delete_task(self, task_id: int) -> None:
        try:
            with self._session() as session:
                result = session.execute(
                    delete(TaskRecord).where(TaskRecord.id == task_id),
                    execution_options={"synchronize_session": False},
                )
                affected = result.rowcount
                session.commit()
        except (SQLAlchemyError, OverflowError) as exc:
            raise StorageError(f"failed to delete task {task_id}: {exc}") from exc

        if affected == 0:
            raise TaskNotFoundError(task_id)

        logger.debug("Deleted task %d", task_id)

    def close(self) -> None:
        self._engine.dispose()

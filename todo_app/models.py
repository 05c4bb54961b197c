"""
Database models for the Todo service.

This module defines the SQLAlchemy model backing the SQLite task store.
There is exactly one table; no migrations or schema versioning exist.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from todo_app.store import Task


class Base(DeclarativeBase):
    """Declarative base holding the store's table metadata."""


class TaskRecord(Base):
    """
    Row representation of a task.

    Attributes:
        id: Auto-assigned primary key.  AUTOINCREMENT keeps SQLite from
            handing out the id of a deleted row again.
        text: Task text, never NULL.
    """

    __tablename__ = "tasks"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    text: Mapped[str] = mapped_column(Text, nullable=False)

    def to_task(self) -> Task:
        """Convert the row to a detached :class:`Task` value."""
        return Task(id=self.id, text=self.text)

    def __repr__(self) -> str:
        """Return string representation of the record."""
        return f"<TaskRecord {self.id}: {self.text!r}>"

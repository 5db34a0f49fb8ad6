import uuid
from datetime import datetime as dt, timezone
from enum import Enum
from typing import Optional

from sqlmodel import Field, SQLModel


class TaskStatus(str, Enum):
    """Status values for :class:`Task`."""

    TODO = "todo"
    IN_PROGRESS = "in_progress"
    DONE = "done"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


class TaskPriority(str, Enum):
    """Priority levels for tasks."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(SQLModel, table=True):
    """Notebook task. Created and edited by the task CRUD layer, read-only here."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    title: str = Field(nullable=False, min_length=1, max_length=200)
    description: Optional[str] = Field(default=None, max_length=5000)

    status: TaskStatus = Field(default=TaskStatus.TODO)
    priority: TaskPriority = Field(default=TaskPriority.MEDIUM)
    deadline: Optional[dt] = Field(default=None)

    # Timestamps
    created_at: dt = Field(default_factory=lambda: dt.now(timezone.utc), nullable=False)
    updated_at: Optional[dt] = Field(default=None)

    def __str__(self) -> str:
        return f"Task({self.id}: {self.title})"

    def summary(self, *, with_priority: bool = True) -> dict:
        """Compact view embedded in dependency and critical-path payloads."""
        data = {"id": self.id, "title": self.title, "status": TaskStatus(self.status).value}
        if with_priority:
            data["priority"] = TaskPriority(self.priority).value
        return data

import uuid
from datetime import datetime as dt, timezone
from enum import Enum

from sqlalchemy import UniqueConstraint
from sqlmodel import Field, SQLModel


class DependencyType(str, Enum):
    """Kinds of dependency edges. Stored as metadata only, never traversed differently."""

    BLOCKS = "blocks"
    REQUIRES = "requires"
    SUGGESTS = "suggests"
    RELATES = "relates"


class TaskDependency(SQLModel, table=True):
    """Directed edge: ``from_task`` depends on ``to_task``."""

    __table_args__ = (
        UniqueConstraint("from_task_id", "to_task_id", name="uq_taskdependency_edge"),
    )

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    from_task_id: str = Field(foreign_key="task.id", nullable=False, index=True)
    to_task_id: str = Field(foreign_key="task.id", nullable=False, index=True)

    dependency_type: DependencyType = Field(default=DependencyType.BLOCKS)

    created_at: dt = Field(default_factory=lambda: dt.now(timezone.utc), nullable=False)

    def __str__(self) -> str:
        return f"TaskDependency({self.from_task_id} -> {self.to_task_id})"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "from_task_id": self.from_task_id,
            "to_task_id": self.to_task_id,
            "dependency_type": DependencyType(self.dependency_type).value,
            "created_at": self.created_at.isoformat(),
        }

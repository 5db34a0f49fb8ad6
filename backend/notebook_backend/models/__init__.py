# Task must be imported before TaskDependency so the foreign key target exists
from .task import Task, TaskPriority, TaskStatus
from .task_dependency import DependencyType, TaskDependency

# Define __all__ to control exports
__all__ = [
    "Task",
    "TaskStatus",
    "TaskPriority",
    "TaskDependency",
    "DependencyType",
]

"""Typed failures raised by the dependency core and its store.

Each class maps to one HTTP status in :mod:`notebook_backend.api.task_dependencies`.
"""


class DependencyError(Exception):
    """Base class for all dependency-core failures."""


class CircularDependencyError(DependencyError):
    """The proposed edge would close a cycle in the dependency graph."""

    def __init__(self, from_task_id: str, to_task_id: str):
        super().__init__(
            f"Dependency {from_task_id} -> {to_task_id} would create a circular dependency"
        )
        self.from_task_id = from_task_id
        self.to_task_id = to_task_id


class NotFoundError(DependencyError):
    """A dependency or task id does not exist."""


class InvalidScopeError(DependencyError, ValueError):
    """The critical-path scope is empty or not a collection of ids."""


class InvalidDependencyError(DependencyError, ValueError):
    """A dependency request carries an empty id or an unknown type."""


class DuplicateError(DependencyError):
    """An identical edge is already stored."""


class StoreUnavailable(DependencyError):
    """The storage layer failed; the SQLAlchemy error is chained as __cause__."""

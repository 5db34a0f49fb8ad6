"""
Dependency service: the caller-facing surface of the task dependency core.

Loads a snapshot of edges from the TaskGraphStore, runs the graph algorithms
in memory and only then writes. Nothing is cached between calls and nothing
here logs; callers decide what to report.
"""
from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Optional

from notebook_backend.errors import (
    CircularDependencyError,
    InvalidDependencyError,
    InvalidScopeError,
    NotFoundError,
)
from notebook_backend.graph import build_graph, critical_path, would_create_cycle
from notebook_backend.models import DependencyType, Task, TaskDependency
from notebook_backend.repo import TaskGraphStore


def _check_id(value: Any, name: str) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidDependencyError(f"{name} must be a non-empty string")
    return value


def _coerce_type(kind: Any) -> DependencyType:
    if kind is None:
        return DependencyType.BLOCKS
    try:
        return DependencyType(kind)
    except ValueError:
        allowed = ", ".join(t.value for t in DependencyType)
        raise InvalidDependencyError(
            f"dependency_type must be one of: {allowed} (got {kind!r})"
        ) from None


def _normalize_scope(task_ids: Any) -> list[str]:
    """Return the scope in caller order without duplicates."""
    if isinstance(task_ids, (str, bytes)) or not isinstance(task_ids, Iterable):
        raise InvalidScopeError("task_ids must be a collection of task ids")
    scope = list(task_ids)
    if not scope:
        raise InvalidScopeError("task_ids must not be empty")
    for tid in scope:
        if not isinstance(tid, str) or not tid.strip():
            raise InvalidScopeError(f"invalid task id in scope: {tid!r}")
    return list(dict.fromkeys(scope))


def _edge_payload(dep: TaskDependency, tasks: dict[str, Task]) -> dict:
    data = dep.to_dict()
    for key, tid in (("from_task", dep.from_task_id), ("to_task", dep.to_task_id)):
        task = tasks.get(tid)
        data[key] = task.summary() if task else None
    return data


class DependencyService:
    """Add, remove and analyse task dependencies while keeping the graph acyclic."""

    def __init__(self, store: Optional[TaskGraphStore] = None):
        self.store = store if store is not None else TaskGraphStore()

    def add_dependency(
        self,
        from_task_id: str,
        to_task_id: str,
        dependency_type: Any = DependencyType.BLOCKS,
    ) -> dict:
        """
        Persist ``from_task_id -> to_task_id`` unless it would close a cycle.

        The cycle check runs before anything else touches the tasks, so a
        self-loop is reported as CircularDependencyError even for unknown ids.
        Concurrent writers can still race between the check and the insert;
        the store's unique constraint only guards against duplicate edges.
        """
        _check_id(from_task_id, "from_task_id")
        _check_id(to_task_id, "to_task_id")

        graph = build_graph(self.store.list_dependencies())
        if would_create_cycle(graph, from_task_id, to_task_id):
            raise CircularDependencyError(from_task_id, to_task_id)
        kind = _coerce_type(dependency_type)

        tasks = {t.id: t for t in self.store.get_tasks([from_task_id, to_task_id])}
        missing = [tid for tid in (from_task_id, to_task_id) if tid not in tasks]
        if missing:
            raise NotFoundError(f"Task(s) not found: {', '.join(missing)}")

        dep = self.store.insert_dependency(
            TaskDependency(
                from_task_id=from_task_id,
                to_task_id=to_task_id,
                dependency_type=kind,
            )
        )
        return _edge_payload(dep, tasks)

    def remove_dependency(self, dependency_id: str) -> None:
        """Delete one edge by id. Unknown ids raise NotFoundError."""
        self.store.delete_dependency(dependency_id)

    def dependencies_for_task(self, task_id: str) -> list[dict]:
        """Return every edge touching *task_id*, with both endpoint summaries."""
        outgoing = self.store.list_dependencies(from_task_id=task_id)
        incoming = self.store.list_dependencies(to_task_id=task_id)

        ids = {task_id}
        ids.update(d.to_task_id for d in outgoing)
        ids.update(d.from_task_id for d in incoming)
        tasks = {t.id: t for t in self.store.get_tasks(ids)}

        result = []
        for direction, deps in (("outgoing", outgoing), ("incoming", incoming)):
            for dep in deps:
                data = _edge_payload(dep, tasks)
                data["direction"] = direction
                result.append(data)
        return result

    def critical_path(self, task_ids: Iterable[str]) -> dict:
        """
        Longest dependency chain within *task_ids*.

        Unknown ids are dropped silently; a scope where nothing resolves gives
        an empty path with duration 0. Every dependency type counts the same.
        """
        scope = _normalize_scope(task_ids)

        found = {t.id: t for t in self.store.get_tasks(scope)}
        resolved = [tid for tid in scope if tid in found]
        deps = self.store.list_dependencies(from_task_ids=resolved)

        graph = build_graph(deps, nodes=resolved)
        result = critical_path(graph, resolved)

        outgoing: dict[str, list[str]] = {tid: [] for tid in resolved}
        for dep in deps:
            outgoing[dep.from_task_id].append(dep.to_task_id)

        return {
            "critical_path": result.path,
            "duration": result.duration,
            "tasks": [
                {**found[tid].summary(with_priority=False), "dependencies": outgoing[tid]}
                for tid in resolved
            ],
        }

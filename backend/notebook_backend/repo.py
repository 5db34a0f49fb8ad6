"""
Task graph store.
All dependency reads and writes of the core go through here, so storage
failures surface as one typed error (StoreUnavailable) to the caller.
"""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Optional

from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, col, select

from notebook_backend import db
from notebook_backend.errors import DuplicateError, NotFoundError, StoreUnavailable
from notebook_backend.models import Task, TaskDependency

logger = logging.getLogger(__name__)


class TaskGraphStore:
    """
    Relational store for tasks and dependency edges.
    Holds no state between calls beyond the engine; every method opens its own session.
    """

    def __init__(self, engine: Optional[Engine] = None):
        self.engine = engine if engine is not None else db.engine

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        try:
            with Session(self.engine) as s:
                yield s
        except SQLAlchemyError as exc:
            logger.warning("Task graph store: %s failed: %s", operation, exc)
            raise StoreUnavailable(f"{operation} failed") from exc

    # ---------- read helpers ----------
    def list_dependencies(
        self,
        from_task_id: Optional[str] = None,
        to_task_id: Optional[str] = None,
        from_task_ids: Optional[Iterable[str]] = None,
    ) -> list[TaskDependency]:
        """
        Return dependency edges matching all given filters, oldest first.
        With no filter every stored edge is returned.
        """
        q = select(TaskDependency)
        if from_task_id is not None:
            q = q.where(TaskDependency.from_task_id == from_task_id)
        if to_task_id is not None:
            q = q.where(TaskDependency.to_task_id == to_task_id)
        if from_task_ids is not None:
            ids = list(from_task_ids)
            if not ids:
                return []
            q = q.where(col(TaskDependency.from_task_id).in_(ids))
        q = q.order_by(col(TaskDependency.created_at), col(TaskDependency.id))
        with self._session("list_dependencies") as s:
            return list(s.exec(q).all())

    def get_dependency(self, dependency_id: str) -> Optional[TaskDependency]:
        with self._session("get_dependency") as s:
            return s.get(TaskDependency, dependency_id)

    def get_tasks(self, ids: Iterable[str]) -> list[Task]:
        """Return the tasks that exist among *ids*; unknown ids are omitted."""
        wanted = list(dict.fromkeys(ids))
        if not wanted:
            return []
        with self._session("get_tasks") as s:
            return list(s.exec(select(Task).where(col(Task.id).in_(wanted))).all())

    # ---------- write helpers ----------
    def insert_dependency(self, record: TaskDependency) -> TaskDependency:
        """
        Persist a new edge and return it refreshed.
        An edge with the same (from_task_id, to_task_id) raises DuplicateError.
        """
        with self._session("insert_dependency") as s:
            existing = s.exec(
                select(TaskDependency).where(
                    TaskDependency.from_task_id == record.from_task_id,
                    TaskDependency.to_task_id == record.to_task_id,
                )
            ).first()
            if existing:
                raise DuplicateError(f"{existing} already exists")
            s.add(record)
            try:
                s.commit()
            except IntegrityError as exc:
                # a concurrent writer inserted the same edge after our check
                s.rollback()
                raise DuplicateError(f"{record} already exists") from exc
            s.refresh(record)
            return record

    def delete_dependency(self, dependency_id: str) -> None:
        with self._session("delete_dependency") as s:
            obj = s.get(TaskDependency, dependency_id)
            if not obj:
                raise NotFoundError(f"Dependency {dependency_id} not found")
            s.delete(obj)
            s.commit()

    def add_task(self, *, title: str, **fields: Any) -> Task:
        """
        Create a Task row. Tasks normally come from the task CRUD layer;
        this exists for seeding and tests.
        """
        with self._session("add_task") as s:
            t = Task(title=title, **fields)
            s.add(t)
            s.commit()
            s.refresh(t)
            return t
